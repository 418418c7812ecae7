"""Points Page.

Your points, the leaderboard and how to earn more.
"""

import streamlit as st

from lockerlink.config import (
    COMMENT_POINTS,
    CREATOR_COMMENT_POINTS,
    CREATOR_LIKE_POINTS,
    HIGHLIGHT_POINTS,
    LIKE_POINTS,
    MAX_DAILY_COMMENTS,
    MAX_DAILY_HIGHLIGHTS,
    MIN_COMMENT_LENGTH,
    load_config,
)
from lockerlink.feed import can_earn_points
from lockerlink.points import get_leaderboard
from lockerlink.profile_store import get_profile, is_profile_complete
from pages.components.charts import create_leaderboard_chart, leaderboard_frame

st.set_page_config(page_title="Points | LockerLink", page_icon="🏆", layout="wide")
st.title("🏆 Points System")

if 'config' not in st.session_state:
    st.session_state.config = load_config()
db_path = st.session_state.config.db_path

uid = st.session_state.get("current_uid")
user = get_profile(uid, db_path) if uid else None
entries = get_leaderboard(db_path=db_path)

if user:
    if not is_profile_complete(user):
        st.warning("⚠️ Complete your profile to start earning and tracking points.")
    elif not can_earn_points(user, db_path):
        st.error(f"🎬 {user.user_type.title()}s must upload at least one highlight video before they can start earning points.")

    rank = next((e.rank for e in entries if e.uid == user.uid), None)
    col1, col2 = st.columns(2)
    col1.metric("Your Points", f"{user.points:,}")
    col2.metric("Your Rank", f"#{rank}" if rank else "—")

st.markdown("### Leaderboard")
if not entries:
    st.info("No users with points yet. Be the first!")
else:
    st.plotly_chart(create_leaderboard_chart(entries), use_container_width=True)
    st.dataframe(leaderboard_frame(entries), hide_index=True, use_container_width=True)

st.markdown("### Ways to Earn Points")
st.markdown(f"""
- 🎬 **+{HIGHLIGHT_POINTS}** per highlight (max {MAX_DAILY_HIGHLIGHTS} per day)
- ❤️ **+{LIKE_POINTS}** per like (unlimited daily)
- 💬 **+{COMMENT_POINTS}** per comment (max {MAX_DAILY_COMMENTS} per day, minimum {MIN_COMMENT_LENGTH} characters)
- ⭐ **+{CREATOR_LIKE_POINTS}** for each like on your highlights
- ⭐ **+{CREATOR_COMMENT_POINTS}** for each comment on your highlights
""")
st.caption("Points are deducted when you delete highlights, unlike videos, or delete comments. Daily limits reset at midnight EST.")
