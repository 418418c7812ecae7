"""Streamlit frontend for LockerLink.

Main entry point for the multi-page Streamlit application.
"""

import streamlit as st

from lockerlink.config import load_config
from lockerlink.db import init_db
from lockerlink.feed import get_posts_for_user
from lockerlink.format_metrics import format_height
from lockerlink.profile_store import get_profile, is_profile_complete, list_profiles

st.set_page_config(
    page_title="LockerLink",
    page_icon="🏐",
    layout="wide",
    initial_sidebar_state="expanded"
)

# Load config and initialize DB once per session
if 'config' not in st.session_state:
    st.session_state.config = load_config()
    init_db(st.session_state.config.db_path)

if 'current_uid' not in st.session_state:
    st.session_state.current_uid = None

db_path = st.session_state.config.db_path
profiles = list_profiles(db_path=db_path)

# Sidebar: pick who is signed in
with st.sidebar:
    st.markdown("## 🏐 LockerLink")
    st.markdown("---")

    if profiles:
        options = {f"{p.name} ({p.uid})": p.uid for p in profiles}
        uids = list(options.values())
        current = st.session_state.current_uid
        selected = st.selectbox(
            "Signed in as",
            list(options.keys()),
            index=uids.index(current) if current in uids else 0,
        )
        st.session_state.current_uid = options[selected]
    else:
        st.warning("⚠️ No profiles yet")
        st.caption("Create one in the Profile page")

    st.markdown("---")
    st.markdown("### Navigation")
    st.markdown("- 👤 **Profile** - Your athlete card")
    st.markdown("- 💬 **Messages** - Direct messages")
    st.markdown("- 🏆 **Points** - Leaderboard")
    st.markdown("- 🎬 **Highlights** - Upload, upvote and comment")
    st.markdown("- 🔍 **Explore** - Find players and coaches")

st.title("🏐 LockerLink")

user = get_profile(st.session_state.current_uid, db_path) if st.session_state.current_uid else None

if not user:
    st.info("Create your profile in the **Profile** page to get started.")
    st.stop()

if not is_profile_complete(user):
    st.warning("⚠️ Finish your profile (username, team, city, position, sport and age) to unlock points.")

col1, col2 = st.columns(2)

with col1:
    st.markdown(f"#### 👤 {user.name}")
    st.write(f"**Team:** {user.team or '—'}")
    st.write(f"**Position:** {user.position or '—'}")
    st.write(f"**Height:** {format_height(user.height)}")
    st.write(f"**Points:** {user.points}")

with col2:
    st.markdown("#### 📰 Recent Posts")
    posts = get_posts_for_user(user.uid, db_path)
    if not posts:
        st.caption("No posts yet.")
    for post in posts[:5]:
        st.markdown(f"- {post.text}")
        if post.image_url:
            st.image(post.image_url, width=240)
        if post.video_url:
            st.video(post.video_url)
