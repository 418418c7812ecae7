"""Highlights Page.

Upload highlight videos, upvote and comment on others, manage your own.
"""

import streamlit as st

from lockerlink.config import HIGHLIGHT_POINTS, MAX_DAILY_HIGHLIGHTS, MIN_COMMENT_LENGTH, ConfigError, load_config
from lockerlink.feed import (
    add_comment,
    delete_comment,
    delete_highlight,
    get_comments,
    get_top_highlights,
    has_upvoted,
    save_highlight,
    toggle_upvote,
)
from lockerlink.media import UploadError, upload_image, upload_video
from lockerlink.models import Highlight
from lockerlink.profile_store import get_profile

RANK_BADGES = {1: "🔥", 2: "⭐", 3: "🏆"}

st.set_page_config(page_title="Highlights | LockerLink", page_icon="🎬", layout="wide")
st.title("🎬 Highlights")

if 'config' not in st.session_state:
    st.session_state.config = load_config()
config = st.session_state.config
db_path = config.db_path

uid = st.session_state.get("current_uid")
user = get_profile(uid, db_path) if uid else None
if not user:
    st.warning("⚠️ No profile found. Please create a profile first in the Profile page.")
    st.stop()

# Upload
with st.expander("📤 Upload a Highlight"):
    st.caption(f"+{HIGHLIGHT_POINTS} points per highlight, up to {MAX_DAILY_HIGHLIGHTS} per day")
    with st.form("upload_form", clear_on_submit=True):
        title = st.text_input("Title*")
        video_file = st.file_uploader("Video*", type=["mp4", "mov", "webm"])
        thumbnail_file = st.file_uploader("Thumbnail (optional)", type=["jpg", "jpeg", "png"])
        submitted = st.form_submit_button("Upload", use_container_width=True)

    if submitted:
        if not title.strip() or video_file is None:
            st.error("⚠️ A title and a video are required")
        else:
            try:
                cloudinary = config.require_cloudinary()
                with st.spinner("Uploading..."):
                    video = upload_video(video_file, cloudinary)
                    thumbnail_url = upload_image(thumbnail_file, cloudinary).secure_url if thumbnail_file else ""
                _, result = save_highlight(
                    Highlight(id=None, user_id=user.uid, title=title, video_url=video.secure_url,
                              thumbnail_url=thumbnail_url),
                    db_path=db_path,
                )
                if result.success:
                    st.success(f"✅ Highlight uploaded! +{result.points_awarded} points")
                else:
                    st.info(f"Highlight uploaded. {result.message}")
            except (ConfigError, UploadError) as e:
                st.error(f"❌ {e}")

highlights = get_top_highlights(db_path=db_path)
if not highlights:
    st.info("No highlights yet. Be the first to upload one!")
    st.stop()

for h in highlights:
    owner = get_profile(h.user_id, db_path)
    with st.container(border=True):
        badge = RANK_BADGES.get(h.rank, "")
        st.markdown(f"### {badge} {h.title}")
        st.caption(f"{owner.name if owner else 'Unknown'} · {h.created_at:%b %d, %Y}")
        if h.video_url:
            st.video(h.video_url)

        col1, col2, col3 = st.columns([1, 1, 4])
        liked = has_upvoted(h.id, user.uid, db_path)
        if col1.button(f"{'❤️' if liked else '🤍'} {h.upvotes}", key=f"upvote_{h.id}"):
            toggle_upvote(h.id, user.uid, db_path=db_path)
            st.rerun()
        col2.write(f"💬 {h.comments_count}")
        if h.user_id == user.uid and col3.button("🗑️ Delete", key=f"delete_{h.id}"):
            delete_highlight(h.id, user.uid, db_path)
            st.rerun()

        with st.expander("Comments"):
            for comment in get_comments(h.id, db_path):
                author = get_profile(comment.user_id, db_path)
                c1, c2 = st.columns([6, 1])
                c1.markdown(f"**{author.name if author else 'Unknown'}**: {comment.text}")
                if comment.user_id == user.uid and c2.button("✕", key=f"uncomment_{comment.id}"):
                    delete_comment(comment.id, user.uid, db_path)
                    st.rerun()

            text = st.text_input(
                "Add a comment", key=f"comment_{h.id}",
                help=f"Comments of {MIN_COMMENT_LENGTH}+ characters earn points",
            )
            if st.button("Post", key=f"post_comment_{h.id}") and text.strip():
                _, result = add_comment(h.id, user.uid, text, db_path=db_path)
                if not result.success:
                    st.toast(result.message)
                st.rerun()
