"""Messages Page.

Start conversations and exchange direct messages.
"""

import streamlit as st

from lockerlink.config import load_config
from lockerlink.messaging import get_messages, get_or_create_chat, list_chats, send_message
from lockerlink.profile_store import get_profile, list_profiles

st.set_page_config(page_title="Messages | LockerLink", page_icon="💬", layout="wide")
st.title("💬 Messages")

if 'config' not in st.session_state:
    st.session_state.config = load_config()
db_path = st.session_state.config.db_path

uid = st.session_state.get("current_uid")
if not uid or not get_profile(uid, db_path):
    st.warning("⚠️ No profile found. Please create a profile first in the Profile page.")
    st.stop()

# New conversation
with st.expander("➕ New Message"):
    others = list_profiles(exclude_uid=uid, db_path=db_path)
    if not others:
        st.caption("No other users yet.")
    else:
        labels = {f"{p.name} ({p.team})" if p.team else p.name: p.uid for p in others}
        choice = st.selectbox("Select a user", list(labels.keys()))
        if st.button("Start Chat"):
            chat = get_or_create_chat(uid, labels[choice], db_path=db_path)
            st.session_state.open_chat_id = chat.id
            st.rerun()

chats = list_chats(uid, db_path)
if not chats:
    st.info("No conversations yet. Start one above!")
    st.stop()

col1, col2 = st.columns([1, 2])

with col1:
    st.markdown("### Conversations")
    for chat in chats:
        preview = chat.last_message or "No messages yet"
        if st.button(f"**{chat.other_user_name}**  \n{preview[:40]}", key=f"chat_{chat.id}",
                     use_container_width=True):
            st.session_state.open_chat_id = chat.id
        st.caption(chat.updated_at.strftime("%b %d, %Y"))

open_id = st.session_state.get("open_chat_id") or chats[0].id
current = next((c for c in chats if c.id == open_id), chats[0])

with col2:
    st.markdown(f"### {current.other_user_name}")
    for message in get_messages(current.id, db_path):
        role = "user" if message.sender_id == uid else "assistant"
        with st.chat_message(role):
            st.write(message.text)
            st.caption(message.timestamp.strftime("%H:%M"))

    text = st.chat_input("Type a message...")
    if text:
        send_message(current.id, uid, text, db_path=db_path)
        st.rerun()
