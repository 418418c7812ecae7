"""Explore Page.

Find people by name, team, position or city. Coaches and admins also get a
scouting dashboard to filter athletes.
"""

import streamlit as st

from lockerlink.config import load_config
from lockerlink.format_metrics import format_height, format_vertical
from lockerlink.profile_store import get_profile, list_profiles, search_profiles
from lockerlink.profile_view import athlete_filter_options, calculate_age, filter_athletes

st.set_page_config(page_title="Explore | LockerLink", page_icon="🔍", layout="wide")
st.title("🔍 Explore")

if 'config' not in st.session_state:
    st.session_state.config = load_config()
db_path = st.session_state.config.db_path

uid = st.session_state.get("current_uid")
user = get_profile(uid, db_path) if uid else None

query = st.text_input("Search users", placeholder="Name, team, position or city")
if query.strip():
    results = search_profiles(query, exclude_uid=uid, db_path=db_path)
    if not results:
        st.caption("No users found.")
    for p in results:
        st.markdown(f"- **{p.name}** · {p.user_type.title()} · {p.team or '—'} · {p.city or '—'}")

if not user or user.user_type not in ("coach", "admin"):
    st.stop()

st.divider()
st.markdown("### 📋 Coach Dashboard")

profiles = list_profiles(db_path=db_path)
cities, positions = athlete_filter_options(profiles)

col1, col2, col3, col4 = st.columns(4)
city = col1.selectbox("City", [""] + cities, format_func=lambda c: c or "All cities")
position = col2.selectbox("Position", [""] + positions, format_func=lambda p: p or "All positions")
min_age = col3.number_input("Min age", min_value=0, max_value=99, value=0)
max_age = col4.number_input("Max age", min_value=0, max_value=99, value=99)

athletes = filter_athletes(
    profiles,
    city=city,
    position=position,
    min_age=int(min_age) if min_age > 0 else None,
    max_age=int(max_age) if max_age < 99 else None,
)

st.markdown(f"#### Athletes ({len(athletes)})")
if not athletes:
    st.info("No athletes match these filters.")
else:
    st.dataframe(
        [
            {
                "Name": p.name,
                "Age": calculate_age(p.birth_month, p.birth_year),
                "Position": p.position,
                "City": p.city,
                "Team": p.team,
                "Height": format_height(p.height),
                "Vertical": format_vertical(p.vertical),
                "Points": p.points,
            }
            for p in athletes
        ],
        hide_index=True,
        use_container_width=True,
    )
