"""Profile Page.

Create or update a profile and view its stat cards.
"""

import calendar
from dataclasses import replace

import streamlit as st

from lockerlink.config import USER_TYPES, load_config
from lockerlink.feed import post_count
from lockerlink.mailer import send_welcome_email
from lockerlink.models import SchemaError, UserProfile
from lockerlink.profile_store import delete_profile, get_profile, save_profile, update_profile
from lockerlink.profile_view import calculate_age
from pages.components.stat_cards import render_stat_cards

st.set_page_config(page_title="Profile | LockerLink", page_icon="👤", layout="wide")
st.title("👤 Profile")

if 'config' not in st.session_state:
    st.session_state.config = load_config()
config = st.session_state.config
db_path = config.db_path

uid = st.session_state.get("current_uid")
user = get_profile(uid, db_path) if uid else None

# Display current profile if exists
if user:
    st.markdown(f"### {user.name}")
    age = calculate_age(user.birth_month, user.birth_year)
    subtitle = [user.user_type.title(), user.position, user.team]
    if age is not None:
        subtitle.append(f"{age} years")
    st.caption(" | ".join(part for part in subtitle if part))
    if user.bio:
        st.write(user.bio)

    render_stat_cards(user, post_count(user.uid, db_path))

    st.divider()
    st.markdown("### Update Profile")
else:
    st.info("No profile found. Create your profile below to get started!")

months = [name for name in calendar.month_name if name]

with st.form("profile_form"):
    col1, col2 = st.columns(2)
    with col1:
        new_uid = st.text_input("User ID*", value=user.uid if user else "", disabled=bool(user))
        name = st.text_input("Name*", value=user.name if user else "")
        username = st.text_input("Username", value=user.username if user else "")
        email = st.text_input("Email", value=user.email if user else "")
    with col2:
        user_type = st.selectbox(
            "Account type",
            list(USER_TYPES),
            index=list(USER_TYPES).index(user.user_type) if user else 0,
        )
        team = st.text_input("Team", value=user.team if user else "")
        city = st.text_input("City", value=user.city if user else "")
        position = st.text_input("Position", value=user.position if user else "")

    sport = st.text_input("Sport", value=user.sport if user else "Volleyball")

    col1, col2, col3 = st.columns(3)
    with col1:
        birth_month = st.selectbox(
            "Birth month",
            [""] + months,
            index=([""] + months).index(user.birth_month) if user and user.birth_month in months else 0,
        )
    with col2:
        birth_year = st.text_input("Birth year", value=user.birth_year if user else "")
    with col3:
        age_group = st.text_input("Age group", value=user.age_group if user else "", help="e.g. 16U")

    st.markdown("#### Measurements")
    st.caption("Type them the way you like: 6'2\", 188 cm, 30 in, 180 lbs ...")
    col1, col2, col3 = st.columns(3)
    with col1:
        height = st.text_input("Height", value=user.height if user else "")
        block_touch = st.text_input("Block touch", value=user.block_touch if user else "")
    with col2:
        vertical = st.text_input("Vertical", value=user.vertical if user else "")
        standing_touch = st.text_input("Standing touch", value=user.standing_touch if user else "")
    with col3:
        weight = st.text_input("Weight", value=user.weight if user else "")
        spike_touch = st.text_input("Spike touch", value=user.spike_touch if user else "")

    bio = st.text_area("Bio", value=user.bio if user else "")

    submitted = st.form_submit_button(
        "💾 Save Profile" if not user else "💾 Update Profile",
        use_container_width=True
    )

    if submitted:
        profile_uid = user.uid if user else new_uid.strip()
        if not profile_uid or not name.strip():
            st.error("⚠️ User ID and name are required")
        else:
            values = dict(
                name=name.strip(),
                user_type=user_type,
                username=username.strip(),
                email=email.strip(),
                team=team.strip(),
                sport=sport.strip(),
                city=city.strip(),
                position=position.strip(),
                age_group=age_group.strip(),
                birth_month=birth_month,
                birth_year=birth_year.strip(),
                height=height.strip(),
                vertical=vertical.strip(),
                weight=weight.strip(),
                block_touch=block_touch.strip(),
                standing_touch=standing_touch.strip(),
                spike_touch=spike_touch.strip(),
                bio=bio.strip(),
            )
            # Keep fields this form does not edit
            profile = replace(user, **values) if user else UserProfile(uid=profile_uid, **values)

            try:
                if user:
                    update_profile(profile, db_path)
                    st.success("✅ Profile updated successfully!")
                else:
                    save_profile(profile, db_path)
                    st.success("✅ Profile created successfully!")
                    if profile.email and config.emailjs:
                        result = send_welcome_email(profile.email, config.emailjs)
                        if not result.success:
                            st.warning(f"Welcome email could not be sent: {result.message}")

                st.session_state.current_uid = profile.uid
                st.rerun()

            except SchemaError as e:
                st.error(f"❌ Invalid profile: {e}")
            except Exception as e:
                st.error(f"❌ Error saving profile: {e}")

if user:
    st.divider()
    with st.expander("⚠️ Delete Profile"):
        st.caption("Removes your profile from LockerLink.")
        confirm = st.checkbox("I understand this cannot be undone")
        if st.button("Delete my profile", type="primary", disabled=not confirm):
            delete_profile(user.uid, db_path)
            del st.session_state.current_uid
            st.rerun()
