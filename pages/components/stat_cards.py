"""Profile stat card components for Streamlit pages."""

import streamlit as st

from lockerlink.models import UserProfile
from lockerlink.profile_view import stat_cards_for


def render_stat_cards(profile: UserProfile, post_count: int = 0, per_row: int = 4):
    """Render the profile's stat cards as metric tiles.

    Args:
        profile: Profile to display
        post_count: Number of community posts, shown on coach profiles
        per_row: Tiles per row (default 4)
    """
    cards = stat_cards_for(profile, post_count)
    for start in range(0, len(cards), per_row):
        row = cards[start:start + per_row]
        cols = st.columns(per_row)
        for col, (label, value) in zip(cols, row):
            col.metric(label, value)
