"""Profile presentation: age, birth line and the stat cards shown on a profile."""

import calendar
from datetime import date
from typing import Optional

from lockerlink.config import PLACEHOLDER
from lockerlink.format_metrics import format_height, format_touch, format_vertical, format_weight
from lockerlink.models import UserProfile

MONTH_TO_NUMBER = {name: number for number, name in enumerate(calendar.month_name) if name}


def calculate_age(month: str, year: str, today: Optional[date] = None) -> Optional[int]:
    """Age in whole years from a birth month name and year.

    The birthday is taken as the first of the month. Returns None when the
    month or year is missing or unreadable, or the date is in the future.
    """
    if not month or not year:
        return None
    try:
        numeric_year = int(str(year).strip())
    except ValueError:
        return None
    month_number = MONTH_TO_NUMBER.get(month)
    if month_number is None:
        return None

    if today is None:
        today = date.today()
    age = today.year - numeric_year
    if today.month < month_number:
        age -= 1
    return age if age >= 0 else None


def format_birth(profile: UserProfile) -> Optional[str]:
    """'Mar 2008' style birth line, or None when either part is missing."""
    if profile.birth_month and profile.birth_year:
        return f"{profile.birth_month[:3]} {profile.birth_year}"
    return None


def athlete_stat_cards(profile: UserProfile) -> list:
    return [
        ("Birth", format_birth(profile) or PLACEHOLDER),
        ("Height", format_height(profile.height)),
        ("Vertical", format_vertical(profile.vertical)),
        ("Weight", format_weight(profile.weight)),
        ("Block Touch", format_touch(profile.block_touch)),
        ("Standing Touch", format_touch(profile.standing_touch)),
        ("Spike Touch", format_touch(profile.spike_touch)),
        ("Points", str(profile.points or 0)),
    ]


def coach_info_cards(profile: UserProfile, post_count: int = 0) -> list:
    cards = [
        ("TEAM", profile.team),
        ("REGION", profile.city),
        ("DIVISION", profile.division),
        ("AGE GROUP", profile.age_group),
    ]
    cards = [(label, value) for label, value in cards if value]
    cards.append(("Community Posts", str(post_count)))
    return cards


def mentor_cards(profile: UserProfile) -> list:
    cards = [
        ("Birth", format_birth(profile)),
        ("Height", format_height(profile.height) if profile.height else None),
        ("University", profile.university),
        ("Experience", f"{profile.experience_years} years" if profile.experience_years else None),
        ("City", profile.city),
    ]
    return [(label, value) for label, value in cards if value]


def stat_cards_for(profile: UserProfile, post_count: int = 0) -> list:
    """Pick the card set for the profile's account type."""
    if profile.user_type == "coach":
        return coach_info_cards(profile, post_count)
    if profile.user_type == "mentor":
        return mentor_cards(profile)
    return athlete_stat_cards(profile)


def format_profile_card(profile: UserProfile, post_count: int = 0) -> str:
    """Format a profile for terminal display."""
    lines = [f"{profile.name} (@{profile.username})" if profile.username else profile.name]
    subtitle = " | ".join(part for part in (profile.user_type.title(), profile.position, profile.team) if part)
    lines.append(subtitle)
    lines.append("-" * 40)

    age = calculate_age(profile.birth_month, profile.birth_year)
    if age is not None:
        lines.append(f"{'Age':<15} {age}")
    for label, value in stat_cards_for(profile, post_count):
        lines.append(f"{label.title():<15} {value}")
    if profile.bio:
        lines.append("")
        lines.append(profile.bio)
    return "\n".join(lines)


# --- Coach dashboard ---

def athlete_filter_options(profiles: list) -> tuple:
    """Sorted distinct (cities, positions) among athlete profiles, for filter choices."""
    athletes = [p for p in profiles if p.user_type == "athlete"]
    cities = sorted({p.city for p in athletes if p.city})
    positions = sorted({p.position for p in athletes if p.position})
    return cities, positions


def filter_athletes(
    profiles: list,
    city: str = "",
    position: str = "",
    min_age: Optional[int] = None,
    max_age: Optional[int] = None,
    today: Optional[date] = None,
) -> list:
    """Athletes matching a coach's filters.

    City and position must match exactly when given. With an age bound set,
    athletes whose age cannot be worked out are left out.
    """
    matches = []
    for profile in profiles:
        if profile.user_type != "athlete":
            continue
        if city and profile.city != city:
            continue
        if position and profile.position != position:
            continue
        if min_age is not None or max_age is not None:
            age = calculate_age(profile.birth_month, profile.birth_year, today)
            if age is None:
                continue
            if min_age is not None and age < min_age:
                continue
            if max_age is not None and age > max_age:
                continue
        matches.append(profile)
    return matches
