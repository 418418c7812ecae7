"""Profile persistence layer - CRUD operations for user profiles."""

import logging
from dataclasses import fields
from typing import Optional

from lockerlink.config import DB_PATH, REQUIRED_PROFILE_FIELDS
from lockerlink.db import get_connection
from lockerlink.models import UserProfile

logger = logging.getLogger(__name__)

# Columns written from a UserProfile; points and created_at are managed elsewhere
PROFILE_COLUMNS = tuple(
    f.name for f in fields(UserProfile) if f.name not in ("points", "created_at")
)


def _row_to_profile(row) -> UserProfile:
    doc = {key: row[key] for key in row.keys()}
    return UserProfile.from_document(doc)


def save_profile(profile: UserProfile, db_path: str = DB_PATH) -> str:
    """Insert a new profile. Returns the profile uid."""
    UserProfile.from_document(profile.to_document())  # validate before writing
    placeholders = ", ".join("?" for _ in PROFILE_COLUMNS)
    with get_connection(db_path) as conn:
        conn.execute(
            f"INSERT INTO users ({', '.join(PROFILE_COLUMNS)}) VALUES ({placeholders})",
            tuple(getattr(profile, column) for column in PROFILE_COLUMNS),
        )
    logger.info("Created profile %s (%s)", profile.uid, profile.user_type)
    return profile.uid


def update_profile(profile: UserProfile, db_path: str = DB_PATH) -> bool:
    """Overwrite an existing profile's editable fields. Returns True if found."""
    UserProfile.from_document(profile.to_document())
    columns = [column for column in PROFILE_COLUMNS if column != "uid"]
    assignments = ", ".join(f"{column}=?" for column in columns)
    with get_connection(db_path) as conn:
        cursor = conn.execute(
            f"UPDATE users SET {assignments} WHERE uid=?",
            tuple(getattr(profile, column) for column in columns) + (profile.uid,),
        )
        return cursor.rowcount > 0


def get_profile(uid: str, db_path: str = DB_PATH) -> Optional[UserProfile]:
    """Load a single profile by uid."""
    with get_connection(db_path) as conn:
        row = conn.execute("SELECT * FROM users WHERE uid = ?", (uid,)).fetchone()
        if not row:
            return None
        return _row_to_profile(row)


def list_profiles(exclude_uid: Optional[str] = None, db_path: str = DB_PATH) -> list:
    """All profiles ordered by name, optionally leaving out one user."""
    with get_connection(db_path) as conn:
        rows = conn.execute("SELECT * FROM users ORDER BY name").fetchall()
        return [_row_to_profile(row) for row in rows if row["uid"] != exclude_uid]


def delete_profile(uid: str, db_path: str = DB_PATH) -> bool:
    with get_connection(db_path) as conn:
        cursor = conn.execute("DELETE FROM users WHERE uid = ?", (uid,))
        return cursor.rowcount > 0


def is_profile_complete(profile: Optional[UserProfile]) -> bool:
    """A profile is complete once the identity fields and an age are filled in."""
    if profile is None:
        return False
    if not all(str(getattr(profile, name)).strip() for name in REQUIRED_PROFILE_FIELDS):
        return False
    return bool(profile.age_group.strip() or profile.birth_year.strip())


SEARCH_FIELDS = ("name", "team", "position", "city")


def search_profiles(query: str, exclude_uid: Optional[str] = None, db_path: str = DB_PATH) -> list:
    """Profiles whose name, team, position or city contains the query, ignoring case.

    A blank query matches nobody.
    """
    needle = (query or "").strip().lower()
    if not needle:
        return []
    return [
        profile for profile in list_profiles(exclude_uid, db_path)
        if any(needle in (getattr(profile, name) or "").lower() for name in SEARCH_FIELDS)
    ]
