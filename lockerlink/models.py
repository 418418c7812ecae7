"""Data models for the LockerLink application."""

from dataclasses import asdict, dataclass, field, fields
from datetime import datetime
from typing import Optional

from lockerlink.config import USER_TYPES


class SchemaError(ValueError):
    """A stored document is missing required fields or has an invalid tag."""


@dataclass
class UserProfile:
    """An athlete, coach, mentor or admin profile."""
    uid: str
    name: str
    user_type: str = "athlete"  # athlete, coach, admin, mentor
    username: str = ""
    email: str = ""
    team: str = ""
    sport: str = ""
    city: str = ""
    bio: str = ""
    photo_url: str = ""
    position: str = ""
    secondary_position: str = ""
    age_group: str = ""
    birth_month: str = ""  # full month name, e.g. "March"
    birth_year: str = ""
    # Measurements are kept as typed, see format_metrics
    height: str = ""
    vertical: str = ""
    weight: str = ""
    block_touch: str = ""
    standing_touch: str = ""
    spike_touch: str = ""
    division: str = ""
    university: str = ""
    experience_years: Optional[int] = None
    points: int = 0
    created_at: Optional[datetime] = None

    @classmethod
    def from_document(cls, doc: dict) -> "UserProfile":
        """Build a profile from a stored document, validating required fields."""
        missing = [key for key in ("uid", "name") if not doc.get(key)]
        if missing:
            raise SchemaError(f"Profile document missing required fields: {', '.join(missing)}")

        user_type = doc.get("user_type") or "athlete"
        if user_type not in USER_TYPES:
            raise SchemaError(f"Unknown user type '{user_type}'. Expected one of: {', '.join(USER_TYPES)}")

        known = {f.name for f in fields(cls)}
        values = {key: value for key, value in doc.items() if key in known and value is not None}
        values["user_type"] = user_type
        if isinstance(values.get("created_at"), str):
            values["created_at"] = datetime.fromisoformat(values["created_at"])
        return cls(**values)

    def to_document(self) -> dict:
        return asdict(self)


@dataclass
class Chat:
    """A direct conversation between two users."""
    id: Optional[int]
    participants: list = field(default_factory=list)  # [uid, uid]
    last_message: str = ""
    updated_at: Optional[datetime] = None
    other_user_name: str = ""  # Populated on list for the viewing user


@dataclass
class Message:
    """A single chat message."""
    id: Optional[int]
    chat_id: int
    sender_id: str
    text: str
    timestamp: datetime


@dataclass
class Post:
    """A community feed post, optionally carrying an uploaded image or video."""
    id: Optional[int]
    user_id: str
    text: str
    image_url: str = ""
    video_url: str = ""
    thumbnail_url: str = ""
    media_type: Optional[str] = None  # "image", "video" or None
    comments_count: int = 0
    created_at: Optional[datetime] = None


@dataclass
class Highlight:
    """A highlight video submitted by an athlete or mentor."""
    id: Optional[int]
    user_id: str
    title: str
    video_url: str = ""
    thumbnail_url: str = ""
    upvotes: int = 0
    comments_count: int = 0
    points_awarded: int = 0  # What saving it earned; taken back on delete
    created_at: Optional[datetime] = None
    rank: Optional[int] = None  # 1-3 for the most upvoted, set by get_top_highlights


@dataclass
class Comment:
    """A comment on a highlight."""
    id: Optional[int]
    highlight_id: int
    user_id: str
    text: str
    points_awarded: int = 0
    created_at: Optional[datetime] = None


@dataclass
class DailyActivity:
    """Point-earning actions taken on one day (America/New_York)."""
    date: str  # YYYY-MM-DD
    highlights_posted: int = 0
    comments_given: int = 0
    likes_given: int = 0


@dataclass
class AwardResult:
    success: bool
    points_awarded: int = 0
    message: str = ""


@dataclass
class LeaderboardEntry:
    rank: int
    uid: str
    name: str
    username: str
    points: int
