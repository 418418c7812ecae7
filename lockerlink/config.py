"""Application configuration and constants."""

import os
from dataclasses import dataclass
from typing import Optional

# Database
DB_DIR = os.path.join(os.path.expanduser("~"), ".lockerlink")
DB_PATH = os.path.join(DB_DIR, "lockerlink.db")

# Placeholder shown for a missing profile attribute
PLACEHOLDER = "—"

# Measurement conversion factors
CM_PER_FOOT = 30.48
CM_PER_INCH = 2.54
KG_PER_POUND = 0.45359237
WHOLE_KG_THRESHOLD = 100  # kg values at or above this are shown without decimals

# Account types
USER_TYPES = ("athlete", "coach", "admin", "mentor")
HIGHLIGHT_REQUIRED_TYPES = ("athlete", "mentor")

# Fields a profile needs before the rest of the app unlocks
REQUIRED_PROFILE_FIELDS = ("username", "name", "team", "city", "position", "sport")

# Points system
POINTS_TIMEZONE = "America/New_York"  # daily limits reset at midnight here
HIGHLIGHT_POINTS = 10
LIKE_POINTS = 2
COMMENT_POINTS = 5
CREATOR_LIKE_POINTS = 2
CREATOR_COMMENT_POINTS = 5
MAX_DAILY_HIGHLIGHTS = 2
MAX_DAILY_COMMENTS = 5
MIN_COMMENT_LENGTH = 15
LEADERBOARD_SIZE = 100

# Highlights feed
HIGHLIGHT_FEED_SIZE = 25
RANKED_HIGHLIGHTS = 3  # top upvoted highlights get a rank badge

# Vendor endpoints
EMAILJS_SEND_URL = "https://api.emailjs.com/api/v1.0/email/send"
CLOUDINARY_UPLOAD_URL = "https://api.cloudinary.com/v1_1/{cloud_name}/{resource_type}/upload"
HTTP_TIMEOUT_SECONDS = 30


class ConfigError(RuntimeError):
    """Raised when a collaborator is used without its configuration."""


@dataclass(frozen=True)
class EmailJSConfig:
    service_id: str
    template_id: str
    public_key: str


@dataclass(frozen=True)
class CloudinaryConfig:
    cloud_name: str
    upload_preset: str


@dataclass(frozen=True)
class AppConfig:
    """Everything read from the environment at startup."""
    db_path: str = DB_PATH
    emailjs: Optional[EmailJSConfig] = None
    cloudinary: Optional[CloudinaryConfig] = None

    def require_emailjs(self) -> EmailJSConfig:
        if self.emailjs is None:
            raise ConfigError(
                "EmailJS configuration is missing. Set EMAILJS_SERVICE_ID, "
                "EMAILJS_TEMPLATE_ID and EMAILJS_PUBLIC_KEY."
            )
        return self.emailjs

    def require_cloudinary(self) -> CloudinaryConfig:
        if self.cloudinary is None:
            raise ConfigError(
                "Cloudinary configuration is missing. Set CLOUDINARY_CLOUD_NAME "
                "and CLOUDINARY_UPLOAD_PRESET."
            )
        return self.cloudinary


def _section(environ, names):
    values = [environ.get(name, "").strip() for name in names]
    if not all(values):
        return None
    return values


def load_config(environ=None) -> AppConfig:
    """Build the application config from environment variables.

    A vendor section is left as None when any of its variables is unset.
    """
    if environ is None:
        environ = os.environ

    emailjs = _section(environ, ("EMAILJS_SERVICE_ID", "EMAILJS_TEMPLATE_ID", "EMAILJS_PUBLIC_KEY"))
    cloudinary = _section(environ, ("CLOUDINARY_CLOUD_NAME", "CLOUDINARY_UPLOAD_PRESET"))

    return AppConfig(
        db_path=environ.get("LOCKERLINK_DB_PATH") or DB_PATH,
        emailjs=EmailJSConfig(*emailjs) if emailjs else None,
        cloudinary=CloudinaryConfig(*cloudinary) if cloudinary else None,
    )
