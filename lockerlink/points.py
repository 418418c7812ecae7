"""Community points and daily activity limits.

Users earn points for posting highlights, liking and commenting, and creators
earn points when others engage with their content. Highlight posts and
comments are capped per day; the day rolls over at midnight America/New_York.
"""

import logging
import sqlite3
from datetime import datetime, timezone
from typing import Optional
from zoneinfo import ZoneInfo

from lockerlink.config import (
    COMMENT_POINTS,
    CREATOR_COMMENT_POINTS,
    CREATOR_LIKE_POINTS,
    DB_PATH,
    HIGHLIGHT_POINTS,
    LEADERBOARD_SIZE,
    LIKE_POINTS,
    MAX_DAILY_COMMENTS,
    MAX_DAILY_HIGHLIGHTS,
    MIN_COMMENT_LENGTH,
    POINTS_TIMEZONE,
)
from lockerlink.db import get_connection
from lockerlink.models import AwardResult, DailyActivity, LeaderboardEntry

logger = logging.getLogger(__name__)

# activity type -> (users column, wording used in limit messages)
ACTIVITY_TYPES = {
    "highlight_posted": ("highlights_posted", "highlight posts"),
    "comment_given": ("comments_given", "comments"),
    "like_given": ("likes_given", "likes"),
}


def get_current_est_date(now: Optional[datetime] = None) -> str:
    """Today's date in America/New_York as YYYY-MM-DD. Naive datetimes are UTC."""
    tz = ZoneInfo(POINTS_TIMEZONE)
    if now is None:
        now = datetime.now(tz)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return now.astimezone(tz).date().isoformat()


def should_reset_daily_activity(current_date: str, stored_date: Optional[str]) -> bool:
    return current_date != stored_date


def get_daily_activity(uid: str, today: Optional[str] = None, db_path: str = DB_PATH) -> DailyActivity:
    """Load today's counters, resetting them when the stored day is stale."""
    if today is None:
        today = get_current_est_date()

    with get_connection(db_path) as conn:
        row = conn.execute(
            """SELECT activity_date, highlights_posted, comments_given, likes_given
               FROM users WHERE uid = ?""",
            (uid,),
        ).fetchone()
        if not row:
            return DailyActivity(date=today)

        if should_reset_daily_activity(today, row["activity_date"]):
            conn.execute(
                """UPDATE users SET activity_date = ?, highlights_posted = 0,
                   comments_given = 0, likes_given = 0 WHERE uid = ?""",
                (today, uid),
            )
            return DailyActivity(date=today)

        return DailyActivity(
            date=row["activity_date"],
            highlights_posted=row["highlights_posted"],
            comments_given=row["comments_given"],
            likes_given=row["likes_given"],
        )


def award_points(
    uid: str,
    points: int,
    activity_type: str,
    check_limit: bool = False,
    max_daily: Optional[int] = None,
    today: Optional[str] = None,
    db_path: str = DB_PATH,
) -> AwardResult:
    """Award points for an action and count it against today's activity."""
    if activity_type not in ACTIVITY_TYPES:
        raise ValueError(f"Unknown activity type '{activity_type}'")
    column, wording = ACTIVITY_TYPES[activity_type]
    if today is None:
        today = get_current_est_date()

    try:
        activity = get_daily_activity(uid, today, db_path)
        current_count = getattr(activity, column)

        if check_limit and max_daily is not None and current_count >= max_daily:
            return AwardResult(
                success=False,
                message=(
                    f"You've reached today's limit of {max_daily} {wording}. "
                    "Daily limits reset at midnight EST."
                ),
            )

        with get_connection(db_path) as conn:
            cursor = conn.execute(
                f"""UPDATE users SET points = points + ?, activity_date = ?, {column} = ?
                    WHERE uid = ?""",
                (points, today, current_count + 1, uid),
            )
            if cursor.rowcount == 0:
                logger.warning("Cannot award %s points: user %s not found", points, uid)
                return AwardResult(success=False, message="Failed to award points")
    except sqlite3.Error:
        logger.exception("Error awarding points to %s", uid)
        return AwardResult(success=False, message="Failed to award points")

    logger.debug("Awarded %s points to %s for %s", points, uid, activity_type)
    return AwardResult(success=True, points_awarded=points)


def award_creator_points(creator_uid: str, points: int, db_path: str = DB_PATH) -> bool:
    """Credit a content creator; not subject to daily limits."""
    try:
        with get_connection(db_path) as conn:
            cursor = conn.execute(
                "UPDATE users SET points = points + ? WHERE uid = ?", (points, creator_uid)
            )
            return cursor.rowcount > 0
    except sqlite3.Error:
        logger.exception("Error awarding creator points to %s", creator_uid)
        return False


def deduct_points(uid: str, points: int, db_path: str = DB_PATH) -> bool:
    """Take points away, never going below zero."""
    try:
        with get_connection(db_path) as conn:
            cursor = conn.execute(
                "UPDATE users SET points = MAX(0, points - ?) WHERE uid = ?", (points, uid)
            )
            return cursor.rowcount > 0
    except sqlite3.Error:
        logger.exception("Error deducting points from %s", uid)
        return False


def deduct_comment_points(commenter_uid: str, creator_uid: Optional[str], db_path: str = DB_PATH) -> None:
    """Reverse the points a deleted comment earned its author and the creator."""
    deduct_points(commenter_uid, COMMENT_POINTS, db_path)
    if creator_uid and creator_uid != commenter_uid:
        deduct_points(creator_uid, CREATOR_COMMENT_POINTS, db_path)


def validate_comment_length(comment: str) -> bool:
    return len((comment or "").strip()) >= MIN_COMMENT_LENGTH


def record_highlight_posted(uid: str, today: Optional[str] = None, db_path: str = DB_PATH) -> AwardResult:
    return award_points(uid, HIGHLIGHT_POINTS, "highlight_posted", True, MAX_DAILY_HIGHLIGHTS, today, db_path)


def record_like(
    liker_uid: str,
    creator_uid: Optional[str],
    today: Optional[str] = None,
    db_path: str = DB_PATH,
) -> AwardResult:
    result = award_points(liker_uid, LIKE_POINTS, "like_given", today=today, db_path=db_path)
    if result.success and creator_uid and creator_uid != liker_uid:
        award_creator_points(creator_uid, CREATOR_LIKE_POINTS, db_path)
    return result


def record_unlike(liker_uid: str, creator_uid: Optional[str], db_path: str = DB_PATH) -> None:
    deduct_points(liker_uid, LIKE_POINTS, db_path)
    if creator_uid and creator_uid != liker_uid:
        deduct_points(creator_uid, CREATOR_LIKE_POINTS, db_path)


def record_comment(
    commenter_uid: str,
    creator_uid: Optional[str],
    comment: str,
    today: Optional[str] = None,
    db_path: str = DB_PATH,
) -> AwardResult:
    if not validate_comment_length(comment):
        return AwardResult(
            success=False,
            message=f"Comments must be at least {MIN_COMMENT_LENGTH} characters to earn points.",
        )
    result = award_points(
        commenter_uid, COMMENT_POINTS, "comment_given", True, MAX_DAILY_COMMENTS, today, db_path
    )
    if result.success and creator_uid and creator_uid != commenter_uid:
        award_creator_points(creator_uid, CREATOR_COMMENT_POINTS, db_path)
    return result


def get_user_points(uid: str, db_path: str = DB_PATH) -> int:
    with get_connection(db_path) as conn:
        row = conn.execute("SELECT points FROM users WHERE uid = ?", (uid,)).fetchone()
        return row["points"] if row else 0


def get_leaderboard(limit: int = LEADERBOARD_SIZE, db_path: str = DB_PATH) -> list:
    """Top users by points; users without points are left off."""
    with get_connection(db_path) as conn:
        rows = conn.execute(
            """SELECT uid, name, username, points FROM users
               WHERE points > 0
               ORDER BY points DESC, name
               LIMIT ?""",
            (limit,),
        ).fetchall()
    return [
        LeaderboardEntry(
            rank=rank,
            uid=row["uid"],
            name=row["name"] or "Unknown",
            username=row["username"] or "",
            points=row["points"],
        )
        for rank, row in enumerate(rows, 1)
    ]


def get_user_rank(uid: str, db_path: str = DB_PATH) -> Optional[int]:
    for entry in get_leaderboard(db_path=db_path):
        if entry.uid == uid:
            return entry.rank
    return None
