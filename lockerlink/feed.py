"""Feed posts, highlight videos, upvotes and comments."""

import logging
from datetime import datetime
from typing import Optional

from lockerlink.config import DB_PATH, HIGHLIGHT_FEED_SIZE, HIGHLIGHT_REQUIRED_TYPES, RANKED_HIGHLIGHTS
from lockerlink.db import get_connection
from lockerlink.models import Comment, Highlight, Post, UserProfile
from lockerlink.points import (
    deduct_comment_points,
    deduct_points,
    record_comment,
    record_highlight_posted,
    record_like,
    record_unlike,
)

logger = logging.getLogger(__name__)


def create_post(post: Post, db_path: str = DB_PATH) -> int:
    """Save a feed post. Returns the post ID."""
    if not post.text.strip() and not (post.image_url or post.video_url):
        raise ValueError("A post needs text or media")
    created_at = post.created_at or datetime.now()
    with get_connection(db_path) as conn:
        cursor = conn.execute(
            """INSERT INTO posts (user_id, text, image_url, video_url, thumbnail_url,
               media_type, comments_count, created_at)
               VALUES (?, ?, ?, ?, ?, ?, ?, ?)""",
            (post.user_id, post.text.strip(), post.image_url, post.video_url,
             post.thumbnail_url, post.media_type, post.comments_count, created_at.isoformat()),
        )
        return cursor.lastrowid


def get_posts_for_user(uid: str, db_path: str = DB_PATH) -> list:
    """A user's posts, newest first."""
    with get_connection(db_path) as conn:
        rows = conn.execute(
            "SELECT * FROM posts WHERE user_id = ? ORDER BY created_at DESC, id DESC", (uid,)
        ).fetchall()
        return [
            Post(
                id=row["id"],
                user_id=row["user_id"],
                text=row["text"],
                image_url=row["image_url"],
                video_url=row["video_url"],
                thumbnail_url=row["thumbnail_url"],
                media_type=row["media_type"],
                comments_count=row["comments_count"],
                created_at=datetime.fromisoformat(row["created_at"]),
            )
            for row in rows
        ]


def post_count(uid: str, db_path: str = DB_PATH) -> int:
    with get_connection(db_path) as conn:
        row = conn.execute("SELECT COUNT(*) AS cnt FROM posts WHERE user_id = ?", (uid,)).fetchone()
        return row["cnt"]


def _row_to_highlight(row) -> Highlight:
    return Highlight(
        id=row["id"],
        user_id=row["user_id"],
        title=row["title"],
        video_url=row["video_url"],
        thumbnail_url=row["thumbnail_url"],
        upvotes=row["upvotes"],
        comments_count=row["comments_count"],
        points_awarded=row["points_awarded"],
        created_at=datetime.fromisoformat(row["created_at"]),
    )


def save_highlight(highlight: Highlight, today: Optional[str] = None, db_path: str = DB_PATH) -> tuple:
    """Save a highlight and award its points.

    Returns (highlight_id, AwardResult). The highlight is kept even when the
    daily highlight limit means no points are awarded; the amount actually
    awarded is stored with it.
    """
    if not highlight.title.strip():
        raise ValueError("A highlight needs a title")
    created_at = highlight.created_at or datetime.now()
    with get_connection(db_path) as conn:
        cursor = conn.execute(
            """INSERT INTO highlights (user_id, title, video_url, thumbnail_url,
               upvotes, comments_count, created_at)
               VALUES (?, ?, ?, ?, ?, ?, ?)""",
            (highlight.user_id, highlight.title.strip(), highlight.video_url,
             highlight.thumbnail_url, highlight.upvotes, highlight.comments_count,
             created_at.isoformat()),
        )
        highlight_id = cursor.lastrowid

    result = record_highlight_posted(highlight.user_id, today, db_path)
    if result.success:
        with get_connection(db_path) as conn:
            conn.execute(
                "UPDATE highlights SET points_awarded = ? WHERE id = ?",
                (result.points_awarded, highlight_id),
            )
    else:
        logger.info("Highlight %s saved without points: %s", highlight_id, result.message)
    return highlight_id, result


def get_highlight(highlight_id: int, db_path: str = DB_PATH) -> Optional[Highlight]:
    with get_connection(db_path) as conn:
        row = conn.execute("SELECT * FROM highlights WHERE id = ?", (highlight_id,)).fetchone()
        return _row_to_highlight(row) if row else None


def get_highlights_for_user(uid: str, db_path: str = DB_PATH) -> list:
    with get_connection(db_path) as conn:
        rows = conn.execute(
            "SELECT * FROM highlights WHERE user_id = ? ORDER BY created_at DESC, id DESC", (uid,)
        ).fetchall()
        return [_row_to_highlight(row) for row in rows]


def get_top_highlights(limit: int = HIGHLIGHT_FEED_SIZE, db_path: str = DB_PATH) -> list:
    """The most recent highlights ordered by upvotes.

    The first few carry a rank badge (1, 2, 3); ties keep the newer one first.
    """
    with get_connection(db_path) as conn:
        rows = conn.execute(
            "SELECT * FROM highlights ORDER BY created_at DESC, id DESC LIMIT ?", (limit,)
        ).fetchall()
    highlights = sorted((_row_to_highlight(row) for row in rows), key=lambda h: h.upvotes, reverse=True)
    for position, highlight in enumerate(highlights[:RANKED_HIGHLIGHTS], 1):
        highlight.rank = position
    return highlights


def has_highlight(uid: str, db_path: str = DB_PATH) -> bool:
    with get_connection(db_path) as conn:
        row = conn.execute("SELECT 1 FROM highlights WHERE user_id = ? LIMIT 1", (uid,)).fetchone()
        return row is not None


def delete_highlight(highlight_id: int, requester_uid: Optional[str] = None, db_path: str = DB_PATH) -> bool:
    """Delete a highlight and take back the points saving it earned.

    When requester_uid is given, only the owner may delete. Returns False if
    the highlight does not exist.
    """
    with get_connection(db_path) as conn:
        row = conn.execute(
            "SELECT user_id, points_awarded FROM highlights WHERE id = ?", (highlight_id,)
        ).fetchone()
        if not row:
            return False
        owner_uid, awarded = row["user_id"], row["points_awarded"]
        if requester_uid is not None and requester_uid != owner_uid:
            raise ValueError("You can only delete your own highlights")
        conn.execute("DELETE FROM highlights WHERE id = ?", (highlight_id,))

    if awarded:
        deduct_points(owner_uid, awarded, db_path)
    logger.info("Deleted highlight %s (%s points returned)", highlight_id, awarded)
    return True


# --- Upvotes ---

def has_upvoted(highlight_id: int, uid: str, db_path: str = DB_PATH) -> bool:
    with get_connection(db_path) as conn:
        row = conn.execute(
            "SELECT 1 FROM highlight_likes WHERE highlight_id = ? AND uid = ?", (highlight_id, uid)
        ).fetchone()
        return row is not None


def toggle_upvote(highlight_id: int, uid: str, today: Optional[str] = None, db_path: str = DB_PATH) -> tuple:
    """Like a highlight, or take the like back if the user already gave one.

    Likes earn points for the liker and the highlight's owner; taking a like
    back deducts them again. Returns (liked, upvotes).
    """
    with get_connection(db_path) as conn:
        row = conn.execute("SELECT user_id FROM highlights WHERE id = ?", (highlight_id,)).fetchone()
        if not row:
            raise ValueError(f"Highlight {highlight_id} not found")
        owner_uid = row["user_id"]

        removed = conn.execute(
            "DELETE FROM highlight_likes WHERE highlight_id = ? AND uid = ?", (highlight_id, uid)
        ).rowcount
        if removed:
            conn.execute(
                "UPDATE highlights SET upvotes = MAX(0, upvotes - 1) WHERE id = ?", (highlight_id,)
            )
        else:
            conn.execute(
                "INSERT INTO highlight_likes (highlight_id, uid) VALUES (?, ?)", (highlight_id, uid)
            )
            conn.execute("UPDATE highlights SET upvotes = upvotes + 1 WHERE id = ?", (highlight_id,))
        upvotes = conn.execute(
            "SELECT upvotes FROM highlights WHERE id = ?", (highlight_id,)
        ).fetchone()["upvotes"]

    if removed:
        record_unlike(uid, owner_uid, db_path)
        return False, upvotes
    record_like(uid, owner_uid, today, db_path)
    return True, upvotes


# --- Comments ---

def add_comment(
    highlight_id: int,
    uid: str,
    text: str,
    today: Optional[str] = None,
    db_path: str = DB_PATH,
) -> tuple:
    """Comment on a highlight. Returns (comment_id, AwardResult).

    The comment is kept even when it is too short or over the daily limit to
    earn points.
    """
    body = (text or "").strip()
    if not body:
        raise ValueError("A comment needs text")
    with get_connection(db_path) as conn:
        row = conn.execute("SELECT user_id FROM highlights WHERE id = ?", (highlight_id,)).fetchone()
        if not row:
            raise ValueError(f"Highlight {highlight_id} not found")
        owner_uid = row["user_id"]
        cursor = conn.execute(
            """INSERT INTO highlight_comments (highlight_id, user_id, text, created_at)
               VALUES (?, ?, ?, ?)""",
            (highlight_id, uid, body, datetime.now().isoformat()),
        )
        comment_id = cursor.lastrowid
        conn.execute(
            "UPDATE highlights SET comments_count = comments_count + 1 WHERE id = ?", (highlight_id,)
        )

    result = record_comment(uid, owner_uid, body, today, db_path)
    if result.success:
        with get_connection(db_path) as conn:
            conn.execute(
                "UPDATE highlight_comments SET points_awarded = ? WHERE id = ?",
                (result.points_awarded, comment_id),
            )
    return comment_id, result


def get_comments(highlight_id: int, db_path: str = DB_PATH) -> list:
    """Comments on a highlight, oldest first."""
    with get_connection(db_path) as conn:
        rows = conn.execute(
            "SELECT * FROM highlight_comments WHERE highlight_id = ? ORDER BY created_at, id",
            (highlight_id,),
        ).fetchall()
        return [
            Comment(
                id=row["id"],
                highlight_id=row["highlight_id"],
                user_id=row["user_id"],
                text=row["text"],
                points_awarded=row["points_awarded"],
                created_at=datetime.fromisoformat(row["created_at"]),
            )
            for row in rows
        ]


def delete_comment(comment_id: int, requester_uid: Optional[str] = None, db_path: str = DB_PATH) -> bool:
    """Delete a comment, reversing the points it earned. Only the author may delete."""
    with get_connection(db_path) as conn:
        row = conn.execute(
            """SELECT c.user_id, c.highlight_id, c.points_awarded, h.user_id AS owner_uid
               FROM highlight_comments c
               INNER JOIN highlights h ON h.id = c.highlight_id
               WHERE c.id = ?""",
            (comment_id,),
        ).fetchone()
        if not row:
            return False
        if requester_uid is not None and requester_uid != row["user_id"]:
            raise ValueError("You can only delete your own comments")
        conn.execute("DELETE FROM highlight_comments WHERE id = ?", (comment_id,))
        conn.execute(
            "UPDATE highlights SET comments_count = MAX(0, comments_count - 1) WHERE id = ?",
            (row["highlight_id"],),
        )

    if row["points_awarded"]:
        deduct_comment_points(row["user_id"], row["owner_uid"], db_path)
    return True


def can_earn_points(profile: UserProfile, db_path: str = DB_PATH) -> bool:
    """Athletes and mentors unlock points with their first highlight."""
    if profile.user_type in HIGHLIGHT_REQUIRED_TYPES:
        return has_highlight(profile.uid, db_path)
    return True
