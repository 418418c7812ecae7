"""Database setup and access layer using SQLite."""

import os
import sqlite3
from contextlib import contextmanager

from lockerlink.config import DB_PATH

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS users (
    uid TEXT PRIMARY KEY,
    name TEXT NOT NULL,
    user_type TEXT NOT NULL DEFAULT 'athlete'
        CHECK(user_type IN ('athlete', 'coach', 'admin', 'mentor')),
    username TEXT DEFAULT '',
    email TEXT DEFAULT '',
    team TEXT DEFAULT '',
    sport TEXT DEFAULT '',
    city TEXT DEFAULT '',
    bio TEXT DEFAULT '',
    photo_url TEXT DEFAULT '',
    position TEXT DEFAULT '',
    secondary_position TEXT DEFAULT '',
    age_group TEXT DEFAULT '',
    birth_month TEXT DEFAULT '',
    birth_year TEXT DEFAULT '',
    height TEXT DEFAULT '',
    vertical TEXT DEFAULT '',
    weight TEXT DEFAULT '',
    block_touch TEXT DEFAULT '',
    standing_touch TEXT DEFAULT '',
    spike_touch TEXT DEFAULT '',
    division TEXT DEFAULT '',
    university TEXT DEFAULT '',
    experience_years INTEGER,
    points INTEGER NOT NULL DEFAULT 0,
    activity_date TEXT,
    highlights_posted INTEGER NOT NULL DEFAULT 0,
    comments_given INTEGER NOT NULL DEFAULT 0,
    likes_given INTEGER NOT NULL DEFAULT 0,
    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
);

CREATE TABLE IF NOT EXISTS chats (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    last_message TEXT DEFAULT '',
    updated_at TIMESTAMP NOT NULL
);

CREATE TABLE IF NOT EXISTS chat_participants (
    chat_id INTEGER NOT NULL,
    uid TEXT NOT NULL,
    slot INTEGER NOT NULL,
    PRIMARY KEY (chat_id, uid),
    FOREIGN KEY (chat_id) REFERENCES chats(id) ON DELETE CASCADE
);

CREATE TABLE IF NOT EXISTS messages (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    chat_id INTEGER NOT NULL,
    sender_id TEXT NOT NULL,
    text TEXT NOT NULL,
    timestamp TIMESTAMP NOT NULL,
    FOREIGN KEY (chat_id) REFERENCES chats(id) ON DELETE CASCADE
);

CREATE TABLE IF NOT EXISTS posts (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    user_id TEXT NOT NULL,
    text TEXT NOT NULL DEFAULT '',
    image_url TEXT DEFAULT '',
    video_url TEXT DEFAULT '',
    thumbnail_url TEXT DEFAULT '',
    media_type TEXT CHECK(media_type IN ('image', 'video') OR media_type IS NULL),
    comments_count INTEGER DEFAULT 0,
    created_at TIMESTAMP NOT NULL
);

CREATE TABLE IF NOT EXISTS highlights (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    user_id TEXT NOT NULL,
    title TEXT NOT NULL,
    video_url TEXT DEFAULT '',
    thumbnail_url TEXT DEFAULT '',
    upvotes INTEGER DEFAULT 0,
    comments_count INTEGER DEFAULT 0,
    points_awarded INTEGER NOT NULL DEFAULT 0,
    created_at TIMESTAMP NOT NULL
);

CREATE TABLE IF NOT EXISTS highlight_likes (
    highlight_id INTEGER NOT NULL,
    uid TEXT NOT NULL,
    PRIMARY KEY (highlight_id, uid),
    FOREIGN KEY (highlight_id) REFERENCES highlights(id) ON DELETE CASCADE
);

CREATE TABLE IF NOT EXISTS highlight_comments (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    highlight_id INTEGER NOT NULL,
    user_id TEXT NOT NULL,
    text TEXT NOT NULL,
    points_awarded INTEGER NOT NULL DEFAULT 0,
    created_at TIMESTAMP NOT NULL,
    FOREIGN KEY (highlight_id) REFERENCES highlights(id) ON DELETE CASCADE
);

CREATE INDEX IF NOT EXISTS idx_chat_participants_uid ON chat_participants(uid);
CREATE INDEX IF NOT EXISTS idx_messages_chat_time ON messages(chat_id, timestamp);
CREATE INDEX IF NOT EXISTS idx_posts_user_time ON posts(user_id, created_at);
CREATE INDEX IF NOT EXISTS idx_highlights_user ON highlights(user_id);
CREATE INDEX IF NOT EXISTS idx_highlights_upvotes ON highlights(upvotes);
CREATE INDEX IF NOT EXISTS idx_highlight_comments ON highlight_comments(highlight_id, created_at);
CREATE INDEX IF NOT EXISTS idx_users_points ON users(points);
"""


def init_db(db_path: str = DB_PATH) -> None:
    """Initialize the database, creating tables if they don't exist."""
    directory = os.path.dirname(db_path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    with get_connection(db_path) as conn:
        conn.executescript(SCHEMA_SQL)


@contextmanager
def get_connection(db_path: str = DB_PATH):
    """Context manager for database connections."""
    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    try:
        yield conn
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()
