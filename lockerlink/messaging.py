"""Direct messaging: chat discovery, chat creation and messages.

A chat holds exactly two participants. Starting a conversation with someone
you already talk to reopens the existing chat instead of creating another.
"""

import logging
from datetime import datetime
from typing import Optional

from lockerlink.config import DB_PATH
from lockerlink.db import get_connection
from lockerlink.models import Chat, Message

logger = logging.getLogger(__name__)


def _participants(conn, chat_id: int) -> list:
    rows = conn.execute(
        "SELECT uid FROM chat_participants WHERE chat_id = ? ORDER BY slot", (chat_id,)
    ).fetchall()
    return [row["uid"] for row in rows]


def _row_to_chat(conn, row) -> Chat:
    return Chat(
        id=row["id"],
        participants=_participants(conn, row["id"]),
        last_message=row["last_message"] or "",
        updated_at=datetime.fromisoformat(row["updated_at"]),
    )


def get_chat(chat_id: int, db_path: str = DB_PATH) -> Optional[Chat]:
    with get_connection(db_path) as conn:
        row = conn.execute("SELECT * FROM chats WHERE id = ?", (chat_id,)).fetchone()
        if not row:
            return None
        return _row_to_chat(conn, row)


def find_chat(uid: str, other_uid: str, db_path: str = DB_PATH) -> Optional[Chat]:
    """Return the chat both users take part in, if there is one."""
    with get_connection(db_path) as conn:
        row = conn.execute(
            """SELECT c.* FROM chats c
               INNER JOIN chat_participants a ON a.chat_id = c.id AND a.uid = ?
               INNER JOIN chat_participants b ON b.chat_id = c.id AND b.uid = ?
               ORDER BY c.id LIMIT 1""",
            (uid, other_uid),
        ).fetchone()
        if not row:
            return None
        return _row_to_chat(conn, row)


def get_or_create_chat(
    uid: str,
    other_uid: str,
    created_at: Optional[datetime] = None,
    db_path: str = DB_PATH,
) -> Chat:
    """Open the chat between two users, creating it on first contact."""
    if not uid or not other_uid:
        raise ValueError("Both participants are required to start a chat")
    if uid == other_uid:
        raise ValueError("Cannot start a chat with yourself")

    existing = find_chat(uid, other_uid, db_path)
    if existing:
        logger.debug("Reusing chat %s between %s and %s", existing.id, uid, other_uid)
        return existing

    if created_at is None:
        created_at = datetime.now()

    with get_connection(db_path) as conn:
        cursor = conn.execute(
            "INSERT INTO chats (last_message, updated_at) VALUES (?, ?)",
            ("", created_at.isoformat()),
        )
        chat_id = cursor.lastrowid
        conn.executemany(
            "INSERT INTO chat_participants (chat_id, uid, slot) VALUES (?, ?, ?)",
            [(chat_id, uid, 0), (chat_id, other_uid, 1)],
        )

    logger.info("Created chat %s between %s and %s", chat_id, uid, other_uid)
    return Chat(id=chat_id, participants=[uid, other_uid], last_message="", updated_at=created_at)


def list_chats(uid: str, db_path: str = DB_PATH) -> list:
    """Chats the user takes part in, most recently active first."""
    with get_connection(db_path) as conn:
        rows = conn.execute(
            """SELECT c.* FROM chats c
               INNER JOIN chat_participants p ON p.chat_id = c.id
               WHERE p.uid = ?
               ORDER BY c.updated_at DESC, c.id DESC""",
            (uid,),
        ).fetchall()

        chats = []
        for row in rows:
            chat = _row_to_chat(conn, row)
            others = [p for p in chat.participants if p != uid]
            if others:
                user_row = conn.execute(
                    "SELECT name FROM users WHERE uid = ?", (others[0],)
                ).fetchone()
                chat.other_user_name = user_row["name"] if user_row and user_row["name"] else "Unknown"
            else:
                chat.other_user_name = "Unknown"
            chats.append(chat)
        return chats


def send_message(
    chat_id: int,
    sender_uid: str,
    text: str,
    sent_at: Optional[datetime] = None,
    db_path: str = DB_PATH,
) -> Optional[int]:
    """Post a message to a chat. Returns the message ID, or None for blank text."""
    body = (text or "").strip()
    if not body:
        return None
    if sent_at is None:
        sent_at = datetime.now()

    with get_connection(db_path) as conn:
        participants = _participants(conn, chat_id)
        if not participants:
            raise ValueError(f"Chat {chat_id} not found")
        if sender_uid not in participants:
            raise ValueError(f"{sender_uid} is not a participant of chat {chat_id}")

        cursor = conn.execute(
            "INSERT INTO messages (chat_id, sender_id, text, timestamp) VALUES (?, ?, ?, ?)",
            (chat_id, sender_uid, body, sent_at.isoformat()),
        )
        conn.execute(
            "UPDATE chats SET last_message = ?, updated_at = ? WHERE id = ?",
            (body, sent_at.isoformat(), chat_id),
        )
        return cursor.lastrowid


def get_messages(chat_id: int, db_path: str = DB_PATH) -> list:
    """All messages in a chat, oldest first."""
    with get_connection(db_path) as conn:
        rows = conn.execute(
            "SELECT * FROM messages WHERE chat_id = ? ORDER BY timestamp, id",
            (chat_id,),
        ).fetchall()
        return [
            Message(
                id=row["id"],
                chat_id=row["chat_id"],
                sender_id=row["sender_id"],
                text=row["text"],
                timestamp=datetime.fromisoformat(row["timestamp"]),
            )
            for row in rows
        ]
