"""Command-line interface for LockerLink."""

import argparse
import logging
import sqlite3
import sys

from lockerlink.config import USER_TYPES, ConfigError, load_config
from lockerlink.db import init_db
from lockerlink.feed import (
    add_comment,
    can_earn_points,
    create_post,
    delete_comment,
    delete_highlight,
    get_comments,
    get_top_highlights,
    post_count,
    save_highlight,
    toggle_upvote,
)
from lockerlink.format_metrics import format_height, format_touch, format_vertical, format_weight
from lockerlink.mailer import send_welcome_email
from lockerlink.media import UploadError, upload_image, upload_to_cloudinary, upload_video
from lockerlink.messaging import get_chat, get_messages, get_or_create_chat, list_chats, send_message
from lockerlink.models import Highlight, Post, SchemaError, UserProfile
from lockerlink.points import get_leaderboard, get_user_points, get_user_rank
from lockerlink.profile_store import (
    delete_profile,
    get_profile,
    is_profile_complete,
    list_profiles,
    save_profile,
    search_profiles,
    update_profile,
)
from lockerlink.profile_view import calculate_age, filter_athletes, format_profile_card

FORMATTERS = {
    "height": format_height,
    "vertical": format_vertical,
    "weight": format_weight,
    "touch": format_touch,
}

# UserProfile fields settable from create and update
PROFILE_OPTIONS = (
    "username",
    "email",
    "team",
    "sport",
    "city",
    "bio",
    "position",
    "age_group",
    "birth_month",
    "birth_year",
    "height",
    "vertical",
    "weight",
    "block_touch",
    "standing_touch",
    "spike_touch",
    "division",
    "university",
)


def _get_user(uid: str, db_path: str) -> UserProfile:
    user = get_profile(uid, db_path)
    if not user:
        print(f"No profile found for '{uid}'. Create one first:")
        print("  python -m lockerlink profile create --uid UID --name NAME")
        sys.exit(1)
    return user


# --- Command handlers ---

def cmd_format(args):
    print(FORMATTERS[args.kind](args.value))


def cmd_profile_create(args):
    values = {option: getattr(args, option) for option in PROFILE_OPTIONS
              if getattr(args, option) is not None}
    try:
        profile = UserProfile(uid=args.uid, name=args.name, user_type=args.type, **values)
        save_profile(profile, args.config.db_path)
    except SchemaError as e:
        print(f"Invalid profile: {e}")
        sys.exit(1)
    except sqlite3.IntegrityError:
        print(f"A profile with uid '{args.uid}' already exists.")
        sys.exit(1)
    print(f"Profile created ({profile.uid})")

    if args.send_welcome and profile.email:
        try:
            emailjs = args.config.require_emailjs()
        except ConfigError as e:
            print(f"Welcome email not sent: {e}")
            return
        result = send_welcome_email(profile.email, emailjs)
        if result.success:
            print(f"Welcome email sent to {profile.email}")
        else:
            print(f"Welcome email failed ({result.status}): {result.message}")


def cmd_profile_update(args):
    user = _get_user(args.uid, args.config.db_path)
    for option in PROFILE_OPTIONS:
        value = getattr(args, option)
        if value is not None:
            setattr(user, option, value)
    if args.name:
        user.name = args.name
    update_profile(user, args.config.db_path)
    print("Profile updated.")
    print(format_profile_card(user, post_count(user.uid, args.config.db_path)))


def cmd_profile_show(args):
    user = _get_user(args.uid, args.config.db_path)
    print(format_profile_card(user, post_count(user.uid, args.config.db_path)))
    if not is_profile_complete(user):
        print("\nProfile incomplete: add username, team, city, position, sport and age.")


def _print_profile_table(profiles):
    print(f"{'UID':<20}  {'Name':<25}  {'Type':<8}  {'Team':<20}  {'Height'}")
    print("-" * 95)
    for p in profiles:
        print(f"{p.uid:<20}  {p.name:<25}  {p.user_type:<8}  {p.team:<20}  {format_height(p.height)}")


def cmd_profile_list(args):
    profiles = list_profiles(db_path=args.config.db_path)
    if not profiles:
        print("No profiles yet.")
        return
    _print_profile_table(profiles)


def cmd_profile_search(args):
    profiles = search_profiles(args.query, db_path=args.config.db_path)
    if not profiles:
        print(f"No users match '{args.query}'.")
        return
    _print_profile_table(profiles)


def cmd_profile_filter(args):
    athletes = filter_athletes(
        list_profiles(db_path=args.config.db_path),
        city=args.city or "",
        position=args.position or "",
        min_age=args.min_age,
        max_age=args.max_age,
    )
    if not athletes:
        print("No athletes match these filters.")
        return
    print(f"Athletes ({len(athletes)})")
    print(f"{'UID':<20}  {'Name':<25}  {'Age':>3}  {'Position':<18}  {'City':<15}  {'Height'}")
    print("-" * 100)
    for p in athletes:
        age = calculate_age(p.birth_month, p.birth_year)
        print(f"{p.uid:<20}  {p.name:<25}  {age if age is not None else '-':>3}  "
              f"{p.position:<18}  {p.city:<15}  {format_height(p.height)}")


def cmd_profile_delete(args):
    if delete_profile(args.uid, args.config.db_path):
        print(f"Profile {args.uid} deleted.")
    else:
        print(f"No profile found for '{args.uid}'.")
        sys.exit(1)


def cmd_chat_start(args):
    db_path = args.config.db_path
    _get_user(args.uid, db_path)
    other = _get_user(args.other_uid, db_path)
    chat = get_or_create_chat(args.uid, args.other_uid, db_path=db_path)
    print(f"Chat #{chat.id} with {other.name}")


def cmd_chat_list(args):
    chats = list_chats(args.uid, args.config.db_path)
    if not chats:
        print("No conversations yet.")
        return
    for chat in chats:
        preview = chat.last_message or "No messages yet"
        print(f"  [{chat.id}] {chat.other_user_name:<25} {preview[:40]:<40} {chat.updated_at:%Y-%m-%d}")


def cmd_chat_send(args):
    try:
        message_id = send_message(args.chat_id, args.sender, args.text, db_path=args.config.db_path)
    except ValueError as e:
        print(e)
        sys.exit(1)
    if message_id is None:
        print("Nothing to send.")
    else:
        print(f"Sent [#{message_id}]")


def cmd_chat_show(args):
    db_path = args.config.db_path
    chat = get_chat(args.chat_id, db_path)
    if not chat:
        print(f"Chat {args.chat_id} not found.")
        return
    names = {}
    for uid in chat.participants:
        profile = get_profile(uid, db_path)
        names[uid] = profile.name if profile else "Unknown"
    print(" & ".join(names.values()))
    print("=" * 45)
    for message in get_messages(chat.id, db_path):
        print(f"{message.timestamp:%Y-%m-%d %H:%M}  {names.get(message.sender_id, 'Unknown')}: {message.text}")


def _upload(path, resource_type, config):
    try:
        cloudinary = config.require_cloudinary()
        if resource_type == "video":
            return upload_video(path, cloudinary)
        return upload_image(path, cloudinary)
    except (ConfigError, UploadError) as e:
        print(f"Upload failed: {e}")
        sys.exit(1)


def cmd_post_add(args):
    db_path = args.config.db_path
    _get_user(args.uid, db_path)
    post = Post(id=None, user_id=args.uid, text=args.text)
    if args.media:
        resource_type = "video" if args.video else "image"
        uploaded = _upload(args.media, resource_type, args.config)
        post.media_type = resource_type
        if resource_type == "video":
            post.video_url = uploaded.secure_url
        else:
            post.image_url = uploaded.secure_url
    try:
        post_id = create_post(post, db_path)
    except ValueError as e:
        print(e)
        sys.exit(1)
    print(f"Posted [#{post_id}]")


def cmd_highlight_add(args):
    db_path = args.config.db_path
    _get_user(args.uid, db_path)
    video_url = args.url or ""
    if args.file:
        video_url = _upload(args.file, "video", args.config).secure_url
    thumbnail_url = ""
    if args.thumbnail:
        try:
            thumbnail_url = upload_to_cloudinary(args.thumbnail, args.config.require_cloudinary())
        except (ConfigError, UploadError) as e:
            print(f"Thumbnail upload failed: {e}")
            sys.exit(1)
    highlight_id, result = save_highlight(
        Highlight(id=None, user_id=args.uid, title=args.title, video_url=video_url,
                  thumbnail_url=thumbnail_url),
        db_path=db_path,
    )
    print(f"Highlight saved [#{highlight_id}]")
    if result.success:
        print(f"+{result.points_awarded} points")
    else:
        print(result.message)


def cmd_highlight_list(args):
    db_path = args.config.db_path
    highlights = get_top_highlights(args.limit, db_path)
    if not highlights:
        print("No highlights yet.")
        return
    for h in highlights:
        owner = get_profile(h.user_id, db_path)
        badge = f"#{h.rank}" if h.rank else ""
        print(f"  [{h.id}] {badge:<3} {h.title[:35]:<35} {owner.name if owner else 'Unknown':<20} "
              f"{h.upvotes:>5} upvotes  {h.comments_count:>3} comments")


def cmd_highlight_delete(args):
    try:
        deleted = delete_highlight(args.highlight_id, args.requester, args.config.db_path)
    except ValueError as e:
        print(e)
        sys.exit(1)
    if not deleted:
        print(f"Highlight {args.highlight_id} not found.")
        sys.exit(1)
    print(f"Highlight {args.highlight_id} deleted.")


def cmd_highlight_upvote(args):
    db_path = args.config.db_path
    _get_user(args.uid, db_path)
    try:
        liked, upvotes = toggle_upvote(args.highlight_id, args.uid, db_path=db_path)
    except ValueError as e:
        print(e)
        sys.exit(1)
    print(f"{'Upvoted' if liked else 'Upvote removed'} ({upvotes} upvotes)")


def cmd_highlight_comment(args):
    db_path = args.config.db_path
    _get_user(args.uid, db_path)
    try:
        comment_id, result = add_comment(args.highlight_id, args.uid, args.text, db_path=db_path)
    except ValueError as e:
        print(e)
        sys.exit(1)
    print(f"Comment added [#{comment_id}]")
    if result.success:
        print(f"+{result.points_awarded} points")
    else:
        print(result.message)


def cmd_highlight_comments(args):
    db_path = args.config.db_path
    comments = get_comments(args.highlight_id, db_path)
    if not comments:
        print("No comments yet.")
        return
    for comment in comments:
        author = get_profile(comment.user_id, db_path)
        print(f"  [{comment.id}] {author.name if author else 'Unknown'}: {comment.text}")


def cmd_highlight_uncomment(args):
    try:
        deleted = delete_comment(args.comment_id, args.requester, args.config.db_path)
    except ValueError as e:
        print(e)
        sys.exit(1)
    if not deleted:
        print(f"Comment {args.comment_id} not found.")
        sys.exit(1)
    print(f"Comment {args.comment_id} deleted.")


def cmd_points_show(args):
    db_path = args.config.db_path
    user = _get_user(args.uid, db_path)
    if not can_earn_points(user, db_path):
        print("Upload a highlight video to start earning points.")
    rank = get_user_rank(user.uid, db_path)
    print(f"Points: {get_user_points(user.uid, db_path):,}")
    print(f"Rank:   {'#' + str(rank) if rank else 'unranked'}")


def cmd_points_leaderboard(args):
    entries = get_leaderboard(args.limit, args.config.db_path)
    if not entries:
        print("No users with points yet. Be the first!")
        return
    for entry in entries:
        handle = f"@{entry.username}" if entry.username else ""
        print(f"{entry.rank:>4}. {entry.name:<25} {handle:<20} {entry.points:>8,} pts")


def cmd_email_welcome(args):
    try:
        emailjs = args.config.require_emailjs()
    except ConfigError as e:
        print(e)
        sys.exit(1)
    result = send_welcome_email(args.address, emailjs)
    if result.success:
        print(f"Welcome email sent to {args.address}")
    else:
        print(f"Failed to send welcome email ({result.status}): {result.message}")
        sys.exit(1)


# --- Argument parser ---

def _add_profile_options(parser):
    for option in PROFILE_OPTIONS:
        parser.add_argument(f"--{option.replace('_', '-')}", dest=option)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lockerlink",
        description="LockerLink - volleyball profiles, feed and messaging",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- format ---
    format_p = subparsers.add_parser("format", help="Format a stored measurement for display")
    format_p.add_argument("kind", choices=list(FORMATTERS.keys()))
    format_p.add_argument("value", help="Value as stored, e.g. \"6'2\\\"\" or \"180 lbs\"")
    format_p.set_defaults(func=cmd_format)

    # --- profile ---
    profile_parser = subparsers.add_parser("profile", help="Manage profiles")
    profile_sub = profile_parser.add_subparsers(dest="subcommand")

    create_p = profile_sub.add_parser("create", help="Create a profile")
    create_p.add_argument("--uid", required=True)
    create_p.add_argument("--name", required=True)
    create_p.add_argument("--type", choices=list(USER_TYPES), default="athlete")
    create_p.add_argument("--send-welcome", action="store_true", help="Send the welcome email")
    _add_profile_options(create_p)
    create_p.set_defaults(func=cmd_profile_create)

    update_p = profile_sub.add_parser("update", help="Update a profile")
    update_p.add_argument("uid")
    update_p.add_argument("--name")
    _add_profile_options(update_p)
    update_p.set_defaults(func=cmd_profile_update)

    show_p = profile_sub.add_parser("show", help="Show a profile")
    show_p.add_argument("uid")
    show_p.set_defaults(func=cmd_profile_show)

    list_p = profile_sub.add_parser("list", help="List all profiles")
    list_p.set_defaults(func=cmd_profile_list)

    search_p = profile_sub.add_parser("search", help="Find users by name, team, position or city")
    search_p.add_argument("query")
    search_p.set_defaults(func=cmd_profile_search)

    filter_p = profile_sub.add_parser("filter", help="Filter athletes for scouting")
    filter_p.add_argument("--city", help="Exact city")
    filter_p.add_argument("--position", help="Exact position")
    filter_p.add_argument("--min-age", type=int, dest="min_age")
    filter_p.add_argument("--max-age", type=int, dest="max_age")
    filter_p.set_defaults(func=cmd_profile_filter)

    delete_p = profile_sub.add_parser("delete", help="Delete a profile")
    delete_p.add_argument("uid")
    delete_p.set_defaults(func=cmd_profile_delete)

    # --- chat ---
    chat_parser = subparsers.add_parser("chat", help="Direct messages")
    chat_sub = chat_parser.add_subparsers(dest="subcommand")

    start_p = chat_sub.add_parser("start", help="Open a chat with another user")
    start_p.add_argument("uid")
    start_p.add_argument("other_uid")
    start_p.set_defaults(func=cmd_chat_start)

    chats_p = chat_sub.add_parser("list", help="List a user's chats")
    chats_p.add_argument("uid")
    chats_p.set_defaults(func=cmd_chat_list)

    send_p = chat_sub.add_parser("send", help="Send a message")
    send_p.add_argument("chat_id", type=int)
    send_p.add_argument("--as", dest="sender", required=True, help="Sender uid")
    send_p.add_argument("text")
    send_p.set_defaults(func=cmd_chat_send)

    read_p = chat_sub.add_parser("show", help="Show a conversation")
    read_p.add_argument("chat_id", type=int)
    read_p.set_defaults(func=cmd_chat_show)

    # --- post ---
    post_parser = subparsers.add_parser("post", help="Feed posts")
    post_sub = post_parser.add_subparsers(dest="subcommand")

    post_add_p = post_sub.add_parser("add", help="Publish a post")
    post_add_p.add_argument("uid")
    post_add_p.add_argument("text")
    post_add_p.add_argument("--media", help="Image or video file to upload")
    post_add_p.add_argument("--video", action="store_true", help="Upload --media as a video")
    post_add_p.set_defaults(func=cmd_post_add)

    # --- highlight ---
    highlight_parser = subparsers.add_parser("highlight", help="Highlight videos")
    highlight_sub = highlight_parser.add_subparsers(dest="subcommand")

    highlight_add_p = highlight_sub.add_parser("add", help="Submit a highlight")
    highlight_add_p.add_argument("uid")
    highlight_add_p.add_argument("title")
    source = highlight_add_p.add_mutually_exclusive_group(required=True)
    source.add_argument("--file", help="Video file to upload")
    source.add_argument("--url", help="Already hosted video URL")
    highlight_add_p.add_argument("--thumbnail", help="Thumbnail image to upload")
    highlight_add_p.set_defaults(func=cmd_highlight_add)

    highlight_list_p = highlight_sub.add_parser("list", help="Recent highlights, most upvoted first")
    highlight_list_p.add_argument("--limit", type=int, default=25)
    highlight_list_p.set_defaults(func=cmd_highlight_list)

    highlight_delete_p = highlight_sub.add_parser("delete", help="Delete your highlight")
    highlight_delete_p.add_argument("highlight_id", type=int)
    highlight_delete_p.add_argument("--as", dest="requester", required=True, help="Owner uid")
    highlight_delete_p.set_defaults(func=cmd_highlight_delete)

    upvote_p = highlight_sub.add_parser("upvote", help="Upvote a highlight, or undo your upvote")
    upvote_p.add_argument("uid")
    upvote_p.add_argument("highlight_id", type=int)
    upvote_p.set_defaults(func=cmd_highlight_upvote)

    comment_p = highlight_sub.add_parser("comment", help="Comment on a highlight")
    comment_p.add_argument("uid")
    comment_p.add_argument("highlight_id", type=int)
    comment_p.add_argument("text")
    comment_p.set_defaults(func=cmd_highlight_comment)

    comments_p = highlight_sub.add_parser("comments", help="Show a highlight's comments")
    comments_p.add_argument("highlight_id", type=int)
    comments_p.set_defaults(func=cmd_highlight_comments)

    uncomment_p = highlight_sub.add_parser("uncomment", help="Delete your comment")
    uncomment_p.add_argument("comment_id", type=int)
    uncomment_p.add_argument("--as", dest="requester", required=True, help="Author uid")
    uncomment_p.set_defaults(func=cmd_highlight_uncomment)

    # --- points ---
    points_parser = subparsers.add_parser("points", help="Points and leaderboard")
    points_sub = points_parser.add_subparsers(dest="subcommand")

    points_show_p = points_sub.add_parser("show", help="Show a user's points")
    points_show_p.add_argument("uid")
    points_show_p.set_defaults(func=cmd_points_show)

    board_p = points_sub.add_parser("leaderboard", help="Show the leaderboard")
    board_p.add_argument("--limit", type=int, default=100)
    board_p.set_defaults(func=cmd_points_leaderboard)

    # --- email ---
    email_parser = subparsers.add_parser("email", help="Transactional email")
    email_sub = email_parser.add_subparsers(dest="subcommand")

    welcome_p = email_sub.add_parser("welcome", help="Send the welcome email")
    welcome_p.add_argument("address")
    welcome_p.set_defaults(func=cmd_email_welcome)

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if not args.command:
        parser.print_help()
        return

    args.config = load_config()
    init_db(args.config.db_path)

    if hasattr(args, "func"):
        args.func(args)
    elif args.command in ("profile", "chat", "post", "highlight", "points", "email"):
        # Subcommand not specified
        sub = parser._subparsers._group_actions[0].choices[args.command]
        sub.print_help()
    else:
        parser.print_help()
