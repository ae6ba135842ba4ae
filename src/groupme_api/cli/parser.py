"""Argument parser for the GroupMe CLI."""

from __future__ import annotations

import argparse


def _add_common(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-c",
        "--config",
        default=None,
        help="Path to configuration file (YAML or JSON)",
    )
    parser.add_argument(
        "--token",
        default=None,
        help="Access token (overrides config and GROUPME_ACCESS_TOKEN)",
    )
    parser.add_argument(
        "-d",
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser.

    Returns:
        ArgumentParser instance
    """
    from .. import __version__

    parser = argparse.ArgumentParser(
        prog="groupme-api",
        description="Command-line access to the GroupMe API",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Generate default config
  groupme-api init -o groupme.yaml

  # List your groups
  groupme-api groups -c groupme.yaml

  # Send a long message, split on newlines
  groupme-api send 1234567 "$(cat notes.txt)" --split
        """,
    )

    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"%(prog)s v{__version__}",
        help="Show program's version number and exit",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    init_parser = subparsers.add_parser("init", help="Generate a default configuration file")
    init_parser.add_argument(
        "-o",
        "--output",
        default="groupme.yaml",
        help="Output file path (default: groupme.yaml)",
    )
    init_parser.add_argument(
        "--force", action="store_true", help="Overwrite an existing file"
    )

    me_parser = subparsers.add_parser("me", help="Show the authenticated user")
    _add_common(me_parser)

    groups_parser = subparsers.add_parser("groups", help="List your groups")
    _add_common(groups_parser)
    groups_parser.add_argument("--page", type=int, default=1, help="Page number")
    groups_parser.add_argument("--per-page", type=int, default=10, help="Groups per page")
    groups_parser.add_argument("--former", action="store_true", help="List former groups")

    members_parser = subparsers.add_parser("members", help="List members of a group")
    _add_common(members_parser)
    members_parser.add_argument("group", help="Group id or name")

    send_parser = subparsers.add_parser("send", help="Send a message to a group")
    _add_common(send_parser)
    send_parser.add_argument("group", help="Group id or name")
    send_parser.add_argument("text", help="Message text")
    send_parser.add_argument(
        "--split", action="store_true", help="Split messages longer than the limit"
    )
    send_parser.add_argument(
        "--mention", action="append", default=[], help="Member name to mention (repeatable)"
    )
    send_parser.add_argument("--image", default=None, help="Image service URL to attach")

    bot_parser = subparsers.add_parser("bot-post", help="Post a message as a bot")
    _add_common(bot_parser)
    bot_parser.add_argument("bot_id", help="Bot id")
    bot_parser.add_argument("text", help="Message text")

    upload_parser = subparsers.add_parser("upload", help="Upload an image")
    _add_common(upload_parser)
    upload_parser.add_argument("file", help="Image file")
    upload_parser.add_argument("--mime", default=None, help="MIME type (guessed if omitted)")

    return parser
