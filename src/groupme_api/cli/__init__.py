"""CLI module for the GroupMe API client.

This module provides the command-line interface.
"""

from __future__ import annotations

from collections.abc import Sequence

from ..core.exceptions import GroupMeError
from .commands import (
    cmd_bot_post,
    cmd_groups,
    cmd_init,
    cmd_me,
    cmd_members,
    cmd_send,
    cmd_upload,
    console,
    logger,
)
from .parser import build_parser


def main(argv: Sequence[str] | None = None) -> int:
    """CLI entry point.

    Args:
        argv: Optional sequence of CLI arguments (without the program name).

    Returns:
        Process exit code. 0 for success.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        raise SystemExit(0)

    handlers = {
        "init": cmd_init,
        "me": cmd_me,
        "groups": cmd_groups,
        "members": cmd_members,
        "send": cmd_send,
        "bot-post": cmd_bot_post,
        "upload": cmd_upload,
    }

    handler = handlers.get(args.command)
    if handler is None:
        parser.print_help()
        return 1

    try:
        return handler(args)
    except GroupMeError as e:
        logger.debug("Command failed", exc_info=True)
        console.print(f"[red]Error:[/] {e}")
        return 1
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]Error:[/] {e}")
        return 1


__all__ = ["build_parser", "main"]
