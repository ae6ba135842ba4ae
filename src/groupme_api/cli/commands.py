"""CLI command handlers."""

from __future__ import annotations

import argparse
import mimetypes
from pathlib import Path

from rich.console import Console
from rich.table import Table

from ..api import GroupMeClient
from ..core.config import ClientConfig, LoggingConfig
from ..core.logger import get_logger, setup_logging
from ..core.models import ApiResponse
from ..messaging.attachments import image_attachment

logger = get_logger("cli")
console = Console()


def _build_client(args: argparse.Namespace) -> GroupMeClient:
    """Create a client from the common CLI options."""
    if args.config:
        config = ClientConfig.from_file(args.config)
    else:
        config = ClientConfig()

    logging_config = config.logging
    if args.debug:
        logging_config = LoggingConfig(**{**logging_config.model_dump(), "level": "DEBUG"})
    setup_logging(logging_config)

    return GroupMeClient(args.token or "", config=config)


def _report_failure(result: ApiResponse) -> int:
    errors = ", ".join(result.errors) or "unknown error"
    console.print(f"[red]Request failed ({result.code}): {errors}[/]")
    return 1


def _resolve_group_id(client: GroupMeClient, group: str) -> str | None:
    if group.strip().isdigit():
        return group.strip()
    group_id = client.get_group_id_by_name(group)
    if group_id is None:
        console.print(f"[red]Group not found: {group}[/]")
    return group_id


def cmd_init(args: argparse.Namespace) -> int:
    """Write a default configuration file."""
    output = Path(args.output)
    if output.exists() and not args.force:
        console.print(f"[yellow]{output} already exists (use --force to overwrite)[/]")
        return 1

    ClientConfig(access_token="${GROUPME_ACCESS_TOKEN}").to_yaml(output)
    console.print(f"[green]Configuration written to {output}[/]")
    return 0


def cmd_me(args: argparse.Namespace) -> int:
    """Show the authenticated user."""
    with _build_client(args) as client:
        result = client.get_my_details()
        if not result.ok:
            return _report_failure(result)

        user = result.response or {}
        table = Table(title="GroupMe User", show_header=False)
        for key in ("id", "name", "email", "phone_number", "created_at"):
            table.add_row(key, str(user.get(key, "")))
        console.print(table)
    return 0


def cmd_groups(args: argparse.Namespace) -> int:
    """List groups."""
    with _build_client(args) as client:
        if args.former:
            result = client.get_former_groups()
        else:
            result = client.get_groups(args.page, args.per_page)
        if not result.ok:
            return _report_failure(result)

        table = Table(title="Former Groups" if args.former else "Groups")
        table.add_column("ID", style="cyan")
        table.add_column("Name")
        table.add_column("Members", justify="right")
        for group in result.response or []:
            table.add_row(
                str(group.get("id", "")),
                group.get("name") or "",
                str(len(group.get("members") or [])),
            )
        console.print(table)
    return 0


def cmd_members(args: argparse.Namespace) -> int:
    """List members of a group."""
    with _build_client(args) as client:
        members = client.get_group_members(args.group)
        if not members:
            console.print(f"[yellow]No members found for {args.group}[/]")
            return 1

        table = Table(title=f"Members of {args.group}")
        table.add_column("User ID", style="cyan")
        table.add_column("Nickname")
        table.add_column("Roles")
        for member in members:
            table.add_row(member.user_id, member.nickname, ", ".join(member.roles))
        console.print(table)
    return 0


def cmd_send(args: argparse.Namespace) -> int:
    """Send a message to a group."""
    with _build_client(args) as client:
        group_id = _resolve_group_id(client, args.group)
        if group_id is None:
            return 1

        attachments = []
        if args.image:
            attachments.append(image_attachment(args.image))
        if args.mention:
            attachments.append(client.get_mentions_attachment(group_id, args.mention, args.text))
        attachments.append(client.get_mentions_all_attachment(group_id, args.text))
        attachments = [a for a in attachments if a]

        if args.split:
            results = client.send_long_group_message(group_id, args.text, attachments)
        else:
            results = [client.send_group_message(group_id, args.text, attachments)]

        for result in results:
            if not result.ok:
                return _report_failure(result)
        console.print(f"[green]Sent {len(results)} message(s) to group {group_id}[/]")
    return 0


def cmd_bot_post(args: argparse.Namespace) -> int:
    """Post a message as a bot."""
    with _build_client(args) as client:
        result = client.parse_bot_message(args.bot_id, args.text)
        if not result.ok:
            return _report_failure(result)
        console.print("[green]Bot message posted[/]")
    return 0


def cmd_upload(args: argparse.Namespace) -> int:
    """Upload an image and print its URL."""
    path = Path(args.file)
    if not path.exists():
        console.print(f"[red]File not found: {path}[/]")
        return 1

    mime = args.mime or mimetypes.guess_type(path.name)[0] or "application/octet-stream"
    with _build_client(args) as client:
        url = client.upload_image_url(path, mime)
        if url is None:
            console.print("[red]Image upload failed[/]")
            return 1
        console.print(url)
    return 0


__all__ = [
    "cmd_bot_post",
    "cmd_groups",
    "cmd_init",
    "cmd_me",
    "cmd_members",
    "cmd_send",
    "cmd_upload",
]
