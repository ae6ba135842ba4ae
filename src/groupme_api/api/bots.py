"""Bot operations for GroupMe.

This module provides bot operations:
- List, create and destroy bots
- Post messages as a bot
"""

from __future__ import annotations

from typing import Any

from ..core.logger import get_logger
from ..core.models import ApiResponse
from ..messaging.attachments import filter_attachments
from ..messaging.emoji import extract_emoji
from .base import GroupMeApiMixin, ensure_text

logger = get_logger("api.bots")


class GroupMeBotsMixin(GroupMeApiMixin):
    """Mixin providing bot operations."""

    def get_my_bots(self) -> ApiResponse:
        """List the bots owned by the authenticated user."""
        return self._get("/bots")

    def get_bot_id_in_group(self, bot_name: str, group_id: str | int) -> str | None:
        """Find the id of a bot by name within a group.

        Args:
            bot_name: Bot name.
            group_id: Group id.

        Returns:
            Bot id, or None if no such bot exists.
        """
        result = self.get_my_bots()
        bots = result.response if isinstance(result.response, list) else []
        for bot in bots:
            if not isinstance(bot, dict):
                continue
            if str(bot.get("group_id")) == str(group_id) and bot.get("name") == bot_name:
                return bot.get("bot_id")
        return None

    def create_bot(
        self,
        bot_name: str,
        group_id: str | int,
        avatar_url: str = "",
        callback_url: str = "",
    ) -> ApiResponse:
        """Create a bot.

        Args:
            bot_name: Name of the bot.
            group_id: Group the bot posts to.
            avatar_url: Avatar image (image service URL).
            callback_url: URL receiving the group's messages.

        Returns:
            ApiResponse with the bot on success.
        """
        payload = {
            "bot": {
                "name": bot_name,
                "group_id": group_id,
                "avatar_url": avatar_url,
                "callback_url": callback_url,
            }
        }
        return self._post("/bots", payload)

    def send_bot_message(
        self,
        bot_id: str,
        text: str | bytes,
        attachments: list[dict[str, Any]] | None = None,
    ) -> ApiResponse:
        """Post a message as a bot.

        Args:
            bot_id: Bot id.
            text: Message text.
            attachments: Message attachments; entries without a type are dropped.

        Returns:
            ApiResponse (the service answers with an empty body on success).
        """
        payload = {
            "bot_id": bot_id,
            "text": ensure_text(text),
            "attachments": filter_attachments(attachments),
        }
        return self._post("/bots/post", payload)

    def parse_bot_message(self, bot_id: str, text: str | bytes) -> ApiResponse:
        """Replace ``:name:`` emoji in the text and post it as a bot."""
        extraction = extract_emoji(ensure_text(text), self.emoji_catalog)
        return self.send_bot_message(bot_id, extraction.text, extraction.attachments())

    def destroy_bot(self, bot_id: str) -> ApiResponse:
        """Destroy a bot."""
        return self._post("/bots/destroy", {"bot_id": bot_id})
