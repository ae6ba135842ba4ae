"""Group message operations for GroupMe.

This module provides group message operations:
- Fetch messages with before/after/since cursors
- Send messages, with emoji parsing and long message splitting
- Build mentions attachments from group membership
"""

from __future__ import annotations

from typing import Any

from ..core.logger import get_logger
from ..core.models import ApiResponse
from ..messaging.attachments import filter_attachments
from ..messaging.emoji import extract_emoji
from ..messaging.mentions import ALL_MARKER, MentionResolution
from ..messaging.splitter import MAX_MESSAGE_LENGTH, split_message
from .base import GroupMeApiMixin, ensure_text, make_source_guid

logger = get_logger("api.messages")


def _fit_mentions(
    attachments: list[dict[str, Any]] | None, text: str
) -> list[dict[str, Any]] | None:
    """Keep only mention loci that lie within ``text``."""
    if not attachments:
        return attachments

    limit = len(text.encode("utf-8"))
    fitted = []
    for attachment in attachments:
        if not isinstance(attachment, dict) or attachment.get("type") != "mentions":
            fitted.append(attachment)
            continue

        loci = attachment.get("loci") or []
        pairs = [
            (user_id, locus)
            for user_id, locus in zip(attachment.get("user_ids") or [], loci)
            if locus[0] + locus[1] <= limit
        ]
        if len(pairs) < len(loci):
            logger.warning(
                "Dropped %d mention(s) beyond the first message part", len(loci) - len(pairs)
            )
        if pairs:
            fitted.append(
                {
                    **attachment,
                    "user_ids": [user_id for user_id, _ in pairs],
                    "loci": [locus for _, locus in pairs],
                }
            )
    return fitted


class GroupMeMessagesMixin(GroupMeApiMixin):
    """Mixin providing group message operations."""

    def get_latest_group_messages(self, group_id: str | int, limit: int = 20) -> ApiResponse:
        """Fetch the latest messages of a group (up to 100), newest first."""
        return self._get(f"/groups/{group_id}/messages", {"limit": limit})

    def get_group_messages_before(
        self, group_id: str | int, message_id: str, limit: int = 20
    ) -> ApiResponse:
        """Fetch messages created before the given message id."""
        return self._get(
            f"/groups/{group_id}/messages", {"before_id": message_id, "limit": limit}
        )

    def get_group_messages_after(
        self, group_id: str | int, message_id: str, limit: int = 20
    ) -> ApiResponse:
        """Fetch messages created immediately after the given message id."""
        return self._get(
            f"/groups/{group_id}/messages", {"after_id": message_id, "limit": limit}
        )

    def get_group_messages_since(
        self, group_id: str | int, message_id: str, limit: int = 20
    ) -> ApiResponse:
        """Fetch the most recent messages created after the given message id."""
        return self._get(
            f"/groups/{group_id}/messages", {"since_id": message_id, "limit": limit}
        )

    def send_group_message(
        self,
        group_id: str | int,
        text: str | bytes,
        attachments: list[dict[str, Any]] | None = None,
        source_guid: str | None = None,
    ) -> ApiResponse:
        """Send a message to a group.

        Args:
            group_id: Group id.
            text: Message text.
            attachments: Message attachments; entries without a type are dropped.
            source_guid: Client-side unique id, generated if omitted.
        """
        payload = {
            "message": {
                "text": ensure_text(text),
                "source_guid": source_guid or make_source_guid("G", group_id),
                "attachments": filter_attachments(attachments),
            }
        }
        return self._post(f"/groups/{group_id}/messages", payload)

    def parse_group_message(
        self,
        group_id: str | int,
        text: str | bytes,
        source_guid: str | None = None,
    ) -> ApiResponse:
        """Replace ``:name:`` emoji in the text and send it to a group."""
        extraction = extract_emoji(ensure_text(text), self.emoji_catalog)
        return self.send_group_message(
            group_id, extraction.text, extraction.attachments(), source_guid
        )

    def send_long_group_message(
        self,
        group_id: str | int,
        text: str | bytes,
        attachments: list[dict[str, Any]] | None = None,
        delimiter: str = "\n",
    ) -> list[ApiResponse]:
        """Send a message that may exceed the message length limit.

        The text is split with split_large_message and each part is sent as
        its own message. Attachments go with the first part only; mentions
        whose loci end beyond the first part are dropped from it.

        Returns:
            One ApiResponse per part sent.
        """
        parts = self.split_large_message(
            ensure_text(text), delimiter, self.limits.max_message_length
        )
        if len(parts) > 1:
            logger.info("Splitting message for group %s into %d parts", group_id, len(parts))
            attachments = _fit_mentions(attachments, parts[0])

        results = []
        for index, part in enumerate(parts):
            results.append(
                self.send_group_message(group_id, part, attachments if index == 0 else None)
            )
        return results

    @staticmethod
    def split_large_message(
        text: str,
        delimiter: str = "\n",
        max_length: int = MAX_MESSAGE_LENGTH,
    ) -> list[str]:
        """Split a message exceeding ``max_length`` characters into parts."""
        return split_message(text, delimiter, max_length)

    def get_mentions_all_attachment(
        self, target_group: str | int, message: str
    ) -> dict[str, Any] | None:
        """Mention all members of a group if the message starts with ``@all``.

        Returns:
            Mentions attachment, or None.
        """
        if not message.startswith(ALL_MARKER):
            return None
        members = self.get_group_members(target_group)
        return self.mention_resolver.all_members_mention(members, message)

    def resolve_mentions(
        self,
        target_group: str | int,
        names: list[str],
        message: str,
    ) -> MentionResolution:
        """Resolve ``@name`` mentions against the group's current members."""
        members = self.get_group_members(target_group)
        return self.mention_resolver.resolve(members, names, message)

    def get_mentions_attachment(
        self,
        target_group: str | int,
        names: list[str],
        message: str,
    ) -> dict[str, Any] | None:
        """Build a mentions attachment for the named group members.

        Only names that occur in the message as ``@name`` and belong to a
        current member are mentioned.

        Returns:
            Mentions attachment, or None if nobody could be mentioned.
        """
        return self.resolve_mentions(target_group, names, message).attachment()
