"""Direct message operations for GroupMe.

This module provides direct message operations:
- List chats and fetch messages with cursors
- Send messages
- Like and unlike messages
"""

from __future__ import annotations

from typing import Any

from ..core.logger import get_logger
from ..core.models import ApiResponse
from ..messaging.attachments import filter_attachments
from ..messaging.emoji import extract_emoji
from .base import GroupMeApiMixin, ensure_text, is_numeric_id, make_source_guid

logger = get_logger("api.direct_messages")


class GroupMeDirectMessagesMixin(GroupMeApiMixin):
    """Mixin providing direct message operations.

    Conversation ids have the form ``"<lower user id>+<higher user id>"``.
    """

    def _my_user_id(self) -> str | None:
        result = self.get_my_details()
        if result.ok and isinstance(result.response, dict) and result.response.get("id"):
            return str(result.response["id"])
        logger.error("Could not determine the authenticated user id")
        return None

    def get_other_user_id_from_conversation_id(self, conversation_id: str) -> str | None:
        """Get the other participant of a direct message conversation.

        Args:
            conversation_id: Conversation id (``"123+456"``).

        Returns:
            The other user's id, or None if it cannot be determined.
        """
        user_ids = conversation_id.split("+")
        if len(user_ids) != 2:
            return None
        my_user_id = self._my_user_id()
        if my_user_id is None:
            return None
        return user_ids[1] if my_user_id == user_ids[0] else user_ids[0]

    def get_conversation_id_from_other_user_id(self, other_user_id: str | int) -> str | None:
        """Build the conversation id shared with another user.

        Args:
            other_user_id: The other participant.

        Returns:
            Conversation id, or None if either id is not numeric.
        """
        my_user_id = self._my_user_id()
        if my_user_id is None or not is_numeric_id(my_user_id) or not is_numeric_id(other_user_id):
            return None
        ids = sorted((int(my_user_id), int(other_user_id)))
        return f"{ids[0]}+{ids[1]}"

    def get_direct_message_chats(self, page: int = 1, per_page: int = 10) -> ApiResponse:
        """List direct message chats, most recently updated first."""
        return self._get("/chats", {"page": page, "per_page": per_page})

    def get_latest_direct_messages(self, other_user_id: str, limit: int = 20) -> ApiResponse:
        """Fetch the latest messages exchanged with another user."""
        return self._get("/direct_messages", {"other_user_id": other_user_id, "limit": limit})

    def get_direct_messages_before(self, other_user_id: str, message_id: str) -> ApiResponse:
        """Fetch 20 messages created before the given message id."""
        return self._get(
            "/direct_messages", {"other_user_id": other_user_id, "before_id": message_id}
        )

    def get_direct_messages_since(self, other_user_id: str, message_id: str) -> ApiResponse:
        """Fetch 20 messages created after the given message id."""
        return self._get(
            "/direct_messages", {"other_user_id": other_user_id, "since_id": message_id}
        )

    def send_direct_message(
        self,
        other_user_id: str | int,
        text: str | bytes,
        attachments: list[dict[str, Any]] | None = None,
        source_guid: str | None = None,
    ) -> ApiResponse:
        """Send a direct message.

        Args:
            other_user_id: Recipient.
            text: Message text.
            attachments: Message attachments; entries without a type are dropped.
            source_guid: Client-side unique id, generated if omitted.
        """
        payload = {
            "direct_message": {
                "recipient_id": other_user_id,
                "text": ensure_text(text),
                "source_guid": source_guid or make_source_guid("D", other_user_id),
                "attachments": filter_attachments(attachments),
            }
        }
        return self._post("/direct_messages", payload)

    def parse_direct_message(
        self,
        other_user_id: str | int,
        text: str | bytes,
        source_guid: str | None = None,
    ) -> ApiResponse:
        """Replace ``:name:`` emoji in the text and send it as a direct message."""
        extraction = extract_emoji(ensure_text(text), self.emoji_catalog)
        return self.send_direct_message(
            other_user_id, extraction.text, extraction.attachments(), source_guid
        )

    def like_direct_message(self, other_user_id: str | int, message_id: str) -> ApiResponse | None:
        """Like a direct message.

        Returns:
            ApiResponse, or None if the conversation id cannot be built.
        """
        conversation_id = self.get_conversation_id_from_other_user_id(other_user_id)
        if conversation_id is None:
            return None
        return self._post(f"/messages/{conversation_id}/{message_id}/like")

    def unlike_direct_message(
        self, other_user_id: str | int, message_id: str
    ) -> ApiResponse | None:
        """Unlike a direct message.

        Returns:
            ApiResponse, or None if the conversation id cannot be built.
        """
        conversation_id = self.get_conversation_id_from_other_user_id(other_user_id)
        if conversation_id is None:
            return None
        return self._post(f"/messages/{conversation_id}/{message_id}/unlike")
