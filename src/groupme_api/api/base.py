"""Shared plumbing for the GroupMe endpoint mixins."""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import TYPE_CHECKING, Any

from ..core.models import ApiResponse, GroupMember

if TYPE_CHECKING:
    from ..core.config import MessageLimitsConfig
    from ..messaging.emoji import EmojiCatalog
    from ..messaging.mentions import MentionResolver


def ensure_text(value: str | bytes) -> str:
    """Return message text as ``str``, decoding bytes as UTF-8 or Latin-1."""
    if isinstance(value, bytes):
        try:
            return value.decode("utf-8")
        except UnicodeDecodeError:
            return value.decode("latin-1")
    return value


def make_source_guid(prefix: str, target: str | int) -> str:
    """Create a client-side message id, e.g. ``G123-20240101120000-1a2b3c4d5e6f7``."""
    return f"{prefix}{target}-{datetime.now():%Y%m%d%H%M%S}-{uuid.uuid4().hex[:13]}"


def is_numeric_id(value: Any) -> bool:
    """Check whether a value looks like a numeric GroupMe id."""
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    return isinstance(value, str) and value.strip().isdigit()


class GroupMeApiMixin:
    """Base for endpoint mixins.

    Mixins should be used with a class that provides:
    - self._request(method, endpoint, query, payload, media_upload) -> ApiResponse
    - self.limits, self.emoji_catalog, self.mention_resolver
    """

    limits: MessageLimitsConfig
    emoji_catalog: EmojiCatalog
    mention_resolver: MentionResolver

    def _request(
        self,
        method: str,
        endpoint: str,
        query: dict[str, Any] | None = None,
        payload: dict[str, Any] | None = None,
        media_upload: bool = False,
    ) -> ApiResponse:
        """Execute an API call. To be implemented by main class."""
        raise NotImplementedError

    def _get(self, endpoint: str, query: dict[str, Any] | None = None) -> ApiResponse:
        return self._request("GET", endpoint, query=query)

    def _post(self, endpoint: str, payload: dict[str, Any] | None = None) -> ApiResponse:
        return self._request("POST", endpoint, payload=payload)

    # Cross-mixin operations, implemented by the users and members mixins

    def get_my_details(self) -> ApiResponse:
        raise NotImplementedError

    def get_group_members(self, group: str | int) -> list[GroupMember]:
        raise NotImplementedError

    def get_group_details(self, group: str | int) -> ApiResponse:
        raise NotImplementedError
