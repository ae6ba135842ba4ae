"""GroupMe API client.

This module provides the main GroupMeClient class that combines all API
functionality through mixins.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from ..core.cache import ResponseCache
from ..core.config import ClientConfig
from ..core.dispatcher import RequestDispatcher
from ..core.logger import get_logger
from ..core.models import ApiResponse
from ..messaging.emoji import EmojiCatalog
from ..messaging.mentions import MentionResolver
from .bots import GroupMeBotsMixin
from .direct_messages import GroupMeDirectMessagesMixin
from .groups import GroupMeGroupsMixin
from .images import GroupMeImagesMixin
from .members import GroupMeMembersMixin
from .messages import GroupMeMessagesMixin
from .users import GroupMeUsersMixin

logger = get_logger("api")


class GroupMeClient(
    GroupMeImagesMixin,
    GroupMeBotsMixin,
    GroupMeDirectMessagesMixin,
    GroupMeGroupsMixin,
    GroupMeMembersMixin,
    GroupMeMessagesMixin,
    GroupMeUsersMixin,
):
    """GroupMe API client.

    Provides access to the GroupMe API including:
    - Groups, memberships and group messages
    - Direct messages
    - Bots
    - User account settings
    - Image upload
    - Optional response caching for GET requests

    Example:
        ```python
        with GroupMeClient("your-token") as client:
            client.use_response_caching(True, ttl_seconds=60)

            group_id = client.get_group_id_by_name("Friends")
            text = "@all dinner at 8?"
            mentions = client.get_mentions_all_attachment(group_id, text)
            result = client.send_group_message(group_id, text, [mentions])

            if not result.ok:
                print(result.errors)
        ```
    """

    def __init__(
        self,
        access_token: str = "",
        *,
        config: ClientConfig | None = None,
        dispatcher: RequestDispatcher | None = None,
        emoji_catalog: EmojiCatalog | None = None,
    ):
        """Initialize the GroupMe client.

        Args:
            access_token: GroupMe API token. Overrides the configured token.
            config: Client configuration; read from ``GROUPME_*`` environment
                variables if omitted.
            dispatcher: Pre-built dispatcher (tests, custom transports).
            emoji_catalog: Emoji names for the parse_* methods; built from
                ``config.emoji`` if omitted.
        """
        if config is None:
            config = ClientConfig(**({"access_token": access_token} if access_token else {}))
        elif access_token:
            config = config.model_copy(update={"access_token": access_token})

        self.config = config
        self.limits = config.limits
        self.emoji_catalog = emoji_catalog or EmojiCatalog(config.emoji)
        self.mention_resolver = MentionResolver()
        self.dispatcher = dispatcher or RequestDispatcher.from_config(config)

        if not self.dispatcher.access_token:
            logger.warning("GroupMe client created without an access token")

    @classmethod
    def from_file(cls, path: str | Path) -> GroupMeClient:
        """Create a client from a YAML or JSON configuration file."""
        return cls(config=ClientConfig.from_file(path))

    def __enter__(self) -> GroupMeClient:
        """Context manager entry."""
        return self

    def __exit__(self, *args: Any) -> None:
        """Context manager exit."""
        self.close()

    def close(self) -> None:
        """Close the underlying HTTP client."""
        self.dispatcher.close()

    @property
    def cache(self) -> ResponseCache:
        return self.dispatcher.cache

    def _request(
        self,
        method: str,
        endpoint: str,
        query: dict[str, Any] | None = None,
        payload: dict[str, Any] | None = None,
        media_upload: bool = False,
    ) -> ApiResponse:
        return self.dispatcher.execute(method, endpoint, query, payload, media_upload)

    # Cache management

    def use_response_caching(self, enabled: bool, ttl_seconds: int = 300) -> None:
        """Enable or disable caching of GET responses.

        Args:
            enabled: If True, responses will be cached.
            ttl_seconds: Seconds cached content stays fresh.
        """
        self.cache.configure(enabled, ttl_seconds)

    def clear_cache(self) -> None:
        """Clear the response cache."""
        self.cache.clear()

    def purge_cache(self) -> int:
        """Remove outdated items from the response cache.

        Returns:
            Number of entries removed.
        """
        return self.cache.purge_expired()


def create_groupme_client(
    access_token: str,
    timeout: float = 4.0,
    cache_ttl: int | None = None,
) -> GroupMeClient:
    """Factory function to create a GroupMe client.

    Args:
        access_token: GroupMe API token.
        timeout: HTTP timeout.
        cache_ttl: Enable response caching with this TTL if given.

    Returns:
        Configured GroupMeClient instance.
    """
    config = ClientConfig(access_token=access_token, timeout=timeout)
    client = GroupMeClient(config=config)
    if cache_ttl is not None:
        client.use_response_caching(True, cache_ttl)
    return client
