"""GroupMe API client library.

A client for the GroupMe HTTP API with:
- Typed operations for groups, direct messages, bots, users and images
- Optional TTL response cache for GET requests
- Message helpers for attachments, emoji, mentions and long messages

Example:
    ```python
    from groupme_api import GroupMeClient

    client = GroupMeClient("your-token")
    for group in client.get_groups().response:
        print(group["name"])
    ```
"""

from importlib.metadata import PackageNotFoundError, version

from .api import GroupMeClient, create_groupme_client
from .core import (
    ApiResponse,
    ClientConfig,
    GroupMeAPIError,
    GroupMeDecodeError,
    GroupMeError,
    GroupMember,
    GroupMeTransportError,
    RequestDispatcher,
    ResponseCache,
    get_logger,
    setup_logging,
)
from .messaging import (
    EmojiCatalog,
    MentionResolver,
    filter_attachments,
    split_message,
)

__all__ = [
    "__version__",
    "GroupMeClient",
    "create_groupme_client",
    "ClientConfig",
    "ApiResponse",
    "GroupMember",
    "RequestDispatcher",
    "ResponseCache",
    "GroupMeError",
    "GroupMeTransportError",
    "GroupMeDecodeError",
    "GroupMeAPIError",
    "EmojiCatalog",
    "MentionResolver",
    "filter_attachments",
    "split_message",
    "get_logger",
    "setup_logging",
]

try:  # pragma: no cover - best-effort during development
    __version__ = version("groupme-api")
except PackageNotFoundError:  # pragma: no cover
    __version__ = "0.0.0"
