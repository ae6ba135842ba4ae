"""Core modules for the GroupMe API client.

This package contains the request pipeline including:
- Configuration management
- Logging utilities
- Response cache
- Request dispatcher
- Response models and exceptions
"""

from .cache import CacheEntry, ResponseCache
from .config import (
    API_BASE_URL,
    IMAGE_BASE_URL,
    CacheConfig,
    ClientConfig,
    LoggingConfig,
    MessageLimitsConfig,
)
from .dispatcher import RequestDispatcher
from .exceptions import (
    GroupMeAPIError,
    GroupMeDecodeError,
    GroupMeError,
    GroupMeTransportError,
)
from .logger import get_logger, setup_logging
from .models import ApiResponse, GroupMember, ResponseMeta

__all__ = [
    # Config
    "API_BASE_URL",
    "IMAGE_BASE_URL",
    "CacheConfig",
    "ClientConfig",
    "LoggingConfig",
    "MessageLimitsConfig",
    # Pipeline
    "CacheEntry",
    "ResponseCache",
    "RequestDispatcher",
    "ApiResponse",
    "ResponseMeta",
    "GroupMember",
    # Errors
    "GroupMeError",
    "GroupMeTransportError",
    "GroupMeDecodeError",
    "GroupMeAPIError",
    # Logging
    "get_logger",
    "setup_logging",
]
