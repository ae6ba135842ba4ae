"""Request dispatcher for the GroupMe HTTP API.

This module turns ``(method, endpoint, query, payload, media_upload)`` tuples
into HTTP requests with:
- Access-token query authentication
- JSON bodies for API calls, multipart bodies for image uploads
- Read-through response caching
- Distinct errors for transport and decode failures
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING, Any
from urllib.parse import urlencode

import httpx

from .cache import ResponseCache
from .config import API_BASE_URL, IMAGE_BASE_URL
from .exceptions import GroupMeDecodeError, GroupMeTransportError
from .logger import get_logger
from .models import ApiResponse

if TYPE_CHECKING:
    from .config import ClientConfig

logger = get_logger("dispatcher")


def _query_value(value: Any) -> Any:
    if isinstance(value, bool):
        return "true" if value else "false"
    return value


class RequestDispatcher:
    """Builds and executes single GroupMe API calls.

    Every call looks up the response cache before touching the network. On a
    miss the status code and body are written through the cache (a no-op when caching
    is disabled or the method is not cacheable) and then decoded.

    Example:
        ```python
        dispatcher = RequestDispatcher("token", ResponseCache(enabled=True))
        result = dispatcher.execute("GET", "/groups", {"page": 1, "per_page": 10})
        if result.ok:
            print(result.response)
        ```
    """

    def __init__(
        self,
        access_token: str,
        cache: ResponseCache | None = None,
        *,
        api_base_url: str = API_BASE_URL,
        image_base_url: str = IMAGE_BASE_URL,
        timeout: float = 4.0,
        verify_tls: bool = True,
        user_agent: str = "GroupMe API Client",
        cache_methods: Iterable[str] = ("GET",),
        client: httpx.Client | None = None,
    ):
        """Initialize the dispatcher.

        Args:
            access_token: GroupMe API access token.
            cache: Response cache; a disabled cache is created if omitted.
            api_base_url: Root of the JSON API.
            image_base_url: Root of the image service.
            timeout: Request timeout in seconds.
            verify_tls: Verify TLS certificates. Disabling it is only meant
                for deployments that relied on the legacy unverified mode.
            user_agent: User-Agent header value.
            cache_methods: HTTP methods whose responses are written to the cache.
            client: Pre-built httpx client (tests, custom transports).
        """
        self.access_token = access_token
        self.cache = cache if cache is not None else ResponseCache()
        self.api_base_url = api_base_url.rstrip("/")
        self.image_base_url = image_base_url.rstrip("/")
        self.timeout = timeout
        self.verify_tls = verify_tls
        self.cache_methods = {m.upper() for m in cache_methods}

        if not verify_tls:
            logger.warning("TLS certificate verification is disabled")

        self._owns_client = client is None
        self._client = client or httpx.Client(
            timeout=timeout,
            verify=verify_tls,
            headers={"User-Agent": user_agent},
        )

    @classmethod
    def from_config(
        cls,
        config: ClientConfig,
        cache: ResponseCache | None = None,
    ) -> RequestDispatcher:
        """Create a dispatcher from a ClientConfig.

        Args:
            config: Client configuration.
            cache: Response cache; built from ``config.cache`` if omitted.

        Returns:
            Configured RequestDispatcher.
        """
        if cache is None:
            cache = ResponseCache(
                enabled=config.cache.enabled,
                ttl_seconds=config.cache.ttl_seconds,
            )
        return cls(
            config.access_token,
            cache,
            api_base_url=config.api_base_url,
            image_base_url=config.image_base_url,
            timeout=config.timeout,
            verify_tls=config.verify_tls,
            user_agent=config.user_agent,
            cache_methods=config.cache.methods,
        )

    def __enter__(self) -> RequestDispatcher:
        """Context manager entry."""
        return self

    def __exit__(self, *args: Any) -> None:
        """Context manager exit."""
        self.close()

    def close(self) -> None:
        """Close the HTTP client if this dispatcher created it."""
        if self._owns_client:
            self._client.close()

    def build_url(
        self,
        endpoint: str,
        query: Mapping[str, Any] | None = None,
        media_upload: bool = False,
    ) -> str:
        """Build the full request URL.

        The access token is appended after the caller's query parameters.

        Args:
            endpoint: Endpoint path, e.g. ``/groups``.
            query: Query parameters.
            media_upload: Target the image service instead of the API root.

        Returns:
            Absolute URL including the query string.
        """
        base_url = self.image_base_url if media_upload else self.api_base_url
        params = {k: _query_value(v) for k, v in (query or {}).items() if v is not None}
        params["access_token"] = self.access_token
        return f"{base_url}{endpoint}?{urlencode(params)}"

    def execute(
        self,
        method: str,
        endpoint: str,
        query: Mapping[str, Any] | None = None,
        payload: Mapping[str, Any] | None = None,
        media_upload: bool = False,
    ) -> ApiResponse:
        """Execute one API call.

        Args:
            method: HTTP method.
            endpoint: Endpoint path.
            query: Query parameters.
            payload: Request body (JSON for API calls, form fields/files for uploads).
            media_upload: Send to the image service as multipart form data.

        Returns:
            Decoded ApiResponse. Non-2xx responses are returned, not raised.

        Raises:
            GroupMeTransportError: If the request could not be completed.
            GroupMeDecodeError: If the body is not valid JSON.
        """
        method = method.upper()
        url = self.build_url(endpoint, query, media_upload)
        identity = f"{method} {url}"

        cached = self.cache.get(identity)
        if cached is not None:
            logger.debug("Cache hit", extra={"method": method, "endpoint": endpoint})
            status_code, body = cached
            return self._decode(body, status_code=status_code, cached=True)

        response = self._send(method, url, endpoint, payload, media_upload)
        body = response.text
        if method in self.cache_methods:
            # Entries are (status_code, body) pairs
            self.cache.put(identity, (response.status_code, body))

        if not response.is_success:
            logger.warning(
                "GroupMe API returned an error status",
                extra={
                    "method": method,
                    "endpoint": endpoint,
                    "status_code": response.status_code,
                },
            )

        return self._decode(body, status_code=response.status_code, cached=False)

    def _send(
        self,
        method: str,
        url: str,
        endpoint: str,
        payload: Mapping[str, Any] | None,
        media_upload: bool,
    ) -> httpx.Response:
        """Issue the HTTP request."""
        logger.debug("Sending request", extra={"method": method, "endpoint": endpoint})

        kwargs: dict[str, Any] = {}
        if method != "GET":
            if media_upload:
                data, files = self._split_multipart(payload or {})
                kwargs["data"] = data
                kwargs["files"] = files
            else:
                kwargs["content"] = json.dumps(payload or {})
                kwargs["headers"] = {"Content-Type": "application/json"}

        try:
            return self._client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            logger.error(
                "Request failed",
                extra={"method": method, "endpoint": endpoint, "error": str(e)},
            )
            raise GroupMeTransportError(
                f"{method} {endpoint} failed: {e}", method=method, endpoint=endpoint
            ) from e

    @staticmethod
    def _split_multipart(
        payload: Mapping[str, Any],
    ) -> tuple[dict[str, Any], dict[str, Any]]:
        """Separate file parts from plain form fields."""
        data: dict[str, Any] = {}
        files: dict[str, Any] = {}
        for name, value in payload.items():
            if isinstance(value, (tuple, bytes)) or hasattr(value, "read"):
                files[name] = value
            else:
                data[name] = value
        return data, files

    @staticmethod
    def _decode(body: Any, status_code: int | None, cached: bool) -> ApiResponse:
        """Decode a raw body into an ApiResponse.

        An empty body decodes to an empty result; anything else that is not
        JSON raises GroupMeDecodeError.
        """
        if body is None or not str(body).strip():
            return ApiResponse.from_body(None, status_code=status_code, cached=cached)

        try:
            data = json.loads(body)
        except json.JSONDecodeError as e:
            logger.error(
                "Response body is not valid JSON",
                extra={"status_code": status_code, "error": str(e)},
            )
            raise GroupMeDecodeError(
                f"Invalid JSON in response: {e}", status_code=status_code, body=str(body)
            ) from e

        return ApiResponse.from_body(data, status_code=status_code, cached=cached)
