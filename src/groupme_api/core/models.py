"""Response models shared by the dispatcher and the API client."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, Field

from .exceptions import GroupMeAPIError, GroupMeDecodeError


class ResponseMeta(BaseModel):
    """The ``meta`` envelope GroupMe attaches to JSON responses.

    Attributes:
        code: Status code reported by the service.
        errors: Error messages (empty on success).
    """

    code: int = 0
    errors: list[str] = Field(default_factory=list)


class ApiResponse(BaseModel):
    """Decoded GroupMe API response.

    Attributes:
        meta: Response envelope, None when the body carried none.
        response: The ``response`` member of the envelope, or the whole
            decoded body when it had no envelope.
        status_code: HTTP status (the original status for cached bodies).
        cached: Whether the body was served from the response cache.
        raw: The decoded body as received.
    """

    meta: ResponseMeta | None = None
    response: Any = None
    status_code: int | None = None
    cached: bool = False
    raw: Any = None

    @classmethod
    def from_body(
        cls,
        data: Any,
        status_code: int | None = None,
        cached: bool = False,
    ) -> ApiResponse:
        """Build a response from a decoded JSON body.

        Args:
            data: Decoded JSON value (None for an empty body).
            status_code: HTTP status of the response.
            cached: Whether the body was served from the cache.

        Returns:
            ApiResponse instance.

        Raises:
            GroupMeDecodeError: If the envelope code is not an integer.
        """
        if isinstance(data, dict) and isinstance(data.get("meta"), dict):
            meta = data["meta"]
            try:
                code = int(meta.get("code") or 0)
            except (TypeError, ValueError) as e:
                raise GroupMeDecodeError(
                    f"Malformed response envelope code: {meta.get('code')!r}",
                    status_code=status_code,
                    body=str(data),
                ) from e
            return cls(
                meta=ResponseMeta(
                    code=code,
                    errors=[str(err) for err in meta.get("errors") or []],
                ),
                response=data.get("response"),
                status_code=status_code,
                cached=cached,
                raw=data,
            )
        return cls(response=data, status_code=status_code, cached=cached, raw=data)

    @property
    def code(self) -> int | None:
        """Envelope code, falling back to the HTTP status."""
        if self.meta is not None and self.meta.code:
            return self.meta.code
        return self.status_code

    @property
    def ok(self) -> bool:
        """True when the service reported a 2xx status."""
        code = self.code
        if code is None:
            return self.meta is None or not self.meta.errors
        return 200 <= code < 300

    @property
    def errors(self) -> list[str]:
        """Error messages reported by the service."""
        return list(self.meta.errors) if self.meta else []

    def raise_for_error(self) -> ApiResponse:
        """Raise GroupMeAPIError if the service reported an error.

        Returns:
            The response itself, to allow chaining.

        Raises:
            GroupMeAPIError: If the response is not ok.
        """
        if not self.ok:
            raise GroupMeAPIError(code=self.code or -1, errors=self.errors)
        return self


@dataclass
class GroupMember:
    """Member of a GroupMe group.

    Attributes:
        user_id: Account id of the member.
        nickname: Display name within the group.
        id: Membership id.
        image_url: Avatar URL.
        muted: Whether the member muted the group.
        roles: Member roles (``admin``, ``owner``, ``user``).
    """

    user_id: str
    nickname: str
    id: str = ""
    image_url: str = ""
    muted: bool = False
    roles: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> GroupMember:
        """Build a member from a ``members`` entry of a group payload."""
        return cls(
            user_id=str(data.get("user_id", "")),
            nickname=data.get("nickname") or "",
            id=str(data.get("id", "")),
            image_url=data.get("image_url") or "",
            muted=bool(data.get("muted", False)),
            roles=list(data.get("roles") or []),
        )
