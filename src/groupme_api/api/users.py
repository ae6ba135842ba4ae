"""User account operations for GroupMe."""

from __future__ import annotations

from typing import Any

from ..core.models import ApiResponse
from .base import GroupMeApiMixin


class GroupMeUsersMixin(GroupMeApiMixin):
    """Mixin providing operations on the authenticated user."""

    def get_my_details(self) -> ApiResponse:
        """Get details about the authenticated user."""
        return self._get("/users/me")

    def update_my_details(self, payload: dict[str, Any]) -> ApiResponse:
        """Update attributes of your own account.

        Args:
            payload: Any of ``avatar_url``, ``name``, ``email``, ``zip_code``.
        """
        return self._post("/users/update", payload)

    def enable_sms_mode(self, duration: int, registration_id: str = "") -> ApiResponse:
        """Enable SMS mode for ``duration`` hours (at most 48).

        Args:
            duration: Number of hours.
            registration_id: Push notification token to suppress while SMS
                mode is on. If omitted, both SMS and push are delivered.
        """
        payload = {"duration": duration, "registration_id": registration_id}
        return self._post("/users/sms_mode", payload)

    def disable_sms_mode(self) -> ApiResponse:
        """Disable SMS mode."""
        return self._post("/users/sms_mode/delete")
