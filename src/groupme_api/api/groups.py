"""Group operations for GroupMe.

This module provides group operations:
- Look up groups by id or name
- List current and former groups
- Create, update, destroy, join and rejoin groups
- Leaderboards and likes
"""

from __future__ import annotations

from typing import Any, Literal

from ..core.logger import get_logger
from ..core.models import ApiResponse
from .base import GroupMeApiMixin, is_numeric_id

logger = get_logger("api.groups")

LeaderboardPeriod = Literal["day", "week", "month"]


class GroupMeGroupsMixin(GroupMeApiMixin):
    """Mixin providing group operations."""

    def is_member_of_group(self, group: str | int) -> bool:
        """Check if the authenticated user is a member of a group.

        Args:
            group: Group id (numeric) or group name.

        Returns:
            True if one of the user's active groups matches.
        """
        result = self.get_all_groups()
        if not result.ok or not isinstance(result.response, list):
            return False

        for g in result.response:
            if not isinstance(g, dict):
                continue
            if is_numeric_id(group) and str(g.get("id")) == str(group).strip():
                return True
            if isinstance(group, str) and g.get("name") == group:
                return True
        return False

    def get_group_by_id(self, group_id: str | int) -> ApiResponse:
        """Get a group by its id."""
        return self._get(f"/groups/{group_id}")

    def get_group_by_name(self, name: str) -> ApiResponse:
        """Get a group by its name.

        Ambiguous names are not detected; the first match is returned.

        Returns:
            ApiResponse whose ``response`` is the group, or the group list
            response unchanged if no group has that name.
        """
        result = self.get_all_groups()
        if result.ok and isinstance(result.response, list):
            for group in result.response:
                if isinstance(group, dict) and group.get("name") == name:
                    return result.model_copy(update={"response": group})
        return result

    def get_group_id_by_name(self, name: str) -> str | None:
        """Get a group id by the group name, or None if not found."""
        result = self.get_group_by_name(name)
        if result.ok and isinstance(result.response, dict):
            return str(result.response.get("id"))
        return None

    def get_group_name_by_id(self, group_id: str | int) -> str | None:
        """Get a group name by its id, or None if not found."""
        result = self.get_group_by_id(group_id)
        if result.ok and isinstance(result.response, dict):
            return result.response.get("name")
        return None

    def get_groups(self, page: int = 1, per_page: int = 10) -> ApiResponse:
        """List the authenticated user's active groups."""
        return self._get("/groups", {"page": page, "per_page": per_page})

    def get_all_groups(self) -> ApiResponse:
        """List as many active groups as one request allows."""
        return self.get_groups(1, self.limits.max_groups_per_request)

    def get_former_groups(self) -> ApiResponse:
        """List the groups you have left but can rejoin."""
        return self._get("/groups/former")

    def create_group(
        self,
        name: str,
        description: str = "",
        image_url: str = "",
        share: bool = False,
    ) -> ApiResponse:
        """Create a group.

        Args:
            name: Primary name, truncated to the group name limit.
            description: Subheading, truncated to the description limit.
            image_url: Image service URL.
            share: Create a share URL.
        """
        payload = {
            "name": name[: self.limits.max_group_name],
            "description": description[: self.limits.max_group_description],
            "image_url": image_url,
            "share": bool(share),
        }
        return self._post("/groups", payload)

    def get_group_details(self, group: str | int) -> ApiResponse:
        """Get group details by id (numeric) or by name."""
        if is_numeric_id(group):
            return self.get_group_by_id(str(group).strip())
        if isinstance(group, str):
            return self.get_group_by_name(group)
        return ApiResponse()

    def update_group_details(self, group_id: str | int, payload: dict[str, Any]) -> ApiResponse:
        """Update a group.

        Args:
            group_id: Group id.
            payload: Any of ``name``, ``description``, ``share``,
                ``image_url``, ``office_mode``.
        """
        payload = dict(payload)
        if isinstance(payload.get("name"), str):
            payload["name"] = payload["name"][: self.limits.max_group_name]
        if isinstance(payload.get("description"), str):
            payload["description"] = payload["description"][: self.limits.max_group_description]
        return self._post(f"/groups/{group_id}/update", payload)

    def destroy_group(self, group_id: str | int) -> ApiResponse:
        """Destroy a group."""
        return self._post(f"/groups/{group_id}/destroy")

    def join_group(self, group_id: str | int, share_token: str) -> ApiResponse:
        """Join a shared group."""
        return self._post(f"/groups/{group_id}/join/{share_token}")

    def rejoin_group(self, group_id: str | int) -> ApiResponse:
        """Rejoin a group you previously left."""
        return self._post("/groups/join", {"group_id": group_id})

    def get_leaderboard(
        self, group_id: str | int, period: LeaderboardPeriod = "day"
    ) -> ApiResponse:
        """Get the most liked messages of a period, ranked by likes."""
        if period not in ("day", "week", "month"):
            raise ValueError(f"Invalid leaderboard period: {period}")
        return self._get(f"/groups/{group_id}/likes", {"period": period})

    def get_leaderboard_for_day(self, group_id: str | int) -> ApiResponse:
        return self.get_leaderboard(group_id, "day")

    def get_leaderboard_for_week(self, group_id: str | int) -> ApiResponse:
        return self.get_leaderboard(group_id, "week")

    def get_leaderboard_for_month(self, group_id: str | int) -> ApiResponse:
        return self.get_leaderboard(group_id, "month")

    def get_my_likes(self, group_id: str | int) -> ApiResponse:
        """Fetch the messages you have liked."""
        return self._get(f"/groups/{group_id}/likes/mine")

    def get_my_hits(self, group_id: str | int) -> ApiResponse:
        """Fetch your messages others have liked."""
        return self._get(f"/groups/{group_id}/likes/for_me")
