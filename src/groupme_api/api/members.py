"""Group membership operations for GroupMe."""

from __future__ import annotations

from typing import Any

from ..core.logger import get_logger
from ..core.models import ApiResponse, GroupMember
from .base import GroupMeApiMixin

logger = get_logger("api.members")


class GroupMeMembersMixin(GroupMeApiMixin):
    """Mixin providing membership operations."""

    def add_members_to_group(
        self, group_id: str | int, members: list[dict[str, Any]]
    ) -> ApiResponse:
        """Add members to a group.

        Each member needs a ``nickname`` and one of ``user_id``,
        ``phone_number`` or ``email``; an optional ``guid`` correlates results.

        Returns:
            ApiResponse with a ``results_id`` for get_add_members_to_group_result.
        """
        return self._post(f"/groups/{group_id}/members/add", {"members": members})

    def get_add_members_to_group_result(self, group_id: str | int, guid: str) -> ApiResponse:
        """Get the membership results of an add request."""
        return self._get(f"/groups/{group_id}/members/results/{guid}")

    def update_my_group_membership(self, group_id: str | int, nickname: str) -> ApiResponse:
        """Update your nickname in a group, truncated to the nickname limit."""
        payload = {"membership": {"nickname": nickname[: self.limits.max_nickname]}}
        return self._post(f"/groups/{group_id}/memberships/update", payload)

    def get_group_members(self, group: str | int) -> list[GroupMember]:
        """Get all members of a group.

        Args:
            group: Group id or group name.

        Returns:
            Group members, or an empty list if the group cannot be loaded.
        """
        result = self.get_group_details(group)
        details = result.response if isinstance(result.response, dict) else {}
        members = details.get("members")
        if not isinstance(members, list):
            return []
        return [GroupMember.from_dict(m) for m in members if isinstance(m, dict)]

    def remove_group_member(self, group_id: str | int, membership_id: str) -> ApiResponse:
        """Remove a member (or yourself) from a group.

        Args:
            group_id: Group id.
            membership_id: Membership id of the member (``GroupMember.id``).
        """
        return self._post(f"/groups/{group_id}/members/{membership_id}/remove")

    def get_group_member_id(
        self,
        group_id: str | int,
        member_name: str,
        case_sensitive: bool = False,
    ) -> str | None:
        """Look up a member's user id by nickname.

        Returns:
            User id, or None if no member has that nickname.
        """
        wanted = member_name if case_sensitive else member_name.lower()
        for member in self.get_group_members(group_id):
            nickname = member.nickname if case_sensitive else member.nickname.lower()
            if nickname == wanted:
                return member.user_id
        return None
