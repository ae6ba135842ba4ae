"""Mention resolution for group messages.

Mentions are located in the message text and turned into a ``mentions``
attachment. Offsets are UTF-8 byte offsets into the text; on the wire each
span is sent as ``[start, length]``.

Only the first ``@name`` occurrence of each candidate is used. Repeated names,
overlapping names (``@Bob`` inside ``@Bobby``) and duplicate nicknames are
reported as ambiguous rather than resolved.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any

from ..core.logger import get_logger
from ..core.models import GroupMember
from .attachments import mentions_attachment

logger = get_logger("mentions")

ALL_MARKER = "@all"


@dataclass(frozen=True)
class MentionSpec:
    """A mention of one member.

    Attributes:
        member_id: Mentioned user id.
        start: Start byte offset in the UTF-8 encoded text.
        end: End byte offset (exclusive).
    """

    member_id: str
    start: int
    end: int

    @property
    def locus(self) -> list[int]:
        """Wire representation ``[start, length]``."""
        return [self.start, self.end - self.start]


@dataclass
class MentionResolution:
    """Detailed outcome of named mention resolution.

    Attributes:
        mentions: Resolved mentions, in group-member order.
        not_found: Candidate names that do not occur in the text.
        not_in_group: Names found in the text that match no current member.
        ambiguous: Names whose first-match position may be wrong.
    """

    mentions: list[MentionSpec] = field(default_factory=list)
    not_found: list[str] = field(default_factory=list)
    not_in_group: list[str] = field(default_factory=list)
    ambiguous: list[str] = field(default_factory=list)

    def attachment(self) -> dict[str, Any] | None:
        """Build the mentions attachment, or None if nothing was resolved."""
        return mentions_attachment(
            [m.member_id for m in self.mentions],
            [m.locus for m in self.mentions],
        )


def _byte_offset(text: str, index: int) -> int:
    return len(text[:index].encode("utf-8"))


def find_name_positions(
    text: str,
    names: Iterable[str],
    prefix: str = "@",
) -> dict[str, tuple[int, int]]:
    """Locate the first ``prefix + name`` occurrence of each name.

    The search is case-sensitive.

    Args:
        text: Message text.
        names: Candidate names.
        prefix: Marker preceding each name.

    Returns:
        Mapping of found names to ``(start, end)`` byte offsets, in the order
        the names were given.
    """
    positions: dict[str, tuple[int, int]] = {}
    for name in names:
        if not name or name in positions:
            continue
        token = f"{prefix}{name}"
        index = text.find(token)
        if index < 0:
            continue
        start = _byte_offset(text, index)
        positions[name] = (start, start + len(token.encode("utf-8")))
    return positions


class MentionResolver:
    """Builds mentions attachments from group members and message text."""

    def __init__(self, prefix: str = "@"):
        self.prefix = prefix

    def all_members_mention(
        self,
        members: Sequence[GroupMember],
        text: str,
    ) -> dict[str, Any] | None:
        """Mention every member when the text starts with ``@all``.

        Each mention covers the marker itself, so every locus is ``[0, 4]``.

        Args:
            members: Current group members.
            text: Message text.

        Returns:
            Mentions attachment, or None if the marker is absent or the
            group has no members.
        """
        if not text.startswith(ALL_MARKER):
            return None

        span = len(ALL_MARKER)
        return mentions_attachment(
            [m.user_id for m in members],
            [[0, span] for _ in members],
        )

    def resolve(
        self,
        members: Sequence[GroupMember],
        names: Sequence[str],
        text: str,
    ) -> MentionResolution:
        """Resolve named mentions and report what could not be resolved.

        Args:
            members: Current group members.
            names: Member names the caller wants to mention.
            text: Message text.

        Returns:
            MentionResolution.
        """
        result = MentionResolution()
        positions = find_name_positions(text, names, self.prefix)
        result.not_found = [n for n in dict.fromkeys(names) if n and n not in positions]

        member_ids: dict[str, str] = {}
        nickname_counts: dict[str, int] = {}
        for member in members:
            if member.nickname in positions:
                # Later members with the same nickname win, order stays first-seen
                member_ids[member.nickname] = member.user_id
                nickname_counts[member.nickname] = nickname_counts.get(member.nickname, 0) + 1

        result.not_in_group = [n for n in positions if n not in member_ids]

        for name, member_id in member_ids.items():
            start, end = positions[name]
            result.mentions.append(MentionSpec(member_id=member_id, start=start, end=end))

        result.ambiguous = self._find_ambiguous(text, positions, nickname_counts)
        if result.ambiguous:
            logger.warning(
                "Ambiguous mentions resolved by first match: %s",
                ", ".join(result.ambiguous),
            )
        if result.not_in_group:
            logger.debug(
                "Ignored mentions of non-members: %s", ", ".join(result.not_in_group)
            )
        return result

    def named_mentions(
        self,
        members: Sequence[GroupMember],
        names: Sequence[str],
        text: str,
    ) -> dict[str, Any] | None:
        """Mention the named members that belong to the group.

        Args:
            members: Current group members.
            names: Member names the caller wants to mention.
            text: Message text.

        Returns:
            Mentions attachment, or None if no name resolved to a member.
        """
        return self.resolve(members, names, text).attachment()

    def _find_ambiguous(
        self,
        text: str,
        positions: dict[str, tuple[int, int]],
        nickname_counts: dict[str, int],
    ) -> list[str]:
        ambiguous: list[str] = []
        for name, (start, end) in positions.items():
            repeated = text.count(f"{self.prefix}{name}") > 1
            overlapping = any(
                other != name and start < o_end and o_start < end
                for other, (o_start, o_end) in positions.items()
            )
            duplicated = nickname_counts.get(name, 0) > 1
            if repeated or overlapping or duplicated:
                ambiguous.append(name)
        return ambiguous
