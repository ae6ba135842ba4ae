"""Message attachment builders and validation.

GroupMe attachments are plain mappings tagged by a ``type`` field:
- image: ``{"type": "image", "url": ...}``
- location: ``{"type": "location", "name": ..., "lat": ..., "lng": ...}``
- split: ``{"type": "split", "token": ...}``
- emoji: ``{"type": "emoji", "placeholder": ..., "charmap": [[pack, index], ...]}``
- mentions: ``{"type": "mentions", "user_ids": [...], "loci": [[start, length], ...]}``
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from ..core.logger import get_logger

logger = get_logger("attachments")

EMOJI_PLACEHOLDER = "\ufffd"


@dataclass
class AttachmentReport:
    """Result of attachment validation.

    Attributes:
        attachments: Attachments that passed validation, in input order.
        dropped: Number of elements removed.
    """

    attachments: list[dict[str, Any]] = field(default_factory=list)
    dropped: int = 0


def validate_attachments(attachments: Iterable[Any] | None) -> AttachmentReport:
    """Keep only attachments with a non-null ``type``.

    Args:
        attachments: Caller-supplied attachments, possibly None.

    Returns:
        AttachmentReport with the surviving attachments and drop count.
    """
    report = AttachmentReport()
    if attachments is None:
        return report

    for attachment in attachments:
        if isinstance(attachment, Mapping) and attachment.get("type") is not None:
            report.attachments.append(dict(attachment))
        else:
            report.dropped += 1

    if report.dropped:
        logger.warning("Dropped %d attachment(s) without a type", report.dropped)
    return report


def filter_attachments(attachments: Iterable[Any] | None) -> list[dict[str, Any]]:
    """Remove invalid attachments, preserving order."""
    return validate_attachments(attachments).attachments


def image_attachment(url: str) -> dict[str, Any]:
    """Build an image attachment from an image service URL."""
    return {"type": "image", "url": url}


def location_attachment(name: str, lat: float | str, lng: float | str) -> dict[str, Any]:
    """Build a location attachment."""
    return {"type": "location", "name": name, "lat": str(lat), "lng": str(lng)}


def split_attachment(token: str) -> dict[str, Any]:
    """Build a split (bill splitting) attachment."""
    return {"type": "split", "token": token}


def emoji_attachment(
    charmap: list[list[int]],
    placeholder: str = EMOJI_PLACEHOLDER,
) -> dict[str, Any] | None:
    """Build an emoji attachment.

    Args:
        charmap: ``[pack_id, pack_index]`` pairs, one per placeholder in the text.
        placeholder: Character standing in for each emoji.

    Returns:
        Emoji attachment, or None if the charmap is empty.
    """
    if not charmap:
        return None
    return {"type": "emoji", "placeholder": placeholder, "charmap": [list(c) for c in charmap]}


def mentions_attachment(
    user_ids: list[str],
    loci: list[list[int]],
) -> dict[str, Any] | None:
    """Build a mentions attachment.

    Args:
        user_ids: Mentioned user ids.
        loci: ``[start, length]`` pairs, parallel to ``user_ids``.

    Returns:
        Mentions attachment, or None if no user is mentioned.
    """
    if not user_ids:
        return None
    if len(user_ids) != len(loci):
        raise ValueError("user_ids and loci must have the same length")
    return {
        "type": "mentions",
        "user_ids": [str(uid) for uid in user_ids],
        "loci": [list(locus) for locus in loci],
    }
