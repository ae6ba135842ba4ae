"""Emoji name extraction for message text.

Emoji are written as ``:name:`` in the text. Names known to the catalog are
replaced by the placeholder character and recorded in a charmap, which the
service uses to render the emoji at each placeholder position.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from ..core.logger import get_logger
from .attachments import EMOJI_PLACEHOLDER, emoji_attachment

logger = get_logger("emoji")

EMOJI_NAME_PATTERN = re.compile(r":([A-Za-z0-9_+\-]+):")


@dataclass
class EmojiExtraction:
    """Result of emoji extraction.

    Attributes:
        text: Text with known emoji names replaced by the placeholder.
        charmap: ``[pack_id, pack_index]`` per placeholder, in text order.
        placeholder: Placeholder character used.
    """

    text: str
    charmap: list[list[int]] = field(default_factory=list)
    placeholder: str = EMOJI_PLACEHOLDER

    def attachment(self) -> dict[str, Any] | None:
        """Build the emoji attachment, or None if no emoji was found."""
        return emoji_attachment(self.charmap, self.placeholder)

    def attachments(self) -> list[dict[str, Any]]:
        """The emoji attachment as a list, empty if no emoji was found."""
        attachment = self.attachment()
        return [attachment] if attachment else []


class EmojiCatalog:
    """Lookup table from emoji names to ``(pack_id, pack_index)``."""

    def __init__(self, entries: Mapping[str, tuple[int, int] | list[int]] | None = None):
        self._entries: dict[str, tuple[int, int]] = {}
        for name, value in (entries or {}).items():
            self.add(name, *value)

    def add(self, name: str, pack_id: int, index: int) -> None:
        """Register an emoji name."""
        self._entries[name] = (int(pack_id), int(index))

    def get(self, name: str) -> tuple[int, int] | None:
        return self._entries.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    @classmethod
    def from_yaml(cls, path: str | Path) -> EmojiCatalog:
        """Load a catalog from a YAML mapping of ``name: [pack_id, index]``."""
        with open(path, encoding="utf-8") as handle:
            try:
                data = yaml.safe_load(handle) or {}
            except yaml.YAMLError as exc:
                raise ValueError(f"Invalid YAML in emoji catalog: {exc}") from exc
        if not isinstance(data, dict):
            raise ValueError("Emoji catalog must be a mapping of name to [pack_id, index]")
        return cls(data)


def extract_emoji(
    text: str,
    catalog: EmojiCatalog,
    placeholder: str = EMOJI_PLACEHOLDER,
) -> EmojiExtraction:
    """Replace known ``:name:`` markers with the placeholder.

    Unknown names are left untouched.

    Args:
        text: Message text.
        catalog: Known emoji.
        placeholder: Placeholder character.

    Returns:
        EmojiExtraction with the rewritten text and its charmap.
    """
    charmap: list[list[int]] = []

    def _replace(match: re.Match[str]) -> str:
        entry = catalog.get(match.group(1))
        if entry is None:
            return match.group(0)
        charmap.append(list(entry))
        return placeholder

    new_text = EMOJI_NAME_PATTERN.sub(_replace, text)
    if charmap:
        logger.debug("Extracted %d emoji from message text", len(charmap))
    return EmojiExtraction(text=new_text, charmap=charmap, placeholder=placeholder)
