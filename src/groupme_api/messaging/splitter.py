"""Splitting of messages that exceed the maximum message length."""

from __future__ import annotations

MAX_MESSAGE_LENGTH = 1000


def split_message(
    text: str,
    delimiter: str = "\n",
    max_length: int = MAX_MESSAGE_LENGTH,
) -> list[str]:
    """Split a long message into parts of at most ``max_length`` characters.

    The text is cut at every delimiter and the pieces are packed greedily.
    Every part ends with the delimiter, including the last one. A single piece
    that is longer than ``max_length`` is kept whole in a part of its own.

    Args:
        text: Message text.
        delimiter: Separator to split on and to terminate each part with.
        max_length: Maximum part length.

    Returns:
        ``[text]`` unchanged if it already fits, otherwise the parts.
    """
    if not delimiter:
        raise ValueError("delimiter must not be empty")
    if len(text) <= max_length:
        return [text]

    parts: list[str] = []
    current = ""
    for token in text.split(delimiter):
        if current and len(current) + len(token) + len(delimiter) >= max_length:
            parts.append(current)
            current = ""
        current += f"{token}{delimiter}"

    parts.append(current)
    return parts
