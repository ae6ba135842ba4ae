"""Message composition helpers.

- attachments: attachment builders and validation
- emoji: ``:name:`` placeholder extraction
- mentions: ``@name`` / ``@all`` mention resolution
- splitter: long message splitting
"""

from .attachments import (
    EMOJI_PLACEHOLDER,
    AttachmentReport,
    emoji_attachment,
    filter_attachments,
    image_attachment,
    location_attachment,
    mentions_attachment,
    split_attachment,
    validate_attachments,
)
from .emoji import EmojiCatalog, EmojiExtraction, extract_emoji
from .mentions import (
    MentionResolution,
    MentionResolver,
    MentionSpec,
    find_name_positions,
)
from .splitter import MAX_MESSAGE_LENGTH, split_message

__all__ = [
    "EMOJI_PLACEHOLDER",
    "AttachmentReport",
    "emoji_attachment",
    "filter_attachments",
    "image_attachment",
    "location_attachment",
    "mentions_attachment",
    "split_attachment",
    "validate_attachments",
    "EmojiCatalog",
    "EmojiExtraction",
    "extract_emoji",
    "MentionResolution",
    "MentionResolver",
    "MentionSpec",
    "find_name_positions",
    "MAX_MESSAGE_LENGTH",
    "split_message",
]
