"""Image service operations for GroupMe.

Images must be uploaded to the image service before they can be attached to
messages or used as avatars.
"""

from __future__ import annotations

from pathlib import Path

from ..core.logger import get_logger
from ..core.models import ApiResponse
from .base import GroupMeApiMixin

logger = get_logger("api.images")


class GroupMeImagesMixin(GroupMeApiMixin):
    """Mixin providing image upload."""

    UPLOAD_IMAGE_URL = "/pictures"

    def upload_image(
        self,
        image: str | Path | bytes,
        mime: str,
        name: str = "",
    ) -> ApiResponse:
        """Upload an image to the image service.

        Args:
            image: Path to the image file, or its content as bytes.
            mime: MIME type of the image (e.g. ``image/png``).
            name: Optional file name sent with the upload.

        Returns:
            ApiResponse whose ``response`` holds the service payload.
        """
        if isinstance(image, bytes):
            content = image
            filename = name or "image"
        else:
            path = Path(image)
            content = path.read_bytes()
            filename = name or path.name

        logger.debug("Uploading image %s (%d bytes)", filename, len(content))
        return self._request(
            "POST",
            self.UPLOAD_IMAGE_URL,
            payload={"file": (filename, content, mime)},
            media_upload=True,
        )

    def upload_image_url(
        self,
        image: str | Path | bytes,
        mime: str,
        name: str = "",
    ) -> str | None:
        """Upload an image and return its image service URL.

        Returns:
            The ``picture_url`` of the uploaded image, or None on failure.
        """
        result = self.upload_image(image, mime, name)
        body = result.response if isinstance(result.response, dict) else {}
        url = (body.get("payload") or {}).get("picture_url")
        if not result.ok or not url:
            logger.error("Image upload failed: %s", result.errors or result.status_code)
            return None
        logger.info("Image uploaded: %s", url)
        return url
