"""
Image upload service with type, size and content validation

Images land in ``UPLOAD_DIR/images`` under a random name and are served by
the static ``/uploads`` mount.
"""

import io
from pathlib import Path
from typing import Any, Dict, Optional
from uuid import uuid4

import aiofiles
import structlog
from PIL import Image

from ngo_admin.core.config import settings
from ngo_admin.core.exceptions import FileSizeError, FileTypeError, FileUploadError

logger = structlog.get_logger()

EXTENSION_MAPPING = {
    "image/jpeg": ".jpg",
    "image/jpg": ".jpg",
    "image/png": ".png",
    "image/gif": ".gif",
    "image/webp": ".webp",
}


def check_image(filename: str, content_type: Optional[str], size: int, scope: Optional[str] = None) -> None:
    """
    Validate declared type and size of an image before it is stored or sent.

    Used both by the upload endpoint and by the admin client, which calls
    it before any network request.

    Raises:
        FileTypeError: content type is not an allowed image type
        FileSizeError: size exceeds the limit for the scope
    """
    allowed = settings.ALLOWED_IMAGE_TYPES
    if not content_type or content_type.lower() not in allowed:
        raise FileTypeError(filename, content_type or "unknown", allowed)

    max_size = settings.max_image_size_for(scope)
    if size > max_size:
        raise FileSizeError(filename, size, max_size)


def verify_image_bytes(filename: str, content: bytes) -> str:
    """Make sure the bytes decode as an image; returns the detected format"""
    try:
        with Image.open(io.BytesIO(content)) as img:
            img.verify()
            return (img.format or "").lower()
    except Exception as e:
        logger.warning("Image content validation failed", filename=filename, error=str(e))
        raise FileUploadError("File is not a valid image", filename=filename, file_type="image") from None


class ImageUploadService:
    """Store validated images on local disk"""

    def __init__(self, upload_dir: Optional[str] = None):
        self.upload_dir = Path(upload_dir or settings.UPLOAD_DIR)
        self.image_dir = self.upload_dir / "images"

    async def save(
        self,
        filename: str,
        content_type: Optional[str],
        content: bytes,
        scope: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Validate and write an uploaded image.

        Args:
            filename: Original client filename, only used for messages
            content_type: Declared MIME type
            content: Raw file bytes
            scope: Optional page scope with its own size limit

        Returns:
            Dictionary with url, filename, size and content_type
        """
        filename = filename or "upload"
        check_image(filename, content_type, len(content), scope)
        verify_image_bytes(filename, content)

        content_type = content_type.lower()
        stored_name = f"{uuid4().hex}{EXTENSION_MAPPING.get(content_type, Path(filename).suffix.lower())}"

        self.image_dir.mkdir(parents=True, exist_ok=True)
        file_path = self.image_dir / stored_name
        try:
            async with aiofiles.open(file_path, "wb") as f:
                await f.write(content)
        except OSError as e:
            logger.error("Failed to write uploaded image", path=str(file_path), error=str(e))
            raise FileUploadError(f"Failed to save file: {e}", filename=filename) from None

        logger.info("Image uploaded", filename=filename, stored_as=stored_name, size=len(content), scope=scope)
        return {
            "url": f"/uploads/images/{stored_name}",
            "filename": stored_name,
            "size": len(content),
            "content_type": content_type,
        }
