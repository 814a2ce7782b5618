import logging
import time
import uuid
from dataclasses import dataclass
from typing import Optional

import cloudinary
import cloudinary.uploader
import cloudinary.utils
from cloudinary.exceptions import Error as CloudinaryError

from app.core.config import Settings

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """Raised when the object storage provider rejects or fails a call."""


@dataclass
class StoredFile:
    url: str
    public_id: str
    resource_type: str = "raw"
    format: Optional[str] = None


class StorageService:

    def __init__(self, settings: Settings):
        self.signed_url_ttl = settings.SIGNED_URL_EXPIRE_SECONDS
        self.max_image_bytes = settings.MAX_IMAGE_UPLOAD_MB * 1024 * 1024
        self.max_content_bytes = settings.MAX_CONTENT_UPLOAD_MB * 1024 * 1024
        cloudinary.config(
            cloud_name=settings.CLOUDINARY_CLOUD_NAME,
            api_key=settings.CLOUDINARY_API_KEY,
            api_secret=settings.CLOUDINARY_API_SECRET,
            secure=True,
        )

    def upload(self, file: bytes, folder: str, resource_type: str = "auto") -> StoredFile:
        try:
            result = cloudinary.uploader.upload(file, folder=folder, resource_type=resource_type)
        except CloudinaryError as e:
            logger.error(f"Upload to '{folder}' failed: {e}")
            raise StorageError("Failed to upload file to storage") from e
        return StoredFile(
            url=result["secure_url"],
            public_id=result["public_id"],
            resource_type=result.get("resource_type", "raw"),
            format=result.get("format"),
        )

    def upload_image(self, file: bytes, folder: str) -> StoredFile:
        try:
            result = cloudinary.uploader.upload(
                file,
                folder=folder,
                resource_type="image",
                public_id=f"{folder}-{int(time.time())}-{uuid.uuid4().hex[:9]}",
                transformation=[{"width": 800, "height": 450, "crop": "fill", "quality": "auto:good"}],
            )
        except CloudinaryError as e:
            logger.error(f"Image upload to '{folder}' failed: {e}")
            raise StorageError("Failed to upload image to storage") from e
        return StoredFile(
            url=result["secure_url"],
            public_id=result["public_id"],
            resource_type="image",
            format=result.get("format"),
        )

    def destroy(self, public_id: str, resource_type: str = "image") -> None:
        try:
            cloudinary.uploader.destroy(public_id, resource_type=resource_type)
        except CloudinaryError as e:
            logger.warning(f"Could not delete '{public_id}' from storage: {e}")

    def signed_download_url(self, public_id: str, file_format: Optional[str], resource_type: str = "raw") -> str:
        return cloudinary.utils.private_download_url(
            public_id,
            file_format,
            resource_type=resource_type,
            type="upload",
            expires_at=int(time.time()) + self.signed_url_ttl,
        )
