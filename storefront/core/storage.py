"""
Object storage for uploaded images.

Objects live in named buckets under UPLOAD_DIR and are served back as
public URLs (`{PUBLIC_BASE_URL}/uploads/{bucket}/{key}`).
"""
import logging
import uuid
from pathlib import Path, PurePosixPath

from fastapi import UploadFile

from storefront.core.config import settings
from storefront.core.errors import field_error

logger = logging.getLogger(__name__)

PRODUCT_IMAGES_BUCKET = "product-images"
REVIEW_IMAGES_BUCKET = "review-images"
SELLER_PROFILE_BUCKET = "seller-profile"

MAX_PRODUCT_IMAGE_SIZE = 5 * 1024 * 1024  # 5MB
MAX_REVIEW_IMAGE_SIZE = 5 * 1024 * 1024  # 5MB
MAX_PROFILE_PICTURE_SIZE = 2 * 1024 * 1024  # 2MB

PUBLIC_URL_PREFIX = "/uploads"


class StorageError(Exception):
    pass


class ObjectStorage:
    """Bucketed object store on the local filesystem."""

    def __init__(self, root_path: str | Path, public_base_url: str):
        self.root_path = Path(root_path)
        self.public_base_url = public_base_url.rstrip("/")
        self.root_path.mkdir(parents=True, exist_ok=True)

    def _object_path(self, bucket: str, key: str) -> Path:
        parts = PurePosixPath(key).parts
        if not parts or ".." in parts or PurePosixPath(key).is_absolute():
            raise StorageError(f"Invalid object key: {key}")
        return self.root_path / bucket / Path(*parts)

    def upload(self, bucket: str, key: str, content: bytes) -> str:
        path = self._object_path(bucket, key)
        if path.exists():
            raise StorageError(f"Object already exists: {bucket}/{key}")

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(content)
        except OSError as e:
            if path.exists():
                path.unlink()
            raise StorageError(f"Failed to store {bucket}/{key}: {e}") from e

        logger.info(f"Stored object {bucket}/{key} ({len(content)} bytes)")
        return key

    def remove(self, bucket: str, keys: list[str]):
        for key in keys:
            path = self._object_path(bucket, key)
            try:
                if path.exists():
                    path.unlink()
            except OSError as e:
                raise StorageError(f"Failed to remove {bucket}/{key}: {e}") from e

    def exists(self, bucket: str, key: str) -> bool:
        return self._object_path(bucket, key).exists()

    def public_url(self, bucket: str, key: str) -> str:
        return f"{self.public_base_url}{PUBLIC_URL_PREFIX}/{bucket}/{key}"

    def key_from_url(self, bucket: str, url: str) -> str | None:
        """Recover the object key from a public URL, None if it is not ours."""
        marker = f"/{bucket}/"
        if marker not in url:
            return None
        return url.split(marker, 1)[1] or None


def new_object_key(prefix: str | int, filename: str | None) -> str:
    extension = Path(filename or "").suffix.lower()
    return f"{prefix}/{uuid.uuid4()}{extension}"


def read_image(file: UploadFile, max_size: int, field: str = "images") -> bytes:
    """Read an uploaded image, rejecting non-images and oversized files."""
    if not (file.content_type or "").startswith("image/"):
        raise field_error(field, "Only image files are allowed")

    content = file.file.read()

    if len(content) > max_size:
        max_mb = max_size / 1024 / 1024
        raise field_error(field, f"File too large. Maximum size: {max_mb:g}MB")

    return content


storage = ObjectStorage(settings.UPLOAD_DIR, settings.PUBLIC_BASE_URL)


def get_storage() -> ObjectStorage:
    return storage
