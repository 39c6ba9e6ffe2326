"""
Media Store

Narrow capability for putting image bytes into an external image host.
The Cloudinary implementation wraps the official SDK; anything with a
matching ``put`` can stand in for it.
"""

import io
import logging
from typing import Optional, Protocol

import cloudinary.exceptions
import cloudinary.uploader

from .models import ImageTransform, StoredMedia

logger = logging.getLogger(__name__)


class MediaStoreError(Exception):
    """The store rejected or failed to persist an object"""
    pass


class MediaStore(Protocol):
    """Anything that can persist image bytes under a key"""

    def put(self, data: bytes, key: str, transform: ImageTransform) -> StoredMedia:
        ...


class CloudinaryMediaStore:
    """
    Media store backed by Cloudinary.

    Usage:
        store = CloudinaryMediaStore(
            cloud_name="demo",
            api_key="...",
            api_secret="...",
        )
        stored = store.put(data, "1700000000000-photo", ImageTransform())
        print(stored.url)
    """

    def __init__(
        self,
        cloud_name: str,
        api_key: str,
        api_secret: str,
        folder: Optional[str] = None,
        overwrite: bool = True,
    ):
        """
        Initialize the Cloudinary store.

        Args:
            cloud_name: Cloudinary cloud name
            api_key: API key
            api_secret: API secret
            folder: Folder to place uploads in
            overwrite: Replace an existing object with the same public id
        """
        self.cloud_name = cloud_name
        self.folder = folder
        self.overwrite = overwrite
        self._api_key = api_key
        self._api_secret = api_secret

    def put(self, data: bytes, key: str, transform: ImageTransform) -> StoredMedia:
        """
        Upload image bytes.

        Credentials are passed per call so the SDK's global config is never touched.

        Raises:
            MediaStoreError: if Cloudinary rejects the upload
        """
        options = {
            "resource_type": "image",
            "public_id": key,
            "overwrite": self.overwrite,
            "transformation": transform.to_transformation(),
            "cloud_name": self.cloud_name,
            "api_key": self._api_key,
            "api_secret": self._api_secret,
        }
        if self.folder:
            options["folder"] = self.folder

        try:
            result = cloudinary.uploader.upload(io.BytesIO(data), **options)
        except cloudinary.exceptions.Error as e:
            logger.error(f"Cloudinary upload error: {e}")
            raise MediaStoreError(str(e)) from e

        url = result.get("secure_url")
        if not url:
            raise MediaStoreError("Cloudinary response did not include a secure URL")

        logger.info(f"Cloudinary upload successful: {result.get('public_id')}")
        return StoredMedia(
            url=url,
            public_id=result.get("public_id", key),
            width=result.get("width"),
            height=result.get("height"),
            bytes=result.get("bytes"),
        )
