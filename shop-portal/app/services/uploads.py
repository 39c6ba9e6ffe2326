"""
Media Upload Gateway

Authorizes and validates a single product image, then forwards it to the
media store. Nothing is stored locally and a failed upload is not retried.
"""

import logging
import re
import time
from typing import Callable, Optional

from starlette.concurrency import run_in_threadpool
from starlette.datastructures import UploadFile

from media import ImageTransform, MediaStore, MediaStoreError

from ..core.errors import BadRequest, Forbidden, ServiceUnavailable, UploadFailed
from ..core.session import STAFF_ROLES, SessionState
from ..models.upload import UploadResponse

logger = logging.getLogger(__name__)

ALLOWED_IMAGE_TYPES = (
    "image/jpeg",
    "image/jpg",
    "image/png",
    "image/gif",
    "image/webp",
)

MAX_UPLOAD_BYTES = 5 * 1024 * 1024


def build_public_id(filename: str, now: Optional[Callable[[], float]] = None) -> str:
    """
    Destination key for an upload: ``<epoch millis>-<filename stem>``.

    The timestamp only avoids collisions between uploads of the same file.
    """
    clock = now or time.time
    stem = (filename or "").rsplit("/", 1)[-1].split(".")[0]
    stem = re.sub(r"[^\w\-]+", "_", stem).strip("_") or "upload"
    return f"{int(clock() * 1000)}-{stem}"


class MediaUploadGateway:
    """
    Upload gateway in front of a media store.

    A gateway without a store has no credentials configured; valid uploads
    then fail with ServiceUnavailable before any network call.
    """

    def __init__(
        self,
        store: Optional[MediaStore],
        allowed_roles: frozenset = STAFF_ROLES,
        allowed_types: tuple[str, ...] = ALLOWED_IMAGE_TYPES,
        max_bytes: int = MAX_UPLOAD_BYTES,
        transform: Optional[ImageTransform] = None,
        clock: Callable[[], float] = time.time,
    ):
        self.store = store
        self.allowed_roles = allowed_roles
        self.allowed_types = allowed_types
        self.max_bytes = max_bytes
        self.transform = transform or ImageTransform()
        self.clock = clock

    def authorize(self, state: SessionState) -> None:
        """Only owners, admins and operators may upload product images"""
        session = state.session if state.is_authenticated else None
        if session is None or not session.has_role(self.allowed_roles):
            logger.warning(
                f"Upload permission denied for user: "
                f"{session.email if session else 'anonymous'}, "
                f"role: {session.role.value if session else None}"
            )
            raise Forbidden("Unauthorized - Admin access required")

    async def upload(self, file: Optional[UploadFile]) -> UploadResponse:
        """
        Validate and forward an image.

        Raises:
            BadRequest: missing file, disallowed type or too large
            ServiceUnavailable: no media store configured
            UploadFailed: the store rejected the upload
        """
        if file is None:
            logger.info("No file in upload request")
            raise BadRequest("No file uploaded")

        logger.info(f"File info: name: {file.filename}, size: {file.size}, type: {file.content_type}")

        if file.content_type not in self.allowed_types:
            logger.info(f"Invalid file type: {file.content_type}")
            raise BadRequest("Invalid file type. Only images are allowed.")

        if file.size is not None and file.size > self.max_bytes:
            logger.info(f"File too large: {file.size}")
            raise BadRequest(self._too_large_message())

        data = await file.read()
        if len(data) > self.max_bytes:
            logger.info(f"File too large: {len(data)}")
            raise BadRequest(self._too_large_message())

        if self.store is None:
            logger.error("Cloudinary environment variables not configured")
            raise ServiceUnavailable("Image upload service not configured")

        public_id = build_public_id(file.filename, now=self.clock)
        try:
            stored = await run_in_threadpool(self.store.put, data, public_id, self.transform)
        except MediaStoreError as e:
            logger.error(f"Cloudinary upload failed: {e}")
            raise UploadFailed("Image upload failed", details=str(e))

        logger.info(f"Upload completed: {stored.url}")
        return UploadResponse(
            success=True,
            url=stored.url,
            file_name=stored.public_id,
            cloudinary_id=stored.public_id,
        )

    def _too_large_message(self) -> str:
        return f"File size too large. Maximum {self.max_bytes // (1024 * 1024)}MB allowed."
