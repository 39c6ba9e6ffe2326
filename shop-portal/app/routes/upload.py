"""Image upload route for catalog management"""

import logging
from fastapi import APIRouter, Depends, Request
from starlette.datastructures import UploadFile

from media import CloudinaryMediaStore, ImageTransform

from ..core.config import settings
from ..core.errors import InternalError, PortalError
from ..core.session import SessionState
from ..models.upload import UploadResponse
from ..security.session_guard import current_session
from ..services.uploads import MediaUploadGateway

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/upload", tags=["Upload"])


def get_upload_gateway() -> MediaUploadGateway:
    """Gateway backed by Cloudinary, or by no store when credentials are missing"""
    store = None
    if settings.cloudinary_configured:
        store = CloudinaryMediaStore(
            cloud_name=settings.cloudinary_cloud_name,
            api_key=settings.cloudinary_api_key,
            api_secret=settings.cloudinary_api_secret,
            folder=settings.cloudinary_folder,
        )

    return MediaUploadGateway(
        store=store,
        max_bytes=settings.upload_max_bytes,
        transform=ImageTransform(
            width=settings.upload_max_dimension,
            height=settings.upload_max_dimension,
        ),
    )


@router.post("", response_model=UploadResponse)
async def upload_image(
    request: Request,
    session: SessionState = Depends(current_session),
    gateway: MediaUploadGateway = Depends(get_upload_gateway),
):
    """
    Upload a product image.

    Expects a multipart form with a single ``file`` field. Only owners,
    admins and operators may upload.
    """
    gateway.authorize(session)

    try:
        form = await request.form()
        file = form.get("file")
        return await gateway.upload(file if isinstance(file, UploadFile) else None)
    except PortalError:
        raise
    except Exception as e:
        logger.exception("Error uploading file")
        raise InternalError("Internal server error", details=str(e))
