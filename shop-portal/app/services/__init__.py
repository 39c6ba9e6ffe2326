# Service modules

from .portal import PortalService, PortalDataSource
from .portal_client import PortalClient
from .uploads import MediaUploadGateway, build_public_id

__all__ = [
    "PortalService",
    "PortalDataSource",
    "PortalClient",
    "MediaUploadGateway",
    "build_public_id",
]
