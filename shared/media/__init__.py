# Media store for uploaded product images

from .store import MediaStore, MediaStoreError, CloudinaryMediaStore
from .models import ImageTransform, StoredMedia

__all__ = [
    "MediaStore",
    "MediaStoreError",
    "CloudinaryMediaStore",
    "ImageTransform",
    "StoredMedia",
]
