"""Media Store Data Models"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ImageTransform:
    """Server-side image processing requested from the store"""
    width: int = 1000
    height: int = 1000
    crop: str = "limit"
    quality: str = "auto"

    def to_transformation(self) -> list[dict]:
        """Convert to a Cloudinary transformation chain"""
        return [
            {"width": self.width, "height": self.height, "crop": self.crop},
            {"quality": self.quality},
        ]


@dataclass
class StoredMedia:
    """An object persisted by the media store"""
    url: str
    public_id: str
    width: Optional[int] = None
    height: Optional[int] = None
    bytes: Optional[int] = None
