"""Upload and settings models for the shop portal"""

from typing import Optional

from .base import CamelModel


class UploadResponse(CamelModel):
    """Response from a successful image upload"""
    success: bool = True
    url: str
    file_name: str
    cloudinary_id: str


class SystemSettings(CamelModel):
    """Branding shown on portal pages"""
    system_name: str
    primary_color: Optional[str] = None
    secondary_color: Optional[str] = None
    logo_url: Optional[str] = None
