"""Shop Portal Configuration"""

import os
from typing import Optional
from functools import lru_cache

from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load environment variables
load_dotenv(os.path.join(os.path.dirname(__file__), "..", "..", "..", "config", ".env"))


class Settings(BaseSettings):
    """Application settings loaded from environment"""

    model_config = SettingsConfigDict(
        env_file="config/.env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Shop Portal"
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 8002

    # Session tokens issued by the auth provider
    session_secret: str = "dev-session-secret-change-me-before-deploying"
    session_algorithm: str = "HS256"
    session_cookie_name: str = "session_token"

    # Cloudinary
    cloudinary_cloud_name: Optional[str] = None
    cloudinary_api_key: Optional[str] = None
    cloudinary_api_secret: Optional[str] = None
    cloudinary_folder: str = "crm-system"

    # Uploads
    upload_max_bytes: int = 5 * 1024 * 1024
    upload_max_dimension: int = 1000

    # Branding served by /api/system-settings
    system_name: str = "My Page"
    primary_color: Optional[str] = None
    secondary_color: Optional[str] = None
    logo_url: Optional[str] = None

    # Redirect targets owned by other parts of the application
    login_url: str = "/login"
    staff_dashboard_url: str = "/dashboard"

    # Query cache
    query_stale_seconds: float = 30.0

    @property
    def cloudinary_configured(self) -> bool:
        """Check if Cloudinary credentials are configured"""
        return all([
            self.cloudinary_cloud_name,
            self.cloudinary_api_key,
            self.cloudinary_api_secret,
        ])


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


settings = get_settings()
