# src/upload_api/config/settings.py
from typing import Optional, Dict
from pydantic import Field, validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    """
    Single source of truth for all application settings.

    Configuration precedence:
    1. Environment variables (highest priority)
    2. .env file (if exists)
    3. Default values in this class (lowest priority)

    Usage:
        from upload_api.config.settings import get_settings
        settings = get_settings()
        bucket_name = settings.s3_bucket_name
    """

    # Application Settings
    app_name: str = Field(
        default="upload-api",
        description="Application name"
    )

    # S3 Configuration. An empty bucket name disables remote storage entirely.
    s3_bucket_name: str = Field(
        default="",
        description="S3 bucket for uploaded files (empty: local storage only)"
    )

    aws_region: str = Field(
        default="us-east-1",
        alias="AWS_DEFAULT_REGION"
    )

    aws_endpoint_url: Optional[str] = Field(
        default=None,
        description="Custom S3 endpoint, e.g. a local emulator"
    )

    aws_access_key_id: Optional[str] = Field(default=None)

    aws_secret_access_key: Optional[str] = Field(default=None)

    # Local fallback storage
    local_upload_path: str = Field(
        default="uploads",
        description="Directory used when S3 is not configured or fails"
    )

    max_file_size: int = Field(
        default=10 * 1024 * 1024,
        description="Largest accepted file in bytes"
    )

    # SharePoint / Microsoft Graph
    sharepoint_tenant_id: Optional[str] = Field(default=None)

    sharepoint_client_id: Optional[str] = Field(default=None)

    sharepoint_client_secret: Optional[str] = Field(default=None)

    sharepoint_site_url: Optional[str] = Field(
        default=None,
        description="SharePoint site URL (informational)"
    )

    sharepoint_timeout: float = Field(
        default=60.0,
        description="Timeout in seconds for Graph content downloads"
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level"
    )

    @validator('s3_bucket_name', 'local_upload_path', pre=True)
    def strip_whitespace(cls, v):
        """Treat whitespace-only values as empty."""
        if isinstance(v, str):
            return v.strip()
        return v

    @validator('log_level')
    def validate_log_level(cls, v):
        """Validate log level is one the logging module understands."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        level = v.upper()
        if level not in valid_levels:
            raise ValueError(f"Invalid log_level: {v}. Must be one of {valid_levels}")
        return level

    @property
    def remote_storage_configured(self) -> bool:
        """True when uploads should be attempted against S3 first."""
        return bool(self.s3_bucket_name)

    @property
    def sharepoint_configured(self) -> bool:
        """True when every credential needed for Graph access is present."""
        return all([
            self.sharepoint_tenant_id,
            self.sharepoint_client_id,
            self.sharepoint_client_secret,
        ])

    def get_environment_dict(self) -> Dict[str, str]:
        """Get configuration as a dictionary of environment variables, secrets masked.

        Returns:
            Dictionary of environment variables
        """
        def mask(value: Optional[str]) -> str:
            return "****" if value else ""

        return {
            'APP_NAME': self.app_name,
            'S3_BUCKET_NAME': self.s3_bucket_name,
            'AWS_DEFAULT_REGION': self.aws_region,
            'AWS_ENDPOINT_URL': self.aws_endpoint_url or '',
            'AWS_ACCESS_KEY_ID': mask(self.aws_access_key_id),
            'AWS_SECRET_ACCESS_KEY': mask(self.aws_secret_access_key),
            'LOCAL_UPLOAD_PATH': self.local_upload_path,
            'MAX_FILE_SIZE': str(self.max_file_size),
            'SHAREPOINT_TENANT_ID': self.sharepoint_tenant_id or '',
            'SHAREPOINT_CLIENT_ID': self.sharepoint_client_id or '',
            'SHAREPOINT_CLIENT_SECRET': mask(self.sharepoint_client_secret),
            'SHAREPOINT_SITE_URL': self.sharepoint_site_url or '',
            'LOG_LEVEL': self.log_level,
        }

    model_config = SettingsConfigDict(
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.
    This ensures we only create one Settings instance per process.
    """
    return Settings()
