"""Application settings loaded from environment variables via pydantic-settings.

Values come from two sources (in priority order):

  1. Environment variables, e.g. ``CLOUDINARY_CLOUD_NAME=acme``
  2. A ``.env`` file in the working directory (local development)

Field ``cloudinary_cloud_name`` maps to env var ``CLOUDINARY_CLOUD_NAME``.

A ``Settings`` instance is built once at startup and handed to every
storage backend and service constructor.  Nothing in the pipeline reads the
process environment at call time, so tests build ``Settings(**overrides)``
directly.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# 5 MiB -- the largest input the pipeline accepts.
_DEFAULT_MAX_BYTES = 5 * 1024 * 1024


class Settings(BaseSettings):
    """Media pipeline settings.

    Environment variables override defaults. Loaded from .env file when present.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # === Validation / normalisation ===
    media_max_bytes: int = Field(default=_DEFAULT_MAX_BYTES, gt=0)
    media_max_width: int = Field(default=400, gt=0)
    media_max_height: int = Field(default=400, gt=0)
    # Lossy codec quality on the 0-1 scale.
    media_quality: float = Field(default=0.7, gt=0.0, le=1.0)

    # === Backend selection ===
    # One of "embedded", "endpoint", "cloudinary".
    storage_backend: str = "embedded"
    # When the primary backend is remote, fall back to inline encoding on failure.
    storage_fallback_to_embedded: bool = True

    # === Generic upload endpoint ===
    upload_base_url: str = "http://localhost:8000"
    upload_url: str = ""  # Empty = default path /api/upload/profile

    # === Cloudinary asset host ===
    # Empty string = "not configured"; uploads fail fast with ConfigurationError.
    cloudinary_cloud_name: str = ""
    cloudinary_upload_preset: str = ""
    cloudinary_resource_type: str = "auto"
    cloudinary_api_base: str = "https://api.cloudinary.com/v1_1"
    # Admit application/pdf on the asset-host path (CV documents).
    cloudinary_accept_documents: bool = False

    # === App Config ===
    app_env: str = "development"
    log_level: str = "INFO"

    def is_cloudinary_configured(self) -> bool:
        """Return ``True`` when both the cloud name and upload preset are set."""
        return bool(self.cloudinary_cloud_name.strip() and self.cloudinary_upload_preset.strip())
