"""Utility modules for the media ingestion pipeline.

Available utility modules (all re-exported here for convenience):

- **errors** -- Exception hierarchy rooted at MediaPipelineError; each
  failure kind (validation, decode, cancellation, configuration, network,
  remote rejection) has its own subclass so callers can tell them apart.
- **concurrency** -- asyncio semaphore throttling for fanning out several
  uploads at once.
- **logging** -- structlog setup with a dual-renderer pattern: coloured
  console output in development, structured JSON in production.
- **asset_urls** -- URL builders for stored assets (Drive view links and
  Filestack CDN transforms).
"""

# -- Asset URL helpers ------------------------------------------------------
from src.utils.asset_urls import (
    download_url,
    drive_view_url,
    optimized_image_url,
    pdf_image_url,
    profile_picture_url,
    raw_url,
    social_share_url,
    thumbnail_url,
)

# -- Async concurrency helpers ---------------------------------------------
from src.utils.concurrency import throttled_gather

# -- Exception hierarchy ---------------------------------------------------
from src.utils.errors import (
    ConfigurationError,
    DecodeError,
    InvalidMediaType,
    MediaPipelineError,
    MediaTooLarge,
    MediaValidationError,
    NetworkError,
    OperationCancelled,
    RemoteRejection,
)

# -- Structured logging setup ----------------------------------------------
from src.utils.logging import configure_logging, get_logger

__all__ = [
    "ConfigurationError",
    "DecodeError",
    "InvalidMediaType",
    "MediaPipelineError",
    "MediaTooLarge",
    "MediaValidationError",
    "NetworkError",
    "OperationCancelled",
    "RemoteRejection",
    "configure_logging",
    "download_url",
    "drive_view_url",
    "get_logger",
    "optimized_image_url",
    "pdf_image_url",
    "profile_picture_url",
    "raw_url",
    "social_share_url",
    "thumbnail_url",
    "throttled_gather",
]
