"""Media pipeline models -- re-exports all public model classes.

Import from ``src.models`` rather than the individual module files.
"""

from __future__ import annotations

from src.models.media import (
    EncodedPayload,
    MediaInput,
    NormalizedImage,
    StoreResult,
    UploadResult,
)

__all__ = [
    "EncodedPayload",
    "MediaInput",
    "NormalizedImage",
    "StoreResult",
    "UploadResult",
]
