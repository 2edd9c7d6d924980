"""Inline storage backend: validate, shrink and wrap the image as a data URI.

The resulting string is stored directly in a document field, so no external
host is involved.  This backend never raises for pipeline failures; every
outcome is a :class:`StoreResult`, letting callers render errors inline.
"""

from __future__ import annotations

import asyncio

from src.config.settings import Settings
from src.interfaces.media_store import IMediaStore
from src.models.media import MediaInput, StoreResult
from src.services.image_normalizer import ImageNormalizer
from src.services.media_validator import validate_media
from src.services.payload_encoder import encode_data_uri
from src.utils.errors import MediaPipelineError
from src.utils.logging import get_logger


class EmbeddedMediaStore(IMediaStore):
    """Stores images as compressed base64 data URIs.

    Bounding box, quality and size limit come from ``Settings``
    (400 x 400, 0.7 and 5 MiB by default).
    """

    def __init__(self, settings: Settings, normalizer: ImageNormalizer | None = None) -> None:
        self._settings = settings
        self._normalizer = normalizer or ImageNormalizer()
        self._logger = get_logger(__name__)

    async def store(
        self,
        media: MediaInput,
        *,
        owner_id: str | None = None,
        cancel: asyncio.Event | None = None,
    ) -> StoreResult:
        backend = self.get_backend_name()
        try:
            validate_media(media, max_bytes=self._settings.media_max_bytes)
            normalized = await self._normalizer.normalize(
                media.data,
                max_width=self._settings.media_max_width,
                max_height=self._settings.media_max_height,
                quality=self._settings.media_quality,
                cancel=cancel,
            )
            payload = encode_data_uri(normalized.data, normalized.content_type)
        except MediaPipelineError as exc:
            self._logger.warning(
                "embedded_store_failed",
                filename=media.filename,
                error_type=type(exc).__name__,
                error=str(exc),
            )
            return StoreResult.failed(backend, exc)
        except Exception as exc:
            self._logger.error("embedded_store_error", filename=media.filename, error=str(exc))
            return StoreResult.failed(backend, f"Compression failed: {exc}")

        self._logger.info(
            "embedded_store_complete",
            filename=media.filename,
            owner_id=owner_id,
            width=normalized.width,
            height=normalized.height,
            payload_chars=len(payload.data_uri),
        )
        return StoreResult.ok(backend, payload.data_uri)

    def get_backend_name(self) -> str:
        return "embedded"

    def is_available(self) -> bool:
        return True
