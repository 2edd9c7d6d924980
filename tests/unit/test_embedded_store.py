"""Unit tests for EmbeddedMediaStore (src/providers/storage/embedded_store.py)."""

from __future__ import annotations

import asyncio
import io
from unittest.mock import AsyncMock, MagicMock

import pytest
from PIL import Image

from src.models.media import MediaInput
from src.providers.storage.embedded_store import EmbeddedMediaStore
from src.services.image_normalizer import ImageNormalizer
from src.services.payload_encoder import decode_data_uri
from tests.conftest import make_image_bytes, make_media, make_settings


class TestEmbeddedStore:
    @pytest.mark.asyncio
    async def test_large_png_becomes_small_jpeg_data_uri(self, large_png_media: MediaInput) -> None:
        result = await EmbeddedMediaStore(make_settings()).store(large_png_media)

        assert result.success is True
        assert result.backend == "embedded"
        assert result.data.startswith("data:image/jpeg;base64,")

        mime, data = decode_data_uri(result.data)
        assert mime == "image/jpeg"
        img = Image.open(io.BytesIO(data))
        assert img.format == "JPEG"
        assert max(img.size) == 400
        assert img.size == (400, 300)

    @pytest.mark.asyncio
    async def test_settings_drive_bounds(self) -> None:
        store = EmbeddedMediaStore(make_settings(media_max_width=100, media_max_height=100))
        result = await store.store(make_media(make_image_bytes(300, 150)))

        _, data = decode_data_uri(result.data)
        assert Image.open(io.BytesIO(data)).size == (100, 50)

    @pytest.mark.asyncio
    async def test_pdf_rejected_before_decode(self) -> None:
        normalizer = MagicMock(spec=ImageNormalizer)
        normalizer.normalize = AsyncMock()
        store = EmbeddedMediaStore(make_settings(), normalizer=normalizer)

        result = await store.store(make_media(b"%PDF-1.4", "application/pdf", "cv.pdf"))

        assert result.success is False
        assert result.error_type == "InvalidMediaType"
        assert result.error.startswith("Please select an image file")
        normalizer.normalize.assert_not_called()

    @pytest.mark.asyncio
    async def test_too_large(self) -> None:
        media = MediaInput(filename="huge.png", content_type="image/png", file_size=6 * 1024 * 1024)
        result = await EmbeddedMediaStore(make_settings()).store(media)

        assert result.success is False
        assert result.error_type == "MediaTooLarge"
        assert "5 MB" in result.error

    @pytest.mark.asyncio
    async def test_undecodable_bytes(self) -> None:
        media = make_media(b"not really a png", "image/png")
        result = await EmbeddedMediaStore(make_settings()).store(media)

        assert result.success is False
        assert result.error_type == "DecodeError"
        assert result.error.startswith("Failed to load image")

    @pytest.mark.asyncio
    async def test_cancelled(self, png_media: MediaInput) -> None:
        cancel = asyncio.Event()
        cancel.set()
        result = await EmbeddedMediaStore(make_settings()).store(png_media, cancel=cancel)

        assert result.success is False
        assert result.error_type == "OperationCancelled"

    @pytest.mark.asyncio
    async def test_unexpected_error_reported_as_compression_failure(self, png_media: MediaInput) -> None:
        normalizer = MagicMock(spec=ImageNormalizer)
        normalizer.normalize = AsyncMock(side_effect=MemoryError("out of memory"))
        store = EmbeddedMediaStore(make_settings(), normalizer=normalizer)

        result = await store.store(png_media)

        assert result.success is False
        assert result.error == "Compression failed: out of memory"

    def test_always_available(self) -> None:
        store = EmbeddedMediaStore(make_settings())
        assert store.is_available() is True
        assert store.get_backend_name() == "embedded"
