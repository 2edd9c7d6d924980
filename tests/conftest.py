"""Shared pytest fixtures for the media pipeline test suite."""

from __future__ import annotations

import io
from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest
from PIL import Image

from src.config.settings import Settings
from src.models.media import MediaInput

# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------


def make_settings(**overrides: Any) -> Settings:
    """Build a Settings instance that ignores the developer's environment.

    Every field the pipeline reads is pinned, so a local ``.env`` file or
    exported ``CLOUDINARY_*`` variables never leak into a test.
    """
    defaults: dict[str, Any] = {
        "media_max_bytes": 5 * 1024 * 1024,
        "media_max_width": 400,
        "media_max_height": 400,
        "media_quality": 0.7,
        "storage_backend": "embedded",
        "storage_fallback_to_embedded": True,
        "upload_base_url": "http://uploads.test",
        "upload_url": "",
        "cloudinary_cloud_name": "",
        "cloudinary_upload_preset": "",
        "cloudinary_resource_type": "auto",
        "cloudinary_api_base": "https://api.cloudinary.com/v1_1",
        "cloudinary_accept_documents": False,
        "app_env": "test",
        "log_level": "WARNING",
    }
    defaults.update(overrides)
    return Settings(**defaults)


# ---------------------------------------------------------------------------
# Image bytes
# ---------------------------------------------------------------------------


def make_image_bytes(
    width: int = 64,
    height: int = 48,
    fmt: str = "PNG",
    color: tuple[int, int, int] = (200, 40, 90),
    mode: str = "RGB",
) -> bytes:
    """Render a solid-colour image and return its encoded bytes."""
    fill: Any = color if mode == "RGB" else (*color, 128)
    img = Image.new(mode, (width, height), color=fill)
    buf = io.BytesIO()
    img.save(buf, format=fmt)
    return buf.getvalue()


def make_media(
    data: bytes | None = None,
    content_type: str = "image/png",
    filename: str = "avatar.png",
) -> MediaInput:
    return MediaInput.from_bytes(
        make_image_bytes() if data is None else data,
        content_type,
        filename=filename,
    )


@pytest.fixture
def png_media() -> MediaInput:
    """A small 64x48 PNG upload."""
    return make_media()


@pytest.fixture
def large_png_media() -> MediaInput:
    """A 1600x1200 PNG upload, well over the default bounding box."""
    return make_media(make_image_bytes(1600, 1200), filename="large.png")


@pytest.fixture
def image_file(tmp_path: Path) -> Path:
    path = tmp_path / "avatar.png"
    path.write_bytes(make_image_bytes(800, 600))
    return path


# ---------------------------------------------------------------------------
# HTTP
# ---------------------------------------------------------------------------


def make_response(
    status_code: int = 200,
    json_body: Any | None = None,
    text: str | None = None,
    url: str = "http://uploads.test/api/upload/profile",
) -> httpx.Response:
    """Build a real ``httpx.Response`` bound to a POST request."""
    request = httpx.Request("POST", url)
    if json_body is not None:
        return httpx.Response(status_code, json=json_body, request=request)
    return httpx.Response(status_code, text=text or "", request=request)


def mock_http_client(
    response: httpx.Response | None = None, side_effect: Any = None
) -> MagicMock:
    """Return a stand-in ``httpx.AsyncClient`` whose ``post`` is an AsyncMock."""
    client = MagicMock(spec=httpx.AsyncClient)
    client.post = AsyncMock(return_value=response, side_effect=side_effect)
    return client
