"""Unit tests for src.services.media_validator."""

from __future__ import annotations

import pytest

from src.models.media import MediaInput
from src.services.media_validator import IMAGE_TYPES, MAX_MEDIA_BYTES, validate_media
from src.utils.errors import InvalidMediaType, MediaTooLarge


def _declared(content_type: str, file_size: int) -> MediaInput:
    """Input with a declared size and no payload; validation never reads bytes."""
    return MediaInput(filename="upload", content_type=content_type, file_size=file_size)


class TestTypeCheck:
    @pytest.mark.parametrize("content_type", ["image/png", "image/jpeg", "image/webp", "IMAGE/GIF"])
    def test_image_family_accepted(self, content_type: str) -> None:
        media = _declared(content_type, 1024)
        assert validate_media(media) is media

    def test_pdf_rejected(self) -> None:
        with pytest.raises(InvalidMediaType, match="Please select an image file"):
            validate_media(_declared("application/pdf", 1024))

    @pytest.mark.parametrize("content_type", ["", "image/", "text/plain", "imagepng"])
    def test_malformed_or_foreign_types_rejected(self, content_type: str) -> None:
        with pytest.raises(InvalidMediaType):
            validate_media(_declared(content_type, 10))

    def test_exact_type_in_accepted_list(self) -> None:
        media = _declared("application/pdf", 10)
        assert validate_media(media, accepted_types=IMAGE_TYPES + ("application/pdf",)) is media

    def test_type_checked_before_size(self) -> None:
        with pytest.raises(InvalidMediaType):
            validate_media(_declared("application/pdf", 6 * 1024 * 1024))


class TestSizeCheck:
    def test_limit_is_five_mib(self) -> None:
        assert MAX_MEDIA_BYTES == 5 * 1024 * 1024

    def test_exactly_at_limit_accepted(self) -> None:
        media = _declared("image/png", MAX_MEDIA_BYTES)
        assert validate_media(media) is media

    def test_six_mib_rejected(self) -> None:
        with pytest.raises(MediaTooLarge, match="Image must be smaller than 5 MB") as exc_info:
            validate_media(_declared("image/png", 6 * 1024 * 1024))
        assert "6,291,456 bytes received" in exc_info.value.message

    def test_custom_limit(self) -> None:
        with pytest.raises(MediaTooLarge, match="1,000 bytes"):
            validate_media(_declared("image/png", 1001), max_bytes=1000)

    def test_zero_bytes_passes_validation(self) -> None:
        media = _declared("image/png", 0)
        assert validate_media(media) is media
