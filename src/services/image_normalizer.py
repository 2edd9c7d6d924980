"""Decode, bounding-box resize and lossy recompression of uploaded images.

The normalizer turns validated image bytes into a small JPEG suitable for
inline storage:

    1. Decode the bytes into a bitmap (EXIF orientation applied).
    2. If the bitmap already fits inside ``max_width`` x ``max_height``,
       keep its size; otherwise scale by
       ``min(max_width / w, max_height / h)`` so the aspect ratio holds.
    3. Re-encode as JPEG at a fixed quality (0.7 by default).

Decode and encode are CPU-bound Pillow calls.  Each runs as a single
``asyncio.to_thread`` call so the event loop stays responsive; the caller's
cancel signal is checked before each of them.  No timeout is applied here.
Every bitmap is created and closed inside one ``normalize`` call.
"""

from __future__ import annotations

import asyncio
import io

from PIL import Image, ImageOps

from src.models.media import NormalizedImage
from src.utils.errors import DecodeError, OperationCancelled
from src.utils.logging import get_logger

DEFAULT_MAX_WIDTH = 400
DEFAULT_MAX_HEIGHT = 400
DEFAULT_QUALITY = 0.7

# Pillow's JPEG encoder accepts 1-95; values above 95 disable most compression.
_JPEG_QUALITY_CEILING = 95

_DECODE_ERRORS = (OSError, SyntaxError, ValueError, Image.DecompressionBombError)


def compute_target_size(
    width: int, height: int, max_width: int, max_height: int
) -> tuple[int, int]:
    """Return the size that fits ``width`` x ``height`` inside the bounding box.

    Images already inside the box keep their size (no upscaling).  Otherwise
    both sides are multiplied by the same factor, rounded, and clamped to at
    least 1 px.
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"image dimensions must be positive, got {width}x{height}")
    if width <= max_width and height <= max_height:
        return width, height

    scale = min(max_width / width, max_height / height)
    return max(1, round(width * scale)), max(1, round(height * scale))


def _jpeg_quality(quality: float) -> int:
    if not 0.0 < quality <= 1.0:
        raise ValueError(f"quality must be in (0, 1], got {quality}")
    return max(1, min(_JPEG_QUALITY_CEILING, round(quality * 100)))


def _raise_if_cancelled(cancel: asyncio.Event | None, step: str) -> None:
    if cancel is not None and cancel.is_set():
        raise OperationCancelled(f"Image normalization cancelled before {step}")


class ImageNormalizer:
    """Produces bounded, recompressed JPEG bytes from arbitrary raster input."""

    def __init__(self) -> None:
        self._logger = get_logger(__name__)

    async def normalize(
        self,
        data: bytes,
        *,
        max_width: int = DEFAULT_MAX_WIDTH,
        max_height: int = DEFAULT_MAX_HEIGHT,
        quality: float = DEFAULT_QUALITY,
        cancel: asyncio.Event | None = None,
    ) -> NormalizedImage:
        """Decode *data*, fit it inside the bounding box and re-encode it.

        Parameters
        ----------
        data:
            Raw image bytes (already validated for type and size).
        max_width, max_height:
            Bounding box in pixels.
        quality:
            Lossy codec quality on the 0-1 scale.
        cancel:
            Optional signal; when set, the next suspension point raises
            :class:`OperationCancelled`.

        Raises
        ------
        DecodeError
            If *data* is not a decodable raster image.
        OperationCancelled
            If *cancel* is set before decode or before encode.
        """
        jpeg_quality = _jpeg_quality(quality)

        _raise_if_cancelled(cancel, "decode")
        bitmap = await asyncio.to_thread(self._decode, data)
        try:
            original_width, original_height = bitmap.size
            target = compute_target_size(original_width, original_height, max_width, max_height)

            _raise_if_cancelled(cancel, "encode")
            encoded = await asyncio.to_thread(self._encode, bitmap, target, jpeg_quality)
        finally:
            bitmap.close()

        self._logger.info(
            "image_normalized",
            original_size=(original_width, original_height),
            new_size=target,
            input_bytes=len(data),
            output_bytes=len(encoded),
            quality=jpeg_quality,
        )
        return NormalizedImage(
            width=target[0],
            height=target[1],
            original_width=original_width,
            original_height=original_height,
            content_type="image/jpeg",
            quality=quality,
            data=encoded,
        )

    # ------------------------------------------------------------------
    # Blocking helpers (run in a worker thread)
    # ------------------------------------------------------------------

    @staticmethod
    def _decode(data: bytes) -> Image.Image:
        """Decode *data* into an RGB bitmap with EXIF orientation applied."""
        try:
            with Image.open(io.BytesIO(data)) as img:
                img.load()
                oriented = ImageOps.exif_transpose(img)
                try:
                    # JPEG has no alpha channel; convert() also detaches the
                    # result from the source file handle.
                    return oriented.convert("RGB")
                finally:
                    if oriented is not img:
                        oriented.close()
        except _DECODE_ERRORS as exc:
            raise DecodeError(f"Failed to load image: {exc}") from exc

    @staticmethod
    def _encode(bitmap: Image.Image, size: tuple[int, int], jpeg_quality: int) -> bytes:
        resized = bitmap if bitmap.size == size else bitmap.resize(size, Image.LANCZOS)
        try:
            buf = io.BytesIO()
            resized.save(buf, format="JPEG", quality=jpeg_quality)
            return buf.getvalue()
        finally:
            if resized is not bitmap:
                resized.close()
