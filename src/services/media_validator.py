"""Upfront validation of media inputs.

Checks the declared MIME type and declared byte length of a
:class:`MediaInput` before any decode or network work happens.  Both checks
are pure: the input is returned unchanged and nothing is logged above DEBUG,
since rejections are reported to the caller by the backend that asked.
"""

from __future__ import annotations

from collections.abc import Iterable

from src.models.media import MediaInput
from src.utils.errors import InvalidMediaType, MediaTooLarge
from src.utils.logging import get_logger

MAX_MEDIA_BYTES = 5 * 1024 * 1024  # 5 MiB

# A prefix ending in "/" admits a whole family ("image/png", "image/webp", ...).
IMAGE_TYPES: tuple[str, ...] = ("image/",)


def _type_accepted(content_type: str, accepted_types: Iterable[str]) -> bool:
    declared = content_type.strip().lower()
    for accepted in accepted_types:
        accepted = accepted.lower()
        if accepted.endswith("/"):
            if declared.startswith(accepted) and len(declared) > len(accepted):
                return True
        elif declared == accepted:
            return True
    return False


def validate_media(
    media: MediaInput,
    *,
    max_bytes: int = MAX_MEDIA_BYTES,
    accepted_types: Iterable[str] = IMAGE_TYPES,
) -> MediaInput:
    """Return *media* unchanged if it passes the type and size checks.

    The type check runs first, so a 6 MiB PDF is reported as the wrong type
    rather than as too large.

    Raises
    ------
    InvalidMediaType
        If the declared type is outside every accepted type or family.
    MediaTooLarge
        If the declared byte length is greater than *max_bytes*.
    """
    if not _type_accepted(media.content_type, accepted_types):
        raise InvalidMediaType(
            f"Please select an image file (received {media.content_type or 'no type'})"
        )

    if media.file_size > max_bytes:
        raise MediaTooLarge(
            f"Image must be smaller than {_format_limit(max_bytes)} "
            f"({media.file_size:,} bytes received)"
        )

    get_logger(__name__).debug(
        "media_validated",
        filename=media.filename,
        content_type=media.content_type,
        file_size=media.file_size,
    )
    return media


def _format_limit(max_bytes: int) -> str:
    mib = max_bytes / (1024 * 1024)
    if mib >= 1 and mib == int(mib):
        return f"{int(mib)} MB"
    return f"{max_bytes:,} bytes"
