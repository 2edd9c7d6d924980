"""Data-URI encoding for compressed image bytes.

The embedded storage path keeps the image inside a document field, so the
bytes are wrapped as ``data:<mime>;base64,<payload>``.  Output is the
input inflated by the fixed base64 overhead (4 output chars per 3 input
bytes, padded); nothing is truncated.
"""

from __future__ import annotations

import base64
import binascii
import re

from src.models.media import EncodedPayload
from src.utils.errors import DecodeError

_DATA_URI_RE = re.compile(r"^data:(?P<mime>[\w.+-]+/[\w.+-]+);base64,(?P<payload>[A-Za-z0-9+/]*={0,2})$")


def encode_data_uri(data: bytes, content_type: str) -> EncodedPayload:
    """Wrap *data* as a base64 data URI declaring *content_type*."""
    payload = base64.b64encode(data).decode("ascii")
    return EncodedPayload(
        content_type=content_type,
        data_uri=f"data:{content_type};base64,{payload}",
        byte_length=len(data),
    )


def decode_data_uri(data_uri: str) -> tuple[str, bytes]:
    """Split a base64 data URI into ``(content_type, bytes)``.

    Raises
    ------
    DecodeError
        If *data_uri* is not a well-formed base64 data URI.
    """
    match = _DATA_URI_RE.match(data_uri)
    if match is None:
        raise DecodeError("Not a base64 data URI")
    try:
        data = base64.b64decode(match.group("payload"), validate=True)
    except binascii.Error as exc:
        raise DecodeError(f"Invalid base64 payload: {exc}") from exc
    return match.group("mime"), data
