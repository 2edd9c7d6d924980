"""Media ingestion models for the upload pipeline.

Defines Pydantic v2 models for the objects that flow through one pipeline
invocation.  All models use frozen config to enforce immutability, and none
of them outlive a single call:

    1. A caller hands over a file          → MediaInput
    2. The normalizer resizes/recompresses → NormalizedImage
    3. The encoder wraps the bytes         → EncodedPayload   (embedded path)
       or a remote host stores the file    → UploadResult     (remote path)
    4. Every backend reports back with     → StoreResult
"""

from __future__ import annotations

import base64

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, model_validator


# ---------------------------------------------------------------------------
# MediaInput -- the file exactly as the caller supplied it.
# ---------------------------------------------------------------------------
class MediaInput(BaseModel):
    """An uploaded media file: declared type, declared size and raw bytes.

    The raw bytes are held in a private attribute so ``model_dump()`` and
    log output never carry the buffer.  Build instances with
    :meth:`from_bytes`, which keeps ``file_size`` consistent with the data.
    """

    model_config = ConfigDict(frozen=True)

    filename: str = "upload"
    # MIME type as declared by the caller (browser, CLI, API client).
    content_type: str
    # Declared byte length; the validator checks this, not the decoded size.
    file_size: int = Field(ge=0)
    _data: bytes = PrivateAttr(default=b"")

    @classmethod
    def from_bytes(cls, data: bytes, content_type: str, filename: str = "upload") -> MediaInput:
        """Build a ``MediaInput`` around *data* with ``file_size = len(data)``."""
        media = cls(filename=filename, content_type=content_type, file_size=len(data))
        media.__pydantic_private__["_data"] = bytes(data)
        return media

    @property
    def data(self) -> bytes:
        """Return the raw file bytes (excluded from serialization)."""
        return self._data


# ---------------------------------------------------------------------------
# NormalizedImage -- output of the normalizer, consumed by the encoder.
# ---------------------------------------------------------------------------
class NormalizedImage(BaseModel):
    """A resized and recompressed image."""

    model_config = ConfigDict(frozen=True)

    width: int = Field(gt=0)
    height: int = Field(gt=0)
    original_width: int = Field(gt=0)
    original_height: int = Field(gt=0)
    content_type: str = "image/jpeg"
    quality: float = Field(gt=0.0, le=1.0)
    data: bytes = Field(repr=False)

    @property
    def resized(self) -> bool:
        return (self.width, self.height) != (self.original_width, self.original_height)


# ---------------------------------------------------------------------------
# EncodedPayload -- a data URI ready to be stored in a document field.
# ---------------------------------------------------------------------------
class EncodedPayload(BaseModel):
    """A ``data:<mime>;base64,<payload>`` string and the size of what it wraps."""

    model_config = ConfigDict(frozen=True)

    content_type: str
    data_uri: str = Field(repr=False)
    byte_length: int = Field(ge=0)

    def decode(self) -> bytes:
        """Return the wrapped bytes."""
        _, _, payload = self.data_uri.partition(",")
        return base64.b64decode(payload)


# ---------------------------------------------------------------------------
# UploadResult -- what a remote host hands back on success.
# ---------------------------------------------------------------------------
class UploadResult(BaseModel):
    """Reference to a file stored on a remote host.

    ``url`` is always non-empty; ``external_id`` is the host's own identifier
    (Drive file id, Cloudinary public id) when the host returns one.
    """

    model_config = ConfigDict(frozen=True)

    url: str = Field(min_length=1)
    external_id: str | None = None
    provider: str


# ---------------------------------------------------------------------------
# StoreResult -- the uniform success/failure shape every backend resolves to.
# ---------------------------------------------------------------------------
class StoreResult(BaseModel):
    """Outcome of one ``IMediaStore.store`` call.

    ``data`` is the value a caller persists in a document field: a data URI
    for the embedded backend, a URL for remote backends.  On failure
    ``error`` holds a user-presentable message and ``error_type`` the name
    of the exception that caused it.
    """

    model_config = ConfigDict(frozen=True)

    success: bool
    backend: str
    data: str | None = Field(default=None, repr=False)
    error: str | None = None
    error_type: str | None = None
    upload: UploadResult | None = None

    @model_validator(mode="after")
    def _check_outcome(self) -> StoreResult:
        if self.success and (not self.data or self.error is not None):
            raise ValueError("a successful result needs data and no error")
        if not self.success and (self.data is not None or not self.error):
            raise ValueError("a failed result needs an error and no data")
        return self

    @classmethod
    def ok(cls, backend: str, data: str, upload: UploadResult | None = None) -> StoreResult:
        return cls(success=True, backend=backend, data=data, upload=upload)

    @classmethod
    def failed(cls, backend: str, error: BaseException | str) -> StoreResult:
        if isinstance(error, BaseException):
            message = getattr(error, "message", None) or str(error)
            return cls(
                success=False,
                backend=backend,
                error=message,
                error_type=type(error).__name__,
            )
        return cls(success=False, backend=backend, error=error)
