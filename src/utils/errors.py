"""Custom exception hierarchy for the media ingestion pipeline.

All pipeline exceptions inherit from :class:`MediaPipelineError`, which
carries an optional ``provider_name`` so error handlers can tell which
backend (e.g. "embedded", "endpoint", "cloudinary") produced the failure.

The hierarchy follows the pipeline stages:

    MediaPipelineError  (base -- catch-all for any pipeline error)
    +-- MediaValidationError     (input rejected before any work)
    |   +-- InvalidMediaType     (declared type outside the accepted family)
    |   +-- MediaTooLarge        (declared byte length over the limit)
    +-- DecodeError              (corrupt or unsupported image bytes)
    +-- ConfigurationError       (missing endpoint / account configuration)
    +-- NetworkError             (transport failure reaching a remote host)
    +-- RemoteRejection          (remote host answered with a failure)
    +-- OperationCancelled       (caller set the cancel signal)

Validation and configuration errors never require a decode or a network
round-trip, so callers can surface them immediately.
"""


class MediaPipelineError(Exception):
    """Base exception for all media pipeline errors.

    Every subclass carries a human-readable ``message`` and an optional
    ``provider_name``.  ``__str__`` prefixes the provider name in brackets,
    e.g. ``[cloudinary] Cloudinary upload failed: 400 ...``.
    """

    def __init__(
        self,
        message: str = "Media processing failed",
        provider_name: str | None = None,
    ) -> None:
        self._message = message
        self._provider_name = provider_name
        super().__init__(self._message)

    @property
    def message(self) -> str:
        return self._message

    @property
    def provider_name(self) -> str | None:
        return self._provider_name

    def __str__(self) -> str:
        if self._provider_name:
            return f"[{self._provider_name}] {self._message}"
        return self._message


# ---------------------------------------------------------------------------
# Validation errors
# ---------------------------------------------------------------------------

class MediaValidationError(MediaPipelineError):
    """Raised when an input is rejected before any decode or upload."""

    def __init__(
        self,
        message: str = "Invalid media input",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class InvalidMediaType(MediaValidationError):
    """Raised when the declared MIME type is not an accepted media family."""

    def __init__(
        self,
        message: str = "Please select an image file",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class MediaTooLarge(MediaValidationError):
    """Raised when the declared byte length exceeds the configured limit."""

    def __init__(
        self,
        message: str = "Image must be smaller than 5 MB",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


# ---------------------------------------------------------------------------
# Processing errors
# ---------------------------------------------------------------------------

class DecodeError(MediaPipelineError):
    """Raised when image bytes cannot be decoded into a bitmap."""

    def __init__(
        self,
        message: str = "Failed to load image",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class OperationCancelled(MediaPipelineError):
    """Raised at a suspension point when the caller's cancel signal is set."""

    def __init__(
        self,
        message: str = "Operation cancelled",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


# ---------------------------------------------------------------------------
# Configuration / remote errors
# ---------------------------------------------------------------------------

class ConfigurationError(MediaPipelineError):
    """Raised when required endpoint or account configuration is missing."""

    def __init__(
        self,
        message: str = "Invalid or missing configuration",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class NetworkError(MediaPipelineError):
    """Raised when the remote endpoint cannot be reached at the transport level."""

    def __init__(
        self,
        message: str = "Remote endpoint is unreachable",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class RemoteRejection(MediaPipelineError):
    """Raised when the remote endpoint answers but the upload did not succeed.

    ``status_code`` is the HTTP status (``None`` when the status was 2xx but
    the body was unusable).  ``detail`` holds the response body text, or the
    serialised JSON error body for hosts that return structured errors.
    """

    def __init__(
        self,
        message: str = "Upload failed",
        provider_name: str | None = None,
        status_code: int | None = None,
        detail: str = "",
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)
        self._status_code = status_code
        self._detail = detail

    @property
    def status_code(self) -> int | None:
        return self._status_code

    @property
    def detail(self) -> str:
        return self._detail
