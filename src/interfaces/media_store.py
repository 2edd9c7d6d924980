"""Abstract base class for media storage backends.

Defines the single capability every persistence strategy offers: take one
uploaded file and hand back a value the caller can save in a document
field.  Concrete backends live in ``src/providers/storage/``:

    EmbeddedMediaStore    -- resize + recompress, return a data URI
    EndpointMediaStore    -- post the original file to the app's upload endpoint
    CloudinaryMediaStore  -- post the original file to the Cloudinary asset host

Because every backend resolves to a :class:`StoreResult`, callers use one
calling convention regardless of which backend the configuration selects.
"""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod

from src.models.media import MediaInput, StoreResult


class IMediaStore(ABC):
    """Contract for backends that persist one media input per call.

    Every concrete backend must be able to:
    * Store a :class:`MediaInput` and report the outcome as a ``StoreResult``
      without raising for validation, decode, configuration or remote
      failures.
    * Report whether it is configured well enough to attempt a store.
    """

    @abstractmethod
    async def store(
        self,
        media: MediaInput,
        *,
        owner_id: str | None = None,
        cancel: asyncio.Event | None = None,
    ) -> StoreResult:
        """Persist *media* and return the outcome.

        Parameters
        ----------
        media:
            The file exactly as the caller supplied it.
        owner_id:
            Identifier of the user the file belongs to.  Backends that do
            not need one ignore it.
        cancel:
            Optional cancel signal, checked before each suspension point.

        Returns
        -------
        StoreResult
            ``success=True`` with ``data`` set to a data URI or URL, or
            ``success=False`` with a human-readable ``error``.
        """

    @abstractmethod
    def get_backend_name(self) -> str:
        """Return a short identifier such as ``"embedded"`` or ``"cloudinary"``."""

    @abstractmethod
    def is_available(self) -> bool:
        """Return ``True`` if the backend's required configuration is present.

        Must not perform network calls.
        """
