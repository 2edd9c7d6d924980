"""Media ingestion service with a backend fallback chain.

Manages a priority-ordered list of storage backends and tries each in turn
until one stores the file.  The usual chain is
``[remote backend, embedded backend]``: upload the original file to a host
when possible, and fall back to an inline data URI when the host is down or
rejects the upload.

Chain rules
-----------
* Backends whose configuration is missing (``is_available() is False``)
  are skipped without being called.
* The first successful :class:`StoreResult` is returned immediately.
* A type or size rejection ends the chain: every backend applies the same
  checks, so retrying elsewhere cannot help.  A cancelled call ends it too.
* A later backend that rejects only the type (its accepted types are
  narrower) does not replace the failure of a backend that accepted it.
* Otherwise the last failure is returned.  The service itself never raises
  for pipeline failures.
"""

from __future__ import annotations

import asyncio
from collections.abc import Sequence

from src.interfaces.media_store import IMediaStore
from src.models.media import MediaInput, StoreResult
from src.utils.concurrency import throttled_gather
from src.utils.errors import ConfigurationError, InvalidMediaType, MediaTooLarge, OperationCancelled
from src.utils.logging import get_logger

_CHAIN_STOPPING_ERRORS = frozenset(
    {InvalidMediaType.__name__, MediaTooLarge.__name__, OperationCancelled.__name__}
)

_DEFAULT_BATCH_LIMIT = 4


class MediaIngestionService:
    """Stores media through the first backend in the chain that succeeds."""

    def __init__(self, stores: Sequence[IMediaStore]) -> None:
        if not stores:
            raise ValueError("MediaIngestionService needs at least one storage backend")
        self._stores = list(stores)
        self._logger = get_logger(__name__)

    @property
    def backend_names(self) -> list[str]:
        return [store.get_backend_name() for store in self._stores]

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def store(
        self,
        media: MediaInput,
        *,
        owner_id: str | None = None,
        cancel: asyncio.Event | None = None,
    ) -> StoreResult:
        """Store *media* using the backend fallback chain.

        Returns
        -------
        StoreResult
            The first success, or the most informative failure.
        """
        last_failure: StoreResult | None = None

        for store in self._stores:
            name = store.get_backend_name()

            if not store.is_available():
                self._logger.warning("media_backend_unavailable", backend=name)
                continue

            self._logger.info("media_backend_attempting", backend=name, filename=media.filename)
            result = await store.store(media, owner_id=owner_id, cancel=cancel)

            if result.success:
                self._logger.info("media_backend_accepted", backend=name, filename=media.filename)
                return result

            if result.error_type == InvalidMediaType.__name__ and last_failure is not None:
                # An earlier backend accepted the type; its failure is the real one.
                self._logger.info(
                    "media_backend_type_not_supported",
                    backend=name,
                    content_type=media.content_type,
                )
                break
            last_failure = result
            if result.error_type in _CHAIN_STOPPING_ERRORS:
                break
            self._logger.warning(
                "media_backend_failed",
                backend=name,
                error_type=result.error_type,
                error=result.error,
            )

        if last_failure is not None:
            return last_failure

        self._logger.error("media_no_backend_available", backends=self.backend_names)
        return StoreResult.failed(
            "none",
            ConfigurationError(f"No storage backend is available (tried: {', '.join(self.backend_names)})"),
        )

    async def store_many(
        self,
        items: Sequence[MediaInput],
        *,
        owner_id: str | None = None,
        limit: int = _DEFAULT_BATCH_LIMIT,
        cancel: asyncio.Event | None = None,
    ) -> list[StoreResult]:
        """Store several inputs concurrently, at most *limit* at a time.

        Results come back in input order.  A failure for one item does not
        affect the others.
        """
        coros = [self.store(media, owner_id=owner_id, cancel=cancel) for media in items]
        results = await throttled_gather(coros, limit=limit)
        stored = sum(1 for r in results if r.success)
        self._logger.info("media_batch_complete", total=len(results), stored=stored)
        return results
