"""Shared plumbing for backends that upload the original file to a remote host.

Both remote backends send the **unmodified** input as a
``multipart/form-data`` POST with a ``file`` part plus one identifying text
field, and read a URL back from a JSON response.  This module holds what
they have in common:

* posting the form through an injected ``httpx.AsyncClient`` (or a
  short-lived one created per call, without a timeout),
* mapping transport failures to :class:`NetworkError`,
* turning raised pipeline errors into a failed :class:`StoreResult` in
  :meth:`RemoteMediaStore.store`.

Nothing is retried or cached; each call is independent.
"""

from __future__ import annotations

import asyncio
from abc import abstractmethod
from collections.abc import Mapping
from typing import Any

import httpx

from src.config.settings import Settings
from src.interfaces.media_store import IMediaStore
from src.models.media import MediaInput, StoreResult, UploadResult
from src.utils.errors import MediaPipelineError, NetworkError, OperationCancelled
from src.utils.logging import get_logger


def parse_json_body(response: httpx.Response) -> Any | None:
    """Return the decoded JSON body, or ``None`` if the body is not JSON."""
    try:
        return response.json()
    except ValueError:
        return None


def first_text_field(body: Mapping[str, Any], *names: str) -> str | None:
    """Return the first of *names* whose value in *body* is a non-empty string."""
    for name in names:
        value = body.get(name)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return None


class RemoteMediaStore(IMediaStore):
    """Base class for backends that delegate storage to an HTTP upload API.

    The ``httpx.AsyncClient`` is injected for testability.  When none is
    given, a client is opened and closed around each request.
    """

    def __init__(self, settings: Settings, http_client: httpx.AsyncClient | None = None) -> None:
        self._settings = settings
        self._http = http_client
        self._logger = get_logger(__name__)

    # -- IMediaStore implementation --------------------------------------------

    async def store(
        self,
        media: MediaInput,
        *,
        owner_id: str | None = None,
        cancel: asyncio.Event | None = None,
    ) -> StoreResult:
        backend = self.get_backend_name()
        try:
            if cancel is not None and cancel.is_set():
                raise OperationCancelled("Upload cancelled before it started", provider_name=backend)
            result = await self._upload_for_owner(media, owner_id)
        except MediaPipelineError as exc:
            self._logger.warning(
                "remote_store_failed",
                backend=backend,
                filename=media.filename,
                error_type=type(exc).__name__,
                error=str(exc),
            )
            return StoreResult.failed(backend, exc)

        return StoreResult.ok(backend, result.url, upload=result)

    # -- Subclass hooks ----------------------------------------------------------

    @abstractmethod
    async def _upload_for_owner(self, media: MediaInput, owner_id: str | None) -> UploadResult:
        """Upload *media* on behalf of *owner_id*, raising on any failure."""

    # -- HTTP helpers --------------------------------------------------------------

    async def _post_multipart(
        self, url: str, media: MediaInput, fields: Mapping[str, str]
    ) -> httpx.Response:
        """POST *media* as the ``file`` part alongside *fields*."""
        files = {"file": (media.filename, media.data, media.content_type)}
        self._logger.info(
            "remote_upload_started",
            backend=self.get_backend_name(),
            url=url,
            filename=media.filename,
            file_size=media.file_size,
        )
        try:
            if self._http is not None:
                response = await self._http.post(url, data=dict(fields), files=files)
            else:
                async with httpx.AsyncClient(timeout=None) as client:
                    response = await client.post(url, data=dict(fields), files=files)
        except httpx.RequestError as exc:
            raise NetworkError(
                f"Could not reach upload endpoint {url}: {exc}",
                provider_name=self.get_backend_name(),
            ) from exc

        self._logger.info(
            "remote_upload_response",
            backend=self.get_backend_name(),
            status=response.status_code,
        )
        return response
