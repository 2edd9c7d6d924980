"""Upload backend for the application's own upload endpoint.

Posts the original file with a ``uid`` field to the configured endpoint
(``UPLOAD_URL``, or ``/api/upload/profile`` on ``UPLOAD_BASE_URL`` when
unset).  The endpoint answers ``{"link": ..., "fileId": ...}``; some
deployments answer ``{"url": ...}`` instead, and a bare ``fileId`` is turned
into a Drive view link.  Any non-2xx answer fails with the response body
text as the message.
"""

from __future__ import annotations

import json

import httpx

from src.models.media import MediaInput, UploadResult
from src.providers.storage.remote_store import (
    RemoteMediaStore,
    first_text_field,
    parse_json_body,
)
from src.services.media_validator import validate_media
from src.utils.asset_urls import drive_view_url
from src.utils.errors import MediaValidationError, RemoteRejection

DEFAULT_UPLOAD_PATH = "/api/upload/profile"

# Response field names, in order of preference.
_LINK_FIELDS = ("link", "url")
_FILE_ID_FIELD = "fileId"


class EndpointMediaStore(RemoteMediaStore):
    """Stores files through the generic application upload endpoint."""

    @property
    def upload_url(self) -> str:
        """Absolute URL the form is posted to."""
        configured = self._settings.upload_url.strip()
        if configured.startswith(("http://", "https://")):
            return configured
        path = configured or DEFAULT_UPLOAD_PATH
        return str(httpx.URL(self._settings.upload_base_url).join(path))

    async def upload(self, media: MediaInput, uid: str) -> UploadResult:
        """Upload *media* for user *uid* and return the stored file's link.

        Raises
        ------
        MediaValidationError
            If *uid* is empty, or the input fails type/size validation.
        NetworkError
            If the endpoint cannot be reached.
        RemoteRejection
            If the endpoint answers non-2xx (message = response body text),
            or answers 2xx without a usable link.
        """
        name = self.get_backend_name()
        if not uid or not uid.strip():
            raise MediaValidationError("An owner id is required for endpoint uploads", provider_name=name)
        validate_media(media, max_bytes=self._settings.media_max_bytes)

        response = await self._post_multipart(self.upload_url, media, {"uid": uid})

        if not response.is_success:
            text = response.text
            self._logger.warning("remote_upload_rejected", backend=name, status=response.status_code)
            raise RemoteRejection(
                text or "Upload failed",
                provider_name=name,
                status_code=response.status_code,
                detail=text,
            )

        body = parse_json_body(response)
        if not isinstance(body, dict):
            raise RemoteRejection(
                "Upload endpoint returned a non-JSON response",
                provider_name=name,
                status_code=response.status_code,
                detail=response.text,
            )

        file_id = first_text_field(body, _FILE_ID_FIELD)
        link = first_text_field(body, *_LINK_FIELDS) or drive_view_url(file_id or "")
        if not link:
            raise RemoteRejection(
                "Upload endpoint response carried no link or fileId",
                provider_name=name,
                status_code=response.status_code,
                detail=json.dumps(body),
            )

        self._logger.info("remote_upload_complete", backend=name, file_id=file_id)
        return UploadResult(url=link, external_id=file_id, provider=name)

    async def _upload_for_owner(self, media: MediaInput, owner_id: str | None) -> UploadResult:
        return await self.upload(media, owner_id or "")

    def get_backend_name(self) -> str:
        return "endpoint"

    def is_available(self) -> bool:
        # Falls back to the default path, so only a blank base URL with a
        # relative upload URL leaves nothing to post to.
        return bool(self._settings.upload_base_url.strip()) or self._settings.upload_url.startswith(
            ("http://", "https://")
        )
