"""Upload backend for the Cloudinary asset host.

Unsigned uploads: the request carries an ``upload_preset`` instead of
per-request credentials, and the URL is parameterised by the account's
cloud name::

    {CLOUDINARY_API_BASE}/{CLOUDINARY_CLOUD_NAME}/{resource_type}/upload

A missing cloud name or preset fails with :class:`ConfigurationError`
before any request is made.  Successful responses are read for
``secure_url`` first, then ``url``.  Non-2xx responses fail with the error
body serialised into the message (raw text when the body is not JSON).
"""

from __future__ import annotations

import json

import httpx

from src.config.settings import Settings
from src.models.media import MediaInput, UploadResult
from src.providers.storage.remote_store import (
    RemoteMediaStore,
    first_text_field,
    parse_json_body,
)
from src.services.media_validator import IMAGE_TYPES, validate_media
from src.utils.errors import ConfigurationError, RemoteRejection

# secure_url is preferred; url is the documented fallback.
_URL_FIELDS = ("secure_url", "url")
_PUBLIC_ID_FIELD = "public_id"

_DOCUMENT_TYPES = ("application/pdf",)


class CloudinaryMediaStore(RemoteMediaStore):
    """Stores files on Cloudinary using preset-based (unsigned) uploads."""

    def __init__(self, settings: Settings, http_client: httpx.AsyncClient | None = None) -> None:
        super().__init__(settings, http_client)
        self._accepted_types: tuple[str, ...] = IMAGE_TYPES
        if settings.cloudinary_accept_documents:
            self._accepted_types = IMAGE_TYPES + _DOCUMENT_TYPES

    def upload_endpoint(self) -> str:
        """Return the upload URL for the configured cloud name.

        Raises
        ------
        ConfigurationError
            If no cloud name is configured.
        """
        cloud_name = self._settings.cloudinary_cloud_name.strip()
        if not cloud_name:
            raise self._not_configured()
        base = self._settings.cloudinary_api_base.rstrip("/")
        resource_type = self._settings.cloudinary_resource_type or "auto"
        return f"{base}/{cloud_name}/{resource_type}/upload"

    async def upload(self, media: MediaInput, upload_preset: str | None = None) -> UploadResult:
        """Upload *media* with *upload_preset* (default: the configured preset).

        Raises
        ------
        ConfigurationError
            If the cloud name or preset is missing.  No request is made.
        MediaValidationError
            If the input fails type/size validation.
        NetworkError
            If Cloudinary cannot be reached.
        RemoteRejection
            On a non-2xx answer, or a 2xx answer without a URL.
        """
        name = self.get_backend_name()
        preset = (upload_preset or self._settings.cloudinary_upload_preset).strip()
        url = self.upload_endpoint()
        if not preset:
            raise self._not_configured()
        validate_media(
            media,
            max_bytes=self._settings.media_max_bytes,
            accepted_types=self._accepted_types,
        )

        response = await self._post_multipart(url, media, {"upload_preset": preset})

        body = parse_json_body(response)
        if not response.is_success:
            detail = json.dumps(body) if body is not None else response.text
            self._logger.warning("remote_upload_rejected", backend=name, status=response.status_code)
            raise RemoteRejection(
                f"Cloudinary upload failed: {response.status_code} {detail}",
                provider_name=name,
                status_code=response.status_code,
                detail=detail,
            )

        secure_url = first_text_field(body, *_URL_FIELDS) if isinstance(body, dict) else None
        if not secure_url:
            raise RemoteRejection(
                "Cloudinary response carried no secure_url or url",
                provider_name=name,
                status_code=response.status_code,
                detail=response.text,
            )

        public_id = first_text_field(body, _PUBLIC_ID_FIELD)
        self._logger.info("remote_upload_complete", backend=name, public_id=public_id)
        return UploadResult(url=secure_url, external_id=public_id, provider=name)

    async def _upload_for_owner(self, media: MediaInput, owner_id: str | None) -> UploadResult:
        # The preset authorises the upload; the owner is not sent.
        return await self.upload(media)

    def get_backend_name(self) -> str:
        return "cloudinary"

    def is_available(self) -> bool:
        return self._settings.is_cloudinary_configured()

    def _not_configured(self) -> ConfigurationError:
        return ConfigurationError(
            "Cloudinary is not configured. Set CLOUDINARY_CLOUD_NAME and CLOUDINARY_UPLOAD_PRESET",
            provider_name=self.get_backend_name(),
        )
