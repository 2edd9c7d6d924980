"""Factories that wire storage backends and the ingestion service from Settings.

Callers (the CLI, or a host application embedding the pipeline) build one
``Settings`` object and ask for a ready service::

    service = build_ingestion_service(Settings())
    result = await service.store(MediaInput.from_bytes(data, "image/png"), owner_id=uid)

Backend selection is driven by ``STORAGE_BACKEND``; with
``STORAGE_FALLBACK_TO_EMBEDDED`` set, remote backends get the embedded
backend appended as a fallback.
"""

from __future__ import annotations

import httpx

from src.config.settings import Settings
from src.interfaces.media_store import IMediaStore
from src.providers.storage.cloudinary_store import CloudinaryMediaStore
from src.providers.storage.embedded_store import EmbeddedMediaStore
from src.providers.storage.endpoint_store import EndpointMediaStore
from src.services.media_service import MediaIngestionService
from src.utils.errors import ConfigurationError
from src.utils.logging import get_logger

BACKEND_NAMES = ("embedded", "endpoint", "cloudinary")


def build_media_store(
    app_settings: Settings,
    backend: str | None = None,
    http_client: httpx.AsyncClient | None = None,
) -> IMediaStore:
    """Return the storage backend named *backend* (default: ``storage_backend``).

    Raises
    ------
    ConfigurationError
        If the name is not one of :data:`BACKEND_NAMES`.
    """
    name = (backend or app_settings.storage_backend).strip().lower()
    if name == "embedded":
        return EmbeddedMediaStore(app_settings)
    if name == "endpoint":
        return EndpointMediaStore(app_settings, http_client=http_client)
    if name == "cloudinary":
        return CloudinaryMediaStore(app_settings, http_client=http_client)
    raise ConfigurationError(
        f"Unknown storage backend {name!r}. Expected one of: {', '.join(BACKEND_NAMES)}"
    )


def build_ingestion_service(
    app_settings: Settings,
    backend: str | None = None,
    http_client: httpx.AsyncClient | None = None,
) -> MediaIngestionService:
    """Assemble the backend chain for :class:`MediaIngestionService`."""
    primary = build_media_store(app_settings, backend=backend, http_client=http_client)
    stores: list[IMediaStore] = [primary]
    if app_settings.storage_fallback_to_embedded and not isinstance(primary, EmbeddedMediaStore):
        stores.append(EmbeddedMediaStore(app_settings))

    service = MediaIngestionService(stores)
    get_logger(__name__).info("media_service_built", backends=service.backend_names)
    return service
