"""Media storage backend implementations."""

from src.providers.storage.cloudinary_store import CloudinaryMediaStore
from src.providers.storage.embedded_store import EmbeddedMediaStore
from src.providers.storage.endpoint_store import EndpointMediaStore

__all__ = ["CloudinaryMediaStore", "EmbeddedMediaStore", "EndpointMediaStore"]
