"""Public interface definitions for media storage backends.

Storage strategies are accessed exclusively through :class:`IMediaStore`.
Concrete adapters implement it and are built from ``Settings`` by the
factories in ``src/main.py``:

    Interface      →  Concrete implementations (in src/providers/storage/)
    ─────────────────────────────────────────────────────────────────────
    IMediaStore    →  EmbeddedMediaStore, EndpointMediaStore,
                      CloudinaryMediaStore
"""

from src.interfaces.media_store import IMediaStore

__all__ = ["IMediaStore"]
