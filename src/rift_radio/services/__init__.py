"""Application services."""

from rift_radio.services.catalog import CatalogService
from rift_radio.services.playlists import PlaylistService, PlaylistView
from rift_radio.services.retrieval import RetrievalGateway

__all__ = [
    "CatalogService",
    "PlaylistService",
    "PlaylistView",
    "RetrievalGateway",
]
