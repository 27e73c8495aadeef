"""FastAPI dependency injection factories.

Dependencies are defined as Annotated types for clean, reusable injection.

Usage in routes:
    from rift_radio.api.deps import CatalogDep

    @router.get("/tracks")
    def list_tracks(catalog: CatalogDep) -> ...:
        ...
"""

from typing import Annotated

from fastapi import Depends

from rift_radio.api.container import Services, get_services
from rift_radio.services.catalog import CatalogService
from rift_radio.services.playlists import PlaylistService
from rift_radio.services.retrieval import RetrievalGateway

ServicesDep = Annotated[Services, Depends(get_services)]


def _get_catalog(services: ServicesDep) -> CatalogService:
    return services.catalog


def _get_retrieval(services: ServicesDep) -> RetrievalGateway:
    return services.retrieval


def _get_playlists(services: ServicesDep) -> PlaylistService:
    return services.playlists


CatalogDep = Annotated[CatalogService, Depends(_get_catalog)]
RetrievalDep = Annotated[RetrievalGateway, Depends(_get_retrieval)]
PlaylistsDep = Annotated[PlaylistService, Depends(_get_playlists)]
