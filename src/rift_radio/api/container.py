"""Services container for dependency injection.

This module provides the Services container and dependency injection
utilities for accessing services from FastAPI routes via app.state.
"""

import logging
from dataclasses import dataclass

from fastapi import Request
from sqlalchemy import Engine

from rift_radio.services.catalog import CatalogService
from rift_radio.services.playlists import PlaylistService
from rift_radio.services.retrieval import RetrievalGateway

logger = logging.getLogger(__name__)


@dataclass
class Services:
    """Container for application services with proper lifecycle management.

    All services are created at startup and cleaned up at shutdown.
    Stored in FastAPI's app.state for proper request scoping.
    """

    engine: Engine
    catalog: CatalogService
    retrieval: RetrievalGateway
    playlists: PlaylistService

    def close(self) -> None:
        """Clean up resources. Called at application shutdown."""
        self.engine.dispose()
        logger.info("Services cleaned up")


def get_services(request: Request) -> Services:
    """Get services from request's app state (dependency injection).

    Args:
        request: FastAPI request object.

    Returns:
        Services container.

    Raises:
        RuntimeError: If services not initialized (app not running).
    """
    services = getattr(request.app.state, "services", None)
    if services is None:
        raise RuntimeError("Services not initialized. Is the app running?")
    return services
