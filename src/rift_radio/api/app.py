"""FastAPI application factory and configuration."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from importlib.metadata import PackageNotFoundError, version

from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from rich.console import Console
from rich.logging import RichHandler
from sqlalchemy import Engine

from rift_radio.api.container import Services
from rift_radio.api.exceptions import register_exception_handlers
from rift_radio.api.routes import health, playlists, tracks
from rift_radio.db import (
    PlaylistRepository,
    TrackRepository,
    create_db_engine,
    init_db,
)
from rift_radio.services.catalog import CatalogService
from rift_radio.services.playlists import PlaylistService
from rift_radio.services.retrieval import RetrievalGateway
from rift_radio.settings import Settings, get_settings
from rift_radio.storage.locks import KeyedLocks
from rift_radio.storage.paths import PathResolver
from rift_radio.storage.transfer import TransferEngine, cleanup_part_files

logger = logging.getLogger(__name__)


def setup_logging(settings: Settings) -> None:
    """Configure logging with Rich handler for all loggers including uvicorn."""
    console = Console(stderr=True)

    handler = RichHandler(
        console=console, rich_tracebacks=True, show_path=False, markup=False
    )
    handler.setFormatter(logging.Formatter("%(name)s - %(message)s", datefmt="[%X]"))

    # Configure root logger
    logging.root.handlers = [handler]
    logging.root.setLevel(settings.log_level)

    # Configure uvicorn loggers to use Rich
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        uvicorn_logger = logging.getLogger(name)
        uvicorn_logger.handlers = [handler]
        uvicorn_logger.propagate = False


def create_services(engine: Engine, settings: Settings) -> Services:
    """Create all application services with proper dependency wiring.

    Args:
        engine: Engine for the metadata store (tables must exist).
        settings: Application settings.

    Returns:
        Services container with all application services.
    """
    track_repository = TrackRepository(engine)
    playlist_repository = PlaylistRepository(engine)

    transfer = TransferEngine()
    resolver = PathResolver(settings.storage, track_repository)

    catalog = CatalogService(
        repository=track_repository,
        resolver=resolver,
        transfer=transfer,
        locks=KeyedLocks(),
    )
    retrieval = RetrievalGateway(repository=track_repository, transfer=transfer)
    playlist_service = PlaylistService(
        playlists=playlist_repository, tracks=track_repository
    )

    return Services(
        engine=engine,
        catalog=catalog,
        retrieval=retrieval,
        playlists=playlist_service,
    )


def open_services(settings: Settings) -> Services:
    """Prepare storage and database, then build services."""
    settings.storage.mkdir(parents=True, exist_ok=True)

    engine = create_db_engine(settings.db_path)
    init_db(engine)
    logger.info("Database ready at '%s'", settings.db_path)

    return create_services(engine, settings)


def create_api_router() -> APIRouter:
    """Create the API router with all routes under /api prefix."""
    api_router = APIRouter(prefix="/api")
    api_router.include_router(health.router)
    api_router.include_router(tracks.router)
    api_router.include_router(playlists.router)
    return api_router


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    settings: Settings = app.state.settings
    logger.info("Starting application...")

    services = open_services(settings)
    cleanup_part_files(settings.storage)
    app.state.services = services
    logger.info("Services initialized, storing files in '%s'", settings.storage)

    yield

    services.close()


def _app_version() -> str:
    try:
        return version("rift-radio")
    except PackageNotFoundError:
        return "0.0.0"


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the main FastAPI application."""
    settings = settings or get_settings()
    setup_logging(settings)

    app = FastAPI(
        title="rift-radio",
        description="Audio track and playlist catalog API",
        version=_app_version(),
        lifespan=lifespan,
        debug=settings.debug,
    )
    app.state.settings = settings

    # Register exception handlers
    register_exception_handlers(app)

    # CORS middleware (type ignore needed due to Starlette typing limitations)
    app.add_middleware(
        CORSMiddleware,  # type: ignore[arg-type]
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # API routes under /api prefix
    app.include_router(create_api_router())

    return app
