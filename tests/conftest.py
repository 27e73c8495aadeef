"""Test fixtures and configuration for rift-radio tests.

This module provides shared fixtures organized into:
- Database fixtures: In-memory SQLite for repository tests, file SQLite for
  services that are exercised from several threads
- Storage fixtures: Temporary storage root and transfer engine
- Service fixtures: Catalog, retrieval and playlist services wired together
- Factory fixtures: Builders for uploads and metadata
"""

from __future__ import annotations

import io
import os
from collections.abc import Generator
from pathlib import Path
from typing import TYPE_CHECKING

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.engine import Engine
from sqlmodel import SQLModel, create_engine

from rift_radio.api.app import create_app
from rift_radio.core.models import TrackMetadata, Upload
from rift_radio.core.types import AUDIO_MEDIA_TYPE
from rift_radio.db import (
    DB_FILE,
    PlaylistRepository,
    TrackRepository,
    create_db_engine,
    init_db,
)
from rift_radio.services import CatalogService, PlaylistService, RetrievalGateway
from rift_radio.settings import Settings
from rift_radio.storage import KeyedLocks, PathResolver, TransferEngine

if TYPE_CHECKING:
    from collections.abc import Callable

# Payload that looks enough like an MP3 for logs and assertions
SAMPLE_AUDIO = b"ID3\x04\x00\x00\x00\x00\x00\x00" + bytes(range(256)) * 20


# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture
def engine() -> Generator[Engine, None, None]:
    """Create in-memory SQLite engine for tests."""
    engine = create_engine("sqlite:///:memory:")
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def file_engine(tmp_path: Path) -> Generator[Engine, None, None]:
    """Create file-backed SQLite engine, safe to share across threads."""
    engine = create_db_engine(tmp_path / "config" / DB_FILE)
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def repository(engine: Engine) -> TrackRepository:
    """Create track repository with in-memory engine."""
    return TrackRepository(engine)


@pytest.fixture
def playlist_repository(engine: Engine) -> PlaylistRepository:
    """Create playlist repository with in-memory engine."""
    return PlaylistRepository(engine)


# =============================================================================
# Storage Fixtures
# =============================================================================


@pytest.fixture
def storage_root(tmp_path: Path) -> Path:
    """Storage directory inside the test's temp dir (not created yet)."""
    return tmp_path / "storage" / "mp3"


@pytest.fixture
def transfer() -> TransferEngine:
    """Transfer engine with the smallest allowed buffer."""
    return TransferEngine(chunk_size=1024)


# =============================================================================
# Service Fixtures
# =============================================================================


@pytest.fixture
def track_repository(file_engine: Engine) -> TrackRepository:
    """Track repository backed by the file engine."""
    return TrackRepository(file_engine)


@pytest.fixture
def resolver(storage_root: Path, track_repository: TrackRepository) -> PathResolver:
    return PathResolver(storage_root, track_repository)


@pytest.fixture
def catalog(
    track_repository: TrackRepository,
    resolver: PathResolver,
    transfer: TransferEngine,
) -> CatalogService:
    """Catalog service over real storage and database."""
    return CatalogService(
        repository=track_repository,
        resolver=resolver,
        transfer=transfer,
        locks=KeyedLocks(),
    )


@pytest.fixture
def retrieval(
    track_repository: TrackRepository, transfer: TransferEngine
) -> RetrievalGateway:
    return RetrievalGateway(repository=track_repository, transfer=transfer)


@pytest.fixture
def playlists(file_engine: Engine, track_repository: TrackRepository) -> PlaylistService:
    return PlaylistService(
        playlists=PlaylistRepository(file_engine), tracks=track_repository
    )


# =============================================================================
# Factory Fixtures
# =============================================================================


@pytest.fixture
def make_upload() -> Callable[..., Upload]:
    """Build in-memory uploads.

    Usage:
        make_upload()  # song.mp3 with SAMPLE_AUDIO
        make_upload(b"data", filename="other.mp3", content_type="text/plain")
        make_upload(size=0)  # declared size overrides the payload length
    """

    def _make(
        data: bytes = SAMPLE_AUDIO,
        *,
        filename: str | None = "song.mp3",
        content_type: str | None = AUDIO_MEDIA_TYPE,
        size: int | None = None,
    ) -> Upload:
        return Upload(
            stream=io.BytesIO(data),
            filename=filename,
            content_type=content_type,
            size=len(data) if size is None else size,
        )

    return _make


@pytest.fixture
def make_metadata() -> Callable[..., TrackMetadata]:
    """Build track metadata with sensible defaults."""

    def _make(name: str = "Song", release_year: int = 2000, **kwargs: object) -> TrackMetadata:
        return TrackMetadata(name=name, release_year=release_year, **kwargs)  # type: ignore[arg-type]

    return _make


# =============================================================================
# Application Fixtures
# =============================================================================


@pytest.fixture
def isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Isolate tests from .env file and shell environment."""
    for key in list(os.environ.keys()):
        if key.startswith("RIFT_"):
            monkeypatch.delenv(key, raising=False)
    # Change to temp dir so Settings won't find .env file
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def settings(isolated_env: None, tmp_path: Path) -> Settings:
    """Settings rooted in the test's temp dir."""
    return Settings(root=tmp_path)


@pytest.fixture
def client(settings: Settings) -> Generator[TestClient, None, None]:
    """Test client with lifespan (database and storage) started."""
    with TestClient(create_app(settings)) as client:
        yield client
