"""Metadata store: tables, engine and repositories."""

from rift_radio.db.engine import DB_FILE, create_db_engine, init_db
from rift_radio.db.models import Playlist, PlaylistTrack, Track
from rift_radio.db.playlist_repository import PlaylistRepository
from rift_radio.db.repository import TrackRepository

__all__ = [
    "DB_FILE",
    "Playlist",
    "PlaylistRepository",
    "PlaylistTrack",
    "Track",
    "TrackRepository",
    "create_db_engine",
    "init_db",
]
