"""Database repository for playlists and their memberships."""

from __future__ import annotations

from sqlalchemy import Engine
from sqlmodel import Session, col, select

from rift_radio.db.models import Playlist, PlaylistTrack, Track


class PlaylistRepository:
    """Repository for playlist database operations."""

    def __init__(self, engine: Engine) -> None:
        """Initialize repository with database engine."""
        self._engine = engine

    def list(self) -> list[Playlist]:
        """List playlists ordered by ID."""
        with Session(self._engine) as session:
            stmt = select(Playlist).order_by(col(Playlist.id))
            return list(session.exec(stmt).all())

    def get(self, id: int) -> Playlist | None:
        """Get playlist by ID."""
        with Session(self._engine) as session:
            return session.get(Playlist, id)

    def exists_by_name(self, name: str) -> bool:
        """Check whether a playlist uses this name."""
        with Session(self._engine) as session:
            stmt = select(Playlist.id).where(Playlist.name == name)
            return session.exec(stmt).first() is not None

    def create(self, playlist: Playlist) -> Playlist:
        """Insert a new playlist."""
        with Session(self._engine) as session:
            session.add(playlist)
            session.commit()
            session.refresh(playlist)
            return playlist

    def delete(self, id: int) -> bool:
        """Delete playlist and its memberships. Tracks are left untouched."""
        with Session(self._engine) as session:
            playlist = session.get(Playlist, id)
            if playlist is None:
                return False
            stmt = select(PlaylistTrack).where(PlaylistTrack.playlist_id == id)
            for membership in session.exec(stmt).all():
                session.delete(membership)
            session.flush()
            session.delete(playlist)
            session.commit()
            return True

    def tracks(self, playlist_id: int) -> list[Track]:
        """List member tracks in the order they were added."""
        with Session(self._engine) as session:
            stmt = (
                select(Track)
                .join(PlaylistTrack, col(PlaylistTrack.track_id) == col(Track.id))
                .where(PlaylistTrack.playlist_id == playlist_id)
                .order_by(col(PlaylistTrack.added_at), col(Track.id))
            )
            return list(session.exec(stmt).all())

    def has_track(self, playlist_id: int, track_id: int) -> bool:
        """Check playlist membership."""
        with Session(self._engine) as session:
            return session.get(PlaylistTrack, (playlist_id, track_id)) is not None

    def add_track(self, playlist_id: int, track_id: int) -> None:
        """Add a membership row. Duplicates raise ``IntegrityError``."""
        with Session(self._engine) as session:
            session.add(PlaylistTrack(playlist_id=playlist_id, track_id=track_id))
            session.commit()

    def remove_track(self, playlist_id: int, track_id: int) -> bool:
        """Remove a membership row. Returns False if it did not exist."""
        with Session(self._engine) as session:
            membership = session.get(PlaylistTrack, (playlist_id, track_id))
            if membership is None:
                return False
            session.delete(membership)
            session.commit()
            return True
