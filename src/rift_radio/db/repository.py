"""Database repository for tracks."""

from sqlalchemy import Engine
from sqlmodel import Session, col, func, select

from rift_radio.db.models import PlaylistTrack, Track


class TrackRepository:
    """Repository for track database operations.

    Each call runs in its own session. Uniqueness of ``name`` and
    ``file_path`` is enforced by the schema; ``create`` and ``update`` let
    ``sqlalchemy.exc.IntegrityError`` propagate to the caller.
    """

    def __init__(self, engine: Engine) -> None:
        """Initialize repository with database engine."""
        self._engine = engine

    def list(self, *, offset: int = 0, limit: int | None = None) -> list[Track]:
        """List tracks ordered by ID, optionally paged."""
        with Session(self._engine) as session:
            stmt = select(Track).order_by(col(Track.id)).offset(offset)
            if limit is not None:
                stmt = stmt.limit(limit)
            return list(session.exec(stmt).all())

    def get(self, id: int) -> Track | None:
        """Get track by ID."""
        with Session(self._engine) as session:
            return session.get(Track, id)

    def exists_by_name(self, name: str, *, exclude_id: int | None = None) -> bool:
        """Check whether a track other than ``exclude_id`` uses this name."""
        with Session(self._engine) as session:
            stmt = select(Track.id).where(Track.name == name)
            if exclude_id is not None:
                stmt = stmt.where(Track.id != exclude_id)
            return session.exec(stmt).first() is not None

    def exists_by_path(self, file_path: str, *, exclude_id: int | None = None) -> bool:
        """Check whether a track other than ``exclude_id`` references this path."""
        with Session(self._engine) as session:
            stmt = select(Track.id).where(Track.file_path == file_path)
            if exclude_id is not None:
                stmt = stmt.where(Track.id != exclude_id)
            return session.exec(stmt).first() is not None

    def create(self, track: Track) -> Track:
        """Insert a new track."""
        with Session(self._engine) as session:
            session.add(track)
            session.commit()
            session.refresh(track)
            return track

    def update(self, id: int, **kwargs: object) -> Track | None:
        """Update track fields. Returns None if the track does not exist."""
        with Session(self._engine) as session:
            db_track = session.get(Track, id)
            if db_track is None:
                return None
            for key, value in kwargs.items():
                setattr(db_track, key, value)
            session.commit()
            session.refresh(db_track)
            return db_track

    def delete(self, id: int) -> Track | None:
        """Delete track and its playlist memberships.

        Returns:
            The deleted track, or None if not found.
        """
        with Session(self._engine, expire_on_commit=False) as session:
            track = session.get(Track, id)
            if track is None:
                return None
            memberships = select(PlaylistTrack).where(PlaylistTrack.track_id == id)
            for membership in session.exec(memberships).all():
                session.delete(membership)
            session.flush()
            session.delete(track)
            session.commit()
            return track

    def count(self) -> int:
        """Count all tracks."""
        with Session(self._engine) as session:
            return session.exec(select(func.count()).select_from(Track)).one()
