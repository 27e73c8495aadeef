"""Database models."""

from datetime import UTC, datetime

from sqlmodel import Field, SQLModel

from rift_radio.core.types import MAX_RELEASE_YEAR, MIN_RELEASE_YEAR


class Track(SQLModel, table=True):
    """A cataloged audio track and the path of its stored file."""

    __tablename__ = "tracks"

    id: int | None = Field(default=None, primary_key=True)
    name: str = Field(unique=True, index=True, max_length=200)
    artist: str = Field(default="", max_length=200)
    album: str = Field(default="", max_length=200)
    genre: str = Field(default="", max_length=100)
    release_year: int = Field(ge=MIN_RELEASE_YEAR, le=MAX_RELEASE_YEAR)
    liked: bool = Field(default=False)
    file_path: str = Field(unique=True, index=True)
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))


class Playlist(SQLModel, table=True):
    """A named set of tracks."""

    __tablename__ = "playlists"

    id: int | None = Field(default=None, primary_key=True)
    name: str = Field(unique=True, index=True, max_length=50)
    description: str | None = Field(default=None, max_length=500)
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))


class PlaylistTrack(SQLModel, table=True):
    """Playlist membership. The composite key forbids duplicate members."""

    __tablename__ = "playlist_tracks"

    playlist_id: int = Field(foreign_key="playlists.id", primary_key=True)
    track_id: int = Field(foreign_key="tracks.id", primary_key=True)
    added_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
