"""Service protocols for dependency injection."""

from __future__ import annotations

from typing import Protocol

from rift_radio.db.models import Playlist, Track


class TrackRepo(Protocol):
    """Metadata-store capability consumed by the catalog and retrieval services."""

    def list(self, *, offset: int = 0, limit: int | None = None) -> list[Track]: ...

    def get(self, id: int) -> Track | None: ...

    def exists_by_name(self, name: str, *, exclude_id: int | None = None) -> bool: ...

    def exists_by_path(
        self, file_path: str, *, exclude_id: int | None = None
    ) -> bool: ...

    def create(self, track: Track) -> Track: ...

    def update(self, id: int, **kwargs: object) -> Track | None: ...

    def delete(self, id: int) -> Track | None: ...

    def count(self) -> int: ...


class PlaylistRepo(Protocol):
    """Narrow interface for playlist data access."""

    def list(self) -> list[Playlist]: ...

    def get(self, id: int) -> Playlist | None: ...

    def exists_by_name(self, name: str) -> bool: ...

    def create(self, playlist: Playlist) -> Playlist: ...

    def delete(self, id: int) -> bool: ...

    def tracks(self, playlist_id: int) -> list[Track]: ...

    def has_track(self, playlist_id: int, track_id: int) -> bool: ...

    def add_track(self, playlist_id: int, track_id: int) -> None: ...

    def remove_track(self, playlist_id: int, track_id: int) -> bool: ...
