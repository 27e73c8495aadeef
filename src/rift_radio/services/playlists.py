"""Playlist business logic service."""

import logging
from dataclasses import dataclass

from sqlalchemy.exc import IntegrityError

from rift_radio.core.result import Ok, Result
from rift_radio.db.models import Playlist, Track
from rift_radio.exceptions import (
    DuplicatePlaylistError,
    PlaylistNotFoundError,
    TrackAlreadyInPlaylistError,
    TrackNotFoundError,
    TrackNotInPlaylistError,
)
from rift_radio.services.protocols import PlaylistRepo, TrackRepo

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlaylistView:
    """A playlist together with its member tracks."""

    playlist: Playlist
    tracks: list[Track]

    @property
    def total_tracks(self) -> int:
        return len(self.tracks)


class PlaylistService:
    """Use-case layer for playlists and membership.

    Membership is a reference, not ownership: removing a playlist leaves its
    tracks in the catalog.
    """

    def __init__(self, playlists: PlaylistRepo, tracks: TrackRepo) -> None:
        self._playlists = playlists
        self._tracks = tracks

    def list(self) -> list[PlaylistView]:
        return [self._view(p) for p in self._playlists.list()]

    def get(self, playlist_id: int) -> Result[PlaylistView]:
        playlist = self._playlists.get(playlist_id)
        if playlist is None:
            return PlaylistNotFoundError(playlist_id)
        return Ok(self._view(playlist))

    def create(self, name: str, description: str | None = None) -> Result[Playlist]:
        if self._playlists.exists_by_name(name):
            logger.error("Playlist name already exists: '%s'", name)
            return DuplicatePlaylistError(name)
        try:
            created = self._playlists.create(
                Playlist(name=name, description=description)
            )
        except IntegrityError:
            return DuplicatePlaylistError(name)
        logger.info("Playlist '%s' created with ID %s", name, created.id)
        return Ok(created)

    def delete(self, playlist_id: int) -> Result[None]:
        if not self._playlists.delete(playlist_id):
            return PlaylistNotFoundError(playlist_id)
        logger.info("Playlist ID %s deleted", playlist_id)
        return Ok(None)

    def add_track(self, playlist_id: int, track_id: int) -> Result[PlaylistView]:
        checked = self._check_refs(playlist_id, track_id)
        if not isinstance(checked, Ok):
            return checked
        if self._playlists.has_track(playlist_id, track_id):
            return TrackAlreadyInPlaylistError(playlist_id, track_id)
        try:
            self._playlists.add_track(playlist_id, track_id)
        except IntegrityError:
            return TrackAlreadyInPlaylistError(playlist_id, track_id)
        logger.info("Track ID %s added to playlist ID %s", track_id, playlist_id)
        return Ok(self._view(checked.value))

    def remove_track(self, playlist_id: int, track_id: int) -> Result[PlaylistView]:
        checked = self._check_refs(playlist_id, track_id)
        if not isinstance(checked, Ok):
            return checked
        if not self._playlists.remove_track(playlist_id, track_id):
            return TrackNotInPlaylistError(playlist_id, track_id)
        logger.info("Track ID %s removed from playlist ID %s", track_id, playlist_id)
        return Ok(self._view(checked.value))

    def _check_refs(self, playlist_id: int, track_id: int) -> Result[Playlist]:
        playlist = self._playlists.get(playlist_id)
        if playlist is None:
            return PlaylistNotFoundError(playlist_id)
        if self._tracks.get(track_id) is None:
            return TrackNotFoundError(track_id)
        return Ok(playlist)

    def _view(self, playlist: Playlist) -> PlaylistView:
        assert playlist.id is not None
        return PlaylistView(playlist=playlist, tracks=self._playlists.tracks(playlist.id))
