"""Tests for PlaylistService."""

from collections.abc import Callable
from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import IntegrityError

from rift_radio.core.models import TrackMetadata, Upload
from rift_radio.core.result import Ok
from rift_radio.db import Playlist, Track
from rift_radio.exceptions import (
    DuplicatePlaylistError,
    PlaylistNotFoundError,
    TrackAlreadyInPlaylistError,
    TrackNotFoundError,
    TrackNotInPlaylistError,
)
from rift_radio.services import CatalogService, PlaylistService


@pytest.fixture
def track(
    catalog: CatalogService,
    make_upload: Callable[..., Upload],
    make_metadata: Callable[..., TrackMetadata],
) -> Track:
    result = catalog.create(make_upload(), make_metadata())
    assert isinstance(result, Ok)
    return result.value


@pytest.fixture
def playlist(playlists: PlaylistService) -> Playlist:
    result = playlists.create("Road Trip", "Long drives")
    assert isinstance(result, Ok)
    return result.value


class TestCreate:
    def test_create(self, playlists: PlaylistService) -> None:
        result = playlists.create("Mix")

        assert isinstance(result, Ok)
        assert result.value.id is not None
        assert result.value.name == "Mix"
        assert result.value.description is None

    def test_duplicate_name(self, playlists: PlaylistService, playlist: Playlist) -> None:
        result = playlists.create("Road Trip")
        assert isinstance(result, DuplicatePlaylistError)
        assert result.status_code == 409

    def test_store_conflict_mapped(self) -> None:
        """Should map a uniqueness violation at commit to a conflict."""
        repo = MagicMock()
        repo.exists_by_name.return_value = False
        repo.create.side_effect = IntegrityError("INSERT", {}, Exception("UNIQUE"))
        service = PlaylistService(playlists=repo, tracks=MagicMock())

        assert isinstance(service.create("Mix"), DuplicatePlaylistError)


class TestQueries:
    def test_list_with_tracks(
        self, playlists: PlaylistService, playlist: Playlist, track: Track
    ) -> None:
        assert playlist.id is not None and track.id is not None
        playlists.add_track(playlist.id, track.id)
        playlists.create("Empty")

        views = playlists.list()

        assert [(v.playlist.name, v.total_tracks) for v in views] == [
            ("Road Trip", 1),
            ("Empty", 0),
        ]
        assert views[0].tracks[0].name == "Song"

    def test_get_missing(self, playlists: PlaylistService) -> None:
        result = playlists.get(3)
        assert isinstance(result, PlaylistNotFoundError)
        assert result.playlist_id == 3


class TestMembership:
    def test_add_and_remove(
        self, playlists: PlaylistService, playlist: Playlist, track: Track
    ) -> None:
        assert playlist.id is not None and track.id is not None

        added = playlists.add_track(playlist.id, track.id)
        assert isinstance(added, Ok)
        assert [t.id for t in added.value.tracks] == [track.id]

        removed = playlists.remove_track(playlist.id, track.id)
        assert isinstance(removed, Ok)
        assert removed.value.total_tracks == 0

    def test_add_twice(
        self, playlists: PlaylistService, playlist: Playlist, track: Track
    ) -> None:
        assert playlist.id is not None and track.id is not None
        playlists.add_track(playlist.id, track.id)

        result = playlists.add_track(playlist.id, track.id)

        assert isinstance(result, TrackAlreadyInPlaylistError)

    def test_remove_non_member(
        self, playlists: PlaylistService, playlist: Playlist, track: Track
    ) -> None:
        assert playlist.id is not None and track.id is not None
        result = playlists.remove_track(playlist.id, track.id)
        assert isinstance(result, TrackNotInPlaylistError)
        assert result.status_code == 404

    @pytest.mark.parametrize("operation", ["add_track", "remove_track"])
    def test_unknown_playlist(
        self, playlists: PlaylistService, track: Track, operation: str
    ) -> None:
        assert track.id is not None
        result = getattr(playlists, operation)(404, track.id)
        assert isinstance(result, PlaylistNotFoundError)

    @pytest.mark.parametrize("operation", ["add_track", "remove_track"])
    def test_unknown_track(
        self, playlists: PlaylistService, playlist: Playlist, operation: str
    ) -> None:
        assert playlist.id is not None
        result = getattr(playlists, operation)(playlist.id, 404)
        assert isinstance(result, TrackNotFoundError)


class TestDelete:
    def test_delete_keeps_tracks(
        self,
        playlists: PlaylistService,
        catalog: CatalogService,
        playlist: Playlist,
        track: Track,
    ) -> None:
        """Should remove the playlist but not its member tracks."""
        assert playlist.id is not None and track.id is not None
        playlists.add_track(playlist.id, track.id)

        assert playlists.delete(playlist.id) == Ok(None)

        assert isinstance(playlists.get(playlist.id), PlaylistNotFoundError)
        assert isinstance(catalog.get(track.id), Ok)

    def test_delete_missing(self, playlists: PlaylistService) -> None:
        assert isinstance(playlists.delete(1), PlaylistNotFoundError)
