"""Tests for track and playlist repositories."""

import pytest
from sqlalchemy.exc import IntegrityError

from rift_radio.db import Playlist, PlaylistRepository, Track, TrackRepository


def _track(name: str = "Song", file_path: str = "/srv/song.mp3", **kwargs: object) -> Track:
    return Track(name=name, file_path=file_path, release_year=2000, **kwargs)


class TestTrackRepository:
    """Tests for TrackRepository."""

    def test_create_and_get(self, repository: TrackRepository) -> None:
        """Should create and retrieve a track."""
        created = repository.create(_track(artist="Band"))

        assert created.id is not None
        fetched = repository.get(created.id)
        assert fetched is not None
        assert fetched.name == "Song"
        assert fetched.artist == "Band"
        assert fetched.liked is False

    def test_get_missing(self, repository: TrackRepository) -> None:
        assert repository.get(999) is None

    def test_unique_name(self, repository: TrackRepository) -> None:
        """Should reject a second track with the same name."""
        repository.create(_track())
        with pytest.raises(IntegrityError):
            repository.create(_track(file_path="/srv/other.mp3"))

    def test_unique_path(self, repository: TrackRepository) -> None:
        """Should reject a second track with the same file path."""
        repository.create(_track())
        with pytest.raises(IntegrityError):
            repository.create(_track(name="Other"))

    def test_exists_by_name(self, repository: TrackRepository) -> None:
        created = repository.create(_track())
        assert repository.exists_by_name("Song")
        assert not repository.exists_by_name("Other")
        assert not repository.exists_by_name("Song", exclude_id=created.id)

    def test_exists_by_path(self, repository: TrackRepository) -> None:
        created = repository.create(_track())
        assert repository.exists_by_path("/srv/song.mp3")
        assert not repository.exists_by_path("/srv/other.mp3")
        assert not repository.exists_by_path("/srv/song.mp3", exclude_id=created.id)

    def test_list_pages(self, repository: TrackRepository) -> None:
        """Should page through tracks in ID order."""
        for i in range(5):
            repository.create(_track(name=f"Song {i}", file_path=f"/srv/{i}.mp3"))

        assert [t.name for t in repository.list()] == [f"Song {i}" for i in range(5)]
        assert [t.name for t in repository.list(offset=2, limit=2)] == [
            "Song 2",
            "Song 3",
        ]
        assert repository.list(offset=10, limit=2) == []
        assert repository.count() == 5

    def test_update(self, repository: TrackRepository) -> None:
        created = repository.create(_track())
        assert created.id is not None

        updated = repository.update(created.id, name="Renamed", liked=True)

        assert updated is not None
        assert updated.name == "Renamed"
        assert updated.liked is True
        assert updated.file_path == "/srv/song.mp3"

    def test_update_missing(self, repository: TrackRepository) -> None:
        assert repository.update(999, name="X") is None

    def test_delete_returns_track(self, repository: TrackRepository) -> None:
        """Should return the deleted row with its attributes loaded."""
        created = repository.create(_track())
        assert created.id is not None

        deleted = repository.delete(created.id)

        assert deleted is not None
        assert deleted.file_path == "/srv/song.mp3"
        assert repository.get(created.id) is None
        assert repository.delete(created.id) is None

    def test_delete_removes_memberships(
        self, repository: TrackRepository, playlist_repository: PlaylistRepository
    ) -> None:
        track = repository.create(_track())
        playlist = playlist_repository.create(Playlist(name="Mix"))
        assert track.id is not None and playlist.id is not None
        playlist_repository.add_track(playlist.id, track.id)

        repository.delete(track.id)

        assert not playlist_repository.has_track(playlist.id, track.id)
        assert playlist_repository.tracks(playlist.id) == []


class TestPlaylistRepository:
    """Tests for PlaylistRepository."""

    def test_create_and_list(self, playlist_repository: PlaylistRepository) -> None:
        playlist_repository.create(Playlist(name="B"))
        playlist_repository.create(Playlist(name="A", description="first"))

        names = [p.name for p in playlist_repository.list()]
        assert names == ["B", "A"]
        assert playlist_repository.exists_by_name("A")
        assert not playlist_repository.exists_by_name("C")

    def test_unique_name(self, playlist_repository: PlaylistRepository) -> None:
        playlist_repository.create(Playlist(name="Mix"))
        with pytest.raises(IntegrityError):
            playlist_repository.create(Playlist(name="Mix"))

    def test_membership(
        self, repository: TrackRepository, playlist_repository: PlaylistRepository
    ) -> None:
        """Should keep member tracks in insertion order."""
        first = repository.create(_track(name="First", file_path="/srv/1.mp3"))
        second = repository.create(_track(name="Second", file_path="/srv/2.mp3"))
        playlist = playlist_repository.create(Playlist(name="Mix"))
        assert first.id and second.id and playlist.id

        playlist_repository.add_track(playlist.id, second.id)
        playlist_repository.add_track(playlist.id, first.id)

        assert [t.name for t in playlist_repository.tracks(playlist.id)] == [
            "Second",
            "First",
        ]
        with pytest.raises(IntegrityError):
            playlist_repository.add_track(playlist.id, first.id)

        assert playlist_repository.remove_track(playlist.id, first.id)
        assert not playlist_repository.remove_track(playlist.id, first.id)

    def test_delete_keeps_tracks(
        self, repository: TrackRepository, playlist_repository: PlaylistRepository
    ) -> None:
        track = repository.create(_track())
        playlist = playlist_repository.create(Playlist(name="Mix"))
        assert track.id and playlist.id
        playlist_repository.add_track(playlist.id, track.id)

        assert playlist_repository.delete(playlist.id)

        assert playlist_repository.get(playlist.id) is None
        assert repository.get(track.id) is not None
        assert not playlist_repository.delete(playlist.id)
