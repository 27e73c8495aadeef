"""Playlist management endpoints."""

from fastapi import APIRouter, status

from rift_radio.api.deps import PlaylistsDep
from rift_radio.api.exceptions import ErrorResponse, unwrap
from rift_radio.schemas.playlists import (
    PlaylistCreate,
    PlaylistListResponse,
    PlaylistResponse,
    PlaylistSummary,
)

router = APIRouter(prefix="/playlists", tags=["playlists"])

_NOT_FOUND = {404: {"model": ErrorResponse, "description": "Playlist or track not found"}}
_CONFLICT = {409: {"model": ErrorResponse, "description": "Conflicts with existing state"}}


@router.get("", response_model=PlaylistListResponse)
def list_playlists(playlists: PlaylistsDep) -> PlaylistListResponse:
    """List all playlists with their tracks."""
    return PlaylistListResponse(
        items=[PlaylistResponse.from_view(v) for v in playlists.list()]
    )


@router.post(
    "",
    response_model=PlaylistSummary,
    status_code=status.HTTP_201_CREATED,
    responses=_CONFLICT,
)
def create_playlist(data: PlaylistCreate, playlists: PlaylistsDep) -> PlaylistSummary:
    """Create an empty playlist."""
    created = unwrap(playlists.create(data.name, data.description))
    return PlaylistSummary.model_validate(created)


@router.get("/{playlist_id}", response_model=PlaylistResponse, responses=_NOT_FOUND)
def get_playlist(playlist_id: int, playlists: PlaylistsDep) -> PlaylistResponse:
    """Get a playlist and its tracks."""
    return PlaylistResponse.from_view(unwrap(playlists.get(playlist_id)))


@router.delete(
    "/{playlist_id}", status_code=status.HTTP_204_NO_CONTENT, responses=_NOT_FOUND
)
def delete_playlist(playlist_id: int, playlists: PlaylistsDep) -> None:
    """Delete a playlist. Its tracks stay in the catalog."""
    unwrap(playlists.delete(playlist_id))


@router.post(
    "/{playlist_id}/tracks/{track_id}",
    response_model=PlaylistResponse,
    responses={**_NOT_FOUND, **_CONFLICT},
)
def add_track(
    playlist_id: int, track_id: int, playlists: PlaylistsDep
) -> PlaylistResponse:
    """Add a track to a playlist."""
    return PlaylistResponse.from_view(unwrap(playlists.add_track(playlist_id, track_id)))


@router.delete(
    "/{playlist_id}/tracks/{track_id}",
    response_model=PlaylistResponse,
    responses=_NOT_FOUND,
)
def remove_track(
    playlist_id: int, track_id: int, playlists: PlaylistsDep
) -> PlaylistResponse:
    """Remove a track from a playlist."""
    return PlaylistResponse.from_view(
        unwrap(playlists.remove_track(playlist_id, track_id))
    )
