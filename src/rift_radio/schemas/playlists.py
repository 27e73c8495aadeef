"""Playlist request/response schemas."""

from pydantic import BaseModel, Field

from rift_radio.schemas.tracks import TrackResponse
from rift_radio.schemas.types import UTCDateTime
from rift_radio.services.playlists import PlaylistView


class PlaylistCreate(BaseModel):
    """Request to create a playlist."""

    name: str = Field(min_length=1, max_length=50)
    description: str | None = Field(default=None, max_length=500)


class PlaylistSummary(BaseModel):
    """Playlist without members, returned on create."""

    id: int
    name: str
    description: str | None
    created_at: UTCDateTime

    model_config = {"from_attributes": True}


class PlaylistResponse(PlaylistSummary):
    """Playlist with its member tracks."""

    total_tracks: int
    tracks: list[TrackResponse]

    @classmethod
    def from_view(cls, view: PlaylistView) -> "PlaylistResponse":
        summary = PlaylistSummary.model_validate(view.playlist)
        return cls(
            **summary.model_dump(),
            total_tracks=view.total_tracks,
            tracks=[TrackResponse.model_validate(t) for t in view.tracks],
        )


class PlaylistListResponse(BaseModel):
    """List of playlists response."""

    items: list[PlaylistResponse]
