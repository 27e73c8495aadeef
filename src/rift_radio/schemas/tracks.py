"""Track request/response schemas."""

from pydantic import BaseModel, Field

from rift_radio.core.models import TrackMetadata
from rift_radio.schemas.types import UTCDateTime


class TrackForm(BaseModel):
    """Track metadata sent as multipart form fields alongside the file."""

    model_config = {"str_strip_whitespace": True}

    name: str = Field(min_length=1, max_length=200)
    artist: str = Field(default="", max_length=200)
    album: str = Field(default="", max_length=200)
    genre: str = Field(default="", max_length=100)
    release_year: int
    liked: bool = False

    def to_metadata(self) -> TrackMetadata:
        return TrackMetadata(
            name=self.name,
            artist=self.artist,
            album=self.album,
            genre=self.genre,
            release_year=self.release_year,
            liked=self.liked,
        )


class TrackResponse(BaseModel):
    """Track response."""

    id: int
    name: str
    artist: str
    album: str
    genre: str
    release_year: int
    liked: bool
    file_path: str
    created_at: UTCDateTime

    model_config = {"from_attributes": True}


class TrackListResponse(BaseModel):
    """One page of tracks."""

    items: list[TrackResponse]
    page: int
    page_size: int
    total: int


class TrackPathResponse(BaseModel):
    """Stored path of a track."""

    path: str
