"""Track endpoints: upload, edit, delete, listing and file retrieval.

Handlers are sync functions so FastAPI runs the blocking file and database
work in its thread pool.
"""

from typing import Annotated
from urllib.parse import quote

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import FileResponse, StreamingResponse
from pydantic import ValidationError
from starlette.background import BackgroundTask

from rift_radio.api.deps import CatalogDep, RetrievalDep
from rift_radio.api.exceptions import ErrorResponse, unwrap
from rift_radio.core.models import Upload
from rift_radio.schemas.tracks import (
    TrackForm,
    TrackListResponse,
    TrackPathResponse,
    TrackResponse,
)

router = APIRouter(prefix="/tracks", tags=["tracks"])

_NOT_FOUND = {404: {"model": ErrorResponse, "description": "Track or file not found"}}
_WRITE_ERRORS = {
    400: {"model": ErrorResponse, "description": "Invalid upload or metadata"},
    409: {"model": ErrorResponse, "description": "Duplicate name or file"},
    503: {"model": ErrorResponse, "description": "Storage unavailable"},
}


def _track_form(
    name: Annotated[str, Form()],
    release_year: Annotated[int, Form()],
    artist: Annotated[str, Form()] = "",
    album: Annotated[str, Form()] = "",
    genre: Annotated[str, Form()] = "",
    liked: Annotated[bool, Form()] = False,
) -> TrackForm:
    try:
        return TrackForm(
            name=name,
            release_year=release_year,
            artist=artist,
            album=album,
            genre=genre,
            liked=liked,
        )
    except ValidationError as e:
        raise RequestValidationError(e.errors()) from e


TrackFormDep = Annotated[TrackForm, Depends(_track_form)]


def _to_upload(file: UploadFile) -> Upload:
    """Wrap a multipart file; size is measured when the client omits it."""
    size = file.size
    if size is None:
        file.file.seek(0, 2)
        size = file.file.tell()
        file.file.seek(0)
    return Upload(
        stream=file.file,
        filename=file.filename,
        content_type=file.content_type,
        size=size,
    )


def content_disposition(filename: str) -> str:
    """Attachment header value, with an RFC 5987 form for non-ASCII names."""
    if filename.isascii() and '"' not in filename:
        return f'attachment; filename="{filename}"'
    return f"attachment; filename*=utf-8''{quote(filename)}"


@router.get("", response_model=TrackListResponse)
def list_tracks(
    catalog: CatalogDep,
    page: Annotated[int, Query(ge=0)] = 0,
    page_size: Annotated[int, Query(ge=1, le=100)] = 50,
) -> TrackListResponse:
    """List tracks, one page at a time."""
    tracks = catalog.list(page=page, page_size=page_size)
    return TrackListResponse(
        items=[TrackResponse.model_validate(t) for t in tracks],
        page=page,
        page_size=page_size,
        total=catalog.count(),
    )


@router.post(
    "",
    response_model=TrackResponse,
    status_code=status.HTTP_201_CREATED,
    responses=_WRITE_ERRORS,
)
def create_track(
    file: Annotated[UploadFile, File()],
    form: TrackFormDep,
    catalog: CatalogDep,
) -> TrackResponse:
    """Upload an audio file and catalog it."""
    track = unwrap(catalog.create(_to_upload(file), form.to_metadata()))
    return TrackResponse.model_validate(track)


@router.get("/{track_id}", response_model=TrackResponse, responses=_NOT_FOUND)
def get_track(track_id: int, catalog: CatalogDep) -> TrackResponse:
    """Get a track record."""
    return TrackResponse.model_validate(unwrap(catalog.get(track_id)))


@router.put(
    "/{track_id}",
    response_model=TrackResponse,
    responses={**_NOT_FOUND, **_WRITE_ERRORS},
)
def update_track(
    track_id: int,
    form: TrackFormDep,
    catalog: CatalogDep,
    file: Annotated[UploadFile | None, File()] = None,
) -> TrackResponse:
    """Edit track metadata, optionally replacing the audio file."""
    upload = _to_upload(file) if file is not None else None
    track = unwrap(catalog.update(track_id, upload, form.to_metadata()))
    return TrackResponse.model_validate(track)


@router.delete(
    "/{track_id}", status_code=status.HTTP_204_NO_CONTENT, responses=_NOT_FOUND
)
def delete_track(track_id: int, catalog: CatalogDep) -> None:
    """Delete a track and its stored file."""
    unwrap(catalog.remove(track_id))


@router.get("/{track_id}/path", response_model=TrackPathResponse, responses=_NOT_FOUND)
def get_track_path(track_id: int, retrieval: RetrievalDep) -> TrackPathResponse:
    """Get the storage path of a track."""
    return TrackPathResponse(path=unwrap(retrieval.get_path(track_id)))


@router.get("/{track_id}/file", response_class=FileResponse, responses=_NOT_FOUND)
def get_track_file(track_id: int, retrieval: RetrievalDep) -> FileResponse:
    """Download the stored file as a single attachment."""
    stored = unwrap(retrieval.resolve_for_read(track_id))
    return FileResponse(
        stored.path,
        media_type=stored.media_type,
        filename=stored.filename,
    )


@router.get(
    "/{track_id}/download", response_class=StreamingResponse, responses=_NOT_FOUND
)
def download_track(track_id: int, retrieval: RetrievalDep) -> StreamingResponse:
    """Stream the track, named after its display name."""
    handle = unwrap(retrieval.open_stream(track_id))
    # The body iterator never starts if the client leaves before the first chunk
    return StreamingResponse(
        handle.iter_chunks(),
        media_type=handle.stored.media_type,
        headers={
            "Content-Disposition": content_disposition(handle.stored.attachment_name)
        },
        background=BackgroundTask(handle.close),
    )
