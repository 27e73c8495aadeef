"""Track commands: import, export and list."""

import sys
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from rift_radio.cli.utils import (
    echo_error,
    echo_info,
    echo_success,
    open_catalog,
    unwrap_or_exit,
)
from rift_radio.core.models import StreamHandle, TrackMetadata, Upload


def import_track(
    source: Path = typer.Argument(..., help="MP3 file to import"),
    name: str | None = typer.Option(
        None, "--name", "-n", help="Display name (defaults to the file stem)"
    ),
    year: int = typer.Option(..., "--year", "-y", help="Release year"),
    artist: str = typer.Option("", "--artist", "-a", help="Artist"),
    album: str = typer.Option("", "--album", help="Album"),
    genre: str = typer.Option("", "--genre", "-g", help="Genre"),
    liked: bool = typer.Option(False, "--liked", help="Mark the track as liked"),
) -> None:
    """
    Import a local MP3 file into the catalog.

    The file is copied into the storage directory; the source file is kept.

    Examples:
        rift-radio import ~/Music/song.mp3 --year 1999
        rift-radio import song.mp3 --name "Song" --artist "Band" -y 2004
    """
    if not source.is_file():
        echo_error(f"File not found: {source}")

    metadata = TrackMetadata(
        name=(name or source.stem).strip(),
        release_year=year,
        artist=artist,
        album=album,
        genre=genre,
        liked=liked,
    )

    upload = Upload.from_path(source)
    try:
        with open_catalog() as services:
            track = unwrap_or_exit(services.catalog.create(upload, metadata))
    finally:
        upload.stream.close()

    echo_success(f"Imported '{track.name}' as track {track.id}")


def _save(handle: StreamHandle, dest: Path) -> int:
    """Write an opened track to ``dest``; nothing touches ``dest`` before that."""
    written = 0
    try:
        with dest.open("wb") as sink:
            for chunk in handle.iter_chunks():
                sink.write(chunk)
                written += len(chunk)
    except OSError as e:
        echo_error(f"Could not write {dest}: {e}")
    finally:
        handle.close()
    return written


def export_track(
    track_id: int = typer.Argument(..., help="Track ID"),
    dest: str = typer.Argument("-", help="Destination file, or '-' for stdout"),
) -> None:
    """
    Write a stored track to a file or to stdout.

    Examples:
        rift-radio export 3 song.mp3
        rift-radio export 3 - | mpv -
    """
    with open_catalog() as services:
        if dest == "-":
            written = unwrap_or_exit(
                services.retrieval.stream_to(track_id, sys.stdout.buffer)
            )
        else:
            handle = unwrap_or_exit(services.retrieval.open_stream(track_id))
            written = _save(handle, Path(dest))

    echo_success(f"Exported track {track_id} ({written} bytes)")


def list_tracks(
    page: int = typer.Option(0, "--page", min=0, help="Page number"),
    page_size: int = typer.Option(
        50, "--page-size", min=1, max=100, help="Tracks per page"
    ),
) -> None:
    """List cataloged tracks."""
    with open_catalog() as services:
        tracks = services.catalog.list(page=page, page_size=page_size)
        total = services.catalog.count()

    if not tracks:
        echo_info("No tracks found.")
        return

    table = Table(title=f"Tracks (page {page}, {len(tracks)} of {total})")
    table.add_column("ID", justify="right", style="cyan")
    table.add_column("Name")
    table.add_column("Artist")
    table.add_column("Album")
    table.add_column("Year", justify="right")
    table.add_column("Liked", justify="center")
    for track in tracks:
        table.add_row(
            str(track.id),
            track.name,
            track.artist,
            track.album,
            str(track.release_year),
            "*" if track.liked else "",
        )
    Console().print(table)
