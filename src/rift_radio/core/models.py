"""Value objects passed between the HTTP layer, the CLI and the services."""

from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path
from typing import BinaryIO, Protocol

from rift_radio.core.types import AUDIO_EXTENSION, AUDIO_MEDIA_TYPE, CHUNK_SIZE


class ByteSink(Protocol):
    """Anything bytes can be pushed into (response body, file, stdout)."""

    def write(self, data: bytes, /) -> object: ...

    def flush(self) -> None: ...


@dataclass(frozen=True)
class Upload:
    """An inbound binary payload of known size.

    Attributes:
        stream: Readable binary stream positioned at the start of the payload.
        filename: Filename declared by the client (may be blank).
        content_type: Media type declared by the client.
        size: Payload size in bytes.
    """

    stream: BinaryIO
    filename: str | None
    content_type: str | None
    size: int

    @classmethod
    def from_path(cls, path: Path, content_type: str | None = AUDIO_MEDIA_TYPE) -> "Upload":
        """Open a local file as an upload. Caller closes ``stream``."""
        return cls(
            stream=path.open("rb"),
            filename=path.name,
            content_type=content_type,
            size=path.stat().st_size,
        )


@dataclass(frozen=True)
class TrackMetadata:
    """Metadata fields supplied on create and edit."""

    name: str
    release_year: int
    artist: str = ""
    album: str = ""
    genre: str = ""
    liked: bool = False


@dataclass(frozen=True)
class StoredFile:
    """An existence-checked file backing a track."""

    track_id: int
    path: Path
    display_name: str
    media_type: str = AUDIO_MEDIA_TYPE

    @property
    def filename(self) -> str:
        """On-disk file name."""
        return self.path.name

    @property
    def attachment_name(self) -> str:
        """Download name derived from the track's display name."""
        return f"{self.display_name}.{AUDIO_EXTENSION}"


@dataclass
class StreamHandle:
    """An opened stored file ready to be streamed out.

    The handle owns ``source``: iterating ``iter_chunks`` to the end, or
    calling ``close``, releases it.
    """

    stored: StoredFile
    source: BinaryIO
    chunk_size: int = CHUNK_SIZE
    _closed: bool = field(default=False, init=False, repr=False)

    def iter_chunks(self) -> Iterator[bytes]:
        try:
            while chunk := self.source.read(self.chunk_size):
                yield chunk
        finally:
            self.close()

    def close(self) -> None:
        if not self._closed:
            self.source.close()
            self._closed = True
