"""Read-only access to stored track files."""

import logging
from pathlib import Path

from rift_radio.core.models import ByteSink, StoredFile, StreamHandle
from rift_radio.core.result import Ok, Result
from rift_radio.exceptions import FileMissingError, TrackNotFoundError
from rift_radio.services.protocols import TrackRepo
from rift_radio.storage.transfer import TransferEngine

logger = logging.getLogger(__name__)


class RetrievalGateway:
    """Resolve track records to live, existence-checked files.

    Two serving modes are supported: a whole-file resource for a single
    attached download (``resolve_for_read``), and a push-style stream copied
    into a sink (``stream_to``, or ``open_stream`` for response bodies that
    pull chunks).
    """

    def __init__(self, repository: TrackRepo, transfer: TransferEngine) -> None:
        self._repository = repository
        self._transfer = transfer

    def get_path(self, track_id: int) -> Result[str]:
        """Return the stored path of a track without touching the filesystem."""
        logger.info("Retrieving file path for track ID %s", track_id)
        track = self._repository.get(track_id)
        if track is None:
            logger.error("Track with ID %s not found", track_id)
            return TrackNotFoundError(track_id)
        return Ok(track.file_path)

    def resolve_for_read(self, track_id: int) -> Result[StoredFile]:
        """Look up a track and check that its file exists."""
        logger.info("Loading file resource for track ID %s", track_id)
        track = self._repository.get(track_id)
        if track is None:
            logger.error("Track with ID %s not found", track_id)
            return TrackNotFoundError(track_id)

        path = Path(track.file_path)
        if not path.is_file():
            logger.error("Resource missing at '%s'", path)
            return FileMissingError(path, track_id=track_id)

        return Ok(StoredFile(track_id=track_id, path=path, display_name=track.name))

    def open_stream(self, track_id: int) -> Result[StreamHandle]:
        """Resolve and open a track file before any response bytes are sent."""
        resolved = self.resolve_for_read(track_id)
        if not isinstance(resolved, Ok):
            return resolved
        stored = resolved.value

        opened = self._transfer.open_source(stored.path)
        if isinstance(opened, FileMissingError):
            return FileMissingError(stored.path, track_id=track_id)
        if not isinstance(opened, Ok):
            return opened
        return Ok(StreamHandle(stored=stored, source=opened.value))

    def stream_to(self, track_id: int, sink: ByteSink) -> Result[int]:
        """Copy a track's bytes into ``sink``.

        Returns:
            ``Ok(bytes_written)`` or the lookup or transfer error.
        """
        logger.info("Download initiated for track ID %s", track_id)
        resolved = self.resolve_for_read(track_id)
        if not isinstance(resolved, Ok):
            return resolved

        result = self._transfer.egress(resolved.value.path, sink)
        if isinstance(result, FileMissingError):
            return FileMissingError(result.path, track_id=track_id)
        if isinstance(result, Ok):
            logger.info("Download completed for track ID %s", track_id)
        return result
