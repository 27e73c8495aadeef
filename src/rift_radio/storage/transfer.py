"""Byte transfer between streams and durable storage.

Ingest writes to a uniquely named ``.part`` file beside the destination,
fsyncs it, then publishes it at the destination. A new file is published
with a hard link, which fails instead of overwriting bytes another writer
already placed there; only an in-place replacement uses ``os.replace``.
A destination path either holds a complete payload or nothing. Egress
copies with a fixed-size buffer into any sink.
"""

import logging
import os
import tempfile
import time
from pathlib import Path
from typing import BinaryIO

from rift_radio.core.models import ByteSink
from rift_radio.core.result import Ok, Result
from rift_radio.core.types import CHUNK_SIZE, PART_SUFFIX, STALE_PART_AGE
from rift_radio.exceptions import (
    DuplicatePathError,
    FileMissingError,
    IOFailureError,
    StorageUnavailableError,
)

logger = logging.getLogger(__name__)

# Stored files are readable by other local services (web servers, players)
STORED_FILE_MODE = 0o644


def cleanup_part_files(root: Path, *, older_than: float = STALE_PART_AGE) -> int:
    """Remove ``.part`` files left behind by interrupted ingests.

    Files modified within the last ``older_than`` seconds are kept, since
    they may belong to an ingest still running in another process.

    Args:
        root: Storage root to search.
        older_than: Minimum age in seconds of a file to remove.

    Returns:
        Number of ``.part`` files removed.
    """
    cutoff = time.time() - older_than
    cleaned = 0
    try:
        for stale in root.rglob(f"*{PART_SUFFIX}"):
            try:
                if stale.stat().st_mtime > cutoff:
                    continue
                stale.unlink(missing_ok=True)
                cleaned += 1
            except OSError as e:
                logger.warning("Could not remove stale file '%s': %s", stale, e)
    except OSError:
        pass  # Root might not exist yet
    if cleaned:
        logger.info("Removed %d stale %s file(s) from '%s'", cleaned, PART_SUFFIX, root)
    return cleaned


class TransferEngine:
    """Moves bytes in and out of the storage root using a bounded buffer."""

    def __init__(self, chunk_size: int = CHUNK_SIZE) -> None:
        if chunk_size < 1024:
            raise ValueError(f"chunk_size must be at least 1024 bytes, got {chunk_size}")
        self._chunk_size = chunk_size

    def _copy(self, source: BinaryIO, sink: ByteSink) -> int:
        written = 0
        while chunk := source.read(self._chunk_size):
            sink.write(chunk)
            written += len(chunk)
        return written

    def ingest(
        self, source: BinaryIO, destination: Path, *, overwrite: bool = False
    ) -> Result[int]:
        """Copy ``source`` into ``destination`` as a whole file.

        Args:
            source: Stream to read until exhausted.
            destination: Final path of the stored file.
            overwrite: Replace an existing file at ``destination``. Without
                it, an existing file is left untouched and reported as a
                conflict.

        Returns:
            ``Ok(bytes_written)``, ``DuplicatePathError`` if ``destination``
            already exists and ``overwrite`` is off, ``StorageUnavailableError``
            if the directory cannot be created, or ``IOFailureError`` if the
            copy fails.
        """
        directory = destination.parent
        try:
            directory.mkdir(parents=True, exist_ok=True)
            fd, temp_name = tempfile.mkstemp(
                dir=directory, prefix=f"{destination.name}.", suffix=PART_SUFFIX
            )
        except OSError as e:
            logger.error("Storage directory unavailable at '%s': %s", directory, e)
            return StorageUnavailableError(
                f"Storage directory unavailable: {directory}"
            )

        in_flight = Path(temp_name)
        logger.debug("Transferring file to '%s' via '%s'", destination, in_flight.name)
        try:
            with os.fdopen(fd, "wb") as fh:
                written = self._copy(source, fh)
                fh.flush()
                os.fsync(fh.fileno())
            in_flight.chmod(STORED_FILE_MODE)
            if overwrite:
                os.replace(in_flight, destination)
            else:
                os.link(in_flight, destination)
        except FileExistsError:
            in_flight.unlink(missing_ok=True)
            logger.error("File already exists at '%s'", destination)
            return DuplicatePathError(destination)
        except OSError as e:
            logger.error("Transfer to '%s' failed: %s", destination, e, exc_info=True)
            in_flight.unlink(missing_ok=True)
            return IOFailureError(f"Failed to store file {destination.name}")

        try:
            in_flight.unlink(missing_ok=True)
        except OSError as e:
            logger.warning("Could not remove in-flight file '%s': %s", in_flight, e)

        logger.debug("Wrote %d bytes to '%s'", written, destination)
        return Ok(written)

    def open_source(self, path: Path) -> Result[BinaryIO]:
        """Open a stored file for reading after an existence check.

        A file removed between the check and the open is reported as
        ``FileMissingError`` rather than an I/O failure.
        """
        if not path.is_file():
            logger.error("Resource missing at '%s'", path)
            return FileMissingError(path)
        try:
            return Ok(path.open("rb"))
        except FileNotFoundError:
            logger.error("Resource vanished before open at '%s'", path)
            return FileMissingError(path)
        except OSError as e:
            logger.error("Could not open '%s': %s", path, e)
            return IOFailureError(f"Could not read file {path.name}")

    def egress(self, path: Path, sink: ByteSink) -> Result[int]:
        """Copy a stored file into ``sink`` and flush it.

        Returns:
            ``Ok(bytes_written)``, ``FileMissingError`` or ``IOFailureError``.
        """
        opened = self.open_source(path)
        if not isinstance(opened, Ok):
            return opened

        try:
            with opened.value as source:
                written = self._copy(source, sink)
            sink.flush()
        except OSError as e:
            logger.error("Egress from '%s' failed: %s", path, e, exc_info=True)
            return IOFailureError(f"Failed to stream file {path.name}")

        return Ok(written)

    def remove(self, path: Path) -> bool:
        """Delete a stored file, best effort.

        Returns:
            True if the file is gone afterwards (removed, or already
            missing), False if it could not be removed. Never raises.
        """
        try:
            path.unlink()
        except FileNotFoundError:
            logger.warning("File '%s' not found during deletion", path)
            return True
        except OSError as e:
            logger.error("File deletion unsuccessful for '%s': %s", path, e)
            return False
        logger.info("File '%s' deleted", path)
        return True
