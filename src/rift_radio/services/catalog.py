"""Track catalog service: keeps stored files and track records consistent.

Create:
    NoRecord -> Validated -> PathResolved -> FileWritten -> RecordCommitted

Edit with a replacement file:
    RecordExists -> Validated -> PathResolved -> NewFileWritten
    -> RecordUpdated -> OldFileRemoved (best effort)

Delete:
    RecordExists -> RecordRemoved -> FileRemoved (best effort)

A file is only visible at its final path once fully written, and a record
only points at it after that. A new file never overwrites an existing one,
so when the record write fails the file removed again is always the one this
call wrote and no orphan is left behind.
"""

import logging
from collections.abc import Callable
from pathlib import Path
from typing import Any

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from rift_radio.core.models import TrackMetadata, Upload
from rift_radio.core.result import Ok, Result
from rift_radio.core.types import MAX_UPLOAD_BYTES
from rift_radio.db.models import Track
from rift_radio.exceptions import (
    CatalogError,
    DuplicateNameError,
    DuplicatePathError,
    PersistenceError,
    StorageInconsistencyError,
    TrackNotFoundError,
)
from rift_radio.services.protocols import TrackRepo
from rift_radio.storage.locks import KeyedLocks, name_key, path_key, track_key
from rift_radio.storage.paths import PathResolver
from rift_radio.storage.transfer import TransferEngine
from rift_radio.storage.validator import check_release_year, validate_upload

logger = logging.getLogger(__name__)


class CatalogService:
    """Use-case layer for track create, edit and delete.

    Every operation returns ``Ok(value)`` or a ``CatalogError`` value. Checks
    that precede a write run under per-key locks (track ID, then display
    name, then storage paths); the store's unique indexes stay the final
    arbiter and a violation at commit is reported as a conflict.
    """

    def __init__(
        self,
        repository: TrackRepo,
        resolver: PathResolver,
        transfer: TransferEngine,
        locks: KeyedLocks | None = None,
        *,
        max_upload_bytes: int = MAX_UPLOAD_BYTES,
    ) -> None:
        self._repository = repository
        self._resolver = resolver
        self._transfer = transfer
        self._locks = locks or KeyedLocks()
        self._max_upload_bytes = max_upload_bytes

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def list(self, page: int = 0, page_size: int = 50) -> list[Track]:
        tracks = self._repository.list(offset=page * page_size, limit=page_size)
        logger.info(
            "Fetched %d tracks from page %d (page size %d)", len(tracks), page, page_size
        )
        return tracks

    def count(self) -> int:
        return self._repository.count()

    def get(self, track_id: int) -> Result[Track]:
        track = self._repository.get(track_id)
        if track is None:
            logger.error("Track with ID %s not found", track_id)
            return TrackNotFoundError(track_id)
        return Ok(track)

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def create(self, upload: Upload, metadata: TrackMetadata) -> Result[Track]:
        """Validate, store and catalog a new track."""
        logger.info(
            "Starting upload for track '%s' by '%s'", metadata.name, metadata.artist
        )

        with self._locks.hold(name_key(metadata.name)):
            if self._repository.exists_by_name(metadata.name):
                logger.error("Upload aborted - duplicate track name: '%s'", metadata.name)
                return DuplicateNameError(metadata.name)

            year = check_release_year(metadata.release_year)
            if not isinstance(year, Ok):
                return year

            prepared = self._prepare(upload)
            if not isinstance(prepared, Ok):
                return prepared
            destination = prepared.value

            with self._locks.hold(path_key(destination)):
                collision = self._resolver.check_collision(destination)
                if not isinstance(collision, Ok):
                    return collision

                written = self._transfer.ingest(upload.stream, destination)
                if not isinstance(written, Ok):
                    return written

                track = Track(file_path=str(destination), **self._fields(metadata))
                result = self._commit(
                    lambda: self._repository.create(track),
                    name=metadata.name,
                    path=destination,
                    discard=destination,
                )

        if isinstance(result, Ok):
            logger.info(
                "Track ID %s stored at '%s' (%d bytes)",
                result.value.id,
                destination,
                written.value,
            )
        return result

    def update(
        self, track_id: int, upload: Upload | None, metadata: TrackMetadata
    ) -> Result[Track]:
        """Edit track metadata, optionally replacing its stored file.

        An absent or empty upload leaves the stored file untouched.
        """
        logger.info("Initiating update for track ID %s", track_id)

        with self._locks.hold(track_key(track_id)):
            track = self._repository.get(track_id)
            if track is None:
                logger.error("Update failed - track with ID %s not found", track_id)
                return TrackNotFoundError(track_id)

            with self._locks.hold(name_key(metadata.name)):
                if self._repository.exists_by_name(metadata.name, exclude_id=track_id):
                    logger.error(
                        "Update aborted - duplicate track name: '%s'", metadata.name
                    )
                    return DuplicateNameError(metadata.name)

                year = check_release_year(metadata.release_year)
                if not isinstance(year, Ok):
                    return year

                fields = self._fields(metadata)
                if upload is None or upload.size == 0:
                    result = self._commit(
                        lambda: self._repository.update(track_id, **fields),
                        name=metadata.name,
                        path=Path(track.file_path),
                        track_id=track_id,
                    )
                else:
                    result = self._replace_file(track, upload, fields, metadata.name)

        if isinstance(result, Ok):
            logger.info("Track ID %s updated successfully", track_id)
        return result

    def remove(self, track_id: int) -> Result[None]:
        """Delete a track record, then its stored file (best effort).

        The record removal is the authoritative outcome; a file that cannot
        be removed is logged and left behind.
        """
        logger.info("Commencing deletion for track ID %s", track_id)

        with self._locks.hold(track_key(track_id)):
            track = self._repository.get(track_id)
            if track is None:
                logger.error("Deletion failed - track with ID %s not found", track_id)
                return TrackNotFoundError(track_id)

            with self._locks.hold(path_key(track.file_path)):
                try:
                    deleted = self._repository.delete(track_id)
                except SQLAlchemyError as e:
                    logger.error("Deletion of track ID %s failed: %s", track_id, e)
                    return PersistenceError(f"Failed to delete track {track_id}")
                if deleted is None:
                    return TrackNotFoundError(track_id)

                logger.info("Track ID %s removed from catalog", track_id)
                self._transfer.remove(Path(deleted.file_path))

        return Ok(None)

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    @staticmethod
    def _fields(metadata: TrackMetadata) -> dict[str, Any]:
        return {
            "name": metadata.name,
            "artist": metadata.artist,
            "album": metadata.album,
            "genre": metadata.genre,
            "release_year": metadata.release_year,
            "liked": metadata.liked,
        }

    def _prepare(self, upload: Upload) -> Result[Path]:
        """Validate an upload and resolve its destination path."""
        valid = validate_upload(upload, max_bytes=self._max_upload_bytes)
        if not isinstance(valid, Ok):
            return valid
        return self._resolver.resolve(upload.filename)

    def _replace_file(
        self, track: Track, upload: Upload, fields: dict[str, Any], name: str
    ) -> Result[Track]:
        assert track.id is not None
        logger.info("Processing file update for track ID %s", track.id)

        prepared = self._prepare(upload)
        if not isinstance(prepared, Ok):
            return prepared
        destination = prepared.value
        old_path = Path(track.file_path)
        in_place = destination == old_path

        with self._locks.hold_all(path_key(destination), path_key(old_path)):
            collision = self._resolver.check_collision(destination, exclude_id=track.id)
            if not isinstance(collision, Ok):
                return collision

            written = self._transfer.ingest(
                upload.stream, destination, overwrite=in_place
            )
            if not isinstance(written, Ok):
                return written

            track_id = track.id
            result = self._commit(
                lambda: self._repository.update(
                    track_id, file_path=str(destination), **fields
                ),
                name=name,
                path=destination,
                track_id=track_id,
                discard=None if in_place else destination,
            )

            if isinstance(result, Ok):
                logger.info("File updated for track ID %s: '%s'", track_id, destination)
                if not in_place:
                    if self._transfer.remove(old_path):
                        logger.info("Old file '%s' removed", old_path)
                    else:
                        logger.warning("Old file '%s' could not be removed", old_path)

        return result

    def _commit(
        self,
        write: Callable[[], Track | None],
        *,
        name: str,
        path: Path,
        track_id: int | None = None,
        discard: Path | None = None,
    ) -> Result[Track]:
        """Run a record write; on failure remove ``discard`` before reporting."""
        error: CatalogError
        try:
            track = write()
        except IntegrityError as e:
            logger.error("Record write rejected by store: %s", e.orig)
            error = self._conflict_from(e, name=name, path=path)
        except SQLAlchemyError as e:
            logger.error("Record write failed: %s", e, exc_info=True)
            error = PersistenceError("Failed to save track record")
        else:
            if track is not None:
                return Ok(track)
            assert track_id is not None
            error = TrackNotFoundError(track_id)

        if discard is not None and not self._transfer.remove(discard):
            logger.critical(
                "Storage inconsistency: orphan file '%s' left after failed commit",
                discard,
            )
            return StorageInconsistencyError(
                f"{error.message}; orphan file could not be removed", discard
            )
        return error

    @staticmethod
    def _conflict_from(error: IntegrityError, *, name: str, path: Path) -> CatalogError:
        detail = str(error.orig)
        if "file_path" in detail:
            return DuplicatePathError(path)
        if "name" in detail:
            return DuplicateNameError(name)
        return PersistenceError("Failed to save track record")
