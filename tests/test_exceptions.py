"""Tests for error kinds and result unwrapping."""

from pathlib import Path

import pytest

from rift_radio.api.exceptions import unwrap
from rift_radio.core.result import Ok
from rift_radio.exceptions import (
    CatalogError,
    ConflictError,
    DuplicatePathError,
    EmptyOrOversizeFileError,
    FileMissingError,
    NotFoundError,
    PersistenceError,
    StorageInconsistencyError,
    StorageUnavailableError,
    TrackNotFoundError,
    ValidationError,
)


class TestTaxonomy:
    @pytest.mark.parametrize(
        ("error", "base", "status"),
        [
            (EmptyOrOversizeFileError(0, 10), ValidationError, 400),
            (DuplicatePathError(Path("/srv/a.mp3")), ConflictError, 409),
            (TrackNotFoundError(1), NotFoundError, 404),
            (FileMissingError(Path("/srv/a.mp3"), track_id=1), NotFoundError, 404),
            (StorageUnavailableError("no disk"), CatalogError, 503),
            (PersistenceError("locked"), CatalogError, 500),
            (StorageInconsistencyError("orphan", Path("/srv/a.mp3")), CatalogError, 500),
        ],
    )
    def test_status_codes(self, error: CatalogError, base: type, status: int) -> None:
        assert isinstance(error, base)
        assert error.status_code == status

    def test_not_found_kinds_are_distinct(self) -> None:
        """Should tell a missing record from a missing file by code."""
        record = TrackNotFoundError(1)
        file = FileMissingError(Path("/srv/a.mp3"), track_id=1)
        assert record.error_code != file.error_code
        assert file.message == "Track file not found: a.mp3"

    def test_size_messages(self) -> None:
        assert EmptyOrOversizeFileError(0, 10).message == "File is empty"
        assert (
            EmptyOrOversizeFileError(11, 10).message
            == "File size 11 exceeds the limit of 10 bytes"
        )


class TestUnwrap:
    def test_ok(self) -> None:
        assert unwrap(Ok(3)) == 3

    def test_error_raised(self) -> None:
        error = TrackNotFoundError(4)
        with pytest.raises(TrackNotFoundError) as exc_info:
            unwrap(error)
        assert exc_info.value is error

    def test_rejects_other_values(self) -> None:
        with pytest.raises(TypeError):
            unwrap(3)  # type: ignore[arg-type]
