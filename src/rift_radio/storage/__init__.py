"""Media storage: upload validation, path resolution, byte transfer and locking."""

from rift_radio.storage.locks import KeyedLocks
from rift_radio.storage.paths import PathResolver
from rift_radio.storage.transfer import TransferEngine, cleanup_part_files
from rift_radio.storage.validator import check_release_year, validate_upload

__all__ = [
    "KeyedLocks",
    "PathResolver",
    "TransferEngine",
    "check_release_year",
    "cleanup_part_files",
    "validate_upload",
]
