"""Storage path derivation and catalog collision checks."""

import logging
from pathlib import Path
from typing import Protocol

from pathvalidate import sanitize_filename

from rift_radio.core.result import Ok, Result
from rift_radio.core.types import DEFAULT_FILENAME
from rift_radio.exceptions import DuplicatePathError, UnsafeFilenameError

logger = logging.getLogger(__name__)

_SEPARATORS = ("/", "\\")
_TRAVERSAL_NAMES = frozenset({".", ".."})


class PathLookup(Protocol):
    """Catalog query used for collision detection."""

    def exists_by_path(self, file_path: str, *, exclude_id: int | None = None) -> bool: ...


class PathResolver:
    """Derive canonical file paths inside a fixed storage root.

    Files are stored flat, directly under the root, named after the declared
    upload filename. Two uploads with the same filename collide; collisions
    are detected against the catalog, not the filesystem.
    """

    def __init__(self, root: Path, catalog: PathLookup) -> None:
        self._root = root.resolve()
        self._catalog = catalog

    @property
    def root(self) -> Path:
        return self._root

    def resolve(self, filename: str | None) -> Result[Path]:
        """Build the absolute candidate path for a declared filename.

        Blank names fall back to ``DEFAULT_FILENAME``. Names with path
        separators or traversal segments are rejected rather than cleaned.

        Returns:
            ``Ok(path)`` or ``UnsafeFilenameError``.
        """
        name = (filename or "").strip() or DEFAULT_FILENAME

        if any(sep in name for sep in _SEPARATORS) or name in _TRAVERSAL_NAMES:
            logger.error("Rejected unsafe filename '%s'", name)
            return UnsafeFilenameError(name)

        clean = sanitize_filename(name).strip() or DEFAULT_FILENAME
        candidate = (self._root / clean).resolve()
        if candidate.parent != self._root:
            logger.error("Filename '%s' resolves outside storage root", name)
            return UnsafeFilenameError(name)

        return Ok(candidate)

    def check_collision(
        self, candidate: Path, *, exclude_id: int | None = None
    ) -> Result[Path]:
        """Fail if another track already references ``candidate``.

        Args:
            candidate: Absolute path from ``resolve``.
            exclude_id: Track allowed to hold the path (the one being edited).

        Returns:
            ``Ok(candidate)`` or ``DuplicatePathError``.
        """
        if self._catalog.exists_by_path(str(candidate), exclude_id=exclude_id):
            logger.error("File already exists at '%s'", candidate)
            return DuplicatePathError(candidate)
        return Ok(candidate)
