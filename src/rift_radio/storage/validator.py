"""Upload and metadata validation.

Pure checks with no side effects. They run before any byte of a payload is
written and short-circuit on the first failure.
"""

import logging
from pathlib import PurePath

from rift_radio.core.models import Upload
from rift_radio.core.result import Ok, Result
from rift_radio.core.types import (
    AUDIO_EXTENSION,
    AUDIO_MEDIA_TYPE,
    MAX_RELEASE_YEAR,
    MAX_UPLOAD_BYTES,
    MIN_RELEASE_YEAR,
)
from rift_radio.exceptions import (
    EmptyOrOversizeFileError,
    InvalidReleaseYearError,
    UnsupportedFormatError,
)

logger = logging.getLogger(__name__)

_FORMAT_MESSAGE = f"Invalid file format. Only {AUDIO_EXTENSION.upper()} files are allowed."


def _normalize_media_type(value: str) -> str:
    """Media types compare case-insensitively ("Audio/MPEG" == "audio/mpeg")."""
    return value.strip().lower()


def file_extension(filename: str | None) -> str:
    """Return the lowercased extension without the dot, or "" if none."""
    if not filename:
        return ""
    return PurePath(filename).suffix.lstrip(".").lower()


def validate_upload(upload: Upload, *, max_bytes: int = MAX_UPLOAD_BYTES) -> Result[None]:
    """Check an upload against size, extension and media type policy.

    Args:
        upload: The inbound payload.
        max_bytes: Size ceiling in bytes (inclusive).

    Returns:
        ``Ok(None)`` or the first failing ``ValidationError``.
    """
    logger.debug("Validating file '%s'", upload.filename)

    if upload.size <= 0 or upload.size > max_bytes:
        logger.error("Validation failed - file size %d outside (0, %d]", upload.size, max_bytes)
        return EmptyOrOversizeFileError(upload.size, max_bytes)

    extension = file_extension(upload.filename)
    if extension != AUDIO_EXTENSION:
        logger.error("Validation failed - invalid extension: '%s'", extension)
        return UnsupportedFormatError(_FORMAT_MESSAGE)

    content_type = upload.content_type
    if content_type is None or _normalize_media_type(content_type) != AUDIO_MEDIA_TYPE:
        logger.error("Validation failed - unsupported content type: '%s'", content_type)
        return UnsupportedFormatError(_FORMAT_MESSAGE)

    return Ok(None)


def check_release_year(year: int) -> Result[None]:
    """Check a release year against the inclusive accepted range."""
    if year < MIN_RELEASE_YEAR or year > MAX_RELEASE_YEAR:
        return InvalidReleaseYearError(year, MIN_RELEASE_YEAR, MAX_RELEASE_YEAR)
    return Ok(None)
