"""Error kinds for catalog and storage operations.

Every error carries an HTTP ``status_code`` and a machine-readable
``error_code`` so the API layer can render it without a lookup table.
Services return these as values (see ``rift_radio.core.result``); only the
HTTP layer raises them.
"""

from pathlib import Path


class CatalogError(Exception):
    """Base error for rift-radio operations.

    Subclasses should define:
    - status_code: HTTP status code
    - error_code: Machine-readable error identifier
    """

    status_code: int = 500
    error_code: str = "internal_error"

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


# -- Validation (bad input, never touches storage) --


class ValidationError(CatalogError):
    """Upload or metadata rejected before any mutation."""

    status_code = 400
    error_code = "validation_error"


class EmptyOrOversizeFileError(ValidationError):
    """Upload is empty or larger than the size ceiling."""

    error_code = "empty_or_oversize_file"

    def __init__(self, size: int, limit: int) -> None:
        self.size = size
        self.limit = limit
        if size <= 0:
            super().__init__("File is empty")
        else:
            super().__init__(f"File size {size} exceeds the limit of {limit} bytes")


class UnsupportedFormatError(ValidationError):
    """Extension or declared media type is not the accepted audio type."""

    error_code = "unsupported_format"


class InvalidReleaseYearError(ValidationError):
    """Release year outside the accepted range."""

    error_code = "invalid_release_year"

    def __init__(self, year: int, minimum: int, maximum: int) -> None:
        self.year = year
        super().__init__(f"Year must be between {minimum} and {maximum}, got {year}")


class UnsafeFilenameError(ValidationError):
    """Declared filename would escape the storage root."""

    error_code = "unsafe_filename"

    def __init__(self, filename: str) -> None:
        self.filename = filename
        super().__init__(f"Filename is not allowed: {filename!r}")


# -- Conflicts (user must resend with different values) --


class ConflictError(CatalogError):
    """Operation conflicts with an existing record."""

    status_code = 409
    error_code = "conflict"


class DuplicateNameError(ConflictError):
    """Another track already uses this display name."""

    error_code = "duplicate_track_name"

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Track name already exists: {name}")


class DuplicatePathError(ConflictError):
    """Another track already references this storage path."""

    error_code = "duplicate_file"

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"File already uploaded: {path.name}")


class DuplicatePlaylistError(ConflictError):
    """Another playlist already uses this name."""

    error_code = "duplicate_playlist_name"

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Playlist name already exists: {name}")


class TrackAlreadyInPlaylistError(ConflictError):
    """Track is already a member of the playlist."""

    error_code = "track_already_in_playlist"

    def __init__(self, playlist_id: int, track_id: int) -> None:
        self.playlist_id = playlist_id
        self.track_id = track_id
        super().__init__(f"Track {track_id} already in playlist {playlist_id}")


# -- Not found (distinguished by error_code) --


class NotFoundError(CatalogError):
    """Record or file is absent."""

    status_code = 404
    error_code = "not_found"


class TrackNotFoundError(NotFoundError):
    """No track record with this identifier."""

    error_code = "track_not_found"

    def __init__(self, track_id: int) -> None:
        self.track_id = track_id
        super().__init__(f"Track {track_id} not found")


class FileMissingError(NotFoundError):
    """Track record exists but its backing file does not."""

    error_code = "track_file_not_found"

    def __init__(self, path: Path, track_id: int | None = None) -> None:
        self.path = path
        self.track_id = track_id
        super().__init__(f"Track file not found: {path.name}")


class PlaylistNotFoundError(NotFoundError):
    """No playlist with this identifier."""

    error_code = "playlist_not_found"

    def __init__(self, playlist_id: int) -> None:
        self.playlist_id = playlist_id
        super().__init__(f"Playlist {playlist_id} not found")


class TrackNotInPlaylistError(NotFoundError):
    """Track is not a member of the playlist."""

    error_code = "track_not_in_playlist"

    def __init__(self, playlist_id: int, track_id: int) -> None:
        self.playlist_id = playlist_id
        self.track_id = track_id
        super().__init__(f"Track {track_id} not in playlist {playlist_id}")


# -- Storage environment and I/O --


class StorageUnavailableError(CatalogError):
    """Storage directory cannot be created or reached."""

    status_code = 503
    error_code = "storage_unavailable"


class IOFailureError(CatalogError):
    """A transfer failed mid-operation; nothing was committed."""

    status_code = 500
    error_code = "io_failure"


class PersistenceError(IOFailureError):
    """The metadata store rejected a write."""

    error_code = "persistence_failure"


class StorageInconsistencyError(IOFailureError):
    """A compensating file removal failed after a failed commit."""

    error_code = "storage_inconsistency"

    def __init__(self, message: str, path: Path) -> None:
        self.path = path
        super().__init__(message)
