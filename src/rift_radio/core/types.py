"""Shared constants for upload policy and storage."""

# Upload policy (single accepted container, no negotiation)
MAX_UPLOAD_BYTES = 100 * 1024 * 1024  # 100 MiB
AUDIO_EXTENSION = "mp3"
AUDIO_MEDIA_TYPE = "audio/mpeg"
DEFAULT_FILENAME = f"untitled.{AUDIO_EXTENSION}"

# Release year bounds (inclusive)
MIN_RELEASE_YEAR = 1800
MAX_RELEASE_YEAR = 2025

# Transfer buffer and in-flight suffix
CHUNK_SIZE = 64 * 1024
PART_SUFFIX = ".part"

# In-flight files untouched for this long (seconds) are treated as abandoned
STALE_PART_AGE = 60 * 60
