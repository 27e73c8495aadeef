"""rift-radio: audio track and playlist catalog with on-disk media storage."""
