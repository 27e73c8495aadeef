"""Core value objects, constants and result types."""

from rift_radio.core.models import (
    ByteSink,
    StoredFile,
    StreamHandle,
    TrackMetadata,
    Upload,
)
from rift_radio.core.result import Ok, Result

__all__ = [
    "ByteSink",
    "Ok",
    "Result",
    "StoredFile",
    "StreamHandle",
    "TrackMetadata",
    "Upload",
]
