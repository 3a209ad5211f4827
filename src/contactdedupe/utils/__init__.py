"""Common utility functions for contactdedupe."""

from contactdedupe.utils.hashing import calculate_file_sha256, format_sha256
from contactdedupe.utils.timestamps import get_iso_timestamp

__all__ = [
    "get_iso_timestamp",
    "calculate_file_sha256",
    "format_sha256",
]
