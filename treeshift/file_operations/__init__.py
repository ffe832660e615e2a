"""Single-file operations with progress reporting."""

from .copy import copy_file, copy_file_contents, copy_file_with_progress
from .move import move_file, move_file_with_progress
from .progress import ThrottledFileProgress
from .remove import file_size_in_bytes, remove_file


__all__ = [
    "copy_file",
    "copy_file_with_progress",
    "copy_file_contents",
    "move_file",
    "move_file_with_progress",
    "remove_file",
    "file_size_in_bytes",
    "ThrottledFileProgress",
]
