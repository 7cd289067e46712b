"""
Utilities Module for TypeScript Client Generation

This module provides utility functions for file operations and string case
conversions used throughout the generation process.
"""

from .file_utils import ensure_directory, get_relative_path, write_files_to_disk
from .string_case import (
    camelcase,
    constcase,
    is_js_identifier,
    normalize_ts_identifier,
    pascalcase,
    snakecase,
    words,
)

__all__ = [
    "camelcase",
    "constcase",
    "ensure_directory",
    "get_relative_path",
    "is_js_identifier",
    "normalize_ts_identifier",
    "pascalcase",
    "snakecase",
    "words",
    "write_files_to_disk",
]
