"""
forg - Reorganize the files of a directory into folders.

This package provides tools to organize files by type or by modification
date, remove empty directories, and summarize a directory by extension.
"""

__version__ = "0.1.0"

from .config import Config, DEFAULT_CONFIG
from .operations import (
    MoveOutcome,
    OperationResult,
    Status,
    clean_empty_dirs,
    collect_stats,
    organize_by_date,
    organize_by_type,
)
from .utils import format_file_size, get_file_type_folder

__all__ = [
    "Config",
    "DEFAULT_CONFIG",
    "MoveOutcome",
    "OperationResult",
    "Status",
    "clean_empty_dirs",
    "collect_stats",
    "format_file_size",
    "get_file_type_folder",
    "organize_by_date",
    "organize_by_type",
]
