"""
Pure utility functions for forg.

These functions are stateless and have no side effects (except reading file metadata).
They are easy to unit test in isolation.
"""

from datetime import datetime
from pathlib import Path

from .config import Config, DEFAULT_CONFIG
from .errors import InvalidDateFormatError

# Marker returned by get_extension for a path without an extension
NO_EXTENSION = ""

# Bucket label used by statistics for files without an extension
NO_EXTENSION_LABEL = "no extension"

SIZE_UNITS = ("B", "KB", "MB", "GB", "TB")


def get_file_type_folder(extension: str, config: Config = DEFAULT_CONFIG) -> str:
    """
    Map a file extension to its category folder name.

    Args:
        extension: Extension with or without the leading dot
        config: Configuration holding the classification table

    Returns:
        Category name (e.g., "Images", "Others", "XYZ-Files")

    Example:
        >>> get_file_type_folder("JPG")
        'Images'
        >>> get_file_type_folder("xyz")
        'XYZ-Files'
    """
    return config.get_category(extension)


def format_file_size(size_bytes: int) -> str:
    """
    Convert bytes to human-readable format (B, KB, MB, GB, TB).

    Args:
        size_bytes: Size in bytes

    Returns:
        "1023 B" below one kilobyte, otherwise one decimal like "1.5 KB"

    Example:
        >>> format_file_size(1536)
        '1.5 KB'
    """
    size = float(size_bytes)
    unit_index = 0
    while size >= 1024 and unit_index < len(SIZE_UNITS) - 1:
        size /= 1024
        unit_index += 1

    if unit_index == 0:
        return f"{int(size_bytes)} {SIZE_UNITS[0]}"
    return f"{size:.1f} {SIZE_UNITS[unit_index]}"


def get_extension(file_path: Path) -> str:
    """
    Get the extension of a file without the leading dot.

    Case is preserved. Dotfiles such as ".bashrc" and names without a
    suffix return NO_EXTENSION.
    """
    return file_path.suffix.lstrip(".") or NO_EXTENSION


def get_category(file_path: Path, config: Config = DEFAULT_CONFIG) -> str:
    """
    Determine the category folder for a file based on its extension.

    Args:
        file_path: Path to the file
        config: Configuration to use

    Returns:
        Category name (e.g., "Images", "Documents", "Others")
    """
    return get_file_type_folder(get_extension(file_path), config=config)


def get_stats_label(file_path: Path) -> str:
    """Lowercased extension for statistics, or NO_EXTENSION_LABEL."""
    extension = get_extension(file_path)
    if extension == NO_EXTENSION:
        return NO_EXTENSION_LABEL
    return extension.lower()


def validate_date_format(date_format: str, config: Config = DEFAULT_CONFIG) -> str:
    """
    Check a date format selector and return its strftime pattern.

    Raises:
        InvalidDateFormatError: If the selector is not one of config.date_formats
    """
    try:
        return config.get_date_pattern(date_format)
    except KeyError:
        choices = ", ".join(sorted(config.date_formats))
        raise InvalidDateFormatError(
            f"Invalid date format: '{date_format}' (expected one of: {choices})"
        ) from None


def format_date_bucket(
    modified: datetime,
    date_format: str,
    config: Config = DEFAULT_CONFIG,
) -> str:
    """
    Build the date folder name for a modification time.

    Args:
        modified: Modification time (local time)
        date_format: "year", "month" or "day"
        config: Configuration to use

    Returns:
        Folder name like "2024", "2024-03" or "2024-03-15"
    """
    return modified.strftime(validate_date_format(date_format, config=config))


def get_file_mtime(file_path: Path) -> datetime:
    """
    Get the modification time of a file as a local datetime object.

    Args:
        file_path: Path to the file

    Returns:
        Datetime of last modification
    """
    return datetime.fromtimestamp(file_path.stat().st_mtime)


def is_empty_dir(dir_path: Path) -> bool:
    """Check if a directory has no entries at all (files or subdirectories)."""
    return next(dir_path.iterdir(), None) is None
