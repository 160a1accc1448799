"""
Configuration for forg.

Uses a dataclass to make configuration testable and injectable.
Default values match the built-in classification table, ignore list
and date formats; a JSON document can override any of them.
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Union

from .errors import ConfigFileError


# Category -> extensions. Flattened into Config.file_type_mappings.
DEFAULT_CATEGORIES: Dict[str, List[str]] = {
    "Images": ["jpg", "jpeg", "png", "gif", "bmp", "tiff", "svg", "webp", "ico"],
    "Documents": ["pdf", "doc", "docx", "txt", "rtf", "odt", "pages"],
    "Spreadsheets": ["xls", "xlsx", "csv", "ods", "numbers"],
    "Presentations": ["ppt", "pptx", "odp", "key"],
    "Videos": ["mp4", "avi", "mkv", "mov", "wmv", "flv", "webm", "m4v", "3gp"],
    "Audio": ["mp3", "wav", "flac", "aac", "ogg", "wma", "m4a"],
    "Archives": ["zip", "rar", "7z", "tar", "gz", "bz2", "xz", "dmg", "iso"],
    "Code": [
        "rs", "py", "js", "ts", "html", "css", "cpp", "c", "h", "java",
        "go", "php", "rb", "swift", "kt", "cs", "vb", "sql", "sh", "bat",
        "ps1", "json", "xml", "yaml", "yml", "toml", "ini", "cfg",
    ],
    "Applications": ["exe", "msi", "deb", "rpm", "pkg", "app"],
    "Fonts": ["ttf", "otf", "woff", "woff2", "eot"],
    "3D-Models": ["obj", "fbx", "dae", "3ds", "blend", "max", "dwg", "dxf"],
    "eBooks": ["epub", "mobi", "azw", "azw3", "fb2"],
}

DEFAULT_IGNORE_PATTERNS: List[str] = [
    ".DS_Store",
    "Thumbs.db",
    "*.tmp",
    "*.temp",
    ".git",
    ".gitignore",
    "node_modules",
]

DEFAULT_DATE_FORMATS: Dict[str, str] = {
    "year": "%Y",
    "month": "%Y-%m",
    "day": "%Y-%m-%d",
}

# Extensions that always classify as the "others" category. The empty string
# stands for a file without an extension; "unknown" is the legacy spelling.
NO_EXTENSION_ALIASES = frozenset({"", "unknown"})

DEFAULT_CONFIG_FILENAME = "forg-config.json"


def _default_mappings() -> Dict[str, str]:
    return {
        ext: category
        for category, extensions in DEFAULT_CATEGORIES.items()
        for ext in extensions
    }


@dataclass
class Config:
    """
    Configuration for organize, clean and stats operations.

    The classification table is exposed read-only; build a new Config to
    use a different one.

    Example:
        # Use defaults
        config = Config()

        # Override for testing
        config = Config(file_type_mappings={"foo": "Foos"})
    """

    # Extension (lowercase, no dot) -> category folder name
    file_type_mappings: Mapping[str, str] = field(default_factory=_default_mappings)

    # Shell-style file name patterns; carried in the document, not applied
    ignore_patterns: List[str] = field(default_factory=lambda: list(DEFAULT_IGNORE_PATTERNS))

    # Date format selector -> strftime pattern
    date_formats: Mapping[str, str] = field(default_factory=lambda: dict(DEFAULT_DATE_FORMATS))

    # Category for files without an extension
    others_category: str = "Others"

    # Appended to the uppercased extension for unmapped extensions
    fallback_suffix: str = "-Files"

    def __post_init__(self) -> None:
        normalized = {
            ext.lower().lstrip("."): category
            for ext, category in self.file_type_mappings.items()
        }
        self.file_type_mappings = MappingProxyType(normalized)
        self.date_formats = MappingProxyType(dict(self.date_formats))

    def get_category(self, extension: str) -> str:
        """
        Get the category for a file extension.

        Args:
            extension: File extension with or without the leading dot
                       (e.g., "jpg" or ".JPG")

        Returns:
            Category name; others_category for an empty extension, or
            "<EXT>-Files" for an extension missing from the table
        """
        ext_lower = extension.lower().lstrip(".")
        if ext_lower in NO_EXTENSION_ALIASES:
            return self.others_category
        category = self.file_type_mappings.get(ext_lower)
        if category is not None:
            return category
        return f"{ext_lower.upper()}{self.fallback_suffix}"

    def get_date_pattern(self, date_format: str) -> str:
        """Return the strftime pattern for a selector, or raise KeyError."""
        return self.date_formats[date_format]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "file_type_mappings": dict(self.file_type_mappings),
            "ignore_patterns": list(self.ignore_patterns),
            "date_formats": dict(self.date_formats),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Config":
        """
        Build a Config from a parsed JSON document.

        Missing keys keep their defaults.

        Raises:
            ConfigFileError: If a key holds a value of the wrong shape
        """
        kwargs: Dict[str, Any] = {}

        mappings = data.get("file_type_mappings")
        if mappings is not None:
            if not isinstance(mappings, dict) or not all(
                isinstance(k, str) and isinstance(v, str) for k, v in mappings.items()
            ):
                raise ConfigFileError("'file_type_mappings' must map strings to strings")
            kwargs["file_type_mappings"] = mappings

        patterns = data.get("ignore_patterns")
        if patterns is not None:
            if not isinstance(patterns, list) or not all(isinstance(p, str) for p in patterns):
                raise ConfigFileError("'ignore_patterns' must be a list of strings")
            kwargs["ignore_patterns"] = patterns

        formats = data.get("date_formats")
        if formats is not None:
            if not isinstance(formats, dict) or not all(
                isinstance(k, str) and isinstance(v, str) for k, v in formats.items()
            ):
                raise ConfigFileError("'date_formats' must map strings to strings")
            kwargs["date_formats"] = formats

        return cls(**kwargs)

    def save_to_file(self, path: Union[str, Path]) -> None:
        content = json.dumps(self.to_dict(), indent=2, sort_keys=True)
        Path(path).write_text(content + "\n", encoding="utf-8")

    @classmethod
    def load_from_file(cls, path: Union[str, Path]) -> "Config":
        """
        Load a configuration document written by save_to_file.

        Raises:
            ConfigFileError: If the file cannot be read or parsed
        """
        try:
            raw = Path(path).read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigFileError(f"Could not read config file '{path}': {e}") from e

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise ConfigFileError(f"Invalid JSON in config file '{path}': {e}") from e

        if not isinstance(data, dict):
            raise ConfigFileError(f"Config file '{path}' must contain a JSON object")

        return cls.from_dict(data)

    @classmethod
    def generate_default(cls, path: Union[str, Path]) -> None:
        """Write the default configuration document to path."""
        cls().save_to_file(path)


# Default configuration instance
DEFAULT_CONFIG = Config()
