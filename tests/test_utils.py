"""
Unit tests for forg.utils module.

Tests pure utility functions in isolation.
"""

import os
from datetime import datetime
from pathlib import Path

import pytest

from forg.config import DEFAULT_CATEGORIES, Config
from forg.errors import InvalidDateFormatError
from forg.utils import (
    NO_EXTENSION,
    NO_EXTENSION_LABEL,
    format_date_bucket,
    format_file_size,
    get_category,
    get_extension,
    get_file_mtime,
    get_file_type_folder,
    get_stats_label,
    is_empty_dir,
    validate_date_format,
)


class TestFormatFileSize:
    """Tests for format_file_size function."""

    def test_bytes(self):
        assert format_file_size(0) == "0 B"
        assert format_file_size(100) == "100 B"
        assert format_file_size(1023) == "1023 B"

    def test_kilobytes(self):
        assert format_file_size(1024) == "1.0 KB"
        assert format_file_size(1536) == "1.5 KB"
        assert format_file_size(1024 * 500) == "500.0 KB"

    def test_megabytes(self):
        assert format_file_size(1048576) == "1.0 MB"
        assert format_file_size(1024 * 1024 * 5) == "5.0 MB"

    def test_gigabytes(self):
        assert format_file_size(1073741824) == "1.0 GB"

    def test_stops_at_terabytes(self):
        assert format_file_size(1024 ** 4) == "1.0 TB"
        assert format_file_size(1024 ** 5) == "1024.0 TB"


class TestGetFileTypeFolder:
    """Tests for the extension classifier."""

    def test_known_extensions(self):
        assert get_file_type_folder("jpg") == "Images"
        assert get_file_type_folder("pdf") == "Documents"
        assert get_file_type_folder("csv") == "Spreadsheets"
        assert get_file_type_folder("key") == "Presentations"
        assert get_file_type_folder("mkv") == "Videos"
        assert get_file_type_folder("flac") == "Audio"
        assert get_file_type_folder("dmg") == "Archives"
        assert get_file_type_folder("rs") == "Code"
        assert get_file_type_folder("exe") == "Applications"
        assert get_file_type_folder("woff2") == "Fonts"
        assert get_file_type_folder("blend") == "3D-Models"
        assert get_file_type_folder("epub") == "eBooks"

    def test_case_insensitive(self):
        assert get_file_type_folder("JPG") == get_file_type_folder("jpg") == "Images"
        assert get_file_type_folder("Pdf") == "Documents"

    def test_every_default_extension_ignores_case(self):
        for category, extensions in DEFAULT_CATEGORIES.items():
            for ext in extensions:
                assert get_file_type_folder(ext) == category
                assert get_file_type_folder(ext.upper()) == category

    def test_unknown_extension_uses_uppercase_fallback(self):
        assert get_file_type_folder("xyz") == "XYZ-Files"
        assert get_file_type_folder("Abc") == "ABC-Files"

    def test_no_extension_is_others(self):
        assert get_file_type_folder("") == "Others"
        assert get_file_type_folder(NO_EXTENSION) == "Others"
        assert get_file_type_folder("unknown") == "Others"

    def test_leading_dot_is_tolerated(self):
        assert get_file_type_folder(".PNG") == "Images"

    def test_custom_table(self, test_config: Config):
        assert get_file_type_folder("foo", config=test_config) == "Foos"
        assert get_file_type_folder("jpg", config=test_config) == "JPG-Files"


class TestGetExtension:
    """Tests for get_extension, get_category and get_stats_label."""

    def test_simple_extension(self):
        assert get_extension(Path("photo.JPG")) == "JPG"
        assert get_extension(Path("archive.tar.gz")) == "gz"

    def test_no_extension(self):
        assert get_extension(Path("README")) == NO_EXTENSION
        assert get_extension(Path(".bashrc")) == NO_EXTENSION

    def test_category_for_extensionless_file(self):
        assert get_category(Path("README")) == "Others"
        assert get_category(Path("photo.JPG")) == "Images"

    def test_stats_label(self):
        assert get_stats_label(Path("photo.JPG")) == "jpg"
        assert get_stats_label(Path("Makefile")) == NO_EXTENSION_LABEL


class TestDateBuckets:
    """Tests for date format validation and bucket names."""

    def test_bucket_names(self):
        when = datetime(2024, 3, 15, 10, 30)
        assert format_date_bucket(when, "year") == "2024"
        assert format_date_bucket(when, "month") == "2024-03"
        assert format_date_bucket(when, "day") == "2024-03-15"

    def test_invalid_format(self):
        with pytest.raises(InvalidDateFormatError, match="Invalid date format"):
            validate_date_format("week")

    def test_invalid_format_is_value_error(self):
        with pytest.raises(ValueError):
            format_date_bucket(datetime(2024, 1, 1), "decade")

    def test_custom_formats(self):
        config = Config(date_formats={"quarter-ish": "%Y/%m"})
        assert format_date_bucket(datetime(2024, 3, 15), "quarter-ish", config) == "2024/03"
        with pytest.raises(InvalidDateFormatError):
            validate_date_format("month", config)


class TestGetFileMtime:
    """Tests for get_file_mtime function."""

    def test_local_datetime(self, temp_dir: Path):
        f = temp_dir / "a.txt"
        f.write_text("a")
        os.utime(f, (1_700_000_000, 1_700_000_000))

        assert get_file_mtime(f) == datetime.fromtimestamp(1_700_000_000)

    def test_missing_file_raises(self, temp_dir: Path):
        with pytest.raises(FileNotFoundError):
            get_file_mtime(temp_dir / "missing.txt")


class TestIsEmptyDir:

    def test_empty(self, temp_dir: Path):
        d = temp_dir / "empty"
        d.mkdir()
        assert is_empty_dir(d)

    def test_with_file(self, temp_dir: Path):
        (temp_dir / "f.txt").write_text("x")
        assert not is_empty_dir(temp_dir)

    def test_with_subdirectory(self, temp_dir: Path):
        (temp_dir / "sub").mkdir()
        assert not is_empty_dir(temp_dir)
