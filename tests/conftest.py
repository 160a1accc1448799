"""
Pytest fixtures for forg tests.

Provides reusable test fixtures for creating temporary directories,
test files, and collecting operation outcomes.
"""

import io
import logging
import os
from datetime import datetime
from pathlib import Path

import pytest
from rich.console import Console

from forg.config import Config
from forg.console import ConsoleReporter


@pytest.fixture(autouse=True)
def reset_forg_logger():
    """Drop handlers the CLI attached so they never outlive a captured stream."""
    yield
    logger = logging.getLogger("forg")
    logger.handlers.clear()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def temp_dir(tmp_path: Path) -> Path:
    """Create a temporary directory for testing."""
    return tmp_path


@pytest.fixture
def test_config() -> Config:
    """Create a configuration with a small custom table."""
    return Config(
        file_type_mappings={"foo": "Foos", "bar": "Foos"},
        ignore_patterns=[],
    )


@pytest.fixture
def sample_files(temp_dir: Path) -> dict:
    """
    Create sample files of different types for testing.

    Returns a dict mapping category to list of created files.
    """
    files = {
        "Images": [],
        "Documents": [],
        "Audio": [],
        "Code": [],
        "XYZ-Files": [],
        "Others": [],
    }

    for i, ext in enumerate([".jpg", ".png", ".GIF"]):
        f = temp_dir / f"image{i}{ext}"
        f.write_text(f"fake image content {i} {ext}")
        files["Images"].append(f)

    for i, ext in enumerate([".pdf", ".txt", ".docx"]):
        f = temp_dir / f"document{i}{ext}"
        f.write_text(f"fake document content {i} {ext}")
        files["Documents"].append(f)

    for i, ext in enumerate([".mp3", ".wav"]):
        f = temp_dir / f"audio{i}{ext}"
        f.write_text(f"fake audio content {i} {ext}")
        files["Audio"].append(f)

    for i, ext in enumerate([".py", ".rs"]):
        f = temp_dir / f"code{i}{ext}"
        f.write_text(f"// fake code {i} {ext}")
        files["Code"].append(f)

    f = temp_dir / "mystery.xyz"
    f.write_text("unknown content")
    files["XYZ-Files"].append(f)

    f = temp_dir / "README"
    f.write_text("no extension")
    files["Others"].append(f)

    return files


@pytest.fixture
def dated_file(temp_dir: Path):
    """Factory creating a file with a given modification time."""
    def make(name: str, when: datetime, content: str = "content") -> Path:
        f = temp_dir / name
        f.write_text(content)
        os.utime(f, (when.timestamp(), when.timestamp()))
        return f
    return make


@pytest.fixture
def nested_empty_dirs(temp_dir: Path) -> Path:
    """
    Create a/b/c where only c is empty, plus keep/ holding a file.

    Removing c leaves b empty, which leaves a empty.
    """
    (temp_dir / "a" / "b" / "c").mkdir(parents=True)
    keep = temp_dir / "keep"
    keep.mkdir()
    (keep / "file.txt").write_text("stay")
    return temp_dir


@pytest.fixture
def capture_outcomes() -> list:
    """Create a list to capture outcomes reported by operations."""
    return []


@pytest.fixture
def report_callback(capture_outcomes: list):
    """Create a report callback that captures outcomes."""
    def callback(outcome) -> None:
        capture_outcomes.append(outcome)
    return callback


@pytest.fixture
def output_buffers():
    """stdout and stderr buffers for a ConsoleReporter."""
    return io.StringIO(), io.StringIO()


@pytest.fixture
def reporter(output_buffers) -> ConsoleReporter:
    """A ConsoleReporter writing plain text into output_buffers."""
    out, err = output_buffers
    return ConsoleReporter(
        console=Console(file=out, width=200, color_system=None, highlight=False, soft_wrap=True),
        err_console=Console(file=err, width=200, color_system=None, highlight=False, soft_wrap=True),
    )


@pytest.fixture
def snapshot():
    """Map every path below a directory to its file content (None for directories)."""
    def take(directory: Path) -> dict:
        return {
            p.relative_to(directory): (p.read_bytes() if p.is_file() else None)
            for p in directory.rglob("*")
        }
    return take
