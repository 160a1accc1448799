"""
Directory scanning for forg.

Both scans are best-effort: a directory that cannot be listed, or an entry
the deep scan cannot stat, is skipped instead of failing the run.
Symbolic links are never followed.
"""

import logging
import os
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Iterator, List

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FileEntry:
    """A file or directory found by a scan."""
    path: Path
    is_dir: bool
    size: int
    modified: datetime

    @property
    def name(self) -> str:
        return self.path.name

    @property
    def depth(self) -> int:
        return len(self.path.parts)


def _list_dir(directory: Path) -> List[os.DirEntry]:
    try:
        with os.scandir(directory) as it:
            return sorted(it, key=lambda e: e.name)
    except OSError as e:
        logger.debug("Skipping unreadable directory %s: %s", directory, e)
        return []


def _to_entry(dir_entry: os.DirEntry) -> FileEntry:
    stat = dir_entry.stat(follow_symlinks=False)
    return FileEntry(
        path=Path(dir_entry.path),
        is_dir=dir_entry.is_dir(follow_symlinks=False),
        size=stat.st_size,
        modified=datetime.fromtimestamp(stat.st_mtime),
    )


def scan_shallow(directory: Path) -> Iterator[Path]:
    """
    Yield the paths of the regular files directly inside directory.

    Subdirectories and symlinks are not yielded. File metadata is not read
    here; callers stat each file themselves and handle its failure per file.
    """
    for dir_entry in _list_dir(directory):
        try:
            if not dir_entry.is_file(follow_symlinks=False):
                continue
        except OSError as e:
            logger.debug("Skipping unreadable entry %s: %s", dir_entry.path, e)
            continue
        yield Path(dir_entry.path)


def scan_deep(directory: Path) -> Iterator[FileEntry]:
    """
    Yield every file and directory below directory, at any depth.

    The root itself is not yielded. A directory is yielded before its
    contents. Symlinks, including symlinks to directories, are skipped.
    """
    for dir_entry in _list_dir(directory):
        try:
            if dir_entry.is_symlink():
                continue
            entry = _to_entry(dir_entry)
        except OSError as e:
            logger.debug("Skipping unreadable entry %s: %s", dir_entry.path, e)
            continue

        if entry.is_dir:
            yield entry
            yield from scan_deep(entry.path)
        elif dir_entry.is_file(follow_symlinks=False):
            yield entry
