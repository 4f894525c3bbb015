"""Entry classification: directory, regular file, or anything else."""

from __future__ import annotations

import os
import stat
from dataclasses import dataclass
from enum import Enum

from treepick.file_walker.types import AccessError


class EntryKind(Enum):
    DIRECTORY = "directory"
    FILE = "file"
    OTHER = "other"


@dataclass(frozen=True)
class EntryStat:
    kind: EntryKind
    size: int = 0
    # Device and inode identify a directory across the different paths that reach it.
    dev: int = 0
    ino: int = 0

    @property
    def identity(self) -> tuple[int, int]:
        return (self.dev, self.ino)


def stat_entry(path: str) -> EntryStat:
    """
    Stat `path` (following symlinks) and classify it. Sockets, FIFOs, devices and
    dangling symlinks are `OTHER`. Any other failure raises `AccessError`.
    """
    try:
        st = os.stat(path)
    except FileNotFoundError as e:
        if _is_dangling_link(path):
            return EntryStat(EntryKind.OTHER)
        raise AccessError.from_os_error(e, path) from e
    except OSError as e:
        raise AccessError.from_os_error(e, path) from e

    if stat.S_ISDIR(st.st_mode):
        return EntryStat(EntryKind.DIRECTORY, dev=st.st_dev, ino=st.st_ino)
    if stat.S_ISREG(st.st_mode):
        return EntryStat(EntryKind.FILE, st.st_size)
    return EntryStat(EntryKind.OTHER)


def classify_entry(path: str) -> EntryKind:
    return stat_entry(path).kind


def _is_dangling_link(path: str) -> bool:
    try:
        return stat.S_ISLNK(os.lstat(path).st_mode)
    except OSError:
        return False
