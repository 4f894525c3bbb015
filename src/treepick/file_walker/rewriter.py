"""Rewriting absolute walk paths into root-relative path segments."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable
from pathlib import PurePath

from treepick.file_walker.types import FileDescriptor, FileStream, RawDescriptor, TraversalConfig

log = logging.getLogger(__name__)


def _parts(path: str) -> tuple[str, ...]:
    return PurePath(os.path.normpath(path)).parts


def _find_run(haystack: tuple[str, ...], needle: tuple[str, ...]) -> int:
    """Index of the first occurrence of `needle` as a contiguous run in `haystack`, or -1."""
    width = len(needle)
    for i in range(len(haystack) - width + 1):
        if haystack[i : i + width] == needle:
            return i
    return -1


def effective_root(path: str, config: TraversalConfig) -> tuple[str, ...]:
    """
    Segments to strip from every matched file's path.

    - `keep_root` without `root_folder`: the parent of `path`, so the root's own name is kept.
    - `keep_root` with `root_folder`: everything before the first occurrence of
      `root_folder` among the segments of `path`. Falls back to `path` itself if absent.
    - otherwise: `path` itself.
    """
    root = _parts(path)
    if not config.keep_root:
        return root

    if not config.root_folder:
        # The filesystem root has no parent to keep it under.
        if len(root) == 1 and PurePath(root[0]).anchor:
            return root
        return root[:-1]

    folder = PurePath(os.path.normpath(config.root_folder))
    # A leading anchor in `root_folder` ("/photos") can't occur mid-path.
    folder_parts = folder.parts[1:] if folder.anchor else folder.parts
    index = _find_run(root, folder_parts) if folder_parts else -1
    if index < 0:
        log.warning(
            "Root folder %r not found in %s; stripping the full root", config.root_folder, path
        )
        return root
    return root[:index]


def relative_segments(abs_path: str, root: tuple[str, ...]) -> tuple[str, ...]:
    """
    Strip `root` from `abs_path` and return the remaining segments. A file that is
    the root itself keeps its basename. A path outside `root` keeps all of its
    segments except the anchor.
    """
    parts = _parts(abs_path)
    if parts[: len(root)] == root:
        return parts[len(root) :] or parts[-1:]
    anchor = PurePath(os.path.normpath(abs_path)).anchor
    return tuple(p for p in parts if p != anchor) or parts[-1:]


def rewrite(
    raw: Iterable[RawDescriptor], path: str, config: TraversalConfig
) -> list[FileDescriptor]:
    """
    Turn raw descriptors into `FileDescriptor`s with root-relative segments and a
    `FileStream` over the original absolute path. The root is computed once.
    """
    root = effective_root(path, config)
    return [
        FileDescriptor(
            length=item.length,
            path=relative_segments(item.path, root),
            stream_factory=FileStream(item.path),
        )
        for item in raw
    ]
