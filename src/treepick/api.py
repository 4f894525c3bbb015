"""
Main entry points: collect matching files under a root path.
"""

from __future__ import annotations

import asyncio
import logging
import os
from pathlib import Path
from typing import Any

from treepick.file_walker import FileDescriptor, TreeWalker, normalize_config, rewrite

log = logging.getLogger(__name__)


async def get_files_async(path: str | Path, options: Any = None) -> list[FileDescriptor]:
    """
    Walk `path` and return a `FileDescriptor` for every regular file selected by
    `options`.

    Options (a mapping or `TraversalConfig`):
    - `files`: patterns to match: a full path, an extension (`*.jpg`), a name,
      a path segment, or `dir*ext` (default: none)
    - `reverse`: treat `files` as exclusions (default: False)
    - `keepRoot`: keep the root directory in the returned paths (default: False)
    - `rootFolder`: with `keepRoot`, keep paths from this folder on (default: '')

    With no patterns nothing is selected unless `reverse` is set, in which case
    everything is. Results come back in completion order. Any filesystem failure
    raises `AccessError` and discards partial results.
    """
    config = normalize_config(options)
    root = os.path.normpath(os.fspath(path))

    raw = await TreeWalker(config).walk(root)
    files = rewrite(raw, root, config)

    log.debug("Collected %d files under %s", len(files), root)
    return files


def get_files(path: str | Path, options: Any = None) -> list[FileDescriptor]:
    """
    Blocking version of `get_files_async()`. Must not be called from a running event loop.
    """
    return asyncio.run(get_files_async(path, options))
