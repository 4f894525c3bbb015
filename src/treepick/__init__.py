"""
treepick: select a subset of files from a directory tree, with lazily-opened streams.

Usage::

    from treepick import get_files

    for item in get_files("/data/photos", {"files": ["*.jpg"], "keepRoot": True}):
        print(item.length, item.path)
        with item.open() as f:
            ...
"""

from treepick.api import get_files, get_files_async
from treepick.file_walker import AccessError, FileDescriptor, TraversalConfig

__all__ = [
    "AccessError",
    "FileDescriptor",
    "TraversalConfig",
    "get_files",
    "get_files_async",
]
