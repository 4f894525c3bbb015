"""
Self-contained traversal engine: concurrent directory walking, pattern filtering,
and rewriting of matched paths into root-relative segments.

No imports from `treepick` outside this package.

Usage::

    import asyncio

    from treepick.file_walker import TreeWalker, normalize_config, rewrite

    config = normalize_config({"files": ["*.jpg"], "keepRoot": True})
    raw = asyncio.run(TreeWalker(config).walk("/data/photos"))
    for item in rewrite(raw, "/data/photos", config):
        with item.open() as f:
            ...
"""

from treepick.file_walker.classify import EntryKind, classify_entry
from treepick.file_walker.junk import is_ordinary
from treepick.file_walker.matching import matches, should_include
from treepick.file_walker.rewriter import effective_root, relative_segments, rewrite
from treepick.file_walker.types import (
    AccessError,
    FileDescriptor,
    FileStream,
    RawDescriptor,
    TraversalConfig,
    normalize_config,
)
from treepick.file_walker.walker import TreeWalker

__all__ = [
    "AccessError",
    "EntryKind",
    "FileDescriptor",
    "FileStream",
    "RawDescriptor",
    "TraversalConfig",
    "TreeWalker",
    "classify_entry",
    "effective_root",
    "is_ordinary",
    "matches",
    "normalize_config",
    "relative_segments",
    "rewrite",
    "should_include",
]
