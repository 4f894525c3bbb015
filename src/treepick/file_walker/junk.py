"""Hidden and junk entry detection using pathspec."""

from __future__ import annotations

from functools import cache

import pathspec

from treepick.file_walker.defaults import HIDDEN_MARKER, JUNK_NAMES, JUNK_PATTERNS


@cache
def _junk_spec() -> pathspec.GitIgnoreSpec:
    return pathspec.GitIgnoreSpec.from_lines(JUNK_PATTERNS)


def is_hidden(name: str) -> bool:
    return name.startswith(HIDDEN_MARKER)


def is_junk(name: str) -> bool:
    """Check if `name` is a platform metadata file such as `Thumbs.db` or `.DS_Store`."""
    if name in JUNK_NAMES:
        return True
    return _junk_spec().match_file(name)


def is_ordinary(name: str) -> bool:
    """
    Check if a directory entry should be visited at all. Hidden entries and junk
    entries are pruned before any pattern filtering.
    """
    return bool(name) and not is_hidden(name) and not is_junk(name)
