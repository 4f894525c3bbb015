"""
Pattern matching for file selection.

A pattern is one of:
- `*ext`: wildcard prefix, matches paths ending with the pattern's extension (`*.jpg`)
- a plain name, path, or path segment (`README.md`, `/srv/data/a.txt`, `node_modules`)
- a path prefix (`/srv/data/raw`)
- `dir*ext`: wildcard middle, matches paths ending with `ext` that have `dir` as a segment
  or contain every element of `dir` (`build*.o`, `assets/img*.png`)

Only the first `*` in a pattern is significant; there is no escaping.
"""

from __future__ import annotations

import os
from collections.abc import Iterable

from treepick.file_walker.types import TraversalConfig


def _extension_rule(path: str, pattern: str) -> bool:
    if not pattern.startswith("*"):
        return False
    ext = os.path.splitext(pattern)[1]
    return bool(ext) and path.endswith(ext)


def _literal_rule(path: str, pattern: str) -> bool:
    return (
        os.path.basename(path) == pattern
        or path == pattern
        or pattern in path.split(os.sep)
        or path.startswith(os.path.normpath(pattern))
    )


def _wildcard_rule(path: str, pattern: str) -> bool:
    # "a*b*c" behaves like "a*b": anything past the second star is ignored.
    parts = pattern.split("*")
    dir_part, ext = parts[0], parts[1]
    if not path.endswith(ext):
        return False
    if dir_part in path.split(os.sep):
        return True
    return all(element in path for element in dir_part.split(os.sep))


def pattern_matches(path: str, pattern: str) -> bool:
    """Check a single pattern against `path`, trying each rule in priority order."""
    if _extension_rule(path, pattern) or _literal_rule(path, pattern):
        return True
    if "*" in pattern:
        return _wildcard_rule(path, pattern)
    return False


def matches(path: str, patterns: Iterable[str], *, legacy: bool = False) -> bool:
    """
    Check if `path` matches any of `patterns`. An empty pattern list never matches.

    With `legacy=True`, evaluation stops at the first wildcard pattern that gets as far
    as the wildcard rule, and that rule's result is returned even when later patterns
    would have matched. This reproduces the behavior of earlier releases.
    """
    for pattern in patterns:
        if legacy:
            if _extension_rule(path, pattern) or _literal_rule(path, pattern):
                return True
            if "*" in pattern:
                return _wildcard_rule(path, pattern)
        elif pattern_matches(path, pattern):
            return True
    return False


def should_include(path: str, config: TraversalConfig) -> bool:
    """
    Final include decision for a regular file. Patterns select files normally and
    exclude them in reverse mode, so no patterns plus `reverse=True` includes everything.
    """
    matched = matches(path, config.files, legacy=config.legacy_matching)
    return not matched if config.reverse else matched
