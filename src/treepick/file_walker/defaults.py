"""
Default pruning rules for directory traversal.

Entries pruned here never reach the pattern filter, whatever the configured patterns are.
Wildcard patterns use gitignore syntax and are matched against a bare entry name.
"""

from __future__ import annotations

# Names starting with this character are treated as hidden.
HIDDEN_MARKER = "."

# Platform metadata files that should never be collected.
JUNK_PATTERNS: list[str] = [
    # macOS
    ".DS_Store",
    ".AppleDouble",
    ".LSOverride",
    "._*",
    ".Spotlight-V100",
    ".Trashes",
    "__MACOSX",
    # Windows
    "Thumbs.db",
    "ehthumbs.db",
    "[Dd]esktop.ini",
    # Synology
    "*@eaDir",
    # Editors and tooling
    "*~",
    ".*.swp",
    "npm-debug.log",
]

# Exact names that can't be expressed as gitignore lines (trailing whitespace is stripped).
JUNK_NAMES: frozenset[str] = frozenset({"Icon\r"})
