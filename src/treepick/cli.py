#!/usr/bin/env python3
"""
treepick: Select files from a directory tree by name, extension, or path pattern

Common usage:
  treepick -f '*.jpg' photos/
  treepick -f '*.jpg' --keep-root photos/
  treepick --reverse -f node_modules -f '*.log' .
  treepick --reverse --json .

With no patterns nothing is selected; use `--reverse` alone to select everything.
Hidden files and platform junk files (`.DS_Store`, `Thumbs.db`, ...) are always skipped.
"""

from __future__ import annotations

import argparse
import importlib.metadata
import io
import json
import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from treepick.api import get_files
from treepick.config import find_config_file, load_config, merge_with_config
from treepick.file_walker import AccessError, FileDescriptor

log = logging.getLogger(__name__)


@dataclass
class Options:
    """Command-line options for the treepick tool."""

    path: str | None
    files: list[str]
    reverse: bool
    keep_root: bool
    root_folder: str
    legacy_matching: bool
    json: bool
    sort: bool
    verbose: bool
    version: bool


# argparse dest names of flags that a config file may also set
_TRACKED_FLAGS = ("files", "reverse", "keep_root", "root_folder", "legacy_matching")


def _parse_args(args: list[str] | None = None) -> tuple[Options, set[str]]:
    """
    Parse command-line arguments.

    Returns a tuple of (options, explicit_flags) where `explicit_flags` tracks
    which flags the user explicitly passed (for config merge precedence).
    """
    module_doc = __doc__ or ""
    doc_parts = module_doc.split("\n\n")
    description = doc_parts[0]
    epilog = "\n\n".join(doc_parts[1:])

    parser = argparse.ArgumentParser(
        description=description,
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "path",
        nargs="?",
        type=str,
        default=None,
        help="Root file or directory to walk (use '.' for current directory)",
    )
    # Flags default to None so we can tell which ones were actually supplied.
    parser.add_argument(
        "-f",
        "--files",
        action="append",
        default=None,
        metavar="PATTERN",
        help="Pattern to match: a name, a path, a path prefix, '*.ext', or 'dir*ext'. "
        "Can be repeated",
    )
    parser.add_argument(
        "-r",
        "--reverse",
        action="store_true",
        default=None,
        help="Treat patterns as exclusions instead of inclusions",
    )
    parser.add_argument(
        "--keep-root",
        action="store_true",
        default=None,
        dest="keep_root",
        help="Keep the root directory name in printed paths",
    )
    parser.add_argument(
        "--root-folder",
        type=str,
        default=None,
        dest="root_folder",
        metavar="NAME",
        help="With --keep-root, keep paths from this folder on",
    )
    parser.add_argument(
        "--legacy-matching",
        action="store_true",
        default=None,
        dest="legacy_matching",
        help="Stop at the first wildcard pattern, as earlier releases did",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print results as a JSON array of {length, path} objects",
    )
    parser.add_argument(
        "--sort",
        action="store_true",
        help="Sort results by path (default: completion order)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log traversal details to stderr",
    )
    parser.add_argument(
        "--version",
        action="store_true",
        help="Show version information and exit",
    )
    opts = parser.parse_args(args)

    explicit_flags = {name for name in _TRACKED_FLAGS if getattr(opts, name) is not None}

    return (
        Options(
            path=opts.path,
            files=opts.files or [],
            reverse=bool(opts.reverse),
            keep_root=bool(opts.keep_root),
            root_folder=opts.root_folder or "",
            legacy_matching=bool(opts.legacy_matching),
            json=opts.json,
            sort=opts.sort,
            verbose=opts.verbose,
            version=opts.version,
        ),
        explicit_flags,
    )


def _print_files(files: list[FileDescriptor], as_json: bool) -> None:
    # Undecodable file names come back from the filesystem as surrogate escapes;
    # write them out as the original bytes.
    if isinstance(sys.stdout, io.TextIOWrapper):
        sys.stdout.reconfigure(errors="surrogateescape")
    if as_json:
        print(json.dumps([{"length": f.length, "path": list(f.path)} for f in files], indent=2))
        return
    for f in files:
        print(f"{f.length}\t{f.relative_path}")


def main(args: list[str] | None = None) -> int:
    """
    Main entry point for the treepick CLI.

    Args:
        args: Command-line arguments (uses sys.argv if None)

    Returns:
        Exit code (0 for success, 1 for usage errors, 2 for filesystem errors)
    """
    options, explicit_flags = _parse_args(args)

    if options.version:
        try:
            version = importlib.metadata.version("treepick")
            print(f"v{version}")
        except importlib.metadata.PackageNotFoundError:
            print("unknown (package not installed)")
        return 0

    if options.verbose:
        logging.basicConfig(format="%(levelname)s %(name)s: %(message)s")
        logging.getLogger("treepick").setLevel(logging.DEBUG)

    if options.path is None:
        print(
            "Error: No input specified. Provide a file or directory (use '.' for current"
            " directory). Use --help for more options.",
            file=sys.stderr,
        )
        return 1

    file_options: dict[str, Any] = {}
    config_path = find_config_file(Path.cwd())
    if config_path:
        log.debug("Using config file %s", config_path)
        file_options = load_config(config_path)

    config = merge_with_config(
        {
            "files": options.files,
            "reverse": options.reverse,
            "keep_root": options.keep_root,
            "root_folder": options.root_folder,
            "legacy_matching": options.legacy_matching,
        },
        file_options,
        explicit_flags,
    )

    try:
        files = get_files(options.path, config)
    except AccessError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    if options.sort:
        files = sorted(files, key=lambda f: f.path)

    _print_files(files, options.json)
    return 0


if __name__ == "__main__":
    sys.exit(main())
