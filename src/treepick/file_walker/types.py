"""Configuration and result types for file traversal."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, BinaryIO


class AccessError(OSError):
    """
    A filesystem query (stat, listing, or open) failed. Fatal to the whole traversal:
    callers get this error and no descriptors.
    """

    @classmethod
    def from_os_error(cls, err: OSError, path: str) -> AccessError:
        return cls(err.errno, err.strerror or str(err), err.filename or path)


@dataclass(frozen=True)
class TraversalConfig:
    """
    Settings for one traversal, shared read-only by every concurrent visit.

    `files` holds the match patterns; with `reverse` they describe exclusions instead.
    `keep_root` keeps the root directory name (or everything from `root_folder` on)
    in the returned path segments. `legacy_matching` restores the old behavior where
    the first wildcard pattern reaching the wildcard rule decides the result.
    """

    files: tuple[str, ...] = ()
    reverse: bool = False
    keep_root: bool = False
    root_folder: str = ""
    legacy_matching: bool = False


# Accepted option spellings, mapped to `TraversalConfig` field names.
_OPTION_ALIASES: dict[str, str] = {
    "files": "files",
    "reverse": "reverse",
    "keepRoot": "keep_root",
    "keep_root": "keep_root",
    "rootFolder": "root_folder",
    "root_folder": "root_folder",
    "legacyMatching": "legacy_matching",
    "legacy_matching": "legacy_matching",
}


def normalize_config(raw: Any = None) -> TraversalConfig:
    """
    Build a `TraversalConfig` from loosely-typed options. Never rejects input:
    missing or malformed values fall back to their defaults, and anything that
    isn't a non-empty mapping yields the default config. `raw` is not modified.
    """
    if isinstance(raw, TraversalConfig):
        return raw
    if not isinstance(raw, Mapping) or not raw:
        return TraversalConfig()

    opts: dict[str, Any] = {}
    for key, value in raw.items():
        field_name = _OPTION_ALIASES.get(key)
        if field_name is not None:
            opts[field_name] = value

    files = opts.get("files")
    if isinstance(files, (list, tuple)):
        # Empty patterns would match every absolute path by segment, so they are dropped.
        patterns = tuple(f for f in files if isinstance(f, str) and f)
    else:
        patterns = ()

    reverse = opts.get("reverse")
    legacy = opts.get("legacy_matching")
    root_folder = opts.get("root_folder")

    return TraversalConfig(
        files=patterns,
        reverse=reverse if isinstance(reverse, bool) else False,
        keep_root=bool(opts.get("keep_root", False)),
        root_folder=root_folder if isinstance(root_folder, str) else "",
        legacy_matching=legacy if isinstance(legacy, bool) else False,
    )


@dataclass(frozen=True)
class RawDescriptor:
    """A matched file before path rewriting: its size and absolute walk path."""

    length: int
    path: str


@dataclass(frozen=True)
class FileStream:
    """
    Deferred read access to one file. Each call opens a new, independent binary handle;
    closing it is up to the caller.
    """

    path: str

    def open(self) -> BinaryIO:
        try:
            return open(self.path, "rb")
        except OSError as e:
            raise AccessError.from_os_error(e, self.path) from e

    def __call__(self) -> BinaryIO:
        return self.open()


@dataclass(frozen=True)
class FileDescriptor:
    """A matched file as returned to callers."""

    length: int
    path: tuple[str, ...]
    stream_factory: FileStream

    @property
    def relative_path(self) -> str:
        """Path segments joined with `/`."""
        return "/".join(self.path)

    @property
    def source_path(self) -> str:
        """The path the file was found at during the walk."""
        return self.stream_factory.path

    def open(self) -> BinaryIO:
        return self.stream_factory()

    def __post_init__(self) -> None:
        if not self.path:
            raise ValueError(f"Empty path segments for {self.stream_factory.path}")

