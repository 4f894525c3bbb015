"""
Concurrent recursive directory walking.

Each directory's children are visited as independent coroutines, with the blocking
filesystem calls pushed onto worker threads. A directory is done only once every
child branch has finished, successfully or not.
"""

from __future__ import annotations

import asyncio
import logging
import os
from dataclasses import dataclass, field

from treepick.file_walker.classify import EntryKind, stat_entry
from treepick.file_walker.junk import is_ordinary
from treepick.file_walker.matching import should_include
from treepick.file_walker.types import AccessError, RawDescriptor, TraversalConfig

log = logging.getLogger(__name__)


@dataclass
class _WalkState:
    """Per-call accumulator. Only touched from the event loop thread."""

    found: list[RawDescriptor] = field(default_factory=list)
    pruned: int = 0


class TreeWalker:
    """
    Collects a `RawDescriptor` for every regular file under a root that passes the
    inclusion policy. Hidden and junk entries are pruned before anything else.

    Symlinks are followed, but a directory that is already an ancestor on its own
    branch is skipped, so link cycles end the branch instead of recursing.

    Results are in completion order. If any branch fails, `walk()` raises the first
    failure once all branches have settled, and no results are returned.
    """

    def __init__(self, config: TraversalConfig) -> None:
        self._config: TraversalConfig = config

    async def walk(self, path: str) -> list[RawDescriptor]:
        state = _WalkState()
        await self._visit(path, frozenset(), state)
        log.debug("Walked %s: %d matched, %d pruned", path, len(state.found), state.pruned)
        return state.found

    async def _visit(
        self, path: str, ancestors: frozenset[tuple[int, int]], state: _WalkState
    ) -> None:
        entry = await asyncio.to_thread(stat_entry, path)

        if entry.kind is EntryKind.DIRECTORY:
            if entry.identity in ancestors:
                log.debug("Skipping directory cycle: %s", path)
                return
            await self._visit_directory(path, ancestors | {entry.identity}, state)
        elif entry.kind is EntryKind.FILE:
            if should_include(path, self._config):
                state.found.append(RawDescriptor(length=entry.size, path=path))
        else:
            log.debug("Skipping non-regular entry: %s", path)

    async def _visit_directory(
        self, path: str, ancestors: frozenset[tuple[int, int]], state: _WalkState
    ) -> None:
        try:
            names = await asyncio.to_thread(os.listdir, path)
        except OSError as e:
            raise AccessError.from_os_error(e, path) from e

        children: list[str] = []
        for name in names:
            if is_ordinary(name):
                children.append(os.path.join(path, name))
            else:
                state.pruned += 1
                log.debug("Pruned hidden or junk entry: %s", os.path.join(path, name))

        results = await asyncio.gather(
            *(self._visit(child, ancestors, state) for child in children),
            return_exceptions=True,
        )
        for result in results:
            if isinstance(result, BaseException):
                raise result
