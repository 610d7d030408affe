"""Physical directory tree traversal with per-entry prune decisions.

The walker stats every entry itself instead of relying on ``os.walk``, so it
can tell whiteouts, unstattable entries and directories apart and never steps
through a symbolic link. Directory descent is controlled by a policy callable
that returns a TraversalDecision for each directory entry.
"""

import os
import stat
from collections.abc import Callable, Iterator, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from fsmeta_tools.core import get_logger, get_tracer
from fsmeta_tools.core.exceptions import TraversalOpenError, TraversalReadError
from fsmeta_tools.schemas import ScanOptions

logger = get_logger(__name__)
tracer = get_tracer(__name__)


class EntryKind(str, Enum):
    """Classification of a visited entry."""

    regular = "regular"
    directory = "directory"
    whiteout = "whiteout"
    unstattable = "unstattable"


class TraversalDecision(str, Enum):
    """What the walker does after visiting a directory."""

    descend = "descend"
    prune = "prune"


@dataclass(frozen=True)
class TreeEntry:
    """One node visited during a traversal.

    Attributes:
        name: Bare entry name (the last path component for a root)
        path: Path of the entry, joined onto its root
        kind: How the entry was classified
        depth: Distance from the root (the root itself is 0)
    """

    name: str
    path: str
    kind: EntryKind
    depth: int


TraversalPolicy = Callable[[TreeEntry], TraversalDecision]


def prune_subdirectories(entry: TreeEntry) -> TraversalDecision:
    """Descend into roots but never into the directories directly below them."""
    if entry.kind == EntryKind.directory and entry.depth == 1:
        return TraversalDecision.prune
    return TraversalDecision.descend


def is_whiteout(st: os.stat_result) -> bool:
    """Check whether stat data describes a whiteout.

    Overlay and union filesystems mark a removed lower-layer entry with a
    character device whose device number is 0:0.
    """
    return stat.S_ISCHR(st.st_mode) and st.st_rdev == 0


def classify_stat(st: os.stat_result) -> EntryKind:
    """Map stat data onto an EntryKind."""
    if stat.S_ISDIR(st.st_mode):
        return EntryKind.directory
    if is_whiteout(st):
        return EntryKind.whiteout
    return EntryKind.regular


def _stat_entry(path: str, follow_symlinks: bool) -> os.stat_result:
    return os.stat(path, follow_symlinks=follow_symlinks)


class TreeWalker:
    """Pre-order walk over one or more already opened roots.

    Use :func:`open_tree` to build one. Each iteration starts the walk over;
    every directory handle is closed before its children are visited.
    """

    def __init__(
        self,
        roots: Sequence[TreeEntry],
        options: ScanOptions,
        policy: TraversalPolicy,
    ):
        self.roots = tuple(roots)
        self.options = options
        self.policy = policy

    def __iter__(self) -> Iterator[TreeEntry]:
        for root in self.roots:
            yield from self._visit(root)

    def _visit(self, entry: TreeEntry) -> Iterator[TreeEntry]:
        if entry.kind == EntryKind.whiteout and not self.options.whiteouts:
            return

        yield entry

        if entry.kind != EntryKind.directory:
            return

        if self.policy(entry) == TraversalDecision.prune:
            logger.debug("Pruned directory", path=entry.path, depth=entry.depth)
            return

        for child in self._read_children(entry):
            yield from self._visit(child)

    def _read_children(self, parent: TreeEntry) -> list[TreeEntry]:
        try:
            with os.scandir(parent.path) as it:
                names = [dir_entry.name for dir_entry in it]
        except OSError as e:
            logger.debug("Directory read failed", path=parent.path, error=str(e))
            raise TraversalReadError(parent.path, e.strerror or str(e)) from e

        children = []
        for name in names:
            path = os.path.join(parent.path, name)
            try:
                st = _stat_entry(path, follow_symlinks=not self.options.physical)
            except OSError as e:
                logger.debug("Entry not stattable", path=path, error=str(e))
                kind = EntryKind.unstattable
            else:
                kind = classify_stat(st)
            children.append(
                TreeEntry(name=name, path=path, kind=kind, depth=parent.depth + 1)
            )
        return children


def open_tree(
    roots: Sequence[str] = (),
    options: Optional[ScanOptions] = None,
    policy: TraversalPolicy = prune_subdirectories,
) -> TreeWalker:
    """Open a traversal over ``roots``.

    Every root is stat-ed here, before any entry is produced, so a bad root
    fails the whole traversal up front.

    Args:
        roots: Start paths; an empty sequence means the current directory
        options: Traversal flags, defaults to a physical, whiteout-aware walk
        policy: Decides for each directory whether to descend into it

    Returns:
        A TreeWalker ready to be iterated

    Raises:
        TraversalOpenError: If the current directory cannot be determined or
            a root cannot be stat-ed
    """
    options = options or ScanOptions()

    if not roots:
        try:
            roots = [os.getcwd()]
        except OSError as e:
            logger.debug("Cannot determine working directory", error=str(e))
            raise TraversalOpenError(".", e.strerror or str(e)) from e

    with tracer.start_as_current_span("traversal.open") as span:
        span.set_attribute("fsmeta.roots", list(roots))
        opened = []
        for root in roots:
            try:
                st = _stat_entry(root, follow_symlinks=not options.physical)
            except OSError as e:
                logger.debug("Cannot open traversal root", root=root, error=str(e))
                raise TraversalOpenError(root, e.strerror or str(e)) from e
            name = os.path.basename(os.path.normpath(root)) or root
            opened.append(
                TreeEntry(name=name, path=root, kind=classify_stat(st), depth=0)
            )

    logger.info("Opened traversal", roots=list(roots), physical=options.physical)
    return TreeWalker(opened, options, policy)
