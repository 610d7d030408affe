"""Whiteout listing for union and overlay filesystems."""

from collections.abc import Iterator, Sequence
from typing import Optional

from fsmeta_tools.core import get_logger
from fsmeta_tools.schemas import ScanOptions

from .traversal import EntryKind, TreeWalker, open_tree, prune_subdirectories

logger = get_logger(__name__)


def _whiteout_names(walker: TreeWalker) -> Iterator[str]:
    found = 0
    for entry in walker:
        if entry.kind == EntryKind.whiteout:
            found += 1
            yield entry.name
    logger.info("Whiteout scan finished", whiteouts=found)


def scan(
    roots: Sequence[str] = (), options: Optional[ScanOptions] = None
) -> Iterator[str]:
    """List the names of whiteout entries below each root.

    Roots and the entries directly inside them are inspected; directories
    found directly inside a root are reported to the walker but never
    entered. Unstattable entries are skipped.

    The roots are opened immediately, while the names are produced lazily in
    traversal order. Call ``scan`` again to start over.

    Args:
        roots: Directories to inspect; empty means the current directory
        options: Traversal flags, defaults to a physical, whiteout-aware walk

    Returns:
        Iterator over bare whiteout names

    Raises:
        TraversalOpenError: If a root cannot be opened (raised by the call)
        TraversalReadError: If a directory cannot be read (raised while
            iterating)
    """
    walker = open_tree(roots, options, policy=prune_subdirectories)
    return _whiteout_names(walker)
