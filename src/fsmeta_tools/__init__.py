"""Filesystem metadata inspection tools.

This package answers two questions about POSIX filesystem objects by looking
at kernel metadata only:

    - Does a file's access ACL carry more than the owner/group/other mode
      bits can express?
    - Which whiteout entries, left behind by union and overlay filesystems,
      sit directly inside a set of directories?

Usage:
    >>> from fsmeta_tools import classify, scan, ModeEquivalence
    >>> classify("/srv/share") is ModeEquivalence.trivial
    True
    >>> list(scan(["/mnt/upper"]))
    ['removed.txt']

Both operations are also available as the ``hasacl`` and ``listwhite``
commands.
"""

__version__ = "0.1.0"

from .core.exceptions import (
    AclRetrievalError,
    FSMetaToolsError,
    TraversalError,
    TraversalOpenError,
    TraversalReadError,
)
from .filesystem import (
    AccessControlList,
    EntryKind,
    ModeEquivalence,
    TraversalDecision,
    TreeEntry,
    classify,
    get_access_acl,
    open_tree,
    scan,
)
from .schemas import ScanOptions

__all__ = [
    # Operations
    "classify",
    "get_access_acl",
    "open_tree",
    "scan",
    # Types
    "AccessControlList",
    "EntryKind",
    "ModeEquivalence",
    "ScanOptions",
    "TraversalDecision",
    "TreeEntry",
    # Errors
    "FSMetaToolsError",
    "AclRetrievalError",
    "TraversalError",
    "TraversalOpenError",
    "TraversalReadError",
]
