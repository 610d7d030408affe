"""Filesystem metadata inspection: access ACLs and whiteout entries."""

from .acl import (
    AccessControlList,
    AclEntry,
    AclTag,
    ModeEquivalence,
    classify,
    get_access_acl,
)
from .traversal import (
    EntryKind,
    TraversalDecision,
    TreeEntry,
    TreeWalker,
    is_whiteout,
    open_tree,
    prune_subdirectories,
)
from .whiteouts import scan

__all__ = [
    "AccessControlList",
    "AclEntry",
    "AclTag",
    "ModeEquivalence",
    "classify",
    "get_access_acl",
    "EntryKind",
    "TraversalDecision",
    "TreeEntry",
    "TreeWalker",
    "is_whiteout",
    "open_tree",
    "prune_subdirectories",
    "scan",
]
