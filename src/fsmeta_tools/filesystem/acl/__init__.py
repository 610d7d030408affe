"""Access ACL retrieval and classification."""

from .classification import ModeEquivalence, classify, get_access_acl
from .entries import AccessControlList, AclEntry, AclTag

__all__ = [
    "AccessControlList",
    "AclEntry",
    "AclTag",
    "ModeEquivalence",
    "classify",
    "get_access_acl",
]
