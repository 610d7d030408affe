"""Classification of a file's access ACL as trivial or non-trivial."""

import errno
import os
from enum import Enum

from fsmeta_tools.core import get_logger, get_tracer
from fsmeta_tools.core.exceptions import AclRetrievalError

from .entries import ACL_XATTR_ACCESS, AccessControlList

logger = get_logger(__name__)
tracer = get_tracer(__name__)

# Errors meaning "no ACL stored", as opposed to "cannot ask"
_NO_ACL_ERRNOS = frozenset({errno.ENODATA, getattr(errno, "ENOATTR", errno.ENODATA)})


def _acl_from_stat(path: str) -> AccessControlList:
    try:
        st = os.stat(path)
    except OSError as e:
        logger.debug("ACL retrieval failed", path=path, error=str(e))
        raise AclRetrievalError(path) from e
    return AccessControlList.from_mode(st.st_mode)


class ModeEquivalence(str, Enum):
    """Whether an ACL is fully expressible as owner/group/other mode bits."""

    trivial = "trivial"
    non_trivial = "non-trivial"


def get_access_acl(path: str) -> AccessControlList:
    """Retrieve the access ACL of a file, following symbolic links.

    When the filesystem stores no ACL for the file, the minimal ACL is
    derived from the file's mode bits, as libacl does.

    Args:
        path: File to inspect

    Returns:
        The file's access ACL

    Raises:
        AclRetrievalError: If the path cannot be inspected, the filesystem
            does not support ACLs, or the stored ACL is malformed
    """
    try:
        data = os.getxattr(path, ACL_XATTR_ACCESS, follow_symlinks=True)
    except OSError as e:
        if e.errno not in _NO_ACL_ERRNOS:
            logger.debug("ACL retrieval failed", path=path, error=str(e))
            raise AclRetrievalError(path) from e
        return _acl_from_stat(path)

    try:
        return AccessControlList.from_xattr(data)
    except ValueError as e:
        logger.debug("Malformed ACL attribute", path=path, error=str(e))
        raise AclRetrievalError(path) from e


def classify(path: str) -> ModeEquivalence:
    """Classify the access ACL of ``path``.

    Args:
        path: File to inspect, absolute or relative

    Returns:
        ModeEquivalence.trivial if mode bits express the ACL exactly,
        ModeEquivalence.non_trivial otherwise

    Raises:
        AclRetrievalError: If the ACL cannot be retrieved or compared
    """
    with tracer.start_as_current_span("acl.classify") as span:
        span.set_attribute("fsmeta.path", path)
        acl = get_access_acl(path)
        equivalent, _ = acl.equiv_mode()
        result = ModeEquivalence.trivial if equivalent else ModeEquivalence.non_trivial
        span.set_attribute("fsmeta.acl", result.value)

    logger.debug("Classified access ACL", path=path, result=result.value)
    return result
