"""Core utilities and shared components for fsmeta-tools."""

from .config import settings
from .exceptions import (
    AclRetrievalError,
    FSMetaToolsError,
    TraversalError,
    TraversalOpenError,
    TraversalReadError,
)
from .observability import get_logger, get_tracer

__all__ = [
    "settings",
    "FSMetaToolsError",
    "AclRetrievalError",
    "TraversalError",
    "TraversalOpenError",
    "TraversalReadError",
    "get_logger",
    "get_tracer",
]
