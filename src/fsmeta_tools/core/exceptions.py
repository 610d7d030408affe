"""Exception hierarchy for fsmeta-tools."""


class FSMetaToolsError(Exception):
    """Base exception for all fsmeta-tools errors."""

    pass


class AclRetrievalError(FSMetaToolsError):
    """Raised when a file's access ACL cannot be read or compared.

    Retrieval and comparison failures are deliberately reported as one kind.
    The originating error, if any, is available as ``__cause__``.
    """

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Cannot get access ACL for '{path}'")


class TraversalError(FSMetaToolsError):
    """Base class for tree traversal failures."""

    def __init__(self, path: str, message: str):
        self.path = path
        super().__init__(message)


class TraversalOpenError(TraversalError):
    """Raised when a traversal root cannot be opened."""

    def __init__(self, root: str, reason: str = ""):
        message = f"Cannot open tree at '{root}'"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(root, message)

    @property
    def root(self) -> str:
        return self.path


class TraversalReadError(TraversalError):
    """Raised when a directory inside an open traversal cannot be read."""

    def __init__(self, path: str, reason: str = ""):
        message = f"Cannot read directory '{path}'"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(path, message)
