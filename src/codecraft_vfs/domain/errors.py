from __future__ import annotations

"""
Workspace Error Hierarchy.

Every rejected operation on the workspace surfaces as a subclass of
`WorkspaceError`, so callers can catch the whole family or a single kind.
"""

from typing import Optional


class WorkspaceError(Exception):
    """
    Base exception for all workspace failures.

    Attributes:
        code: Stable identifier of the failure kind.
        path: Workspace path the failure refers to, if any.
    """

    code = "WORKSPACE_ERROR"

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path


class NotFoundError(WorkspaceError):
    """A path or one of its intermediate segments does not exist."""
    code = "NOT_FOUND"


class InvalidParentError(WorkspaceError):
    """A segment expected to be a directory is a file."""
    code = "INVALID_PARENT"


class ConflictError(WorkspaceError):
    """The target name is already taken at the destination."""
    code = "CONFLICT"


class CycleError(WorkspaceError):
    """A move destination is the source itself or one of its descendants."""
    code = "CYCLE"


class InvalidNameError(WorkspaceError):
    """An entry name is empty or contains the path separator."""
    code = "INVALID_NAME"


class RemoteUnavailableError(WorkspaceError):
    """The remote workspace store could not be reached or refused the call."""
    code = "REMOTE_UNAVAILABLE"


class WorkspaceNotLoadedError(WorkspaceError):
    """An operation was attempted before the workspace finished loading."""
    code = "NOT_LOADED"


class TreeFormatError(WorkspaceError):
    """A serialized tree does not have the expected shape."""
    code = "TREE_FORMAT"
