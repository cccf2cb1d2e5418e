from __future__ import annotations

"""Tree and view exception classes.

Three families of failure exist in the core:

- allocation failures, which are propagated to the caller unchanged in
  meaning so a half-built node never becomes visible;
- invariant violations, which signal a bug in the caller (destroying a
  linked node, projecting an empty run, releasing a resource twice);
- stale handles, raised when a handle outlives the node it named.

Navigation without a target is deliberately absent: it is a no-op.
"""

from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from treeview_toolkit.core.models import NodeHandle


class TreeError(Exception):
    """Base exception for all tree and view errors.

    Carries the handle of the node involved, when there is one, so log
    lines can point at the offending slot.
    """

    def __init__(self, message: str, node: Optional["NodeHandle"] = None,
                 cause: Optional[Exception] = None) -> None:
        super().__init__(message)
        self.node = node
        self.cause = cause

    def __str__(self) -> str:
        if self.node is not None:
            return f"[Node: {self.node}] {super().__str__()}"
        return super().__str__()


class NodeAllocationError(TreeError):
    """Raised when a node cannot be allocated.

    Either the interpreter ran out of memory or the store reached its
    configured capacity. Nothing has been linked when this is raised.
    """

    def __init__(self, message: str, capacity: Optional[int] = None,
                 cause: Optional[Exception] = None) -> None:
        super().__init__(message, None, cause)
        self.capacity = capacity


class InvariantViolationError(TreeError):
    """Raised when a caller breaks a structural precondition.

    This is a programming error, not a recoverable runtime condition.
    """
    pass


class StaleHandleError(TreeError):
    """Raised when a handle refers to a node that has been destroyed."""
    pass


class TreeSourceError(TreeError):
    """Raised when an external tree description cannot be turned into nodes."""

    def __init__(self, message: str, source: Optional[str] = None,
                 cause: Optional[Exception] = None) -> None:
        super().__init__(message, None, cause)
        self.source = source

    def __str__(self) -> str:
        if self.source:
            return f"[Source: {self.source}] {super().__str__()}"
        return super().__str__()


__all__ = [
    "TreeError",
    "NodeAllocationError",
    "InvariantViolationError",
    "StaleHandleError",
    "TreeSourceError",
]
