"""GUI-agnostic tree core: node arena, sibling lists, teardown, tree sources."""

from .exceptions import (  # noqa: F401
    InvariantViolationError,
    NodeAllocationError,
    StaleHandleError,
    TreeError,
    TreeSourceError,
)
from .models import Node, NodeHandle  # noqa: F401
from .node_store import NodeStore  # noqa: F401
from .teardown import destroy_subtree  # noqa: F401

__all__: list[str] = [
    "Node",
    "NodeHandle",
    "NodeStore",
    "destroy_subtree",
    "TreeError",
    "NodeAllocationError",
    "InvariantViolationError",
    "StaleHandleError",
    "TreeSourceError",
]
