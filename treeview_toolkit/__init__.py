"""Top-level package for TreeView Toolkit.

The core (node arena, sibling lists, teardown, tree sources) is GUI-agnostic.
Front-ends (curses terminal, Tk) only depend on the public API re-exported
here and on :mod:`treeview_toolkit.ui`.
"""

from .core import (  # noqa: F401
    InvariantViolationError,
    NodeAllocationError,
    NodeHandle,
    NodeStore,
    StaleHandleError,
    TreeError,
    TreeSourceError,
    destroy_subtree,
)
from .ui.tree_view import TreeView  # noqa: F401
from .ui.controllers.navigation_controller import NavigationController  # noqa: F401

__all__: list[str] = [
    "NodeHandle",
    "NodeStore",
    "destroy_subtree",
    "TreeView",
    "NavigationController",
    "TreeError",
    "NodeAllocationError",
    "InvariantViolationError",
    "StaleHandleError",
    "TreeSourceError",
]
