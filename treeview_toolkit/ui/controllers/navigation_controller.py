from __future__ import annotations

import logging
from typing import Optional

from treeview_toolkit.core import siblings
from treeview_toolkit.core.models import NodeHandle
from treeview_toolkit.ui.tree_view import BackReference, TreeView
from treeview_toolkit.ui.widgets.base import Direction

logger = logging.getLogger(__name__)

__all__ = ["NavigationController"]


class NavigationController:
    """Translate user commands into projections of a :class:`TreeView`.

    The controller reads the highlighted entry from the view's widget and
    decides which sibling run to project next. It holds no tree state of
    its own and contains no UI toolkit code.

    Parameters
    ----------
    view : TreeView
        The single active view of the session.

    Notes
    -----
    - Descend and ascend return True when a new run was projected and False
      when the command had no target. A missing target is not an error.
    - Callers redraw with :meth:`show` after each command.
    """

    def __init__(self, view: TreeView) -> None:
        self.view: TreeView = view

    # ---------------------------------------------------------------------------------
    # Commands
    # ---------------------------------------------------------------------------------

    def start(self) -> None:
        """Project the root run and draw it."""
        self.view.project(None)
        self.view.widget.show()

    def selected_node(self) -> Optional[NodeHandle]:
        """Return the node behind the highlighted entry, if it is a node."""
        ref = self.view.widget.selected()
        return ref if isinstance(ref, NodeHandle) else None

    def descend(self) -> bool:
        """Show the child run of the highlighted node.

        With the back entry highlighted this behaves like :meth:`ascend`.
        """
        ref = self.view.widget.selected()
        if ref is BackReference.BACK:
            return self.ascend()
        if not isinstance(ref, NodeHandle):
            return False

        child_head = self.view.store.get(ref).child_head
        if child_head is None:
            logger.debug("Descend from %s ignored: no children", ref)
            return False
        self.view.project(child_head)
        return True

    def ascend(self) -> bool:
        """Show the whole run containing the highlighted node's parent."""
        ref = self.view.widget.selected()
        if ref is BackReference.BACK:
            ref = self.view.current_head
        if not isinstance(ref, NodeHandle):
            return False

        parent = self.view.store.get(ref).parent
        if parent is None:
            logger.debug("Ascend from %s ignored: already at top level", ref)
            return False
        self.view.project(siblings.first(self.view.store, parent))
        return True

    def move(self, direction: Direction) -> None:
        self.view.widget.move(direction)

    def show(self) -> None:
        self.view.widget.show()

    def shutdown(self) -> int:
        """Close the view, destroying the tree. Returns the node count destroyed."""
        return self.view.close()
