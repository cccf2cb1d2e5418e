from __future__ import annotations

"""Arena that owns every node of a tree.

The store is the only allocator and deallocator of nodes. Callers hold
:class:`NodeHandle` values; the store resolves them and rejects handles
whose slot has since been recycled.

Design principles
-----------------
- A node is either fully valid or does not exist: the name is copied and
  the slot reserved before any link to the parent is written.
- Destruction is bottom-up and unlink-before-free. The store checks the
  precondition and raises :class:`InvariantViolationError` when it is not
  met instead of trying to repair the structure.
- Freed slots are reused, with a bumped generation.
"""

import logging
from typing import Dict, Iterator, List, Optional

from treeview_toolkit.core.exceptions import (
    InvariantViolationError,
    NodeAllocationError,
    StaleHandleError,
)
from treeview_toolkit.core.models import Node, NodeHandle

logger = logging.getLogger(__name__)

__all__ = ["NodeStore"]


class NodeStore:
    """Generation-checked arena of :class:`Node` records.

    Parameters
    ----------
    max_nodes : Optional[int], default=None
        Maximum number of live nodes. ``None`` means unbounded. Reaching the
        limit makes :meth:`create` raise :class:`NodeAllocationError`.

    Examples
    --------
    >>> store = NodeStore()
    >>> root = store.create(None, "ROOT")
    >>> child = store.create(root, "a")
    >>> store.get(root).child_head == child
    True
    """

    def __init__(self, max_nodes: Optional[int] = None) -> None:
        self._max_nodes: Optional[int] = max_nodes if max_nodes is None else max(1, int(max_nodes))
        self._slots: List[Optional[Node]] = []
        self._generations: List[int] = []
        self._free: List[int] = []
        self.created: int = 0
        self.destroyed: int = 0

    # --------------------------------------------------------------------- API

    def create(self, parent: Optional[NodeHandle], name: str) -> NodeHandle:
        """Allocate a node owning a copy of ``name``.

        If ``parent`` is given the node gets it as back reference and, when
        the parent has no children yet, becomes the parent's ``child_head``.
        The node is not chained to any sibling; that is the job of
        :func:`treeview_toolkit.core.siblings.append`.

        Raises
        ------
        NodeAllocationError
            Out of memory, or ``max_nodes`` live nodes already exist.
        StaleHandleError
            ``parent`` refers to a destroyed node.
        """
        parent_node = self.get(parent) if parent is not None else None

        if self._max_nodes is not None and len(self) >= self._max_nodes:
            raise NodeAllocationError(
                f"Node store is full ({self._max_nodes} nodes)", capacity=self._max_nodes
            )

        try:
            node = Node(name=str(name), parent=parent)
            if self._free:
                index = self._free.pop()
            else:
                self._slots.append(None)
                self._generations.append(0)
                index = len(self._slots) - 1
        except MemoryError as exc:
            raise NodeAllocationError("Out of memory while allocating node", cause=exc) from exc

        self._slots[index] = node
        handle = NodeHandle(index, self._generations[index])
        if parent_node is not None and parent_node.child_head is None:
            parent_node.child_head = handle

        self.created += 1
        logger.debug("Created node %s (%r) under %s", handle, node.name, parent)
        return handle

    def destroy(self, handle: NodeHandle) -> None:
        """Release a node that is detached and childless.

        Raises
        ------
        InvariantViolationError
            The node still owns children, is still chained to a sibling, or
            is still referenced as its parent's ``child_head``.
        StaleHandleError
            The handle was already destroyed.
        """
        node = self.get(handle)
        if node.child_head is not None:
            raise InvariantViolationError("Cannot destroy a node that still has children", handle)
        if node.is_linked:
            raise InvariantViolationError("Cannot destroy a node still linked to siblings", handle)
        if node.parent is not None:
            parent_node = self._slots[node.parent.index]
            if (
                parent_node is not None
                and self._generations[node.parent.index] == node.parent.generation
                and parent_node.child_head == handle
            ):
                raise InvariantViolationError(
                    "Cannot destroy a node its parent still holds as child_head", handle
                )

        self._slots[handle.index] = None
        self._generations[handle.index] += 1
        self._free.append(handle.index)
        self.destroyed += 1
        logger.debug("Destroyed node %s (%r)", handle, node.name)

    def get(self, handle: NodeHandle) -> Node:
        """Resolve ``handle`` to its node record.

        Raises
        ------
        StaleHandleError
            The slot is empty or has been reused by a newer node.
        """
        if not self.is_alive(handle):
            raise StaleHandleError("Handle refers to a destroyed node", handle)
        node = self._slots[handle.index]
        assert node is not None
        return node

    def is_alive(self, handle: NodeHandle) -> bool:
        """Return True if ``handle`` still names a live node."""
        index = handle.index
        if index < 0 or index >= len(self._slots):
            return False
        return self._slots[index] is not None and self._generations[index] == handle.generation

    def name_of(self, handle: NodeHandle) -> str:
        return self.get(handle).name

    def add_child(self, parent: NodeHandle, child: NodeHandle) -> None:
        """Attach a detached root as the first child of a childless node.

        Raises
        ------
        InvariantViolationError
            ``parent`` already has children, or ``child`` already has a
            parent or siblings.
        """
        parent_node = self.get(parent)
        child_node = self.get(child)
        if parent_node.child_head is not None:
            raise InvariantViolationError("Parent already has a child run", parent)
        if child_node.parent is not None or child_node.is_linked:
            raise InvariantViolationError("Child is already part of a tree", child)
        parent_node.child_head = child
        child_node.parent = parent

    def handles(self) -> Iterator[NodeHandle]:
        """Yield a handle for every live node, in slot order."""
        for index, node in enumerate(self._slots):
            if node is not None:
                yield NodeHandle(index, self._generations[index])

    def stats(self) -> Dict[str, int]:
        return {"live": len(self), "created": self.created, "destroyed": self.destroyed}

    def __len__(self) -> int:
        return self.created - self.destroyed

    def __contains__(self, handle: object) -> bool:
        return isinstance(handle, NodeHandle) and self.is_alive(handle)
