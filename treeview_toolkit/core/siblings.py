"""Sibling list operations.

A sibling list is not stored anywhere: it is the set of nodes reachable by
walking ``previous``/``next`` from any member. The member with no
``previous`` is the head and, for a run that has a parent, is always the
node the parent holds as ``child_head``.
"""

from __future__ import annotations

from typing import Iterator, Optional, Tuple

from treeview_toolkit.core.exceptions import InvariantViolationError
from treeview_toolkit.core.models import NodeHandle
from treeview_toolkit.core.node_store import NodeStore

__all__ = [
    "append",
    "append_child",
    "pop",
    "first",
    "last",
    "iter_siblings",
    "iter_reverse",
    "count",
]


def append(store: NodeStore, left: NodeHandle, right: NodeHandle) -> None:
    """Insert ``right`` immediately after ``left``.

    If ``left`` already had a successor, that successor now follows
    ``right``. ``right.parent`` is left untouched; it was set by
    :meth:`NodeStore.create`.

    Raises
    ------
    InvariantViolationError
        ``right`` is ``left`` or is already chained into a list.
    """
    if left == right:
        raise InvariantViolationError("Cannot append a node after itself", right)
    left_node = store.get(left)
    right_node = store.get(right)
    if right_node.is_linked:
        raise InvariantViolationError("Node is already part of a sibling list", right)

    successor = left_node.next
    if successor is not None:
        store.get(successor).previous = right
        right_node.next = successor
    left_node.next = right
    right_node.previous = left


def append_child(store: NodeStore, parent: NodeHandle, name: str) -> NodeHandle:
    """Create a child of ``parent`` and chain it after the current last child."""
    tail = None
    head = store.get(parent).child_head
    if head is not None:
        tail = last(store, head)
    child = store.create(parent, name)
    if tail is not None:
        append(store, tail, child)
    return child


def pop(store: NodeStore, ref: Optional[NodeHandle]) -> Tuple[Optional[NodeHandle], Optional[NodeHandle]]:
    """Unlink the node at ``ref`` and return it with a new list reference.

    The returned reference is the popped node's former ``previous`` if it
    had one, else its former ``next``, so feeding it back into :func:`pop`
    drains the whole list exactly once whatever member it started from.
    When the head of a parented run is popped, the parent's ``child_head``
    moves to the new head (or becomes absent).

    Returns ``(None, None)`` when ``ref`` is absent.
    """
    if ref is None:
        return None, None

    node = store.get(ref)
    prev_handle, next_handle = node.previous, node.next

    if prev_handle is not None:
        store.get(prev_handle).next = next_handle
    if next_handle is not None:
        store.get(next_handle).previous = prev_handle

    if node.parent is not None and store.is_alive(node.parent):
        parent_node = store.get(node.parent)
        if parent_node.child_head == ref:
            parent_node.child_head = next_handle

    node.previous = None
    node.next = None
    return ref, prev_handle if prev_handle is not None else next_handle


def first(store: NodeStore, node: NodeHandle) -> NodeHandle:
    """Return the head of ``node``'s sibling list.

    O(1) through the parent's ``child_head`` when there is a parent; a walk
    along ``previous`` for root-level or detached runs.
    """
    record = store.get(node)
    if record.parent is not None:
        head = store.get(record.parent).child_head
        if head is not None:
            return head

    current = node
    while record.previous is not None:
        current = record.previous
        record = store.get(current)
    return current


def last(store: NodeStore, node: NodeHandle) -> NodeHandle:
    """Return the tail of ``node``'s sibling list."""
    current = node
    record = store.get(current)
    while record.next is not None:
        current = record.next
        record = store.get(current)
    return current


def iter_siblings(store: NodeStore, head: Optional[NodeHandle]) -> Iterator[NodeHandle]:
    """Yield ``head`` and every following sibling."""
    current = head
    while current is not None:
        yield current
        current = store.get(current).next


def iter_reverse(store: NodeStore, tail: Optional[NodeHandle]) -> Iterator[NodeHandle]:
    """Yield ``tail`` and every preceding sibling."""
    current = tail
    while current is not None:
        yield current
        current = store.get(current).previous


def count(store: NodeStore, head: Optional[NodeHandle]) -> int:
    return sum(1 for _ in iter_siblings(store, head))
