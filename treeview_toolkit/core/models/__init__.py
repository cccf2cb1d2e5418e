from __future__ import annotations

"""Value objects shared by the tree core.

The package holds the node record and the handle used to address it. It
is free of UI code so the objects can be reused from tests, the terminal
front-end or the Tk front-end alike.
"""

from dataclasses import dataclass
from typing import Optional

__all__ = ["NodeHandle", "Node"]


@dataclass(frozen=True)
class NodeHandle:
    """Stable address of a node inside a :class:`NodeStore`.

    Attributes
    ----------
    index
        Slot number in the store.
    generation
        Slot generation at the time the node was created. The store bumps
        it when the node is destroyed, which turns any surviving copy of
        the handle into a detectable stale reference.
    """

    index: int
    generation: int

    def __str__(self) -> str:
        return f"#{self.index}.{self.generation}"


@dataclass
class Node:
    """A unit of the hierarchy.

    Only ``name`` is content; every other field is structure. ``parent`` is
    a non-owning back reference, ``child_head`` owns the child run, and
    ``previous``/``next`` chain siblings without wrapping around.
    """

    name: str
    parent: Optional[NodeHandle] = None
    child_head: Optional[NodeHandle] = None
    previous: Optional[NodeHandle] = None
    next: Optional[NodeHandle] = None

    @property
    def has_children(self) -> bool:
        return self.child_head is not None

    @property
    def is_linked(self) -> bool:
        """Return True while the node is chained to a sibling."""
        return self.previous is not None or self.next is not None
