from __future__ import annotations

"""The view: projects one sibling run of a tree onto a display widget.

:class:`TreeView` owns everything that lives only while something is on
screen: the list of :class:`DisplayedItem` objects currently bound to the
widget, and the decorated labels of displayed nodes that have children.
Labels are kept in a side table keyed by node handle rather than on the
node records, so the tree itself never needs to know whether it is shown.

Projection protocol
-------------------
1. Resolve the run to show (the tree root when none is given).
2. Count it once and build the new item list in one pass.
3. Decorate nodes that have children, reusing a label already cached.
4. Swap the new list onto the widget (unpost, then bind).
5. Only then retire the previous list: release labels of nodes that are no
   longer shown, and release every old item exactly once.
6. Record the new list as current.

A :class:`ResourceLedger` counts every label and item created and released
so tests can check the pairing exactly.
"""

import enum
import itertools
import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Set, Union

from treeview_toolkit.core import siblings
from treeview_toolkit.core.exceptions import InvariantViolationError
from treeview_toolkit.core.models import NodeHandle
from treeview_toolkit.core.node_store import NodeStore
from treeview_toolkit.core.teardown import destroy_subtree
from treeview_toolkit.ui.widgets.base import DisplayWidget

logger = logging.getLogger(__name__)

__all__ = ["BackReference", "DisplayedItem", "ResourceLedger", "TreeView"]


class BackReference(enum.Enum):
    """Reference attached to the optional ".." entry of a child run."""

    BACK = "back"


ItemRef = Union[NodeHandle, BackReference]


@dataclass
class DisplayedItem:
    """One entry handed to the display widget.

    Attributes
    ----------
    item_id
        Unique, increasing id; never reused within a view.
    text
        Label shown by the widget (decorated label or plain name).
    ref
        The node this entry stands for, or ``BackReference.BACK``.
    released
        Set once the item has been retired.
    """

    item_id: int
    text: str
    ref: ItemRef
    released: bool = False

    @property
    def node(self) -> Optional[NodeHandle]:
        return self.ref if isinstance(self.ref, NodeHandle) else None


@dataclass
class ResourceLedger:
    """Counts of display resources created and released by a view."""

    labels_created: int = 0
    labels_released: int = 0
    items_created: int = 0
    items_released: int = 0

    @property
    def live_labels(self) -> int:
        return self.labels_created - self.labels_released

    @property
    def live_items(self) -> int:
        return self.items_created - self.items_released


class TreeView:
    """Single active view over a tree.

    Parameters
    ----------
    store : NodeStore
        Arena holding the tree.
    root : NodeHandle
        Root of the tree; owned by the view from now on and destroyed by
        :meth:`close`.
    widget : DisplayWidget
        Display the items are bound to.
    child_prefix : str, default="+"
        Prefix of the decorated label of nodes that have children.
    back_label : str, default=".."
        Text of the back entry.
    show_back_item : bool, default=False
        Prepend a back entry to every run that has a parent.

    Notes
    -----
    The constructor does not project anything; the first :meth:`project`
    call does, so the widget stays in its "not yet shown" state until the
    caller is ready.
    """

    def __init__(
        self,
        store: NodeStore,
        root: NodeHandle,
        widget: DisplayWidget,
        *,
        child_prefix: str = "+",
        back_label: str = "..",
        show_back_item: bool = False,
    ) -> None:
        self.store: NodeStore = store
        self.root: NodeHandle = root
        self.widget: DisplayWidget = widget
        self.child_prefix: str = child_prefix
        self.back_label: str = back_label
        self.show_back_item: bool = show_back_item

        self.ledger = ResourceLedger()
        self._items: List[DisplayedItem] = []
        self._labels: Dict[NodeHandle, str] = {}
        self._current_head: Optional[NodeHandle] = None
        self._item_ids = itertools.count(1)
        self._closed: bool = False

    # --------------------------------------------------------------------- API

    @property
    def items(self) -> Sequence[DisplayedItem]:
        """Items currently bound to the widget."""
        return tuple(self._items)

    @property
    def current_head(self) -> Optional[NodeHandle]:
        """Head of the run currently displayed, or None before the first projection."""
        return self._current_head

    @property
    def closed(self) -> bool:
        return self._closed

    def label_of(self, node: NodeHandle) -> Optional[str]:
        """Return the cached decorated label of ``node``, if it has one."""
        return self._labels.get(node)

    def texts(self) -> List[str]:
        return [item.text for item in self._items]

    def project(self, head: Optional[NodeHandle] = None) -> List[DisplayedItem]:
        """Show the sibling run starting at ``head`` (the root when omitted).

        Raises
        ------
        InvariantViolationError
            The view is closed, or the run resolves to nothing.
        """
        if self._closed:
            raise InvariantViolationError("Cannot project on a closed view")
        if head is None:
            head = self.root
        if head is None:
            raise InvariantViolationError("Cannot project an empty sibling run")

        run = list(siblings.iter_siblings(self.store, head))
        has_back = self.show_back_item and self.store.get(head).parent is not None
        unlabelled = [node for node in run if node not in self._labels]

        new_items: List[DisplayedItem] = []
        if has_back:
            new_items.append(self._new_item(self.back_label, BackReference.BACK))
        for node in run:
            new_items.append(self._new_item(self._display_text(node), node))

        try:
            if self.widget.is_posted:
                self.widget.unpost()
            self.widget.bind([(item.text, item.ref) for item in new_items])
        except Exception:
            # The new set never reached the widget: drop what this pass made
            self._discard(new_items, unlabelled)
            raise

        shown: Set[NodeHandle] = set(run)
        self._retire(self._items, keep=shown)

        self._items = new_items
        self._current_head = head
        logger.debug(
            "Projected %d items from %s (labels live=%d)", len(new_items), head, self.ledger.live_labels
        )
        return new_items

    def close(self) -> int:
        """Retire the live items and destroy the tree.

        Idempotent. Returns the number of nodes destroyed.
        """
        if self._closed:
            return 0
        if self.widget.is_posted:
            self.widget.unpost()
        self._retire(self._items, keep=set())
        self._release_labels(list(self._labels))
        self._items = []
        self._current_head = None
        destroyed = destroy_subtree(self.store, self.root)
        self._closed = True
        logger.info("View closed; %d nodes destroyed", destroyed)
        return destroyed

    # --------------------------------------------------------------- Internals

    def _display_text(self, node: NodeHandle) -> str:
        record = self.store.get(node)
        if record.child_head is None:
            return record.name
        label = self._labels.get(node)
        if label is None:
            label = f"{self.child_prefix}{record.name}"
            self._labels[node] = label
            self.ledger.labels_created += 1
        return label

    def _new_item(self, text: str, ref: ItemRef) -> DisplayedItem:
        self.ledger.items_created += 1
        return DisplayedItem(item_id=next(self._item_ids), text=text, ref=ref)

    def _retire(self, items: Sequence[DisplayedItem], keep: Set[NodeHandle]) -> None:
        for item in items:
            if item.released:
                raise InvariantViolationError(f"Displayed item {item.item_id} released twice", item.node)
            node = item.node
            if node is not None and node not in keep:
                self._release_labels([node])
            item.released = True
            self.ledger.items_released += 1

    def _discard(self, items: Sequence[DisplayedItem], unlabelled: Sequence[NodeHandle]) -> None:
        """Undo a projection whose items were never bound."""
        for item in items:
            item.released = True
            self.ledger.items_released += 1
        self._release_labels(unlabelled)
        logger.warning("Projection of %d items abandoned; widget bind failed", len(items))

    def _release_labels(self, nodes: Sequence[NodeHandle]) -> None:
        for node in nodes:
            if self._labels.pop(node, None) is not None:
                self.ledger.labels_released += 1
