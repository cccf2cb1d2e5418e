from __future__ import annotations

"""Bottom-up destruction of sibling runs and their subtrees."""

import logging
from typing import Optional

from treeview_toolkit.core import siblings
from treeview_toolkit.core.models import NodeHandle
from treeview_toolkit.core.node_store import NodeStore

logger = logging.getLogger(__name__)

__all__ = ["destroy_subtree"]


def destroy_subtree(store: NodeStore, head: Optional[NodeHandle]) -> int:
    """Destroy every node of the run containing ``head`` and all descendants.

    Nodes are popped one at a time, their child run is torn down first and
    only then is the now unlinked, childless node destroyed. An absent
    ``head`` is a no-op.

    Returns
    -------
    int
        Number of nodes destroyed.
    """
    destroyed = 0
    ref = head
    while ref is not None:
        node, ref = siblings.pop(store, ref)
        record = store.get(node)
        if record.child_head is not None:
            destroyed += destroy_subtree(store, record.child_head)
        record.child_head = None
        store.destroy(node)
        destroyed += 1

    if head is not None:
        logger.debug("Tore down %d nodes starting at %s", destroyed, head)
    return destroyed
