from __future__ import annotations

"""Tree sources: ways of populating a :class:`NodeStore`.

The core only cares about the shape of the tree it is handed. This module
provides the demo seed tree and a loader for nested mappings, either built
in Python or read from a YAML file::

    ROOT:
      docs:
        - intro
        - usage
      src:
        core: [models, store]
      README: null

Mappings give named children, lists give sibling runs, scalars are leaves.
"""

import logging
from pathlib import Path
from typing import Any, Optional, Union

import yaml

from treeview_toolkit.core import siblings
from treeview_toolkit.core.exceptions import TreeError, TreeSourceError
from treeview_toolkit.core.models import NodeHandle
from treeview_toolkit.core.node_store import NodeStore
from treeview_toolkit.core.teardown import destroy_subtree

logger = logging.getLogger(__name__)

__all__ = ["seed_tree", "build_tree", "load_tree_file"]


def seed_tree(store: NodeStore, list_len: int = 8, depth: int = 3, root_name: str = "ROOT") -> NodeHandle:
    """Build the demo tree: ``list_len`` children per node, ``depth + 1`` levels.

    Children are named ``item[<level>,<index>]``.
    """
    root = store.create(None, root_name)
    _seed_level(store, root, 0, max(0, int(list_len)), int(depth))
    logger.info("Seeded demo tree with %d nodes", len(store))
    return root


def _seed_level(store: NodeStore, parent: NodeHandle, level: int, list_len: int, depth: int) -> None:
    if level > depth:
        return
    prev = None
    for index in range(list_len):
        node = store.create(parent, f"item[{level},{index}]")
        _seed_level(store, node, level + 1, list_len, depth)
        if prev is not None:
            siblings.append(store, prev, node)
        prev = node


def build_tree(store: NodeStore, data: Any, root_name: Optional[str] = None) -> NodeHandle:
    """Turn a nested mapping/list structure into a tree and return its root.

    A mapping with exactly one key and no ``root_name`` uses that key as
    the root name. Otherwise the whole structure becomes the children of a
    root named ``root_name`` (default ``"ROOT"``).

    Raises
    ------
    TreeSourceError
        The structure holds something other than mappings, lists, scalars
        or ``None``, or is empty.
    NodeAllocationError
        The store filled up part way. Nodes already built are destroyed
        before the error propagates, as for :class:`TreeSourceError`.
    """
    if data is None or (isinstance(data, (dict, list)) and not data):
        raise TreeSourceError("Tree description is empty")

    if root_name is None and isinstance(data, dict) and len(data) == 1:
        root_name, data = next(iter(data.items()))

    root = store.create(None, str(root_name if root_name is not None else "ROOT"))
    try:
        _attach(store, root, data)
    except TreeError:
        destroy_subtree(store, root)
        raise
    return root


def _attach(store: NodeStore, parent: NodeHandle, data: Any) -> None:
    if data is None:
        return
    if isinstance(data, dict):
        for key, value in data.items():
            child = siblings.append_child(store, parent, str(key))
            _attach(store, child, value)
    elif isinstance(data, list):
        for entry in data:
            if isinstance(entry, dict):
                _attach(store, parent, entry)
            elif isinstance(entry, (str, int, float, bool)):
                siblings.append_child(store, parent, str(entry))
            else:
                raise TreeSourceError(f"Unsupported list entry of type {type(entry).__name__}")
    elif isinstance(data, (str, int, float, bool)):
        siblings.append_child(store, parent, str(data))
    else:
        raise TreeSourceError(f"Unsupported tree value of type {type(data).__name__}")


def load_tree_file(store: NodeStore, path: Union[str, Path], root_name: Optional[str] = None) -> NodeHandle:
    """Read a YAML tree description from ``path`` and build it."""
    path = Path(path)
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise TreeSourceError(f"Cannot read tree file: {exc}", source=str(path), cause=exc) from exc
    except yaml.YAMLError as exc:
        raise TreeSourceError(f"Invalid YAML: {exc}", source=str(path), cause=exc) from exc

    try:
        root = build_tree(store, data, root_name)
    except TreeSourceError as exc:
        exc.source = str(path)
        raise
    logger.info("Loaded tree from %s (%d nodes)", path, len(store))
    return root
