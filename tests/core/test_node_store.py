import pytest

from treeview_toolkit.core import siblings
from treeview_toolkit.core.exceptions import (
    InvariantViolationError,
    NodeAllocationError,
    StaleHandleError,
)
from treeview_toolkit.core.node_store import NodeStore


def test_create_first_child_becomes_child_head(store):
    root = store.create(None, "ROOT")
    a = store.create(root, "a")

    assert store.get(root).child_head == a
    assert store.get(a).parent == root
    assert store.get(a).previous is None and store.get(a).next is None


def test_create_second_child_does_not_replace_child_head(store):
    root = store.create(None, "ROOT")
    a = store.create(root, "a")
    b = store.create(root, "b")

    # create() never chains; the head stays the first child
    assert store.get(root).child_head == a
    assert store.get(b).parent == root
    assert not store.get(b).is_linked


def test_create_copies_name(store):
    name = "item"
    handle = store.create(None, name)
    assert store.name_of(handle) == "item"


def test_destroy_requires_no_children(store):
    root = store.create(None, "ROOT")
    store.create(root, "a")

    with pytest.raises(InvariantViolationError):
        store.destroy(root)
    assert store.is_alive(root)


def test_destroy_requires_unlinked_node(store):
    a = store.create(None, "a")
    b = store.create(None, "b")
    siblings.append(store, a, b)

    with pytest.raises(InvariantViolationError):
        store.destroy(b)
    with pytest.raises(InvariantViolationError):
        store.destroy(a)


def test_destroy_refuses_node_still_held_as_child_head(store):
    root = store.create(None, "ROOT")
    a = store.create(root, "a")

    with pytest.raises(InvariantViolationError):
        store.destroy(a)


def test_destroyed_handle_is_stale_and_slot_reuse_is_detected(store):
    a = store.create(None, "a")
    store.destroy(a)

    assert not store.is_alive(a)
    with pytest.raises(StaleHandleError):
        store.get(a)

    # The slot is recycled with a new generation; the old handle stays stale.
    b = store.create(None, "b")
    assert b.index == a.index
    assert b.generation == a.generation + 1
    assert a not in store
    assert b in store
    with pytest.raises(StaleHandleError):
        store.destroy(a)


def test_create_under_stale_parent_raises_and_allocates_nothing(store):
    parent = store.create(None, "gone")
    store.destroy(parent)

    with pytest.raises(StaleHandleError):
        store.create(parent, "orphan")
    assert len(store) == 0
    assert store.created == 1


def test_capacity_limit_raises_allocation_error_without_linking():
    store = NodeStore(max_nodes=2)
    root = store.create(None, "ROOT")
    store.create(root, "a")

    with pytest.raises(NodeAllocationError) as info:
        store.create(root, "b")

    assert info.value.capacity == 2
    assert len(store) == 2
    # The failed node left no trace in the parent
    assert store.name_of(store.get(root).child_head) == "a"


def test_memory_error_is_reported_as_allocation_error(store, monkeypatch):
    root = store.create(None, "ROOT")

    def exhausted(*args, **kwargs):
        raise MemoryError()

    monkeypatch.setattr("treeview_toolkit.core.node_store.Node", exhausted)

    with pytest.raises(NodeAllocationError) as info:
        store.create(root, "a")
    assert isinstance(info.value.cause, MemoryError)
    assert store.get(root).child_head is None
    assert len(store) == 1


def test_add_child_attaches_detached_root(store):
    parent = store.create(None, "parent")
    child = store.create(None, "child")

    store.add_child(parent, child)

    assert store.get(parent).child_head == child
    assert store.get(child).parent == parent


def test_add_child_preconditions(store):
    parent = store.create(None, "parent")
    existing = store.create(parent, "existing")
    loose = store.create(None, "loose")

    with pytest.raises(InvariantViolationError):
        store.add_child(parent, loose)

    other = store.create(None, "other")
    with pytest.raises(InvariantViolationError):
        store.add_child(other, existing)


def test_stats_and_handles(store):
    root = store.create(None, "ROOT")
    a = store.create(root, "a")

    assert list(store.handles()) == [root, a]
    assert store.stats() == {"live": 2, "created": 2, "destroyed": 0}
