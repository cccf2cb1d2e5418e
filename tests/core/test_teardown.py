from treeview_toolkit.core import siblings
from treeview_toolkit.core.node_store import NodeStore
from treeview_toolkit.core.teardown import destroy_subtree
from treeview_toolkit.core.tree_source import seed_tree


class CheckingStore(NodeStore):
    """NodeStore that records the state of every node at destruction time."""

    def __init__(self) -> None:
        super().__init__()
        self.destroy_log = []

    def destroy(self, handle):
        node = self.get(handle)
        self.destroy_log.append((handle, node.child_head, node.previous, node.next))
        super().destroy(handle)


def test_destroy_subtree_destroys_every_node_once():
    store = CheckingStore()
    root = seed_tree(store, list_len=3, depth=2)
    total = len(store)
    # ROOT + 3 + 9 + 27
    assert total == 40

    destroyed = destroy_subtree(store, root)

    assert destroyed == total
    assert len(store) == 0
    assert len(store.destroy_log) == total
    assert len({entry[0] for entry in store.destroy_log}) == total


def test_destroy_subtree_never_destroys_linked_or_parent_nodes():
    store = CheckingStore()
    root = seed_tree(store, list_len=4, depth=1)

    destroy_subtree(store, root)

    for _handle, child_head, previous, nxt in store.destroy_log:
        assert child_head is None
        assert previous is None
        assert nxt is None


def test_destroy_subtree_children_before_parent():
    store = CheckingStore()
    root = store.create(None, "ROOT")
    a = siblings.append_child(store, root, "a")
    a1 = siblings.append_child(store, a, "a1")

    destroy_subtree(store, root)

    order = [entry[0] for entry in store.destroy_log]
    assert order.index(a1) < order.index(a) < order.index(root)


def test_destroy_subtree_of_child_run_leaves_parent_childless(store):
    root = store.create(None, "ROOT")
    for name in ("a", "b", "c"):
        siblings.append_child(store, root, name)

    destroyed = destroy_subtree(store, store.get(root).child_head)

    assert destroyed == 3
    assert store.get(root).child_head is None
    store.destroy(root)
    assert len(store) == 0


def test_destroy_subtree_tolerates_absent_list(store):
    assert destroy_subtree(store, None) == 0
