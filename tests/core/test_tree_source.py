import pytest

from treeview_toolkit.core import siblings
from treeview_toolkit.core.exceptions import NodeAllocationError, TreeSourceError
from treeview_toolkit.core.node_store import NodeStore
from treeview_toolkit.core.tree_source import build_tree, load_tree_file, seed_tree


def _child_names(store, node):
    return [store.name_of(h) for h in siblings.iter_siblings(store, store.get(node).child_head)]


def test_seed_tree_shape_and_names(store):
    root = seed_tree(store, list_len=8, depth=3)

    assert store.name_of(root) == "ROOT"
    assert _child_names(store, root) == [f"item[0,{i}]" for i in range(8)]
    # 1 + 8 + 64 + 512 + 4096
    assert len(store) == 4681

    deepest = store.get(root).child_head
    for _ in range(3):
        deepest = store.get(deepest).child_head
    assert store.name_of(deepest) == "item[3,0]"
    assert store.get(deepest).child_head is None


def test_seed_tree_children_share_parent_and_chain(store):
    root = seed_tree(store, list_len=3, depth=0)
    head = store.get(root).child_head
    for child in siblings.iter_siblings(store, head):
        assert store.get(child).parent == root
        assert siblings.first(store, child) == head


def test_build_tree_single_key_mapping_names_root(store, nested):
    assert store.name_of(nested) == "ROOT"
    assert _child_names(store, nested) == ["docs", "src", "tests"]
    docs = store.get(nested).child_head
    assert _child_names(store, docs) == ["intro", "usage"]


def test_build_tree_with_explicit_root_name(store):
    root = build_tree(store, ["x", "y"], root_name="top")
    assert store.name_of(root) == "top"
    assert _child_names(store, root) == ["x", "y"]


def test_build_tree_rejects_empty_description(store):
    with pytest.raises(TreeSourceError):
        build_tree(store, {})
    with pytest.raises(TreeSourceError):
        build_tree(store, None)


def test_build_tree_rolls_back_on_unsupported_values(store):
    with pytest.raises(TreeSourceError):
        build_tree(store, {"ROOT": {"a": ["ok", object()]}})
    assert len(store) == 0


def test_build_tree_rolls_back_when_store_fills_up():
    store = NodeStore(max_nodes=3)

    with pytest.raises(NodeAllocationError):
        build_tree(store, {"ROOT": ["a", "b", "c", "d"]})

    assert len(store) == 0
    assert store.stats()["destroyed"] == 3


def test_load_tree_file_reads_yaml(store, tmp_path):
    path = tmp_path / "tree.yml"
    path.write_text("ROOT:\n  a: [a1, a2]\n  b: null\n", encoding="utf-8")

    root = load_tree_file(store, path)

    assert _child_names(store, root) == ["a", "b"]
    a = store.get(root).child_head
    assert _child_names(store, a) == ["a1", "a2"]


def test_load_tree_file_errors_carry_source(store, tmp_path):
    bad = tmp_path / "bad.yml"
    bad.write_text("ROOT: [unclosed\n", encoding="utf-8")

    with pytest.raises(TreeSourceError) as info:
        load_tree_file(store, bad)
    assert info.value.source == str(bad)

    with pytest.raises(TreeSourceError):
        load_tree_file(store, tmp_path / "missing.yml")
