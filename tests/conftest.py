"""Shared fixtures for the TreeView Toolkit test-suite.

Provides a recording fake display widget and small trees built through
the public tree-source API so every test starts from the same shapes.
"""

import logging
import sys
from pathlib import Path
from typing import Any, List, Optional, Sequence

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from treeview_toolkit.config import ConfigManager
from treeview_toolkit.core import siblings
from treeview_toolkit.core.node_store import NodeStore
from treeview_toolkit.core.tree_source import build_tree
from treeview_toolkit.ui.tree_view import TreeView
from treeview_toolkit.ui.widgets.base import Direction, DisplayWidget

# Configure test logging
logging.basicConfig(
    level=logging.DEBUG,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)


class FakeDisplayWidget(DisplayWidget):
    """In-memory display widget recording every call made by the view."""

    def __init__(self) -> None:
        self.entries: List[tuple] = []
        self.cursor: int = 0
        self.posted: bool = False
        self.calls: List[str] = []
        self.bind_count: int = 0

    @property
    def is_posted(self) -> bool:
        return self.posted

    def bind(self, entries: Sequence[tuple]) -> None:
        # The view must never bind while the previous set is still shown.
        assert not self.posted, "bind() called while posted"
        self.calls.append("bind")
        self.bind_count += 1
        self.entries = list(entries)
        self.cursor = 0

    def unpost(self) -> None:
        self.calls.append("unpost")
        self.posted = False

    def selected(self) -> Optional[Any]:
        if not self.entries:
            return None
        return self.entries[self.cursor][1]

    def move(self, direction: Direction) -> None:
        step = -1 if direction is Direction.PREVIOUS else 1
        target = self.cursor + step
        if 0 <= target < len(self.entries):
            self.cursor = target

    def show(self) -> None:
        self.calls.append("show")
        self.posted = True

    # Test helpers
    def texts(self) -> List[str]:
        return [text for text, _ in self.entries]

    def select_text(self, text: str) -> None:
        self.cursor = self.texts().index(text)


def build_scenario(store: NodeStore):
    """Root-level run [a, b] where a has children [a1, a2]; returns a."""
    a = store.create(None, "a")
    b = store.create(None, "b")
    siblings.append(store, a, b)
    siblings.append_child(store, a, "a1")
    siblings.append_child(store, a, "a2")
    return a


@pytest.fixture
def store():
    return NodeStore()


@pytest.fixture
def widget():
    return FakeDisplayWidget()


@pytest.fixture
def scenario(store):
    return build_scenario(store)


@pytest.fixture
def nested(store):
    """ROOT -> [docs -> [intro, usage -> [cli]], src, tests -> [unit]]."""
    return build_tree(store, {
        "ROOT": {
            "docs": ["intro", {"usage": ["cli"]}],
            "src": None,
            "tests": ["unit"],
        }
    })


@pytest.fixture
def view(store, scenario, widget):
    return TreeView(store, scenario, widget)


@pytest.fixture
def isolated_config(tmp_path, monkeypatch):
    """Point the config manager at an empty temporary user directory."""
    monkeypatch.setenv("TREEVIEW_CONFIG_DIR", str(tmp_path / "config"))
    ConfigManager.reset()
    yield tmp_path / "config"
    ConfigManager.reset()
