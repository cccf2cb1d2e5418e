from __future__ import annotations

"""Front-ends: a curses terminal browser and a Tk window.

Both wire the same pieces together: a :class:`NodeStore` filled by a tree
source, a :class:`TreeView` bound to a display widget, and a
:class:`NavigationController` driven by key presses.
"""

import argparse
import curses
import logging
import sys
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Sequence

from treeview_toolkit.config import ConfigManager
from treeview_toolkit.core.exceptions import TreeError
from treeview_toolkit.core.models import NodeHandle
from treeview_toolkit.core.node_store import NodeStore
from treeview_toolkit.core.tree_source import load_tree_file, seed_tree
from treeview_toolkit.logging_config import setup_logging
from treeview_toolkit.ui.controllers.navigation_controller import NavigationController
from treeview_toolkit.ui.tree_view import TreeView
from treeview_toolkit.ui.widgets.base import Direction, DisplayWidget
from treeview_toolkit.ui.widgets.curses_menu import CursesMenuWidget
from treeview_toolkit.version import get_app_version

logger = logging.getLogger(__name__)

__all__ = ["TerminalApp", "TreeViewApp", "load_tree", "build_view", "main"]

_DEFAULT_KEYS: Dict[str, List[str]] = {
    "up": ["KEY_UP"],
    "down": ["KEY_DOWN"],
    "descend": ["KEY_RIGHT"],
    "ascend": ["KEY_LEFT", "KEY_BACKSPACE", "\x7f"],
    "quit": ["q"],
}

# KEY_MIN/KEY_MAX alias real keys
_CURSES_KEY_NAMES: Dict[int, str] = {
    getattr(curses, name): name
    for name in sorted(dir(curses))
    if name.startswith("KEY_") and name not in ("KEY_MIN", "KEY_MAX") and isinstance(getattr(curses, name), int)
}


def load_tree(store: NodeStore, tree_file: Optional[str], seed_cfg: Dict[str, Any]) -> NodeHandle:
    """Populate ``store`` from ``tree_file`` or, without one, with the demo tree."""
    if tree_file:
        return load_tree_file(store, tree_file)
    return seed_tree(
        store,
        list_len=int(seed_cfg.get("list_len", 8)),
        depth=int(seed_cfg.get("depth", 3)),
        root_name=str(seed_cfg.get("root_name", "ROOT")),
    )


def build_view(store: NodeStore, root: NodeHandle, widget: DisplayWidget, view_cfg: Dict[str, Any]) -> TreeView:
    return TreeView(
        store,
        root,
        widget,
        child_prefix=str(view_cfg.get("child_prefix", "+")),
        back_label=str(view_cfg.get("back_label", "..")),
        show_back_item=bool(view_cfg.get("show_back_item", False)),
    )


# ---------------------------------------------------------------------------
# Terminal front-end
# ---------------------------------------------------------------------------


class TerminalApp:
    """Key-driven tree browser in a curses window.

    Parameters
    ----------
    window
        Curses window the menu is drawn into and keys are read from.
    store, root
        The tree to browse. The app owns it and destroys it on exit.
    view_cfg, key_cfg
        Sections from :class:`ConfigManager`.
    """

    def __init__(
        self,
        window: Any,
        store: NodeStore,
        root: NodeHandle,
        view_cfg: Dict[str, Any],
        key_cfg: Optional[Dict[str, Sequence[str]]] = None,
    ) -> None:
        self.window = window
        self.widget = CursesMenuWidget(window, mark=str(view_cfg.get("menu_mark", "* ")))
        self.view = build_view(store, root, self.widget, view_cfg)
        self.controller = NavigationController(self.view)
        self._actions = self._build_key_map(key_cfg or _DEFAULT_KEYS)

    @staticmethod
    def _build_key_map(key_cfg: Dict[str, Sequence[str]]) -> Dict[str, str]:
        key_map: Dict[str, str] = {}
        for action, names in key_cfg.items():
            if isinstance(names, str):
                names = [names]
            for name in names:
                key_map[str(name)] = action
        return key_map

    @staticmethod
    def key_name(key: int) -> str:
        """Name a ``getch`` result the way ``keys.yml`` does."""
        if 0 <= key < 256:
            return chr(key)
        name = _CURSES_KEY_NAMES.get(key)
        if name is not None:
            return name
        try:
            return curses.keyname(key).decode("ascii", errors="replace")
        except (ValueError, curses.error):
            return str(key)

    def handle_key(self, key: int) -> bool:
        """Apply one key press. Returns False when the app should quit."""
        action = self._actions.get(self.key_name(key))
        if action == "quit":
            return False
        if action == "up":
            self.controller.move(Direction.PREVIOUS)
        elif action == "down":
            self.controller.move(Direction.NEXT)
        elif action == "descend":
            self.controller.descend()
        elif action == "ascend":
            self.controller.ascend()
        self.controller.show()
        return True

    def run(self) -> int:
        """Show the root run and process keys until quit. Returns nodes destroyed."""
        try:
            self.controller.start()
            while self.handle_key(self.window.getch()):
                pass
        finally:
            destroyed = self.controller.shutdown()
        return destroyed


def _run_terminal(stdscr: Any, store: NodeStore, root: NodeHandle, config: ConfigManager) -> int:
    view_cfg = config.get_view_config()
    geometry = view_cfg.get("window", {}) or {}
    try:
        curses.curs_set(0)
    except curses.error:
        pass  # terminal cannot hide the cursor
    stdscr.refresh()

    max_y, max_x = stdscr.getmaxyx()
    begin_y = min(int(geometry.get("begin_y", 4)), max(0, max_y - 1))
    begin_x = min(int(geometry.get("begin_x", 4)), max(0, max_x - 1))
    nlines = max(1, min(int(geometry.get("nlines", 10)), max_y - begin_y))
    ncols = max(1, min(int(geometry.get("ncols", 40)), max_x - begin_x))

    window = curses.newwin(nlines, ncols, begin_y, begin_x)
    window.keypad(True)
    app = TerminalApp(window, store, root, view_cfg, config.get_key_bindings())
    return app.run()


# ---------------------------------------------------------------------------
# Tk front-end
# ---------------------------------------------------------------------------


class TreeViewApp:
    """Tk window hosting a :class:`TkListWidget` over one tree."""

    def __init__(self, root_window: Any, store: NodeStore, root: NodeHandle, view_cfg: Dict[str, Any]) -> None:
        from treeview_toolkit.ui.widgets.tk_list import TkListWidget

        self.root_window = root_window
        self.widget = TkListWidget(
            root_window,
            on_descend=self._descend,
            on_ascend=self._ascend,
            on_quit=self.close,
        )
        self.widget.pack(fill="both", expand=True)
        self.view = build_view(store, root, self.widget, view_cfg)
        self.controller = NavigationController(self.view)
        self.destroyed: int = 0
        self.controller.start()
        self.root_window.protocol("WM_DELETE_WINDOW", self.close)

    def _descend(self) -> None:
        if self.controller.descend():
            self.controller.show()

    def _ascend(self) -> None:
        if self.controller.ascend():
            self.controller.show()

    def close(self) -> None:
        if not self.view.closed:
            self.destroyed = self.controller.shutdown()
        self.root_window.destroy()


def _run_tk(store: NodeStore, root: NodeHandle, config: ConfigManager) -> int:
    import tkinter as tk

    view_cfg = config.get_view_config()
    window = tk.Tk()
    window.title(f"TreeView Toolkit {get_app_version()}")
    window.geometry(str(view_cfg.get("tk_geometry", "320x260")))
    app = TreeViewApp(window, store, root, view_cfg)
    window.mainloop()
    if not app.view.closed:
        app.destroyed = app.controller.shutdown()
    return app.destroyed


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def _parse_args(argv: Optional[Iterable[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="treeview",
        description="Browse a tree one generation at a time.",
    )
    parser.add_argument("tree", nargs="?", help="YAML tree description (default: demo tree)")
    parser.add_argument("--ui", choices=("terminal", "tk"), default="terminal", help="front-end to use")
    parser.add_argument("--version", action="version", version=get_app_version())
    return parser.parse_args(list(argv) if argv is not None else None)


def main(argv: Optional[Iterable[str]] = None) -> int:
    """Configure logging, build the tree and run the chosen front-end."""
    args = _parse_args(argv)
    setup_logging(console=args.ui != "terminal")
    config = ConfigManager()

    max_nodes = config.get_view_config().get("max_nodes")
    store = NodeStore(max_nodes=max_nodes)
    try:
        root = load_tree(store, args.tree, config.get_seed_config())
    except TreeError as exc:
        logger.error("Could not build tree: %s", exc)
        print(f"treeview: {exc}", file=sys.stderr)
        return 1

    if args.tree:
        logger.info("Browsing %s", Path(args.tree).resolve())
    if args.ui == "tk":
        destroyed = _run_tk(store, root, config)
    else:
        destroyed = curses.wrapper(_run_terminal, store, root, config)
    logger.info("===== Application terminated (%d nodes released) =====", destroyed)
    return 0


if __name__ == "__main__":
    sys.exit(main())
