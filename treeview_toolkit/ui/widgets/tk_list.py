from __future__ import annotations

import tkinter as tk
from tkinter import ttk
from typing import Any, Callable, List, Optional, Sequence

from treeview_toolkit.ui.widgets.base import Direction, DisplayEntry, DisplayWidget

__all__ = ["TkListWidget"]


class TkListWidget(ttk.Frame, DisplayWidget):
    """Tkinter display widget presenting one sibling run as a flat list.

    The widget wraps a ``ttk.Treeview`` shown in tree mode without nesting:
    every entry is a top-level row. Row positions map to the opaque
    references handed in through :meth:`bind`.

    Callbacks:
        - on_descend: invoked on Right, Return or double-click.
        - on_ascend: invoked on Left or BackSpace.
        - on_quit: invoked on ``q`` or Escape.

    Notes
    -----
    - UI-only: the widget never interprets the references it stores.
    - Rows are only inserted by :meth:`show`, so a set that is bound but not
      yet posted is never drawn.
    - :meth:`bind` replaces the visible set and therefore shadows
      ``Misc.bind``; use :meth:`bind_event` for Tk event bindings.
    """

    def __init__(
        self,
        master: "tk.Widget",
        *,
        on_descend: Optional[Callable[[], None]] = None,
        on_ascend: Optional[Callable[[], None]] = None,
        on_quit: Optional[Callable[[], None]] = None,
        height: int = 10,
    ) -> None:
        super().__init__(master)
        self._on_descend = on_descend
        self._on_ascend = on_ascend
        self._on_quit = on_quit

        self._tree = ttk.Treeview(self, show="tree", selectmode="browse", height=height)
        self._vsb = ttk.Scrollbar(self, orient="vertical", command=self._tree.yview)
        self._tree.configure(yscrollcommand=self._vsb.set)

        self._tree.grid(row=0, column=0, sticky="nsew")
        self._vsb.grid(row=0, column=1, sticky="ns")
        self.columnconfigure(0, weight=1)
        self.rowconfigure(0, weight=1)

        self._texts: List[str] = []
        self._refs: List[Any] = []
        self._row_ids: List[str] = []
        self._cursor: int = 0
        self._posted: bool = False

        self._tree.bind("<<TreeviewSelect>>", self._on_select_event, add="+")
        self._tree.bind("<Right>", self._descend_event, add="+")
        self._tree.bind("<Return>", self._descend_event, add="+")
        self._tree.bind("<Double-1>", self._descend_event, add="+")
        self._tree.bind("<Left>", self._ascend_event, add="+")
        self._tree.bind("<BackSpace>", self._ascend_event, add="+")
        self._tree.bind("q", self._quit_event, add="+")
        self._tree.bind("<Escape>", self._quit_event, add="+")

    # --------------------------------------------------------------------- API

    @property
    def is_posted(self) -> bool:
        return self._posted

    def bind(self, entries: Sequence[DisplayEntry]) -> None:  # type: ignore[override]
        if self._posted:
            self.unpost()
        self._texts = [text for text, _ in entries]
        self._refs = [ref for _, ref in entries]
        self._cursor = 0

    def bind_event(self, sequence: str, func: Callable[..., Any], add: Optional[str] = None) -> str:
        return ttk.Frame.bind(self, sequence, func, add)

    def unpost(self) -> None:
        if self._row_ids:
            self._tree.delete(*self._row_ids)
        self._row_ids = []
        self._posted = False

    def selected(self) -> Optional[Any]:
        if not self._refs:
            return None
        return self._refs[self._cursor]

    def move(self, direction: Direction) -> None:
        step = -1 if direction is Direction.PREVIOUS else 1
        target = self._cursor + step
        if 0 <= target < len(self._refs):
            self._cursor = target
            self._sync_selection()

    def show(self) -> None:
        if not self._posted:
            self._row_ids = [self._tree.insert("", "end", text=text) for text in self._texts]
            self._posted = True
        self._sync_selection()
        self._tree.focus_set()

    def texts(self) -> List[str]:
        """Return the labels of the rows currently drawn."""
        return [self._tree.item(row_id, "text") for row_id in self._row_ids]

    # --------------------------------------------------------------- Internals

    def _sync_selection(self) -> None:
        if not self._posted or not self._row_ids:
            return
        row_id = self._row_ids[self._cursor]
        if self._tree.selection() != (row_id,):
            self._tree.selection_set((row_id,))
        self._tree.focus(row_id)
        self._tree.see(row_id)

    def _on_select_event(self, _event: "tk.Event") -> None:
        selection = self._tree.selection()
        if selection and selection[0] in self._row_ids:
            self._cursor = self._row_ids.index(selection[0])

    def _descend_event(self, _event: "tk.Event") -> str:
        if self._on_descend is not None:
            self._on_descend()
        return "break"

    def _ascend_event(self, _event: "tk.Event") -> str:
        if self._on_ascend is not None:
            self._on_ascend()
        return "break"

    def _quit_event(self, _event: "tk.Event") -> str:
        if self._on_quit is not None:
            self._on_quit()
        return "break"
