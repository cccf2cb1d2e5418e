from __future__ import annotations

"""Terminal list-display widget drawn with :mod:`curses`.

The widget behaves like a one-column menu: a mark in front of the
highlighted entry, reverse video on the highlighted row, and a scroll
offset that keeps the highlight inside the window.
"""

import curses
from typing import Any, List, Optional, Sequence

from treeview_toolkit.ui.widgets.base import Direction, DisplayEntry, DisplayWidget

__all__ = ["CursesMenuWidget"]


class CursesMenuWidget(DisplayWidget):
    """Menu-style list widget rendering into a curses window.

    Parameters
    ----------
    window
        A curses window (or any object exposing ``erase``, ``addnstr``,
        ``getmaxyx`` and ``refresh``).
    mark : str, default="* "
        Prefix drawn in front of the highlighted entry. Other entries are
        padded to the same width.
    """

    def __init__(self, window: Any, *, mark: str = "* ") -> None:
        self._window = window
        self._mark: str = mark
        self._texts: List[str] = []
        self._refs: List[Any] = []
        self._cursor: int = 0
        self._scroll: int = 0
        self._posted: bool = False

    # --------------------------------------------------------------------- API

    @property
    def is_posted(self) -> bool:
        return self._posted

    @property
    def cursor(self) -> int:
        return self._cursor

    def bind(self, entries: Sequence[DisplayEntry]) -> None:
        self._texts = [text for text, _ in entries]
        self._refs = [ref for _, ref in entries]
        self._cursor = 0
        self._scroll = 0

    def unpost(self) -> None:
        if self._posted:
            self._window.erase()
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
            self._ensure_cursor_visible()

    def show(self) -> None:
        self._posted = True
        self._draw()

    # --------------------------------------------------------------- Internals

    def _visible_lines(self) -> int:
        return max(1, self._window.getmaxyx()[0])

    def _ensure_cursor_visible(self) -> None:
        lines = self._visible_lines()
        if self._cursor < self._scroll:
            self._scroll = self._cursor
        elif self._cursor >= self._scroll + lines:
            self._scroll = self._cursor - lines + 1

    def _draw(self) -> None:
        height, width = self._window.getmaxyx()
        self._window.erase()
        pad = " " * len(self._mark)
        last = min(len(self._texts), self._scroll + height)
        for row, index in enumerate(range(self._scroll, last)):
            selected = index == self._cursor
            line = (self._mark if selected else pad) + self._texts[index]
            attr = curses.A_REVERSE if selected else curses.A_NORMAL
            # Writing the bottom-right cell raises in curses; stop one column short.
            self._window.addnstr(row, 0, line, max(0, width - 1), attr)
        self._window.refresh()
