import curses

import pytest

from treeview_toolkit.ui.widgets.base import Direction
from treeview_toolkit.ui.widgets.curses_menu import CursesMenuWidget


class FakeWindow:
    """Minimal stand-in for a curses window that records drawn rows."""

    def __init__(self, height=4, width=20):
        self.height = height
        self.width = width
        self.rows = {}
        self.erase_count = 0
        self.refresh_count = 0

    def getmaxyx(self):
        return self.height, self.width

    def erase(self):
        self.erase_count += 1
        self.rows = {}

    def addnstr(self, y, x, text, n, attr=0):
        assert 0 <= y < self.height
        self.rows[y] = (text[:n], attr)

    def refresh(self):
        self.refresh_count += 1


@pytest.fixture
def window():
    return FakeWindow()


@pytest.fixture
def menu(window):
    return CursesMenuWidget(window, mark="* ")


def _entries(n):
    return [(f"row{i}", f"ref{i}") for i in range(n)]


def test_new_widget_is_not_yet_shown(menu, window):
    assert not menu.is_posted
    assert menu.selected() is None
    assert window.refresh_count == 0


def test_show_draws_mark_and_highlight(menu, window):
    menu.bind(_entries(3))
    menu.show()

    assert menu.is_posted
    assert window.rows[0] == ("* row0", curses.A_REVERSE)
    assert window.rows[1] == ("  row1", curses.A_NORMAL)
    assert menu.selected() == "ref0"


def test_move_is_clamped_at_both_ends(menu):
    menu.bind(_entries(2))
    menu.move(Direction.PREVIOUS)
    assert menu.selected() == "ref0"
    menu.move(Direction.NEXT)
    menu.move(Direction.NEXT)
    assert menu.selected() == "ref1"


def test_scrolls_to_keep_cursor_visible(menu, window):
    menu.bind(_entries(10))
    for _ in range(6):
        menu.move(Direction.NEXT)
    menu.show()

    # Window is 4 rows tall; cursor on row6 sits on the last visible line
    assert window.rows[3] == ("* row6", curses.A_REVERSE)
    assert window.rows[0][0] == "  row3"

    for _ in range(6):
        menu.move(Direction.PREVIOUS)
    menu.show()
    assert window.rows[0] == ("* row0", curses.A_REVERSE)


def test_bind_resets_cursor_and_unpost_erases(menu, window):
    menu.bind(_entries(3))
    menu.move(Direction.NEXT)
    menu.show()

    menu.unpost()
    assert not menu.is_posted
    assert window.rows == {}

    menu.bind(_entries(2))
    assert menu.selected() == "ref0"


def test_long_rows_are_cut_before_last_column(window):
    menu = CursesMenuWidget(window, mark="> ")
    menu.bind([("x" * 50, None)])
    menu.show()
    assert len(window.rows[0][0]) == window.width - 1
