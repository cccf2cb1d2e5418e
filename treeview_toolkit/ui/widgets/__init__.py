"""Display widgets.

``base`` defines the contract; ``curses_menu`` and ``tk_list`` implement it.
Only the contract is exported here; concrete widgets import their toolkit.
"""

from .base import Direction, DisplayEntry, DisplayWidget

__all__ = ["Direction", "DisplayEntry", "DisplayWidget"]
