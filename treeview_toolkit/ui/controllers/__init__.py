"""UI controllers package.

Controllers mediate between display widgets and the view; they contain no
UI toolkit code.
"""

from .navigation_controller import NavigationController

__all__: list[str] = ["NavigationController"]
