"""TreeView Toolkit UI package.

The view projector, the navigation controller and the display widgets.
The Tk widget is not imported here so headless environments without
``_tkinter`` can still use the rest of the package.
"""

# Ensure subpackages are imported so relative imports have resolvable parents
from . import widgets as _widgets  # noqa: F401
from . import controllers as _controllers  # noqa: F401

from .tree_view import BackReference, DisplayedItem, ResourceLedger, TreeView  # noqa: F401
from .controllers.navigation_controller import NavigationController  # noqa: F401
from .widgets.base import Direction, DisplayWidget  # noqa: F401

__all__: list[str] = [
    "TreeView",
    "DisplayedItem",
    "ResourceLedger",
    "BackReference",
    "NavigationController",
    "Direction",
    "DisplayWidget",
]
