from __future__ import annotations

"""Contract between the view projector and a list-display widget.

A display widget shows one flat list of labelled entries, keeps one entry
highlighted, and hands back the opaque reference attached to that entry.
It never interprets the reference.
"""

import abc
import enum
from typing import Any, Optional, Sequence, Tuple

__all__ = ["Direction", "DisplayEntry", "DisplayWidget"]

# (display_text, opaque_back_reference)
DisplayEntry = Tuple[str, Any]


class Direction(enum.Enum):
    PREVIOUS = "previous"
    NEXT = "next"


class DisplayWidget(abc.ABC):
    """Abstract list-display widget.

    Widgets start in a "not yet shown" state with no entries. ``bind``
    replaces the whole visible set in one step; ``unpost`` hides the
    current set so it is never drawn half-replaced.
    """

    @abc.abstractmethod
    def bind(self, entries: Sequence[DisplayEntry]) -> None:
        """Replace the visible set and highlight its first entry."""

    @abc.abstractmethod
    def unpost(self) -> None:
        """Stop showing the current set until the next :meth:`show`."""

    @abc.abstractmethod
    def selected(self) -> Optional[Any]:
        """Return the reference attached to the highlighted entry, if any."""

    @abc.abstractmethod
    def move(self, direction: Direction) -> None:
        """Move the highlight one entry; no-op at either end."""

    @abc.abstractmethod
    def show(self) -> None:
        """Render the current set to the output surface."""

    @property
    @abc.abstractmethod
    def is_posted(self) -> bool:
        """True while the current set is shown."""
