"""Change notifications published by word families."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Self

if TYPE_CHECKING:
    from ._graph import WordFamily, WordNode


class ChangeKind(StrEnum):
    """Kind of structural change made to a word family.

    Each member carries a short description as its docstring.
    """

    def __new__(cls, value: str, doc: str = "") -> Self:
        obj = str.__new__(cls, value)
        obj._value_ = value
        obj.__doc__ = doc
        return obj

    ADDED = "added", "A word joined the family"
    REMOVED = "removed", "A word left the family"
    REORDERED = "reordered", "A sort changed the order of the family"
    RENAMED = "renamed", "The family was given a new name"


@dataclass(frozen=True, slots=True)
class FamilyChange:
    """A single change notification.

    Attributes:
        kind: What happened.
        family: The family that changed.
        words: The words involved. For `REORDERED` this is the whole new
            order; for `RENAMED` it is empty.

    """

    kind: ChangeKind
    family: WordFamily
    words: tuple[WordNode, ...] = ()


type FamilyListener = Callable[[FamilyChange], None]


class ChangeNotifier:
    """Keeps a list of listeners and calls them synchronously, in registration order."""

    def __init__(self) -> None:
        self._listeners: list[FamilyListener] = []

    def subscribe(self, listener: FamilyListener) -> Callable[[], None]:
        """Register a listener and return a callable that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def publish(self, change: FamilyChange) -> None:
        # Iterate over a copy so a listener may unsubscribe while being notified
        for listener in list(self._listeners):
            listener(change)

    def __len__(self) -> int:
        return len(self._listeners)
