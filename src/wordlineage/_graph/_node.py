"""Word node handles."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from ._arena import NodeArena, NodeId

if TYPE_CHECKING:
    from collections.abc import Iterable


class ForeignNodeError(ValueError):
    """Raised when nodes from two different arenas are combined."""


@dataclass(frozen=True, slots=True)
class WordNode:
    """A word and its lineage relations.

    A `WordNode` is a handle on a record stored in a `NodeArena`. Two handles
    are equal when they address the same node of the same arena; the label
    plays no part in identity, so distinct words may share a label.

    Relations are directed: a parent is a word this word derives from, and a
    child is a word derived from this one.
    """

    arena: NodeArena = field(repr=False)
    id: NodeId

    @classmethod
    def create(cls, arena: NodeArena, label: str) -> WordNode:
        """Allocate a new word with no relations in `arena`."""
        return cls(arena, arena.create(label))

    @property
    def label(self) -> str:
        return self.arena.label(self.id)

    @property
    def parents(self) -> tuple[WordNode, ...]:
        return tuple(WordNode(self.arena, node_id) for node_id in self.arena.parents(self.id))

    @property
    def children(self) -> tuple[WordNode, ...]:
        return tuple(WordNode(self.arena, node_id) for node_id in self.arena.children(self.id))

    @property
    def is_alive(self) -> bool:
        return self.arena.is_alive(self.id)

    def _check_same_arena(self, other: WordNode) -> None:
        if other.arena is not self.arena:
            msg = f"Cannot relate {self.label!r} to {other.label!r}: the words belong to different arenas"
            raise ForeignNodeError(msg)

    def connect(self, other: WordNode) -> bool:
        """Add `other` as a child of this word.

        Connecting a word to itself, or repeating an existing connection, is a
        no-op.

        Returns:
            True if a new edge was created.

        """
        self._check_same_arena(other)
        return self.arena.connect(self.id, other.id)

    def connect_many(self, others: Iterable[WordNode]) -> None:
        """Add each of `others` as a child of this word, in order."""
        for other in others:
            self.connect(other)

    def disconnect(self, other: WordNode) -> bool:
        """Remove the edge from this word to `other`.

        It is removed even if only one of the two words records it.

        Returns:
            True if anything was removed.

        """
        self._check_same_arena(other)
        return self.arena.disconnect(self.id, other.id)

    def disconnect_all(self) -> None:
        """Remove every relation of this word, to parents and children alike."""
        self.arena.disconnect_all(self.id)

    def __str__(self) -> str:
        return self.label
