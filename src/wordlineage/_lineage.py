"""The lineage workspace: one arena of words shared by any number of families."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ._graph import NodeArena, SortOutcome, WordFamily, WordNode

if TYPE_CHECKING:
    from collections.abc import Iterable

logger = logging.getLogger(__name__)


class Lineage:
    """A collection of words and the families that organise them.

    Every word created through a `Lineage` lives in its arena, so any two of
    its words may be related to each other. Families created here are bound
    to the same arena.

    Example:
        >>> lineage = Lineage()
        >>> family = lineage.add_family("Latin")
        >>> video, vision = lineage.add_words(["video", "vision"])
        >>> video.connect(vision)
        True
        >>> family.add_nodes([vision, video])
        >>> [str(word) for word in family.sort().order]
        ['video', 'vision']

    """

    def __init__(self) -> None:
        self.arena = NodeArena()
        self._families: list[WordFamily] = []

    @property
    def words(self) -> tuple[WordNode, ...]:
        """All live words, in creation order (recycled slots reuse their position)."""
        return tuple(WordNode(self.arena, node_id) for node_id in self.arena)

    @property
    def families(self) -> tuple[WordFamily, ...]:
        return tuple(self._families)

    def add_word(self, label: str) -> WordNode:
        """Create a new word with no relations."""
        return WordNode.create(self.arena, label)

    def add_words(self, labels: Iterable[str]) -> list[WordNode]:
        return [self.add_word(label) for label in labels]

    def discard_word(self, word: WordNode) -> None:
        """Remove a word from every family and release it.

        The handle, and any copy of it, is stale afterwards.
        """
        for family in self._families:
            if word in family:
                family.remove_node(word)
        self.arena.release(word.id)
        logger.debug("Discarded word %s", word.id)

    def add_family(self, name: str) -> WordFamily:
        """Create a new, empty family bound to this lineage's arena."""
        family = WordFamily(name, arena=self.arena)
        self._families.append(family)
        return family

    def remove_family(self, family: WordFamily) -> None:
        """Forget a family. Its words and their relations are kept."""
        self._families.remove(family)

    def family(self, name: str) -> WordFamily:
        """Return the first family with the given name.

        Raises:
            KeyError: If no family has that name.

        """
        for family in self._families:
            if family.name == name:
                return family
        msg = f"No family named {name!r}"
        raise KeyError(msg)

    def sort_all(self) -> list[tuple[WordFamily, SortOutcome[WordNode]]]:
        """Sort every family, returning each family with its outcome."""
        return [(family, family.sort()) for family in self._families]
