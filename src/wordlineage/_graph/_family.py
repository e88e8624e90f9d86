"""Word families: ordered collections of related words."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, cast

from .._events import ChangeKind, ChangeNotifier, FamilyChange
from ._algorithms import SortOutcome, kahn_sort
from ._node import ForeignNodeError, WordNode

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Iterator

    from .._events import FamilyListener
    from ._arena import NodeArena, NodeId

logger = logging.getLogger(__name__)


class WordFamily:
    """A family of words kept in topological order.

    The family holds each member word once. Its `order` is a valid
    topological order right after a successful `sort`; otherwise it reflects
    the last successful sort with later additions appended.

    A family is bound to a single `NodeArena`. If none is given, it adopts
    the arena of the first word added to it.

    Structural changes (additions, removals, reordering by `sort`, renames)
    are published to listeners registered with `subscribe`.
    """

    def __init__(self, name: str = "Word Family 1", arena: NodeArena | None = None) -> None:
        self._name = name
        self._arena = arena
        self._order: list[NodeId] = []
        self._members: set[NodeId] = set()
        self._notifier = ChangeNotifier()

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def name(self) -> str:
        return self._name

    @name.setter
    def name(self, value: str) -> None:
        if value == self._name:
            return
        self._name = value
        self._notifier.publish(FamilyChange(ChangeKind.RENAMED, self))

    @property
    def arena(self) -> NodeArena | None:
        return self._arena

    @property
    def order(self) -> tuple[WordNode, ...]:
        """Member words in their current order."""
        return tuple(self._word(node_id) for node_id in self._order)

    def _word(self, node_id: NodeId) -> WordNode:
        return WordNode(cast("NodeArena", self._arena), node_id)

    def _bind(self, word: WordNode) -> None:
        if self._arena is None:
            self._arena = word.arena
        elif word.arena is not self._arena:
            msg = f"Word {word.label!r} belongs to a different arena than family {self._name!r}"
            raise ForeignNodeError(msg)

    # -------------------------------------------------------------------------
    # Notifications
    # -------------------------------------------------------------------------

    def subscribe(self, listener: FamilyListener) -> Callable[[], None]:
        """Register a listener for changes to this family.

        Returns:
            A callable that unregisters the listener.

        """
        return self._notifier.subscribe(listener)

    # -------------------------------------------------------------------------
    # Membership
    # -------------------------------------------------------------------------

    def add_node(self, word: WordNode) -> None:
        """Append a word to the family unless it is already a member.

        Raises:
            StaleNodeError: If the word has been released. The family is left unchanged.

        """
        label = word.label
        self._bind(word)
        if word.id in self._members:
            return
        self._order.append(word.id)
        self._members.add(word.id)
        logger.debug("Added %r to family %r", label, self._name)
        self._notifier.publish(FamilyChange(ChangeKind.ADDED, self, (word,)))

    def add_nodes(self, words: Iterable[WordNode]) -> None:
        for word in words:
            self.add_node(word)

    def remove_node(self, word: WordNode) -> None:
        """Remove a word from the family along with all of its relations.

        A released word has no relations left, so only its membership is dropped.
        """
        if self._arena is not None and word.arena is not self._arena:
            msg = f"Word {word.id} belongs to a different arena than family {self._name!r}"
            raise ForeignNodeError(msg)
        if word.is_alive:
            word.disconnect_all()
        if word.id not in self._members:
            return
        self._order.remove(word.id)
        self._members.discard(word.id)
        logger.debug("Removed %s from family %r", word.id, self._name)
        self._notifier.publish(FamilyChange(ChangeKind.REMOVED, self, (word,)))

    def remove_nodes(self, words: Iterable[WordNode]) -> None:
        for word in words:
            self.remove_node(word)

    # -------------------------------------------------------------------------
    # Sorting
    # -------------------------------------------------------------------------

    def sort(self) -> SortOutcome[WordNode]:
        """Sort the family into topological order.

        On success the family's order is replaced by the sorted order. If the
        family contains a cycle, the order is left untouched and the outcome
        lists the problem words: those on a cycle or downstream of one.

        Members released from the arena behind the family's back are skipped,
        and a successful sort drops them from the order.
        """
        if self._arena is None:
            return SortOutcome()
        arena = self._arena
        live = [node_id for node_id in self._order if arena.is_alive(node_id)]
        outcome = kahn_sort(
            live,
            successors={node_id: arena.children(node_id) for node_id in live},
            predecessors={node_id: arena.parents(node_id) for node_id in live},
        )

        if not outcome.succeeded:
            problems = tuple(self._word(node_id) for node_id in outcome.problems)
            logger.warning(
                "Family %r contains a cycle involving: %s",
                self._name,
                ", ".join(word.label for word in problems),
            )
            return SortOutcome(problems=problems)

        order = tuple(self._word(node_id) for node_id in outcome.order)
        if list(outcome.order) != self._order:
            self._order = list(outcome.order)
            self._members = set(outcome.order)
            logger.debug("Sorted family %r", self._name)
            self._notifier.publish(FamilyChange(ChangeKind.REORDERED, self, order))
        return SortOutcome(order=order)

    # -------------------------------------------------------------------------
    # Container protocol
    # -------------------------------------------------------------------------

    def __contains__(self, word: object) -> bool:
        return isinstance(word, WordNode) and word.arena is self._arena and word.id in self._members

    def __iter__(self) -> Iterator[WordNode]:
        return iter(self.order)

    def __len__(self) -> int:
        return len(self._order)

    def __str__(self) -> str:
        return self._name

    def __repr__(self) -> str:
        return f"WordFamily(name={self._name!r}, words={len(self._order)})"
