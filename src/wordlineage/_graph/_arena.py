"""Arena storage for word nodes.

Nodes live in a single growable list of slots. Edges are stored as lists of
slot indices, so no node holds a reference to another node object. A slot that
is released is recycled with a bumped generation, which lets stale ids be
detected instead of silently aliasing a newer node.
"""

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)


class StaleNodeError(KeyError):
    """Raised when a node id refers to a released (or never allocated) slot."""


@dataclass(frozen=True, slots=True, order=True)
class NodeId:
    """Generational index of a node inside a `NodeArena`."""

    index: int
    generation: int = 0

    def __str__(self) -> str:
        return f"#{self.index}.{self.generation}"


@dataclass(slots=True)
class _NodeRecord:
    label: str
    parents: list[int] = field(default_factory=list)
    children: list[int] = field(default_factory=list)


@dataclass(slots=True)
class _Slot:
    generation: int
    record: _NodeRecord | None


class NodeArena:
    """Owns every node record and the edges between them.

    All edge mutations go through `connect`, `disconnect` and `disconnect_all`,
    which always update the child list of the source and the parent list of
    the target together.
    """

    def __init__(self) -> None:
        self._slots: list[_Slot] = []
        self._free: list[int] = []

    # -------------------------------------------------------------------------
    # Allocation
    # -------------------------------------------------------------------------

    def create(self, label: str) -> NodeId:
        """Allocate a new node with no edges and return its id."""
        record = _NodeRecord(label=label)
        if self._free:
            index = self._free.pop()
            slot = self._slots[index]
            slot.generation += 1
            slot.record = record
        else:
            index = len(self._slots)
            self._slots.append(_Slot(generation=0, record=record))
        node_id = NodeId(index, self._slots[index].generation)
        logger.debug("Allocated node %s (%r)", node_id, label)
        return node_id

    def release(self, node_id: NodeId) -> None:
        """Sever every edge of a node and free its slot.

        Any id referring to the released slot becomes stale afterwards.
        """
        self.disconnect_all(node_id)
        slot = self._slots[node_id.index]
        slot.record = None
        self._free.append(node_id.index)
        logger.debug("Released node %s", node_id)

    def is_alive(self, node_id: NodeId) -> bool:
        """Return True if the id refers to a live node of this arena."""
        if not 0 <= node_id.index < len(self._slots):
            return False
        slot = self._slots[node_id.index]
        return slot.record is not None and slot.generation == node_id.generation

    def _record(self, node_id: NodeId) -> _NodeRecord:
        record = self._slots[node_id.index].record if 0 <= node_id.index < len(self._slots) else None
        if record is None or self._slots[node_id.index].generation != node_id.generation:
            msg = f"Node {node_id} is not alive in this arena"
            raise StaleNodeError(msg)
        return record

    def _id_at(self, index: int) -> NodeId:
        return NodeId(index, self._slots[index].generation)

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def label(self, node_id: NodeId) -> str:
        return self._record(node_id).label

    def parents(self, node_id: NodeId) -> tuple[NodeId, ...]:
        """Ids of the nodes with an edge into this node, in insertion order."""
        return tuple(self._id_at(i) for i in self._record(node_id).parents)

    def children(self, node_id: NodeId) -> tuple[NodeId, ...]:
        """Ids of the nodes this node points to, in insertion order."""
        return tuple(self._id_at(i) for i in self._record(node_id).children)

    def __len__(self) -> int:
        return len(self._slots) - len(self._free)

    def __iter__(self) -> Iterator[NodeId]:
        """Iterate over live node ids in slot order."""
        for index, slot in enumerate(self._slots):
            if slot.record is not None:
                yield NodeId(index, slot.generation)

    def __contains__(self, node_id: object) -> bool:
        return isinstance(node_id, NodeId) and self.is_alive(node_id)

    # -------------------------------------------------------------------------
    # Edge maintenance
    # -------------------------------------------------------------------------

    def connect(self, source: NodeId, target: NodeId) -> bool:
        """Create the edge source -> target.

        Self edges and edges already recorded on either side are ignored.

        Returns:
            True if a new edge was created, False if nothing changed.

        """
        src = self._record(source)
        dst = self._record(target)
        if source.index == target.index:
            return False
        if target.index in src.children or source.index in dst.parents:
            return False
        src.children.append(target.index)
        dst.parents.append(source.index)
        return True

    def disconnect(self, source: NodeId, target: NodeId) -> bool:
        """Remove the edge source -> target from whichever side records it.

        Each side is checked on its own, so a half-recorded edge is repaired
        as well.

        Returns:
            True if anything was removed.

        """
        src = self._record(source)
        dst = self._record(target)
        removed = False
        if target.index in src.children:
            src.children.remove(target.index)
            removed = True
        if source.index in dst.parents:
            dst.parents.remove(source.index)
            removed = True
        return removed

    def disconnect_all(self, node_id: NodeId) -> None:
        """Remove every edge incident to a node, in both directions."""
        record = self._record(node_id)
        # Drain from the front; disconnect shrinks the list on every pass.
        while record.children:
            self.disconnect(node_id, self._id_at(record.children[0]))
        while record.parents:
            self.disconnect(self._id_at(record.parents[0]), node_id)
