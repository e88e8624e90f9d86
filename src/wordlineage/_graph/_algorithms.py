"""Graph algorithms for word family ordering."""

from collections import deque
from collections.abc import Collection, Hashable, Mapping, Sequence
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SortOutcome[T]:
    """Result of a topological sort.

    Attributes:
        order: Every node in topological order. Empty when the sort failed.
        problems: Nodes whose in-degree never reached zero, i.e. nodes on a
            cycle or blocked downstream of one. Empty when the sort succeeded.

    """

    order: tuple[T, ...] = ()
    problems: tuple[T, ...] = ()

    @property
    def succeeded(self) -> bool:
        return not self.problems


def kahn_sort[T: Hashable](
    nodes: Sequence[T],
    successors: Mapping[T, Sequence[T]],
    predecessors: Mapping[T, Collection[T]],
) -> SortOutcome[T]:
    """Sort nodes topologically with Kahn's algorithm.

    Only edges between members of `nodes` are considered; an edge to or from
    any other node is ignored. Ties are broken by position: nodes that become
    ready at the same time keep the order in which they were discovered, and
    the initial roots keep their order in `nodes`.

    Args:
        nodes: The member nodes, in their current order.
        successors: Mapping from node to the nodes it points to.
        predecessors: Mapping from node to the nodes pointing to it.

    Returns:
        A successful `SortOutcome` with the full ordering, or a failed one
        listing the problem nodes in the order they appear in `nodes`.
        A cycle is reported, never raised.

    Example:
        >>> outcome = kahn_sort(["a", "b"], {"a": ["b"], "b": []}, {"a": [], "b": ["a"]})
        >>> outcome.order
        ('a', 'b')

    """
    members = set(nodes)

    # Calculate in-degree for each node, counting member parents only
    indegree: dict[T, int] = {
        node: sum(1 for parent in predecessors.get(node, ()) if parent in members) for node in nodes
    }

    queue = deque(node for node in nodes if indegree[node] == 0)
    order: list[T] = []

    while queue:
        node = queue.popleft()
        order.append(node)
        for successor in successors.get(node, ()):
            if successor not in members:
                continue
            indegree[successor] -= 1
            if indegree[successor] == 0:
                queue.append(successor)

    if len(order) == len(nodes):
        return SortOutcome(order=tuple(order))

    return SortOutcome(problems=tuple(node for node in nodes if indegree[node] > 0))
