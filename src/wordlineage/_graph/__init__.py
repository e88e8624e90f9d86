"""Graph module providing the word lineage data structures.

This module contains:
- NodeArena: Storage for node records and the edges between them
- WordNode: A handle on a single word and its relations
- WordFamily: An ordered collection of words that can be sorted topologically
- kahn_sort: Algorithm for ordering nodes by their relations
"""

from ._algorithms import SortOutcome, kahn_sort
from ._arena import NodeArena, NodeId, StaleNodeError
from ._family import WordFamily
from ._node import ForeignNodeError, WordNode

__all__ = [
    "ForeignNodeError",
    "NodeArena",
    "NodeId",
    "SortOutcome",
    "StaleNodeError",
    "WordFamily",
    "WordNode",
    "kahn_sort",
]
