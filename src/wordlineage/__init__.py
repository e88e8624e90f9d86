"""Word lineage: words, the relations between them, and their topological order."""

__all__ = [
    "ChangeKind",
    "FamilyChange",
    "FamilyListener",
    "ForeignNodeError",
    "Lineage",
    "LineageDocument",
    "LineageFormatError",
    "NodeArena",
    "NodeId",
    "SortOutcome",
    "StaleNodeError",
    "WordFamily",
    "WordNode",
    "dump_lineage",
    "export_to_toml",
    "kahn_sort",
    "load_lineage",
    "load_lineage_from_toml",
]

from ._events import ChangeKind, FamilyChange, FamilyListener
from ._graph import (
    ForeignNodeError,
    NodeArena,
    NodeId,
    SortOutcome,
    StaleNodeError,
    WordFamily,
    WordNode,
    kahn_sort,
)
from ._io import (
    LineageDocument,
    LineageFormatError,
    dump_lineage,
    export_to_toml,
    load_lineage,
    load_lineage_from_toml,
)
from ._lineage import Lineage
