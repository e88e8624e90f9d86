"""TOML persistence for lineages.

A lineage is stored as two arrays of tables:

    [[words]]
    key = "w0"
    label = "video"
    children = ["w1"]

    [[families]]
    name = "Latin"
    words = ["w0", "w1"]

Keys only link entries within one document; they are regenerated on export.

Only the order of each word's children is stored. On load, a word's parents
are listed in the order their entries appear under `[[words]]`, which may
differ from the order they were connected in before saving.
"""

import logging
import tomllib
from pathlib import Path
from typing import Any, Self

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from ._lineage import Lineage

logger = logging.getLogger(__name__)


class LineageFormatError(ValueError):
    """Raised when a persisted lineage document is malformed."""


class WordEntry(BaseModel):
    model_config = ConfigDict(extra="forbid")

    key: str
    label: str
    children: list[str] = Field(default_factory=list)


class FamilyEntry(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str
    words: list[str] = Field(default_factory=list)


class LineageDocument(BaseModel):
    """Validated on-disk representation of a `Lineage`."""

    model_config = ConfigDict(extra="forbid")

    words: list[WordEntry] = Field(default_factory=list)
    families: list[FamilyEntry] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_references(self) -> Self:
        keys: set[str] = set()
        for word in self.words:
            if word.key in keys:
                msg = f"Duplicate word key {word.key!r}"
                raise ValueError(msg)
            keys.add(word.key)

        for word in self.words:
            unknown = [child for child in word.children if child not in keys]
            if unknown:
                msg = f"Word {word.key!r} has unknown children: {', '.join(unknown)}"
                raise ValueError(msg)

        for family in self.families:
            unknown = [key for key in family.words if key not in keys]
            if unknown:
                msg = f"Family {family.name!r} references unknown words: {', '.join(unknown)}"
                raise ValueError(msg)
        return self


def to_document(lineage: Lineage) -> LineageDocument:
    """Convert a lineage into its document model."""
    keys = {word.id: f"w{position}" for position, word in enumerate(lineage.words)}
    return LineageDocument(
        words=[
            WordEntry(
                key=keys[word.id],
                label=word.label,
                children=[keys[child.id] for child in word.children],
            )
            for word in lineage.words
        ],
        families=[
            FamilyEntry(name=family.name, words=[keys[word.id] for word in family.order])
            for family in lineage.families
        ],
    )


def from_document(document: LineageDocument) -> Lineage:
    """Build a lineage from a validated document.

    Self references and repeated children are dropped by the usual
    connection rules.
    """
    lineage = Lineage()
    words = {entry.key: lineage.add_word(entry.label) for entry in document.words}
    for entry in document.words:
        words[entry.key].connect_many(words[child] for child in entry.children)
    for family_entry in document.families:
        family = lineage.add_family(family_entry.name)
        family.add_nodes(words[key] for key in family_entry.words)
    return lineage


def dump_lineage(lineage: Lineage) -> dict[str, Any]:
    """Convert a lineage to a TOML-compatible dictionary."""
    return to_document(lineage).model_dump(mode="python")


def load_lineage(data: dict[str, Any]) -> Lineage:
    """Build a lineage from a TOML-compatible dictionary.

    Raises:
        LineageFormatError: If the data does not describe a valid lineage.

    """
    try:
        document = LineageDocument.model_validate(data)
    except ValidationError as e:
        msg = f"Invalid lineage document: {e}"
        raise LineageFormatError(msg) from e
    return from_document(document)


def export_to_toml(lineage: Lineage, path: Path) -> None:
    """Write a lineage to a TOML file."""
    data = dump_lineage(lineage)
    with path.open("wb") as f:
        tomli_w.dump(data, f)
    logger.debug("Wrote %d words and %d families to %s", len(data["words"]), len(data["families"]), path)


def load_lineage_from_toml(path: Path) -> Lineage:
    """Read a lineage from a TOML file.

    Raises:
        LineageFormatError: If the file is not valid TOML or not a valid lineage.

    """
    with path.open("rb") as f:
        try:
            data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            msg = f"Invalid TOML in {path}: {e}"
            raise LineageFormatError(msg) from e
    logger.debug("Loaded lineage data from %s", path)
    return load_lineage(data)
