"""Tests for TOML persistence in wordlineage._io."""

import tomllib
from pathlib import Path

import pytest

from wordlineage import (
    Lineage,
    LineageFormatError,
    dump_lineage,
    export_to_toml,
    load_lineage,
    load_lineage_from_toml,
)


@pytest.fixture
def lineage() -> Lineage:
    lineage = Lineage()
    latin = lineage.add_family("Latin")
    english = lineage.add_family("English")
    video, vision, visionary, bank = lineage.add_words(["video", "vision", "visionary", "bank"])
    video.connect(vision)
    vision.connect(visionary)
    latin.add_nodes([visionary, video, vision])
    english.add_nodes([vision, bank])
    return lineage


class TestDumpLineage:
    def test_words_and_families(self, lineage: Lineage) -> None:
        data = dump_lineage(lineage)
        assert data == {
            "words": [
                {"key": "w0", "label": "video", "children": ["w1"]},
                {"key": "w1", "label": "vision", "children": ["w2"]},
                {"key": "w2", "label": "visionary", "children": []},
                {"key": "w3", "label": "bank", "children": []},
            ],
            "families": [
                {"name": "Latin", "words": ["w2", "w0", "w1"]},
                {"name": "English", "words": ["w1", "w3"]},
            ],
        }

    def test_empty_lineage(self) -> None:
        assert dump_lineage(Lineage()) == {"words": [], "families": []}


class TestLoadLineage:
    def test_restores_relations_and_order(self) -> None:
        lineage = load_lineage(
            {
                "words": [
                    {"key": "a", "label": "A", "children": ["b", "c"]},
                    {"key": "b", "label": "B", "children": ["d"]},
                    {"key": "c", "label": "C", "children": ["d"]},
                    {"key": "d", "label": "D"},
                ],
                "families": [{"name": "Diamond", "words": ["d", "c", "b", "a"]}],
            },
        )
        family = lineage.family("Diamond")
        assert [word.label for word in family.order] == ["D", "C", "B", "A"]
        family.sort()
        assert [word.label for word in family.order] == ["A", "B", "C", "D"]

    def test_duplicate_labels_are_distinct_words(self) -> None:
        lineage = load_lineage(
            {"words": [{"key": "x", "label": "bank", "children": ["y"]}, {"key": "y", "label": "bank"}]},
        )
        first, second = lineage.words
        assert first.children == (second,)

    def test_self_and_repeated_children_are_dropped(self) -> None:
        lineage = load_lineage(
            {"words": [{"key": "a", "label": "A", "children": ["a", "b", "b"]}, {"key": "b", "label": "B"}]},
        )
        a, b = lineage.words
        assert a.children == (b,)
        assert a.parents == ()

    def test_duplicate_key(self) -> None:
        with pytest.raises(LineageFormatError, match="Duplicate word key"):
            load_lineage({"words": [{"key": "a", "label": "A"}, {"key": "a", "label": "B"}]})

    def test_unknown_child(self) -> None:
        with pytest.raises(LineageFormatError, match="unknown children"):
            load_lineage({"words": [{"key": "a", "label": "A", "children": ["zzz"]}]})

    def test_unknown_family_word(self) -> None:
        with pytest.raises(LineageFormatError, match="unknown words"):
            load_lineage({"families": [{"name": "F", "words": ["zzz"]}]})

    def test_extra_fields_are_rejected(self) -> None:
        with pytest.raises(LineageFormatError):
            load_lineage({"words": [{"key": "a", "label": "A", "definition": "?"}]})

    def test_missing_label(self) -> None:
        with pytest.raises(LineageFormatError):
            load_lineage({"words": [{"key": "a"}]})


class TestTomlFiles:
    def test_export_then_load(self, lineage: Lineage, tmp_path: Path) -> None:
        path = tmp_path / "lineage.toml"
        export_to_toml(lineage, path)

        with path.open("rb") as f:
            assert tomllib.load(f) == dump_lineage(lineage)

        restored = load_lineage_from_toml(path)
        assert dump_lineage(restored) == dump_lineage(lineage)

    def test_invalid_toml(self, tmp_path: Path) -> None:
        path = tmp_path / "broken.toml"
        path.write_text("[[words]\nkey = ")
        with pytest.raises(LineageFormatError, match="Invalid TOML"):
            load_lineage_from_toml(path)

    def test_hand_written_file(self, tmp_path: Path) -> None:
        path = tmp_path / "words.toml"
        path.write_text(
            """
[[words]]
key = "video"
label = "video"
children = ["vision"]

[[words]]
key = "vision"
label = "vision"

[[families]]
name = "Latin"
words = ["vision", "video"]
""",
        )
        lineage = load_lineage_from_toml(path)
        outcome = lineage.family("Latin").sort()
        assert [word.label for word in outcome.order] == ["video", "vision"]


class TestRelationOrder:
    def test_children_order_survives_export(self) -> None:
        lineage = Lineage()
        root, x, y, z = lineage.add_words(["root", "x", "y", "z"])
        root.connect_many([z, x, y])

        restored = load_lineage(dump_lineage(lineage))

        assert [child.label for child in restored.words[0].children] == ["z", "x", "y"]

    def test_parents_follow_document_order_after_load(self) -> None:
        lineage = Lineage()
        first, second, child = lineage.add_words(["first", "second", "child"])
        second.connect(child)
        first.connect(child)
        assert [parent.label for parent in child.parents] == ["second", "first"]

        restored = load_lineage(dump_lineage(lineage))

        restored_child = restored.words[2]
        assert [parent.label for parent in restored_child.parents] == ["first", "second"]
