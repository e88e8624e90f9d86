"""Tests for the Lineage workspace."""

import pytest

from wordlineage import Lineage, StaleNodeError


class TestLineage:
    def test_add_word(self) -> None:
        lineage = Lineage()
        word = lineage.add_word("video")
        assert word.label == "video"
        assert word.arena is lineage.arena
        assert lineage.words == (word,)

    def test_add_family_binds_arena(self) -> None:
        lineage = Lineage()
        family = lineage.add_family("Latin")
        assert family.arena is lineage.arena
        assert lineage.families == (family,)

    def test_family_lookup(self) -> None:
        lineage = Lineage()
        latin = lineage.add_family("Latin")
        lineage.add_family("Greek")
        assert lineage.family("Latin") is latin
        with pytest.raises(KeyError, match="Norse"):
            lineage.family("Norse")

    def test_remove_family_keeps_words(self) -> None:
        lineage = Lineage()
        family = lineage.add_family("Latin")
        a, b = lineage.add_words(["a", "b"])
        family.add_nodes([a, b])
        a.connect(b)

        lineage.remove_family(family)

        assert lineage.families == ()
        assert lineage.words == (a, b)
        assert a.children == (b,)

    def test_word_shared_between_families(self) -> None:
        lineage = Lineage()
        latin = lineage.add_family("Latin")
        english = lineage.add_family("English")
        video, vision = lineage.add_words(["video", "vision"])
        latin.add_nodes([video, vision])
        english.add_node(vision)
        assert vision in latin
        assert vision in english

    def test_discard_word_removes_from_every_family(self) -> None:
        lineage = Lineage()
        latin = lineage.add_family("Latin")
        english = lineage.add_family("English")
        a, b, c = lineage.add_words(["a", "b", "c"])
        latin.add_nodes([a, b])
        english.add_nodes([b, c])
        a.connect(b)
        b.connect(c)

        lineage.discard_word(b)

        assert latin.order == (a,)
        assert english.order == (c,)
        assert a.children == ()
        assert c.parents == ()
        assert not b.is_alive
        assert lineage.words == (a, c)
        with pytest.raises(StaleNodeError):
            _ = b.label

    def test_discarded_slot_does_not_alias(self) -> None:
        lineage = Lineage()
        old = lineage.add_word("old")
        lineage.discard_word(old)
        new = lineage.add_word("new")
        assert new.id.index == old.id.index
        assert new != old
        assert new.is_alive
        assert not old.is_alive

    def test_sort_all(self) -> None:
        lineage = Lineage()
        ok = lineage.add_family("ok")
        broken = lineage.add_family("broken")
        a, b, c, d = lineage.add_words(["a", "b", "c", "d"])
        ok.add_nodes([b, a])
        a.connect(b)
        broken.add_nodes([c, d])
        c.connect(d)
        d.connect(c)

        results = lineage.sort_all()

        assert [family for family, _ in results] == [ok, broken]
        assert results[0][1].order == (a, b)
        assert results[1][1].problems == (c, d)
