"""Build a small lineage, sort it, and save it to TOML.

Run with: python examples/word_families.py words.toml
"""

import sys
from pathlib import Path

from wordlineage import ChangeKind, FamilyChange, Lineage, export_to_toml


def log_change(change: FamilyChange) -> None:
    if change.kind is ChangeKind.RENAMED:
        print(f"[{change.family}] renamed")
        return
    print(f"[{change.family}] {change.kind}: {', '.join(word.label for word in change.words)}")


def build() -> Lineage:
    lineage = Lineage()
    latin = lineage.add_family("Latin: videre")
    latin.subscribe(log_change)

    videre, video, vision, visionary, revise, revision = lineage.add_words(
        ["videre", "video", "vision", "visionary", "revise", "revision"],
    )
    videre.connect_many([video, vision, revise])
    vision.connect(visionary)
    revise.connect(revision)
    vision.connect(revision)

    latin.add_nodes([revision, visionary, video, vision, revise, videre])
    return lineage


def main() -> None:
    lineage = build()
    family = lineage.family("Latin: videre")

    outcome = family.sort()
    print("order:", " -> ".join(word.label for word in outcome.order))

    # Introduce a cycle: sorting now reports it and leaves the order alone
    revision, videre = family.order[-1], family.order[0]
    revision.connect(videre)
    outcome = family.sort()
    print("problems:", ", ".join(word.label for word in outcome.problems))
    revision.disconnect(videre)

    if len(sys.argv) > 1:
        export_to_toml(lineage, Path(sys.argv[1]))


if __name__ == "__main__":
    main()
