from __future__ import annotations

from typing import Iterable

from note_universe.settings import UNTITLED

from .models import Note


def base_alias(note: Note) -> str:
    return (note.alias or "").strip() or (note.title or "").strip() or UNTITLED


def alias_taken(candidate: str, *, note_id: str, universe: Iterable[Note]) -> bool:
    """
    True if another note already answers to `candidate`.

    A note without an explicit alias answers to its raw title.
    """
    return any(
        n.id != note_id and (n.alias == candidate or (not n.alias and n.title == candidate))
        for n in universe
    )


def resolve_alias(note: Note, universe: Iterable[Note]) -> str:
    """
    Unique alias for `note` against a snapshot of all notes.

    Probes "base", "base (1)", "base (2)", ... and returns the first free one.
    The note's own stored entry is ignored, so re-saving keeps its alias.
    """
    notes = list(universe)
    base = base_alias(note)

    candidate = base
    counter = 1
    while alias_taken(candidate, note_id=note.id, universe=notes):
        candidate = f"{base} ({counter})"
        counter += 1
    return candidate
