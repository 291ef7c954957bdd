from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, Iterable

from note_universe.core.models import Note, timestamp_ms

SORT_KEYS = ("date", "title", "id")
SORT_DIRECTIONS = ("asc", "desc")
DEFAULT_SORT_KEY = "date"
DEFAULT_SORT_DIRECTION = "desc"


class Relation(str, Enum):
    # seen from the focus note
    OUTGOING = "links to this"
    INCOMING = "linked from this"


@dataclass(frozen=True)
class TimelineState:
    focus_id: str | None = None
    sort_key: str = DEFAULT_SORT_KEY
    sort_direction: str = DEFAULT_SORT_DIRECTION

    def focus(self, note_id: str | None) -> "TimelineState":
        return replace(self, focus_id=note_id or None)

    def toggled(self) -> "TimelineState":
        return replace(self, sort_direction="desc" if self.sort_direction == "asc" else "asc")


@dataclass(frozen=True)
class TimelineEntry:
    note: Note
    relation: Relation | None = None

    def to_dict(self) -> dict:
        return {
            "id": self.note.id,
            "title": self.note.title,
            "alias": self.note.alias,
            "createdAt": self.note.created_at,
            "relation": self.relation.value if self.relation else None,
        }


def normalize_sort(sort_key: str | None, sort_direction: str | None) -> tuple[str, str]:
    key = (sort_key or "").strip().lower()
    if key not in SORT_KEYS:
        key = DEFAULT_SORT_KEY
    direction = (sort_direction or "").strip().lower()
    if direction not in SORT_DIRECTIONS:
        direction = DEFAULT_SORT_DIRECTION
    return key, direction


_SORT_KEY_FUNCS: dict[str, Callable[[Note], object]] = {
    "date": lambda n: timestamp_ms(n.created_at),
    "title": lambda n: (n.title or "").casefold(),
    "id": lambda n: (n.id or "").casefold(),
}


def sort_notes(notes: Iterable[Note], sort_key: str, sort_direction: str) -> list[Note]:
    # sorted() stays stable with reverse=True, so ties keep input order either way
    key, direction = normalize_sort(sort_key, sort_direction)
    return sorted(notes, key=_SORT_KEY_FUNCS[key], reverse=direction == "desc")


def related_notes(notes: Iterable[Note], focus_id: str) -> list[Note]:
    """
    The focus note plus its one-hop neighbours in either direction.

    Uses the stored links as-is; a dangling id can never match an existing
    note, so the result equals what integrity-filtered links would give.
    """
    notes = list(notes)
    focus = next((n for n in notes if n.id == focus_id), None)
    outgoing = set(focus.links) if focus else set()
    return [
        n for n in notes
        if n.id == focus_id or n.id in outgoing or focus_id in n.links
    ]


def relation_to_focus(note: Note, focus: Note | None) -> Relation:
    if focus is not None and note.id in focus.links:
        return Relation.OUTGOING
    return Relation.INCOMING


def build_timeline(notes: Iterable[Note], state: TimelineState | None = None) -> list[TimelineEntry]:
    state = state or TimelineState()
    notes = list(notes)

    if not state.focus_id:
        return [TimelineEntry(n) for n in sort_notes(notes, state.sort_key, state.sort_direction)]

    focus = next((n for n in notes if n.id == state.focus_id), None)
    visible = sort_notes(related_notes(notes, state.focus_id), state.sort_key, state.sort_direction)
    return [
        TimelineEntry(n) if n.id == state.focus_id else TimelineEntry(n, relation_to_focus(n, focus))
        for n in visible
    ]
