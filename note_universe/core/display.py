from __future__ import annotations

from collections import Counter
from typing import Iterable

from note_universe.settings import ID_PREFIX_LEN

from .models import Note


def display_names(notes: Iterable[Note], *, current_id: str | None = None) -> dict[str, str]:
    """
    note_id -> name to show in a list of notes.

    The open note (`current_id`) is left out. When several of the remaining
    notes share a visible name, each gets a short id fragment appended:
    "Draft (a1b2)".
    """
    others = [n for n in notes if n.id != current_id]
    counts = Counter(n.base_name for n in others)

    names: dict[str, str] = {}
    for n in others:
        name = n.base_name
        if counts[name] > 1:
            name = f"{name} ({n.id[:ID_PREFIX_LEN]})"
        names[n.id] = name
    return names
