from __future__ import annotations

from typing import Iterable, Iterator

from .models import Note


def valid_links(notes: Iterable[Note]) -> dict[str, list[str]]:
    """
    Outgoing links per note with dangling targets removed.

    Order and duplicates are kept; stored notes are not touched.
    """
    notes = list(notes)
    existing = {n.id for n in notes}
    return {n.id: [dst for dst in n.links if dst in existing] for n in notes}


def dangling_links(notes: Iterable[Note]) -> dict[str, list[str]]:
    notes = list(notes)
    existing = {n.id for n in notes}
    out: dict[str, list[str]] = {}
    for n in notes:
        missing = [dst for dst in n.links if dst not in existing]
        if missing:
            out[n.id] = missing
    return out


def iter_edges(notes: Iterable[Note]) -> Iterator[tuple[str, str]]:
    for src, targets in valid_links(notes).items():
        for dst in targets:
            yield src, dst
