import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from note_universe.core.links import dangling_links, iter_edges, valid_links
from note_universe.core.models import Note


def _notes():
    return [
        Note(id="A", links=["B", "gone", "C", "B"]),
        Note(id="B", links=["B"]),
        Note(id="C"),
    ]


def test_dangling_targets_are_dropped_in_order():
    assert valid_links(_notes()) == {"A": ["B", "C", "B"], "B": ["B"], "C": []}


def test_stored_links_untouched():
    notes = _notes()
    valid_links(notes)
    assert notes[0].links == ["B", "gone", "C", "B"]


def test_dangling_links_report():
    assert dangling_links(_notes()) == {"A": ["gone"]}


def test_iter_edges():
    assert list(iter_edges(_notes())) == [("A", "B"), ("A", "C"), ("A", "B"), ("B", "B")]


def test_links_to_deleted_note_disappear():
    notes = _notes()
    remaining = [n for n in notes if n.id != "C"]
    assert valid_links(remaining) == {"A": ["B", "B"], "B": ["B"]}
