import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import pytest

from note_universe.core.errors import DuplicateTagError
from note_universe.core.models import (
    Note,
    add_tag,
    normalize_note,
    remove_tag,
    timestamp_ms,
    toggle_link,
)

NOW = "2024-05-01T10:00:00.000Z"


def test_normalize_fills_defaults():
    note = normalize_note({"title": "Hello"}, now=NOW)

    assert note.id
    assert note.title == "Hello"
    assert note.alias == ""
    assert note.color == "#ffffff"
    assert note.links == []
    assert note.tags == []
    assert note.created_at == NOW
    assert note.updated_at == NOW


def test_normalize_generates_distinct_ids():
    a = normalize_note({})
    b = normalize_note({})
    assert a.id != b.id


def test_normalize_keeps_id_and_created_at():
    note = normalize_note(
        {"id": "n1", "createdAt": "2023-01-01T00:00:00.000Z", "updatedAt": "2023-01-02T00:00:00.000Z"},
        now=NOW,
    )
    assert note.id == "n1"
    assert note.created_at == "2023-01-01T00:00:00.000Z"
    assert note.updated_at == NOW


def test_normalize_never_puts_updated_before_created():
    note = normalize_note({"createdAt": "2999-01-01T00:00:00.000Z"}, now=NOW)
    assert timestamp_ms(note.created_at) <= timestamp_ms(note.updated_at)


def test_normalize_does_not_mutate_input():
    src = Note(id="n1", links=["a"])
    out = normalize_note(src, now=NOW)
    out.links.append("b")
    assert src.links == ["a"]
    assert src.created_at is None


def test_from_dict_is_lenient():
    note = Note.from_dict({"id": 7, "title": None, "links": None, "tags": "x", "color": ""})
    assert note.id == "7"
    assert note.title == ""
    assert note.links == []
    assert note.tags == []
    assert note.color == "#ffffff"


def test_unknown_keys_survive_to_dict():
    note = Note.from_dict({"id": "n1", "pinned": True})
    doc = note.to_dict()
    assert doc["pinned"] is True
    assert doc["id"] == "n1"
    assert "createdAt" in doc and "updatedAt" in doc


def test_timestamp_ms():
    assert timestamp_ms(None) == 0
    assert timestamp_ms("") == 0
    assert timestamp_ms("not a date") == 0
    assert timestamp_ms(1500) == 1500
    assert timestamp_ms("1970-01-01T00:00:01.000Z") == 1000
    assert timestamp_ms("1970-01-01T00:00:02+00:00") == 2000


def test_toggle_link():
    note = Note(id="a", links=["b"])
    added = toggle_link(note, "c")
    assert added.links == ["b", "c"]
    removed = toggle_link(added, "b")
    assert removed.links == ["c"]
    assert note.links == ["b"]


def test_add_tag_rejects_case_insensitive_duplicate():
    note = add_tag(Note(), "Python")
    assert note.tags == ["Python"]
    with pytest.raises(DuplicateTagError):
        add_tag(note, " python ")


def test_add_tag_ignores_blank():
    note = Note(tags=["a"])
    assert add_tag(note, "   ").tags == ["a"]


def test_remove_tag():
    note = Note(tags=["a", "b"])
    assert remove_tag(note, "a").tags == ["b"]
