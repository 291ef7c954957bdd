import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import json

import pytest

from note_universe.core.errors import MalformedImportError, StorageError
from note_universe.core.models import Note
from note_universe.services.exchange import (
    export_notes,
    export_to_file,
    import_from_file,
    import_notes,
)
from note_universe.services.notes import NoteService
from note_universe.vault.repo import InMemoryNoteRepository


def test_export_then_import_into_empty_repo(tmp_path):
    source = NoteService(InMemoryNoteRepository())
    source.seed()
    path = tmp_path / "export.json"
    assert export_to_file(source.repo, path) == 3

    target = InMemoryNoteRepository()
    imported = import_from_file(target, path)

    assert len(imported) == 3
    before = {n.id: (n.title, n.links, n.created_at) for n in source.all_notes()}
    after = {n.id: (n.title, n.links, n.created_at) for n in target.list()}
    assert after == before


def test_export_is_json_array():
    repo = InMemoryNoteRepository([Note(id="a", title="A")])
    data = json.loads(export_notes(repo))
    assert isinstance(data, list)
    assert data[0]["id"] == "a"


@pytest.mark.parametrize("payload", ['{"id": "a"}', "not json", '[{"id": "a"}, 3]'])
def test_malformed_payload_writes_nothing(payload):
    repo = InMemoryNoteRepository()
    with pytest.raises(MalformedImportError):
        import_notes(repo, payload)
    assert repo.list() == []


def test_import_normalizes_and_bypasses_alias_resolution():
    repo = InMemoryNoteRepository()
    payload = json.dumps([
        {"id": "1", "title": "Same", "alias": "Same"},
        {"id": "2", "title": "Same", "alias": "Same"},
        {"title": "No id"},
    ])
    imported = import_notes(repo, payload)

    assert [n.alias for n in imported[:2]] == ["Same", "Same"]
    assert imported[2].id
    assert all(n.color == "#ffffff" and n.created_at and n.updated_at for n in imported)
    assert len(repo.list()) == 3


def test_import_overwrites_same_id():
    repo = InMemoryNoteRepository([Note(id="1", title="old")])
    import_notes(repo, json.dumps([{"id": "1", "title": "new"}]))
    assert repo.get("1").title == "new"


def test_import_missing_file(tmp_path):
    with pytest.raises(StorageError):
        import_from_file(InMemoryNoteRepository(), tmp_path / "nope.json")
