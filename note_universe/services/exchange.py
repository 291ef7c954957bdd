from __future__ import annotations

import json
import logging
from pathlib import Path

from note_universe.core.errors import MalformedImportError, StorageError
from note_universe.core.models import Note, normalize_note
from note_universe.vault.filesystem import atomic_write_text
from note_universe.vault.repo import NoteRepository

log = logging.getLogger(__name__)


def _dump(notes: list[Note]) -> str:
    return json.dumps([n.to_dict() for n in notes], ensure_ascii=False, indent=2)


def export_notes(repo: NoteRepository) -> str:
    """All notes as a pretty-printed JSON array."""
    return _dump(repo.list())


def export_to_file(repo: NoteRepository, path: Path) -> int:
    notes = repo.list()
    text = _dump(notes)
    try:
        atomic_write_text(Path(path), text, encoding="utf-8")
    except OSError as exc:
        raise StorageError(f"Cannot write export file {path}: {exc}") from exc
    log.info("Exported %d notes to %s", len(notes), path)
    return len(notes)


def parse_import(payload: str | bytes) -> list[dict]:
    """
    Validate a bulk payload before anything is written.

    Raises MalformedImportError unless it is a JSON array of objects.
    """
    try:
        data = json.loads(payload)
    except ValueError as exc:
        raise MalformedImportError(f"Invalid JSON: {exc}") from exc

    if not isinstance(data, list):
        raise MalformedImportError("Invalid format: data must be an array of notes")

    for i, item in enumerate(data):
        if not isinstance(item, dict):
            raise MalformedImportError(f"Invalid format: element {i} is not a note object")
    return data


def import_notes(repo: NoteRepository, payload: str | bytes) -> list[Note]:
    """
    Normalize and store every note of a JSON array.

    Notes are written directly: aliases are not re-resolved here and existing
    notes with the same id are overwritten. Writes are not transactional with
    each other; a storage failure stops the import where it happened.
    """
    docs = parse_import(payload)

    imported: list[Note] = []
    for doc in docs:
        note = normalize_note(doc)
        repo.put(note)
        imported.append(note)

    log.info("Imported %d notes", len(imported))
    return imported


def import_from_file(repo: NoteRepository, path: Path) -> list[Note]:
    try:
        payload = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise StorageError(f"Cannot read import file {path}: {exc}") from exc
    return import_notes(repo, payload)
