from __future__ import annotations

import copy
import json
import logging
from dataclasses import dataclass
from pathlib import Path

from note_universe.core.errors import StorageError
from note_universe.core.models import Note

from .filesystem import atomic_write_text, id_to_filename

log = logging.getLogger(__name__)


class NoteRepository:
    """
    Key-value store of notes keyed by id.

    `put` is a full-document upsert; `delete` of a missing id is a no-op;
    `list` makes no ordering promise.
    """

    def get(self, note_id: str) -> Note | None:
        raise NotImplementedError

    def put(self, note: Note) -> None:
        raise NotImplementedError

    def delete(self, note_id: str) -> None:
        raise NotImplementedError

    def list(self) -> list[Note]:
        raise NotImplementedError


def _require_id(note: Note) -> str:
    if not note.id:
        raise ValueError("put(): note has no id; normalize it first")
    return note.id


class InMemoryNoteRepository(NoteRepository):
    """Dict-backed store. Stores and hands out copies, never shared objects."""

    def __init__(self, notes: list[Note] | None = None) -> None:
        self._docs: dict[str, dict] = {}
        for note in notes or ():
            self.put(note)

    def get(self, note_id: str) -> Note | None:
        doc = self._docs.get(note_id)
        return Note.from_dict(copy.deepcopy(doc)) if doc is not None else None

    def put(self, note: Note) -> None:
        self._docs[_require_id(note)] = copy.deepcopy(note.to_dict())

    def delete(self, note_id: str) -> None:
        self._docs.pop(note_id, None)

    def list(self) -> list[Note]:
        return [Note.from_dict(copy.deepcopy(doc)) for doc in self._docs.values()]


@dataclass(frozen=True)
class JsonNoteRepository(NoteRepository):
    """One JSON document per note: <notes_dir>/<sha256 of id>.json"""

    notes_dir: Path

    def ensure(self) -> None:
        try:
            self.notes_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise StorageError(f"Cannot create notes directory {self.notes_dir}: {exc}") from exc

    def note_path(self, note_id: str) -> Path:
        return self.notes_dir / id_to_filename(note_id)

    def _read(self, path: Path) -> Note:
        doc = json.loads(path.read_text(encoding="utf-8"))
        if not isinstance(doc, dict):
            raise ValueError(f"expected a JSON object, got {type(doc).__name__}")
        return Note.from_dict(doc)

    def get(self, note_id: str) -> Note | None:
        try:
            return self._read(self.note_path(note_id))
        except FileNotFoundError:
            return None
        except (OSError, ValueError) as exc:
            raise StorageError(f"Cannot read note {note_id!r}: {exc}") from exc

    def put(self, note: Note) -> None:
        path = self.note_path(_require_id(note))
        text = json.dumps(note.to_dict(), ensure_ascii=False, indent=2)
        try:
            atomic_write_text(path, text, encoding="utf-8")
        except OSError as exc:
            raise StorageError(f"Cannot write note {note.id!r}: {exc}") from exc

    def delete(self, note_id: str) -> None:
        try:
            self.note_path(note_id).unlink(missing_ok=True)
        except OSError as exc:
            raise StorageError(f"Cannot delete note {note_id!r}: {exc}") from exc

    def list(self) -> list[Note]:
        if not self.notes_dir.is_dir():
            return []
        notes: list[Note] = []
        for path in sorted(self.notes_dir.glob("*.json")):
            try:
                notes.append(self._read(path))
            except (OSError, ValueError):
                # corrupted / unreadable note -> skip, keep the rest usable
                log.warning("Skipping unreadable note file: %s", path, exc_info=True)
                continue
        return notes
