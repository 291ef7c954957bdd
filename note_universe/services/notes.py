from __future__ import annotations

import json
import logging
from dataclasses import dataclass, replace
from pathlib import Path

from note_universe.core import models
from note_universe.core.aliases import resolve_alias
from note_universe.core.display import display_names
from note_universe.core.errors import StorageError
from note_universe.core.models import Note, generate_note_id, normalize_note
from note_universe.graph.builder import GraphBuildResult, build_graph_snapshot
from note_universe.settings import RECOVERY_DIR
from note_universe.timeline.builder import TimelineEntry, TimelineState, build_timeline
from note_universe.vault.filesystem import write_recovery_copy
from note_universe.vault.repo import NoteRepository

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Connection:
    note: Note
    name: str
    linked: bool


class NoteService:
    """
    Note use cases on top of a repository.

    Every operation that needs collision or relation context re-reads the
    whole note set first; nothing is cached between calls.
    """

    def __init__(self, repo: NoteRepository, *, recovery_dir: Path = RECOVERY_DIR):
        self.repo = repo
        self.recovery_dir = Path(recovery_dir)

    # ───────────────────────── read side ─────────────────────────

    def load(self, note_id: str) -> Note | None:
        if not note_id:
            return None
        return self.repo.get(note_id)

    def all_notes(self) -> list[Note]:
        return self.repo.list()

    def graph(self) -> GraphBuildResult:
        return build_graph_snapshot(self.all_notes())

    def timeline(self, state: TimelineState | None = None) -> list[TimelineEntry]:
        return build_timeline(self.all_notes(), state)

    def connections(self, note_id: str | None) -> list[Connection]:
        """Link candidates for the note being edited (every other note)."""
        notes = self.all_notes()
        current = next((n for n in notes if n.id == note_id), None)
        linked = set(current.links) if current else set()
        names = display_names(notes, current_id=note_id)
        return [
            Connection(note=n, name=names[n.id], linked=n.id in linked)
            for n in notes
            if n.id != note_id
        ]

    # ───────────────────────── write side ─────────────────────────

    def save(self, note: Note) -> Note:
        """
        Upsert a note: resolve its alias against a fresh universe, fill
        defaults and timestamps, write it. Returns the stored version.
        """
        universe = self.repo.list()
        alias = resolve_alias(note, universe)
        if note.alias and alias != note.alias.strip():
            log.info("Alias %r taken, using %r", note.alias, alias)

        saved = normalize_note(replace(note, alias=alias))
        try:
            self.repo.put(saved)
        except StorageError:
            log.exception("Save failed: id=%s", saved.id)
            self._write_recovery(saved)
            raise

        log.info("Saved note id=%s alias=%r", saved.id, saved.alias)
        return saved

    def delete(self, note_id: str) -> bool:
        """Remove one note. Links pointing at it are left as they are."""
        if self.repo.get(note_id) is None:
            return False
        self.repo.delete(note_id)
        log.info("Deleted note id=%s", note_id)
        return True

    def toggle_link(self, note_id: str, target_id: str) -> Note | None:
        note = self.load(note_id)
        if note is None:
            return None
        return self.save(models.toggle_link(note, target_id))

    def add_tag(self, note_id: str, tag: str) -> Note | None:
        note = self.load(note_id)
        if note is None:
            return None
        return self.save(models.add_tag(note, tag))

    def remove_tag(self, note_id: str, tag: str) -> Note | None:
        note = self.load(note_id)
        if note is None:
            return None
        return self.save(models.remove_tag(note, tag))

    def seed(self) -> list[Note]:
        """Write a small starter graph when the repository is empty."""
        if self.repo.list():
            return []

        root_id = generate_note_id()
        child1_id = generate_note_id()
        child2_id = generate_note_id()

        seeded = [
            self.save(Note(
                id=root_id,
                title="Welcome to Note Universe",
                content="This is the start of your journey. **Drag me!**",
                color="#ff0055",
                links=[child1_id, child2_id],
            )),
            self.save(Note(
                id=child1_id,
                title="Visualization",
                content="We use force-directed graphs.",
                color="#00ccff",
            )),
            self.save(Note(
                id=child2_id,
                title="Time Travel",
                content="Check the timeline view.",
                color="#00ffaa",
            )),
        ]
        log.info("Database seeded with %d notes", len(seeded))
        return seeded

    # ───────────────────────── internals ─────────────────────────

    def _write_recovery(self, note: Note) -> None:
        text = json.dumps(note.to_dict(), ensure_ascii=False, indent=2)
        try:
            path = write_recovery_copy(note.id, text, recovery_dir=self.recovery_dir)
        except OSError:
            log.exception("Recovery copy failed too: id=%s", note.id)
            return
        log.warning("Recovery copy written: %s", path)
