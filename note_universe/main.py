from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from note_universe.core.display import display_names
from note_universe.core.errors import DuplicateTagError, MalformedImportError, StorageError
from note_universe.core.models import Note, add_tag
from note_universe.logging_setup import install_global_exception_hooks, log, setup_logging
from note_universe.preferences import Preferences, open_settings
from note_universe.services.exchange import export_notes, export_to_file, import_from_file
from note_universe.services.notes import NoteService
from note_universe.settings import EXPORT_FILENAME
from note_universe.timeline.builder import SORT_DIRECTIONS, SORT_KEYS, TimelineState
from note_universe.vault.repo import JsonNoteRepository

EXIT_OK = 0
EXIT_NOT_FOUND = 1
EXIT_FAILED = 2


def _print_json(data) -> None:
    print(json.dumps(data, ensure_ascii=False, indent=2))


def _not_found(note_id: str) -> int:
    print(f"Note not found: {note_id}", file=sys.stderr)
    return EXIT_NOT_FOUND


# ───────────────────────── commands ─────────────────────────

def cmd_seed(service: NoteService, prefs: Preferences, args) -> int:
    seeded = service.seed()
    print(f"Seeded {len(seeded)} notes" if seeded else "Repository not empty, nothing seeded")
    return EXIT_OK


def cmd_list(service: NoteService, prefs: Preferences, args) -> int:
    notes = service.all_notes()
    names = display_names(notes)
    for n in sorted(notes, key=lambda n: names[n.id].casefold()):
        print(f"{n.id}\t{names[n.id]}")
    return EXIT_OK


def cmd_show(service: NoteService, prefs: Preferences, args) -> int:
    note = service.load(args.id)
    if note is None:
        return _not_found(args.id)
    _print_json(note.to_dict())
    return EXIT_OK


def cmd_save(service: NoteService, prefs: Preferences, args) -> int:
    note = service.load(args.id) if args.id else None
    if note is None:
        note = Note(id=args.id or "")

    for field in ("title", "alias", "content", "color"):
        value = getattr(args, field)
        if value is not None:
            setattr(note, field, value)
    if args.link is not None:
        note.links = list(args.link)
    if args.tag is not None:
        note.tags = []
        for tag in args.tag:
            note = add_tag(note, tag)

    _print_json(service.save(note).to_dict())
    return EXIT_OK


def cmd_delete(service: NoteService, prefs: Preferences, args) -> int:
    if not service.delete(args.id):
        return _not_found(args.id)
    print(args.id)
    return EXIT_OK


def cmd_link(service: NoteService, prefs: Preferences, args) -> int:
    note = service.toggle_link(args.source, args.target)
    if note is None:
        return _not_found(args.source)
    state = "linked" if args.target in note.links else "unlinked"
    print(f"{state}: {args.source} -> {args.target}")
    return EXIT_OK


def cmd_tag(service: NoteService, prefs: Preferences, args) -> int:
    note = service.remove_tag(args.id, args.tag) if args.remove else service.add_tag(args.id, args.tag)
    if note is None:
        return _not_found(args.id)
    print(", ".join(note.tags))
    return EXIT_OK


def cmd_connections(service: NoteService, prefs: Preferences, args) -> int:
    if service.load(args.id) is None:
        return _not_found(args.id)
    for c in service.connections(args.id):
        print(f"[{'x' if c.linked else ' '}] {c.note.id}\t{c.name}")
    return EXIT_OK


def cmd_graph(service: NoteService, prefs: Preferences, args) -> int:
    _print_json(service.graph().to_payload())
    return EXIT_OK


def cmd_timeline(service: NoteService, prefs: Preferences, args) -> int:
    sort_key, sort_direction = prefs.timeline_sort()
    if args.sort or args.order:
        sort_key = args.sort or sort_key
        sort_direction = args.order or sort_direction
        prefs.set_timeline_sort(sort_key, sort_direction)
        prefs.sync()

    state = TimelineState(focus_id=args.focus, sort_key=sort_key, sort_direction=sort_direction)
    _print_json([e.to_dict() for e in service.timeline(state)])
    return EXIT_OK


def cmd_export(service: NoteService, prefs: Preferences, args) -> int:
    if args.path is None:
        print(export_notes(service.repo))
        return EXIT_OK
    count = export_to_file(service.repo, args.path)
    print(f"Exported {count} notes to {args.path}")
    return EXIT_OK


def cmd_import(service: NoteService, prefs: Preferences, args) -> int:
    imported = import_from_file(service.repo, args.path)
    print(f"Imported {len(imported)} notes")
    return EXIT_OK


# ───────────────────────── parser ─────────────────────────

def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="note-universe", description="Personal note graph")
    p.add_argument("--data", type=Path, default=None, help="Notes directory (remembered)")
    p.add_argument("--config", type=Path, default=None, help="INI settings file")
    p.add_argument("-v", "--verbose", action="store_true", help="Log INFO to the console")

    sub = p.add_subparsers(dest="command", required=True)

    sub.add_parser("seed", help="Create demo notes in an empty repository").set_defaults(handler=cmd_seed)
    sub.add_parser("list", help="List notes by display name").set_defaults(handler=cmd_list)

    sp = sub.add_parser("show", help="Print one note as JSON")
    sp.add_argument("id")
    sp.set_defaults(handler=cmd_show)

    sp = sub.add_parser("save", help="Create or update a note")
    sp.add_argument("--id")
    sp.add_argument("--title")
    sp.add_argument("--alias")
    sp.add_argument("--content")
    sp.add_argument("--color")
    sp.add_argument("--tag", action="append", help="Replace tags (repeatable)")
    sp.add_argument("--link", action="append", help="Replace links (repeatable)")
    sp.set_defaults(handler=cmd_save)

    sp = sub.add_parser("delete", help="Delete a note")
    sp.add_argument("id")
    sp.set_defaults(handler=cmd_delete)

    sp = sub.add_parser("link", help="Toggle a link between two notes")
    sp.add_argument("source")
    sp.add_argument("target")
    sp.set_defaults(handler=cmd_link)

    sp = sub.add_parser("tag", help="Add (or --remove) a tag")
    sp.add_argument("id")
    sp.add_argument("tag")
    sp.add_argument("--remove", action="store_true")
    sp.set_defaults(handler=cmd_tag)

    sp = sub.add_parser("connections", help="Link candidates for a note")
    sp.add_argument("id")
    sp.set_defaults(handler=cmd_connections)

    sub.add_parser("graph", help="Print graph nodes/edges as JSON").set_defaults(handler=cmd_graph)

    sp = sub.add_parser("timeline", help="Print the timeline as JSON")
    sp.add_argument("--focus")
    sp.add_argument("--sort", choices=SORT_KEYS)
    sp.add_argument("--order", choices=SORT_DIRECTIONS)
    sp.set_defaults(handler=cmd_timeline)

    sp = sub.add_parser("export", help=f"Export all notes (e.g. {EXPORT_FILENAME})")
    sp.add_argument("path", nargs="?", type=Path)
    sp.set_defaults(handler=cmd_export)

    sp = sub.add_parser("import", help="Import a JSON array of notes")
    sp.add_argument("path", type=Path)
    sp.set_defaults(handler=cmd_import)

    return p


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    setup_logging(console_level=logging.INFO if args.verbose else logging.WARNING)
    install_global_exception_hooks()

    prefs = Preferences(open_settings(args.config))
    if args.data is not None:
        prefs.set_data_dir(args.data)
        prefs.sync()
    data_dir = args.data or prefs.data_dir()

    try:
        repo = JsonNoteRepository(data_dir)
        repo.ensure()
        service = NoteService(repo)
        return args.handler(service, prefs, args)
    except DuplicateTagError as exc:
        print(str(exc), file=sys.stderr)
        return EXIT_NOT_FOUND
    except (StorageError, MalformedImportError) as exc:
        log.error("%s failed: %s", args.command, exc)
        print(f"Error: {exc}", file=sys.stderr)
        return EXIT_FAILED


if __name__ == "__main__":
    raise SystemExit(main())
