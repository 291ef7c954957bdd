from .core import Note, normalize_note, resolve_alias
from .graph import build_graph_snapshot
from .services import NoteService
from .timeline import TimelineState, build_timeline
from .vault import InMemoryNoteRepository, JsonNoteRepository

__all__ = ["Note",
           "normalize_note",
           "resolve_alias",
           "build_graph_snapshot",
           "build_timeline",
           "TimelineState",
           "NoteService",
           "InMemoryNoteRepository",
           "JsonNoteRepository",
           ]
