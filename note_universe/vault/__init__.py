from .filesystem import atomic_write_text, write_recovery_copy
from .repo import InMemoryNoteRepository, JsonNoteRepository, NoteRepository

__all__ = ["NoteRepository",
           "InMemoryNoteRepository",
           "JsonNoteRepository",
           "atomic_write_text",
           "write_recovery_copy",
           ]
