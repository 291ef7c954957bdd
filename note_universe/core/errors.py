from __future__ import annotations


class NoteUniverseError(Exception):
    """Base class for errors surfaced to the caller."""


class StorageError(NoteUniverseError):
    """The note repository could not be read or written."""


class MalformedImportError(NoteUniverseError, ValueError):
    """A bulk import payload is not a JSON array of note objects."""


class DuplicateTagError(NoteUniverseError, ValueError):
    def __init__(self, tag: str):
        super().__init__(f"Tag already exists: {tag!r}")
        self.tag = tag
