from .aliases import resolve_alias
from .display import display_names
from .errors import DuplicateTagError, MalformedImportError, NoteUniverseError, StorageError
from .links import dangling_links, iter_edges, valid_links
from .models import Note, add_tag, normalize_note, remove_tag, toggle_link

__all__ = ["Note",
           "normalize_note",
           "toggle_link",
           "add_tag",
           "remove_tag",
           "resolve_alias",
           "valid_links",
           "dangling_links",
           "iter_edges",
           "display_names",
           "NoteUniverseError",
           "StorageError",
           "MalformedImportError",
           "DuplicateTagError",
           ]
