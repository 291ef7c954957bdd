from .exchange import export_notes, export_to_file, import_from_file, import_notes
from .notes import Connection, NoteService

__all__ = ["NoteService",
           "Connection",
           "export_notes",
           "export_to_file",
           "import_notes",
           "import_from_file",
           ]
