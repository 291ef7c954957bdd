import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from note_universe.core.aliases import alias_taken, base_alias, resolve_alias
from note_universe.core.models import Note


def test_base_alias_fallbacks():
    assert base_alias(Note(alias="  Key  ", title="Title")) == "Key"
    assert base_alias(Note(alias="   ", title="  Title ")) == "Title"
    assert base_alias(Note(alias="", title="  ")) == "Untitled"


def test_no_collision_keeps_base():
    universe = [Note(id="1", alias="Other")]
    assert resolve_alias(Note(id="2", title="X"), universe) == "X"


def test_single_collision_gets_first_suffix():
    universe = [Note(id="1", alias="X")]
    assert resolve_alias(Note(id="2", title="X"), universe) == "X (1)"


def test_probing_skips_taken_suffixes():
    universe = [Note(id="1", alias="X"), Note(id="2", alias="X (1)")]
    assert resolve_alias(Note(id="3", alias="X"), universe) == "X (2)"


def test_title_counts_only_when_alias_empty():
    universe = [Note(id="1", title="X"), Note(id="2", alias="Y", title="Z")]
    assert resolve_alias(Note(id="3", title="X"), universe) == "X (1)"
    assert resolve_alias(Note(id="3", title="Z"), universe) == "Z"


def test_own_entry_is_ignored():
    universe = [Note(id="1", alias="X")]
    assert resolve_alias(Note(id="1", alias="X"), universe) == "X"


def test_new_note_without_id_collides():
    universe = [Note(id="1", alias="X")]
    assert resolve_alias(Note(title="X"), universe) == "X (1)"


def test_comparison_is_case_sensitive():
    universe = [Note(id="1", alias="x")]
    assert not alias_taken("X", note_id="2", universe=universe)
    assert resolve_alias(Note(id="2", title="X"), universe) == "X"


def test_untitled_notes_are_numbered():
    universe = [Note(id="1", alias="Untitled")]
    assert resolve_alias(Note(id="2"), universe) == "Untitled (1)"


def test_accepts_iterator_universe():
    universe = iter([Note(id="1", alias="X"), Note(id="2", alias="X (1)")])
    assert resolve_alias(Note(id="3", title="X"), universe) == "X (2)"
