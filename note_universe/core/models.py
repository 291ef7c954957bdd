from __future__ import annotations

import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any, Mapping

from note_universe.settings import DEFAULT_COLOR, UNTITLED

from .errors import DuplicateTagError

# document keys owned by Note; anything else is carried through in `extra`
_KNOWN_KEYS = frozenset(
    {"id", "title", "alias", "content", "color", "tags", "links", "createdAt", "updatedAt"}
)


def generate_note_id() -> str:
    return str(uuid.uuid4())


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def timestamp_ms(value: Any) -> float:
    """
    Stored timestamp -> epoch milliseconds.

    Accepts ISO-8601 strings (with or without a trailing Z) and numbers that are
    already epoch milliseconds. Missing or unparseable values map to 0.
    """
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        return float(value)

    text = str(value).strip()
    if not text:
        return 0.0
    if text[-1] in "Zz":
        text = text[:-1] + "+00:00"
    try:
        dt = datetime.fromisoformat(text)
    except ValueError:
        return 0.0
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.timestamp() * 1000.0


def _as_str(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def _as_str_list(value: Any) -> list[str]:
    if not isinstance(value, (list, tuple)):
        return []
    return [_as_str(v) for v in value if v is not None]


@dataclass
class Note:
    id: str = ""
    title: str = ""
    alias: str = ""
    content: str = ""
    color: str = DEFAULT_COLOR
    tags: list[str] = field(default_factory=list)
    links: list[str] = field(default_factory=list)
    created_at: str | None = None
    updated_at: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    @property
    def base_name(self) -> str:
        """Visible name before any disambiguation: alias, then title, then Untitled."""
        return self.alias or self.title or UNTITLED

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Note":
        """
        Lenient parse of a stored or imported document.

        Wrong-typed fields fall back to empty values; id and timestamps are left
        as found (see normalize_note).
        """
        created = data.get("createdAt")
        updated = data.get("updatedAt")
        return cls(
            id=_as_str(data.get("id")),
            title=_as_str(data.get("title")),
            alias=_as_str(data.get("alias")),
            content=_as_str(data.get("content")),
            color=_as_str(data.get("color")) or DEFAULT_COLOR,
            tags=_as_str_list(data.get("tags")),
            links=_as_str_list(data.get("links")),
            created_at=created if created not in (None, "") else None,
            updated_at=updated if updated not in (None, "") else None,
            extra={k: v for k, v in data.items() if k not in _KNOWN_KEYS},
        )

    def to_dict(self) -> dict[str, Any]:
        doc: dict[str, Any] = dict(self.extra)
        doc.update(
            {
                "id": self.id,
                "title": self.title,
                "alias": self.alias,
                "content": self.content,
                "color": self.color,
                "tags": list(self.tags),
                "links": list(self.links),
                "createdAt": self.created_at,
                "updatedAt": self.updated_at,
            }
        )
        return doc


def normalize_note(partial: Note | Mapping[str, Any], *, now: str | None = None) -> Note:
    """
    Produce a complete note ready for storage.

    Generates an id when missing, keeps an existing createdAt (or stamps it),
    always refreshes updatedAt and fills color/links/tags defaults. Never fails.
    """
    note = partial if isinstance(partial, Note) else Note.from_dict(partial)
    now = now or utc_now_iso()

    created = note.created_at or now
    updated = now
    if timestamp_ms(created) > timestamp_ms(updated):
        updated = created

    return replace(
        note,
        id=note.id or generate_note_id(),
        color=note.color or DEFAULT_COLOR,
        tags=list(note.tags or ()),
        links=list(note.links or ()),
        created_at=created,
        updated_at=updated,
        extra=dict(note.extra),
    )


def toggle_link(note: Note, target_id: str) -> Note:
    if target_id in note.links:
        return replace(note, links=[l for l in note.links if l != target_id])
    return replace(note, links=[*note.links, target_id])


def add_tag(note: Note, tag: str) -> Note:
    tag = (tag or "").strip()
    if not tag:
        return note
    folded = tag.casefold()
    if any(t.casefold() == folded for t in note.tags):
        raise DuplicateTagError(tag)
    return replace(note, tags=[*note.tags, tag])


def remove_tag(note: Note, tag: str) -> Note:
    return replace(note, tags=[t for t in note.tags if t != tag])
