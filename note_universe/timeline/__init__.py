from .builder import (
    SORT_DIRECTIONS,
    SORT_KEYS,
    Relation,
    TimelineEntry,
    TimelineState,
    build_timeline,
    normalize_sort,
    related_notes,
    sort_notes,
)

__all__ = ["SORT_KEYS",
           "SORT_DIRECTIONS",
           "Relation",
           "TimelineState",
           "TimelineEntry",
           "build_timeline",
           "normalize_sort",
           "related_notes",
           "sort_notes",
           ]
