"""
Free-text filtering of the song table.

The query is expected in lowercase already (the search box lowercases
what the user types or dictates). A song matches when any searchable
field contains the query as a plain substring; the result keeps the
collection order.
"""

from __future__ import annotations

from typing import Iterable, List, Sequence

from ..models import Song

DEFAULT_FIELDS = ("title", "artist", "album", "lyrics", "release_year")


class QueryEngine:
    def __init__(self, include_genre: bool = False) -> None:
        fields = list(DEFAULT_FIELDS)
        if include_genre:
            fields.append("genre")
        self.fields: Sequence[str] = tuple(fields)

    def matches(self, song: Song, query: str) -> bool:
        return any(query in (getattr(song, f) or "").lower() for f in self.fields)

    def filter(self, query: str, collection: Iterable[Song]) -> List[Song]:
        if not query:
            return list(collection)
        return [s for s in collection if self.matches(s, query)]
