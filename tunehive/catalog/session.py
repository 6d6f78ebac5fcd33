# tunehive/catalog/session.py
from __future__ import annotations

from typing import List, Optional

from ..config import Settings
from ..models import Song
from ..voice import ClientRecognizer, Recognizer, SearchInput, VoiceSearch
from .query import QueryEngine
from .store import CatalogStore, make_id_policy


class CatalogSession:
    """Everything one editing session works with.

    The store, the query engine, the search box and voice search are
    wired together here; the HTTP layer only talks to this object.
    """

    def __init__(
        self,
        store: Optional[CatalogStore] = None,
        query: Optional[QueryEngine] = None,
        recognizer: Optional[Recognizer] = None,
    ) -> None:
        self.store = store or CatalogStore()
        self.query = query or QueryEngine()
        self.search = SearchInput()
        self.voice = VoiceSearch(self.search, recognizer)

    @classmethod
    def from_settings(cls, settings: Settings) -> "CatalogSession":
        recognizer = ClientRecognizer() if settings.voice_enabled else None
        return cls(
            store=CatalogStore(id_policy=make_id_policy(settings.id_policy)),
            query=QueryEngine(include_genre=settings.search_genre),
            recognizer=recognizer,
        )

    def visible_songs(self, query: Optional[str] = None) -> List[Song]:
        """Songs shown in the table for ``query`` (default: the search box)."""
        q = self.search.query if query is None else query
        return self.query.filter(q, self.store.songs)
