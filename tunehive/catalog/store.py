"""
In-memory store for the song catalogue.

``CatalogStore`` owns the ordered list of songs, the draft being
composed in the form and the edit context (the id of the song being
edited, or ``None`` when the draft is a new song). Its methods are the
only way to mutate any of these; callers always receive copies.

Ids are assigned by an id policy. The default ``length`` policy is the
one the catalogue has always used: a new song gets ``len(songs) + 1``.
That value can collide with a surviving song after a delete (create A
and B, delete A, the next song gets B's id). The ``monotonic`` policy
never reuses an id and must be selected explicitly through
configuration.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple, Type

from typing_extensions import Protocol

from ..errors import NotFoundError, UnknownFieldError, ValidationError
from ..models import REQUIRED_FIELDS, Song, empty_draft, resolve_field


logger = logging.getLogger(__name__)

Snapshot = Tuple[Song, ...]
Listener = Callable[[Snapshot], None]


class IdPolicy(Protocol):
    name: str

    def next_id(self, songs: List[Song]) -> int: ...


class LengthIdPolicy:
    """New id = current collection length + 1."""

    name = "length"

    def next_id(self, songs: List[Song]) -> int:
        return len(songs) + 1


class MonotonicIdPolicy:
    """New id = highest id ever issued + 1, so ids are never reused."""

    name = "monotonic"

    def __init__(self) -> None:
        self._last = 0

    def next_id(self, songs: List[Song]) -> int:
        self._last = max([self._last] + [s.id for s in songs]) + 1
        return self._last


ID_POLICIES: Dict[str, Type[IdPolicy]] = {
    LengthIdPolicy.name: LengthIdPolicy,
    MonotonicIdPolicy.name: MonotonicIdPolicy,
}


def make_id_policy(name: str) -> IdPolicy:
    try:
        return ID_POLICIES[name]()
    except KeyError:
        raise ValueError(f"Unknown id policy: {name}") from None


class CatalogStore:
    def __init__(self, id_policy: Optional[IdPolicy] = None) -> None:
        self._songs: List[Song] = []
        self._draft: Song = empty_draft()
        self._editing_id: Optional[int] = None
        self._id_policy: IdPolicy = id_policy or LengthIdPolicy()
        self._listeners: List[Listener] = []

    # ------------------------------------------------------------------
    # Read access

    @property
    def songs(self) -> Snapshot:
        return self.snapshot()

    def snapshot(self) -> Snapshot:
        return tuple(s.model_copy(deep=True) for s in self._songs)

    @property
    def draft(self) -> Song:
        return self._draft.model_copy(deep=True)

    @property
    def editing_id(self) -> Optional[int]:
        return self._editing_id

    @property
    def is_editing(self) -> bool:
        return self._editing_id is not None

    def __len__(self) -> int:
        return len(self._songs)

    def _index_of(self, song_id: int) -> Optional[int]:
        for i, song in enumerate(self._songs):
            if song.id == song_id:
                return i
        return None

    def get(self, song_id: int) -> Song:
        idx = self._index_of(song_id)
        if idx is None:
            raise NotFoundError(song_id)
        return self._songs[idx].model_copy(deep=True)

    # ------------------------------------------------------------------
    # Subscriptions

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call ``listener`` with a fresh snapshot after every mutation.

        Returns a function that removes the listener again.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        if not self._listeners:
            return
        snap = self.snapshot()
        for listener in list(self._listeners):
            listener(snap)

    # ------------------------------------------------------------------
    # Draft handling

    def start_create(self) -> None:
        self._editing_id = None
        self._draft = empty_draft()

    def start_edit(self, song_id: int) -> Song:
        """Load an existing song into the draft and enter edit mode.

        Raises ``NotFoundError`` without touching the draft when the id
        is not in the collection.
        """
        song = self.get(song_id)
        self._draft = song
        self._editing_id = song_id
        logger.debug("Editing song %s", song_id)
        return song.model_copy(deep=True)

    def update_draft_field(self, field: str, value: Any) -> None:
        resolved = resolve_field(field)
        if resolved is None:
            raise UnknownFieldError(field)
        attr, setter = resolved
        setter(self._draft, attr, value)

    def update_draft_fields(self, fields: Mapping[str, Any]) -> None:
        """Set several draft fields at once.

        Either every field is applied or, when one of them is unknown
        (``UnknownFieldError``) or of the wrong type (``TypeError``),
        none is.
        """
        staged = self._draft.model_copy(deep=True)
        for field, value in fields.items():
            resolved = resolve_field(field)
            if resolved is None:
                raise UnknownFieldError(field)
            attr, setter = resolved
            setter(staged, attr, value)
        self._draft = staged

    # ------------------------------------------------------------------
    # Mutations

    def submit(self, draft: Optional[Song] = None) -> Song:
        """Commit the draft as a new song or as the edit in progress.

        Parameters
        ----------
        draft : Optional[Song]
            When given, replaces the store's draft before submitting.

        Returns
        -------
        Song
            A copy of the stored song.

        Raises
        ------
        ValidationError
            If the title or the artist is empty. The collection, the
            draft and the edit context are left as they were so the
            form can be corrected.
        NotFoundError
            If the song being edited was deleted in the meantime. Nothing
            changes; ``start_create()`` discards the edit.
        """
        if draft is not None:
            self._draft = draft.model_copy(deep=True)

        missing = [f for f in REQUIRED_FIELDS if not getattr(self._draft, f)]
        if missing:
            logger.warning("Rejected submit, missing %s", ", ".join(missing))
            raise ValidationError(missing)

        if self._editing_id is not None:
            if self._index_of(self._editing_id) is None:
                raise NotFoundError(self._editing_id)
            stored = self._draft.model_copy(deep=True, update={"id": self._editing_id})
            # Every song carrying the id is replaced in place; the length
            # id policy can leave more than one.
            self._songs = [
                stored.model_copy(deep=True) if s.id == stored.id else s
                for s in self._songs
            ]
            self._editing_id = None
            logger.info("Updated song %s (%s - %s)", stored.id, stored.artist, stored.title)
        else:
            new_id = self._id_policy.next_id(self._songs)
            stored = self._draft.model_copy(deep=True, update={"id": new_id})
            self._songs.append(stored)
            logger.info("Added song %s (%s - %s)", stored.id, stored.artist, stored.title)

        self._draft = empty_draft()
        self._notify()
        return stored.model_copy(deep=True)

    def delete(self, song_id: int) -> bool:
        """Remove the song with ``song_id``. Missing ids are ignored."""
        before = len(self._songs)
        self._songs = [s for s in self._songs if s.id != song_id]
        removed = len(self._songs) != before
        if removed:
            logger.info("Deleted song %s", song_id)
            self._notify()
        return removed
