"""
Pydantic request/response models for the catalogue endpoints.

Songs themselves are returned as ``tunehive.models.Song``; the models
here wrap the draft, the search box and voice search state, and the
small bodies the form and the voice client post.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from ..models import Song


class DraftState(BaseModel):
    """The draft in the form together with the edit context.

    ``editing_id`` is ``None`` while composing a new song and holds the
    id of the song being edited otherwise.
    """

    draft: Song
    editing_id: Optional[int] = None


class DraftUpdate(BaseModel):
    """Field-level changes from the form, keyed by field name."""

    fields: Dict[str, Any] = Field(default_factory=dict)


class SearchState(BaseModel):
    query: str = ""


class SearchUpdate(BaseModel):
    text: str = ""


class VoiceState(BaseModel):
    supported: bool
    listening: bool
    last_error: Optional[str] = None


class VoiceResult(BaseModel):
    text: str


class VoiceErrorReport(BaseModel):
    reason: str


class Column(BaseModel):
    header: str
    accessor: str


class SongList(BaseModel):
    """Rows of the result table for ``query``."""

    query: str
    total: int
    items: List[Song]
