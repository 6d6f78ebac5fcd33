"""
Route definitions for the catalogue API.

Endpoints under /api/catalog:
- GET    /songs               : table rows filtered by the search text
- GET    /songs/{song_id}     : one song
- DELETE /songs/{song_id}     : delete a song (idempotent)
- POST   /songs/{song_id}/edit: load a song into the draft for editing
- GET    /draft               : current draft and edit context
- POST   /draft               : start a new, empty draft
- PATCH  /draft               : change draft fields
- PUT    /draft/files/{field} : attach an audio file or cover image
- DELETE /draft/files/{field} : remove an attachment from the draft
- POST   /draft/submit        : add the draft or save the edit
- GET    /columns             : result table columns
- GET    /search, PUT /search : search box text
- GET    /voice, POST /voice/*: voice search state and signals
"""

from __future__ import annotations

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, File, HTTPException, Query, Request, Response, UploadFile

from ..errors import NotFoundError, UnknownFieldError, UnsupportedCapabilityError, ValidationError
from ..models import FILE_FIELDS, TABLE_COLUMNS, Attachment, Song, resolve_field
from .schemas import (
    Column,
    DraftState,
    DraftUpdate,
    SearchState,
    SearchUpdate,
    SongList,
    VoiceErrorReport,
    VoiceResult,
    VoiceState,
)
from .session import CatalogSession


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/catalog", tags=["catalog"])


def get_session(request: Request) -> CatalogSession:
    return request.app.state.session


def _draft_state(session: CatalogSession) -> DraftState:
    return DraftState(draft=session.store.draft, editing_id=session.store.editing_id)


def _voice_state(session: CatalogSession) -> VoiceState:
    error = session.voice.last_error
    return VoiceState(
        supported=session.voice.supported,
        listening=session.voice.listening,
        last_error=error.reason if error else None,
    )


def _file_attr(field: str) -> str:
    resolved = resolve_field(field)
    if resolved is None or resolved[0] not in FILE_FIELDS.values():
        raise HTTPException(status_code=404, detail=f"Unknown file field: {field}")
    return resolved[0]


# ---------------------------------------------------------------------------
# Songs (the result table)


@router.get("/songs", response_model=SongList)
def list_songs(
    q: Optional[str] = Query(default=None, description="Search text (title/artist/album/lyrics/year)"),
    session: CatalogSession = Depends(get_session),
) -> SongList:
    """
    Returns the rows of the result table.

    ``q`` is lowercased like the search box does; when it is omitted the
    current search box text is used.
    """
    query = session.search.query if q is None else q.lower()
    items = session.visible_songs(query)
    return SongList(query=query, total=len(items), items=items)


@router.get("/songs/{song_id}", response_model=Song)
def get_song(song_id: int, session: CatalogSession = Depends(get_session)) -> Song:
    try:
        return session.store.get(song_id)
    except NotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc))


@router.delete("/songs/{song_id}", status_code=204)
def delete_song(song_id: int, session: CatalogSession = Depends(get_session)) -> Response:
    session.store.delete(song_id)
    return Response(status_code=204)


@router.post("/songs/{song_id}/edit", response_model=DraftState)
def edit_song(song_id: int, session: CatalogSession = Depends(get_session)) -> DraftState:
    try:
        session.store.start_edit(song_id)
    except NotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    return _draft_state(session)


@router.get("/columns", response_model=List[Column])
def list_columns() -> List[Column]:
    return [Column(**c) for c in TABLE_COLUMNS]


# ---------------------------------------------------------------------------
# Draft (the form)


@router.get("/draft", response_model=DraftState)
def get_draft(session: CatalogSession = Depends(get_session)) -> DraftState:
    return _draft_state(session)


@router.post("/draft", response_model=DraftState)
def new_draft(session: CatalogSession = Depends(get_session)) -> DraftState:
    session.store.start_create()
    return _draft_state(session)


@router.patch("/draft", response_model=DraftState)
def update_draft(update: DraftUpdate, session: CatalogSession = Depends(get_session)) -> DraftState:
    """Apply field changes from the form.

    Attachments go through ``/draft/files/{field}``; sending a file
    field here is only accepted with ``null`` to clear it.
    """
    try:
        session.store.update_draft_fields(update.fields)
    except (UnknownFieldError, TypeError) as exc:
        raise HTTPException(status_code=422, detail=str(exc))
    return _draft_state(session)


@router.put("/draft/files/{field}", response_model=DraftState)
async def upload_draft_file(
    field: str,
    file: UploadFile = File(...),
    session: CatalogSession = Depends(get_session),
) -> DraftState:
    attr = _file_attr(field)
    data = await file.read()
    attachment = Attachment(
        filename=file.filename or "",
        content_type=file.content_type or "",
        size=len(data),
        data=data,
    )
    session.store.update_draft_field(attr, attachment)
    logger.debug("Attached %s (%d bytes) as %s", attachment.filename, attachment.size, attr)
    return _draft_state(session)


@router.delete("/draft/files/{field}", response_model=DraftState)
def clear_draft_file(field: str, session: CatalogSession = Depends(get_session)) -> DraftState:
    session.store.update_draft_field(_file_attr(field), None)
    return _draft_state(session)


@router.post("/draft/submit", response_model=Song)
def submit_draft(session: CatalogSession = Depends(get_session)) -> Song:
    try:
        return session.store.submit()
    except ValidationError as exc:
        raise HTTPException(status_code=422, detail=str(exc))
    except NotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc))


# ---------------------------------------------------------------------------
# Search box and voice search


@router.get("/search", response_model=SearchState)
def get_search(session: CatalogSession = Depends(get_session)) -> SearchState:
    return SearchState(query=session.search.query)


@router.put("/search", response_model=SearchState)
def set_search(update: SearchUpdate, session: CatalogSession = Depends(get_session)) -> SearchState:
    return SearchState(query=session.search.set_text(update.text))


@router.get("/voice", response_model=VoiceState)
def get_voice(session: CatalogSession = Depends(get_session)) -> VoiceState:
    return _voice_state(session)


@router.post("/voice/start", response_model=VoiceState)
def start_voice(session: CatalogSession = Depends(get_session)) -> VoiceState:
    try:
        started = session.voice.start()
    except UnsupportedCapabilityError as exc:
        raise HTTPException(status_code=501, detail=str(exc))
    if not started:
        raise HTTPException(status_code=409, detail="Already listening.")
    return _voice_state(session)


@router.post("/voice/result", response_model=SearchState)
def voice_result(result: VoiceResult, session: CatalogSession = Depends(get_session)) -> SearchState:
    return SearchState(query=session.voice.on_result(result.text))


@router.post("/voice/speech-end", response_model=VoiceState)
def voice_speech_end(session: CatalogSession = Depends(get_session)) -> VoiceState:
    session.voice.on_speech_end()
    return _voice_state(session)


@router.post("/voice/error", response_model=VoiceState)
def voice_error(report: VoiceErrorReport, session: CatalogSession = Depends(get_session)) -> VoiceState:
    session.voice.on_error(report.reason)
    return _voice_state(session)
