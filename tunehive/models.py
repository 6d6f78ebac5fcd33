# tunehive/models.py
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class Attachment(BaseModel):
    """An opaque file handle picked in the form (audio file or cover image).

    The content is never inspected. ``data`` holds the raw bytes and is
    left out of JSON output; clients only see the file name, type and size.
    """

    filename: str = ""
    content_type: str = ""
    size: int = 0
    data: bytes = Field(default=b"", exclude=True, repr=False)


class Song(BaseModel):
    """One catalogue entry, also used as the draft being composed.

    ``id`` is 0 on a draft and is always assigned by the store. JSON uses
    the camelCase names of the web form (``releaseYear``, ``trackNumber``,
    ``audioFile``, ``coverImage``).
    """

    model_config = ConfigDict(populate_by_name=True)

    id: int = 0
    title: str = ""
    artist: str = ""
    album: str = ""
    release_year: str = Field(default="", alias="releaseYear")
    genre: str = ""
    duration: str = ""
    track_number: str = Field(default="", alias="trackNumber")
    lyrics: str = ""
    tags: str = ""
    audio_file: Optional[Attachment] = Field(default=None, alias="audioFile")
    cover_image: Optional[Attachment] = Field(default=None, alias="coverImage")


# Draft fields by wire name -> attribute. This is the only place the
# editable fields are enumerated.
TEXT_FIELDS: Dict[str, str] = {
    "title": "title",
    "artist": "artist",
    "album": "album",
    "releaseYear": "release_year",
    "genre": "genre",
    "duration": "duration",
    "trackNumber": "track_number",
    "lyrics": "lyrics",
    "tags": "tags",
}

FILE_FIELDS: Dict[str, str] = {
    "audioFile": "audio_file",
    "coverImage": "cover_image",
}

REQUIRED_FIELDS = ("title", "artist")

# Result table columns as (header, accessor).
TABLE_COLUMNS: List[Dict[str, str]] = [
    {"header": "Title", "accessor": "title"},
    {"header": "Artist", "accessor": "artist"},
    {"header": "Album", "accessor": "album"},
    {"header": "Release Year", "accessor": "releaseYear"},
    {"header": "Genre", "accessor": "genre"},
    {"header": "Duration", "accessor": "duration"},
    {"header": "Track Number", "accessor": "trackNumber"},
    {"header": "Lyrics", "accessor": "lyrics"},
]


def empty_draft() -> Song:
    return Song()


def _set_text(song: Song, attr: str, value: Any) -> None:
    setattr(song, attr, "" if value is None else str(value))


def _set_file(song: Song, attr: str, value: Any) -> None:
    if value is not None and not isinstance(value, Attachment):
        raise TypeError(f"{attr} expects an Attachment or None, got {type(value).__name__}")
    setattr(song, attr, value)


def resolve_field(name: str):
    """Return ``(attribute, setter)`` for a draft field, or ``None``.

    Both the wire name (``releaseYear``) and the attribute name
    (``release_year``) are accepted.
    """
    for table, setter in ((TEXT_FIELDS, _set_text), (FILE_FIELDS, _set_file)):
        if name in table:
            return table[name], setter
        if name in table.values():
            return name, setter
    return None
