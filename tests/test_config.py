import pytest
from pydantic import ValidationError

from tunehive.catalog.query import QueryEngine
from tunehive.catalog.session import CatalogSession
from tunehive.config import Settings, load_settings
from tunehive.models import Song


def test_defaults():
    settings = load_settings({})
    assert settings.id_policy == "length"
    assert settings.search_genre is False
    assert settings.voice_enabled is True
    assert settings.log_level == "INFO"


def test_reads_prefixed_environment():
    settings = load_settings({
        "TUNEHIVE_ID_POLICY": "Monotonic",
        "TUNEHIVE_SEARCH_GENRE": "true",
        "TUNEHIVE_VOICE_ENABLED": "0",
        "TUNEHIVE_LOG_LEVEL": "debug",
        "ID_POLICY": "ignored",
    })
    assert settings.id_policy == "monotonic"
    assert settings.search_genre is True
    assert settings.voice_enabled is False
    assert settings.log_level == "DEBUG"


def test_rejects_unknown_policy():
    with pytest.raises(ValidationError):
        load_settings({"TUNEHIVE_ID_POLICY": "random"})


def test_rejects_unknown_log_level():
    with pytest.raises(ValidationError):
        Settings(log_level="chatty")


def test_session_from_settings():
    session = CatalogSession.from_settings(
        Settings(id_policy="monotonic", search_genre=True, voice_enabled=False)
    )
    for title in ("A", "B"):
        session.store.submit(Song(title=title, artist="X"))
    session.store.delete(1)
    assert session.store.submit(Song(title="C", artist="X")).id == 3
    assert "genre" in session.query.fields
    assert not session.voice.supported


def test_session_visible_songs_uses_search_box():
    session = CatalogSession(query=QueryEngine())
    session.store.submit(Song(title="Fly Me to the Moon", artist="Sinatra"))
    session.store.submit(Song(title="So What", artist="Miles Davis"))
    assert len(session.visible_songs()) == 2
    session.search.set_text("MILES")
    assert [s.title for s in session.visible_songs()] == ["So What"]
    assert [s.title for s in session.visible_songs("fly")] == ["Fly Me to the Moon"]
