import logging
from unittest.mock import MagicMock

import pytest

from tunehive.errors import RecognitionError, UnsupportedCapabilityError
from tunehive.voice import ClientRecognizer, SearchInput, VoiceSearch


def _voice(recognizer=None):
    search = SearchInput()
    return search, VoiceSearch(search, recognizer)


def test_search_input_lowercases():
    search = SearchInput()
    assert search.set_text("Come FLY") == "come fly"
    assert search.query == "come fly"


def test_unsupported_without_recognizer():
    search, voice = _voice()
    assert not voice.supported
    with pytest.raises(UnsupportedCapabilityError):
        voice.start()
    assert not voice.listening
    assert search.query == ""


def test_start_starts_recognizer():
    recognizer = MagicMock()
    _, voice = _voice(recognizer)
    assert voice.supported
    assert voice.start() is True
    assert voice.listening
    recognizer.start.assert_called_once_with()


def test_second_start_rejected_while_listening():
    recognizer = MagicMock()
    _, voice = _voice(recognizer)
    voice.start()
    assert voice.start() is False
    assert recognizer.start.call_count == 1


def test_result_sets_lowercase_query_and_stops_listening():
    search, voice = _voice(MagicMock())
    voice.start()
    assert voice.on_result("Fly Me To The Moon") == "fly me to the moon"
    assert search.query == "fly me to the moon"
    assert not voice.listening


def test_speech_end_stops_recognizer():
    recognizer = MagicMock()
    _, voice = _voice(recognizer)
    voice.start()
    voice.on_speech_end()
    recognizer.stop.assert_called_once_with()
    assert not voice.listening


def test_error_keeps_query_and_is_logged(caplog):
    search, voice = _voice(MagicMock())
    search.set_text("sinatra")
    voice.start()
    with caplog.at_level(logging.ERROR, logger="tunehive.voice"):
        error = voice.on_error("no-speech")
    assert isinstance(error, RecognitionError)
    assert error.reason == "no-speech"
    assert voice.last_error is error
    assert not voice.listening
    assert search.query == "sinatra"
    assert "no-speech" in caplog.text


def test_can_restart_after_error():
    _, voice = _voice(MagicMock())
    voice.start()
    voice.on_error("network")
    assert voice.start() is True
    assert voice.last_error is None


def test_client_recognizer_tracks_requests():
    recognizer = ClientRecognizer()
    recognizer.start()
    assert recognizer.active
    assert recognizer.requests == 1
    recognizer.stop()
    assert not recognizer.active
