"""
Search box state and voice search.

Speech recognition is an injected capability. ``VoiceSearch`` is built
with a recognizer, or with ``None`` on platforms that have none; in the
latter case ``start()`` raises ``UnsupportedCapabilityError`` and the
caller shows an "unsupported" notice. Recognition results arrive later
through ``on_result``, ``on_speech_end`` and ``on_error``; each of them
clears the listening flag and none of them touches the catalogue.
"""

from __future__ import annotations

import logging
from typing import Optional

from typing_extensions import Protocol

from .errors import RecognitionError, UnsupportedCapabilityError


logger = logging.getLogger(__name__)


class Recognizer(Protocol):
    def start(self) -> None: ...

    def stop(self) -> None: ...


class ClientRecognizer:
    """Recognizer for the HTTP surface.

    The browser does the actual listening and posts the outcome back, so
    this only keeps track of whether a capture has been requested.
    """

    def __init__(self) -> None:
        self.active = False
        self.requests = 0

    def start(self) -> None:
        self.active = True
        self.requests += 1

    def stop(self) -> None:
        self.active = False


class SearchInput:
    """The text in the search box, always stored in lowercase."""

    def __init__(self, query: str = "") -> None:
        self.query = query.lower()

    def set_text(self, raw: str) -> str:
        self.query = (raw or "").lower()
        return self.query


class VoiceSearch:
    def __init__(self, search: SearchInput, recognizer: Optional[Recognizer] = None) -> None:
        self.search = search
        self._recognizer = recognizer
        self.listening = False
        self.last_error: Optional[RecognitionError] = None

    @property
    def supported(self) -> bool:
        return self._recognizer is not None

    def start(self) -> bool:
        """Begin listening.

        Returns ``False`` without starting a second capture when one is
        already in flight.
        """
        if self._recognizer is None:
            raise UnsupportedCapabilityError()
        if self.listening:
            logger.debug("Voice search already listening, ignoring start")
            return False
        self.listening = True
        self.last_error = None
        self._recognizer.start()
        return True

    def on_result(self, text: str) -> str:
        query = self.search.set_text(text)
        self.listening = False
        logger.debug("Voice search query: %r", query)
        return query

    def on_speech_end(self) -> None:
        if self._recognizer is not None:
            self._recognizer.stop()
        self.listening = False

    def on_error(self, reason: str) -> RecognitionError:
        error = RecognitionError(reason)
        logger.error("Speech recognition error: %s", reason)
        self.listening = False
        self.last_error = error
        return error
