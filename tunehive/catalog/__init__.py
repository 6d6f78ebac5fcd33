"""
Catalog package for the song catalogue API.

``store`` holds the songs, the draft being composed and the edit
context; ``query`` filters the table by free text; ``session`` wires
both to the search box and voice search; ``router`` exposes all of it
as a REST API under ``/api/catalog`` for the single-page editor.
"""

from .router import router as catalog_router  # noqa: F401
