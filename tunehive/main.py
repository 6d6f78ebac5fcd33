# tunehive/main.py
import logging
from typing import Optional

from fastapi import FastAPI

from . import __version__
from .catalog import catalog_router
from .catalog.session import CatalogSession
from .config import Settings, load_settings


logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or load_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(
        title="Tune Hive",
        description=(
            "Single-page music catalogue editor: add, edit, delete and "
            "search songs. State lives in memory for the running process."
        ),
        version=__version__,
    )
    app.state.settings = settings
    app.state.session = CatalogSession.from_settings(settings)
    app.include_router(catalog_router)

    @app.get("/")
    def health_check():
        return {"status": "ok", "songs": len(app.state.session.store)}

    logger.info(
        "Catalogue ready (id policy: %s, genre search: %s, voice: %s)",
        settings.id_policy,
        settings.search_genre,
        settings.voice_enabled,
    )
    return app


app = create_app()
