# lumina/main.py
import logging
from typing import Optional

from fastapi import FastAPI

from .catalog.router import router as library_router
from .catalog.store import load_catalog
from .config import LuminaConfig, configure_logging, load_config
from .storage import JsonFileStore, SavedBooksSlot
from .view_state import ViewStateEngine

logger = logging.getLogger(__name__)


def build_engine(config: LuminaConfig) -> ViewStateEngine:
    catalog = load_catalog(config.catalog.data_file)
    slot = SavedBooksSlot(
        JsonFileStore(config.storage.path), key=config.storage.saved_books_key
    )
    return ViewStateEngine(catalog, slot, items_per_page=config.catalog.items_per_page)


def create_app(config: Optional[LuminaConfig] = None) -> FastAPI:
    if config is None:
        config = load_config()
    configure_logging(config.log_level)

    app = FastAPI(
        title=config.app.name,
        description=(
            "Local book catalog browser: search, filter by category, "
            "page through the grid and keep a saved-books list."
        ),
        version=config.app.version,
    )
    # One browser session per process
    app.state.config = config
    app.state.engine = build_engine(config)
    app.include_router(library_router)

    @app.get("/")
    def health_check():
        engine: ViewStateEngine = app.state.engine
        return {"status": "ok", "books": len(engine.catalog)}

    logger.info("%s %s ready", config.app.name, config.app.version)
    return app


app = create_app()
