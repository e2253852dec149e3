"""
FastAPI Backend dla panelu składania broni.

Endpoints:
    GET  /api/health                 - health check
    GET  /api/recipes                - katalog receptur
    GET  /api/recipes/{recipe_id}    - szczegóły receptury
    GET  /api/session                - stan siatki i puli
    POST /api/session/toggle         - położenie / cofnięcie kropki
    POST /api/session/confirm        - składanie
    POST /api/session/reset          - zamknięcie panelu bez składania
    POST /api/session/credit         - pickup kropek
    POST /api/session/salvage        - zniszczona broń oddaje kropki
    GET  /api/session/near-misses    - kształty odrzucone przez regułę czystości
    GET  /api/session/events         - log zdarzeń sesji

Sesja jest trzymana w app.state i wstrzykiwana do routerów
przez dependency (api.routers.crafting.get_session).
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional
import logging

from dotcraft.core.config_loader import ConfigLoader
from dotcraft.crafting.session import CraftingSession
from api.routers import crafting, recipes

# Paths
BASE_DIR = Path(__file__).parent.parent
DATA_DIR = BASE_DIR / "data"

logger = logging.getLogger(__name__)


def create_app(
    session: Optional[CraftingSession] = None,
    data_path: Path = DATA_DIR,
) -> FastAPI:
    """
    Tworzy aplikację z jedną sesją składania.

    Args:
        session: Gotowa sesja (testy); domyślnie budowana z data_path
        data_path: Folder z defaults.yaml i recipes.yaml
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Startup/shutdown events."""
        if getattr(app.state, "session", None) is None:
            app.state.session = CraftingSession.from_config(ConfigLoader(str(data_path)))
        logger.info("Crafting API starting, data from %s", data_path)
        yield
        logger.info("Crafting API shutting down")

    app = FastAPI(
        title="Dotcraft API",
        description="Backend API for the dot-grid weapon crafting panel",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.session = session

    # CORS - allow all origins (including file://)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(recipes.router, prefix="/api", tags=["Recipes"])
    app.include_router(crafting.router, prefix="/api", tags=["Crafting"])

    @app.get("/api/health")
    async def health():
        """API health check."""
        return {"status": "healthy"}

    return app


app = create_app()
