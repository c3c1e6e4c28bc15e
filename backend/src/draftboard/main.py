"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from draftboard.config import Settings, settings
from draftboard.api.routes.analysis import router as analysis_router
from draftboard.api.routes.champions import router as champions_router
from draftboard.api.routes.drafts import router as drafts_router
from draftboard.repositories.champion_repository import DEFAULT_KNOWLEDGE_DIR, load_catalog
from draftboard.services.llm_advisor import LLMAdvisor
from draftboard.services.session_store import DraftSessionStore

logger = logging.getLogger(__name__)


# Knowledge path - use settings or default to knowledge/ in repo root
def get_knowledge_dir(config: Settings = settings) -> Path:
    """Get the knowledge directory from settings or default location."""
    if config.knowledge_dir:
        knowledge_dir = Path(config.knowledge_dir)
        if knowledge_dir.is_absolute():
            return knowledge_dir
        # Relative path - resolve from repo root
        return DEFAULT_KNOWLEDGE_DIR.parent / knowledge_dir
    return DEFAULT_KNOWLEDGE_DIR


def create_llm_advisor(app: FastAPI, config: Settings) -> Optional[LLMAdvisor]:
    if not config.llm_enabled:
        logger.info("LLM advisor disabled")
        return None
    return LLMAdvisor(
        api_key=config.llm_api_key,
        catalog=app.state.catalog,
        base_url=config.llm_base_url,
        model=config.llm_model,
        timeout=config.llm_timeout,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown events."""
    logging.basicConfig(level=logging.DEBUG if settings.debug else logging.INFO)
    # Startup: load the catalog and build shared services (tests may preset them)
    if not hasattr(app.state, "settings"):
        app.state.settings = settings
    config = app.state.settings
    if not hasattr(app.state, "catalog"):
        app.state.catalog = load_catalog(get_knowledge_dir(config), config.champions_file)
    if not hasattr(app.state, "session_store"):
        app.state.session_store = DraftSessionStore(
            app.state.catalog,
            profile=config.composition_profile,
            ttl_seconds=config.session_ttl_seconds,
            cleanup_interval_seconds=config.session_cleanup_interval_seconds,
        )
    if not hasattr(app.state, "llm_advisor"):
        app.state.llm_advisor = create_llm_advisor(app, config)
    yield
    # Shutdown: stop timers and close the LLM client
    app.state.session_store.close()
    if app.state.llm_advisor is not None:
        await app.state.llm_advisor.close()


app = FastAPI(
    title="Draftboard",
    description="LoL draft simulator - ban/pick recommendations and composition analysis",
    version="0.1.0",
    lifespan=lifespan,
)

# Configure CORS for frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "service": "draftboard"}


@app.get("/")
async def root():
    """Root endpoint with API info."""
    return {
        "name": "Draftboard API",
        "version": "0.1.0",
        "docs": "/docs",
    }


# Register routers
app.include_router(champions_router)
app.include_router(drafts_router)
app.include_router(analysis_router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("draftboard.main:app", host=settings.host, port=settings.port, reload=settings.debug)
