"""Main FastAPI application."""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from starlette.middleware.sessions import SessionMiddleware

from .config import Settings, get_settings
from .constants import REQUEST_ID_HEADER
from .middleware.error_handler import setup_error_handling
from .middleware.request_id import RequestIDMiddleware
from .routes import tags
from .services.auth_guard import AuthGuard
from .services.database import SQLVocabularyStore
from .services.interfaces import VocabularyStoreInterface
from .services.memory_store import InMemoryVocabularyStore
from .services.rendering import TagCollectionRenderer, create_templates
from .services.tag_admin import TagAdminService
from .services.taxonomy import TaxonomyService
from .services.vocabulary import VocabularyService
from .utils.localization import Translator
from .utils.logging import log_info, setup_logging
from .utils.wsse import WSSECredentials


def create_store(settings: Settings) -> VocabularyStoreInterface:
    """Select the vocabulary store from configuration."""
    if settings.DATABASE_URL:
        return SQLVocabularyStore(settings.DATABASE_URL)
    return InMemoryVocabularyStore()


def create_app(
    settings: Optional[Settings] = None,
    store: Optional[VocabularyStoreInterface] = None
) -> FastAPI:
    """Create the FastAPI application.

    Args:
        settings: Application settings; read from the environment if omitted
        store: Vocabulary store; selected from settings if omitted

    Returns:
        Configured application
    """
    settings = settings or get_settings()
    setup_logging(settings.LOG_LEVEL)
    if store is None:
        store = create_store(settings)

    credentials = WSSECredentials(settings.WSSE_SECRET)
    translator = Translator(settings.UI_LANGUAGE, settings.LOCALE_DIR)
    templates = create_templates()
    tag_admin = TagAdminService(
        vocabulary=VocabularyService(store),
        taxonomy=TaxonomyService(store),
        guard=AuthGuard(credentials.compute_digest),
        credentials=credentials,
        translator=translator,
        renderer=TagCollectionRenderer(templates, translator)
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await store.initialize()
        log_info("Tag admin started", {"store": type(store).__name__})
        yield
        await store.cleanup()

    app = FastAPI(
        title=settings.APP_NAME,
        description="Tag vocabulary administration",
        version="1.0.0",
        lifespan=lifespan
    )
    app.state.settings = settings
    app.state.store = store
    app.state.templates = templates
    app.state.tag_admin = tag_admin

    app.add_middleware(SessionMiddleware, secret_key=settings.SESSION_SECRET)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=sorted(settings.CORS_ORIGINS),
        allow_credentials=True,
        allow_methods=["GET", "POST"],
        allow_headers=["*", REQUEST_ID_HEADER]
    )
    app.add_middleware(RequestIDMiddleware)
    setup_error_handling(app)

    app.include_router(tags.router)

    @app.get("/health")
    async def health_check(request: Request) -> dict:
        """Health check endpoint."""
        return {"status": "ok", "request_id": getattr(request.state, "request_id", None)}

    @app.get("/metrics")
    async def metrics() -> Response:
        """Prometheus metrics endpoint."""
        return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)

    return app
