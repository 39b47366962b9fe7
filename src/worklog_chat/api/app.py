"""FastAPI application factory with lifespan management."""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI

from worklog_chat.api.middleware import RequestContextMiddleware
from worklog_chat.api.routes_chat import router as chat_router
from worklog_chat.api.routes_embeddings import router as embeddings_router
from worklog_chat.api.routes_health import router as health_router
from worklog_chat.bootstrap import Components, build_components
from worklog_chat.config.settings import Settings
from worklog_chat.observability.logger import get_logger, setup_logging

logger = get_logger("app")


def create_app(settings: Settings | None = None, components: Components | None = None) -> FastAPI:
    """Build the app; pass ``components`` to skip wiring (tests, embedding hosts)."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        active = components
        if active is None:
            resolved = settings or Settings()
            setup_logging(resolved.log_level, resolved.log_json)
            active = await build_components(resolved)

        app.state.chat_service = active.chat_service
        app.state.embedding_pipeline = active.embedding_pipeline
        app.state.index = active.index
        app.state.chunk_store = active.chunk_store
        app.state.vector_store = active.vector_store
        app.state.settings = active.settings

        logger.info(
            "startup_complete",
            chunks=await active.chunk_store.count_chunks(),
            index_size=active.vector_store.size,
        )

        yield

        # Shutdown: persist the vector index
        active.vector_store.save()
        logger.info("shutdown_complete")

    app = FastAPI(
        title="Work Log Chat",
        version="1.0.0",
        description="Ask questions about dated work logs",
        lifespan=lifespan,
    )
    app.add_middleware(RequestContextMiddleware)
    app.include_router(health_router, tags=["health"])
    app.include_router(embeddings_router, tags=["embeddings"])
    app.include_router(chat_router, tags=["chat"])
    return app
