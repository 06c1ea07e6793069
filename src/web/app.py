"""FastAPI application entry point."""

from contextlib import asynccontextmanager
from typing import Optional

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from cli.config import load_config_model
from cli.config_models import ServiceConfig
from inference.engine import InferenceEngine, load_engine
from predictions.store import PredictionStore, create_store
from web.errors import UnhandledErrorMiddleware, register_error_handlers
from web.limits import PayloadLimitMiddleware
from web.routes import predict

logger = structlog.get_logger()


def create_app(
    config: Optional[ServiceConfig] = None,
    engine: Optional[InferenceEngine] = None,
    store: Optional[PredictionStore] = None,
) -> FastAPI:
    """Build the service.

    Anything not passed in is created in the lifespan from config: the model
    is loaded once and shared read-only, the store client lives until
    shutdown. Injected handles are left for the caller to manage.
    """
    config = config or load_config_model()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owns_store = app.state.store is None
        if app.state.engine is None:
            app.state.engine = load_engine(config.model.url, input_size=config.model.input_size)
        if owns_store:
            app.state.store = create_store(
                config.store.backend,
                project=config.store.project,
                database=config.store.database,
                collection=config.store.collection,
            )
        logger.info("web.startup", store=config.store.backend)
        yield
        if owns_store:
            app.state.store.close()
            app.state.store = None
        logger.info("web.shutdown")

    app = FastAPI(
        title="Cancer Screening API",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.config = config
    app.state.engine = engine
    app.state.store = store

    register_error_handlers(app)

    app.add_middleware(UnhandledErrorMiddleware)
    app.add_middleware(PayloadLimitMiddleware, max_bytes=config.limits.max_upload_bytes)
    # CORS outermost so error responses carry the headers too
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.server.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(predict.router)

    @app.get("/health")
    async def health():
        return {"status": "success", "message": "ok"}

    return app
