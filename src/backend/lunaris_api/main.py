from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.concurrency import run_in_threadpool

from lunaris_api.config import Settings, settings as default_settings
from lunaris_api.db.postgres import PostgresStore
from lunaris_api.db.schema import prepare_schema
from lunaris_api.routes import admin, health, interest_form, sponsorship_form
from lunaris_api.utils.logger import SubmissionLogger, configure_logging, get_logger

logger = get_logger(__name__)


def _open_store(settings: Settings) -> PostgresStore:
    store = PostgresStore.from_settings(settings)
    try:
        prepare_schema(store, settings)
    except Exception:
        store.close()
        raise
    return store


@asynccontextmanager
async def lifespan(app: FastAPI):
    # An injected store (tests, scripts) is used as-is and left open.
    owns_store = app.state.store is None
    if owns_store:
        # Any failure here aborts startup; uvicorn exits non-zero.
        app.state.store = await run_in_threadpool(_open_store, app.state.settings)
    try:
        yield
    finally:
        if owns_store:
            app.state.store.close()
            app.state.store = None


def create_app(
    settings: Optional[Settings] = None,
    store: Optional[PostgresStore] = None,
) -> FastAPI:
    settings = settings or default_settings
    configure_logging(settings.log_level)

    app = FastAPI(
        title=f"{settings.service_name} Forms API",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.store = store
    app.state.submission_logger = SubmissionLogger(
        get_logger("lunaris_api.submissions"),
        log_payloads=settings.log_request_payloads,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type", "Accept"],
    )

    app.include_router(health.router)
    app.include_router(interest_form.router)
    app.include_router(sponsorship_form.router)
    app.include_router(admin.router)

    if not settings.admin_api_token:
        logger.warning("ADMIN_API_TOKEN is not set; admin endpoints will reject every request.")
    return app
