# File: /pagedb/main.py | Version: 1.0 | Title: FastAPI App (router includes + engine error mapping)
from __future__ import annotations

from fastapi import FastAPI

from pagedb.core.config import settings
from pagedb.core.error_handlers import register_engine_handlers
from pagedb.core.logging import configure_logging
from pagedb.observability.sentry import init_sentry_if_configured
from pagedb.routers import columns, health, meta, pages, rows, views

# Initialize logging & observability
configure_logging()
init_sentry_if_configured()

app = FastAPI(title="PageDB API")

app.include_router(pages.router)
app.include_router(columns.router)
app.include_router(rows.router)
app.include_router(views.router)
app.include_router(meta.router)
app.include_router(health.router)

register_engine_handlers(app, std_errors=settings.ENABLE_STD_ERRORS)

# Optional standardized error responses
if settings.ENABLE_STD_ERRORS:
    from pagedb.core.error_handlers import register_exception_handlers

    register_exception_handlers(app)
