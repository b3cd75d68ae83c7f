# backend/rentmaster/main.py
from __future__ import annotations

import logging
import random
from contextlib import asynccontextmanager
from datetime import datetime

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import settings
from .db import SessionLocal, init_db
from .logging_config import configure_logging
from .middleware.request_id import RequestIDMiddleware
from .middleware.structured_logging import StructuredLoggingMiddleware
from .routers.dashboard import router as dashboard_router
from .routers.data import router as data_router
from .routers.entities import router as entities_router
from .routers.health import router as health_router
from .routers.transactions import router as transactions_router
from .services.snapshot_store import ensure_seeded

API_PREFIX = "/api"

log = logging.getLogger(__name__)


def _cors_origins() -> list[str]:
    val = getattr(settings, "cors_allow_origins", ["*"])
    if isinstance(val, str):
        v = val.strip()
        return ["*"] if v == "*" else [x.strip() for x in v.split(",") if x.strip()]
    if isinstance(val, list) and val:
        return val
    return ["*"]


def prepare_store() -> None:
    """Create the local schema and load the demo portfolio into an empty store."""
    init_db()
    if not settings.seed_on_empty:
        return

    db = SessionLocal()
    try:
        seeded = ensure_seeded(
            db,
            now=datetime.now(),
            rng=random.Random(settings.seed_random_seed),
            reference_year=settings.seed_reference_year,
        )
    finally:
        db.close()
    if seeded:
        log.info("demo portfolio seeded", extra={"source": "seed"})


@asynccontextmanager
async def lifespan(app: FastAPI):
    prepare_store()
    yield


def create_app() -> FastAPI:
    configure_logging()

    app = FastAPI(
        title="RentMaster",
        version=settings.app_version,
        lifespan=lifespan,
    )

    # last added runs first: request id must be set before the request log line
    app.add_middleware(StructuredLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=_cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health_router, prefix=API_PREFIX)
    app.include_router(dashboard_router, prefix=API_PREFIX)
    app.include_router(transactions_router, prefix=API_PREFIX)
    app.include_router(entities_router, prefix=API_PREFIX)
    app.include_router(data_router, prefix=API_PREFIX)

    return app


app = create_app()
