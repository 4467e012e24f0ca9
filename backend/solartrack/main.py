import time

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from solartrack.core.config import settings
from solartrack.core.logging import configure_logging, logger
from solartrack.api.router import api_router
from solartrack.db.session import engine
from solartrack.db.base import Base
from solartrack.db import models  # noqa: F401
from solartrack.services.seed import seed_demo

def create_app() -> FastAPI:
    configure_logging(settings.ENV, settings.LOG_LEVEL)
    app = FastAPI(title="FVE Solar Tracker", version="0.1.0")

    origins = [o.strip() for o in settings.CORS_ORIGINS.split(",") if o.strip()]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins or ["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def request_logging(request: Request, call_next):
        started = time.perf_counter()
        with structlog.contextvars.bound_contextvars(app=settings.APP_NAME, method=request.method, path=request.url.path):
            response = await call_next(request)
            logger.info(
                "request_completed",
                status=response.status_code,
                duration_ms=round((time.perf_counter() - started) * 1000, 1),
            )
        return response

    @app.get("/healthz")
    def healthz():
        return {"status": "ok"}

    @app.on_event("startup")
    def _startup():
        # no migrations: the schema is a single key-value table
        Base.metadata.create_all(bind=engine)
        if settings.SEED_DEMO and settings.ENV == "dev":
            seed_demo()

    app.include_router(api_router)
    logger.info("app_started", env=settings.ENV)
    return app

app = create_app()
