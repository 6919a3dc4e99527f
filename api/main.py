"""FastAPI application for live competition scoring."""

import logging
import os
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from database.connection import db
from database.db_manager import DatabaseManager
from realtime import DEFAULT_TTL_SECONDS, PopupDeduper, ScoreAnnouncer, manager

load_dotenv()

logging.basicConfig(
    level=os.environ.get("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


def _cors_origins() -> list:
    raw = os.environ.get("CORS_ORIGINS", "http://localhost:5173")
    return [o.strip() for o in raw.split(",") if o.strip()]


def _dedupe_ttl() -> float:
    try:
        return float(os.environ.get("POPUP_DEDUPE_TTL_SECONDS", DEFAULT_TTL_SECONDS))
    except ValueError:
        logger.warning("Invalid POPUP_DEDUPE_TTL_SECONDS, using %s", DEFAULT_TTL_SECONDS)
        return DEFAULT_TTL_SECONDS


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize DB pool on startup, close on shutdown."""
    await db.initialize(dsn=os.environ.get("DATABASE_URL"))
    app.state.db_manager = DatabaseManager(db.pool)
    yield
    await db.close()


def create_app() -> FastAPI:
    app = FastAPI(
        title="Golf Competition Scoring API",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.announcer = ScoreAnnouncer(manager, PopupDeduper(ttl_seconds=_dedupe_ttl()))

    app.add_middleware(
        CORSMiddleware,
        allow_origins=_cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from api.routers import competitions, leaderboard, live, scan, scores
    app.include_router(competitions.router, prefix="/api/competitions", tags=["competitions"])
    app.include_router(scores.router, prefix="/api/competitions", tags=["scores"])
    app.include_router(leaderboard.router, prefix="/api/competitions", tags=["leaderboard"])
    app.include_router(live.router, prefix="/api/competitions", tags=["live"])
    app.include_router(scan.router, prefix="/api/scan", tags=["scan"])

    @app.get("/api/health")
    async def health():
        healthy = await db.health_check()
        return {"status": "ok" if healthy else "degraded", "database": healthy}

    return app


app = create_app()
