from fastapi import Request

from database.db_manager import DatabaseManager
from realtime import ScoreAnnouncer


def get_db(request: Request) -> DatabaseManager:
    """FastAPI dependency that provides the DatabaseManager."""
    return request.app.state.db_manager


def get_announcer(request: Request) -> ScoreAnnouncer:
    """FastAPI dependency for the live score announcer."""
    return request.app.state.announcer
