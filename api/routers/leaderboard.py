"""Leaderboard endpoints."""

import logging

from fastapi import APIRouter, Depends, HTTPException

from api.dependencies import get_db
from api.schemas import SnapshotResponse
from database.db_manager import DatabaseManager
from database.exceptions import NotFoundError
from models import Leaderboard
from scoring import build_leaderboard, team_totals

logger = logging.getLogger(__name__)

router = APIRouter()


async def _live_leaderboard(db: DatabaseManager, competition_id: str) -> Leaderboard:
    try:
        comp = await db.competitions.get_competition(competition_id)
    except NotFoundError:
        comp = None
    if not comp:
        raise HTTPException(404, "Competition not found")
    backend_totals = await db.competitions.get_team_totals(competition_id)
    leaderboard = build_leaderboard(comp, backend_totals)
    if leaderboard.mismatched_team_ids:
        logger.warning(
            "Competition %s: cached team totals differ from live for %s",
            competition_id, ", ".join(leaderboard.mismatched_team_ids),
        )
    return leaderboard


@router.get("/{competition_id}/leaderboard", response_model=Leaderboard)
async def get_leaderboard(competition_id: str, db: DatabaseManager = Depends(get_db)):
    """Ranked rows computed from the current scores, with any cache mismatches listed."""
    return await _live_leaderboard(db, competition_id)


@router.post("/{competition_id}/leaderboard/snapshot", response_model=SnapshotResponse)
async def snapshot_leaderboard(competition_id: str, db: DatabaseManager = Depends(get_db)):
    """Store the live team totals as the cached aggregate."""
    leaderboard = await _live_leaderboard(db, competition_id)
    totals = team_totals(leaderboard)
    await db.competitions.save_team_totals(competition_id, totals)
    return SnapshotResponse(saved=totals)
