"""Score entry endpoints. Every write recomputes and is pushed to live clients."""

import logging

from fastapi import APIRouter, Depends, HTTPException

from api.dependencies import get_announcer, get_db
from api.schemas import CellRequest, ScoresRequest, ScoreWriteResponse
from database.db_manager import DatabaseManager
from database.exceptions import NotFoundError
from models import Competition, Player, PlayerRound
from realtime import ScoreAnnouncer
from scoring import compute_player_round, notable_events

logger = logging.getLogger(__name__)

router = APIRouter()


async def _load(db: DatabaseManager, competition_id: str, player_name: str):
    try:
        comp = await db.competitions.get_competition(competition_id)
    except NotFoundError:
        comp = None
    if not comp:
        raise HTTPException(404, "Competition not found")
    player = comp.find_player(player_name)
    if player is None:
        raise HTTPException(404, f"Player '{player_name}' not in competition")
    return comp, player


def _player_round(comp: Competition, player: Player) -> PlayerRound:
    return compute_player_round(player, comp.course, comp.handicap_allowance, comp.type.metric)


async def _after_write(
    db: DatabaseManager,
    announcer: ScoreAnnouncer,
    comp: Competition,
    player: Player,
    old_scores: list,
) -> ScoreWriteResponse:
    events = notable_events(old_scores, player.gross_scores, comp.course)
    backend_totals = await db.competitions.get_team_totals(comp.id)
    await announcer.announce(comp, player.name, old_scores, backend_totals)
    return ScoreWriteResponse(round=_player_round(comp, player), events=events)


@router.get("/{competition_id}/players/{player_name}/scores", response_model=PlayerRound)
async def get_player_scorecard(
    competition_id: str,
    player_name: str,
    db: DatabaseManager = Depends(get_db),
):
    comp, player = await _load(db, competition_id, player_name)
    return _player_round(comp, player)


@router.put("/{competition_id}/players/{player_name}/scores", response_model=ScoreWriteResponse)
async def save_player_scores(
    competition_id: str,
    player_name: str,
    req: ScoresRequest,
    db: DatabaseManager = Depends(get_db),
    announcer: ScoreAnnouncer = Depends(get_announcer),
):
    """Replace all 18 cells. Empty cells clear the hole."""
    comp, player = await _load(db, competition_id, player_name)
    old_scores = list(player.gross_scores)
    try:
        cells = await db.scores.save_scores(competition_id, player_name, req.scores)
    except ValueError as e:
        raise HTTPException(400, str(e))
    player.gross_scores = cells
    logger.info("Card saved for %s in competition %s", player_name, competition_id)
    return await _after_write(db, announcer, comp, player, old_scores)


@router.patch(
    "/{competition_id}/players/{player_name}/scores/{hole_number}",
    response_model=ScoreWriteResponse,
)
async def save_hole_score(
    competition_id: str,
    player_name: str,
    hole_number: int,
    req: CellRequest,
    db: DatabaseManager = Depends(get_db),
    announcer: ScoreAnnouncer = Depends(get_announcer),
):
    """Write a single hole."""
    if not 1 <= hole_number <= 18:
        raise HTTPException(400, "Hole number must be 1-18")
    comp, player = await _load(db, competition_id, player_name)
    old_scores = list(player.gross_scores)
    try:
        value = await db.scores.set_score(competition_id, player_name, hole_number, req.strokes)
    except ValueError as e:
        raise HTTPException(400, str(e))
    player.set_score(hole_number, value)
    return await _after_write(db, announcer, comp, player, old_scores)
