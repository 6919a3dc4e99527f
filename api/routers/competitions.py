"""Competition API endpoints."""

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query

from api.dependencies import get_db
from api.schemas import (
    CompetitionSummaryResponse,
    CreateCompetitionRequest,
    EntryUpdateRequest,
    GroupsRequest,
    UpdateCompetitionRequest,
)
from database.db_manager import DatabaseManager
from database.exceptions import DuplicateError, IntegrityError, NotFoundError
from models import Competition, CompetitionType, Player

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=List[CompetitionSummaryResponse])
async def list_competitions(
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    db: DatabaseManager = Depends(get_db),
):
    comps = await db.competitions.list_competitions(limit=limit, offset=offset)
    return [CompetitionSummaryResponse.from_competition(c) for c in comps]


@router.get("/code/{join_code}", response_model=Competition)
async def get_competition_by_code(join_code: str, db: DatabaseManager = Depends(get_db)):
    comp = await db.competitions.get_competition_by_code(join_code)
    if not comp:
        raise HTTPException(404, "Competition not found")
    return comp


@router.get("/{competition_id}", response_model=Competition)
async def get_competition(competition_id: str, db: DatabaseManager = Depends(get_db)):
    comp = await db.competitions.get_competition(competition_id)
    if not comp:
        raise HTTPException(404, "Competition not found")
    return comp


@router.post("", response_model=Competition, status_code=201)
async def create_competition(req: CreateCompetitionRequest, db: DatabaseManager = Depends(get_db)):
    """Create a competition; the type's default allowance applies when none is given."""
    comp = Competition(
        type=req.type,
        date=req.date,
        club=req.club,
        handicap_allowance=req.handicap_allowance,
        join_code=req.join_code,
        notes=req.notes,
        status=req.status,
        holes=req.holes,
        groups=req.groups,
    )
    try:
        return await db.competitions.create_competition(comp)
    except DuplicateError as e:
        raise HTTPException(409, str(e))


@router.patch("/{competition_id}", response_model=Competition)
async def update_competition(
    competition_id: str,
    req: UpdateCompetitionRequest,
    db: DatabaseManager = Depends(get_db),
):
    fields = req.model_dump(exclude_unset=True)
    if "type" in fields:
        fields["type"] = CompetitionType.parse(fields["type"]).value
    if not fields:
        raise HTTPException(400, "No valid fields provided for update")
    try:
        return await db.competitions.update_competition(competition_id, fields)
    except NotFoundError:
        raise HTTPException(404, "Competition not found")
    except ValueError as e:
        raise HTTPException(400, str(e))


@router.delete("/{competition_id}")
async def delete_competition(competition_id: str, db: DatabaseManager = Depends(get_db)):
    try:
        await db.competitions.delete_competition(competition_id)
    except NotFoundError:
        raise HTTPException(404, "Competition not found")
    except IntegrityError as e:
        raise HTTPException(409, str(e))
    return {"success": True}


@router.put("/{competition_id}/groups", response_model=Competition)
async def replace_groups(
    competition_id: str,
    req: GroupsRequest,
    db: DatabaseManager = Depends(get_db),
):
    """Re-draw the groups. Players keep their scores and stored handicaps."""
    names = [p.name for g in req.groups for p in g.players]
    if len(names) != len(set(names)):
        raise HTTPException(400, "A player can only appear in one group")
    try:
        comp = await db.competitions.replace_groups(competition_id, req.groups)
    except NotFoundError:
        raise HTTPException(404, "Competition not found")
    except DuplicateError as e:
        raise HTTPException(409, str(e))
    logger.info("Competition %s now has %d groups", competition_id, len(comp.groups))
    return comp


@router.patch("/{competition_id}/players/{player_name}", response_model=Player)
async def update_player_entry(
    competition_id: str,
    player_name: str,
    req: EntryUpdateRequest,
    db: DatabaseManager = Depends(get_db),
):
    """Edit a player's course handicap, tee or side-game tallies."""
    try:
        return await db.competitions.update_entry(
            competition_id, player_name, req.model_dump(exclude_unset=True)
        )
    except NotFoundError as e:
        raise HTTPException(404, str(e))
