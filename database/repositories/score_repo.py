"""Per-cell gross score storage. The latest write for a (player, hole) wins."""

import logging
from typing import List, Optional, Sequence

import asyncpg

from models import HOLES_PER_ROUND
from models.player import to_gross
from database.converters import scores_from_rows
from database.exceptions import NotFoundError
from database.repositories.competition_repo import parse_competition_id

logger = logging.getLogger(__name__)

_UPSERT = """INSERT INTO competitions.scores (competition_id, player_name, hole_number, strokes)
             VALUES ($1, $2, $3, $4)
             ON CONFLICT (competition_id, player_name, hole_number)
             DO UPDATE SET strokes = EXCLUDED.strokes, updated_at = now()"""

_DELETE = """DELETE FROM competitions.scores
             WHERE competition_id = $1 AND player_name = $2 AND hole_number = $3"""


class ScoreRepositoryDB:
    """Async reads and writes of a player's gross score cells."""

    def __init__(self, pool: asyncpg.Pool):
        self._pool = pool

    async def get_scores(self, competition_id: str, player_name: str) -> List[Optional[int]]:
        """18 cells for a player, None where nothing is stored."""
        cid = parse_competition_id(competition_id)
        async with self._pool.acquire() as conn:
            rows = await conn.fetch(
                """SELECT hole_number, strokes FROM competitions.scores
                   WHERE competition_id = $1 AND player_name = $2""",
                cid, player_name,
            )
            return scores_from_rows(rows)

    async def save_scores(
        self, competition_id: str, player_name: str, scores: Sequence[object]
    ) -> List[Optional[int]]:
        """Write a whole card. Empty cells delete the stored score."""
        if len(scores) != HOLES_PER_ROUND:
            raise ValueError(f"Expected {HOLES_PER_ROUND} scores, got {len(scores)}")
        cid = parse_competition_id(competition_id)
        cells = [to_gross(s) for s in scores]
        upserts = [
            (cid, player_name, idx + 1, strokes)
            for idx, strokes in enumerate(cells) if strokes is not None
        ]
        deletes = [
            (cid, player_name, idx + 1)
            for idx, strokes in enumerate(cells) if strokes is None
        ]
        try:
            async with self._pool.acquire() as conn:
                async with conn.transaction():
                    if deletes:
                        await conn.executemany(_DELETE, deletes)
                    if upserts:
                        await conn.executemany(_UPSERT, upserts)
        except asyncpg.ForeignKeyViolationError as e:
            raise NotFoundError(f"Competition {competition_id} not found") from e
        except asyncpg.DataError as e:
            raise ValueError(f"Score out of range: {e}") from e
        logger.debug("Saved %d cells for %s in competition %s", len(upserts), player_name, competition_id)
        return cells

    async def set_score(
        self, competition_id: str, player_name: str, hole_number: int, strokes: object
    ) -> Optional[int]:
        """Write one cell; an empty value clears it."""
        if not 1 <= hole_number <= HOLES_PER_ROUND:
            raise ValueError(f"Hole number {hole_number} must be 1-18")
        cid = parse_competition_id(competition_id)
        value = to_gross(strokes)
        try:
            async with self._pool.acquire() as conn:
                if value is None:
                    await conn.execute(_DELETE, cid, player_name, hole_number)
                else:
                    await conn.execute(_UPSERT, cid, player_name, hole_number, value)
        except asyncpg.ForeignKeyViolationError as e:
            raise NotFoundError(f"Competition {competition_id} not found") from e
        except asyncpg.DataError as e:
            raise ValueError(f"Score out of range: {e}") from e
        return value
