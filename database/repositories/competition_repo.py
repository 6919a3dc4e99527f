"""CRUD for competitions, their holes, groups, entries and cached team totals."""

import logging
import secrets
import string
from typing import Any, Dict, List, Optional

import asyncpg

from models import Competition, Group, Player
from database.converters import (
    competition_from_rows,
    competition_to_row,
    entry_to_row,
    group_to_row,
    hole_to_row,
    player_from_row,
    score_rows_for_player,
)
from database.exceptions import DuplicateError, IntegrityError, NotFoundError

logger = logging.getLogger(__name__)

JOIN_CODE_ALPHABET = string.ascii_uppercase + string.digits
JOIN_CODE_LENGTH = 6

# API field -> column for partial updates
_UPDATABLE_COLUMNS = {
    "type": "type",
    "date": "comp_date",
    "club": "club",
    "handicap_allowance": "handicap_allowance",
    "notes": "notes",
    "status": "status",
}
_ENTRY_COLUMNS = ("course_handicap", "teebox", "waters", "dog", "two_clubs", "fines")


def generate_join_code() -> str:
    """Six upper-case alphanumerics, e.g. 'K3Q9ZD'."""
    return "".join(secrets.choice(JOIN_CODE_ALPHABET) for _ in range(JOIN_CODE_LENGTH))


def parse_competition_id(competition_id: str) -> int:
    try:
        return int(competition_id)
    except (TypeError, ValueError):
        raise NotFoundError(f"Competition {competition_id} not found") from None


class CompetitionRepositoryDB:
    """Async CRUD for competitions and their child tables."""

    def __init__(self, pool: asyncpg.Pool):
        self._pool = pool

    # ================================================================
    # Private helpers
    # ================================================================

    async def _assemble(self, conn, comp_row) -> Competition:
        cid = comp_row["id"]
        hole_rows = await conn.fetch(
            "SELECT * FROM competitions.holes WHERE competition_id = $1 ORDER BY hole_number",
            cid,
        )
        group_rows = await conn.fetch(
            "SELECT * FROM competitions.groups WHERE competition_id = $1 ORDER BY group_index",
            cid,
        )
        entry_rows = await conn.fetch(
            """SELECT * FROM competitions.entries WHERE competition_id = $1
               ORDER BY group_index, position""",
            cid,
        )
        score_rows = await conn.fetch(
            "SELECT * FROM competitions.scores WHERE competition_id = $1",
            cid,
        )
        return competition_from_rows(comp_row, hole_rows, group_rows, entry_rows, score_rows)

    async def _insert_groups(
        self,
        conn,
        cid: int,
        groups: List[Group],
        existing: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Insert groups and entries. Stored entry details win for fields the caller did not set."""
        existing = existing or {}
        await conn.executemany(
            """INSERT INTO competitions.groups (competition_id, group_index, name, tee_time, team_ids)
               VALUES ($1, $2, $3, $4, $5)""",
            [group_to_row(g, cid, idx) for idx, g in enumerate(groups)],
        )
        entry_rows = []
        for g_idx, group in enumerate(groups):
            for position, player in enumerate(group.players):
                previous = existing.get(player.name)
                if previous is not None:
                    merged = player_from_row(previous).model_dump(include=set(_ENTRY_COLUMNS))
                    merged.update({
                        k: getattr(player, k)
                        for k in player.model_fields_set if k in _ENTRY_COLUMNS
                    })
                    player = player.model_copy(update=merged)
                entry_rows.append(entry_to_row(player, cid, g_idx, position))
        if entry_rows:
            await conn.executemany(
                """INSERT INTO competitions.entries
                   (competition_id, player_name, group_index, position, course_handicap,
                    teebox, waters, dog, two_clubs, fines)
                   VALUES ($1, $2, $3, $4, $5, $6, $7, $8, $9, $10)""",
                entry_rows,
            )

    # ================================================================
    # Read
    # ================================================================

    async def list_competitions(self, *, limit: int = 50, offset: int = 0) -> List[Competition]:
        """Competition headers (no groups), newest first."""
        async with self._pool.acquire() as conn:
            rows = await conn.fetch(
                """SELECT * FROM competitions.competitions
                   ORDER BY comp_date DESC NULLS LAST, id DESC
                   LIMIT $1 OFFSET $2""",
                limit, offset,
            )
            return [competition_from_rows(r, [], [], [], []) for r in rows]

    async def get_competition(self, competition_id: str) -> Optional[Competition]:
        """Full competition with holes, groups, players and their scores."""
        cid = parse_competition_id(competition_id)
        async with self._pool.acquire() as conn:
            row = await conn.fetchrow(
                "SELECT * FROM competitions.competitions WHERE id = $1", cid
            )
            if not row:
                return None
            return await self._assemble(conn, row)

    async def get_competition_by_code(self, join_code: str) -> Optional[Competition]:
        async with self._pool.acquire() as conn:
            row = await conn.fetchrow(
                "SELECT * FROM competitions.competitions WHERE join_code = $1",
                join_code.strip().upper(),
            )
            if not row:
                return None
            return await self._assemble(conn, row)

    async def get_team_totals(self, competition_id: str) -> Dict[str, int]:
        """Cached team totals, team_id -> points."""
        cid = parse_competition_id(competition_id)
        async with self._pool.acquire() as conn:
            rows = await conn.fetch(
                "SELECT team_id, points FROM competitions.team_totals WHERE competition_id = $1",
                cid,
            )
            return {r["team_id"]: r["points"] for r in rows}

    # ================================================================
    # Create
    # ================================================================

    async def create_competition(self, comp: Competition) -> Competition:
        """Insert the competition, its 18 holes and any groups in one transaction."""
        data = competition_to_row(comp)
        data["join_code"] = (data["join_code"] or generate_join_code()).upper()
        try:
            async with self._pool.acquire() as conn:
                async with conn.transaction():
                    row = await conn.fetchrow(
                        """INSERT INTO competitions.competitions
                           (type, comp_date, club, handicap_allowance, join_code, notes, status)
                           VALUES ($1, $2, $3, $4, $5, $6, $7) RETURNING *""",
                        data["type"], data["comp_date"], data["club"],
                        data["handicap_allowance"], data["join_code"],
                        data["notes"], data["status"],
                    )
                    cid = row["id"]
                    await conn.executemany(
                        """INSERT INTO competitions.holes
                           (competition_id, hole_number, par, stroke_index)
                           VALUES ($1, $2, $3, $4)""",
                        [hole_to_row(h, cid) for h in comp.course],
                    )
                    await self._insert_groups(conn, cid, comp.groups)
                    scores = [s for p in comp.players for s in score_rows_for_player(p, cid)]
                    if scores:
                        await conn.executemany(
                            """INSERT INTO competitions.scores
                               (competition_id, player_name, hole_number, strokes)
                               VALUES ($1, $2, $3, $4)""",
                            scores,
                        )
                    created = await self._assemble(conn, row)
        except asyncpg.UniqueViolationError as e:
            raise DuplicateError(f"Join code or player already exists: {e}") from e
        logger.info("Created competition %s (%s)", created.id, created.type.value)
        return created

    # ================================================================
    # Update
    # ================================================================

    async def update_competition(self, competition_id: str, fields: Dict[str, Any]) -> Competition:
        """Partial update of header fields. Unknown keys are ignored."""
        cid = parse_competition_id(competition_id)
        updates = {
            _UPDATABLE_COLUMNS[k]: v for k, v in fields.items() if k in _UPDATABLE_COLUMNS
        }
        if not updates:
            raise ValueError("No valid fields provided for update")
        columns = list(updates)
        assignments = ", ".join(f"{col} = ${i + 2}" for i, col in enumerate(columns))
        async with self._pool.acquire() as conn:
            row = await conn.fetchrow(
                f"UPDATE competitions.competitions SET {assignments} WHERE id = $1 RETURNING *",
                cid, *[updates[c] for c in columns],
            )
            if not row:
                raise NotFoundError(f"Competition {competition_id} not found")
            logger.info("Updated competition %s: %s", competition_id, ", ".join(columns))
            return await self._assemble(conn, row)

    async def replace_groups(self, competition_id: str, groups: List[Group]) -> Competition:
        """Swap the group layout. Scores and stored player details are kept."""
        cid = parse_competition_id(competition_id)
        try:
            async with self._pool.acquire() as conn:
                async with conn.transaction():
                    row = await conn.fetchrow(
                        "SELECT * FROM competitions.competitions WHERE id = $1 FOR UPDATE", cid
                    )
                    if not row:
                        raise NotFoundError(f"Competition {competition_id} not found")
                    old_entries = await conn.fetch(
                        "SELECT * FROM competitions.entries WHERE competition_id = $1", cid
                    )
                    await conn.execute(
                        "DELETE FROM competitions.entries WHERE competition_id = $1", cid
                    )
                    await conn.execute(
                        "DELETE FROM competitions.groups WHERE competition_id = $1", cid
                    )
                    await self._insert_groups(
                        conn, cid, groups, {r["player_name"]: r for r in old_entries}
                    )
                    return await self._assemble(conn, row)
        except asyncpg.UniqueViolationError as e:
            raise DuplicateError(f"Player listed in more than one group: {e}") from e

    async def update_entry(
        self, competition_id: str, player_name: str, fields: Dict[str, Any]
    ) -> Player:
        """Update a player's handicap, tee and side-game fields."""
        cid = parse_competition_id(competition_id)
        updates = {k: v for k, v in fields.items() if k in _ENTRY_COLUMNS and v is not None}
        async with self._pool.acquire() as conn:
            if updates:
                columns = list(updates)
                assignments = ", ".join(f"{col} = ${i + 3}" for i, col in enumerate(columns))
                row = await conn.fetchrow(
                    f"""UPDATE competitions.entries SET {assignments}
                        WHERE competition_id = $1 AND player_name = $2 RETURNING *""",
                    cid, player_name, *[updates[c] for c in columns],
                )
            else:
                row = await conn.fetchrow(
                    """SELECT * FROM competitions.entries
                       WHERE competition_id = $1 AND player_name = $2""",
                    cid, player_name,
                )
            if not row:
                raise NotFoundError(f"Player '{player_name}' not in competition {competition_id}")
            score_rows = await conn.fetch(
                """SELECT * FROM competitions.scores
                   WHERE competition_id = $1 AND player_name = $2""",
                cid, player_name,
            )
            return player_from_row(row, score_rows)

    async def save_team_totals(self, competition_id: str, totals: Dict[str, int]) -> None:
        """Upsert the cached team totals used for mismatch checks."""
        cid = parse_competition_id(competition_id)
        if not totals:
            return
        try:
            async with self._pool.acquire() as conn:
                await conn.executemany(
                    """INSERT INTO competitions.team_totals (competition_id, team_id, points)
                       VALUES ($1, $2, $3)
                       ON CONFLICT (competition_id, team_id)
                       DO UPDATE SET points = EXCLUDED.points, updated_at = now()""",
                    [(cid, team_id, points) for team_id, points in totals.items()],
                )
        except asyncpg.ForeignKeyViolationError as e:
            raise NotFoundError(f"Competition {competition_id} not found") from e

    # ================================================================
    # Delete
    # ================================================================

    async def delete_competition(self, competition_id: str) -> None:
        """Delete a competition; child rows cascade."""
        cid = parse_competition_id(competition_id)
        try:
            async with self._pool.acquire() as conn:
                result = await conn.execute(
                    "DELETE FROM competitions.competitions WHERE id = $1", cid
                )
        except asyncpg.ForeignKeyViolationError as e:
            raise IntegrityError(f"Competition {competition_id} still referenced: {e}") from e
        if result == "DELETE 0":
            raise NotFoundError(f"Competition {competition_id} not found")
        logger.info("Deleted competition %s", competition_id)
