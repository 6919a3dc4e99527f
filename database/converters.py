"""Conversion between asyncpg rows and the pydantic competition models.

All mapping between the normalized tables and the nested models lives here.
"""

from typing import Dict, Iterable, List, Optional

from models import Competition, Group, Hole, Player, HOLES_PER_ROUND


# ================================================================
# Row -> Model (reads)
# ================================================================

def hole_from_row(row) -> Hole:
    """competitions.holes row -> Hole model."""
    return Hole(
        number=row["hole_number"],
        par=row["par"],
        stroke_index=row["stroke_index"],
    )


def scores_from_rows(score_rows: Iterable) -> List[Optional[int]]:
    """competitions.scores rows for one player -> 18 cells, None where unplayed."""
    cells: List[Optional[int]] = [None] * HOLES_PER_ROUND
    for r in score_rows:
        if 1 <= r["hole_number"] <= HOLES_PER_ROUND:
            cells[r["hole_number"] - 1] = r["strokes"]
    return cells


def player_from_row(entry_row, score_rows: Iterable = ()) -> Player:
    """competitions.entries row + that player's score rows -> Player model."""
    return Player(
        name=entry_row["player_name"],
        course_handicap=float(entry_row["course_handicap"]) if entry_row["course_handicap"] is not None else 0,
        gross_scores=scores_from_rows(score_rows),
        teebox=entry_row["teebox"],
        waters=entry_row["waters"],
        dog=bool(entry_row["dog"]),
        two_clubs=entry_row["two_clubs"],
        fines=entry_row["fines"],
    )


def group_from_row(group_row, players: List[Player]) -> Group:
    return Group(
        name=group_row["name"],
        tee_time=group_row["tee_time"],
        team_ids=[str(t) for t in (group_row["team_ids"] or [])],
        players=players,
    )


def competition_from_rows(
    comp_row,
    hole_rows: list,
    group_rows: list,
    entry_rows: list,
    score_rows: list,
) -> Competition:
    """Assemble a full Competition from rows across five tables."""
    scores_by_player: Dict[str, list] = {}
    for r in score_rows:
        scores_by_player.setdefault(r["player_name"], []).append(r)

    entries_by_group: Dict[int, list] = {}
    for r in sorted(entry_rows, key=lambda e: (e["group_index"], e["position"])):
        entries_by_group.setdefault(r["group_index"], []).append(r)

    groups = [
        group_from_row(
            gr,
            [
                player_from_row(er, scores_by_player.get(er["player_name"], []))
                for er in entries_by_group.get(gr["group_index"], [])
            ],
        )
        for gr in sorted(group_rows, key=lambda g: g["group_index"])
    ]

    allowance = comp_row["handicap_allowance"]
    return Competition(
        id=str(comp_row["id"]),
        type=comp_row["type"],
        date=comp_row["comp_date"],
        club=comp_row["club"],
        handicap_allowance=float(allowance) if allowance is not None else None,
        join_code=comp_row["join_code"],
        notes=comp_row["notes"],
        status=comp_row["status"],
        holes=[hole_from_row(r) for r in hole_rows],
        groups=groups,
    )


# ================================================================
# Model -> Row (writes)
# ================================================================

def competition_to_row(comp: Competition) -> dict:
    """Competition -> dict for competitions.competitions INSERT."""
    return {
        "type": comp.type.value,
        "comp_date": comp.date,
        "club": comp.club,
        "handicap_allowance": comp.handicap_allowance,
        "join_code": comp.join_code,
        "notes": comp.notes,
        "status": comp.status,
    }


def hole_to_row(hole: Hole, competition_id: int) -> tuple:
    """Hole -> tuple for competitions.holes INSERT (executemany)."""
    return (competition_id, hole.number, hole.par, hole.stroke_index)


def group_to_row(group: Group, competition_id: int, group_index: int) -> tuple:
    return (competition_id, group_index, group.name, group.tee_time, list(group.team_ids))


def entry_to_row(
    player: Player, competition_id: int, group_index: int, position: int
) -> tuple:
    """Player -> tuple for competitions.entries INSERT."""
    return (
        competition_id, player.name, group_index, position,
        player.course_handicap, player.teebox, player.waters,
        player.dog, player.two_clubs, player.fines,
    )


def score_rows_for_player(
    player: Player, competition_id: int
) -> list:
    """Entered cells of a player -> (competition_id, player_name, hole_number, strokes) tuples."""
    return [
        (competition_id, player.name, idx + 1, strokes)
        for idx, strokes in enumerate(player.gross_scores)
        if strokes is not None
    ]
