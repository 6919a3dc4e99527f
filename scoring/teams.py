from __future__ import annotations

from typing import Dict, List, Optional, Sequence, Tuple, TypeVar

from models.competition import Competition, CompetitionType, Group
from models.results import PlayerRound, TeamRound

from .calculator import BACK_NINE, FRONT_NINE, compute_player_round

HOLES = 18

T = TypeVar("T")


def count_best_for(team_size: int) -> int:
    """Better ball for a pair, best two for anything larger."""
    return 1 if team_size <= 2 else 2


def aggregate_best_of(
    member_rounds: Sequence[PlayerRound],
    count_best: int,
    *,
    team_id: Optional[str] = None,
    group_index: Optional[int] = None,
    backend_total: Optional[int] = None,
) -> TeamRound:
    """
    Combine member Stableford points hole by hole.

    For each hole the members' points (0 for an unplayed hole) are sorted
    high to low and the top ``count_best`` are summed.
    """
    per_hole: List[int] = []
    for idx in range(HOLES):
        values = sorted(
            (r.per_hole_points[idx] if idx < len(r.per_hole_points) else 0 for r in member_rounds),
            reverse=True,
        )
        per_hole.append(sum(values[:count_best]))

    front = sum(per_hole[FRONT_NINE])
    back = sum(per_hole[BACK_NINE])
    return TeamRound(
        team_id=team_id,
        group_index=group_index,
        members=[r.player_name for r in member_rounds],
        per_hole_best=per_hole,
        front=front,
        back=back,
        total=front + back,
        holes_played=max((r.holes_played for r in member_rounds), default=0),
        backend_total=backend_total,
    )


def split_four_ball_group(players: Sequence[T]) -> Tuple[List[T], List[T]]:
    """Fixed positional pairs: players 1+2 against 3+4."""
    if len(players) != 4:
        raise ValueError(f"A fourball split needs 4 players, got {len(players)}")
    return [players[0], players[1]], [players[2], players[3]]


def _team_ids(group: Group, group_index: int, count: int) -> List[str]:
    ids = [str(t) for t in group.team_ids[:count]]
    if count == 1:
        return ids or [f"g{group_index + 1}"]
    suffixes = "abcdefghijklmnopqrstuvwxyz"
    while len(ids) < count:
        ids.append(f"g{group_index + 1}{suffixes[len(ids)]}")
    return ids


def build_group_teams(
    competition: Competition,
    group_index: int,
    backend_totals: Optional[Dict[str, int]] = None,
) -> List[TeamRound]:
    """
    Teams produced by one group under the competition's format.

    - 4BBB, or any 4-player group carrying two team ids: two positional pairs,
      better ball each
    - Alliance: the whole group, best two per hole (better ball for a pair)
    - Individual Stableford / Medal: one single-member team per player
    """
    group = competition.groups[group_index]
    backend_totals = backend_totals or {}
    rounds = [
        compute_player_round(p, competition.course, competition.handicap_allowance)
        for p in group.players
    ]
    if not rounds:
        return []

    comp_type = competition.type
    splits_pairs = comp_type is CompetitionType.FOUR_BBB or len(group.team_ids) >= 2
    if splits_pairs and len(rounds) == 4:
        ids = _team_ids(group, group_index, 2)
        pairs = split_four_ball_group(rounds)
        return [
            aggregate_best_of(pair, 1, team_id=tid, group_index=group_index,
                              backend_total=backend_totals.get(tid))
            for tid, pair in zip(ids, pairs)
        ]

    if comp_type in (CompetitionType.ALLIANCE, CompetitionType.FOUR_BBB):
        (tid,) = _team_ids(group, group_index, 1)
        return [
            aggregate_best_of(rounds, count_best_for(len(rounds)), team_id=tid,
                              group_index=group_index, backend_total=backend_totals.get(tid))
        ]

    return [
        aggregate_best_of([r], 1, team_id=r.player_name, group_index=group_index,
                          backend_total=backend_totals.get(r.player_name))
        for r in rounds
    ]
