from __future__ import annotations

from typing import Any, Callable, Dict, Hashable, List, Optional, Sequence, TypeVar

from models.competition import Competition, CompetitionType
from models.results import Leaderboard, PlayerRound, RankedRow, TeamRound

from .calculator import compute_player_round
from .teams import build_group_teams

T = TypeVar("T")

# Finished medal cards with a DTH net below this are listed as good scores.
GOOD_SCORE_DTH_NET = 70


def _assign_positions(items: Sequence[T], key: Callable[[T], Hashable]) -> List[int]:
    """Equal keys share a position; the next distinct key takes previous + 1."""
    positions: List[int] = []
    last_key: Any = None
    for idx, item in enumerate(items):
        current = key(item)
        if idx == 0:
            positions.append(1)
        elif current == last_key:
            positions.append(positions[-1])
        else:
            positions.append(positions[-1] + 1)
        last_key = current
    return positions


def _team_name(team: TeamRound) -> str:
    return " & ".join(team.members) or (team.team_id or "")


def rank_teams(teams: Sequence[TeamRound]) -> List[RankedRow]:
    """
    Sort teams by total, highest first, and number them.

    The sort is stable. Ties share a position and the next lower total
    continues at the previous position + 1: totals [40, 38, 38, 35] give
    positions [1, 2, 2, 3].
    """
    ordered = sorted(teams, key=lambda t: t.total, reverse=True)
    positions = _assign_positions(ordered, key=lambda t: t.total)
    return [
        RankedRow(position=pos, name=_team_name(team), total=team.total,
                  thru=team.thru, team=team)
        for pos, team in zip(positions, ordered)
    ]


def rank_medal(rounds: Sequence[PlayerRound]) -> List[RankedRow]:
    """
    Medal order: more holes played first, then the lowest net total.

    Net total is gross less playing handicap. Rows with the same holes played
    and the same net share a position.
    """
    def sort_key(r: PlayerRound):
        return (-r.holes_played, r.net_total)

    ordered = sorted(rounds, key=sort_key)
    positions = _assign_positions(ordered, key=sort_key)
    return [
        RankedRow(position=pos, name=r.player_name, total=r.net_total,
                  thru=r.thru, player_round=r)
        for pos, r in zip(positions, ordered)
    ]


def good_scores(rows: Sequence[RankedRow]) -> List[RankedRow]:
    """Medal rows for finished cards whose gross less course handicap beats 70."""
    return [
        row for row in rows
        if row.player_round is not None
        and row.player_round.is_finished
        and row.player_round.dth_net < GOOD_SCORE_DTH_NET
    ]


def build_leaderboard(
    competition: Competition,
    backend_totals: Optional[Dict[str, int]] = None,
) -> Leaderboard:
    """Run the full scoring flow for a competition and rank the result."""
    comp_type = competition.type
    if comp_type is CompetitionType.MEDAL_STROKEPLAY:
        rounds = [
            compute_player_round(p, competition.course, competition.handicap_allowance,
                                 comp_type.metric)
            for p in competition.players
        ]
        rows = rank_medal(rounds)
        return Leaderboard(
            competition_id=competition.id,
            type=comp_type,
            metric=comp_type.metric,
            rows=rows,
            good_scores=good_scores(rows),
        )

    teams: List[TeamRound] = []
    for idx in range(len(competition.groups)):
        teams.extend(build_group_teams(competition, idx, backend_totals))

    return Leaderboard(
        competition_id=competition.id,
        type=comp_type,
        metric=comp_type.metric,
        rows=rank_teams(teams),
        mismatched_team_ids=[t.team_id for t in teams if t.mismatch and t.team_id],
    )


def team_totals(leaderboard: Leaderboard) -> Dict[str, int]:
    """team_id -> live total, the shape stored as the cached aggregate."""
    return {
        row.team.team_id: row.team.total
        for row in leaderboard.rows
        if row.team is not None and row.team.team_id
    }
