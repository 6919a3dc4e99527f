from __future__ import annotations

from typing import Any, List, Optional, Sequence

from models.competition import ScoreMetric
from models.hole import Hole, course_holes
from models.player import Player, to_gross
from models.results import PlayerRound

from .handicap import compute_playing_handicap, compute_strokes_received, to_number

FRONT_NINE = slice(0, 9)
BACK_NINE = slice(9, 18)


def compute_net(gross_score: Any, strokes_received: int) -> Optional[int]:
    """Net score for a hole, or None when no gross score has been entered."""
    gross = to_gross(gross_score)
    if gross is None:
        return None
    return gross - strokes_received


def stableford_points(net: Optional[int], par: int) -> int:
    """
    Stableford points for a net score on a hole of the given par.

    net <= par-4 -> 6, par-3 -> 5, par-2 -> 4, par-1 -> 3,
    par -> 2, par+1 -> 1, anything worse -> 0. Unplayed holes score 0.
    """
    if net is None:
        return 0
    diff = net - par
    if diff <= -4:
        return 6
    if diff > 1:
        return 0
    return 2 - diff


def compute_player_round(
    player: Player,
    holes: Sequence[Hole],
    allowance: Any = 100,
    metric: ScoreMetric = ScoreMetric.POINTS,
) -> PlayerRound:
    """
    Score one player's 18 cells against the course.

    ``front``/``back``/``total`` hold the sum of ``metric``: net strokes for
    medal play, Stableford points otherwise. Gross totals, the playing-handicap
    net total and the course-handicap (DTH) net are always filled in. Holes
    without a gross score add nothing and are not counted in ``holes_played``.
    """
    table = course_holes(holes)
    ph = compute_playing_handicap(player.course_handicap, allowance)

    strokes: List[int] = []
    nets: List[Optional[int]] = []
    points: List[int] = []
    grosses: List[int] = []
    for hole, cell in zip(table, player.gross_scores):
        received = compute_strokes_received(ph, hole.stroke_index)
        net = compute_net(cell, received)
        strokes.append(received)
        nets.append(net)
        points.append(stableford_points(net, hole.par))
        grosses.append(to_gross(cell) or 0)

    if metric is ScoreMetric.NET:
        per_hole = [n if n is not None else 0 for n in nets]
    else:
        per_hole = points

    front = sum(per_hole[FRONT_NINE])
    back = sum(per_hole[BACK_NINE])
    gross_total = sum(grosses)
    ch = to_number(player.course_handicap, 0)

    return PlayerRound(
        player_name=player.name,
        course_handicap=ch,
        playing_handicap=ph,
        metric=metric,
        per_hole_strokes=strokes,
        per_hole_net=nets,
        per_hole_points=points,
        front=front,
        back=back,
        total=front + back,
        gross_front=sum(grosses[FRONT_NINE]),
        gross_back=sum(grosses[BACK_NINE]),
        gross_total=gross_total,
        dth_net=gross_total - ch,
        net_total=gross_total - ph,
        points_total=sum(points),
        holes_played=sum(1 for n in nets if n is not None),
    )
