from .handicap import (
    compute_playing_handicap,
    compute_strokes_received,
    strokes_for_course,
    to_number,
)
from .calculator import compute_net, compute_player_round, stableford_points
from .teams import aggregate_best_of, build_group_teams, count_best_for, split_four_ball_group
from .leaderboard import build_leaderboard, good_scores, rank_medal, rank_teams, team_totals
from .events import (
    NotableEvent,
    ScoreCategory,
    classify_hole_result,
    detect_new_result,
    notable_events,
)

__all__ = [
    "compute_playing_handicap",
    "compute_strokes_received",
    "strokes_for_course",
    "to_number",
    "compute_net",
    "compute_player_round",
    "stableford_points",
    "aggregate_best_of",
    "build_group_teams",
    "count_best_for",
    "split_four_ball_group",
    "build_leaderboard",
    "good_scores",
    "rank_medal",
    "rank_teams",
    "team_totals",
    "NotableEvent",
    "ScoreCategory",
    "classify_hole_result",
    "detect_new_result",
    "notable_events",
]
