from .base import BaseGolfModel
from .competition import Competition, CompetitionType, Group, ScoreMetric
from .hole import DEFAULT_HOLES, Hole, course_holes
from .player import HOLES_PER_ROUND, Player
from .results import Leaderboard, PlayerRound, RankedRow, TeamRound

__all__ = [
    "BaseGolfModel",
    "Competition",
    "CompetitionType",
    "DEFAULT_HOLES",
    "Group",
    "HOLES_PER_ROUND",
    "Hole",
    "Leaderboard",
    "Player",
    "PlayerRound",
    "RankedRow",
    "ScoreMetric",
    "TeamRound",
    "course_holes",
]
