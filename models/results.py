from pydantic import Field, model_validator
from typing import List, Optional, Union

from .base import BaseGolfModel
from .competition import CompetitionType, ScoreMetric


def _thru(holes_played: int) -> Union[str, int]:
    return "F" if holes_played >= 18 else holes_played


class PlayerRound(BaseGolfModel):
    """Derived per-hole and total figures for one player's card."""
    player_name: str
    course_handicap: float = 0
    playing_handicap: int = 0
    metric: ScoreMetric = ScoreMetric.POINTS
    per_hole_strokes: List[int] = Field(default_factory=list)
    per_hole_net: List[Optional[int]] = Field(default_factory=list)
    per_hole_points: List[int] = Field(default_factory=list)
    front: int = 0
    back: int = 0
    total: int = 0
    gross_front: int = 0
    gross_back: int = 0
    gross_total: int = 0
    dth_net: float = 0       # gross total less course handicap
    net_total: int = 0       # gross total less playing handicap
    points_total: int = 0
    holes_played: int = 0

    @property
    def thru(self) -> Union[str, int]:
        return _thru(self.holes_played)

    @property
    def is_finished(self) -> bool:
        return self.holes_played >= 18


class TeamRound(BaseGolfModel):
    """Counting score per hole for a team, with an optional cached total to compare."""
    team_id: Optional[str] = None
    group_index: Optional[int] = None
    members: List[str] = Field(default_factory=list)
    per_hole_best: List[int] = Field(default_factory=list)
    front: int = 0
    back: int = 0
    total: int = 0
    holes_played: int = 0
    backend_total: Optional[int] = None

    @model_validator(mode='after')
    def validate_totals(self):
        if self.total != self.front + self.back:
            raise ValueError(
                f"Team total {self.total} != front {self.front} + back {self.back}"
            )
        return self

    @property
    def thru(self) -> Union[str, int]:
        return _thru(self.holes_played)

    @property
    def mismatch(self) -> bool:
        """True when a cached total exists and disagrees with the live one."""
        return self.backend_total is not None and self.backend_total != self.total


class RankedRow(BaseGolfModel):
    position: int = Field(..., ge=1)
    name: str
    total: Union[int, float]
    thru: Union[str, int] = 0
    team: Optional[TeamRound] = None
    player_round: Optional[PlayerRound] = None


class Leaderboard(BaseGolfModel):
    competition_id: Optional[str] = None
    type: CompetitionType
    metric: ScoreMetric
    rows: List[RankedRow] = Field(default_factory=list)
    mismatched_team_ids: List[str] = Field(default_factory=list)
    good_scores: List[RankedRow] = Field(default_factory=list)   # medal only
