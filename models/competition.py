from datetime import datetime
from enum import Enum
from pydantic import Field, field_validator, model_validator
from typing import List, Optional

from .base import BaseGolfModel
from .hole import Hole, course_holes
from .player import Player


class ScoreMetric(str, Enum):
    """Which per-hole statistic a competition totals."""
    NET = "net"
    POINTS = "points"


class CompetitionType(str, Enum):
    MEDAL_STROKEPLAY = "medalStrokeplay"
    FOUR_BBB = "fourBbbStableford"
    ALLIANCE = "alliance"
    INDIVIDUAL_STABLEFORD = "individualStableford"

    @classmethod
    def parse(cls, raw) -> "CompetitionType":
        """Map the loose spellings found in stored competitions onto a type."""
        if isinstance(raw, cls):
            return raw
        text = str(raw or "").strip().lower()
        if "4bbb" in text or "fourbbb" in text:
            return cls.FOUR_BBB
        if "alliance" in text:
            return cls.ALLIANCE
        if "individual" in text and "stableford" in text:
            return cls.INDIVIDUAL_STABLEFORD
        return cls.MEDAL_STROKEPLAY

    @property
    def default_allowance(self) -> int:
        if self in (CompetitionType.ALLIANCE, CompetitionType.FOUR_BBB):
            return 85
        return 95

    @property
    def metric(self) -> ScoreMetric:
        if self is CompetitionType.MEDAL_STROKEPLAY:
            return ScoreMetric.NET
        return ScoreMetric.POINTS

    @property
    def label(self) -> str:
        return {
            CompetitionType.MEDAL_STROKEPLAY: "Medal Strokeplay",
            CompetitionType.FOUR_BBB: "4BBB Stableford",
            CompetitionType.ALLIANCE: "Alliance",
            CompetitionType.INDIVIDUAL_STABLEFORD: "Individual Stableford",
        }[self]


class Group(BaseGolfModel):
    """A playing group (fourball). Order of players matters for 4BBB pairs."""
    name: Optional[str] = None
    players: List[Player] = Field(default_factory=list)
    tee_time: Optional[str] = None
    team_ids: List[str] = Field(default_factory=list)

    @model_validator(mode='after')
    def validate_unique_names(self):
        names = [p.name for p in self.players]
        if len(names) != len(set(names)):
            raise ValueError(f"Duplicate player name in group '{self.name or ''}'")
        return self

    def get_player(self, name: str) -> Optional[Player]:
        for player in self.players:
            if player.name == name:
                return player
        return None


class Competition(BaseGolfModel):
    """A competition day: format, allowance, course table and groups."""
    id: Optional[str] = None
    type: CompetitionType = CompetitionType.MEDAL_STROKEPLAY
    date: Optional[datetime] = None
    club: Optional[str] = None
    handicap_allowance: Optional[float] = None
    join_code: Optional[str] = None
    notes: Optional[str] = None
    status: Optional[str] = None
    holes: List[Hole] = Field(default_factory=list)
    groups: List[Group] = Field(default_factory=list)

    @field_validator('type', mode='before')
    @classmethod
    def parse_type(cls, v):
        return CompetitionType.parse(v)

    @field_validator('handicap_allowance', mode='before')
    @classmethod
    def blank_allowance(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @model_validator(mode='after')
    def apply_defaults(self):
        # Assigning through object.__setattr__ avoids re-running validation.
        if self.handicap_allowance is None:
            object.__setattr__(self, 'handicap_allowance', self.type.default_allowance)
        if len(self.holes) != 18:
            object.__setattr__(self, 'holes', course_holes(self.holes))
        return self

    @property
    def course(self) -> List[Hole]:
        return course_holes(self.holes)

    @property
    def players(self) -> List[Player]:
        return [p for g in self.groups for p in g.players]

    def find_player(self, name: str) -> Optional[Player]:
        for group in self.groups:
            player = group.get_player(name)
            if player is not None:
                return player
        return None

    def group_index_of(self, name: str) -> Optional[int]:
        for idx, group in enumerate(self.groups):
            if group.get_player(name) is not None:
                return idx
        return None
