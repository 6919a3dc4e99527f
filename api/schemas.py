"""Request and response models for the HTTP API."""

from datetime import datetime
from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from typing import Dict, List, Optional, Union

from models import Competition, Group, Hole, PlayerRound
from scoring import NotableEvent

Cell = Optional[Union[int, float, str]]


class CompetitionSummaryResponse(BaseModel):
    """Competition header for list views."""
    id: str
    type: str
    label: str
    date: Optional[datetime] = None
    club: Optional[str] = None
    handicap_allowance: Optional[float] = None
    join_code: Optional[str] = None
    status: Optional[str] = None
    notes: Optional[str] = None
    group_count: int = 0
    player_count: int = 0

    @classmethod
    def from_competition(cls, comp: Competition) -> "CompetitionSummaryResponse":
        return cls(
            id=comp.id or "",
            type=comp.type.value,
            label=comp.type.label,
            date=comp.date,
            club=comp.club,
            handicap_allowance=comp.handicap_allowance,
            join_code=comp.join_code,
            status=comp.status,
            notes=comp.notes,
            group_count=len(comp.groups),
            player_count=len(comp.players),
        )


class CreateCompetitionRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    type: str
    date: Optional[datetime] = None
    club: Optional[str] = None
    handicap_allowance: Optional[float] = Field(
        None, validation_alias=AliasChoices("handicap_allowance", "handicapAllowance")
    )
    join_code: Optional[str] = Field(
        None, validation_alias=AliasChoices("join_code", "joinCode")
    )
    notes: Optional[str] = None
    status: Optional[str] = "open"
    holes: List[Hole] = Field(default_factory=list)
    groups: List[Group] = Field(default_factory=list)


class UpdateCompetitionRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    type: Optional[str] = None
    date: Optional[datetime] = None
    club: Optional[str] = None
    handicap_allowance: Optional[float] = Field(
        None, validation_alias=AliasChoices("handicap_allowance", "handicapAllowance")
    )
    notes: Optional[str] = None
    status: Optional[str] = None


class GroupsRequest(BaseModel):
    groups: List[Group]


class EntryUpdateRequest(BaseModel):
    """Player details editable during play."""
    course_handicap: Optional[float] = None
    teebox: Optional[str] = None
    waters: Optional[int] = None
    dog: Optional[bool] = None
    two_clubs: Optional[int] = None
    fines: Optional[int] = None


class ScoresRequest(BaseModel):
    scores: List[Cell] = Field(..., min_length=18, max_length=18)


class CellRequest(BaseModel):
    strokes: Cell = None


class ScoreWriteResponse(BaseModel):
    round: PlayerRound
    events: List[NotableEvent] = Field(default_factory=list)


class SnapshotResponse(BaseModel):
    saved: Dict[str, int]
