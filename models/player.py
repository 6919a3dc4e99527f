import math

from pydantic import Field, field_validator
from typing import Any, List, Optional

from .base import BaseGolfModel

HOLES_PER_ROUND = 18


def to_gross(value: Any) -> Optional[int]:
    """Coerce one scorecard cell; anything that is not a number means 'not played'."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value if isinstance(value, (int, float)) else str(value).strip())
        return int(number)
    except (ValueError, OverflowError):
        return None


class Player(BaseGolfModel):
    """A competitor as seen by the scoring engine.

    Input is lenient on purpose: live entry is partial, so empty or garbled
    cells become None and an unreadable handicap becomes 0.
    """
    name: str
    course_handicap: float = 0
    gross_scores: List[Optional[int]] = Field(
        default_factory=lambda: [None] * HOLES_PER_ROUND
    )
    teebox: Optional[str] = None

    # Side games, displayed on the medal board only
    waters: Optional[int] = None
    dog: bool = False
    two_clubs: Optional[int] = None
    fines: Optional[int] = None

    @field_validator('name', mode='before')
    @classmethod
    def strip_name(cls, v):
        return str(v).strip() if v is not None else ''

    @field_validator('course_handicap', mode='before')
    @classmethod
    def coerce_handicap(cls, v):
        if v is None or isinstance(v, bool):
            return 0
        try:
            number = float(v if isinstance(v, (int, float)) else str(v).strip())
        except (ValueError, OverflowError):
            return 0
        return number if math.isfinite(number) else 0

    @field_validator('gross_scores', mode='before')
    @classmethod
    def coerce_gross_scores(cls, v):
        cells = [to_gross(c) for c in list(v or [])][:HOLES_PER_ROUND]
        return cells + [None] * (HOLES_PER_ROUND - len(cells))

    @field_validator('waters', 'two_clubs', 'fines', mode='before')
    @classmethod
    def coerce_counts(cls, v):
        return to_gross(v)

    @property
    def holes_played(self) -> int:
        return sum(1 for s in self.gross_scores if s is not None)

    def set_score(self, hole_number: int, value: Any) -> None:
        """Overwrite a single cell (last write wins)."""
        if not 1 <= hole_number <= HOLES_PER_ROUND:
            raise ValueError(f"Hole number {hole_number} must be 1-18")
        cells = list(self.gross_scores)
        cells[hole_number - 1] = value
        self.gross_scores = cells
