from __future__ import annotations

from enum import Enum
from typing import Any, List, Optional, Sequence

from pydantic import BaseModel

from models.hole import Hole, course_holes
from models.player import to_gross


class ScoreCategory(str, Enum):
    """Gross score against par, as used for announcements and cell styling."""
    EAGLE_OR_BETTER = "eagle-or-better"
    BIRDIE = "birdie"
    BOGEY = "bogey"
    DOUBLE_BOGEY = "double-bogey"
    BLOWUP = "blowup"

    @property
    def is_celebration(self) -> bool:
        return self in (ScoreCategory.EAGLE_OR_BETTER, ScoreCategory.BIRDIE)


class NotableEvent(BaseModel):
    hole: int
    category: ScoreCategory
    gross: int
    par: int


def classify_hole_result(gross_score: Any, par: int) -> Optional[ScoreCategory]:
    """Category of a gross score, or None for par or an empty cell."""
    gross = to_gross(gross_score)
    if gross is None:
        return None
    diff = gross - par
    if diff <= -2:
        return ScoreCategory.EAGLE_OR_BETTER
    if diff == -1:
        return ScoreCategory.BIRDIE
    if diff == 0:
        return None
    if diff == 1:
        return ScoreCategory.BOGEY
    if diff == 2:
        return ScoreCategory.DOUBLE_BOGEY
    return ScoreCategory.BLOWUP


def detect_new_result(old_gross: Any, new_gross: Any, par: int) -> Optional[ScoreCategory]:
    """The category just entered, or None if it matches what the cell already showed."""
    new_category = classify_hole_result(new_gross, par)
    if new_category is None:
        return None
    if new_category == classify_hole_result(old_gross, par):
        return None
    return new_category


def notable_events(
    old_scores: Sequence[Any],
    new_scores: Sequence[Any],
    holes: Sequence[Hole],
) -> List[NotableEvent]:
    """One event per hole whose edit produced a new category."""
    events: List[NotableEvent] = []
    for idx, hole in enumerate(course_holes(holes)):
        old = old_scores[idx] if idx < len(old_scores) else None
        new = new_scores[idx] if idx < len(new_scores) else None
        category = detect_new_result(old, new, hole.par)
        if category is not None:
            events.append(
                NotableEvent(hole=hole.number, category=category,
                             gross=to_gross(new), par=hole.par)
            )
    return events
