from pydantic import Field
from typing import Iterable, List

from .base import BaseGolfModel


class Hole(BaseGolfModel):
    """A single hole of the competition course."""
    number: int = Field(..., ge=1, le=18)
    par: int = Field(..., ge=3, le=6)
    stroke_index: int = Field(..., ge=1, le=18)

    @property
    def is_front_nine(self) -> bool:
        return self.number <= 9


# (number, par, stroke index) of the club's default card.
_DEFAULT_CARD = [
    (1, 4, 5), (2, 4, 7), (3, 3, 17), (4, 5, 1), (5, 4, 11), (6, 3, 15),
    (7, 5, 3), (8, 4, 13), (9, 4, 9), (10, 4, 10), (11, 4, 4), (12, 4, 12),
    (13, 5, 2), (14, 4, 14), (15, 3, 18), (16, 5, 6), (17, 3, 16), (18, 4, 8),
]

DEFAULT_HOLES: List[Hole] = [
    Hole(number=n, par=p, stroke_index=si) for n, p, si in _DEFAULT_CARD
]


def course_holes(holes: Iterable[Hole]) -> List[Hole]:
    """Return the 18-hole table ordered by number, falling back to DEFAULT_HOLES."""
    ordered = sorted(holes or [], key=lambda h: h.number)
    if len(ordered) != 18 or len({h.number for h in ordered}) != 18:
        return list(DEFAULT_HOLES)
    return ordered
