from __future__ import annotations

import math
from typing import Any, Iterable, List


def to_number(value: Any, default: float = 0) -> float:
    """Coerce a loosely-typed input to a float, returning ``default`` when unreadable."""
    if value is None or isinstance(value, bool):
        return default
    raw = value if isinstance(value, (int, float)) else str(value).strip()
    try:
        number = float(raw)
    except (ValueError, OverflowError):
        return default
    return number if math.isfinite(number) else default


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def compute_playing_handicap(course_handicap: Any, allowance_percent: Any = 100) -> int:
    """
    Playing Handicap = course handicap scaled by the competition allowance.

    - an empty or unreadable course handicap counts as 0
    - an empty, unreadable or zero allowance counts as 100%
    - halves round up, so 8.5 -> 9
    """
    ch = to_number(course_handicap, 0)
    allowance = to_number(allowance_percent, 100) or 100
    return _round_half_up(ch * allowance / 100)


def compute_strokes_received(playing_handicap: int, stroke_index: int) -> int:
    """
    Strokes a player receives on a hole, always 0, 1 or 2.

    Below 18 the hardest ``playing_handicap`` holes get one stroke. From 18 up
    every hole gets one, and a second is given when either
    ``playing_handicap - 18 >= stroke_index`` or ``stroke_index <= playing_handicap % 18``.
    """
    if playing_handicap <= 0:
        return 0
    if playing_handicap < 18:
        return 1 if stroke_index <= playing_handicap else 0
    if playing_handicap - 18 >= stroke_index or stroke_index <= playing_handicap % 18:
        return 2
    return 1


def strokes_for_course(playing_handicap: int, stroke_indexes: Iterable[int]) -> List[int]:
    """Strokes received on each hole, in the order the indexes are given."""
    return [compute_strokes_received(playing_handicap, si) for si in stroke_indexes]
