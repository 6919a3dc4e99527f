"""At-most-once announcements for notable scores within a short window."""

from __future__ import annotations

import re
from threading import Lock
from time import monotonic
from typing import Callable, Dict, Optional

DEFAULT_TTL_SECONDS = 10.0

_SMART_QUOTES = re.compile("[‘’“”]")
_QUOTES = re.compile("[\"']")
_WHITESPACE = re.compile(r"\s+")


def normalize_signature(signature: object) -> str:
    """Fold quotes, whitespace and case so nickname spellings collide."""
    text = _SMART_QUOTES.sub("'", str(signature))
    text = _QUOTES.sub("", text)
    return _WHITESPACE.sub(" ", text).strip().lower()


def event_signature(kind: str, player: str, hole: int, competition_id: Optional[str]) -> str:
    return f"{kind}|{player}|{hole}|{competition_id or ''}"


class PopupDeduper:
    """Signature -> last-shown time, expiring after ``ttl_seconds``."""

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = monotonic,
    ) -> None:
        self._ttl = max(0.0, float(ttl_seconds))
        self._clock = clock
        self._recent: Dict[str, float] = {}
        self._lock = Lock()

    def _evict_expired(self, now: float) -> None:
        stale = [k for k, ts in self._recent.items() if now - ts > self._ttl]
        for key in stale:
            del self._recent[key]

    def check_and_mark(self, signature: Optional[object]) -> bool:
        """True the first time a signature is seen within the window, recording it.

        Expired signatures are evicted on every call, so the map only ever holds
        what was shown during the last ``ttl_seconds``.
        """
        if signature is None:
            return True
        key = normalize_signature(signature)
        with self._lock:
            now = self._clock()
            self._evict_expired(now)
            if key in self._recent:
                return False
            self._recent[key] = now
            return True

    def __len__(self) -> int:
        return len(self._recent)
