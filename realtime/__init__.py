from .announcer import ScoreAnnouncer
from .broadcaster import ConnectionManager, manager
from .dedupe import DEFAULT_TTL_SECONDS, PopupDeduper, event_signature, normalize_signature

__all__ = [
    "ScoreAnnouncer",
    "ConnectionManager",
    "manager",
    "DEFAULT_TTL_SECONDS",
    "PopupDeduper",
    "event_signature",
    "normalize_signature",
]
