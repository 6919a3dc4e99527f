from __future__ import annotations

import logging
from typing import Dict, List, Optional, Sequence

from models import Competition
from scoring import build_leaderboard, compute_player_round, notable_events

from .broadcaster import ConnectionManager
from .dedupe import PopupDeduper, event_signature

logger = logging.getLogger(__name__)


class ScoreAnnouncer:
    """Recomputes after a score write and fans the result out to live clients."""

    def __init__(self, connections: ConnectionManager, deduper: PopupDeduper) -> None:
        self._connections = connections
        self._deduper = deduper

    def build_messages(
        self,
        competition: Competition,
        player_name: str,
        old_scores: Sequence[Optional[int]],
        backend_totals: Optional[Dict[str, int]] = None,
    ) -> List[Dict[str, object]]:
        """Messages for one player's card change; ``competition`` already holds the new cells."""
        player = competition.find_player(player_name)
        if player is None:
            return []

        player_round = compute_player_round(
            player, competition.course, competition.handicap_allowance, competition.type.metric
        )
        leaderboard = build_leaderboard(competition, backend_totals)
        messages: List[Dict[str, object]] = [
            {
                "type": "scores-updated",
                "competitionId": competition.id,
                "player": player_name,
                "round": player_round.model_dump(mode="json"),
                "leaderboard": leaderboard.model_dump(mode="json"),
            }
        ]

        for event in notable_events(old_scores, player.gross_scores, competition.course):
            signature = event_signature(event.category.value, player_name, event.hole, competition.id)
            if not self._deduper.check_and_mark(signature):
                logger.debug("Suppressed duplicate announcement %s", signature)
                continue
            messages.append(
                {
                    "type": "notable-event",
                    "competitionId": competition.id,
                    "player": player_name,
                    **event.model_dump(mode="json"),
                    "celebration": event.category.is_celebration,
                }
            )
        return messages

    async def announce(
        self,
        competition: Competition,
        player_name: str,
        old_scores: Sequence[Optional[int]],
        backend_totals: Optional[Dict[str, int]] = None,
    ) -> List[Dict[str, object]]:
        messages = self.build_messages(competition, player_name, old_scores, backend_totals)
        for message in messages:
            await self._connections.broadcast(str(competition.id), message)
        return messages
