import pytest
from unittest.mock import AsyncMock

from models import DEFAULT_HOLES, Competition, Group, Player
from realtime import ConnectionManager, PopupDeduper, ScoreAnnouncer, event_signature, normalize_signature

PARS = [h.par for h in DEFAULT_HOLES]


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def deduper(clock):
    return PopupDeduper(ttl_seconds=10, clock=clock)


def _socket():
    ws = AsyncMock()
    ws.send_json = AsyncMock()
    return ws


# ================================================================
# Deduper
# ================================================================

def test_normalize_signature():
    assert normalize_signature("  Birdie|O’Brien|3|7 ") == "birdie|obrien|3|7"
    assert normalize_signature('birdie|"Mac"  Smith|3|7') == "birdie|mac smith|3|7"


def test_event_signature():
    assert event_signature("birdie", "Ann", 3, "7") == "birdie|Ann|3|7"
    assert event_signature("birdie", "Ann", 3, None) == "birdie|Ann|3|"


def test_shown_once_within_window(deduper, clock):
    assert deduper.check_and_mark("birdie|ann|3|7")
    clock.now += 5
    assert not deduper.check_and_mark("birdie|ann|3|7")
    assert not deduper.check_and_mark("Birdie|Ann|3|7")


def test_shown_again_after_window(deduper, clock):
    assert deduper.check_and_mark("sig")
    clock.now += 10
    assert not deduper.check_and_mark("sig")   # boundary is inclusive
    clock.now += 0.5
    assert deduper.check_and_mark("sig")


def test_none_signature_always_shows(deduper):
    assert deduper.check_and_mark(None)
    assert deduper.check_and_mark(None)
    assert len(deduper) == 0


def test_expired_signatures_are_evicted(deduper, clock):
    deduper.check_and_mark("old")
    clock.now += 8
    deduper.check_and_mark("new")
    clock.now += 5
    deduper.check_and_mark("newest")
    assert len(deduper) == 2
    assert not deduper.check_and_mark("new")


def test_map_stays_bounded_as_time_passes(deduper, clock):
    for idx in range(1000):
        assert deduper.check_and_mark(f"birdie|player{idx}|3|7")
        clock.now += 60
    assert len(deduper) == 1


# ================================================================
# Connection manager
# ================================================================

@pytest.mark.asyncio
async def test_broadcast_reaches_competition_subscribers():
    connections = ConnectionManager()
    first, second, other = _socket(), _socket(), _socket()
    await connections.connect("1", first)
    await connections.connect("1", second)
    await connections.connect("2", other)

    delivered = await connections.broadcast("1", {"type": "ping"})

    assert delivered == 2
    first.accept.assert_awaited_once()
    first.send_json.assert_awaited_once_with({"type": "ping"})
    second.send_json.assert_awaited_once_with({"type": "ping"})
    other.send_json.assert_not_awaited()


@pytest.mark.asyncio
async def test_broadcast_drops_failed_sockets():
    connections = ConnectionManager()
    good, bad = _socket(), _socket()
    bad.send_json.side_effect = RuntimeError("closed")
    await connections.connect("1", good)
    await connections.connect("1", bad)

    assert await connections.broadcast("1", {"type": "ping"}) == 1
    assert connections.subscriber_count("1") == 1


@pytest.mark.asyncio
async def test_disconnect_and_empty_broadcast():
    connections = ConnectionManager()
    ws = _socket()
    await connections.connect("1", ws)
    connections.disconnect("1", ws)
    connections.disconnect("1", ws)
    assert connections.subscriber_count("1") == 0
    assert await connections.broadcast("1", {"type": "ping"}) == 0


# ================================================================
# Announcer
# ================================================================

def _competition(scores):
    return Competition(id="7", type="alliance", groups=[
        Group(players=[Player(name="Ann", gross_scores=scores), Player(name="Bob", gross_scores=PARS)]),
    ])


def test_build_messages_includes_round_and_leaderboard(deduper):
    announcer = ScoreAnnouncer(ConnectionManager(), deduper)
    comp = _competition([3])

    messages = announcer.build_messages(comp, "Ann", [None] * 18)

    assert [m["type"] for m in messages] == ["scores-updated", "notable-event"]
    update, event = messages
    assert update["competitionId"] == "7"
    assert update["player"] == "Ann"
    assert update["round"]["total"] == 3
    assert update["leaderboard"]["rows"][0]["total"] == 37
    assert event["category"] == "birdie"
    assert event["hole"] == 1
    assert event["gross"] == 3
    assert event["celebration"] is True


def test_repeat_event_is_suppressed(deduper, clock):
    announcer = ScoreAnnouncer(ConnectionManager(), deduper)
    comp = _competition([3])

    announcer.build_messages(comp, "Ann", [None] * 18)
    repeat = announcer.build_messages(comp, "Ann", [None] * 18)
    assert [m["type"] for m in repeat] == ["scores-updated"]

    clock.now += 60
    later = announcer.build_messages(comp, "Ann", [None] * 18)
    assert [m["type"] for m in later] == ["scores-updated", "notable-event"]


def test_unknown_player_produces_nothing(deduper):
    announcer = ScoreAnnouncer(ConnectionManager(), deduper)
    assert announcer.build_messages(_competition([3]), "Zed", [None] * 18) == []


@pytest.mark.asyncio
async def test_announce_broadcasts_every_message(deduper):
    connections = ConnectionManager()
    ws = _socket()
    await connections.connect("7", ws)
    announcer = ScoreAnnouncer(connections, deduper)

    messages = await announcer.announce(_competition([3]), "Ann", [None] * 18)

    assert len(messages) == 2
    assert ws.send_json.await_count == 2
