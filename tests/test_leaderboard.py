from models import (
    DEFAULT_HOLES,
    Competition,
    CompetitionType,
    Group,
    Player,
    PlayerRound,
    ScoreMetric,
    TeamRound,
)
from scoring.leaderboard import build_leaderboard, rank_medal, rank_teams, team_totals

PARS = [h.par for h in DEFAULT_HOLES]
BOGEYS = [p + 1 for p in PARS]


def _team(team_id, total, members=None):
    return TeamRound(team_id=team_id, members=members or [team_id],
                     front=total, back=0, total=total)


# ================================================================
# Ranking
# ================================================================

def test_rank_teams_shares_positions_on_ties():
    rows = rank_teams([_team("a", 38), _team("b", 40), _team("c", 35), _team("d", 38)])
    assert [r.total for r in rows] == [40, 38, 38, 35]
    assert [r.position for r in rows] == [1, 2, 2, 3]
    # stable for equal totals
    assert [r.name for r in rows] == ["b", "a", "d", "c"]


def test_rank_teams_joins_member_names():
    (row,) = rank_teams([_team("g1a", 30, ["Ann", "Bob"])])
    assert row.name == "Ann & Bob"
    assert row.team.team_id == "g1a"


def test_rank_teams_empty():
    assert rank_teams([]) == []


def test_rank_medal_orders_by_holes_then_net():
    rounds = [
        PlayerRound(player_name="A", holes_played=18, net_total=70),
        PlayerRound(player_name="B", holes_played=18, net_total=68),
        PlayerRound(player_name="C", holes_played=10, net_total=30),
        PlayerRound(player_name="D", holes_played=18, net_total=68),
    ]
    rows = rank_medal(rounds)
    assert [r.name for r in rows] == ["B", "D", "A", "C"]
    assert [r.position for r in rows] == [1, 1, 2, 3]
    assert rows[0].thru == "F"
    assert rows[3].thru == 10


# ================================================================
# Full leaderboard
# ================================================================

def test_medal_leaderboard():
    comp = Competition(id="7", type="medalStrokeplay", handicap_allowance=100, groups=[
        Group(players=[
            Player(name="High", course_handicap=18, gross_scores=BOGEYS),
            Player(name="Low", course_handicap=0, gross_scores=PARS),
        ]),
    ])
    board = build_leaderboard(comp)
    assert board.competition_id == "7"
    assert board.type is CompetitionType.MEDAL_STROKEPLAY
    assert board.metric is ScoreMetric.NET
    assert [r.name for r in board.rows] == ["High", "Low"]
    assert [r.position for r in board.rows] == [1, 1]
    assert board.rows[0].player_round.net_total == 72


def test_four_bbb_leaderboard_across_groups():
    comp = Competition(type="fourBbbStableford", groups=[
        Group(name="1", players=[
            Player(name="A", gross_scores=PARS), Player(name="B", gross_scores=BOGEYS),
            Player(name="C", gross_scores=BOGEYS), Player(name="D"),
        ]),
        Group(name="2", players=[
            Player(name="E", gross_scores=BOGEYS), Player(name="F"),
            Player(name="G", gross_scores=PARS), Player(name="H", gross_scores=PARS),
        ]),
    ])
    board = build_leaderboard(comp, {"g1a": 36, "g2a": 20})
    assert [r.position for r in board.rows] == [1, 1, 2, 2]
    assert {r.team.team_id for r in board.rows[:2]} == {"g1a", "g2b"}
    assert board.mismatched_team_ids == ["g2a"]

    totals = team_totals(board)
    assert totals == {"g1a": 36, "g1b": 18, "g2a": 18, "g2b": 36}


def test_leaderboard_with_no_players():
    board = build_leaderboard(Competition(type="alliance"))
    assert board.rows == []
    assert board.mismatched_team_ids == []


def test_medal_good_scores_need_finished_card_below_70():
    comp = Competition(type="medalStrokeplay", handicap_allowance=100, groups=[
        Group(players=[
            Player(name="Seventy", course_handicap=2, gross_scores=PARS),
            Player(name="SixtyNine", course_handicap=3, gross_scores=PARS),
            Player(name="Unfinished", course_handicap=20, gross_scores=PARS[:17]),
        ]),
    ])
    board = build_leaderboard(comp)

    assert [r.player_round.dth_net for r in board.rows] == [69, 70, 68 - 20]
    assert [r.name for r in board.good_scores] == ["SixtyNine"]


def test_good_scores_only_on_medal_boards():
    comp = Competition(type="alliance", groups=[
        Group(players=[Player(name="A", course_handicap=10, gross_scores=PARS)]),
    ])
    assert build_leaderboard(comp).good_scores == []
