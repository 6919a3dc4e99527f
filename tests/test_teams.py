import pytest

from models import DEFAULT_HOLES, Competition, Group, Player, PlayerRound
from scoring.calculator import compute_player_round
from scoring.teams import (
    aggregate_best_of,
    build_group_teams,
    count_best_for,
    split_four_ball_group,
)

PARS = [h.par for h in DEFAULT_HOLES]
BOGEYS = [p + 1 for p in PARS]


def _round(name, points):
    return PlayerRound(player_name=name, per_hole_points=points,
                       holes_played=sum(1 for p in points if p))


# ================================================================
# Best-of aggregation
# ================================================================

def test_count_best_for():
    assert count_best_for(1) == 1
    assert count_best_for(2) == 1
    assert count_best_for(3) == 2
    assert count_best_for(4) == 2


def test_best_two_of_three_on_one_hole():
    rounds = [
        _round("A", [1, 2] + [0] * 16),
        _round("B", [3, 0] + [0] * 16),
        _round("C", [2, 1] + [0] * 16),
    ]
    team = aggregate_best_of(rounds, 2)
    assert team.per_hole_best[:2] == [5, 3]
    assert team.total == 8
    assert team.members == ["A", "B", "C"]


def test_better_ball_of_pair():
    team = aggregate_best_of([_round("A", [2] * 18), _round("B", [3] + [1] * 17)], 1)
    assert team.per_hole_best == [3] + [2] * 17
    assert team.front == 19
    assert team.back == 18
    assert team.total == 37


def test_missing_member_holes_count_as_zero():
    team = aggregate_best_of([_round("A", [2, 2]), _round("B", [1] * 18)], 1)
    assert team.per_hole_best == [2, 2] + [1] * 16


def test_split_four_ball_group():
    assert split_four_ball_group(["a", "b", "c", "d"]) == (["a", "b"], ["c", "d"])
    with pytest.raises(ValueError):
        split_four_ball_group(["a", "b", "c"])


# ================================================================
# Teams per competition format
# ================================================================

def _group(*cards, team_ids=None):
    players = [Player(name=name, gross_scores=scores) for name, scores in cards]
    return Group(name="1", players=players, team_ids=team_ids or [])


def test_four_bbb_splits_positional_pairs():
    comp = Competition(type="fourBbbStableford", groups=[
        _group(("A", PARS), ("B", BOGEYS), ("C", BOGEYS), ("D", [])),
    ])
    teams = build_group_teams(comp, 0)
    assert [t.team_id for t in teams] == ["g1a", "g1b"]
    assert [t.members for t in teams] == [["A", "B"], ["C", "D"]]
    assert [t.total for t in teams] == [36, 18]


def test_team_ids_from_group_are_used():
    comp = Competition(type="fourBbbStableford", groups=[
        _group(("A", PARS), ("B", PARS), ("C", PARS), ("D", PARS), team_ids=["red", "blue"]),
    ])
    assert [t.team_id for t in build_group_teams(comp, 0)] == ["red", "blue"]


def test_alliance_best_two_of_three():
    comp = Competition(type="alliance", groups=[
        _group(("A", PARS), ("B", BOGEYS), ("C", [])),
    ])
    (team,) = build_group_teams(comp, 0)
    assert team.team_id == "g1"
    assert team.per_hole_best == [3] * 18
    assert team.total == 54


def test_alliance_pair_uses_better_ball():
    comp = Competition(type="alliance", groups=[_group(("A", PARS), ("B", BOGEYS))])
    (team,) = build_group_teams(comp, 0)
    assert team.total == 36


def test_individual_stableford_one_team_per_player():
    comp = Competition(type="individualStableford", groups=[
        _group(("A", PARS), ("B", BOGEYS)),
    ])
    teams = build_group_teams(comp, 0)
    assert [t.team_id for t in teams] == ["A", "B"]
    assert [t.total for t in teams] == [36, 18]


def test_backend_totals_are_attached():
    comp = Competition(type="alliance", groups=[_group(("A", PARS), ("B", PARS))])
    (team,) = build_group_teams(comp, 0, {"g1": 30})
    assert team.backend_total == 30
    assert team.mismatch


def test_empty_group_has_no_teams():
    comp = Competition(type="alliance", groups=[Group(name="empty")])
    assert build_group_teams(comp, 0) == []


def test_team_total_matches_member_rounds():
    comp = Competition(type="alliance", handicap_allowance=85, groups=[
        Group(players=[
            Player(name="A", course_handicap=24, gross_scores=BOGEYS),
            Player(name="B", course_handicap=12, gross_scores=PARS),
            Player(name="C", course_handicap=5, gross_scores=BOGEYS[:9]),
        ]),
    ])
    rounds = [compute_player_round(p, comp.course, 85) for p in comp.players]
    expected = sum(
        sum(sorted((r.per_hole_points[i] for r in rounds), reverse=True)[:2])
        for i in range(18)
    )
    (team,) = build_group_teams(comp, 0)
    assert team.total == expected
    assert team.total == team.front + team.back


def test_better_ball_takes_max_per_hole():
    a = _round("A", [2, 3, 0] + [0] * 15)
    b = _round("B", [0, 4, 2] + [0] * 15)
    team = aggregate_best_of([a, b], count_best_for(2))
    assert team.per_hole_best[:3] == [2, 4, 2]
    assert team.front == 8
