"""Tests for the best-ball evaluator."""

import pytest

from golfbets.config.types import EngineSettings
from golfbets.error_codes import ErrorCode
from golfbets.exceptions import ConfigError
from golfbets.models.game import BestBallGame, Team
from golfbets.models.player import Player
from golfbets.models.results import SegmentStatus
from golfbets.models.scoring import NetWithAllocations
from golfbets.services.games.best_ball import (
    BestBallEvaluator,
    default_teams,
    format_best_ball_status,
    format_relative_to_par,
    validate_teams,
)
from golfbets.services.settlement_calculator import SettlementCalculator

SCORES = {
    "a": [4, 5, 3, 5, 4, 4, 3, 4, 5],
    "b": [5, 4, 4, 5, 4, 5, 3, 4, 5],
    "c": [5, 4, 3, 6, 4, 4, 3, 4, 5],
    "d": [4, 5, 3, 5, 4, 4, 2, 4, 5],
}


@pytest.fixture
def evaluator():
    return BestBallEvaluator()


@pytest.fixture
def game(players):
    return BestBallGame(stakes=10, teams=default_teams(players))


class TestTeams:
    """Default teams and team validation."""

    def test_four_players_pair_up(self, players):
        teams = default_teams(players)
        assert [t.player_ids for t in teams] == [("a", "b"), ("c", "d")]
        assert [t.name for t in teams] == ["Alice & Bob", "Carol & Dave"]

    def test_two_players_play_alone(self, two_players):
        teams = default_teams(two_players)
        assert [(t.id, t.name, t.player_ids) for t in teams] == [
            ("team-1", "Alice", ("a",)),
            ("team-2", "Bob", ("b",)),
        ]

    def test_five_players_need_explicit_teams(self, players):
        extra = players + [Player(id="e", name="Eve")]
        with pytest.raises(ConfigError):
            default_teams(extra)

    @pytest.mark.parametrize("teams", [
        [Team("t1", "One", ("a", "b", "c", "d"))],
        [Team("t1", "One", ("a", "b")), Team("t1", "Two", ("c", "d"))],
        [Team("t1", "One", ("a", "b")), Team("t2", "Two", ())],
        [Team("t1", "One", ("a", "b")), Team("t2", "Two", ("c", "zz"))],
        [Team("t1", "One", ("a", "b")), Team("t2", "Two", ("b", "c"))],
    ])
    def test_invalid_teams(self, players, teams):
        with pytest.raises(ConfigError):
            validate_teams(players, teams)


class TestBestBall:
    """Team scoring, hole winners and the bet outcome."""

    def test_lowest_team_total_wins(self, evaluator, game, players, holes_9, make_snapshot):
        snapshot = make_snapshot(players, holes_9, SCORES)
        result = evaluator.evaluate(snapshot, players, holes_9, game)

        first, second = result.standings
        assert (first.team.id, first.total, first.relative_to_par) == ("team-2", 35, -1)
        assert (second.team.id, second.total, second.relative_to_par) == ("team-1", 36, 0)
        assert first.contributions == {"c": 6, "d": 3}
        assert second.contributions == {"a": 8, "b": 1}
        assert result.status is SegmentStatus.DECIDED
        assert result.winner_team_id == "team-2"

    def test_hole_winners_and_match_status(self, evaluator, game, players, holes_9, make_snapshot):
        snapshot = make_snapshot(players, holes_9, SCORES)
        result = evaluator.evaluate(snapshot, players, holes_9, game)

        winners = {h.hole_number: h.winning_team_id for h in result.hole_results}
        assert winners[7] == "team-2"
        assert [n for n, w in winners.items() if w is not None] == [7]
        assert result.hole_results[0].contributors == {"team-1": "a", "team-2": "d"}
        assert result.match_leader == ("team-2", 1)
        assert format_best_ball_status(result) == "Carol & Dave 1 UP"

    def test_incomplete_hole_is_pending(self, evaluator, game, players, holes_9, make_snapshot):
        scores = dict(SCORES, d=SCORES["d"][:8] + [None])
        snapshot = make_snapshot(players, holes_9, scores)
        result = evaluator.evaluate(snapshot, players, holes_9, game)

        assert result.hole_results[-1].pending
        assert result.status is SegmentStatus.PENDING
        assert result.winner_team_id is None
        assert {s.team.id: s.holes_played for s in result.standings} == {"team-1": 8, "team-2": 8}

    def test_equal_totals_push(self, evaluator, two_players, holes_9, make_snapshot):
        snapshot = make_snapshot(two_players, holes_9, {"a": SCORES["a"], "b": SCORES["a"]})
        result = evaluator.evaluate(snapshot, two_players, holes_9, BestBallGame(stakes=5))

        assert result.status is SegmentStatus.PUSH
        assert format_best_ball_status(result) == "All square"
        assert [t.id for t in result.teams] == ["team-1", "team-2"]

    def test_net_scores(self, evaluator, two_players, holes_9, make_snapshot):
        snapshot = make_snapshot(two_players, holes_9, {"a": [4], "b": [5]})
        mode = NetWithAllocations({"b": {1: 1}})
        result = evaluator.evaluate(snapshot, two_players, holes_9, BestBallGame(stakes=5), mode)
        assert result.hole_results[0].team_scores == {"team-1": 4, "team-2": 4}
        assert result.hole_results[0].winning_team_id is None

    def test_unknown_team_player_rejected(self, evaluator, two_players, holes_9, make_snapshot):
        game = BestBallGame(stakes=5, teams=(Team("t1", "One", ("a",)), Team("t2", "Two", ("zz",))))
        snapshot = make_snapshot(two_players, holes_9, {})
        with pytest.raises(ConfigError) as exc_info:
            evaluator.evaluate(snapshot, two_players, holes_9, game)
        assert exc_info.value.code is ErrorCode.INVALID_PLAYERS


def test_losing_team_pays_winning_team(evaluator, game, players, holes_9, make_snapshot):
    snapshot = make_snapshot(players, holes_9, SCORES)
    result = evaluator.evaluate(snapshot, players, holes_9, game)
    report = SettlementCalculator(EngineSettings()).report(players, [result])

    assert report.balances == {"a": -10, "b": -10, "c": 10, "d": 10}
    assert sum(report.balances.values()) == 0


@pytest.mark.parametrize("relative,text", [(0, "E"), (3, "+3"), (-2, "-2")])
def test_relative_to_par(relative, text):
    assert format_relative_to_par(relative) == text
