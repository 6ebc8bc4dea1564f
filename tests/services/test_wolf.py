"""Tests for the wolf evaluator."""

import pytest

from golfbets.exceptions import ConfigError
from golfbets.models.game import WolfDecision, WolfGame
from golfbets.models.results import WolfOutcome
from golfbets.services.games.wolf import WolfEvaluator, hunting_order, wolf_for_hole
from golfbets.services.settlement_calculator import SettlementCalculator


@pytest.fixture
def evaluator():
    return WolfEvaluator()


@pytest.fixture
def game():
    return WolfGame(stakes=1)


def _decisions(*decisions):
    return {d.hole_number: d for d in decisions}


class TestRotation:
    """Wolf order."""

    def test_wolf_rotates_in_player_order(self, players):
        assert [wolf_for_hole(players, n).id for n in range(1, 6)] == ["a", "b", "c", "d", "a"]

    def test_hunting_order_puts_wolf_last(self, players):
        assert [p.id for p in hunting_order(players, 2)] == ["a", "c", "d", "b"]

    def test_requires_four_players(self, players):
        with pytest.raises(ConfigError):
            wolf_for_hole(players[:3], 1)


class TestWolfPoints:
    """Points per hole outcome."""

    def test_lone_wolf_wins(self, evaluator, game, players, holes_18, make_snapshot):
        snapshot = make_snapshot(players, holes_18, {"a": [3], "b": [4], "c": [4], "d": [5]})
        result = evaluator.evaluate(snapshot, players, holes_18, game, _decisions(WolfDecision(1)))

        assert result.hole_results[0].outcome is WolfOutcome.WOLF
        assert result.hole_results[0].points == 12
        assert result.points == {"a": 12, "b": -4, "c": -4, "d": -4}

    def test_blind_wolf_loses(self, evaluator, game, players, holes_18, make_snapshot):
        snapshot = make_snapshot(players, holes_18, {"a": [5], "b": [4], "c": [6], "d": [6]})
        result = evaluator.evaluate(snapshot, players, holes_18, game, _decisions(WolfDecision(1, blind=True)))

        assert result.hole_results[0].outcome is WolfOutcome.HUNTERS
        assert result.points == {"a": -24, "b": 8, "c": 8, "d": 8}

    def test_team_win(self, evaluator, game, players, holes_18, make_snapshot):
        snapshot = make_snapshot(players, holes_18, {"a": [5], "b": [4], "c": [3], "d": [5]})
        result = evaluator.evaluate(snapshot, players, holes_18, game, _decisions(WolfDecision(1, "c")))
        assert result.points == {"a": 2, "b": -2, "c": 2, "d": -2}

    def test_push_carries_to_next_decided_hole(self, evaluator, game, players, holes_18, make_snapshot):
        scores = {"a": [4, 5], "b": [4, 3], "c": [5, 5], "d": [5, 3]}
        snapshot = make_snapshot(players, holes_18, scores)
        decisions = _decisions(WolfDecision(1, "c"), WolfDecision(2, "d"))
        result = evaluator.evaluate(snapshot, players, holes_18, game, decisions)

        assert result.hole_results[0].outcome is WolfOutcome.PUSH
        assert result.hole_results[1].points == 8
        assert result.points == {"a": -4, "b": 4, "c": -4, "d": 4}
        assert result.carry_points == 0

    def test_push_without_carryover(self, evaluator, players, holes_18, make_snapshot):
        scores = {"a": [4, 5], "b": [4, 3], "c": [5, 5], "d": [5, 3]}
        snapshot = make_snapshot(players, holes_18, scores)
        decisions = _decisions(WolfDecision(1, "c"), WolfDecision(2, "d"))
        result = evaluator.evaluate(snapshot, players, holes_18, WolfGame(stakes=1, carryover=False), decisions)
        assert result.points == {"a": -2, "b": 2, "c": -2, "d": 2}

    def test_missing_decision_or_score_is_pending(self, evaluator, game, players, holes_18, make_snapshot):
        snapshot = make_snapshot(players, holes_18, {"a": [4, 4], "b": [5, 5], "c": [5, 5], "d": [5]})
        result = evaluator.evaluate(snapshot, players, holes_18, game, _decisions(WolfDecision(2)))

        assert result.hole_results[0].outcome is WolfOutcome.PENDING
        assert result.hole_results[1].outcome is WolfOutcome.PENDING
        assert all(v == 0 for v in result.points.values())

    def test_points_always_sum_to_zero(self, evaluator, game, players, holes_18, make_snapshot):
        scores = {
            "a": [4, 5, 3, 4, 4],
            "b": [4, 3, 4, 5, 4],
            "c": [5, 5, 4, 3, 5],
            "d": [5, 3, 5, 4, 4],
        }
        snapshot = make_snapshot(players, holes_18, scores)
        decisions = _decisions(
            WolfDecision(1, "c"),
            WolfDecision(2),
            WolfDecision(3, blind=True),
            WolfDecision(4, "a"),
            WolfDecision(5),
        )
        result = evaluator.evaluate(snapshot, players, holes_18, game, decisions)
        assert sum(result.points.values()) == 0

    def test_earnings_settle(self, evaluator, players, holes_18, make_snapshot):
        snapshot = make_snapshot(players, holes_18, {"a": [3], "b": [4], "c": [4], "d": [5]})
        result = evaluator.evaluate(snapshot, players, holes_18, WolfGame(stakes="0.50"), _decisions(WolfDecision(1)))
        report = SettlementCalculator().report(players, [result])
        assert report.balances == {"a": 6, "b": -2, "c": -2, "d": -2}


class TestDecisions:
    """Invalid wolf choices."""

    def test_blind_wolf_cannot_take_partner(self, evaluator, game, players, holes_18, make_snapshot):
        snapshot = make_snapshot(players, holes_18, {pid: [4] for pid in "abcd"})
        with pytest.raises(ConfigError):
            evaluator.evaluate(snapshot, players, holes_18, game, _decisions(WolfDecision(1, "b", blind=True)))

    def test_wolf_cannot_partner_self(self, evaluator, game, players, holes_18, make_snapshot):
        snapshot = make_snapshot(players, holes_18, {pid: [4] for pid in "abcd"})
        with pytest.raises(ConfigError):
            evaluator.evaluate(snapshot, players, holes_18, game, _decisions(WolfDecision(1, "a")))
