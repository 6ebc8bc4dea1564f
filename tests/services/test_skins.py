"""Tests for the skins evaluator."""

from fractions import Fraction

import pytest

from golfbets.models.game import SkinsGame
from golfbets.models.results import HoleStatus
from golfbets.models.scoring import NetWithAllocations
from golfbets.services.games.skins import SkinsEvaluator
from golfbets.services.settlement_calculator import SettlementCalculator


@pytest.fixture
def evaluator():
    return SkinsEvaluator()


@pytest.fixture
def three_holes(holes_18):
    return holes_18[:3]


class TestSkins:
    """Skins outcomes per hole."""

    def test_two_player_scenario_leaves_carry_unclaimed(self, evaluator, two_players, three_holes, make_snapshot):
        snapshot = make_snapshot(two_players, three_holes, {"a": [4, 4, 4], "b": [5, 3, 4]})
        result = evaluator.evaluate(snapshot, two_players, three_holes, SkinsGame(stakes=5))

        assert result.per_hole[1].status is HoleStatus.WON
        assert result.per_hole[1].winner_id == "a"
        assert result.per_hole[1].pot_amount == 5
        assert result.per_hole[2].winner_id == "b"
        assert result.per_hole[2].pot_amount == 5
        assert result.per_hole[3].status is HoleStatus.CARRIED
        assert result.per_hole[3].winner_id is None
        assert result.totals == {"a": 5, "b": 5}
        assert result.carry_skins == 1
        assert result.unclaimed_amount == 5

        assert SettlementCalculator().calculate(two_players, [result]) == []

    def test_carried_holes_pay_on_decisive_hole(self, evaluator, two_players, three_holes, make_snapshot):
        snapshot = make_snapshot(two_players, three_holes, {"a": [4, 4, 3], "b": [4, 4, 4]})
        result = evaluator.evaluate(snapshot, two_players, three_holes, SkinsGame(stakes=5))

        assert [result.per_hole[n].status for n in (1, 2)] == [HoleStatus.CARRIED] * 2
        assert result.per_hole[3].skins == 3
        assert result.per_hole[3].pot_amount == 15
        assert result.totals == {"a": 15, "b": 0}
        assert result.skins_won == {"a": 3, "b": 0}
        assert result.unclaimed_amount == 0

    def test_winner_collects_from_every_opponent(self, evaluator, players, three_holes, make_snapshot):
        field = players[:3]
        snapshot = make_snapshot(field, three_holes, {"a": [3], "b": [4], "c": [5]})
        result = evaluator.evaluate(snapshot, field, three_holes, SkinsGame(stakes=5))

        assert result.totals["a"] == 10
        report = SettlementCalculator().report(field, [result])
        assert report.balances == {"a": 10, "b": -5, "c": -5}

    def test_tie_forfeited_without_carryover(self, evaluator, two_players, three_holes, make_snapshot):
        snapshot = make_snapshot(two_players, three_holes, {"a": [4, 3, 4], "b": [4, 4, 4]})
        result = evaluator.evaluate(snapshot, two_players, three_holes, SkinsGame(stakes=5, carryover=False))

        assert result.per_hole[1].status is HoleStatus.FORFEITED
        assert result.per_hole[2].pot_amount == 5
        assert result.per_hole[2].skins == 1
        assert result.unclaimed_amount == 0

    def test_pending_hole_neither_evaluated_nor_carried(self, evaluator, two_players, three_holes, make_snapshot):
        snapshot = make_snapshot(two_players, three_holes, {"a": [4, 4, 3], "b": [4, None, 4]})
        result = evaluator.evaluate(snapshot, two_players, three_holes, SkinsGame(stakes=5))

        assert result.per_hole[1].status is HoleStatus.CARRIED
        assert result.per_hole[2].status is HoleStatus.PENDING
        assert result.per_hole[3].winner_id == "a"
        assert result.per_hole[3].skins == 2
        assert result.per_hole[3].pot_amount == 10

    def test_net_scores_decide(self, evaluator, two_players, three_holes, make_snapshot):
        snapshot = make_snapshot(two_players, three_holes, {"a": [4], "b": [5]})
        mode = NetWithAllocations({"b": {1: 1}})
        result = evaluator.evaluate(snapshot, two_players, three_holes, SkinsGame(stakes=5, use_net=True), mode)
        assert result.per_hole[1].status is HoleStatus.CARRIED

    def test_fractional_stakes_stay_exact(self, evaluator, two_players, three_holes, make_snapshot):
        snapshot = make_snapshot(two_players, three_holes, {"a": [4, 4], "b": [4, 5]})
        result = evaluator.evaluate(snapshot, two_players, three_holes, SkinsGame(stakes="0.10"))
        assert result.per_hole[2].pot_amount == Fraction(1, 5)


class TestHoleContext:
    """Pot riding on an upcoming hole."""

    def test_context_after_tie(self, evaluator, two_players, three_holes, make_snapshot):
        snapshot = make_snapshot(two_players, three_holes, {"a": [4], "b": [4]})
        context = evaluator.hole_context(snapshot, two_players, three_holes, SkinsGame(stakes=5), 2)
        assert context.carryovers == 1
        assert context.pot_value == 10
        assert context.message == "$10.00 (1 carryover)"

    def test_context_without_carry(self, evaluator, two_players, three_holes, make_snapshot):
        snapshot = make_snapshot(two_players, three_holes, {"a": [], "b": []})
        context = evaluator.hole_context(snapshot, two_players, three_holes, SkinsGame(stakes=5), 1)
        assert context.carryovers == 0
        assert context.message == "$5.00"
