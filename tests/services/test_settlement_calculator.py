"""Tests for settlement and greedy netting."""

from decimal import Decimal
from fractions import Fraction

import pytest

from golfbets.config.types import EngineSettings
from golfbets.exceptions import ConfigError, InvariantViolation
from golfbets.models.game import PropBet, PropBetKind, SkinsGame, WolfGame
from golfbets.models.results import WolfResult
from golfbets.models.settlement import Settlement, total_winnings
from golfbets.services.games.skins import SkinsEvaluator
from golfbets.services.settlement_calculator import SettlementCalculator, format_settlements
from golfbets.utils.money import quantize


@pytest.fixture
def calculator():
    return SettlementCalculator(EngineSettings())


class TestNetting:
    """Greedy netting of balances."""

    def test_largest_creditor_paid_by_largest_debtor(self, calculator):
        settlements = calculator.net_balances({"a": Fraction(30), "b": Fraction(-10), "c": Fraction(-20)})
        assert settlements == [
            Settlement("c", "a", Decimal("20.00")),
            Settlement("b", "a", Decimal("10.00")),
        ]

    def test_ties_follow_input_order(self, calculator):
        balances = {"a": Fraction(10), "b": Fraction(10), "c": Fraction(-10), "d": Fraction(-10)}
        settlements = calculator.net_balances(balances)
        assert [(s.from_player_id, s.to_player_id) for s in settlements] == [("c", "a"), ("d", "b")]

    def test_amounts_rounded_to_cents(self, calculator):
        settlements = calculator.net_balances({"a": Fraction(10, 3), "b": Fraction(-10, 3)})
        assert settlements == [Settlement("b", "a", Decimal("3.33"))]

    def test_rounding_keeps_balances_zero_sum(self, calculator):
        balances = {"a": Fraction(10, 3), "b": Fraction(10, 3), "c": Fraction(10, 3), "d": Fraction(-10)}
        rounded = calculator.round_balances(balances)
        assert rounded == {"a": Fraction(334, 100), "b": Fraction(333, 100), "c": Fraction(333, 100), "d": -10}

    def test_largest_remainder_gets_the_cent(self, calculator):
        balances = {"a": Fraction(1, 300), "b": Fraction(2, 300), "c": Fraction(-1, 100)}
        assert calculator.round_balances(balances) == {"a": 0, "b": Fraction(1, 100), "c": Fraction(-1, 100)}

    def test_rounding_rejects_unbalanced_input(self, calculator):
        with pytest.raises(InvariantViolation):
            calculator.round_balances({"a": Fraction(1), "b": Fraction(-2)})

    def test_currency_places_from_settings(self):
        calculator = SettlementCalculator(EngineSettings(currency_places=0))
        settlements = calculator.net_balances({"a": Fraction(5, 2), "b": Fraction(-5, 2)})
        assert settlements[0].amount == Decimal("3")

    def test_dust_dropped(self, calculator):
        assert calculator.net_balances({"a": Fraction(1, 1000), "b": Fraction(-1, 1000)}) == []

    def test_all_square(self, calculator):
        assert calculator.net_balances({"a": Fraction(0), "b": Fraction(0)}) == []


class TestPropBets:
    """Side bets settled with the games."""

    def test_single_winner_collects_from_everyone(self, calculator, players):
        bet = PropBet(hole_number=3, stakes=5, kind=PropBetKind.CLOSEST_TO_PIN, winner_ids=("a",))
        report = calculator.report(players, [], [bet])
        assert report.balances == {"a": 15, "b": -5, "c": -5, "d": -5}
        assert "Closest to Pin" in report.breakdown

    def test_tied_winners_split(self, calculator, players):
        bet = PropBet(hole_number=3, stakes=5, winner_ids=("a", "b"))
        report = calculator.report(players, [], [bet])
        assert report.balances == {"a": 5, "b": 5, "c": -5, "d": -5}

    def test_three_way_split_pays_every_cent(self, calculator, players):
        bet = PropBet(hole_number=3, stakes=10, winner_ids=("a", "b", "c"))
        report = calculator.report(players, [], [bet])
        assert report.balances["a"] == Fraction(10, 3)
        assert sum(report.balances.values()) == 0

        rounded = calculator.round_balances(report.balances)
        for player in players:
            assert total_winnings(player.id, report.settlements) == quantize(rounded[player.id])
        assert total_winnings("d", report.settlements) == Decimal("-10.00")
        assert [s.amount for s in report.settlements] == [Decimal("3.34"), Decimal("3.33"), Decimal("3.33")]

    def test_undecided_bet_ignored(self, calculator, players):
        bet = PropBet(hole_number=3, stakes=5)
        assert calculator.calculate(players, [], [bet]) == []

    def test_unknown_winner_rejected(self, calculator, players):
        bet = PropBet(hole_number=3, stakes=5, winner_ids=("z",))
        with pytest.raises(ConfigError):
            calculator.calculate(players, [], [bet])


class TestReport:
    """Round-level settlement."""

    def test_games_and_props_combined(self, calculator, two_players, holes_18, make_snapshot):
        snapshot = make_snapshot(two_players, holes_18, {"a": [3, 4], "b": [4, 4]})
        skins = SkinsEvaluator().evaluate(snapshot, two_players, holes_18, SkinsGame(stakes=5))
        bet = PropBet(hole_number=2, stakes=2, kind=PropBetKind.LONGEST_DRIVE, winner_ids=("b",))

        report = calculator.report(two_players, [skins], [bet])
        assert report.balances == {"a": 3, "b": -3}
        assert report.breakdown["skins"] == {"a": 5, "b": -5}
        assert report.breakdown["Longest Drive"] == {"a": -2, "b": 2}
        assert report.settlements == [Settlement("b", "a", Decimal("3.00"))]

    def test_result_order_does_not_matter(self, calculator, players):
        bets = [
            PropBet(hole_number=3, stakes=5, winner_ids=("a",)),
            PropBet(hole_number=7, stakes=3, winner_ids=("c", "d")),
            PropBet(hole_number=12, stakes=4, winner_ids=("b",)),
        ]
        forward = calculator.calculate(players, [], bets)
        backward = calculator.calculate(players, [], list(reversed(bets)))
        assert forward == backward

    def test_non_zero_sum_result_is_invariant_violation(self, calculator, players):
        broken = WolfResult(
            game=WolfGame(stakes=1),
            player_ids=("a", "b", "c", "d"),
            hole_results=[],
            points={"a": Fraction(4), "b": Fraction(-1), "c": Fraction(-1), "d": Fraction(-1)},
        )
        with pytest.raises(InvariantViolation):
            calculator.calculate(players, [broken])

    def test_unknown_result_type(self, calculator, players):
        with pytest.raises(TypeError):
            calculator.calculate(players, [object()])

    def test_total_winnings_and_text(self, calculator, players):
        bet = PropBet(hole_number=3, stakes=5, winner_ids=("a",))
        settlements = calculator.calculate(players, [], [bet])
        assert total_winnings("a", settlements) == Decimal("15.00")
        assert total_winnings("b", settlements) == Decimal("-5.00")
        assert format_settlements(settlements, {"a": "Alice", "b": "Bob"})[0] == "Bob owes Alice $5.00"
