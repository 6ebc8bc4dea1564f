"""Tests for the Nassau evaluator and presses."""

from fractions import Fraction

import pytest

from golfbets.config.types import EngineSettings
from golfbets.error_codes import ErrorCode
from golfbets.exceptions import ConfigError
from golfbets.models.game import NassauGame, NassauSegment, Press, PressStatus
from golfbets.models.results import SegmentStatus
from golfbets.services.games.nassau import (
    NassauEvaluator,
    can_press,
    create_press,
    format_segment_status,
)
from golfbets.services.settlement_calculator import SettlementCalculator


@pytest.fixture
def evaluator():
    return NassauEvaluator()


@pytest.fixture
def game():
    return NassauGame(stakes=10)


class TestSegments:
    """Front, back and overall bets."""

    def test_front_and_back_split_overall_push(self, evaluator, game, two_players, holes_18, make_snapshot):
        snapshot = make_snapshot(two_players, holes_18, {"a": [4] * 18, "b": [5] * 9 + [3] * 9})
        result = evaluator.evaluate(snapshot, two_players, game)

        assert result.front9.status is SegmentStatus.DECIDED
        assert result.front9.winner_id == "a"
        assert result.front9.totals == {"a": 36, "b": 45}
        assert result.back9.winner_id == "b"
        assert result.overall.status is SegmentStatus.PUSH
        assert result.overall.amount == 0

        assert SettlementCalculator().calculate(two_players, [result]) == []

    def test_partial_round_is_pending_with_provisional_leader(self, evaluator, game, two_players, holes_18, make_snapshot):
        snapshot = make_snapshot(two_players, holes_18, {"a": [4] * 5, "b": [5, 5, 4, 4, 4]})
        result = evaluator.evaluate(snapshot, two_players, game)

        assert result.front9.status is SegmentStatus.PENDING
        assert result.front9.winner_id is None
        assert result.front9.leader_id == "a"
        assert result.front9.margin == 2
        assert result.front9.holes_played == 5
        assert result.back9.status is SegmentStatus.PENDING
        assert result.back9.leader_id is None
        assert result.overall.status is SegmentStatus.PENDING

        assert SettlementCalculator().calculate(two_players, [result]) == []

    def test_nine_hole_round_has_no_back_nine(self, evaluator, game, two_players, holes_9, make_snapshot):
        snapshot = make_snapshot(two_players, holes_9, {"a": [4] * 9, "b": [5] * 9})
        result = evaluator.evaluate(snapshot, two_players, game, total_holes=9)

        assert result.back9.status is SegmentStatus.NOT_PLAYED
        assert result.front9.winner_id == "a"
        assert (result.overall.first_hole, result.overall.last_hole) == (1, 9)
        assert result.overall.winner_id == "a"

        report = SettlementCalculator().report(two_players, [result])
        assert report.balances == {"a": 20, "b": -20}

    def test_winner_collects_from_each_player(self, evaluator, game, players, holes_9, make_snapshot):
        field = players[:3]
        snapshot = make_snapshot(field, holes_9, {"a": [4] * 9, "b": [5] * 9, "c": [5] * 9})
        result = evaluator.evaluate(snapshot, field, game, total_holes=9)
        report = SettlementCalculator().report(field, [result])
        assert report.balances == {"a": 40, "b": -20, "c": -20}


class TestPresses:
    """Press sub-bets."""

    def test_press_scored_independently(self, evaluator, game, two_players, holes_18, make_snapshot):
        scores = {"a": [4] * 9, "b": [5, 5, 5, 5, 4, 4, 4, 4, 3]}
        snapshot = make_snapshot(two_players, holes_18, scores)
        press = Press(start_hole=5, stakes=10, initiated_by="b")
        result = evaluator.evaluate(snapshot, two_players, game, [press])

        assert press.segment is NassauSegment.FRONT9
        assert result.front9.winner_id == "a"
        press_result = result.press_results[0].result
        assert (press_result.first_hole, press_result.last_hole) == (5, 9)
        assert press_result.status is SegmentStatus.DECIDED
        assert press_result.winner_id == "b"
        assert press_result.totals == {"a": 20, "b": 19}

        # Front nine won by a, press won by b
        assert SettlementCalculator().calculate(two_players, [result]) == []

    def test_pending_press_excluded(self, evaluator, game, two_players, holes_18, make_snapshot):
        snapshot = make_snapshot(two_players, holes_18, {"a": [4] * 7, "b": [5] * 4 + [3] * 3})
        result = evaluator.evaluate(snapshot, two_players, game, [Press(start_hole=5, stakes=10)])
        assert result.press_results[0].result.status is SegmentStatus.PENDING
        assert SettlementCalculator().calculate(two_players, [result]) == []

    def test_settled_press_not_scored(self, evaluator, game, two_players, holes_18, make_snapshot):
        snapshot = make_snapshot(two_players, holes_18, {"a": [4] * 9, "b": [5] * 9})
        press = Press(start_hole=5, stakes=10, status=PressStatus.SETTLED)
        result = evaluator.evaluate(snapshot, two_players, game, [press])
        assert result.press_results[0].result.status is SegmentStatus.SETTLED
        report = SettlementCalculator().report(two_players, [result])
        assert report.balances == {"a": 10, "b": -10}

    def test_overall_press_runs_to_last_hole(self, evaluator, game, two_players, holes_18, make_snapshot):
        snapshot = make_snapshot(two_players, holes_18, {"a": [4] * 18, "b": [4] * 18})
        press = Press(start_hole=5, stakes=10, segment=NassauSegment.OVERALL)
        result = evaluator.evaluate(snapshot, two_players, game, [press])
        press_result = result.press_results[0].result
        assert (press_result.first_hole, press_result.last_hole) == (5, 18)
        assert press_result.status is SegmentStatus.PUSH

    def test_press_outside_segment_rejected(self, evaluator, game, two_players, holes_18, make_snapshot):
        snapshot = make_snapshot(two_players, holes_18, {"a": [], "b": []})
        press = Press(start_hole=12, stakes=10, segment=NassauSegment.FRONT9)
        with pytest.raises(ConfigError):
            evaluator.evaluate(snapshot, two_players, game, [press])


class TestPressHelpers:
    """Press eligibility and creation."""

    @pytest.fixture
    def snapshot(self, two_players, holes_18, make_snapshot):
        return make_snapshot(two_players, holes_18, {"a": [4] * 4, "b": [5] * 4})

    def test_trailing_player_can_press(self, snapshot, two_players):
        assert can_press(snapshot, two_players, "b", 5)
        assert not can_press(snapshot, two_players, "a", 5)

    def test_threshold_from_settings(self, snapshot, two_players):
        assert not can_press(snapshot, two_players, "b", 5, settings=EngineSettings(press_down_threshold=5))

    def test_press_limit_per_segment(self, snapshot, two_players):
        existing = [Press(start_hole=n, stakes=10) for n in (2, 3, 4)]
        assert not can_press(snapshot, two_players, "b", 5, existing)
        back_nine = [Press(start_hole=n, stakes=10) for n in (10, 11, 12)]
        assert can_press(snapshot, two_players, "b", 5, back_nine)

    def test_no_press_on_last_hole(self, two_players, holes_18, make_snapshot):
        snapshot = make_snapshot(two_players, holes_18, {"a": [4] * 17, "b": [4] * 9 + [5] * 8})
        assert can_press(snapshot, two_players, "b", 17)
        assert not can_press(snapshot, two_players, "b", 18)

    def test_unknown_player_rejected(self, snapshot, two_players):
        with pytest.raises(ConfigError) as exc_info:
            can_press(snapshot, two_players, "zz", 5)
        assert exc_info.value.code is ErrorCode.INVALID_PRESS

    def test_create_press(self):
        press = create_press("b", 5, 10)
        assert press.start_hole == 5
        assert press.initiated_by == "b"
        assert press.status is PressStatus.ACTIVE
        assert press.segment is NassauSegment.FRONT9
        assert press.stakes == Fraction(10)
        assert press.id != create_press("b", 5, 10).id

    def test_status_text(self, evaluator, game, snapshot, two_players):
        result = evaluator.evaluate(snapshot, two_players, game)
        assert format_segment_status(result.front9, {"a": "Alice"}) == "Alice 4 UP"
        assert format_segment_status(result.back9) == "All square"
