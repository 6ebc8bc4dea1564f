"""Tests for the match play evaluator."""

import pytest

from golfbets.exceptions import ConfigError
from golfbets.models.game import MatchGame
from golfbets.models.results import MatchStatus
from golfbets.models.scoring import NetWithAllocations
from golfbets.services.games.match_play import MatchPlayEvaluator, format_match_status, margin_label
from golfbets.services.settlement_calculator import SettlementCalculator


@pytest.fixture
def evaluator():
    return MatchPlayEvaluator()


@pytest.fixture
def game():
    return MatchGame(stakes=20)


class TestMatchPlay:
    """Hole-by-hole match outcomes."""

    def test_closed_out_with_holes_to_spare(self, evaluator, game, two_players, holes_18, make_snapshot):
        # a wins 1-5, 6-14 halved, b wins everything after
        scores = {"a": [3] * 5 + [4] * 9 + [6] * 4, "b": [4] * 14 + [3] * 4}
        snapshot = make_snapshot(two_players, holes_18, scores)
        result = evaluator.evaluate(snapshot, two_players, holes_18, game)

        assert result.status is MatchStatus.WON
        assert result.winner_id == "a"
        assert result.hole_closed_out == 14
        assert result.win_margin_label == "5 & 4"
        assert result.holes_played == 14
        assert len(result.hole_results) == 14

        report = SettlementCalculator().report(two_players, [result])
        assert report.balances == {"a": 20, "b": -20}

    def test_dormie(self, evaluator, game, two_players, holes_18, make_snapshot):
        scores = {"a": [3] * 4 + [4] * 10, "b": [4] * 14}
        snapshot = make_snapshot(two_players, holes_18, scores)
        result = evaluator.evaluate(snapshot, two_players, holes_18, game)

        assert result.status is MatchStatus.DORMIE
        assert result.holes_up == 4
        assert result.holes_remaining == 4
        assert result.winner_id is None
        assert result.win_margin_label == ""
        assert format_match_status(result, {"a": "Alice"}) == "Alice 4 UP (Dormie)"
        assert SettlementCalculator().calculate(two_players, [result]) == []

    def test_won_on_last_hole(self, evaluator, game, two_players, holes_18, make_snapshot):
        snapshot = make_snapshot(two_players, holes_18, {"a": [3] + [4] * 17, "b": [4] * 18})
        result = evaluator.evaluate(snapshot, two_players, holes_18, game)
        assert result.status is MatchStatus.WON
        assert result.hole_closed_out == 18
        assert result.win_margin_label == "1 UP"

    def test_halved(self, evaluator, game, two_players, holes_18, make_snapshot):
        snapshot = make_snapshot(two_players, holes_18, {"a": [3] + [4] * 17, "b": [4] * 17 + [3]})
        result = evaluator.evaluate(snapshot, two_players, holes_18, game)
        assert result.status is MatchStatus.HALVED
        assert result.win_margin_label == "AS"
        assert result.status_brief == "AS"
        assert SettlementCalculator().calculate(two_players, [result]) == []

    def test_not_started(self, evaluator, game, two_players, holes_18, make_snapshot):
        snapshot = make_snapshot(two_players, holes_18, {"a": [4], "b": []})
        result = evaluator.evaluate(snapshot, two_players, holes_18, game)
        assert result.status is MatchStatus.NOT_STARTED
        assert result.holes_remaining == 18
        assert format_match_status(result) == "Match not started"

    def test_unscored_holes_skipped(self, evaluator, game, two_players, holes_18, make_snapshot):
        snapshot = make_snapshot(two_players, holes_18, {"a": [4, 3, 4], "b": [5, None, 4]})
        result = evaluator.evaluate(snapshot, two_players, holes_18, game)
        assert result.status is MatchStatus.ONGOING
        assert [h.hole_number for h in result.hole_results] == [1, 3]
        assert result.holes_played == 2
        assert result.holes_remaining == 16
        assert result.leader_id == "a"
        assert result.status_brief == "1 UP"

    def test_net_strokes_change_hole_winner(self, evaluator, game, two_players, holes_18, make_snapshot):
        snapshot = make_snapshot(two_players, holes_18, {"a": [5], "b": [4]})
        mode = NetWithAllocations({"a": {1: 1}})
        result = evaluator.evaluate(snapshot, two_players, holes_18, MatchGame(stakes=20, use_net=True), mode=mode)
        hole = result.hole_results[0]
        assert hole.winner_id is None
        assert hole.net_scores == {"a": 4, "b": 4}
        assert hole.strokes_received == {"a": 1, "b": 0}

    def test_player_order_does_not_change_outcome(self, evaluator, game, two_players, holes_18, make_snapshot):
        scores = {"a": [3] * 5 + [4] * 9, "b": [4] * 14}
        snapshot = make_snapshot(two_players, holes_18, scores)
        forward = evaluator.evaluate(snapshot, two_players, holes_18, game)
        backward = evaluator.evaluate(snapshot, list(reversed(two_players)), holes_18, game)
        assert (forward.winner_id, forward.win_margin_label) == (backward.winner_id, backward.win_margin_label)

    def test_nine_hole_match(self, evaluator, game, two_players, holes_9, make_snapshot):
        snapshot = make_snapshot(two_players, holes_9, {"a": [3] * 5, "b": [4] * 5})
        result = evaluator.evaluate(snapshot, two_players, holes_9, game)
        assert result.win_margin_label == "5 & 4"

    def test_requires_two_players(self, evaluator, game, players, holes_18, make_snapshot):
        snapshot = make_snapshot(players[:3], holes_18, {})
        with pytest.raises(ConfigError):
            evaluator.evaluate(snapshot, players[:3], holes_18, game)


@pytest.mark.parametrize("up,remaining,label", [
    (3, 2, "3 & 2"),
    (1, 0, "1 UP"),
    (2, 0, "2 UP"),
])
def test_margin_label(up, remaining, label):
    assert margin_label(up, remaining) == label
