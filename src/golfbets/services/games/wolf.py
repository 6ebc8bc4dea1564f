"""
Wolf evaluator.

Four players take turns as the wolf in player order. On each hole the wolf
either picks a partner (two against two) or plays alone against the other three,
optionally declaring blind before anyone tees off. Best ball decides each side.
"""

from collections.abc import Mapping, Sequence
from fractions import Fraction

from golfbets.error_codes import ErrorCode
from golfbets.exceptions import ConfigError
from golfbets.models.course import Hole
from golfbets.models.game import WolfDecision, WolfGame
from golfbets.models.player import Player
from golfbets.models.results import WolfHoleResult, WolfOutcome, WolfResult
from golfbets.models.scoring import GROSS, ScoringMode
from golfbets.services.score_table import ScoreSnapshot
from golfbets.utils.logging_utils import LoggerMixin
from golfbets.utils.money import ZERO, Money

WOLF_PLAYERS = 4
LONE_WOLF_POINTS = 4   # per hunter
BLIND_WOLF_POINTS = 8  # per hunter
TEAM_POINTS = 4
PUSH_CARRY_POINTS = 4


def _require_four(players: Sequence[Player]) -> None:
    if len(players) != WOLF_PLAYERS:
        raise ConfigError(
            f"Wolf needs exactly {WOLF_PLAYERS} players, got {len(players)}",
            ErrorCode.INVALID_PLAYERS,
            {"player_count": len(players)}
        )


def wolf_for_hole(players: Sequence[Player], hole_number: int) -> Player:
    """Player who is the wolf on ``hole_number``; hole 1 is the first player."""
    _require_four(players)
    return players[(hole_number - 1) % WOLF_PLAYERS]


def hunting_order(players: Sequence[Player], hole_number: int) -> list[Player]:
    """Tee order for a hole: hunters in player order, the wolf last."""
    wolf = wolf_for_hole(players, hole_number)
    return [p for p in players if p.id != wolf.id] + [wolf]


def validate_decision(players: Sequence[Player], decision: WolfDecision) -> None:
    """
    Check a wolf decision against the players of the round.

    Raises:
        ConfigError: Unknown or self partner, or a blind wolf with a partner
    """
    wolf = wolf_for_hole(players, decision.hole_number)
    if decision.partner_id is None:
        return
    if decision.blind:
        raise ConfigError(
            "A blind wolf plays alone",
            ErrorCode.INVALID_GAME,
            {"hole_number": decision.hole_number, "partner_id": decision.partner_id}
        )
    if decision.partner_id == wolf.id or decision.partner_id not in {p.id for p in players}:
        raise ConfigError(
            f"Invalid wolf partner on hole {decision.hole_number}: {decision.partner_id}",
            ErrorCode.INVALID_GAME,
            {"hole_number": decision.hole_number, "wolf_id": wolf.id, "partner_id": decision.partner_id}
        )


class WolfEvaluator(LoggerMixin):
    """Evaluate a wolf game from a score snapshot and the wolf decisions."""

    def evaluate(
        self,
        snapshot: ScoreSnapshot,
        players: Sequence[Player],
        holes: Sequence[Hole],
        game: WolfGame,
        decisions: Mapping[int, WolfDecision],
        mode: ScoringMode = GROSS
    ) -> WolfResult:
        """
        Evaluate every hole with a decision and all four scores.

        A lone wolf plays for 4 points per hunter (8 when blind) and wins or
        loses them against each of the three hunters. Teams play for 4 points,
        half to each member. A push carries 4 points to the next decided hole
        when carry-over is on. Holes without a decision or without every score
        are pending and do not affect the carry.

        Raises:
            ConfigError: Wrong player count or an invalid decision
        """
        _require_four(players)
        player_ids = tuple(p.id for p in players)
        points: dict[str, Money] = {pid: ZERO for pid in player_ids}
        hole_results: list[WolfHoleResult] = []
        carry = 0

        for hole in sorted(holes, key=lambda h: h.number):
            wolf = wolf_for_hole(players, hole.number)
            decision = decisions.get(hole.number)
            scores = snapshot.hole_scores(hole.number, mode, player_ids)
            if decision is None or scores is None:
                hole_results.append(WolfHoleResult(
                    hole.number, wolf.id,
                    decision.partner_id if decision else None,
                    decision.blind if decision else False,
                    WolfOutcome.PENDING
                ))
                continue
            validate_decision(players, decision)

            wolf_side = [wolf.id] if decision.is_lone_wolf else [wolf.id, decision.partner_id]
            hunters = [pid for pid in player_ids if pid not in wolf_side]
            wolf_best = min(scores[pid] for pid in wolf_side)
            hunter_best = min(scores[pid] for pid in hunters)

            if wolf_best == hunter_best:
                hole_results.append(WolfHoleResult(
                    hole.number, wolf.id, decision.partner_id, decision.blind, WolfOutcome.PUSH
                ))
                if game.carryover:
                    carry += PUSH_CARRY_POINTS
                continue

            if decision.is_lone_wolf:
                per_hunter = BLIND_WOLF_POINTS if decision.blind else LONE_WOLF_POINTS
                hole_points = per_hunter * len(hunters) + carry
                wolf_share = Fraction(hole_points)
                hunter_share = Fraction(hole_points, len(hunters))
            else:
                hole_points = TEAM_POINTS + carry
                wolf_share = hunter_share = Fraction(hole_points, 2)

            outcome = WolfOutcome.WOLF if wolf_best < hunter_best else WolfOutcome.HUNTERS
            sign = 1 if outcome is WolfOutcome.WOLF else -1
            for pid in wolf_side:
                points[pid] += sign * wolf_share
            for pid in hunters:
                points[pid] -= sign * hunter_share

            hole_results.append(WolfHoleResult(
                hole.number, wolf.id, decision.partner_id, decision.blind, outcome, hole_points
            ))
            carry = 0

        if carry:
            self.debug("Wolf points carried past the last hole", points=carry)

        return WolfResult(
            game=game,
            player_ids=player_ids,
            hole_results=hole_results,
            points=points,
            carry_points=carry
        )
