"""
Nassau evaluator.

A Nassau is three aggregate-stroke bets over the front nine, the back nine and
the whole round. Presses are extra bets over a tail of one segment; each one is
scored on its own and never alters the segment it was raised in.
"""

from collections.abc import Iterable, Sequence

from golfbets.config.settings import get_settings
from golfbets.config.types import EngineSettings
from golfbets.error_codes import ErrorCode
from golfbets.exceptions import ConfigError
from golfbets.models.game import NassauGame, NassauSegment, Press, PressStatus
from golfbets.models.player import Player
from golfbets.models.results import NassauResult, PressResult, SegmentResult, SegmentStatus
from golfbets.models.scoring import GROSS, ScoringMode
from golfbets.services.score_table import ScoreSnapshot
from golfbets.utils.logging_utils import LoggerMixin
from golfbets.utils.money import Money, MoneyLike


def _leader(totals: dict[str, int]) -> tuple[str | None, int]:
    """Single lowest total and its margin over the next best, or (None, 0) on a tie."""
    if len(totals) < 2:
        return None, 0
    ranked = sorted(totals.items(), key=lambda item: item[1])
    (leader_id, best), (_, second) = ranked[0], ranked[1]
    if best == second:
        return None, 0
    return leader_id, second - best


def evaluate_segment(
    snapshot: ScoreSnapshot,
    player_ids: Sequence[str],
    first_hole: int,
    last_hole: int,
    stakes: Money,
    mode: ScoringMode = GROSS
) -> SegmentResult:
    """
    Aggregate-stroke result over ``first_hole``..``last_hole``.

    Totals only count holes every player has scored. The segment stays pending
    until all of its holes are complete; meanwhile the leader and margin are
    provisional.
    """
    numbers = [n for n in snapshot.hole_numbers if first_hole <= n <= last_hole]
    totals = {pid: 0 for pid in player_ids}
    holes_played = 0
    for number in numbers:
        scores = snapshot.hole_scores(number, mode, player_ids)
        if scores is None:
            continue
        holes_played += 1
        for pid, value in scores.items():
            totals[pid] += value

    leader_id, margin = _leader(totals) if holes_played else (None, 0)
    if holes_played < len(numbers) or not numbers:
        status = SegmentStatus.PENDING
        winner_id = None
    elif leader_id is None:
        status = SegmentStatus.PUSH
        winner_id = None
    else:
        status = SegmentStatus.DECIDED
        winner_id = leader_id

    return SegmentResult(
        first_hole=first_hole,
        last_hole=last_hole,
        status=status,
        stakes=stakes,
        totals=totals,
        holes_played=holes_played,
        winner_id=winner_id,
        leader_id=leader_id,
        margin=margin
    )


class NassauEvaluator(LoggerMixin):
    """Evaluate a Nassau and its presses from a score snapshot."""

    def evaluate(
        self,
        snapshot: ScoreSnapshot,
        players: Sequence[Player],
        game: NassauGame,
        presses: Iterable[Press] = (),
        total_holes: int = 18,
        mode: ScoringMode = GROSS
    ) -> NassauResult:
        """
        Evaluate the three segments and every press.

        Settled presses are reported with a ``SETTLED`` status and are not
        scored again.

        Raises:
            ConfigError: If a press starts outside its segment
        """
        player_ids = tuple(p.id for p in players)
        segments: dict[NassauSegment, SegmentResult] = {}
        for segment in NassauSegment:
            hole_range = segment.hole_range(total_holes)
            if hole_range is None:
                segments[segment] = SegmentResult(10, 18, SegmentStatus.NOT_PLAYED, game.stakes)
                continue
            segments[segment] = evaluate_segment(
                snapshot, player_ids, hole_range[0], hole_range[1], game.stakes, mode
            )

        press_results = []
        for press in presses:
            first, last = press.hole_range(total_holes)
            if press.status is PressStatus.SETTLED:
                result = SegmentResult(first, last, SegmentStatus.SETTLED, press.stakes)
            else:
                result = evaluate_segment(snapshot, player_ids, first, last, press.stakes, mode)
            self.debug("Press evaluated", press=press.id, status=result.status.value)
            press_results.append(PressResult(press, result))

        return NassauResult(
            game=game,
            player_ids=player_ids,
            front9=segments[NassauSegment.FRONT9],
            back9=segments[NassauSegment.BACK9],
            overall=segments[NassauSegment.OVERALL],
            press_results=press_results
        )


def segment_standing(
    snapshot: ScoreSnapshot,
    player_ids: Sequence[str],
    player_id: str,
    segment: NassauSegment,
    through_hole: int,
    total_holes: int = 18,
    mode: ScoringMode = GROSS
) -> int:
    """Strokes the player trails the best total by (negative when down).

    Only complete holes of the segment up to ``through_hole`` count.
    """
    hole_range = segment.hole_range(total_holes)
    if hole_range is None:
        return 0
    last = min(hole_range[1], through_hole)
    if last < hole_range[0]:
        return 0
    result = evaluate_segment(snapshot, player_ids, hole_range[0], last, Money(0), mode)
    best = min(result.totals.values())
    return best - result.totals[player_id]


def can_press(
    snapshot: ScoreSnapshot,
    players: Sequence[Player],
    player_id: str,
    current_hole: int,
    presses: Iterable[Press] = (),
    segment: NassauSegment | None = None,
    total_holes: int = 18,
    mode: ScoringMode = GROSS,
    settings: EngineSettings | None = None
) -> bool:
    """
    Whether ``player_id`` may press starting on ``current_hole``.

    The player must be at least ``press_down_threshold`` strokes down in the
    segment, the segment must have fewer than ``max_presses_per_segment``
    presses, and the current hole must come before the last hole of the round.

    Raises:
        ConfigError: If the player is not part of the round
    """
    player_ids = tuple(p.id for p in players)
    if player_id not in player_ids:
        raise ConfigError(
            f"Press requested by unknown player {player_id}",
            ErrorCode.INVALID_PRESS,
            {"player_id": player_id, "hole_number": current_hole}
        )
    settings = settings or get_settings()
    segment = segment or NassauSegment.containing(current_hole)
    hole_range = segment.hole_range(total_holes)
    if hole_range is None or not hole_range[0] <= current_hole <= hole_range[1]:
        return False
    if current_hole >= total_holes:
        return False

    existing = sum(1 for p in presses if p.segment is segment)
    if existing >= settings.max_presses_per_segment:
        return False

    standing = segment_standing(
        snapshot, player_ids, player_id, segment, current_hole - 1, total_holes, mode
    )
    return standing <= -settings.press_down_threshold


def create_press(
    player_id: str,
    current_hole: int,
    stakes: MoneyLike,
    segment: NassauSegment | None = None
) -> Press:
    """New active press from ``current_hole`` to the end of its segment."""
    return Press(
        start_hole=current_hole,
        stakes=stakes,
        status=PressStatus.ACTIVE,
        initiated_by=player_id,
        segment=segment
    )


def format_segment_status(result: SegmentResult, names: dict[str, str] | None = None) -> str:
    """Short status such as ``Alice 2 UP`` or ``All square``."""
    if result.status is SegmentStatus.NOT_PLAYED:
        return "Not played"
    if result.status is SegmentStatus.SETTLED:
        return "Settled"
    if result.leader_id is None or result.margin == 0:
        return "All square"
    names = names or {}
    return f"{names.get(result.leader_id, result.leader_id)} {result.margin} UP"
