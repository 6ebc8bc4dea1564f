"""
Handicap allocation.

Course handicap follows the WHS slope formula ``index * slope / 113``. The
resulting playing handicap is spread over the holes in stroke-index order, one
stroke per hole per pass, so every hole gets ``H // N`` strokes and the
``H % N`` hardest holes get one more.
"""

import math
from collections.abc import Iterable, Sequence
from decimal import Decimal
from fractions import Fraction

from golfbets.config.settings import get_settings
from golfbets.config.types import HALF_EVEN, EngineSettings
from golfbets.exceptions import InvariantViolation, ValidationError
from golfbets.models.course import Hole, course_par
from golfbets.models.player import Player, StrokeMode
from golfbets.models.scoring import NetWithAllocations, StrokeAllocation, net_score
from golfbets.utils.logging_utils import get_logger

logger = get_logger(__name__)

STANDARD_SLOPE = 113

__all__ = [
    'STANDARD_SLOPE',
    'build_allocations',
    'compute_stroke_allocation',
    'course_handicap',
    'net_mode_for',
    'net_score',
    'playing_handicap',
    'player_playing_handicap',
    'prorate_handicap',
    'round_handicap',
]


def round_handicap(value: Fraction, settings: EngineSettings | None = None) -> int:
    """Round a handicap value with the configured rule.

    ``half_up`` sends .5 upwards (12.5 -> 13); ``half_even`` is banker's
    rounding (12.5 -> 12, 13.5 -> 14).
    """
    settings = settings or get_settings()
    if settings.handicap_rounding == HALF_EVEN:
        return round(value)
    return math.floor(value + Fraction(1, 2))


def _exact(value: float | int | Fraction) -> Fraction:
    if isinstance(value, Fraction):
        return value
    return Fraction(Decimal(str(value)))


def course_handicap(
    handicap_index: float,
    slope_rating: int | None = None,
    course_rating: float | None = None,
    par: int | None = None,
    settings: EngineSettings | None = None
) -> int:
    """
    Calculate Course Handicap from a Handicap Index.

    Args:
        handicap_index: Player's handicap index
        slope_rating: Slope of the tees played; defaults to the configured slope
        course_rating: Course rating; only used when enabled in settings
        par: Par of the holes played, needed with ``course_rating``
        settings: Engine settings; defaults to the loaded configuration

    Returns:
        Course handicap, rounded
    """
    settings = settings or get_settings()
    slope = slope_rating if slope_rating is not None else settings.default_slope
    value = _exact(handicap_index) * slope / STANDARD_SLOPE
    if settings.include_course_rating and course_rating is not None and par is not None:
        value += _exact(course_rating) - par
    return round_handicap(value, settings)


def playing_handicap(
    handicap_index: float,
    slope_rating: int | None = None,
    total_holes: int = 18,
    course_rating: float | None = None,
    par: int | None = None,
    settings: EngineSettings | None = None
) -> int:
    """Strokes received over the round.

    Nine-hole rounds use half the course handicap, rounded again. Plus
    handicaps receive no strokes.
    """
    settings = settings or get_settings()
    handicap = course_handicap(handicap_index, slope_rating, course_rating, par, settings)
    if total_holes == 9:
        handicap = round_handicap(Fraction(handicap, 2), settings)
    return max(handicap, 0)


def player_playing_handicap(
    player: Player,
    stroke_mode: StrokeMode,
    slope_rating: int | None = None,
    total_holes: int = 18,
    course_rating: float | None = None,
    par: int | None = None,
    settings: EngineSettings | None = None
) -> int:
    """Playing handicap of a player under the round's stroke mode."""
    if stroke_mode is StrokeMode.MANUAL:
        return player.manual_strokes or 0
    if player.handicap_index is None:
        return 0
    return playing_handicap(
        player.handicap_index, slope_rating, total_holes, course_rating, par, settings
    )


def compute_stroke_allocation(playing_handicap: int, holes: Sequence[Hole]) -> dict[int, int]:
    """
    Distribute handicap strokes across holes.

    Holes are ranked by stroke index (hole number when missing) and handed one
    stroke each per sweep until the strokes run out. Every hole appears in the
    result, scored or not.

    Raises:
        ValidationError: If the playing handicap is negative or not an integer
        InvariantViolation: If the distributed total does not match
    """
    if isinstance(playing_handicap, bool) or not isinstance(playing_handicap, int):
        raise ValidationError(
            f"Playing handicap must be an integer, got {playing_handicap!r}",
            details={"playing_handicap": playing_handicap}
        )
    if playing_handicap < 0:
        raise ValidationError(
            f"Playing handicap cannot be negative, got {playing_handicap}",
            details={"playing_handicap": playing_handicap}
        )

    allocation = {hole.number: 0 for hole in holes}
    if playing_handicap == 0 or not holes:
        return allocation

    ranked = sorted(holes, key=lambda h: (h.allocation_rank, h.number))
    remaining = playing_handicap
    while remaining > 0:
        for hole in ranked:
            if remaining == 0:
                break
            allocation[hole.number] += 1
            remaining -= 1

    if sum(allocation.values()) != playing_handicap:
        raise InvariantViolation(
            "Stroke allocation does not add up to the playing handicap",
            {"playing_handicap": playing_handicap, "allocated": sum(allocation.values())}
        )
    return allocation


def prorate_handicap(
    playing_handicap: int,
    holes_played: int,
    total_holes: int,
    settings: EngineSettings | None = None
) -> int:
    """Share of the playing handicap earned after ``holes_played`` holes."""
    if total_holes <= 0:
        raise ValidationError("Total holes must be positive", details={"total_holes": total_holes})
    return round_handicap(Fraction(playing_handicap * holes_played, total_holes), settings)


def build_allocations(
    players: Iterable[Player],
    holes: Sequence[Hole],
    stroke_mode: StrokeMode = StrokeMode.AUTO,
    slope_rating: int | None = None,
    course_rating: float | None = None,
    settings: EngineSettings | None = None
) -> dict[str, StrokeAllocation]:
    """Stroke allocation for every player of a round."""
    settings = settings or get_settings()
    total_holes = len(holes)
    par = course_par(holes)
    allocations: dict[str, StrokeAllocation] = {}
    for player in players:
        handicap = player_playing_handicap(
            player, stroke_mode, slope_rating, total_holes, course_rating, par, settings
        )
        allocations[player.id] = compute_stroke_allocation(handicap, holes)
        logger.debug(f"Allocated {handicap} strokes to {player.id}")
    return allocations


def net_mode_for(allocations: dict[str, StrokeAllocation]) -> NetWithAllocations:
    """Net scoring mode over precomputed allocations."""
    return NetWithAllocations(allocations)
