"""Hole model and hole list validation."""

from collections.abc import Iterable
from dataclasses import dataclass

from golfbets.error_codes import ErrorCode
from golfbets.exceptions import ConfigError

VALID_ROUND_LENGTHS = (9, 18)
VALID_PARS = (3, 4, 5)


@dataclass(frozen=True)
class Hole:
    """A hole of the course being played.

    ``stroke_index`` ranks difficulty (1 = hardest). When it is missing the
    hole number is used in its place.
    """
    number: int
    par: int
    stroke_index: int | None = None

    @property
    def allocation_rank(self) -> int:
        """Rank used when handing out handicap strokes."""
        return self.stroke_index if self.stroke_index is not None else self.number

    @classmethod
    def from_dict(cls, data: dict) -> "Hole":
        """Create a hole from round-file data."""
        stroke_index = data.get("stroke_index", data.get("handicap"))
        return cls(
            number=int(data["number"]),
            par=int(data["par"]),
            stroke_index=int(stroke_index) if stroke_index is not None else None,
        )


def validate_holes(holes: Iterable[Hole], total_holes: int | None = None) -> tuple[Hole, ...]:
    """Validate a hole list and return it ordered by hole number.

    Raises:
        ConfigError: Wrong count, duplicate or out-of-range numbers, bad par or
            bad stroke indexes
    """
    ordered = tuple(sorted(holes, key=lambda h: h.number))
    count = len(ordered)

    if count not in VALID_ROUND_LENGTHS:
        raise ConfigError(
            f"A round has 9 or 18 holes, got {count}",
            ErrorCode.INVALID_HOLES,
            {"hole_count": count}
        )
    if total_holes is not None and count != total_holes:
        raise ConfigError(
            f"Round declares {total_holes} holes but {count} were supplied",
            ErrorCode.INVALID_HOLES,
            {"hole_count": count, "total_holes": total_holes}
        )

    numbers = [h.number for h in ordered]
    if numbers != list(range(1, count + 1)):
        raise ConfigError(
            f"Hole numbers must run 1..{count} without duplicates",
            ErrorCode.INVALID_HOLES,
            {"hole_numbers": numbers}
        )

    for hole in ordered:
        if hole.par not in VALID_PARS:
            raise ConfigError(
                f"Hole {hole.number} has invalid par {hole.par}",
                ErrorCode.INVALID_HOLES,
                {"hole_number": hole.number, "par": hole.par}
            )
        if hole.stroke_index is not None and not 1 <= hole.stroke_index <= 18:
            raise ConfigError(
                f"Hole {hole.number} has invalid stroke index {hole.stroke_index}",
                ErrorCode.INVALID_HOLES,
                {"hole_number": hole.number, "stroke_index": hole.stroke_index}
            )

    indexes = [h.stroke_index for h in ordered if h.stroke_index is not None]
    if len(indexes) != len(set(indexes)):
        raise ConfigError(
            "Stroke indexes must be unique",
            ErrorCode.INVALID_HOLES,
            {"stroke_indexes": indexes}
        )

    return ordered


def course_par(holes: Iterable[Hole]) -> int:
    """Total par of the holes."""
    return sum(h.par for h in holes)
