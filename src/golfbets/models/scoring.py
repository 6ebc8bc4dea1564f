"""Gross or net scoring, passed uniformly to every evaluator."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Union

from golfbets.exceptions import InvariantViolation

StrokeAllocation = Mapping[int, int]


def net_score(gross: int, strokes_received: int) -> int:
    """Gross strokes minus handicap strokes on the hole. Not clamped.

    Raises:
        InvariantViolation: If the gross score could never have been recorded
    """
    if gross < 1:
        raise InvariantViolation(
            f"Net score requested for impossible gross score {gross}",
            {"gross": gross, "strokes_received": strokes_received}
        )
    return gross - strokes_received


@dataclass(frozen=True)
class Gross:
    """Compare raw strokes."""

    def strokes_received(self, player_id: str, hole_number: int) -> int:
        return 0

    def adjust(self, player_id: str, hole_number: int, gross: int) -> int:
        return net_score(gross, 0)


@dataclass(frozen=True)
class NetWithAllocations:
    """Compare strokes minus each player's handicap strokes on the hole.

    Players missing from ``allocations`` receive no strokes.
    """
    allocations: Mapping[str, StrokeAllocation] = field(default_factory=dict)

    def __post_init__(self) -> None:
        frozen = {
            player_id: MappingProxyType(dict(allocation))
            for player_id, allocation in self.allocations.items()
        }
        object.__setattr__(self, "allocations", MappingProxyType(frozen))

    def strokes_received(self, player_id: str, hole_number: int) -> int:
        allocation = self.allocations.get(player_id)
        if allocation is None:
            return 0
        return allocation.get(hole_number, 0)

    def adjust(self, player_id: str, hole_number: int, gross: int) -> int:
        return net_score(gross, self.strokes_received(player_id, hole_number))


ScoringMode = Union[Gross, NetWithAllocations]

GROSS = Gross()
