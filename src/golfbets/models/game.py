"""
Betting game configuration models.

Games form a closed set of variants (skins, nassau, match, wolf, stableford,
best ball); each variant has exactly one evaluator and is handled explicitly
by the settlement calculator. Presses, prop bets and wolf decisions are the
only pieces of round state created during play.
"""

import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, Union

from golfbets.error_codes import ErrorCode
from golfbets.exceptions import ConfigError
from golfbets.utils.money import Money, MoneyLike, to_money


def _stakes(value: MoneyLike, owner: str) -> Money:
    """Convert and check a stake amount."""
    try:
        stakes = to_money(value)
    except ValueError as e:
        raise ConfigError(
            f"Invalid stakes for {owner}: {value!r}",
            ErrorCode.INVALID_STAKES,
            {"stakes": value}
        ) from e
    if stakes < 0:
        raise ConfigError(
            f"Stakes for {owner} cannot be negative",
            ErrorCode.INVALID_STAKES,
            {"stakes": value}
        )
    return stakes


@dataclass(frozen=True)
class _Game:
    stakes: Money
    use_net: bool = False

    game_type: ClassVar[str] = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "stakes", _stakes(self.stakes, self.game_type))

    @property
    def label(self) -> str:
        return self.game_type


@dataclass(frozen=True)
class SkinsGame(_Game):
    """Per-hole skins; ``stakes`` is the value of one skin per opponent."""
    carryover: bool = True

    game_type: ClassVar[str] = "skins"


@dataclass(frozen=True)
class NassauGame(_Game):
    """Front nine, back nine and overall bets, each worth ``stakes``."""
    game_type: ClassVar[str] = "nassau"


@dataclass(frozen=True)
class MatchGame(_Game):
    """Two-player match play for ``stakes``."""
    game_type: ClassVar[str] = "match"


@dataclass(frozen=True)
class WolfGame(_Game):
    """Four-player wolf; ``stakes`` is the value of one point."""
    carryover: bool = True

    game_type: ClassVar[str] = "wolf"


@dataclass(frozen=True)
class StablefordGame(_Game):
    """Stableford points against par; ``modified`` uses the aggressive table.

    The top points total wins ``stakes`` from each other player.
    """
    modified: bool = False

    game_type: ClassVar[str] = "stableford"


@dataclass(frozen=True)
class Team:
    """Side in a best-ball game."""
    id: str
    name: str
    player_ids: tuple[str, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "player_ids", tuple(self.player_ids))

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Team":
        team_id = str(data["id"])
        return cls(
            id=team_id,
            name=str(data.get("name") or team_id),
            player_ids=tuple(str(pid) for pid in data.get("player_ids", [])),
        )


@dataclass(frozen=True)
class BestBallGame(_Game):
    """
    Team best ball: each team counts its lowest score on every hole.

    The lowest team total wins; every player on the other teams pays
    ``stakes`` and the winning team shares it. Without ``teams`` the round
    service pairs players up by input order.
    """
    teams: tuple[Team, ...] = ()

    game_type: ClassVar[str] = "bestball"

    def __post_init__(self) -> None:
        super().__post_init__()
        object.__setattr__(self, "teams", tuple(self.teams))


GameConfig = Union[SkinsGame, NassauGame, MatchGame, WolfGame, StablefordGame, BestBallGame]

GAME_TYPES: dict[str, type] = {
    SkinsGame.game_type: SkinsGame,
    NassauGame.game_type: NassauGame,
    MatchGame.game_type: MatchGame,
    WolfGame.game_type: WolfGame,
    StablefordGame.game_type: StablefordGame,
    BestBallGame.game_type: BestBallGame,
}


def game_from_dict(data: dict[str, Any]) -> GameConfig:
    """Create a game config from round-file data."""
    game_type = data.get("type")
    game_cls = GAME_TYPES.get(game_type)
    if game_cls is None:
        raise ConfigError(
            f"Unknown game type: {game_type}",
            ErrorCode.INVALID_GAME,
            {"type": game_type, "known": sorted(GAME_TYPES)}
        )
    kwargs: dict[str, Any] = {
        "stakes": data.get("stakes", 1),
        "use_net": bool(data.get("use_net", False)),
    }
    if game_cls in (SkinsGame, WolfGame):
        kwargs["carryover"] = bool(data.get("carryover", True))
    elif game_cls is StablefordGame:
        kwargs["modified"] = bool(data.get("modified", False))
    elif game_cls is BestBallGame:
        kwargs["teams"] = tuple(Team.from_dict(t) for t in data.get("teams", []))
    return game_cls(**kwargs)


class NassauSegment(Enum):
    """The three Nassau bets."""
    FRONT9 = "front9"
    BACK9 = "back9"
    OVERALL = "overall"

    def hole_range(self, total_holes: int) -> tuple[int, int] | None:
        """First and last hole of the segment, or None if not played."""
        if self is NassauSegment.FRONT9:
            return (1, min(9, total_holes))
        if self is NassauSegment.BACK9:
            return (10, 18) if total_holes == 18 else None
        return (1, total_holes)

    @classmethod
    def containing(cls, hole_number: int) -> "NassauSegment":
        """Nine-hole segment a hole belongs to."""
        return cls.FRONT9 if hole_number <= 9 else cls.BACK9


class PressStatus(Enum):
    ACTIVE = "active"
    SETTLED = "settled"


@dataclass(frozen=True)
class Press:
    """
    Nassau sub-bet raised during play.

    Runs from ``start_hole`` to the end of ``segment``. When no segment is
    given it is the nine the start hole belongs to.
    """
    start_hole: int
    stakes: Money
    status: PressStatus = PressStatus.ACTIVE
    initiated_by: str | None = None
    segment: NassauSegment | None = None
    id: str = field(default_factory=lambda: uuid.uuid4().hex)

    def __post_init__(self) -> None:
        object.__setattr__(self, "stakes", _stakes(self.stakes, "press"))
        if self.segment is None:
            object.__setattr__(self, "segment", NassauSegment.containing(self.start_hole))

    def hole_range(self, total_holes: int) -> tuple[int, int]:
        """Holes covered by the press.

        Raises:
            ConfigError: If the start hole lies outside its segment
        """
        segment_range = self.segment.hole_range(total_holes)
        if segment_range is None or not segment_range[0] <= self.start_hole <= segment_range[1]:
            raise ConfigError(
                f"Press starting on hole {self.start_hole} is outside the {self.segment.value} segment",
                ErrorCode.INVALID_PRESS,
                {"press_id": self.id, "start_hole": self.start_hole, "segment": self.segment.value}
            )
        return (self.start_hole, segment_range[1])

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Press":
        kwargs: dict[str, Any] = {
            "start_hole": int(data["start_hole"]),
            "stakes": data["stakes"],
            "status": PressStatus(data.get("status", "active")),
            "initiated_by": data.get("initiated_by"),
            "segment": NassauSegment(data["segment"]) if data.get("segment") else None,
        }
        if data.get("id"):
            kwargs["id"] = str(data["id"])
        return cls(**kwargs)


class PropBetKind(Enum):
    CLOSEST_TO_PIN = "ctp"
    LONGEST_DRIVE = "longest_drive"
    CUSTOM = "custom"


PROP_BET_LABELS = {
    PropBetKind.CLOSEST_TO_PIN: "Closest to Pin",
    PropBetKind.LONGEST_DRIVE: "Longest Drive",
    PropBetKind.CUSTOM: "Custom Bet",
}


@dataclass(frozen=True)
class PropBet:
    """Side bet on a single hole; every non-winner pays ``stakes``.

    Several winners (a tie) share the collected stakes evenly. A bet without
    winners is still open and moves no money.
    """
    hole_number: int
    stakes: Money
    kind: PropBetKind = PropBetKind.CUSTOM
    description: str | None = None
    winner_ids: tuple[str, ...] = ()
    id: str = field(default_factory=lambda: uuid.uuid4().hex)

    def __post_init__(self) -> None:
        object.__setattr__(self, "stakes", _stakes(self.stakes, "prop bet"))
        object.__setattr__(self, "winner_ids", tuple(self.winner_ids))

    @property
    def label(self) -> str:
        return self.description or PROP_BET_LABELS[self.kind]

    @property
    def is_decided(self) -> bool:
        return bool(self.winner_ids)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PropBet":
        winners = data.get("winner_ids")
        if winners is None:
            winners = [data["winner_id"]] if data.get("winner_id") else []
        kwargs: dict[str, Any] = {
            "hole_number": int(data["hole_number"]),
            "stakes": data["stakes"],
            "kind": PropBetKind(data.get("kind", "custom")),
            "description": data.get("description"),
            "winner_ids": tuple(str(w) for w in winners),
        }
        if data.get("id"):
            kwargs["id"] = str(data["id"])
        return cls(**kwargs)


@dataclass(frozen=True)
class WolfDecision:
    """The wolf's choice on a hole: a partner, or none for a lone wolf."""
    hole_number: int
    partner_id: str | None = None
    blind: bool = False

    @property
    def is_lone_wolf(self) -> bool:
        return self.partner_id is None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "WolfDecision":
        partner = data.get("partner_id")
        return cls(
            hole_number=int(data["hole_number"]),
            partner_id=str(partner) if partner is not None else None,
            blind=bool(data.get("blind", False)),
        )
