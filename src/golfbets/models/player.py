from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from typing import Any

from golfbets.error_codes import ErrorCode
from golfbets.exceptions import ConfigError


class StrokeMode(Enum):
    """How handicap strokes are determined for a round."""
    AUTO = "auto"      # handicap index + slope
    MANUAL = "manual"  # strokes entered directly


@dataclass(frozen=True)
class Player:
    """Golf player taking part in a round."""
    id: str
    name: str
    handicap_index: float | None = None
    manual_strokes: int | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Player":
        """Create Player instance from round-file data."""
        handicap_index = data.get("handicap_index", data.get("handicap"))
        manual_strokes = data.get("manual_strokes")
        return cls(
            id=str(data["id"]),
            name=data.get("name") or str(data["id"]),
            handicap_index=float(handicap_index) if handicap_index is not None else None,
            manual_strokes=int(manual_strokes) if manual_strokes is not None else None,
        )


def validate_players(players: Iterable[Player], stroke_mode: StrokeMode = StrokeMode.AUTO) -> tuple[Player, ...]:
    """Validate the player list of a round, preserving input order.

    Raises:
        ConfigError: Fewer than two players, duplicate ids, or invalid manual
            strokes
    """
    players = tuple(players)
    if len(players) < 2:
        raise ConfigError(
            "A betting round needs at least two players",
            ErrorCode.INVALID_PLAYERS,
            {"player_count": len(players)}
        )

    ids = [p.id for p in players]
    duplicates = sorted({pid for pid in ids if ids.count(pid) > 1})
    if duplicates:
        raise ConfigError(
            "Player ids must be unique",
            ErrorCode.INVALID_PLAYERS,
            {"duplicates": duplicates}
        )

    if stroke_mode is StrokeMode.MANUAL:
        for player in players:
            if player.manual_strokes is not None and player.manual_strokes < 0:
                raise ConfigError(
                    f"Manual strokes for {player.name} cannot be negative",
                    ErrorCode.INVALID_PLAYERS,
                    {"player_id": player.id, "manual_strokes": player.manual_strokes}
                )

    return players
