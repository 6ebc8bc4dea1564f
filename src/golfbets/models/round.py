"""Round definition: everything needed to evaluate and settle a round."""

from dataclasses import dataclass, field
from typing import Any

from golfbets.error_codes import ErrorCode
from golfbets.exceptions import ConfigError
from golfbets.models.course import Hole
from golfbets.models.game import GameConfig, Press, PropBet, WolfDecision, game_from_dict
from golfbets.models.player import Player, StrokeMode
from golfbets.models.score import Score


@dataclass
class Round:
    """Round setup plus the state recorded during play."""
    holes: list[Hole]
    players: list[Player]
    games: list[GameConfig] = field(default_factory=list)
    stroke_mode: StrokeMode = StrokeMode.AUTO
    slope_rating: int | None = None
    course_rating: float | None = None
    total_holes: int | None = None
    presses: list[Press] = field(default_factory=list)
    prop_bets: list[PropBet] = field(default_factory=list)
    wolf_decisions: dict[int, WolfDecision] = field(default_factory=dict)
    scores: list[Score] = field(default_factory=list)
    name: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Round":
        """Create a round from round-file data.

        Raises:
            ConfigError: If a required section is missing or malformed
        """
        if not isinstance(data, dict):
            raise ConfigError("Round data must be a mapping")
        try:
            course = data.get("course", {}) or {}
            holes_data = data.get("holes", course.get("holes"))
            if holes_data is None:
                raise ConfigError("Round has no holes", ErrorCode.INVALID_HOLES)
            if "players" not in data:
                raise ConfigError("Round has no players", ErrorCode.INVALID_PLAYERS)

            decisions = [WolfDecision.from_dict(d) for d in data.get("wolf_decisions", [])]
            slope = data.get("slope_rating", course.get("slope_rating"))
            rating = data.get("course_rating", course.get("course_rating"))
            total_holes = data.get("total_holes")
            return cls(
                holes=[Hole.from_dict(h) for h in holes_data],
                players=[Player.from_dict(p) for p in data["players"]],
                games=[game_from_dict(g) for g in data.get("games", [])],
                stroke_mode=StrokeMode(data.get("stroke_mode", "auto")),
                slope_rating=int(slope) if slope is not None else None,
                course_rating=float(rating) if rating is not None else None,
                total_holes=int(total_holes) if total_holes is not None else None,
                presses=[Press.from_dict(p) for p in data.get("presses", [])],
                prop_bets=[PropBet.from_dict(b) for b in data.get("prop_bets", [])],
                wolf_decisions={d.hole_number: d for d in decisions},
                scores=[Score.from_dict(s) for s in data.get("scores", [])],
                name=data.get("name") or course.get("name")
            )
        except (KeyError, TypeError, ValueError) as e:
            raise ConfigError(
                f"Malformed round data: {e}",
                details={"error": str(e)}
            ) from e
