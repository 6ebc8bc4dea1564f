"""Stroke play standings for a round in progress."""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from golfbets.config.settings import get_settings
from golfbets.config.types import EngineSettings
from golfbets.models.player import Player
from golfbets.services.handicap_allocator import prorate_handicap
from golfbets.services.score_table import ScoreSnapshot


@dataclass(frozen=True)
class Standing:
    """
    One leaderboard line.

    ``handicap_to_date`` is the playing handicap prorated over the holes the
    player has scored, so net totals of players at different stages of the
    round stay comparable.
    """
    player_id: str
    gross: int
    net: int
    holes_played: int
    handicap_to_date: int
    position: int = 0


def stroke_play_standings(
    snapshot: ScoreSnapshot,
    players: Sequence[Player],
    playing_handicaps: Mapping[str, int] | None = None,
    total_holes: int = 18,
    use_net: bool = False,
    settings: EngineSettings | None = None
) -> list[Standing]:
    """Players ranked by gross (or net) total to date, ties sharing a position."""
    settings = settings or get_settings()
    playing_handicaps = playing_handicaps or {}
    lines = []
    for player in players:
        holes_played = snapshot.holes_scored(player.id)
        gross = snapshot.total_strokes(player.id)
        handicap = prorate_handicap(
            playing_handicaps.get(player.id, 0), holes_played, total_holes, settings
        )
        lines.append(Standing(player.id, gross, gross - handicap, holes_played, handicap))

    key = (lambda s: s.net) if use_net else (lambda s: s.gross)
    ranked = sorted(lines, key=key)
    standings = []
    for index, line in enumerate(ranked):
        if index and key(line) == key(ranked[index - 1]):
            position = standings[-1].position
        else:
            position = index + 1
        standings.append(Standing(
            line.player_id, line.gross, line.net, line.holes_played, line.handicap_to_date, position
        ))
    return standings


def tied_leaders(standings: Sequence[Standing]) -> list[str]:
    """Players sharing first place; empty when there is a single leader."""
    leaders = [s.player_id for s in standings if s.position == 1]
    return leaders if len(leaders) > 1 else []
