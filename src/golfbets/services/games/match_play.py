"""
Match play evaluator.

Two players compare scores hole by hole. The match is decided as soon as the
leader is more holes up than there are holes left; scores entered after that
hole do not count.
"""

from collections.abc import Sequence

from golfbets.error_codes import ErrorCode
from golfbets.exceptions import ConfigError
from golfbets.models.course import Hole
from golfbets.models.game import MatchGame
from golfbets.models.player import Player
from golfbets.models.results import MatchHoleResult, MatchResult, MatchStatus
from golfbets.models.scoring import GROSS, ScoringMode
from golfbets.services.score_table import ScoreSnapshot
from golfbets.utils.logging_utils import LoggerMixin


def margin_label(holes_up: int, holes_remaining: int) -> str:
    """``"3 & 2"`` with holes to spare, ``"1 UP"`` on the final hole."""
    if holes_remaining == 0:
        return f"{holes_up} UP"
    return f"{holes_up} & {holes_remaining}"


class MatchPlayEvaluator(LoggerMixin):
    """Evaluate a two-player match from a score snapshot."""

    def evaluate(
        self,
        snapshot: ScoreSnapshot,
        players: Sequence[Player],
        holes: Sequence[Hole],
        game: MatchGame,
        total_holes: int | None = None,
        mode: ScoringMode = GROSS
    ) -> MatchResult:
        """
        Evaluate the match.

        Holes either player has not scored are skipped; ``holes_remaining`` is
        the match length minus the holes played.

        Raises:
            ConfigError: If there are not exactly two players
        """
        if len(players) != 2:
            raise ConfigError(
                f"Match play needs exactly 2 players, got {len(players)}",
                ErrorCode.INVALID_PLAYERS,
                {"player_count": len(players)}
            )

        first, second = players[0].id, players[1].id
        total = total_holes if total_holes is not None else len(holes)
        hole_results: list[MatchHoleResult] = []
        difference = 0  # positive while the first player leads
        holes_played = 0
        closed_out: int | None = None

        for hole in sorted(holes, key=lambda h: h.number):
            gross_first = snapshot.gross(first, hole.number)
            gross_second = snapshot.gross(second, hole.number)
            if gross_first is None or gross_second is None:
                continue

            net_first = mode.adjust(first, hole.number, gross_first)
            net_second = mode.adjust(second, hole.number, gross_second)
            winner_id = None
            if net_first < net_second:
                winner_id = first
                difference += 1
            elif net_second < net_first:
                winner_id = second
                difference -= 1
            holes_played += 1

            hole_results.append(MatchHoleResult(
                hole_number=hole.number,
                winner_id=winner_id,
                gross_scores={first: gross_first, second: gross_second},
                net_scores={first: net_first, second: net_second},
                strokes_received={
                    first: mode.strokes_received(first, hole.number),
                    second: mode.strokes_received(second, hole.number),
                }
            ))

            if abs(difference) > total - holes_played:
                closed_out = hole.number
                break

        holes_up = abs(difference)
        holes_remaining = total - holes_played
        leader_id = first if difference > 0 else second if difference < 0 else None

        winner_id = None
        label = ""
        if holes_played == 0:
            status = MatchStatus.NOT_STARTED
        elif closed_out is not None:
            status = MatchStatus.WON
            winner_id = leader_id
            label = margin_label(holes_up, holes_remaining)
            self.debug("Match decided", winner=winner_id, margin=label, hole=closed_out)
        elif holes_remaining == 0:
            status = MatchStatus.HALVED
            label = "AS"
        elif holes_up == holes_remaining:
            status = MatchStatus.DORMIE
        else:
            status = MatchStatus.ONGOING

        return MatchResult(
            game=game,
            player_ids=(first, second),
            status=status,
            winner_id=winner_id,
            leader_id=leader_id,
            holes_up=holes_up,
            holes_played=holes_played,
            holes_remaining=holes_remaining,
            hole_closed_out=closed_out,
            win_margin_label=label,
            hole_results=hole_results
        )


def format_match_status(result: MatchResult, names: dict[str, str] | None = None) -> str:
    """Long status such as ``Alice wins 3 & 2`` or ``Bob 2 UP (Dormie)``."""
    names = names or {}
    leader = names.get(result.leader_id, result.leader_id) if result.leader_id else None
    if result.status is MatchStatus.NOT_STARTED:
        return "Match not started"
    if result.status is MatchStatus.WON:
        return f"{leader} wins {result.win_margin_label}"
    if result.status is MatchStatus.HALVED:
        return "Match halved"
    if result.status is MatchStatus.DORMIE:
        return f"{leader} {result.holes_up} UP (Dormie)"
    if result.holes_up == 0:
        return "All square"
    return f"{leader} {result.holes_up} UP"
