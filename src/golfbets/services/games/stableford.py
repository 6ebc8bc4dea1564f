"""
Stableford evaluator.

Each hole earns points from the score relative to par, so one blow-up hole
costs little. The standard table rewards par with 2 points; the modified table
pays more for birdies and better and takes points away for bogeys and worse.
"""

from collections.abc import Sequence

from golfbets.models.course import Hole
from golfbets.models.game import StablefordGame
from golfbets.models.player import Player
from golfbets.models.results import SegmentStatus, StablefordResult, StablefordStanding
from golfbets.models.scoring import GROSS, ScoringMode
from golfbets.services.score_table import ScoreSnapshot
from golfbets.utils.logging_utils import LoggerMixin

# Points by strokes relative to par, from albatross (-3 or better) to
# three over or worse.
STANDARD_POINTS = {-3: 5, -2: 4, -1: 3, 0: 2, 1: 1, 2: 0, 3: 0}
MODIFIED_POINTS = {-3: 8, -2: 5, -1: 3, 0: 1, 1: 0, 2: -1, 3: -3}

POINTS_LABELS = {4: "Eagle", 3: "Birdie", 2: "Par", 1: "Bogey", 0: "No points"}


def stableford_points(strokes: int, par: int, modified: bool = False) -> int:
    """Points for one hole."""
    table = MODIFIED_POINTS if modified else STANDARD_POINTS
    relative = max(-3, min(3, strokes - par))
    return table[relative]


def points_label(points: int) -> str:
    """Name of a standard-table result, e.g. ``Birdie`` for 3 points."""
    if points >= 5:
        return "Albatross"
    return POINTS_LABELS.get(points, f"{points} pts")


class StablefordEvaluator(LoggerMixin):
    """Evaluate a Stableford game from a score snapshot."""

    def evaluate(
        self,
        snapshot: ScoreSnapshot,
        players: Sequence[Player],
        holes: Sequence[Hole],
        game: StablefordGame,
        mode: ScoringMode = GROSS
    ) -> StablefordResult:
        """
        Score every hole each player has played.

        Net scoring compares the adjusted score with par. Players level on
        points share a position and keep their input order.

        Args:
            snapshot: Scores to evaluate
            players: Players in the game
            holes: Holes of the round
            game: Stableford configuration
            mode: Gross or net scoring

        Returns:
            Standings, and the winner once the round is complete
        """
        player_ids = tuple(p.id for p in players)
        ordered = sorted(holes, key=lambda h: h.number)

        hole_points: dict[str, dict[int, int]] = {pid: {} for pid in player_ids}
        for pid in player_ids:
            for hole in ordered:
                score = snapshot.net(pid, hole.number, mode)
                if score is not None:
                    hole_points[pid][hole.number] = stableford_points(score, hole.par, game.modified)

        totals = {pid: sum(points.values()) for pid, points in hole_points.items()}
        ranked = sorted(player_ids, key=lambda pid: -totals[pid])
        standings = []
        for index, pid in enumerate(ranked):
            if index and totals[pid] == totals[ranked[index - 1]]:
                position = standings[-1].position
            else:
                position = index + 1
            standings.append(StablefordStanding(pid, totals[pid], hole_points[pid], position))

        holes_complete = sum(1 for h in ordered if snapshot.all_scored(h.number, player_ids))
        winner_id = None
        if holes_complete < len(ordered):
            status = SegmentStatus.PENDING
        elif len(ranked) > 1 and totals[ranked[0]] == totals[ranked[1]]:
            status = SegmentStatus.PUSH
        else:
            status = SegmentStatus.DECIDED
            winner_id = ranked[0]

        self.debug("Stableford evaluated", status=status.value, holes_complete=holes_complete)
        return StablefordResult(
            game=game,
            player_ids=player_ids,
            standings=standings,
            status=status,
            holes_complete=holes_complete,
            winner_id=winner_id
        )
