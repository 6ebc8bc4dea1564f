"""
Skins evaluator.

Every hole is worth one skin. The single lowest score on a hole wins the pot,
collecting its value from each opponent. A tie carries the skin to the next
evaluated hole when carry-over is on and forfeits it otherwise.
"""

from collections.abc import Sequence

from golfbets.models.course import Hole
from golfbets.models.game import SkinsGame
from golfbets.models.player import Player
from golfbets.models.results import HoleStatus, SkinsHoleContext, SkinsHoleResult, SkinsResult
from golfbets.models.scoring import GROSS, ScoringMode
from golfbets.services.score_table import ScoreSnapshot
from golfbets.utils.logging_utils import LoggerMixin
from golfbets.utils.money import ZERO, Money


class SkinsEvaluator(LoggerMixin):
    """Evaluate a skins game from a score snapshot."""

    def evaluate(
        self,
        snapshot: ScoreSnapshot,
        players: Sequence[Player],
        holes: Sequence[Hole],
        game: SkinsGame,
        mode: ScoringMode = GROSS
    ) -> SkinsResult:
        """
        Evaluate skins hole by hole.

        Holes missing any player's score are reported as pending. They are not
        evaluated and do not carry. A carry still open after the last evaluated
        hole is unclaimed.

        Args:
            snapshot: Scores to evaluate
            players: Players in the game
            holes: Holes of the round
            game: Skins configuration
            mode: Gross or net comparison

        Returns:
            Per-hole outcome and what each player won
        """
        player_ids = tuple(p.id for p in players)
        opponents = len(player_ids) - 1
        per_hole: dict[int, SkinsHoleResult] = {}
        totals: dict[str, Money] = {pid: ZERO for pid in player_ids}
        skins_won: dict[str, int] = {pid: 0 for pid in player_ids}
        carry = 0

        for hole in sorted(holes, key=lambda h: h.number):
            skins = 1 + carry
            pot = game.stakes * skins
            scores = snapshot.hole_scores(hole.number, mode, player_ids)
            if scores is None:
                per_hole[hole.number] = SkinsHoleResult(hole.number, HoleStatus.PENDING, pot_amount=pot)
                continue

            low = min(scores.values())
            leaders = [pid for pid in player_ids if scores[pid] == low]
            if len(leaders) == 1:
                winner = leaders[0]
                per_hole[hole.number] = SkinsHoleResult(
                    hole.number, HoleStatus.WON, winner, skins, pot
                )
                totals[winner] += pot * opponents
                skins_won[winner] += skins
                carry = 0
            elif game.carryover:
                per_hole[hole.number] = SkinsHoleResult(
                    hole.number, HoleStatus.CARRIED, skins=skins, pot_amount=pot
                )
                carry += 1
            else:
                per_hole[hole.number] = SkinsHoleResult(
                    hole.number, HoleStatus.FORFEITED, skins=1, pot_amount=game.stakes
                )

        unclaimed = game.stakes * carry
        if carry:
            self.debug("Skins carry left unclaimed", skins=carry, amount=float(unclaimed))

        return SkinsResult(
            game=game,
            player_ids=player_ids,
            per_hole=per_hole,
            totals=totals,
            skins_won=skins_won,
            carry_skins=carry,
            unclaimed_amount=unclaimed
        )

    def hole_context(
        self,
        snapshot: ScoreSnapshot,
        players: Sequence[Player],
        holes: Sequence[Hole],
        game: SkinsGame,
        hole_number: int,
        mode: ScoringMode = GROSS
    ) -> SkinsHoleContext:
        """Pot riding on ``hole_number`` given the holes evaluated before it."""
        earlier = [h for h in holes if h.number < hole_number]
        result = self.evaluate(snapshot, players, earlier, game, mode)
        return SkinsHoleContext(
            hole_number=hole_number,
            carryovers=result.carry_skins,
            pot_value=game.stakes * (1 + result.carry_skins)
        )
