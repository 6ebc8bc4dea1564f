"""
Settlement calculator.

Every decided game unit and prop bet moves money between players. The signed
balances must sum to exactly zero; they are then netted greedily into a short
list of payments.
"""

import math
from collections.abc import Iterable, Sequence
from fractions import Fraction

from golfbets.config.settings import get_settings
from golfbets.config.types import EngineSettings
from golfbets.error_codes import ErrorCode
from golfbets.exceptions import ConfigError, InvariantViolation
from golfbets.models.game import PropBet
from golfbets.models.player import Player
from golfbets.models.results import (
    BestBallResult,
    GameResult,
    HoleStatus,
    MatchResult,
    MatchStatus,
    NassauResult,
    SegmentResult,
    SegmentStatus,
    SkinsResult,
    StablefordResult,
    WolfResult,
)
from golfbets.models.settlement import Settlement, SettlementReport
from golfbets.utils.logging_utils import LoggerMixin
from golfbets.utils.money import ZERO, Money, quantize


class _Ledger:
    """Signed balances per player, with a per-label breakdown."""

    def __init__(self, player_ids: Sequence[str]):
        self.player_ids = tuple(player_ids)
        self.balances: dict[str, Money] = {pid: ZERO for pid in self.player_ids}
        self.breakdown: dict[str, dict[str, Money]] = {}

    def credit(self, label: str, player_id: str, amount: Money) -> None:
        if player_id not in self.balances:
            raise ConfigError(
                f"Result for {label} refers to unknown player {player_id}",
                ErrorCode.INVALID_PLAYERS,
                {"label": label, "player_id": player_id}
            )
        self.balances[player_id] += amount
        entry = self.breakdown.setdefault(label, {pid: ZERO for pid in self.player_ids})
        entry[player_id] += amount

    def transfer(
        self,
        label: str,
        winners: Sequence[str],
        payers: Iterable[str],
        amount: Money
    ) -> None:
        """Each payer pays ``amount``; the winners split the total evenly."""
        payers = [pid for pid in payers if pid not in winners]
        if not winners or not payers or amount == 0:
            return
        share = amount * len(payers) / len(winners)
        for pid in payers:
            self.credit(label, pid, -amount)
        for pid in winners:
            self.credit(label, pid, share)


class SettlementCalculator(LoggerMixin):
    """Turn game results and prop bets into balances and payments."""

    def __init__(self, settings: EngineSettings | None = None):
        super().__init__()
        self.settings = settings or get_settings()

    def calculate(
        self,
        players: Sequence[Player],
        results: Iterable[GameResult],
        prop_bets: Iterable[PropBet] = ()
    ) -> list[Settlement]:
        """Payments settling the round."""
        return self.report(players, results, prop_bets).settlements

    def report(
        self,
        players: Sequence[Player],
        results: Iterable[GameResult],
        prop_bets: Iterable[PropBet] = ()
    ) -> SettlementReport:
        """
        Settle a round.

        Args:
            players: Players of the round, in input order
            results: Evaluator outputs
            prop_bets: Side bets; undecided ones are ignored

        Returns:
            Balances, per-game breakdown and the payments

        Raises:
            TypeError: For a result type that is not a known game result
            InvariantViolation: If the balances do not sum to zero
        """
        ledger = _Ledger([p.id for p in players])
        for result in results:
            self._apply_result(ledger, result)
        for prop_bet in prop_bets:
            self._apply_prop_bet(ledger, prop_bet)

        total = sum(ledger.balances.values(), ZERO)
        if total != 0:
            raise InvariantViolation(
                "Balances do not sum to zero",
                {"total": str(total), "balances": {k: str(v) for k, v in ledger.balances.items()}}
            )

        settled = self.round_balances(ledger.balances)
        settlements = self._net(settled)
        self.debug("Round settled", payments=len(settlements))
        return SettlementReport(
            balances=dict(ledger.balances),
            breakdown=ledger.breakdown,
            settlements=settlements,
            settled_balances=settled
        )

    def _apply_result(self, ledger: _Ledger, result: GameResult) -> None:
        if isinstance(result, SkinsResult):
            self._apply_skins(ledger, result)
        elif isinstance(result, NassauResult):
            self._apply_nassau(ledger, result)
        elif isinstance(result, MatchResult):
            self._apply_match(ledger, result)
        elif isinstance(result, WolfResult):
            self._apply_wolf(ledger, result)
        elif isinstance(result, StablefordResult):
            self._apply_stableford(ledger, result)
        elif isinstance(result, BestBallResult):
            self._apply_best_ball(ledger, result)
        else:
            raise TypeError(f"Unsupported game result: {type(result).__name__}")

    def _apply_skins(self, ledger: _Ledger, result: SkinsResult) -> None:
        label = result.game.label
        for hole in result.per_hole.values():
            if hole.status is HoleStatus.WON:
                ledger.transfer(label, [hole.winner_id], result.player_ids, hole.pot_amount)

    def _apply_segment(self, ledger: _Ledger, label: str, player_ids: Sequence[str], segment: SegmentResult) -> None:
        if segment.status is SegmentStatus.DECIDED:
            ledger.transfer(label, [segment.winner_id], player_ids, segment.stakes)

    def _apply_nassau(self, ledger: _Ledger, result: NassauResult) -> None:
        label = result.game.label
        for segment in result.segments.values():
            self._apply_segment(ledger, label, result.player_ids, segment)
        for press_result in result.press_results:
            press_label = f"{label} press (hole {press_result.press.start_hole})"
            self._apply_segment(ledger, press_label, result.player_ids, press_result.result)

    def _apply_match(self, ledger: _Ledger, result: MatchResult) -> None:
        if result.status is MatchStatus.WON:
            ledger.transfer(result.game.label, [result.winner_id], result.player_ids, result.stakes)

    def _apply_wolf(self, ledger: _Ledger, result: WolfResult) -> None:
        for pid, amount in result.earnings.items():
            if amount:
                ledger.credit(result.game.label, pid, amount)

    def _apply_stableford(self, ledger: _Ledger, result: StablefordResult) -> None:
        if result.status is SegmentStatus.DECIDED:
            ledger.transfer(result.game.label, [result.winner_id], result.player_ids, result.stakes)

    def _apply_best_ball(self, ledger: _Ledger, result: BestBallResult) -> None:
        winning_team = result.winning_team
        if result.status is not SegmentStatus.DECIDED or winning_team is None:
            return
        payers = [pid for team in result.teams if team.id != winning_team.id for pid in team.player_ids]
        ledger.transfer(result.game.label, list(winning_team.player_ids), payers, result.game.stakes)

    def _apply_prop_bet(self, ledger: _Ledger, prop_bet: PropBet) -> None:
        if not prop_bet.is_decided:
            return
        ledger.transfer(prop_bet.label, list(prop_bet.winner_ids), ledger.player_ids, prop_bet.stakes)

    def round_balances(self, balances: dict[str, Money]) -> dict[str, Money]:
        """
        Round zero-sum balances to currency precision, keeping them zero-sum.

        Each balance is floored to a whole number of currency units. The units
        still missing go one each to the largest remainders; equal remainders
        go to the player listed first.
        """
        total = sum(balances.values(), ZERO)
        if total != 0:
            raise InvariantViolation("Balances do not sum to zero", {"total": str(total)})

        unit = Fraction(1, 10 ** self.settings.currency_places)
        floored = {pid: math.floor(value / unit) for pid, value in balances.items()}
        remainders = {pid: value / unit - floored[pid] for pid, value in balances.items()}
        missing = -sum(floored.values())

        order = {pid: index for index, pid in enumerate(balances)}
        by_remainder = sorted(balances, key=lambda pid: (-remainders[pid], order[pid]))
        for pid in by_remainder[:missing]:
            floored[pid] += 1
        return {pid: units * unit for pid, units in floored.items()}

    def net_balances(self, balances: dict[str, Money]) -> list[Settlement]:
        """
        Greedy netting of zero-sum balances.

        Balances are first rounded with :meth:`round_balances`, so every
        player's payments add up to their rounded balance. The largest creditor
        is then repeatedly paired with the largest debtor and the smaller of
        the two magnitudes changes hands. Equal magnitudes go to the player
        listed first.
        """
        return self._net(self.round_balances(balances))

    def _net(self, rounded: dict[str, Money]) -> list[Settlement]:
        order = {pid: index for index, pid in enumerate(rounded)}
        remaining = dict(rounded)
        settlements: list[Settlement] = []

        while True:
            creditors = [pid for pid, value in remaining.items() if value > 0]
            debtors = [pid for pid, value in remaining.items() if value < 0]
            if not creditors or not debtors:
                break
            creditor = min(creditors, key=lambda pid: (-remaining[pid], order[pid]))
            debtor = min(debtors, key=lambda pid: (remaining[pid], order[pid]))
            amount = min(remaining[creditor], -remaining[debtor])
            remaining[creditor] -= amount
            remaining[debtor] += amount
            settlements.append(Settlement(debtor, creditor, quantize(amount, self.settings.currency_places)))

        return settlements


def format_settlements(settlements: Iterable[Settlement], names: dict[str, str] | None = None) -> list[str]:
    """One ``Alice owes Bob $5.00`` line per payment."""
    return [settlement.describe(names) for settlement in settlements]

