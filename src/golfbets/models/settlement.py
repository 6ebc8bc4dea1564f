from dataclasses import dataclass, field
from decimal import Decimal

from golfbets.utils.money import Money, format_money


@dataclass(frozen=True)
class Settlement:
    """A single payment from one player to another."""
    from_player_id: str
    to_player_id: str
    amount: Decimal

    def describe(self, names: dict[str, str] | None = None) -> str:
        names = names or {}
        payer = names.get(self.from_player_id, self.from_player_id)
        payee = names.get(self.to_player_id, self.to_player_id)
        return f"{payer} owes {payee} {format_money(Money(self.amount))}"


@dataclass(frozen=True)
class SettlementReport:
    """
    Full settlement of a round.

    Attributes:
        balances: Net result per player before netting (positive = winning)
        breakdown: Balance per player for each game / prop bet label
        settlements: Minimal list of payments realising the balances
        settled_balances: Balances rounded to currency, still zero-sum; the
            payments add up to exactly these
    """
    balances: dict[str, Money]
    breakdown: dict[str, dict[str, Money]]
    settlements: list[Settlement] = field(default_factory=list)
    settled_balances: dict[str, Money] = field(default_factory=dict)


def total_winnings(player_id: str, settlements: list[Settlement]) -> Decimal:
    """Net amount a player receives (negative if paying) across settlements."""
    total = Decimal(0)
    for settlement in settlements:
        if settlement.to_player_id == player_id:
            total += settlement.amount
        elif settlement.from_player_id == player_id:
            total -= settlement.amount
    return total
