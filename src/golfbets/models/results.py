"""
Result models produced by the game evaluators.

Results are plain immutable values recomputed from a score snapshot. Units that
lack scores are reported with an explicit ``PENDING`` status rather than being
omitted or raising.
"""

from dataclasses import dataclass, field
from enum import Enum

from golfbets.models.game import (
    BestBallGame,
    MatchGame,
    NassauGame,
    NassauSegment,
    Press,
    SkinsGame,
    StablefordGame,
    Team,
    WolfGame,
)
from golfbets.utils.money import ZERO, Money, format_money


class HoleStatus(Enum):
    WON = "won"
    CARRIED = "carried"      # tie, pot rolls to the next hole
    FORFEITED = "forfeited"  # tie with carry-over disabled
    PENDING = "pending"      # not every player has scored


@dataclass(frozen=True)
class SkinsHoleResult:
    hole_number: int
    status: HoleStatus
    winner_id: str | None = None
    skins: int = 0
    pot_amount: Money = ZERO


@dataclass(frozen=True)
class SkinsResult:
    """
    Skins outcome.

    ``pot_amount`` on a hole is what the winner collects from each opponent.
    ``totals`` holds what each player won; ``unclaimed_amount`` is the pot
    still carried after the last evaluated hole, which nobody is paid.
    """
    game: SkinsGame
    player_ids: tuple[str, ...]
    per_hole: dict[int, SkinsHoleResult]
    totals: dict[str, Money]
    skins_won: dict[str, int]
    carry_skins: int = 0
    unclaimed_amount: Money = ZERO

    @property
    def won_holes(self) -> list[SkinsHoleResult]:
        return [r for r in self.per_hole.values() if r.status is HoleStatus.WON]


@dataclass(frozen=True)
class SkinsHoleContext:
    """What is riding on a hole before it is played."""
    hole_number: int
    carryovers: int
    pot_value: Money

    @property
    def message(self) -> str:
        if self.carryovers:
            plural = "s" if self.carryovers > 1 else ""
            return f"{format_money(self.pot_value)} ({self.carryovers} carryover{plural})"
        return format_money(self.pot_value)


class SegmentStatus(Enum):
    DECIDED = "decided"
    PUSH = "push"
    PENDING = "pending"
    NOT_PLAYED = "not_played"  # back nine of a nine-hole round
    SETTLED = "settled"        # press already settled outside the engine


@dataclass(frozen=True)
class SegmentResult:
    """
    Aggregate-stroke result over a hole range.

    ``leader_id`` and ``margin`` are provisional while the segment is pending;
    ``winner_id`` and ``amount`` are only set once it is decided.
    """
    first_hole: int
    last_hole: int
    status: SegmentStatus
    stakes: Money
    totals: dict[str, int] = field(default_factory=dict)
    holes_played: int = 0
    winner_id: str | None = None
    leader_id: str | None = None
    margin: int = 0

    @property
    def amount(self) -> Money:
        return self.stakes if self.status is SegmentStatus.DECIDED else ZERO

    @property
    def holes_in_segment(self) -> int:
        return self.last_hole - self.first_hole + 1


@dataclass(frozen=True)
class PressResult:
    press: Press
    result: SegmentResult


@dataclass(frozen=True)
class NassauResult:
    game: NassauGame
    player_ids: tuple[str, ...]
    front9: SegmentResult
    back9: SegmentResult
    overall: SegmentResult
    press_results: list[PressResult]

    @property
    def segments(self) -> dict[NassauSegment, SegmentResult]:
        return {
            NassauSegment.FRONT9: self.front9,
            NassauSegment.BACK9: self.back9,
            NassauSegment.OVERALL: self.overall,
        }


class MatchStatus(Enum):
    NOT_STARTED = "not_started"
    ONGOING = "ongoing"
    DORMIE = "dormie"
    WON = "won"
    HALVED = "halved"


@dataclass(frozen=True)
class MatchHoleResult:
    hole_number: int
    winner_id: str | None
    gross_scores: dict[str, int]
    net_scores: dict[str, int]
    strokes_received: dict[str, int]


@dataclass(frozen=True)
class MatchResult:
    game: MatchGame
    player_ids: tuple[str, str]
    status: MatchStatus
    winner_id: str | None
    leader_id: str | None
    holes_up: int
    holes_played: int
    holes_remaining: int
    hole_closed_out: int | None
    win_margin_label: str
    hole_results: list[MatchHoleResult]

    @property
    def stakes(self) -> Money:
        return self.game.stakes

    @property
    def status_brief(self) -> str:
        """Short status such as ``2 UP``, ``AS`` or ``3 & 2``."""
        if self.status is MatchStatus.WON:
            return self.win_margin_label
        if self.holes_up == 0:
            return "AS"
        return f"{self.holes_up} UP"


class WolfOutcome(Enum):
    WOLF = "wolf"
    HUNTERS = "hunters"
    PUSH = "push"
    PENDING = "pending"


@dataclass(frozen=True)
class WolfHoleResult:
    hole_number: int
    wolf_id: str
    partner_id: str | None
    blind: bool
    outcome: WolfOutcome
    points: int = 0

    @property
    def is_lone_wolf(self) -> bool:
        return self.partner_id is None


@dataclass(frozen=True)
class WolfResult:
    """Wolf outcome; ``points`` per player sum to zero."""
    game: WolfGame
    player_ids: tuple[str, ...]
    hole_results: list[WolfHoleResult]
    points: dict[str, Money]
    carry_points: int = 0

    @property
    def earnings(self) -> dict[str, Money]:
        return {pid: pts * self.game.stakes for pid, pts in self.points.items()}


@dataclass(frozen=True)
class StablefordStanding:
    player_id: str
    points: int
    hole_points: dict[int, int]
    position: int = 1

    @property
    def holes_scored(self) -> int:
        return len(self.hole_points)


@dataclass(frozen=True)
class StablefordResult:
    """
    Stableford outcome, standings sorted by points (most first).

    Points accrue on every scored hole. The bet itself is pending until every
    player has scored every hole; a tie for the most points is a push.
    """
    game: StablefordGame
    player_ids: tuple[str, ...]
    standings: list[StablefordStanding]
    status: SegmentStatus
    holes_complete: int
    winner_id: str | None = None

    @property
    def points(self) -> dict[str, int]:
        return {s.player_id: s.points for s in self.standings}

    @property
    def stakes(self) -> Money:
        return self.game.stakes


@dataclass(frozen=True)
class BestBallHoleResult:
    """Best score per team on a hole; ``winning_team_id`` is None on a tie."""
    hole_number: int
    pending: bool
    team_scores: dict[str, int] = field(default_factory=dict)
    contributors: dict[str, str] = field(default_factory=dict)
    winning_team_id: str | None = None


@dataclass(frozen=True)
class BestBallStanding:
    team: Team
    total: int
    holes_played: int
    relative_to_par: int
    contributions: dict[str, int]
    holes_won: int = 0


@dataclass(frozen=True)
class BestBallResult:
    """
    Best-ball outcome, standings sorted by team total (lowest first).

    Only holes every team member has scored count. The bet is pending until
    all holes are complete; a tie for the lowest total is a push.
    """
    game: BestBallGame
    standings: list[BestBallStanding]
    hole_results: list[BestBallHoleResult]
    status: SegmentStatus
    winner_team_id: str | None = None

    @property
    def teams(self) -> tuple[Team, ...]:
        return self.game.teams

    @property
    def winning_team(self) -> Team | None:
        return next((t for t in self.teams if t.id == self.winner_team_id), None)

    @property
    def match_leader(self) -> tuple[str | None, int]:
        """Team ahead on holes won and by how many, between the top two teams."""
        if len(self.standings) < 2:
            return None, 0
        ranked = sorted(self.standings, key=lambda s: -s.holes_won)
        margin = ranked[0].holes_won - ranked[1].holes_won
        return (ranked[0].team.id if margin else None), margin


GameResult = SkinsResult | NassauResult | MatchResult | WolfResult | StablefordResult | BestBallResult
