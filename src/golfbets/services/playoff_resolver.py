"""
Sudden-death playoff.

Only used once regulation has ended level: a halved match, or a stroke play
round with players tied for the lead. Each playoff hole collects one score per
contender; a single lowest score wins, a tie sends everyone to the next hole.
"""

from collections.abc import Sequence
from enum import Enum

from golfbets.exceptions import PlayoffError, ScoreError
from golfbets.models.results import MatchResult, MatchStatus
from golfbets.services.leaderboard import Standing, tied_leaders
from golfbets.utils.logging_utils import LoggerMixin


class PlayoffState(Enum):
    INACTIVE = "inactive"
    HOLE_IN_PROGRESS = "hole_in_progress"
    DECIDED = "decided"


class PlayoffResolver(LoggerMixin):
    """State machine ``INACTIVE -> HOLE_IN_PROGRESS(n) -> DECIDED``.

    ``DECIDED`` is terminal; any further action raises ``PlayoffError``.
    """

    def __init__(self) -> None:
        super().__init__()
        self._state = PlayoffState.INACTIVE
        self._contenders: tuple[str, ...] = ()
        self._hole = 0
        self._scores: dict[str, int] = {}
        self._history: list[dict[str, int]] = []
        self._winner_id: str | None = None
        self._deciding_hole: int | None = None

    @property
    def state(self) -> PlayoffState:
        return self._state

    @property
    def current_hole(self) -> int:
        """Playoff hole being played, 0 before the start."""
        return self._hole

    @property
    def contenders(self) -> tuple[str, ...]:
        return self._contenders

    @property
    def winner_id(self) -> str | None:
        return self._winner_id

    @property
    def deciding_hole(self) -> int | None:
        return self._deciding_hole

    @property
    def scores(self) -> dict[str, int]:
        """Scores entered on the current playoff hole."""
        return dict(self._scores)

    @property
    def history(self) -> list[dict[str, int]]:
        """Scores of every completed playoff hole, in order."""
        return [dict(h) for h in self._history]

    def start(self, contenders: Sequence[str]) -> None:
        """Begin playoff hole 1.

        Raises:
            PlayoffError: If already started or with fewer than two contenders
        """
        if self._state is not PlayoffState.INACTIVE:
            raise PlayoffError("Playoff already started", self._state.value)
        contenders = tuple(dict.fromkeys(contenders))
        if len(contenders) < 2:
            raise PlayoffError(
                "A playoff needs at least two tied players",
                self._state.value,
                {"contenders": list(contenders)}
            )
        self._contenders = contenders
        self._hole = 1
        self._state = PlayoffState.HOLE_IN_PROGRESS
        self.info("Playoff started", contenders=",".join(contenders))

    def start_after_match(self, result: MatchResult) -> None:
        """Start a playoff for a match that ended all square.

        Raises:
            PlayoffError: If the match was not halved
        """
        if result.status is not MatchStatus.HALVED:
            raise PlayoffError(
                f"Match is {result.status.value}, no playoff needed",
                self._state.value
            )
        self.start(result.player_ids)

    def start_after_stroke_play(self, standings: Sequence[Standing], round_complete: bool = True) -> None:
        """Start a playoff among players tied for the stroke play lead.

        Raises:
            PlayoffError: If the round is unfinished or there is a single leader
        """
        if not round_complete:
            raise PlayoffError("Regulation play is not finished", self._state.value)
        leaders = tied_leaders(standings)
        if not leaders:
            raise PlayoffError("No tie for the lead, no playoff needed", self._state.value)
        self.start(leaders)

    def _require_in_progress(self) -> None:
        if self._state is not PlayoffState.HOLE_IN_PROGRESS:
            raise PlayoffError(
                f"No playoff hole in progress (state: {self._state.value})",
                self._state.value
            )

    def record_score(self, player_id: str, strokes: int) -> PlayoffState:
        """
        Record a contender's score on the current playoff hole.

        Once every contender has scored, a single lowest score decides the
        playoff; otherwise play moves to the next hole.

        Raises:
            PlayoffError: If no hole is in progress
            ScoreError: Unknown contender or invalid strokes
        """
        self._require_in_progress()
        if player_id not in self._contenders:
            raise ScoreError(f"{player_id} is not in the playoff", player_id, self._hole)
        if isinstance(strokes, bool) or not isinstance(strokes, int) or strokes < 1:
            raise ScoreError(
                f"Strokes must be an integer of at least 1, got {strokes!r}",
                player_id,
                self._hole,
                {"strokes": strokes}
            )
        self._scores[player_id] = strokes
        if len(self._scores) == len(self._contenders):
            self._finish_hole()
        return self._state

    def clear_score(self, player_id: str) -> None:
        """Remove a score from the current playoff hole."""
        self._require_in_progress()
        self._scores.pop(player_id, None)

    def _finish_hole(self) -> None:
        low = min(self._scores.values())
        leaders = [pid for pid in self._contenders if self._scores[pid] == low]
        self._history.append(dict(self._scores))
        self._scores = {}
        if len(leaders) == 1:
            self._winner_id = leaders[0]
            self._deciding_hole = self._hole
            self._state = PlayoffState.DECIDED
            self.info("Playoff decided", winner=self._winner_id, hole=self._hole)
        else:
            self._hole += 1
            self.debug("Playoff hole tied", next_hole=self._hole)
