"""
Score table for a round.

The table is the only mutable piece of scoring state. Evaluators never read it
directly; they get an immutable snapshot so a result can always be recomputed
from the same scores regardless of the order they arrived in.
"""

from collections.abc import Iterable, Mapping, Sequence
from types import MappingProxyType

from golfbets.exceptions import ScoreError
from golfbets.models.course import Hole
from golfbets.models.player import Player
from golfbets.models.score import Score
from golfbets.models.scoring import GROSS, ScoringMode
from golfbets.utils.logging_utils import LoggerMixin


class ScoreSnapshot:
    """Read-only view of the scores at one point in time."""

    def __init__(
        self,
        player_ids: Sequence[str],
        hole_numbers: Sequence[int],
        scores: Mapping[tuple[str, int], int]
    ):
        self._player_ids = tuple(player_ids)
        self._hole_numbers = tuple(hole_numbers)
        self._scores = MappingProxyType(dict(scores))

    @property
    def player_ids(self) -> tuple[str, ...]:
        return self._player_ids

    @property
    def hole_numbers(self) -> tuple[int, ...]:
        return self._hole_numbers

    def __len__(self) -> int:
        return len(self._scores)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ScoreSnapshot):
            return NotImplemented
        return (
            self._player_ids == other._player_ids
            and self._hole_numbers == other._hole_numbers
            and dict(self._scores) == dict(other._scores)
        )

    def gross(self, player_id: str, hole_number: int) -> int | None:
        """Gross strokes, or None if the player has not scored the hole."""
        return self._scores.get((player_id, hole_number))

    def net(self, player_id: str, hole_number: int, mode: ScoringMode = GROSS) -> int | None:
        """Score under ``mode``, or None if the player has not scored the hole."""
        gross = self.gross(player_id, hole_number)
        if gross is None:
            return None
        return mode.adjust(player_id, hole_number, gross)

    def all_scored(self, hole_number: int, player_ids: Iterable[str] | None = None) -> bool:
        """Whether every player (or every listed player) has scored the hole."""
        ids = self._player_ids if player_ids is None else player_ids
        return all((pid, hole_number) in self._scores for pid in ids)

    def scored_through(self, hole_number: int) -> bool:
        """Whether every hole up to and including ``hole_number`` is complete."""
        return all(
            self.all_scored(number)
            for number in self._hole_numbers
            if number <= hole_number
        )

    def hole_scores(
        self,
        hole_number: int,
        mode: ScoringMode = GROSS,
        player_ids: Sequence[str] | None = None
    ) -> dict[str, int] | None:
        """Adjusted score of every player on a hole, or None if incomplete."""
        ids = self._player_ids if player_ids is None else tuple(player_ids)
        if not self.all_scored(hole_number, ids):
            return None
        return {pid: self.net(pid, hole_number, mode) for pid in ids}

    def total_strokes(self, player_id: str) -> int:
        """Gross strokes to date."""
        return sum(
            strokes for (pid, _), strokes in self._scores.items() if pid == player_id
        )

    def total_net(self, player_id: str, mode: ScoringMode = GROSS) -> int:
        """Adjusted strokes to date, over the holes the player has scored."""
        return sum(
            mode.adjust(pid, hole, strokes)
            for (pid, hole), strokes in self._scores.items()
            if pid == player_id
        )

    def holes_scored(self, player_id: str) -> int:
        return sum(1 for (pid, _) in self._scores if pid == player_id)

    def scored_holes(self, player_id: str) -> list[int]:
        """Hole numbers the player has scored, in hole order."""
        return [n for n in self._hole_numbers if (player_id, n) in self._scores]


class ScoreTable(LoggerMixin):
    """
    Mutable score store for one round.

    At most one score is kept per (player, hole); a later upsert overwrites the
    earlier one. The table has a single writer.
    """

    def __init__(self, players: Iterable[Player], holes: Iterable[Hole]):
        super().__init__()
        self._player_ids = tuple(p.id for p in players)
        self._hole_numbers = tuple(sorted(h.number for h in holes))
        self._scores: dict[tuple[str, int], int] = {}

    def upsert(self, score: Score) -> None:
        """Insert or replace a score.

        Raises:
            ScoreError: Unknown player or hole, or strokes that are not an
                integer of at least 1
        """
        if score.player_id not in self._player_ids:
            raise ScoreError(
                f"Unknown player: {score.player_id}",
                score.player_id,
                score.hole_number
            )
        if score.hole_number not in self._hole_numbers:
            raise ScoreError(
                f"Unknown hole: {score.hole_number}",
                score.player_id,
                score.hole_number
            )
        strokes = score.strokes
        if isinstance(strokes, bool) or not isinstance(strokes, int):
            raise ScoreError(
                f"Strokes must be an integer, got {strokes!r}",
                score.player_id,
                score.hole_number,
                {"strokes": strokes}
            )
        if strokes < 1:
            raise ScoreError(
                f"Strokes must be at least 1, got {strokes}",
                score.player_id,
                score.hole_number,
                {"strokes": strokes}
            )

        previous = self._scores.get(score.key)
        self._scores[score.key] = strokes
        if previous is not None and previous != strokes:
            self.debug("Score replaced", player=score.player_id, hole=score.hole_number,
                       old=previous, new=strokes)

    def upsert_many(self, scores: Iterable[Score]) -> None:
        for score in scores:
            self.upsert(score)

    def remove(self, player_id: str, hole_number: int) -> bool:
        """Remove a score. Returns whether there was one."""
        return self._scores.pop((player_id, hole_number), None) is not None

    def snapshot(self) -> ScoreSnapshot:
        """Immutable copy of the current scores."""
        return ScoreSnapshot(self._player_ids, self._hole_numbers, self._scores)

    def gross(self, player_id: str, hole_number: int) -> int | None:
        return self._scores.get((player_id, hole_number))

    def net(self, player_id: str, hole_number: int, mode: ScoringMode = GROSS) -> int | None:
        return self.snapshot().net(player_id, hole_number, mode)

    def all_scored(self, hole_number: int) -> bool:
        return self.snapshot().all_scored(hole_number)

    def scored_through(self, hole_number: int) -> bool:
        return self.snapshot().scored_through(hole_number)

    def total_strokes(self, player_id: str) -> int:
        return self.snapshot().total_strokes(player_id)

    def holes_scored(self, player_id: str) -> int:
        return self.snapshot().holes_scored(player_id)
