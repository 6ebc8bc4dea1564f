"""
Best-ball evaluator.

Players are grouped into teams and each team takes its lowest score on every
hole. Teams are ranked by the total of those best balls; the team with the
single lowest best ball on a hole also wins that hole, which gives a match
play view of the same scores.
"""

from collections.abc import Sequence

from golfbets.error_codes import ErrorCode
from golfbets.exceptions import ConfigError
from golfbets.models.course import Hole
from golfbets.models.game import BestBallGame, Team
from golfbets.models.player import Player
from golfbets.models.results import BestBallHoleResult, BestBallResult, BestBallStanding, SegmentStatus
from golfbets.models.scoring import GROSS, ScoringMode
from golfbets.services.score_table import ScoreSnapshot
from golfbets.utils.logging_utils import LoggerMixin


def _first_name(player: Player) -> str:
    return player.name.split()[0] if player.name.strip() else player.id


def default_teams(players: Sequence[Player]) -> tuple[Team, ...]:
    """
    Teams used when a best-ball game names none.

    Two or three players play as individuals; four players pair up in input
    order, the first two against the last two.

    Raises:
        ConfigError: For any other player count
    """
    if len(players) in (2, 3):
        return tuple(
            Team(f"team-{index}", p.name, (p.id,))
            for index, p in enumerate(players, start=1)
        )
    if len(players) == 4:
        return tuple(
            Team(
                f"team-{index}",
                f"{_first_name(first)} & {_first_name(second)}",
                (first.id, second.id)
            )
            for index, (first, second) in enumerate([players[0:2], players[2:4]], start=1)
        )
    raise ConfigError(
        f"Best ball needs explicit teams for {len(players)} players",
        ErrorCode.INVALID_PLAYERS,
        {"player_count": len(players)}
    )


def validate_teams(players: Sequence[Player], teams: Sequence[Team]) -> None:
    """
    Check best-ball teams against the players of the round.

    Raises:
        ConfigError: Fewer than two teams, duplicate team ids, empty teams,
            unknown players or a player on two teams
    """
    if len(teams) < 2:
        raise ConfigError("Best ball needs at least two teams", ErrorCode.INVALID_GAME, {"teams": len(teams)})

    known = {p.id for p in players}
    team_ids: set[str] = set()
    placed: set[str] = set()
    for team in teams:
        if team.id in team_ids:
            raise ConfigError(f"Duplicate team id: {team.id}", ErrorCode.INVALID_GAME, {"team_id": team.id})
        team_ids.add(team.id)
        if not team.player_ids:
            raise ConfigError(f"Team {team.id} has no players", ErrorCode.INVALID_GAME, {"team_id": team.id})
        for pid in team.player_ids:
            if pid not in known:
                raise ConfigError(
                    f"Team {team.id} includes unknown player {pid}",
                    ErrorCode.INVALID_PLAYERS,
                    {"team_id": team.id, "player_id": pid}
                )
            if pid in placed:
                raise ConfigError(
                    f"Player {pid} is on more than one team",
                    ErrorCode.INVALID_PLAYERS,
                    {"team_id": team.id, "player_id": pid}
                )
            placed.add(pid)


def format_best_ball_status(result: BestBallResult) -> str:
    """Hole-by-hole status such as ``Alice & Bob 2 UP`` or ``All square``."""
    leader_id, margin = result.match_leader
    if leader_id is None:
        return "All square"
    team = next(t for t in result.teams if t.id == leader_id)
    return f"{team.name} {margin} UP"


def format_relative_to_par(relative: int) -> str:
    """``E``, ``+3`` or ``-2``."""
    if relative == 0:
        return "E"
    return f"{relative:+d}"


class BestBallEvaluator(LoggerMixin):
    """Evaluate a best-ball game from a score snapshot."""

    def evaluate(
        self,
        snapshot: ScoreSnapshot,
        players: Sequence[Player],
        holes: Sequence[Hole],
        game: BestBallGame,
        mode: ScoringMode = GROSS
    ) -> BestBallResult:
        """
        Evaluate best balls hole by hole.

        A hole counts once every team member has scored it; until then it is
        pending. When teammates tie for the best score the player listed first
        is credited with it.

        Raises:
            ConfigError: If the teams do not fit the players
        """
        teams = game.teams or default_teams(players)
        validate_teams(players, teams)
        if teams != game.teams:
            game = BestBallGame(stakes=game.stakes, use_net=game.use_net, teams=teams)

        all_ids = tuple(pid for team in teams for pid in team.player_ids)
        pars = {h.number: h.par for h in holes}
        totals = {t.id: 0 for t in teams}
        played = {t.id: 0 for t in teams}
        relative = {t.id: 0 for t in teams}
        wins = {t.id: 0 for t in teams}
        contributions = {t.id: {pid: 0 for pid in t.player_ids} for t in teams}
        hole_results: list[BestBallHoleResult] = []

        for hole in sorted(holes, key=lambda h: h.number):
            scores = snapshot.hole_scores(hole.number, mode, all_ids)
            if scores is None:
                hole_results.append(BestBallHoleResult(hole.number, pending=True))
                continue

            team_scores: dict[str, int] = {}
            contributors: dict[str, str] = {}
            for team in teams:
                best_pid = min(team.player_ids, key=lambda pid: scores[pid])
                team_scores[team.id] = scores[best_pid]
                contributors[team.id] = best_pid
                totals[team.id] += scores[best_pid]
                played[team.id] += 1
                relative[team.id] += scores[best_pid] - pars[hole.number]
                contributions[team.id][best_pid] += 1

            low = min(team_scores.values())
            leaders = [tid for tid, score in team_scores.items() if score == low]
            winning_team_id = leaders[0] if len(leaders) == 1 else None
            if winning_team_id is not None:
                wins[winning_team_id] += 1
            hole_results.append(BestBallHoleResult(
                hole.number, False, team_scores, contributors, winning_team_id
            ))

        standings = sorted(
            (
                BestBallStanding(
                    team, totals[team.id], played[team.id], relative[team.id],
                    contributions[team.id], wins[team.id]
                )
                for team in teams
            ),
            key=lambda s: s.total
        )

        winner_team_id = None
        if any(r.pending for r in hole_results):
            status = SegmentStatus.PENDING
        elif standings[0].total == standings[1].total:
            status = SegmentStatus.PUSH
        else:
            status = SegmentStatus.DECIDED
            winner_team_id = standings[0].team.id

        self.debug("Best ball evaluated", status=status.value, teams=len(teams))
        return BestBallResult(
            game=game,
            standings=standings,
            hole_results=hole_results,
            status=status,
            winner_team_id=winner_team_id
        )
