"""
Round service.

Validates a round once at the boundary, owns its score table and in-play bets,
and re-evaluates every configured game from a fresh snapshot on request.
"""

import dataclasses
from collections.abc import Iterable

from golfbets.config.settings import get_settings
from golfbets.config.types import EngineSettings
from golfbets.error_codes import ErrorCode
from golfbets.exceptions import ConfigError
from golfbets.models.course import course_par, validate_holes
from golfbets.models.game import (
    BestBallGame,
    GameConfig,
    MatchGame,
    NassauGame,
    NassauSegment,
    Press,
    PressStatus,
    PropBet,
    SkinsGame,
    StablefordGame,
    WolfDecision,
    WolfGame,
)
from golfbets.models.player import validate_players
from golfbets.models.results import GameResult, MatchResult, SkinsHoleContext
from golfbets.models.round import Round
from golfbets.models.score import Score
from golfbets.models.scoring import GROSS, ScoringMode, StrokeAllocation
from golfbets.models.settlement import SettlementReport
from golfbets.services.games.best_ball import BestBallEvaluator, default_teams, validate_teams
from golfbets.services.games.match_play import MatchPlayEvaluator
from golfbets.services.games.nassau import NassauEvaluator, can_press, create_press
from golfbets.services.games.skins import SkinsEvaluator
from golfbets.services.games.stableford import StablefordEvaluator
from golfbets.services.games.wolf import WOLF_PLAYERS, WolfEvaluator, validate_decision
from golfbets.services.handicap_allocator import build_allocations, net_mode_for, player_playing_handicap
from golfbets.services.leaderboard import Standing, stroke_play_standings
from golfbets.services.playoff_resolver import PlayoffResolver
from golfbets.services.score_table import ScoreSnapshot, ScoreTable
from golfbets.services.settlement_calculator import SettlementCalculator
from golfbets.utils.logging_utils import LoggerMixin, log_execution


class RoundService(LoggerMixin):
    """Service for scoring, evaluating and settling one round."""

    def __init__(self, round_: Round, settings: EngineSettings | None = None):
        super().__init__()
        self.settings = settings or get_settings()
        self.holes = list(validate_holes(round_.holes, round_.total_holes))
        self.total_holes = len(self.holes)
        self.players = list(validate_players(round_.players, round_.stroke_mode))
        self.stroke_mode = round_.stroke_mode
        self.slope_rating = round_.slope_rating
        self.course_rating = round_.course_rating
        self.name = round_.name
        self.games = self._validate_games(round_.games)
        self.set_log_context(round=self.name or "round")

        self.allocations: dict[str, StrokeAllocation] = build_allocations(
            self.players, self.holes, self.stroke_mode,
            self.slope_rating, self.course_rating, self.settings
        )
        self.score_table = ScoreTable(self.players, self.holes)
        self.score_table.upsert_many(round_.scores)

        self.presses: list[Press] = []
        for press in round_.presses:
            self.add_press(press)
        self.prop_bets: list[PropBet] = []
        for prop_bet in round_.prop_bets:
            self.add_prop_bet(prop_bet)
        self.wolf_decisions: dict[int, WolfDecision] = {}
        for decision in round_.wolf_decisions.values():
            self.set_wolf_decision(decision)

        self.playoff = PlayoffResolver()

    def _validate_games(self, games: Iterable[GameConfig]) -> list[GameConfig]:
        validated: list[GameConfig] = []
        seen: set[str] = set()
        for game in games:
            if game.game_type in seen:
                raise ConfigError(
                    f"Game {game.game_type} configured more than once",
                    ErrorCode.INVALID_GAME,
                    {"type": game.game_type}
                )
            seen.add(game.game_type)
            if isinstance(game, MatchGame) and len(self.players) != 2:
                raise ConfigError(
                    f"Match play needs exactly 2 players, got {len(self.players)}",
                    ErrorCode.INVALID_PLAYERS,
                    {"player_count": len(self.players)}
                )
            if isinstance(game, WolfGame) and len(self.players) != WOLF_PLAYERS:
                raise ConfigError(
                    f"Wolf needs exactly {WOLF_PLAYERS} players, got {len(self.players)}",
                    ErrorCode.INVALID_PLAYERS,
                    {"player_count": len(self.players)}
                )
            if isinstance(game, BestBallGame):
                if not game.teams:
                    game = dataclasses.replace(game, teams=default_teams(self.players))
                validate_teams(self.players, game.teams)
            validated.append(game)
        return validated

    def _game(self, game_type: type) -> GameConfig | None:
        return next((g for g in self.games if isinstance(g, game_type)), None)

    @property
    def player_names(self) -> dict[str, str]:
        return {p.id: p.name for p in self.players}

    @property
    def playing_handicaps(self) -> dict[str, int]:
        return {
            p.id: player_playing_handicap(
                p, self.stroke_mode, self.slope_rating, self.total_holes,
                self.course_rating, course_par(self.holes), self.settings
            )
            for p in self.players
        }

    def mode_for(self, game: GameConfig) -> ScoringMode:
        """Net scoring over the round's allocations, or gross."""
        return net_mode_for(self.allocations) if game.use_net else GROSS

    def snapshot(self) -> ScoreSnapshot:
        return self.score_table.snapshot()

    def upsert_score(self, player_id: str, hole_number: int, strokes: int) -> None:
        self.score_table.upsert(Score(player_id, hole_number, strokes))

    def remove_score(self, player_id: str, hole_number: int) -> bool:
        return self.score_table.remove(player_id, hole_number)

    def add_press(self, press: Press) -> Press:
        """Attach a press to the Nassau.

        Raises:
            ConfigError: Without a Nassau, or for a press outside its segment
        """
        if self._game(NassauGame) is None:
            raise ConfigError(
                "Presses need a Nassau game",
                ErrorCode.INVALID_PRESS,
                {"press_id": press.id}
            )
        press.hole_range(self.total_holes)
        if press.initiated_by is not None and press.initiated_by not in self.player_names:
            raise ConfigError(
                f"Press initiated by unknown player {press.initiated_by}",
                ErrorCode.INVALID_PRESS,
                {"press_id": press.id}
            )
        self.presses.append(press)
        self.info("Press added", press=press.id, start_hole=press.start_hole)
        return press

    def press(self, player_id: str, current_hole: int, segment: NassauSegment | None = None) -> Press:
        """Raise a press for a player who is entitled to one.

        Raises:
            ConfigError: If the player may not press now
        """
        nassau = self._game(NassauGame)
        if nassau is None or not can_press(
            self.snapshot(), self.players, player_id, current_hole, self.presses,
            segment, self.total_holes, self.mode_for(nassau), self.settings
        ):
            raise ConfigError(
                f"{player_id} cannot press on hole {current_hole}",
                ErrorCode.INVALID_PRESS,
                {"player_id": player_id, "hole_number": current_hole}
            )
        return self.add_press(create_press(player_id, current_hole, nassau.stakes, segment))

    def settle_press(self, press_id: str) -> Press:
        """Mark a press as settled outside the engine."""
        for index, press in enumerate(self.presses):
            if press.id == press_id:
                self.presses[index] = dataclasses.replace(press, status=PressStatus.SETTLED)
                return self.presses[index]
        raise ConfigError(f"Unknown press {press_id}", ErrorCode.INVALID_PRESS, {"press_id": press_id})

    def add_prop_bet(self, prop_bet: PropBet) -> PropBet:
        """Attach a prop bet.

        Raises:
            ConfigError: Unknown hole or winner
        """
        if prop_bet.hole_number not in {h.number for h in self.holes}:
            raise ConfigError(
                f"Prop bet on unknown hole {prop_bet.hole_number}",
                ErrorCode.INVALID_GAME,
                {"prop_bet_id": prop_bet.id}
            )
        self._check_winners(prop_bet.id, prop_bet.winner_ids)
        self.prop_bets.append(prop_bet)
        return prop_bet

    def decide_prop_bet(self, prop_bet_id: str, winner_ids: Iterable[str]) -> PropBet:
        """Record the winner(s) of a prop bet."""
        winner_ids = tuple(winner_ids)
        self._check_winners(prop_bet_id, winner_ids)
        for index, prop_bet in enumerate(self.prop_bets):
            if prop_bet.id == prop_bet_id:
                self.prop_bets[index] = dataclasses.replace(prop_bet, winner_ids=winner_ids)
                return self.prop_bets[index]
        raise ConfigError(
            f"Unknown prop bet {prop_bet_id}",
            ErrorCode.INVALID_GAME,
            {"prop_bet_id": prop_bet_id}
        )

    def _check_winners(self, prop_bet_id: str, winner_ids: Iterable[str]) -> None:
        unknown = [pid for pid in winner_ids if pid not in self.player_names]
        if unknown:
            raise ConfigError(
                f"Prop bet winners are not in the round: {', '.join(unknown)}",
                ErrorCode.INVALID_PLAYERS,
                {"prop_bet_id": prop_bet_id, "unknown": unknown}
            )

    def set_wolf_decision(self, decision: WolfDecision) -> None:
        """Record the wolf's choice on a hole."""
        if self._game(WolfGame) is None:
            raise ConfigError("Wolf decisions need a wolf game", ErrorCode.INVALID_GAME)
        if decision.hole_number not in {h.number for h in self.holes}:
            raise ConfigError(
                f"Wolf decision for unknown hole {decision.hole_number}",
                ErrorCode.INVALID_GAME,
                {"hole_number": decision.hole_number}
            )
        validate_decision(self.players, decision)
        self.wolf_decisions[decision.hole_number] = decision

    def evaluate_game(self, game: GameConfig, snapshot: ScoreSnapshot | None = None) -> GameResult:
        """Evaluate one configured game."""
        snapshot = snapshot or self.snapshot()
        mode = self.mode_for(game)
        if isinstance(game, SkinsGame):
            return SkinsEvaluator().evaluate(snapshot, self.players, self.holes, game, mode)
        if isinstance(game, NassauGame):
            return NassauEvaluator().evaluate(
                snapshot, self.players, game, self.presses, self.total_holes, mode
            )
        if isinstance(game, MatchGame):
            return MatchPlayEvaluator().evaluate(
                snapshot, self.players, self.holes, game, self.total_holes, mode
            )
        if isinstance(game, WolfGame):
            return WolfEvaluator().evaluate(
                snapshot, self.players, self.holes, game, self.wolf_decisions, mode
            )
        if isinstance(game, StablefordGame):
            return StablefordEvaluator().evaluate(snapshot, self.players, self.holes, game, mode)
        if isinstance(game, BestBallGame):
            return BestBallEvaluator().evaluate(snapshot, self.players, self.holes, game, mode)
        raise TypeError(f"Unsupported game: {type(game).__name__}")

    @log_execution(level='DEBUG')
    def evaluate(self) -> list[GameResult]:
        """Evaluate every game against one snapshot."""
        snapshot = self.snapshot()
        return [self.evaluate_game(game, snapshot) for game in self.games]

    @log_execution(level='DEBUG')
    def settle(self) -> SettlementReport:
        """Settle all games and prop bets."""
        report = SettlementCalculator(self.settings).report(self.players, self.evaluate(), self.prop_bets)
        self.info("Round settled", payments=len(report.settlements))
        return report

    def skins_hole_context(self, hole_number: int) -> SkinsHoleContext | None:
        """What the skins pot is worth on a hole, if skins are played."""
        skins = self._game(SkinsGame)
        if skins is None:
            return None
        return SkinsEvaluator().hole_context(
            self.snapshot(), self.players, self.holes, skins, hole_number, self.mode_for(skins)
        )

    def standings(self, use_net: bool = False) -> list[Standing]:
        return stroke_play_standings(
            self.snapshot(), self.players, self.playing_handicaps,
            self.total_holes, use_net, self.settings
        )

    def start_playoff(self, use_net: bool = False) -> PlayoffResolver:
        """
        Start a playoff if regulation ended level.

        A match game decides eligibility when one is configured; otherwise
        players tied for the stroke play lead go to the playoff.

        Raises:
            PlayoffError: If no playoff is warranted
        """
        match = self._game(MatchGame)
        if match is not None:
            result: MatchResult = MatchPlayEvaluator().evaluate(
                self.snapshot(), self.players, self.holes, match, self.total_holes, self.mode_for(match)
            )
            self.playoff.start_after_match(result)
        else:
            complete = self.snapshot().scored_through(self.total_holes)
            self.playoff.start_after_stroke_play(self.standings(use_net), complete)
        return self.playoff
