"""Round, game and result models."""

from golfbets.models.course import Hole, course_par, validate_holes
from golfbets.models.game import (
    BestBallGame,
    GameConfig,
    MatchGame,
    NassauGame,
    NassauSegment,
    Press,
    PressStatus,
    PropBet,
    PropBetKind,
    SkinsGame,
    StablefordGame,
    Team,
    WolfDecision,
    WolfGame,
)
from golfbets.models.player import Player, StrokeMode, validate_players
from golfbets.models.round import Round
from golfbets.models.score import Score
from golfbets.models.settlement import Settlement, SettlementReport, total_winnings

__all__ = [
    'BestBallGame',
    'GameConfig',
    'Hole',
    'MatchGame',
    'NassauGame',
    'NassauSegment',
    'Player',
    'Press',
    'PressStatus',
    'PropBet',
    'PropBetKind',
    'Round',
    'Score',
    'Settlement',
    'SettlementReport',
    'SkinsGame',
    'StablefordGame',
    'StrokeMode',
    'Team',
    'WolfDecision',
    'WolfGame',
    'course_par',
    'total_winnings',
    'validate_holes',
    'validate_players',
]
