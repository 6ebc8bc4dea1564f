"""One evaluator per betting game."""

from golfbets.services.games.best_ball import BestBallEvaluator, default_teams
from golfbets.services.games.match_play import MatchPlayEvaluator
from golfbets.services.games.nassau import NassauEvaluator, can_press, create_press
from golfbets.services.games.skins import SkinsEvaluator
from golfbets.services.games.stableford import StablefordEvaluator, stableford_points
from golfbets.services.games.wolf import WolfEvaluator, hunting_order, wolf_for_hole

__all__ = [
    'BestBallEvaluator',
    'MatchPlayEvaluator',
    'NassauEvaluator',
    'SkinsEvaluator',
    'StablefordEvaluator',
    'WolfEvaluator',
    'can_press',
    'create_press',
    'default_teams',
    'hunting_order',
    'stableford_points',
    'wolf_for_hole',
]
