"""Pytest configuration and shared fixtures."""

import os

import pytest

from golfbets.config.settings import ConfigurationManager
from golfbets.models.course import Hole
from golfbets.models.player import Player
from golfbets.models.score import Score
from golfbets.services.score_table import ScoreTable

PARS_18 = [4, 4, 3, 5, 4, 4, 3, 4, 5, 4, 3, 5, 4, 4, 3, 4, 5, 4]
STROKE_INDEXES_18 = [7, 15, 1, 11, 3, 17, 9, 13, 5, 8, 16, 2, 12, 4, 18, 10, 14, 6]


@pytest.fixture(autouse=True)
def setup_test_env(monkeypatch, tmp_path):
    """Isolate every test from local settings and cached configuration."""
    for name in list(os.environ):
        if name.startswith("GOLFBETS_"):
            monkeypatch.delenv(name)
    monkeypatch.setenv("GOLFBETS_CONFIG_DIR", str(tmp_path))
    ConfigurationManager._instance = None

    yield

    ConfigurationManager._instance = None


@pytest.fixture
def holes_18():
    """Standard 18-hole layout with stroke indexes."""
    return [
        Hole(number=n, par=par, stroke_index=si)
        for n, (par, si) in enumerate(zip(PARS_18, STROKE_INDEXES_18), start=1)
    ]


@pytest.fixture
def holes_9(holes_18):
    """Front nine of the standard layout, played as a 9-hole round."""
    return holes_18[:9]


@pytest.fixture
def players():
    """Four players in input order."""
    return [
        Player(id="a", name="Alice", handicap_index=10.0),
        Player(id="b", name="Bob", handicap_index=5.0),
        Player(id="c", name="Carol", handicap_index=18.0),
        Player(id="d", name="Dave", handicap_index=0.0),
    ]


@pytest.fixture
def two_players(players):
    return players[:2]


@pytest.fixture
def make_snapshot():
    """Build a snapshot from per-player stroke lists.

    ``scores`` maps player id to strokes for holes 1, 2, ... in order; ``None``
    entries leave the hole unscored.
    """
    def _make(players, holes, scores):
        table = ScoreTable(players, holes)
        for player_id, strokes in scores.items():
            for number, value in enumerate(strokes, start=1):
                if value is not None:
                    table.upsert(Score(player_id, number, value))
        return table.snapshot()
    return _make
