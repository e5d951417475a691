"""Shared fixtures."""

import pytest

from cellar_solitaire.config import Config
from cellar_solitaire.game.engine import GameContext, GameEngine
from cellar_solitaire.models.game_state import GameState


@pytest.fixture
def config():
    return Config()


@pytest.fixture
def make_engine(config):
    """Factory for an engine playing a hand-built position.

    Keyword arguments override config fields.
    """

    def _make(state: GameState | None = None, **overrides) -> GameEngine:
        cfg = config.model_copy(update=overrides) if overrides else config
        engine = GameEngine(GameContext(config=cfg), seed=1)
        if state is not None:
            engine.load_state(state)
        return engine

    return _make
