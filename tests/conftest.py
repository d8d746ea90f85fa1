import json
import os
import random

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")
os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

import pytest

from space_defender.config import GameSettings
from space_defender.game import Game

FRAME = 1 / 60


def run_frames(scene, seconds, inputs=None, dt=FRAME):
    frames = int(round(seconds / dt))
    for _ in range(frames):
        scene.update(dt, inputs)


@pytest.fixture
def highscore_path(tmp_path):
    return str(tmp_path / "highscore.json")


@pytest.fixture
def make_game(highscore_path):
    def _make(high_score=None, seed=1234):
        if high_score is not None:
            with open(highscore_path, "w", encoding="utf-8") as f:
                json.dump({"highScore": high_score}, f)
        settings = GameSettings(highscore_path=highscore_path, mute=True)
        return Game(settings, rng=random.Random(seed))
    return _make


@pytest.fixture
def game(make_game):
    return make_game()


@pytest.fixture
def scene(game):
    return game.start_scene("game")


@pytest.fixture
def quiet_scene(scene):
    """Play scene with the spawn timers stopped, for hand-placed entities."""
    scene.spawner.stop()
    return scene
