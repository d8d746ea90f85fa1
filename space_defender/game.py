"""
Scene controller and entry point.

STATE MACHINE:
    MENU → PLAYING → GAME_OVER → PLAYING (play again) | MENU
"""

import argparse
import random
from enum import Enum, auto
from typing import Optional

import pygame

from .config import C_BG, FPS, MAX_DT, SCREEN_H, SCREEN_W, TITLE, GameSettings
from .highscore import HighScoreStore
from .log import get_logger, setup_logger
from .menu import MenuScene
from .play import GameScene
from .scene import InputState, Scene
from .sound import SoundManager
from .ui import UI

logger = get_logger(__name__)


class GameState(Enum):
    MENU      = auto()
    PLAYING   = auto()
    GAME_OVER = auto()


class UnknownSceneError(KeyError):
    pass


class Game:
    """
    Master controller.
    Owns the window, the high-score store, sound and the current scene.
    The display is only opened by ``run()``, so scenes can be driven
    without one.
    """
    SCENES = {
        MenuScene.name: MenuScene,
        GameScene.name: GameScene,
    }

    def __init__(self, settings: Optional[GameSettings] = None,
                 rng: Optional[random.Random] = None):
        self.settings    = settings or GameSettings()
        self.rng         = rng or random.Random()
        self.high_scores = HighScoreStore(self.settings.highscore_path)
        self.sound       = SoundManager(enabled=not self.settings.mute)
        self.running     = False
        self.scene: Optional[Scene] = None
        self.window = self.clock = self.ui = None
        self.start_scene(MenuScene.name)

    @property
    def state(self) -> GameState:
        if isinstance(self.scene, GameScene):
            return GameState.GAME_OVER if self.scene.session.game_over else GameState.PLAYING
        return GameState.MENU

    def start_scene(self, name: str) -> Scene:
        """Tear down the current scene and build a fresh ``name`` scene."""
        try:
            factory = self.SCENES[name]
        except KeyError:
            raise UnknownSceneError(name) from None
        if self.scene is not None:
            self.scene.teardown()
        self.scene = factory(self)
        logger.debug("Scene started: %s", name)
        return self.scene

    def quit(self):
        self.running = False

    # ── Main loop ─────────────────────────────────────────────

    def _init_display(self):
        pygame.init()
        pygame.display.set_caption(TITLE)
        self.window = pygame.display.set_mode((SCREEN_W, SCREEN_H), pygame.SCALED)
        self.clock  = pygame.time.Clock()
        self.ui = UI()
        self.sound.load()

    def run(self):
        self._init_display()
        self.running = True
        try:
            while self.running:
                dt = min(self.clock.tick(self.settings.fps) / 1000.0, MAX_DT)
                self._handle_events()
                if not self.running:
                    break
                self.scene.update(dt, InputState.from_keys(pygame.key.get_pressed()))
                self._draw()
        finally:
            if self.scene is not None:
                self.scene.teardown()
            pygame.quit()
            logger.info("Bye")

    def _handle_events(self):
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.quit()
                return
            self.scene.handle_event(event)

    def _draw(self):
        self.window.fill(C_BG)
        self.scene.draw(self.window, self.ui)
        pygame.display.flip()


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="space-defender", description="Space Defender arcade shooter.")
    parser.add_argument("--highscore-file", help="Where to keep the high score.")
    parser.add_argument("--mute", action="store_true", help="Disable sound.")
    parser.add_argument("--show-hitboxes", action="store_true", help="Outline every hitbox.")
    parser.add_argument("--fps", type=int, default=FPS, help=f"Frame rate cap. Default: {FPS}")
    parser.add_argument("--log-level", default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"], help="Default: INFO")
    return parser.parse_args(argv)


def main(argv=None):
    settings = GameSettings.from_args(parse_args(argv))
    setup_logger(settings.log_level)
    Game(settings).run()
    return 0
