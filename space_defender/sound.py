"""Audio wrapper that degrades to silence when files or the mixer are missing."""

import os

import pygame

from .config import ASSETS_DIR
from .log import get_logger

logger = get_logger(__name__)


class SoundManager:
    """
    Wraps pygame.mixer with placeholder paths under ``assets/``.
    No sound files ship with the package, so every sound stays silent until
    real .wav files are dropped in under these names. Sounds are loaded by
    ``load()`` once the mixer is up; a missing file or a mixer failure leaves
    that sound silent.
    """
    SOUNDS = {
        "shoot":     "laserShoot.wav",
        "explosion": "explosion.wav",
        "powerup":   "powerup.wav",
        "gameover":  "gameover.wav",
    }

    def __init__(self, enabled: bool = True, assets_dir: str = ASSETS_DIR):
        self.enabled    = enabled
        self.assets_dir = assets_dir
        self._cache = {}

    def load(self):
        if not self.enabled or not pygame.mixer.get_init():
            return
        for name, filename in self.SOUNDS.items():
            path = os.path.join(self.assets_dir, filename)
            if not os.path.exists(path):
                logger.debug("Sound %s not found at %s", name, path)
                continue
            try:
                self._cache[name] = pygame.mixer.Sound(path)
            except pygame.error as e:
                logger.warning("Could not load sound %s: %s", path, e)

    def play(self, name: str, volume: float = 0.7):
        snd = self._cache.get(name)
        if snd:
            snd.set_volume(volume)
            snd.play()
