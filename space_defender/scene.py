"""Base class for scenes and the per-frame input snapshot."""

from dataclasses import dataclass
from typing import TYPE_CHECKING

import pygame

if TYPE_CHECKING:
    from .game import Game


@dataclass
class InputState:
    left:  bool = False
    right: bool = False
    up:    bool = False
    down:  bool = False
    fire:  bool = False

    @classmethod
    def from_keys(cls, keys) -> "InputState":
        return cls(
            left=bool(keys[pygame.K_LEFT] or keys[pygame.K_a]),
            right=bool(keys[pygame.K_RIGHT] or keys[pygame.K_d]),
            up=bool(keys[pygame.K_UP] or keys[pygame.K_w]),
            down=bool(keys[pygame.K_DOWN] or keys[pygame.K_s]),
            fire=bool(keys[pygame.K_SPACE]),
        )


class Scene:
    name = ""

    def __init__(self, game: "Game"):
        self.game = game

    def handle_event(self, event):
        pass

    def update(self, dt: float, inputs: InputState):
        pass

    def draw(self, surface, ui):
        pass

    def teardown(self):
        pass
