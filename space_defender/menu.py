"""Title menu: Start Game, Instructions and Quit."""

import pygame

from .config import SCREEN_W, TITLE
from .scene import InputState, Scene
from .ui import Menu, MenuItem, StarField, TextLabel


class MenuScene(Scene):
    name = "menu"

    def __init__(self, game):
        super().__init__(game)
        cx = SCREEN_W // 2
        self.title = TextLabel(TITLE, (cx, 150), size="title", centered=True)
        self.menu = Menu([
            MenuItem("Start Game", (cx, 300), self.start_game),
            MenuItem("Instructions", (cx, 400), self.open_instructions),
            MenuItem("Quit", (cx, 500), self.quit),
        ])
        self.show_instructions = False
        self.stars = StarField(game.rng)
        self.tick = 0.0

    def start_game(self):
        self.game.start_scene("game")

    def open_instructions(self):
        self.show_instructions = True

    def close_instructions(self):
        self.show_instructions = False

    def quit(self):
        self.game.quit()

    def handle_event(self, event):
        if self.show_instructions:
            # Any click or confirm/cancel key dismisses the panel
            if event.type == pygame.MOUSEBUTTONDOWN or (
                    event.type == pygame.KEYDOWN
                    and event.key in (pygame.K_RETURN, pygame.K_KP_ENTER, pygame.K_ESCAPE)):
                self.close_instructions()
            return
        if event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
            self.quit()
            return
        self.menu.handle_event(event)

    def update(self, dt: float, inputs: InputState):
        self.tick += dt
        self.stars.update(dt)

    def draw(self, surface, ui):
        self.stars.draw(surface)
        ui.draw_menu(surface, self.menu, self.title, self.game.high_scores.value, self.tick)
        if self.show_instructions:
            ui.draw_instructions(surface)
