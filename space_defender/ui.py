"""
Text labels, pointer menus, background and overlay rendering.

Scenes keep their text as ``TextLabel`` objects and their choices as a
``Menu``; only ``UI`` touches fonts, so scene logic runs without a display.
"""

import math
import random
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

import pygame

from .config import (
    C_BLACK, C_DIM, C_GOLD, C_HITBOX, C_SCORE, C_STAR1, C_STAR2,
    C_STAR3, C_WHITE, SCREEN_H, SCREEN_W,
)
from .entities import POWERUP_COLORS, POWERUP_LABELS, PowerUpType

MENU_ITEM_SIZE = (280, 44)


def draw_text_centered(surface, text, font, color, cx, cy, shadow=True):
    """Render text centred on (cx, cy) with optional drop shadow."""
    if shadow:
        s = font.render(text, True, (0, 0, 0))
        r = s.get_rect(center=(cx + 2, cy + 2))
        surface.blit(s, r)
    img = font.render(text, True, color)
    rect = img.get_rect(center=(cx, cy))
    surface.blit(img, rect)
    return rect


@dataclass
class TextLabel:
    text:     str
    pos:      Tuple[int, int]
    size:     str = "large"      # font key in UI.fonts
    color:    Tuple = C_WHITE
    centered: bool = False
    visible:  bool = True

    def set_text(self, text: str):
        self.text = text


class MenuItem:
    def __init__(self, label: str, center: Tuple[int, int], action: Callable[[], None]):
        self.label  = label
        self.center = center
        self.action = action
        self.rect   = pygame.Rect(0, 0, *MENU_ITEM_SIZE)
        self.rect.center = center

    def contains(self, pos) -> bool:
        return self.rect.collidepoint(pos)


class Menu:
    """Vertical list of items, driven by pointer clicks or Up/Down/Enter."""

    def __init__(self, items: List[MenuItem]):
        self.items = items
        self.selected = 0

    def item(self, label: str) -> MenuItem:
        for it in self.items:
            if it.label == label:
                return it
        raise KeyError(label)

    def move(self, step: int):
        self.selected = (self.selected + step) % len(self.items)

    def hover(self, pos):
        for i, it in enumerate(self.items):
            if it.contains(pos):
                self.selected = i

    def activate(self):
        self.items[self.selected].action()

    def click(self, pos) -> bool:
        for it in self.items:
            if it.contains(pos):
                it.action()
                return True
        return False

    def handle_event(self, event) -> bool:
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            return self.click(event.pos)
        if event.type == pygame.MOUSEMOTION:
            self.hover(event.pos)
        elif event.type == pygame.KEYDOWN:
            if event.key == pygame.K_UP:
                self.move(-1)
            elif event.key == pygame.K_DOWN:
                self.move(1)
            elif event.key in (pygame.K_RETURN, pygame.K_KP_ENTER):
                self.activate()
                return True
        return False


# ─────────────────────────────────────────────────────────────
# STAR FIELD (parallax background)
# ─────────────────────────────────────────────────────────────

@dataclass
class Star:
    x: float
    y: float
    speed: float
    size: int
    color: Tuple


class StarField:
    """Three-layer parallax star field that scrolls downward."""

    def __init__(self, rng: Optional[random.Random] = None):
        rng = rng or random
        self.rng = rng
        self.stars: List[Star] = []
        for n, spd, col in ((40, 1, C_STAR1), (40, 2, C_STAR2), (40, 3, C_STAR3)):
            for _ in range(n):
                self.stars.append(Star(
                    x=rng.uniform(0, SCREEN_W),
                    y=rng.uniform(0, SCREEN_H),
                    speed=spd * rng.uniform(0.8, 1.2),
                    size=2 if spd == 3 else 1,
                    color=col,
                ))

    def update(self, dt):
        for s in self.stars:
            s.y += s.speed * 60 * dt
            if s.y > SCREEN_H:
                s.y = 0
                s.x = self.rng.uniform(0, SCREEN_W)

    def draw(self, surface):
        for s in self.stars:
            pygame.draw.circle(surface, s.color, (int(s.x), int(s.y)), s.size)


# ─────────────────────────────────────────────────────────────
# UI / HUD
# ─────────────────────────────────────────────────────────────

INSTRUCTIONS = [
    "ARROW KEYS / WASD   move",
    "SPACE               fire",
    "ESC                 back to menu",
    "",
    "Alien  +5    Asteroid  +1",
    "Touch anything hostile and it's over.",
]


class UI:
    """Renders labels, menus and screen overlays."""

    def __init__(self):
        pygame.font.init()
        self.fonts = {
            "title":  pygame.font.SysFont("consolas,monospace", 64, bold=True),
            "large":  pygame.font.SysFont("consolas,monospace", 32, bold=True),
            "medium": pygame.font.SysFont("consolas,monospace", 22),
            "small":  pygame.font.SysFont("consolas,monospace", 14, bold=True),
        }

    def draw_label(self, surface, label: TextLabel):
        if not label.visible:
            return
        font = self.fonts[label.size]
        if label.centered:
            draw_text_centered(surface, label.text, font, label.color, *label.pos)
        else:
            surface.blit(font.render(label.text, True, label.color), label.pos)

    def draw_menu_items(self, surface, menu: Menu):
        for i, it in enumerate(menu.items):
            color = C_GOLD if i == menu.selected else C_WHITE
            draw_text_centered(surface, it.label, self.fonts["large"], color, *it.center)

    def draw_menu(self, surface, menu: Menu, title: TextLabel, high_score: int, tick: float):
        pulse = abs(math.sin(tick * 1.5)) * 30
        title.color = (80 + int(pulse), 220, 255)
        self.draw_label(surface, title)
        self.draw_menu_items(surface, menu)
        if high_score > 0:
            draw_text_centered(surface, f"HIGH SCORE  {high_score}",
                               self.fonts["medium"], C_SCORE, SCREEN_W // 2, SCREEN_H - 40)

    def draw_instructions(self, surface):
        dim = pygame.Surface((SCREEN_W, SCREEN_H), pygame.SRCALPHA)
        dim.fill((0, 0, 15, 220))
        surface.blit(dim, (0, 0))
        cx = SCREEN_W // 2
        draw_text_centered(surface, "INSTRUCTIONS", self.fonts["large"], C_GOLD, cx, 110)
        for i, line in enumerate(INSTRUCTIONS):
            draw_text_centered(surface, line, self.fonts["medium"], C_WHITE, cx, 180 + i * 30)
        y = 380
        kinds = [k for k in PowerUpType if k is not PowerUpType.FAKE]
        for i, kind in enumerate(kinds):
            x = cx - 250 + i * 100
            pygame.draw.circle(surface, POWERUP_COLORS[kind], (x, y), 14)
            draw_text_centered(surface, POWERUP_LABELS[kind], self.fonts["small"], C_BLACK,
                               x, y, shadow=False)
            draw_text_centered(surface, kind.name.replace("_", " ").lower(),
                               self.fonts["small"], C_DIM, x, y + 26, shadow=False)
        draw_text_centered(surface, "Not every pickup is what it seems.",
                           self.fonts["medium"], C_DIM, cx, 450)
        draw_text_centered(surface, "click or press ENTER to go back",
                           self.fonts["small"], C_DIM, cx, 520)

    def draw_status(self, surface, lives: int, modifiers):
        """Spare lives and active modifiers under the score."""
        x, y = 10, 92
        if lives:
            img = self.fonts["medium"].render(f"Lives +{lives}", True, C_SCORE)
            surface.blit(img, (x, y))
            y += 26
        for name, timer in modifiers.items():
            img = self.fonts["small"].render(f"{name.replace('_', ' ').upper()}  {timer.remaining:4.1f}s",
                                             True, C_GOLD)
            surface.blit(img, (x, y))
            y += 18

    def draw_game_over(self, surface, lines: List[TextLabel], menu: Menu):
        dim = pygame.Surface((SCREEN_W, SCREEN_H), pygame.SRCALPHA)
        dim.fill((20, 0, 0, 150))
        surface.blit(dim, (0, 0))
        for label in lines:
            self.draw_label(surface, label)
        self.draw_menu_items(surface, menu)

    def draw_hitboxes(self, surface, entities):
        for e in entities:
            if e.active:
                pygame.draw.rect(surface, C_HITBOX, e.rect, 1)


