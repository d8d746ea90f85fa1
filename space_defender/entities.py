"""
Game entities and the containers that hold them.

Every entity carries a position, a velocity and a hitbox rectangle centred
on its position. Entities that own timers cancel them in ``destroy()``
before anything else happens, so no callback outlives its owner.
"""

import math
import random
from enum import Enum
from typing import Callable, Iterator, List, Optional, Tuple

import pygame

from .config import (
    ASTEROID_HITBOX, ALIEN_HITBOX, BULLET_HITBOX, C_ALIEN, C_ASTEROID,
    C_BLACK, C_BULLET, C_EBULLET, C_PLAYER, C_PLAYER_DK, C_SHIELD, C_WHITE,
    PLAYER_HITBOX, POWERUP_HITBOX, SCREEN_H, SCREEN_W, SHIELD_HITBOX,
    SHIELD_MAX_HITS,
)
from .timers import TimerEvent


class Entity:
    kind   = "entity"
    hitbox = (0, 0)

    def __init__(self, x, y):
        self.x = float(x)
        self.y = float(y)
        self.vx = 0.0
        self.vy = 0.0
        self.active    = True
        self.visible   = True
        self.destroyed = False
        self.timers: List[TimerEvent] = []

    def set_velocity(self, vx=None, vy=None):
        if vx is not None:
            self.vx = float(vx)
        if vy is not None:
            self.vy = float(vy)

    def own(self, timer: TimerEvent) -> TimerEvent:
        self.timers.append(timer)
        return timer

    def move(self, dt):
        self.x += self.vx * dt
        self.y += self.vy * dt

    def destroy(self):
        for timer in self.timers:
            timer.remove()
        self.timers = []
        self.active    = False
        self.visible   = False
        self.destroyed = True

    @property
    def rect(self) -> pygame.Rect:
        w, h = self.hitbox
        return pygame.Rect(int(self.x - w / 2), int(self.y - h / 2), w, h)

    def overlaps(self, other: "Entity") -> bool:
        return self.rect.colliderect(other.rect)

    def draw(self, surface):
        pass


# ─────────────────────────────────────────────────────────────
# GROUPS & POOLS
# ─────────────────────────────────────────────────────────────

class EntityGroup:
    """A set of same-kind entities that can be moved and frozen together."""

    def __init__(self, kind: str):
        self.kind = kind
        self.members: List[Entity] = []

    def add(self, entity: Entity) -> Entity:
        self.members.append(entity)
        return entity

    def __iter__(self) -> Iterator[Entity]:
        return iter([m for m in self.members if m.active])

    def __len__(self):
        return sum(1 for m in self.members if m.active)

    def set_velocity(self, vx=None, vy=None):
        for m in self.members:
            m.set_velocity(vx, vy)

    def move(self, dt):
        for m in self.members:
            if m.active:
                m.move(dt)

    def prune(self):
        self.members = [m for m in self.members if not m.destroyed]

    def clear(self):
        for m in self.members:
            m.destroy()
        self.members = []

    def draw(self, surface):
        for m in self.members:
            if m.visible:
                m.draw(surface)


class BulletPool(EntityGroup):
    """
    Fixed-capacity bullet group.
    ``get`` hands out the first inactive bullet, grows the pool while it is
    below ``max_size``, and returns None once every slot is in flight.
    """

    def __init__(self, kind: str, factory: Callable[[float, float], "Bullet"], max_size: int):
        super().__init__(kind)
        self.factory  = factory
        self.max_size = max_size

    def get(self, x, y) -> Optional["Bullet"]:
        for bullet in self.members:
            if not bullet.active:
                bullet.x, bullet.y = float(x), float(y)
                return bullet
        if len(self.members) < self.max_size:
            return self.add(self.factory(x, y))
        return None

    @property
    def size(self):
        return len(self.members)

    def recycle_all(self):
        for bullet in self.members:
            if bullet.active:
                bullet.recycle()


# ─────────────────────────────────────────────────────────────
# BULLETS
# ─────────────────────────────────────────────────────────────

class Bullet(Entity):
    kind   = "bullet"
    hitbox = BULLET_HITBOX
    color  = C_BULLET

    def fire(self, vy):
        self.active  = True
        self.visible = True
        self.vx = 0.0
        self.vy = float(vy)

    def recycle(self):
        """Return the bullet to its pool instead of destroying it."""
        self.active  = False
        self.visible = False
        self.vx = self.vy = 0.0

    def is_off_screen(self) -> bool:
        return self.y < 0

    def draw(self, surface):
        cx, cy = int(self.x), int(self.y)
        pygame.draw.rect(surface, self.color, (cx - 2, cy - 12, 4, 24), border_radius=2)
        pygame.draw.rect(surface, C_WHITE, (cx - 1, cy - 10, 2, 20))


class AlienBullet(Bullet):
    kind  = "alienBullet"
    color = C_EBULLET

    def is_off_screen(self) -> bool:
        return self.y > SCREEN_H


# ─────────────────────────────────────────────────────────────
# SHIPS & HAZARDS
# ─────────────────────────────────────────────────────────────

class Player(Entity):
    kind   = "player"
    hitbox = PLAYER_HITBOX

    def __init__(self, x, y):
        super().__init__(x, y)
        self.tint = C_PLAYER
        self.invulnerable = 0.0
        self.age = 0.0

    def clamp_to_screen(self):
        hw, hh = self.hitbox[0] / 2, self.hitbox[1] / 2
        self.x = max(hw, min(SCREEN_W - hw, self.x))
        self.y = max(hh, min(SCREEN_H - hh, self.y))

    def move(self, dt):
        super().move(dt)
        self.clamp_to_screen()
        self.age += dt
        self.invulnerable = max(0.0, self.invulnerable - dt)

    def draw(self, surface):
        # Blink while invulnerable
        if self.invulnerable > 0 and int(self.age * 10) % 2 == 0:
            return
        cx, cy = int(self.x), int(self.y)
        w, h = 28, 24
        hull = [
            (cx,     cy - h),
            (cx - 8, cy - h + 10),
            (cx - w, cy + h),
            (cx - 6, cy + h - 10),
            (cx,     cy + h - 4),
            (cx + 6, cy + h - 10),
            (cx + w, cy + h),
            (cx + 8, cy - h + 10),
        ]
        pygame.draw.polygon(surface, self.tint, hull)
        pygame.draw.polygon(surface, C_PLAYER_DK, hull, 2)
        pygame.draw.ellipse(surface, C_PLAYER_DK, (cx - 5, cy - h + 12, 10, 14))


class Alien(Entity):
    kind   = "alien"
    hitbox = ALIEN_HITBOX

    @property
    def shoot_timer(self) -> Optional[TimerEvent]:
        return self.timers[0] if self.timers else None

    def draw(self, surface):
        cx, cy = int(self.x), int(self.y)
        pygame.draw.ellipse(surface, C_ALIEN, (cx - 25, cy - 8, 50, 18))
        pygame.draw.ellipse(surface, C_WHITE, (cx - 25, cy - 8, 50, 18), 1)
        pygame.draw.ellipse(surface, (180, 255, 200), (cx - 11, cy - 18, 22, 16))
        for dx in (-14, 0, 14):
            pygame.draw.circle(surface, C_BLACK, (cx + dx, cy + 1), 2)


class Asteroid(Entity):
    kind   = "asteroid"
    hitbox = ASTEROID_HITBOX

    def __init__(self, x, y, rng: Optional[random.Random] = None):
        super().__init__(x, y)
        rng = rng or random
        self.outline: List[Tuple[float, float]] = []
        for i in range(10):
            angle = math.tau * i / 10
            r = rng.uniform(24, 34)
            self.outline.append((math.cos(angle) * r, math.sin(angle) * r))

    def draw(self, surface):
        pts = [(self.x + ox, self.y + oy) for ox, oy in self.outline]
        pygame.draw.polygon(surface, C_ASTEROID, pts)
        pygame.draw.polygon(surface, C_WHITE, pts, 1)


class Shield(Entity):
    """Bubble around the player that absorbs a fixed number of hazards."""
    kind   = "shield"
    hitbox = SHIELD_HITBOX

    def __init__(self, x, y, max_hits: int = SHIELD_MAX_HITS):
        super().__init__(x, y)
        self.hits = 0
        self.max_hits = max_hits

    def absorb(self) -> bool:
        """Count one absorbed hazard. Returns True once the shield is spent."""
        self.hits += 1
        return self.hits >= self.max_hits

    def follow(self, target: Entity):
        self.x, self.y = target.x, target.y

    def draw(self, surface):
        ratio  = 1.0 - self.hits / self.max_hits
        radius = self.hitbox[0] // 2
        s = pygame.Surface((radius * 2 + 4, radius * 2 + 4), pygame.SRCALPHA)
        pygame.draw.circle(s, (*C_SHIELD, int(30 + 60 * ratio)), (radius + 2, radius + 2), radius)
        pygame.draw.circle(s, (*C_SHIELD, 180), (radius + 2, radius + 2), radius, 2)
        surface.blit(s, (int(self.x) - radius - 2, int(self.y) - radius - 2))


# ─────────────────────────────────────────────────────────────
# POWER-UP PICKUPS
# ─────────────────────────────────────────────────────────────

class PowerUpType(Enum):
    SHIELD        = "shield"
    KILL_ALL      = "bomb"
    EXTRA_LIFE    = "life"
    MULTI_SHOT    = "threeShot"
    DOUBLE_POINTS = "bonus"
    RAPID_FIRE    = "rapid"
    FAKE          = "fake"


POWERUP_COLORS = {
    PowerUpType.SHIELD:        (60,  160, 255),
    PowerUpType.KILL_ALL:      (255, 90,  60),
    PowerUpType.EXTRA_LIFE:    (60,  220, 90),
    PowerUpType.MULTI_SHOT:    (220, 80,  255),
    PowerUpType.DOUBLE_POINTS: (255, 200, 50),
    PowerUpType.RAPID_FIRE:    (255, 240, 90),
    # Mimics the extra-life pickup
    PowerUpType.FAKE:          (60,  220, 90),
}

POWERUP_LABELS = {
    PowerUpType.SHIELD:        "SH",
    PowerUpType.KILL_ALL:      "KA",
    PowerUpType.EXTRA_LIFE:    "1UP",
    PowerUpType.MULTI_SHOT:    "3X",
    PowerUpType.DOUBLE_POINTS: "2P",
    PowerUpType.RAPID_FIRE:    "RF",
    PowerUpType.FAKE:          "1UP",
}


class PowerUp(Entity):
    kind   = "powerup"
    hitbox = POWERUP_HITBOX

    def __init__(self, x, y, variant: PowerUpType):
        super().__init__(x, y)
        self.variant = variant
        self.color   = POWERUP_COLORS[variant]
        self.label   = POWERUP_LABELS[variant]
        self.radius  = POWERUP_HITBOX[0] // 2 - 2
        self.age     = 0.0

    def move(self, dt):
        super().move(dt)
        self.age += dt

    def draw(self, surface, font_small=None):
        bob_y = int(self.y + math.sin(self.age * 4) * 4)
        glow_surf = pygame.Surface((60, 60), pygame.SRCALPHA)
        r, g, b = self.color
        pygame.draw.circle(glow_surf, (r, g, b, 50), (30, 30), 28)
        surface.blit(glow_surf, (int(self.x) - 30, bob_y - 30))
        pygame.draw.circle(surface, self.color, (int(self.x), bob_y), self.radius)
        pygame.draw.circle(surface, C_WHITE, (int(self.x), bob_y), self.radius, 2)
        if font_small is not None:
            txt = font_small.render(self.label, True, C_BLACK)
            surface.blit(txt, txt.get_rect(center=(int(self.x), bob_y)))
