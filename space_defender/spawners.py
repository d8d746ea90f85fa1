"""Periodic generators for aliens, asteroids, power-ups and alien fire."""

import random
from typing import TYPE_CHECKING, List, Optional

from .config import (
    ALIEN_BULLET_SPEED, ALIEN_SHOOT_DELAY, ALIEN_SPAWN_DELAY,
    ALIEN_SPEED, ALIEN_Y, ASTEROID_SPAWN_DELAY, ASTEROID_SPEED, ASTEROID_Y,
    POWERUP_LIFETIME, POWERUP_SPAWN_DELAY, SCREEN_H, SCREEN_W,
)
from .entities import AlienBullet, Alien, Asteroid, PowerUp, PowerUpType
from .log import get_logger
from .timers import TimerEvent

if TYPE_CHECKING:
    from .play import GameScene

logger = get_logger(__name__)


class Spawner:
    """
    Owns the three scene-level spawn timers. Every delay is re-rolled per
    firing, so consecutive spawns are irregular.
    """

    def __init__(self, scene: "GameScene", rng: Optional[random.Random] = None):
        self.scene = scene
        self.rng   = rng or random
        self.alien_timer:    Optional[TimerEvent] = None
        self.asteroid_timer: Optional[TimerEvent] = None
        self.powerup_timer:  Optional[TimerEvent] = None

    @property
    def timers(self) -> List[TimerEvent]:
        return [t for t in (self.alien_timer, self.asteroid_timer, self.powerup_timer) if t]

    def start(self):
        timers = self.scene.timers
        self.alien_timer    = timers.add_event(ALIEN_SPAWN_DELAY, self.add_alien, loop=True)
        self.asteroid_timer = timers.add_event(ASTEROID_SPAWN_DELAY, self.add_asteroid, loop=True)
        self.powerup_timer  = timers.add_event(POWERUP_SPAWN_DELAY, self.spawn_powerup, loop=True)

    def stop(self):
        for timer in self.timers:
            timer.remove()

    # ── Aliens ────────────────────────────────────────────────

    def add_alien(self) -> Optional[Alien]:
        if self.scene.session.game_over:
            return None
        alien = Alien(self.rng.randint(0, SCREEN_W), ALIEN_Y)
        speed = self.rng.randint(*ALIEN_SPEED)
        alien.set_velocity(vx=speed if self.rng.randint(1, 2) == 1 else -speed)
        # Each alien owns its shoot timer; destroying the alien cancels it
        alien.own(self.scene.timers.add_event(
            ALIEN_SHOOT_DELAY, self.alien_shoot, args=(alien,), loop=True))
        self.scene.aliens.add(alien)
        logger.debug("Alien spawned at x=%d vx=%d", alien.x, alien.vx)
        return alien

    def alien_shoot(self, alien: Alien) -> Optional[AlienBullet]:
        if not alien.active or self.scene.session.game_over:
            return None
        bullet = self.scene.alien_bullets.get(alien.x, alien.y + 20)
        if bullet is None:
            logger.debug("Alien bullet pool exhausted, shot dropped")
            return None
        bullet.fire(ALIEN_BULLET_SPEED)
        return bullet

    # ── Asteroids ─────────────────────────────────────────────

    def add_asteroid(self) -> Optional[Asteroid]:
        if self.scene.session.game_over:
            return None
        asteroid = Asteroid(self.rng.randint(0, SCREEN_W), ASTEROID_Y, rng=self.rng)
        asteroid.set_velocity(vy=self.rng.randint(*ASTEROID_SPEED))
        self.scene.asteroids.add(asteroid)
        return asteroid

    # ── Power-ups ─────────────────────────────────────────────

    def spawn_powerup(self, variant: Optional[PowerUpType] = None) -> Optional[PowerUp]:
        if self.scene.session.game_over:
            return None
        if variant is None:
            variant = self.rng.choice(list(PowerUpType))
        pickup = PowerUp(self.rng.randint(0, SCREEN_W), self.rng.randint(0, SCREEN_H), variant)
        pickup.own(self.scene.timers.delayed_call(POWERUP_LIFETIME, self.expire_powerup, args=(pickup,)))
        self.scene.powerups.add(pickup)
        logger.debug("Power-up %s spawned at (%d, %d)", variant.value, pickup.x, pickup.y)
        return pickup

    def expire_powerup(self, pickup: PowerUp):
        if pickup.destroyed or self.scene.session.game_over:
            return
        pickup.destroy()
        logger.debug("Power-up %s expired", pickup.variant.value)
