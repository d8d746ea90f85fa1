"""
Power-up effects.

``apply_powerup`` looks the pickup's variant up in ``EFFECTS`` and runs
exactly one handler, then destroys the pickup. Timed modifiers keep their
expiry timer in ``SessionState.modifiers``; collecting the same modifier
again restarts its duration.
"""

from typing import TYPE_CHECKING, Callable, Dict

from .config import (
    DOUBLE_POINTS_TIME, FIRE_COOLDOWN, MAX_SPARE_LIVES, MULTI_SHOT_COUNT,
    MULTI_SHOT_TIME, RAPID_FIRE_COOLDOWN, RAPID_FIRE_TIME, SHIELD_LIFETIME,
)
from .entities import PowerUp, PowerUpType, Shield
from .log import get_logger

if TYPE_CHECKING:
    from .play import GameScene

logger = get_logger(__name__)


def create_shield(scene: "GameScene"):
    session = scene.session
    if session.shield is not None:
        return
    shield = Shield(scene.player.x, scene.player.y)
    shield.own(scene.timers.delayed_call(SHIELD_LIFETIME, scene.destroy_shield))
    session.shield = shield
    scene.shields.add(shield)


def kill_all(scene: "GameScene"):
    scene.aliens.clear()
    scene.asteroids.clear()
    scene.alien_bullets.recycle_all()


def extra_life(scene: "GameScene"):
    session = scene.session
    session.lives = min(MAX_SPARE_LIVES, session.lives + 1)


def _timed(scene: "GameScene", name: str, duration: float, expire: Callable[[], None]):
    modifiers = scene.session.modifiers
    if name in modifiers:
        modifiers[name].remove()

    def _expire():
        modifiers.pop(name, None)
        expire()

    modifiers[name] = scene.timers.delayed_call(duration, _expire)


def multi_shot(scene: "GameScene"):
    session = scene.session
    session.shot_count = MULTI_SHOT_COUNT

    def reset():
        session.shot_count = 1

    _timed(scene, "multi_shot", MULTI_SHOT_TIME, reset)


def double_points(scene: "GameScene"):
    session = scene.session
    session.score_multiplier = 2

    def reset():
        session.score_multiplier = 1

    _timed(scene, "double_points", DOUBLE_POINTS_TIME, reset)


def rapid_fire(scene: "GameScene"):
    session = scene.session
    session.fire_cooldown = RAPID_FIRE_COOLDOWN

    def reset():
        session.fire_cooldown = FIRE_COOLDOWN

    _timed(scene, "rapid_fire", RAPID_FIRE_TIME, reset)


def fake(scene: "GameScene"):
    logger.debug("Fake power-up collected, nothing happens")


EFFECTS: Dict[PowerUpType, Callable[["GameScene"], None]] = {
    PowerUpType.SHIELD:        create_shield,
    PowerUpType.KILL_ALL:      kill_all,
    PowerUpType.EXTRA_LIFE:    extra_life,
    PowerUpType.MULTI_SHOT:    multi_shot,
    PowerUpType.DOUBLE_POINTS: double_points,
    PowerUpType.RAPID_FIRE:    rapid_fire,
    PowerUpType.FAKE:          fake,
}


def apply_powerup(scene: "GameScene", pickup: PowerUp):
    if scene.session.game_over or pickup.destroyed:
        return
    logger.debug("Power-up collected: %s", pickup.variant.value)
    EFFECTS[pickup.variant](scene)
    pickup.destroy()
