"""
The play scene.

GameScene owns one session: the entities, the scene timers, the standing
overlap rules and the score/high-score/timer text. It is also the state
machine for PLAYING → GAME_OVER; leaving GAME_OVER always builds a new
scene through the controller.
"""

import random
from typing import TYPE_CHECKING, Dict, List, Optional

import pygame

from .collisions import CollisionResolver
from .config import (
    ALIEN_BOUNCE_SPEED, ALIEN_HALF_W, ALIEN_POINTS, ALIEN_BULLET_POOL,
    ASTEROID_DESPAWN, ASTEROID_POINTS, BULLET_SPEED, C_GOLD, C_RED, C_SCORE,
    C_WHITE, INVULNERABLE_TIME, LEFT_SIDE, PLAYER_BULLET_POOL,
    PLAYER_SHOT_GAP, PLAYER_SPEED, PLAYER_START, RIGHT_SIDE, SCREEN_H,
    SCREEN_W,
)
from .entities import (
    AlienBullet, Bullet, BulletPool, Entity, EntityGroup, Player, PowerUp,
)
from .log import get_logger
from .powerups import apply_powerup
from .scene import InputState, Scene
from .session import SessionState
from .spawners import Spawner
from .timers import TimerManager
from .ui import Menu, MenuItem, StarField, TextLabel

if TYPE_CHECKING:
    from .game import Game

logger = get_logger(__name__)


class GameScene(Scene):
    name = "game"

    def __init__(self, game: "Game", rng: Optional[random.Random] = None):
        super().__init__(game)
        self.rng     = rng or game.rng
        self.session = SessionState()
        self.timers  = TimerManager(self.rng)

        self.player        = Player(*PLAYER_START)
        self.players       = EntityGroup("player")
        self.players.add(self.player)
        self.bullets       = BulletPool("bullet", Bullet, PLAYER_BULLET_POOL)
        self.alien_bullets = BulletPool("alienBullet", AlienBullet, ALIEN_BULLET_POOL)
        self.aliens        = EntityGroup("alien")
        self.asteroids     = EntityGroup("asteroid")
        self.powerups      = EntityGroup("powerup")
        self.shields       = EntityGroup("shield")

        self.score_text      = TextLabel("Score: 0", (10, 10))
        self.high_score_text = TextLabel(f"High Score: {game.high_scores.value}", (10, 50))
        self.timer_text      = TextLabel("00:00", (680, 10))
        self.summary: List[TextLabel] = []
        self.game_over_menu: Optional[Menu] = None

        self.stars      = StarField(self.rng)
        self.spawner    = Spawner(self, self.rng)
        self.collisions = CollisionResolver()
        self._register_collisions()
        self.spawner.start()
        logger.info("Session started (high score %d)", game.high_scores.value)

    @property
    def groups(self) -> Dict[str, EntityGroup]:
        return {g.kind: g for g in (
            self.players, self.bullets, self.alien_bullets, self.aliens,
            self.asteroids, self.powerups, self.shields,
        )}

    def _register_collisions(self):
        c = self.collisions
        c.add_overlap("bullet", "alien", self.destroy_alien)
        c.add_overlap("bullet", "asteroid", self.destroy_asteroid)
        # Shield rules come before the player's so the shield absorbs first
        for hazard in ("alien", "alienBullet", "asteroid"):
            c.add_overlap("shield", hazard, self.hit_shield)
        for hazard in ("alien", "asteroid", "alienBullet"):
            c.add_overlap("player", hazard, self.hit_player)
        c.add_overlap("player", "powerup", self.collect_powerup)

    # ── Frame ─────────────────────────────────────────────────

    def update(self, dt: float, inputs: Optional[InputState] = None):
        inputs = inputs or InputState()
        self.timers.update(dt)
        self.stars.update(dt)
        if self.session.game_over:
            return

        self.session.elapsed += dt
        self._handle_movement(inputs)
        self._handle_shooting(inputs)
        self._deactivate_offscreen()
        self._update_timer_text()
        self._bounce_aliens()
        self._follow_shield()

        for group in self.groups.values():
            group.move(dt)
        self.collisions.resolve(self.groups, stop=lambda: self.session.game_over)
        for group in self.groups.values():
            group.prune()

    def _handle_movement(self, inputs: InputState):
        vx = -PLAYER_SPEED if inputs.left else PLAYER_SPEED if inputs.right else 0
        vy = -PLAYER_SPEED if inputs.up else PLAYER_SPEED if inputs.down else 0
        self.player.set_velocity(vx, vy)

    def _handle_shooting(self, inputs: InputState):
        session = self.session
        if not inputs.fire or session.elapsed < session.next_shot_at:
            return
        if self.fire_bullets():
            session.next_shot_at = session.elapsed + session.fire_cooldown
            self.game.sound.play("shoot", 0.4)

    def fire_bullets(self) -> List[Bullet]:
        """Take bullets from the pool; a shot that finds no free slot is dropped."""
        session = self.session
        n = session.shot_count
        if n > 1:
            offsets = [PLAYER_SHOT_GAP * (i - (n - 1) / 2) for i in range(n)]
        else:
            # Single shots alternate between the left and right gun
            offsets = [-PLAYER_SHOT_GAP if session.shots_fired % 2 == 0 else PLAYER_SHOT_GAP]
        fired = []
        for dx in offsets:
            bullet = self.bullets.get(self.player.x + dx, self.player.y - 20)
            if bullet is None:
                logger.debug("Bullet pool exhausted, shot dropped")
                break
            bullet.fire(-BULLET_SPEED)
            fired.append(bullet)
        if fired:
            session.shots_fired += 1
        return fired

    def _deactivate_offscreen(self):
        for pool in (self.bullets, self.alien_bullets):
            for bullet in pool:
                if bullet.is_off_screen():
                    bullet.recycle()
        for asteroid in self.asteroids:
            if asteroid.y > SCREEN_H + ASTEROID_DESPAWN:
                asteroid.destroy()

    def _update_timer_text(self):
        total = int(self.session.elapsed)
        minutes, seconds = divmod(total, 60)
        self.timer_text.set_text(f"{minutes:02d}:{seconds:02d}")

    def _bounce_aliens(self):
        for alien in self.aliens:
            if alien.x - ALIEN_HALF_W <= LEFT_SIDE:
                alien.set_velocity(vx=self.rng.randint(*ALIEN_BOUNCE_SPEED))
            elif alien.x + ALIEN_HALF_W >= RIGHT_SIDE:
                alien.set_velocity(vx=-self.rng.randint(*ALIEN_BOUNCE_SPEED))

    def _follow_shield(self):
        if self.session.shield is not None:
            self.session.shield.follow(self.player)

    # ── Overlap handlers ──────────────────────────────────────

    def _add_score(self, points: int):
        self.session.add_score(points)
        self.score_text.set_text(f"Score: {self.session.score}")

    def destroy_alien(self, bullet: Bullet, alien: Entity):
        bullet.recycle()
        alien.destroy()
        self._add_score(ALIEN_POINTS)
        self.game.sound.play("explosion", 0.6)

    def destroy_asteroid(self, bullet: Bullet, asteroid: Entity):
        bullet.recycle()
        asteroid.destroy()
        self._add_score(ASTEROID_POINTS)
        self.game.sound.play("explosion", 0.5)

    @staticmethod
    def _remove_hazard(hazard: Entity):
        if isinstance(hazard, Bullet):
            hazard.recycle()
        else:
            hazard.destroy()

    def hit_shield(self, shield, hazard: Entity):
        if not hazard.active:
            return
        self._remove_hazard(hazard)
        if shield.absorb():
            self.destroy_shield()

    def destroy_shield(self):
        shield = self.session.shield
        if shield is None or self.session.game_over:
            return
        shield.destroy()
        self.session.shield = None

    def hit_player(self, player: Player, hazard: Entity):
        if not hazard.active or self.session.game_over or player.invulnerable > 0:
            return
        if self.session.lives > 0:
            self.session.lives -= 1
            self._remove_hazard(hazard)
            player.invulnerable = INVULNERABLE_TIME
            logger.info("Spare life lost, %d left", self.session.lives)
            return
        self.trigger_game_over()

    def collect_powerup(self, player: Player, pickup: PowerUp):
        apply_powerup(self, pickup)
        self.game.sound.play("powerup", 0.8)

    # ── Terminal state ────────────────────────────────────────

    def trigger_game_over(self):
        session = self.session
        if session.game_over:
            return
        session.game_over = True

        self.player.set_velocity(0, 0)
        self.player.tint = C_RED
        for group in (self.aliens, self.asteroids, self.alien_bullets, self.bullets, self.powerups):
            group.set_velocity(0, 0)

        self.spawner.stop()
        session.cancel_modifiers()
        self.score_text.visible = False
        self.high_score_text.visible = False

        store = self.game.high_scores
        previous = store.value
        session.new_high_score = store.submit(session.score)

        cx = SCREEN_W // 2
        self.summary = [TextLabel("Game Over", (cx, 200), size="title", centered=True)]
        if session.new_high_score:
            self.summary.append(TextLabel(f"New High Score: {store.value}", (cx, 300),
                                          color=C_GOLD, centered=True))
        else:
            self.summary.append(TextLabel(f"High Score: {previous}", (cx, 300),
                                          color=C_SCORE, centered=True))
            self.summary.append(TextLabel(f"Score: {session.score}", (cx, 350),
                                          color=C_WHITE, centered=True))
        self.game_over_menu = Menu([
            MenuItem("Play Again", (cx, 425), self.play_again),
            MenuItem("Menu", (cx, 500), self.back_to_menu),
        ])
        self.game.sound.play("gameover", 0.9)
        logger.info("Game over: score %d, high score %d", session.score, store.value)

    def play_again(self):
        self.game.start_scene("game")

    def back_to_menu(self):
        self.game.start_scene("menu")

    # ── Scene plumbing ────────────────────────────────────────

    def handle_event(self, event):
        if self.session.game_over:
            if self.game_over_menu is not None:
                self.game_over_menu.handle_event(event)
            return
        if event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
            self.back_to_menu()

    def teardown(self):
        self.timers.remove_all()
        for group in self.groups.values():
            group.clear()
        self.session.shield = None

    def draw(self, surface, ui):
        self.stars.draw(surface)
        for pickup in self.powerups:
            pickup.draw(surface, ui.fonts["small"])
        for group in (self.asteroids, self.aliens, self.alien_bullets, self.bullets):
            group.draw(surface)
        self.player.draw(surface)
        self.shields.draw(surface)
        if self.game.settings.show_hitboxes:
            ui.draw_hitboxes(surface, [e for g in self.groups.values() for e in g.members])

        for label in (self.score_text, self.high_score_text, self.timer_text):
            ui.draw_label(surface, label)
        if self.session.game_over:
            ui.draw_game_over(surface, self.summary, self.game_over_menu)
        else:
            ui.draw_status(surface, self.session.lives, self.session.modifiers)
