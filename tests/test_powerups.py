import pytest

from space_defender.config import FIRE_COOLDOWN, RAPID_FIRE_COOLDOWN
from space_defender.entities import Asteroid, PowerUp, PowerUpType
from space_defender.powerups import EFFECTS, apply_powerup

from conftest import FRAME, run_frames


def collect(scene, variant):
    pickup = PowerUp(scene.player.x, scene.player.y, variant)
    scene.powerups.add(pickup)
    apply_powerup(scene, pickup)
    return pickup


def test_every_variant_has_an_effect():
    assert set(EFFECTS) == set(PowerUpType)


def test_pickup_is_destroyed_after_effect(quiet_scene):
    for variant in PowerUpType:
        pickup = collect(quiet_scene, variant)
        assert pickup.destroyed


def test_pickup_by_overlap_during_frame(quiet_scene):
    pickup = PowerUp(quiet_scene.player.x, quiet_scene.player.y, PowerUpType.EXTRA_LIFE)
    quiet_scene.powerups.add(pickup)
    quiet_scene.update(FRAME)
    assert quiet_scene.session.lives == 1
    assert pickup not in quiet_scene.powerups.members


def test_shield_created_at_player(quiet_scene):
    collect(quiet_scene, PowerUpType.SHIELD)
    shield = quiet_scene.session.shield
    assert shield is not None
    assert (shield.x, shield.y) == (quiet_scene.player.x, quiet_scene.player.y)
    assert shield.hits == 0
    assert len(quiet_scene.shields) == 1


def test_only_one_shield_at_a_time(quiet_scene):
    collect(quiet_scene, PowerUpType.SHIELD)
    first = quiet_scene.session.shield
    collect(quiet_scene, PowerUpType.SHIELD)
    assert quiet_scene.session.shield is first
    assert len(quiet_scene.shields) == 1


def test_shield_expires_after_ten_seconds(quiet_scene):
    collect(quiet_scene, PowerUpType.SHIELD)
    run_frames(quiet_scene, 9.9)
    assert quiet_scene.session.shield is not None
    run_frames(quiet_scene, 0.2)
    assert quiet_scene.session.shield is None
    assert len(quiet_scene.shields) == 0


def test_shield_absorbs_ten_hazards_then_breaks(quiet_scene):
    collect(quiet_scene, PowerUpType.SHIELD)
    rocks = [quiet_scene.asteroids.add(Asteroid(quiet_scene.player.x, quiet_scene.player.y))
             for _ in range(10)]
    quiet_scene.update(FRAME)

    assert all(r.destroyed for r in rocks)
    assert quiet_scene.session.shield is None
    assert not quiet_scene.session.game_over
    assert quiet_scene.session.score == 0


def test_shield_hit_count_never_passes_limit(quiet_scene):
    collect(quiet_scene, PowerUpType.SHIELD)
    shield = quiet_scene.session.shield
    for _ in range(12):
        quiet_scene.asteroids.add(Asteroid(quiet_scene.player.x, quiet_scene.player.y))
    quiet_scene.update(FRAME)
    assert shield.hits == 10
    assert shield.destroyed
    # the two hazards the shield could not take reach the player
    assert quiet_scene.session.game_over


def test_expired_shield_timer_does_not_touch_a_new_shield(quiet_scene):
    collect(quiet_scene, PowerUpType.SHIELD)
    old = quiet_scene.session.shield
    old_timer = old.timers[0]
    quiet_scene.destroy_shield()
    assert old_timer.removed

    run_frames(quiet_scene, 5.0)
    collect(quiet_scene, PowerUpType.SHIELD)
    new = quiet_scene.session.shield
    run_frames(quiet_scene, 6.0)
    assert quiet_scene.session.shield is new


def test_kill_all_clears_hazards(quiet_scene):
    aliens = [quiet_scene.spawner.add_alien() for _ in range(3)]
    timers = [a.shoot_timer for a in aliens]
    rocks = [quiet_scene.spawner.add_asteroid() for _ in range(2)]
    quiet_scene.spawner.alien_shoot(aliens[0])

    collect(quiet_scene, PowerUpType.KILL_ALL)

    assert len(quiet_scene.aliens) == 0
    assert len(quiet_scene.asteroids) == 0
    assert len(quiet_scene.alien_bullets) == 0
    assert all(t.removed for t in timers)
    assert all(r.destroyed for r in rocks)
    assert quiet_scene.session.score == 0


def test_extra_life_is_capped(quiet_scene):
    for _ in range(5):
        collect(quiet_scene, PowerUpType.EXTRA_LIFE)
    assert quiet_scene.session.lives == 3


def test_multi_shot_is_timed(quiet_scene):
    collect(quiet_scene, PowerUpType.MULTI_SHOT)
    assert quiet_scene.session.shot_count == 3
    assert len(quiet_scene.fire_bullets()) == 3
    quiet_scene.timers.update(10.01)
    assert quiet_scene.session.shot_count == 1
    assert "multi_shot" not in quiet_scene.session.modifiers


def test_double_points_doubles_kills(quiet_scene):
    collect(quiet_scene, PowerUpType.DOUBLE_POINTS)
    rock = quiet_scene.asteroids.add(Asteroid(400, 300))
    bullet = quiet_scene.bullets.get(400, 300)
    quiet_scene.destroy_asteroid(bullet, rock)
    assert quiet_scene.session.score == 2
    quiet_scene.timers.update(10.01)
    assert quiet_scene.session.score_multiplier == 1


def test_rapid_fire_recollect_restarts_duration(quiet_scene):
    collect(quiet_scene, PowerUpType.RAPID_FIRE)
    first = quiet_scene.session.modifiers["rapid_fire"]
    assert quiet_scene.session.fire_cooldown == RAPID_FIRE_COOLDOWN

    quiet_scene.timers.update(6.0)
    collect(quiet_scene, PowerUpType.RAPID_FIRE)
    assert first.removed

    quiet_scene.timers.update(6.0)
    assert quiet_scene.session.fire_cooldown == RAPID_FIRE_COOLDOWN
    quiet_scene.timers.update(2.5)
    assert quiet_scene.session.fire_cooldown == FIRE_COOLDOWN


def test_fake_does_nothing(quiet_scene):
    before = vars(quiet_scene.session).copy()
    collect(quiet_scene, PowerUpType.FAKE)
    assert vars(quiet_scene.session) == before


@pytest.mark.parametrize("variant", list(PowerUpType))
def test_no_effect_after_game_over(quiet_scene, variant):
    quiet_scene.session.game_over = True
    pickup = collect(quiet_scene, variant)
    assert not pickup.destroyed
    assert quiet_scene.session.shield is None
    assert quiet_scene.session.lives == 0


def test_shield_outlives_its_timer_after_game_over(quiet_scene):
    collect(quiet_scene, PowerUpType.SHIELD)
    shield = quiet_scene.session.shield
    quiet_scene.trigger_game_over()

    run_frames(quiet_scene, 11.0)

    assert quiet_scene.session.shield is shield
    assert not shield.destroyed
    assert shield in quiet_scene.shields.members
