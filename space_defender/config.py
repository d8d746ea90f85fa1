"""Constants and per-run settings for Space Defender."""

import os
from dataclasses import dataclass

# ─────────────────────────────────────────────────────────────
# CONSTANTS & CONFIGURATION
# ─────────────────────────────────────────────────────────────

SCREEN_W, SCREEN_H = 800, 600
LEFT_SIDE, RIGHT_SIDE = 0, SCREEN_W

FPS        = 60
MAX_DT     = 0.05   # Cap dt to avoid tunnelling after a stall
TITLE      = "Space Defender"

# Colour palette
C_BG        = (5,   5,  18)
C_STAR1     = (200, 200, 255)
C_STAR2     = (150, 180, 255)
C_STAR3     = (255, 255, 255)
C_PLAYER    = (80,  220, 255)
C_PLAYER_DK = (30,  130, 180)
C_BULLET    = (255, 255, 100)
C_EBULLET   = (255,  80,  80)
C_ALIEN     = (120, 255, 140)
C_ASTEROID  = (150, 130, 110)
C_SHIELD    = ( 60, 160, 255)
C_SCORE     = (255, 240, 180)
C_WHITE     = (255, 255, 255)
C_BLACK     = (  0,   0,   0)
C_GOLD      = (255, 200,  50)
C_RED       = (255,  60,  60)
C_DIM       = (120, 120, 160)
C_HITBOX    = (255,   0, 255)

# Player
PLAYER_START    = (400, 550)
PLAYER_SPEED    = 200       # px/s on each axis
PLAYER_HITBOX   = (60, 50)
PLAYER_SHOT_GAP = 25        # horizontal offset of the alternating guns
FIRE_COOLDOWN   = 0.4       # seconds between shots
INVULNERABLE_TIME = 2.0     # after losing a spare life

# Bullets
BULLET_SPEED        = 300
ALIEN_BULLET_SPEED  = 300
BULLET_HITBOX       = (10, 40)
PLAYER_BULLET_POOL  = 10
ALIEN_BULLET_POOL   = 50

# Aliens
ALIEN_Y             = 50
ALIEN_HALF_W        = 25
ALIEN_HITBOX        = (50, 36)
ALIEN_SPAWN_DELAY   = (1.0, 3.0)
ALIEN_SPEED         = (50, 200)
ALIEN_BOUNCE_SPEED  = (50, 100)
ALIEN_SHOOT_DELAY   = (1.0, 3.0)
ALIEN_POINTS        = 5

# Asteroids
ASTEROID_Y            = -20
ASTEROID_HITBOX       = (60, 60)
ASTEROID_SPAWN_DELAY  = (0.5, 2.0)
ASTEROID_SPEED        = (100, 300)
ASTEROID_DESPAWN      = 60          # px below the screen
ASTEROID_POINTS       = 1

# Power-ups
POWERUP_SPAWN_DELAY   = (15.0, 30.0)
POWERUP_HITBOX        = (32, 32)
POWERUP_LIFETIME      = 12.0        # uncollected pickups fade after this long
SHIELD_HITBOX         = (100, 100)
SHIELD_LIFETIME       = 10.0
SHIELD_MAX_HITS       = 10
MAX_SPARE_LIVES       = 3
MULTI_SHOT_COUNT      = 3
MULTI_SHOT_TIME       = 10.0
DOUBLE_POINTS_TIME    = 10.0
RAPID_FIRE_COOLDOWN   = 0.15
RAPID_FIRE_TIME       = 8.0

# Persistence
HIGHSCORE_KEY   = "highScore"
HIGHSCORE_ENV   = "SPACE_DEFENDER_HIGHSCORE"
HIGHSCORE_PATH  = os.path.join(os.path.expanduser("~"), ".space_defender", "highscore.json")

ASSETS_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "assets")


@dataclass
class GameSettings:
    """Options that vary per run rather than per build."""
    highscore_path: str = HIGHSCORE_PATH
    mute:           bool = False
    show_hitboxes:  bool = False
    fps:            int = FPS
    log_level:      str = "INFO"

    @classmethod
    def from_args(cls, args) -> "GameSettings":
        path = args.highscore_file or os.environ.get(HIGHSCORE_ENV) or HIGHSCORE_PATH
        return cls(
            highscore_path=path,
            mute=args.mute,
            show_hitboxes=args.show_hitboxes,
            fps=args.fps,
            log_level=args.log_level,
        )
