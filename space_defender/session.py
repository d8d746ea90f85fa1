"""Per-session play state shared by spawners, power-ups and collision rules."""

from dataclasses import dataclass, field
from typing import Dict, Optional

from .config import FIRE_COOLDOWN
from .entities import Shield
from .timers import TimerEvent


@dataclass
class SessionState:
    score:            int = 0
    lives:            int = 0       # spare lives banked from pickups
    shot_count:       int = 1
    score_multiplier: int = 1
    fire_cooldown:    float = FIRE_COOLDOWN
    next_shot_at:     float = 0.0
    shots_fired:      int = 0
    elapsed:          float = 0.0
    game_over:        bool = False
    new_high_score:   bool = False
    shield:           Optional[Shield] = None
    modifiers:        Dict[str, TimerEvent] = field(default_factory=dict)

    def add_score(self, points: int) -> int:
        """Add ``points`` scaled by the multiplier. Returns what was awarded."""
        if points < 0:
            raise ValueError(f"score can only increase, got {points}")
        if self.game_over:
            return 0
        awarded = points * self.score_multiplier
        self.score += awarded
        return awarded

    def cancel_modifiers(self):
        for timer in self.modifiers.values():
            timer.remove()
        self.modifiers.clear()
