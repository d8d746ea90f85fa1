"""
Frame-driven timers.

Timers count down with the frame ``dt`` and fire their callback when the
delay elapses. A delay is either a fixed number of seconds or a ``(lo, hi)``
range that is re-rolled before every firing.
"""

import random
from typing import Callable, List, Optional, Tuple, Union

Delay = Union[float, Tuple[float, float]]


class TimerEvent:
    def __init__(self, delay: Delay, callback: Callable, args=(), loop=False,
                 rng: Optional[random.Random] = None):
        self.delay_range = delay
        self.callback    = callback
        self.args        = tuple(args)
        self.loop        = loop
        self.rng         = rng or random
        self.elapsed     = 0.0
        self.fired       = 0
        self.removed     = False
        self.delay       = self._roll()

    def _roll(self) -> float:
        if isinstance(self.delay_range, tuple):
            lo, hi = self.delay_range
            return self.rng.uniform(lo, hi)
        return float(self.delay_range)

    @property
    def remaining(self) -> float:
        return max(0.0, self.delay - self.elapsed)

    def remove(self):
        """Cancel the timer. Safe to call more than once."""
        self.removed = True

    def tick(self, dt):
        if self.removed:
            return
        self.elapsed += dt
        if self.elapsed < self.delay:
            return
        self.fired += 1
        if self.loop:
            self.elapsed -= self.delay
            self.delay = self._roll()
        else:
            self.removed = True
        self.callback(*self.args)


class TimerManager:
    """Owns every timer of a scene and advances them once per frame."""

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random
        self.events: List[TimerEvent] = []

    def add_event(self, delay: Delay, callback: Callable, args=(), loop=False) -> TimerEvent:
        event = TimerEvent(delay, callback, args, loop, rng=self.rng)
        self.events.append(event)
        return event

    def delayed_call(self, delay: Delay, callback: Callable, args=()) -> TimerEvent:
        return self.add_event(delay, callback, args, loop=False)

    def update(self, dt):
        # Timers added by callbacks start ticking next frame
        for event in list(self.events):
            event.tick(dt)
        self.events = [e for e in self.events if not e.removed]

    def remove_all(self):
        for event in self.events:
            event.remove()
        self.events = []

    def __len__(self):
        return len(self.events)
