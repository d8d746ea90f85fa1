"""
Standing overlap rules.

Rules are registered once, keyed by a pair of entity kinds, and evaluated
every frame against whichever groups currently hold those kinds.
"""

from typing import Callable, Dict, Iterable, List, Optional, Tuple

from .entities import Entity

KindPair = Tuple[str, str]


class CollisionResolver:
    def __init__(self):
        self.rules: Dict[KindPair, Callable[[Entity, Entity], None]] = {}

    def add_overlap(self, kind_a: str, kind_b: str, callback: Callable[[Entity, Entity], None]):
        self.rules[(kind_a, kind_b)] = callback

    def remove_overlap(self, kind_a: str, kind_b: str):
        self.rules.pop((kind_a, kind_b), None)

    @staticmethod
    def overlapping(group_a: Iterable[Entity], group_b: Iterable[Entity]) -> List[Tuple[Entity, Entity]]:
        b_members = list(group_b)
        return [(a, b) for a in group_a for b in b_members if a.overlaps(b)]

    def resolve(self, groups: Dict[str, Iterable[Entity]],
                stop: Optional[Callable[[], bool]] = None) -> int:
        """
        Run every rule once. All pairs of a rule are collected before any
        callback runs, and each pair is resolved on its own; a pair is only
        skipped when one side was destroyed by an earlier callback.
        ``stop`` is polled between pairs and ends resolution when it is true.
        Returns the number of callbacks fired.
        """
        fired = 0
        for (kind_a, kind_b), callback in list(self.rules.items()):
            if kind_a not in groups or kind_b not in groups:
                continue
            for a, b in self.overlapping(groups[kind_a], groups[kind_b]):
                if stop is not None and stop():
                    return fired
                if a.destroyed or b.destroyed:
                    continue
                callback(a, b)
                fired += 1
        return fired
