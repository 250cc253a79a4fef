"""Creep body templates and cost accounting."""

from __future__ import annotations

from dataclasses import dataclass
import math
from typing import Dict, List, Sequence, Tuple

BODYPART_COST: Dict[str, int] = {
    "move": 50,
    "work": 100,
    "carry": 50,
    "attack": 80,
    "ranged_attack": 150,
    "heal": 250,
    "claim": 600,
    "tough": 10,
}

MAX_CREEP_SIZE: int = 50
CREEP_SPAWN_TIME: int = 3


def body_cost(body: Sequence[str]) -> int:
    return sum(BODYPART_COST[part] for part in body)


@dataclass(frozen=True, slots=True)
class CreepSetup:
    """Repeating body pattern scaled to the energy on hand.

    The pattern is repeated as many times as energy, the 50-part cap and
    ``size_limit`` allow.  ``prefix`` and ``suffix`` are added once.  Parts
    are grouped in pattern order so that, e.g., all ``carry`` parts precede
    all ``move`` parts.
    """

    role: str
    pattern: Tuple[str, ...]
    size_limit: int = MAX_CREEP_SIZE
    prefix: Tuple[str, ...] = ()
    suffix: Tuple[str, ...] = ()

    def repeats(self, available_energy: int) -> int:
        extra_cost = body_cost(self.prefix) + body_cost(self.suffix)
        extra_length = len(self.prefix) + len(self.suffix)
        pattern_cost = body_cost(self.pattern)
        if pattern_cost <= 0 or not self.pattern:
            return 0
        by_energy = math.floor((available_energy - extra_cost) / pattern_cost)
        by_size = math.floor((MAX_CREEP_SIZE - extra_length) / len(self.pattern))
        return max(0, min(by_energy, by_size, self.size_limit))

    def generate_body(self, available_energy: int) -> List[str]:
        count = self.repeats(available_energy)
        if count < 1:
            return []
        middle: List[str] = []
        for part in dict.fromkeys(self.pattern):
            middle.extend([part] * (self.pattern.count(part) * count))
        return [*self.prefix, *middle, *self.suffix]


__all__ = ["BODYPART_COST", "CREEP_SPAWN_TIME", "CreepSetup", "MAX_CREEP_SIZE", "body_cost"]
