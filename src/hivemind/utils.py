from __future__ import annotations

from random import Random
from typing import Any


def get_cache_expiration(tick: int, timeout: int, offset: int, rng: Random) -> int:
    """Expiry tick with a jitter of up to ``offset`` ticks either way."""

    return tick + timeout + rng.randint(-offset, offset)


def has_just_spawned(ctx: Any) -> bool:
    """True right after (re)spawning into the world: one colony, one spawn, no creeps."""

    world = ctx.world
    return len(ctx.colonies) == 1 and not world.creeps and len(world.my_spawns()) == 1


__all__ = ["get_cache_expiration", "has_just_spawned"]
