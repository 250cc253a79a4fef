"""Runtime settings for the decision loop."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Mapping, Optional, Tuple


class Autonomy(IntEnum):
    MANUAL = 0
    SEMI_AUTOMATIC = 1
    AUTOMATIC = 2


def _env_flag(environ: Mapping[str, str], key: str, default: bool) -> bool:
    raw = environ.get(key)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


@dataclass(slots=True)
class OverseerSettings:
    use_try_catch: bool = True
    public_server: bool = False
    username: str = "Overseer"
    reservation_override_usernames: Tuple[str, ...] = ()
    autonomy: Autonomy = Autonomy.AUTOMATIC
    pioneer_check_frequency: int = 25
    invasion_threshold: int = 3
    invasion_persistence_ticks: int = 20
    safe_mode_hostile_range: int = 2
    outpost_search_depth: int = 3
    dropped_energy_threshold: int = 200
    creep_report_frequency: int = 100

    @property
    def outpost_check_frequency(self) -> int:
        return 250 if self.public_server else 100

    @property
    def spawn_group_recache_time(self) -> int:
        return 2000 if self.public_server else 1000

    @property
    def disregard_reservations(self) -> bool:
        return not self.public_server or self.username in self.reservation_override_usernames

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "OverseerSettings":
        """Build settings from ``HIVEMIND_*`` environment variables."""

        env = os.environ if environ is None else environ
        settings = cls()
        settings.use_try_catch = _env_flag(env, "HIVEMIND_USE_TRY_CATCH", settings.use_try_catch)
        settings.public_server = _env_flag(env, "HIVEMIND_PUBLIC_SERVER", settings.public_server)
        settings.username = env.get("HIVEMIND_USERNAME", settings.username)
        overrides = env.get("HIVEMIND_RESERVATION_OVERRIDES", "")
        if overrides.strip():
            settings.reservation_override_usernames = tuple(
                name.strip() for name in overrides.split(",") if name.strip()
            )
        autonomy = env.get("HIVEMIND_AUTONOMY")
        if autonomy is not None:
            try:
                settings.autonomy = Autonomy[autonomy.strip().upper()]
            except KeyError as exc:
                raise ValueError(f"Unknown autonomy level: {autonomy!r}") from exc
        return settings


@dataclass(slots=True)
class ColonySettings:
    remote_sources_by_level: Mapping[int, int] = field(
        default_factory=lambda: {0: 0, 1: 1, 2: 2, 3: 3, 4: 4, 5: 5, 6: 6, 7: 7, 8: 9}
    )
    max_source_distance: int = 100
    structure_recache_ticks: int = 20


__all__ = ["Autonomy", "ColonySettings", "OverseerSettings"]
