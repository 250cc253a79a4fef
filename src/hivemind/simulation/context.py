"""Process state shared by everything that runs during a tick."""

from __future__ import annotations

from dataclasses import dataclass, field
from random import Random
from typing import TYPE_CHECKING, Any, Dict, List, MutableMapping, Optional

from ..settings import OverseerSettings
from ..state import WorldState

if TYPE_CHECKING:
    from ..colony import Colony
    from ..logistics.spawn_group import SpawnGroup
    from ..tasks.directive import Directive
    from .overseer import Overseer


@dataclass
class TickContext:
    """Explicit replacement for global process state.

    ``refresh`` is called once at the start of every tick; ``exceptions``
    is filled during the tick and read by the engine when the tick ends.
    """

    world: WorldState
    settings: OverseerSettings = field(default_factory=OverseerSettings)
    rng: Random = field(default_factory=lambda: Random(0))
    colonies: Dict[str, "Colony"] = field(default_factory=dict)
    directives: Dict[str, "Directive"] = field(default_factory=dict)
    spawn_groups: Dict[str, "SpawnGroup"] = field(default_factory=dict)
    exceptions: List[BaseException] = field(default_factory=list)
    overseer: Optional["Overseer"] = None

    @property
    def tick(self) -> int:
        return self.world.tick

    @property
    def memory(self) -> MutableMapping[str, Any]:
        return self.world.memory

    def refresh(self) -> None:
        self.exceptions.clear()


__all__ = ["TickContext"]
