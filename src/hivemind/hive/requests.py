from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict

from ..creeps.setup import CreepSetup


@dataclass(slots=True)
class SpawnRequest:
    """A creep order, valid for the tick it was made in."""

    setup: CreepSetup
    overlord: str
    priority: int
    options: Dict[str, Any] = field(default_factory=dict)

    @property
    def role(self) -> str:
        return self.setup.role


__all__ = ["SpawnRequest"]
