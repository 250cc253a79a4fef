"""hivemind public façade: the overseer scheduler and decentralized spawning."""

from .colony import Colony, ColonyStage
from .hive.hatchery import Hatchery, HatcherySettings
from .logistics.spawn_group import SpawnGroup, SpawnGroupSettings
from .settings import Autonomy, ColonySettings, OverseerSettings
from .simulation import (
    Overseer,
    SimulationEngine,
    SuspensionLedger,
    TaskExecutionError,
    TickContext,
)
from .state import WorldState
from .tasks import Directive, Overlord, OverlordPriority, RoleOverlord

__all__ = [
    "Autonomy",
    "Colony",
    "ColonySettings",
    "ColonyStage",
    "Directive",
    "Hatchery",
    "HatcherySettings",
    "Overlord",
    "OverlordPriority",
    "Overseer",
    "OverseerSettings",
    "RoleOverlord",
    "SimulationEngine",
    "SpawnGroup",
    "SpawnGroupSettings",
    "SuspensionLedger",
    "TaskExecutionError",
    "TickContext",
    "WorldState",
]
