"""High level orchestration of one decision-loop tick."""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
from random import Random
from typing import Dict, List, Optional

from ..colony import Colony
from ..intel import refresh_intel
from ..settings import OverseerSettings
from ..state import WorldState
from ..tasks.directives import DIRECTIVE_KINDS
from .context import TickContext
from .faults import TaskExecutionError
from .overseer import Overseer

logger = logging.getLogger(__name__)


@dataclass
class TickReport:
    tick: int
    faults: List[TaskExecutionError] = field(default_factory=list)
    directives: int = 0
    overlords: int = 0


@dataclass
class SimulationEngine:
    """Container wiring the overseer, colonies and spawn groups together.

    ``step`` runs the phases of a single tick in order: refresh, directive
    sync, overseer init, colony and spawn group init, overseer run, colony
    run, fault report and clock advance.
    """

    world: WorldState
    settings: OverseerSettings = field(default_factory=OverseerSettings)
    seed: int = 0
    raise_exceptions: bool = False

    def __post_init__(self) -> None:
        self.ctx = TickContext(world=self.world, settings=self.settings, rng=Random(self.seed))
        self.overseer = Overseer(self.ctx)
        self.history: List[TickReport] = []
        self._sync_colonies()

    @property
    def colonies(self) -> Dict[str, Colony]:
        return self.ctx.colonies

    def _sync_colonies(self) -> None:
        for room in self.world.owned_rooms():
            if room.name not in self.ctx.colonies:
                colony = Colony(self.ctx, len(self.ctx.colonies), room.name)
                logger.info("Registered colony %s (id %d)", colony.name, colony.id)

    def _sync_directives(self) -> None:
        for name, marker in list(self.world.markers.items()):
            if name in self.ctx.directives:
                continue
            directive_cls = DIRECTIVE_KINDS.get(marker.kind)
            if directive_cls is None:
                logger.debug("Ignoring marker %s of unknown kind %s", name, marker.kind)
                continue
            directive_cls.from_marker(self.ctx, marker)
        for directive in list(self.ctx.directives.values()):
            if directive.name not in self.world.markers:
                directive.remove()

    def _report_faults(self) -> List[TaskExecutionError]:
        faults = [fault for fault in self.ctx.exceptions if isinstance(fault, TaskExecutionError)]
        for fault in faults:
            logger.error("%s\n%s", fault, fault.traceback_text)
        return faults

    def step(self) -> TickReport:
        ctx = self.ctx
        ctx.refresh()
        self.overseer.refresh()
        refresh_intel(self.world)
        self._sync_colonies()
        for colony in list(ctx.colonies.values()):
            colony.refresh()
        for spawn_group in list(ctx.spawn_groups.values()):
            spawn_group.refresh()
        self._sync_directives()

        self.overseer.init()
        for colony in list(ctx.colonies.values()):
            colony.init()
        for spawn_group in list(ctx.spawn_groups.values()):
            spawn_group.init()

        self.overseer.run()
        for colony in list(ctx.colonies.values()):
            colony.run()
        for spawn_group in list(ctx.spawn_groups.values()):
            spawn_group.run()

        report = TickReport(
            tick=self.world.tick,
            faults=self._report_faults(),
            directives=len(self.overseer.directives),
            overlords=len(self.overseer.overlords),
        )
        self.history.append(report)
        self.world.advance_tick()
        if self.raise_exceptions and report.faults:
            raise report.faults[0]
        return report

    def run(self, ticks: int) -> List[TickReport]:
        if ticks <= 0:
            raise ValueError("ticks must be positive")
        return [self.step() for _ in range(ticks)]

    def creep_report(self, colony_name: Optional[str] = None) -> Dict[str, List[List[str]]]:
        names = [colony_name] if colony_name is not None else list(self.ctx.colonies)
        return {name: self.overseer.get_creep_report(self.ctx.colonies[name]) for name in names}


__all__ = ["SimulationEngine", "TickReport"]
