"""The overseer schedules every directive and overlord each tick.

Execution is two-phase.  :meth:`Overseer.init` initializes every directive
and every overlord that is not suspended, in priority order, and then
registers cleanup requests with each colony's logistics network.
:meth:`Overseer.run` runs them in the same order and finally evaluates the
situational placement rules that create new directives for the next tick.

Overlord ``init``/``run`` calls are failure-isolated: with
``settings.use_try_catch`` on, an exception is wrapped in a
:class:`~hivemind.simulation.faults.TaskExecutionError` and collected on
the tick context instead of aborting the tick.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable, Dict, List, Optional

from ..memory import wrap
from ..world.objects import RESOURCE_ENERGY
from . import placement
from .faults import capture_fault
from .suspension import SuspensionLedger

if TYPE_CHECKING:
    from ..colony import Colony
    from ..tasks.directive import Directive
    from ..tasks.overlord import Overlord
    from .context import TickContext

logger = logging.getLogger(__name__)

_MEMORY_DEFAULTS = {"suspend_until": {}}


class Overseer:
    def __init__(self, ctx: "TickContext") -> None:
        self.ctx = ctx
        ctx.overseer = self
        self.directives: List["Directive"] = []
        self.overlords: List["Overlord"] = []
        self.overlords_by_colony: Dict[str, List["Overlord"]] = {}
        self.sorted = False
        self._bind_memory()

    def _bind_memory(self) -> None:
        self.memory = wrap(self.ctx.memory, "overseer", _MEMORY_DEFAULTS)
        self.ledger = SuspensionLedger(self.memory["suspend_until"])

    def refresh(self) -> None:
        self._bind_memory()

    @property
    def colonies(self) -> List["Colony"]:
        return list(self.ctx.colonies.values())

    def _try(self, callback: Callable[[], object], identifier: str, phase: str) -> bool:
        return capture_fault(
            callback,
            identifier=identifier,
            phase=phase,
            sink=self.ctx.exceptions,
            enabled=self.ctx.settings.use_try_catch,
        )

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------
    def register_directive(self, directive: "Directive") -> None:
        self.directives.append(directive)

    def remove_directive(self, directive: "Directive") -> None:
        self.directives = [d for d in self.directives if d.name != directive.name]
        for overlord in directive.overlords.values():
            self._remove_overlord(overlord)
        if directive.spawn_group is not None:
            self.ctx.spawn_groups.pop(directive.spawn_group.ref, None)

    def register_overlord(self, overlord: "Overlord") -> None:
        self.overlords.append(overlord)
        if overlord.colony is not None:
            self.overlords_by_colony.setdefault(overlord.colony.name, []).append(overlord)
        self.sorted = False

    def _remove_overlord(self, overlord: "Overlord") -> None:
        self.overlords = [o for o in self.overlords if o.ref != overlord.ref]
        if overlord.colony is not None and overlord.colony.name in self.overlords_by_colony:
            self.overlords_by_colony[overlord.colony.name] = [
                o for o in self.overlords_by_colony[overlord.colony.name] if o.ref != overlord.ref
            ]
        self.sorted = False

    # ------------------------------------------------------------------
    # Suspension
    # ------------------------------------------------------------------
    def is_suspended(self, task: "Overlord") -> bool:
        return self.ledger.is_suspended(task.ref, self.ctx.tick)

    def suspend_for(self, task: "Overlord", ticks: int) -> None:
        self.ledger.suspend_for(task.ref, self.ctx.tick, ticks)

    def suspend_until(self, task: "Overlord", tick: int) -> None:
        self.ledger.suspend_until_tick(task.ref, tick)

    # ------------------------------------------------------------------
    # Logistics
    # ------------------------------------------------------------------
    def _register_logistics_requests(self, colony: "Colony") -> None:
        threshold = self.ctx.settings.dropped_energy_threshold
        network = colony.logistics_network
        for room in colony.rooms:
            for resource_type, drops in room.drops_by_type.items():
                for drop in drops:
                    if drop.amount > threshold or resource_type != RESOURCE_ENERGY:
                        network.request_output(drop)
        anchor = colony.bunker_anchor
        for tombstone in colony.tombstones:
            total = tombstone.total
            if total > threshold or total > tombstone.store.get(RESOURCE_ENERGY, 0):
                if anchor is not None and tombstone.pos.is_equal_to(anchor):
                    continue
                network.request_output(tombstone, resource_type="all")

    # ------------------------------------------------------------------
    # Tick phases
    # ------------------------------------------------------------------
    def _sort(self) -> None:
        # list.sort is stable, so registration order breaks priority ties.
        self.overlords.sort(key=lambda o: o.priority)
        for overlords in self.overlords_by_colony.values():
            overlords.sort(key=lambda o: o.priority)
        self.sorted = True

    def init(self) -> None:
        for directive in list(self.directives):
            directive.init()
        if not self.sorted:
            self._sort()
        for overlord in list(self.overlords):
            if self.is_suspended(overlord):
                continue
            overlord.pre_init()
            self._try(overlord.init, overlord.ref, "init")
        for colony in self.colonies:
            self._register_logistics_requests(colony)

    def run(self) -> None:
        for directive in list(self.directives):
            directive.run()
        for overlord in list(self.overlords):
            if self.is_suspended(overlord):
                continue
            self._try(overlord.run, overlord.ref, "run")
        for colony in self.colonies:
            placement.handle_safe_mode(self.ctx, colony)
            placement.place_directives(self.ctx, colony)

    # ------------------------------------------------------------------
    # Reporting
    # ------------------------------------------------------------------
    def get_creep_report(self, colony: "Colony") -> List[List[str]]:
        occupancy: Dict[str, List[int]] = {}
        for overlord in self.overlords_by_colony.get(colony.name, []):
            for role, report in overlord.creep_usage_report.items():
                if report is None:
                    if self.ctx.tick % self.ctx.settings.creep_report_frequency == 0:
                        logger.info("Role %s is not reported by %s", role, overlord.ref)
                    continue
                totals = occupancy.setdefault(role, [0, 0])
                totals[0] += report[0]
                totals[1] += report[1]
        return [[role, f"{current}/{needed}"] for role, (current, needed) in occupancy.items()]

    def visuals(self) -> List[str]:
        labels: List[str] = []
        for directive in self.directives:
            labels.extend(directive.visuals())
        for overlord in self.overlords:
            labels.extend(overlord.visuals())
        return labels

    def find_overlord(self, ref: str) -> Optional["Overlord"]:
        for overlord in self.overlords:
            if overlord.ref == ref:
                return overlord
        return None


__all__ = ["Overseer"]
