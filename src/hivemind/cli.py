"""Simple CLI harness for the demo colony scenario."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List, Optional

from .memory import dumps, signature
from .scenarios import DemoScenarioConfig, generate_demo_world
from .settings import OverseerSettings
from .simulation.engine import SimulationEngine


def _format_report(engine: SimulationEngine) -> List[str]:
    lines = [f"tick {engine.world.tick}: {len(engine.overseer.directives)} directives, "
             f"{len(engine.overseer.overlords)} overlords, {len(engine.world.creeps)} creeps"]
    reports = engine.creep_report()
    for name, colony in engine.colonies.items():
        summary = colony.summary()
        lines.append(
            f"  {name} level={summary['level']} stage={summary['stage']} "
            f"energy={summary['energy']}/{summary['capacity']} outposts={','.join(summary['outposts']) or '-'}"
        )
        for role, occupancy in reports[name]:
            lines.append(f"    {role:<12} {occupancy}")
    faults = sum(len(report.faults) for report in engine.history)
    if faults:
        lines.append(f"  faults: {faults}")
    return lines


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Run the hivemind demo scenario")
    parser.add_argument("--ticks", type=int, default=300, help="Number of ticks to simulate")
    parser.add_argument("--seed", type=int, default=7, help="Seed for the scenario and cache jitter")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level for the run",
    )
    parser.add_argument(
        "--public-server",
        action="store_true",
        help="Use public deployment timings (slower outpost checks and recaching)",
    )
    parser.add_argument("--memory-out", type=Path, help="Write the final memory blob as JSON")
    args = parser.parse_args(argv)

    if args.ticks <= 0:
        parser.error("--ticks must be positive")

    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(name)s: %(message)s")

    settings = OverseerSettings.from_env()
    if args.public_server:
        settings.public_server = True
    world = generate_demo_world(DemoScenarioConfig(seed=args.seed, username=settings.username))
    engine = SimulationEngine(world, settings=settings, seed=args.seed)
    engine.run(args.ticks)

    for line in _format_report(engine):
        print(line)
    print(f"memory signature {signature(world.memory)[:16]}")
    if args.memory_out is not None:
        args.memory_out.write_text(dumps(world.memory), encoding="utf-8")


if __name__ == "__main__":
    main()
