"""Tick orchestration: context, scheduler, spawn placement and fault isolation."""

from .context import TickContext
from .engine import SimulationEngine, TickReport
from .faults import TaskExecutionError, capture_fault
from .overseer import Overseer
from .suspension import SuspensionLedger

__all__ = [
    "Overseer",
    "SimulationEngine",
    "SuspensionLedger",
    "TaskExecutionError",
    "TickContext",
    "TickReport",
    "capture_fault",
]
