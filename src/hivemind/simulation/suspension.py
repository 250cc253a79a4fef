"""Persisted suspension ledger: task ref -> tick at which the task resumes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import MutableMapping


@dataclass(slots=True)
class SuspensionLedger:
    """View over the ``suspend_until`` mapping kept in memory.

    Entries are never swept eagerly; an expired entry is removed the first
    time it is read at or after its resume tick.
    """

    suspend_until: MutableMapping[str, int]

    def is_suspended(self, ref: str, tick: int) -> bool:
        resume_tick = self.suspend_until.get(ref)
        if resume_tick is None:
            return False
        if tick < resume_tick:
            return True
        del self.suspend_until[ref]
        return False

    def suspend_for(self, ref: str, tick: int, duration: int) -> None:
        if duration < 0:
            raise ValueError("duration must be non-negative")
        self.suspend_until[ref] = tick + duration

    def suspend_until_tick(self, ref: str, resume_tick: int) -> None:
        self.suspend_until[ref] = resume_tick


__all__ = ["SuspensionLedger"]
