from __future__ import annotations

from ...memory import room_memory
from ...tasks.directive import Directive

TERMINAL_STATE_KEY = "terminal_state"


class DirectiveTerminalEvacuateState(Directive):
    """Puts the colony terminal into evacuation while its room is overrun.

    The terminal state is written to room memory for the resource layer to
    act on and cleared when the directive goes away.
    """

    kind = "evacuateState"

    def init(self) -> None:
        mem = room_memory(self.ctx.memory, self.colony.name)
        mem[TERMINAL_STATE_KEY] = {"type": "evacuate", "since": self.created}

    def run(self) -> None:
        room = self.colony.room
        if self.colony.terminal is None or room is None or not room.dangerous_hostiles:
            self.remove()

    def remove(self) -> None:
        room_memory(self.ctx.memory, self.colony.name).pop(TERMINAL_STATE_KEY, None)
        super().remove()


__all__ = ["DirectiveTerminalEvacuateState", "TERMINAL_STATE_KEY"]
