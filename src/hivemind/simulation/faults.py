"""Per-task failure isolation."""

from __future__ import annotations

import traceback
from typing import Callable, List


class TaskExecutionError(RuntimeError):
    """An exception raised by a task, annotated with the task that raised it.

    The original exception is kept as ``__cause__`` and its formatted
    traceback is captured at the point of isolation.
    """

    def __init__(self, identifier: str, phase: str, cause: BaseException) -> None:
        super().__init__(
            f"Caught unhandled exception in {phase} (identifier: {identifier}): "
            f"{type(cause).__name__}: {cause}"
        )
        self.identifier = identifier
        self.phase = phase
        self.__cause__ = cause
        self.traceback_text = "".join(traceback.format_exception(type(cause), cause, cause.__traceback__))


def capture_fault(
    callback: Callable[[], object],
    *,
    identifier: str,
    phase: str,
    sink: List[BaseException],
    enabled: bool = True,
) -> bool:
    """Run ``callback``; on failure append a :class:`TaskExecutionError` to ``sink``.

    Returns ``True`` when the callback completed.  With ``enabled`` off the
    exception propagates unchanged.
    """

    if not enabled:
        callback()
        return True
    try:
        callback()
    except Exception as exc:
        sink.append(TaskExecutionError(identifier, phase, exc))
        return False
    return True


__all__ = ["TaskExecutionError", "capture_fault"]
