"""Colony logistics network.

Only the request side is modelled: anything that should be emptied
(dropped resources, tombstones) is registered as an output request during
the overseer's init phase and the transport layer reads the list.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, List, Optional

from ..world.objects import Drop, Tombstone
from ..world.positions import RoomPosition

if TYPE_CHECKING:
    from ..colony import Colony

ALL_RESOURCES = "all"


@dataclass(slots=True)
class LogisticsRequest:
    id: str
    target: Any
    amount: int
    resource_type: str

    @property
    def pos(self) -> RoomPosition:
        return self.target.pos


def _amount(target: Any, resource_type: str) -> int:
    if isinstance(target, Drop):
        return target.amount
    if isinstance(target, Tombstone):
        if resource_type == ALL_RESOURCES:
            return target.total
        return target.store.get(resource_type, 0)
    raise TypeError(f"Cannot request output from {type(target).__name__}")


class LogisticsNetwork:
    def __init__(self, colony: "Colony") -> None:
        self.colony = colony
        self.requests: List[LogisticsRequest] = []

    def refresh(self) -> None:
        self.requests = []

    def request_output(self, target: Any, resource_type: Optional[str] = None) -> LogisticsRequest:
        if resource_type is None:
            resource_type = target.resource_type if isinstance(target, Drop) else ALL_RESOURCES
        request = LogisticsRequest(
            id=f"{self.colony.name}:{len(self.requests)}",
            target=target,
            amount=_amount(target, resource_type),
            resource_type=resource_type,
        )
        self.requests.append(request)
        return request

    def targets(self) -> List[Any]:
        return [request.target for request in self.requests]


__all__ = ["ALL_RESOURCES", "LogisticsNetwork", "LogisticsRequest"]
