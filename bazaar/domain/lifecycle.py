"""Order status state machine.

pending -> confirmed -> preparing -> ready -> completed, plus ``cancelled``
from any non-terminal status. Only the order's seller moves an order; the
buyer's single move is acknowledging receipt (``ready -> completed``).

Adding a status means adding it to ``OrderStatus``, ``_NEXT_STATUS`` and
``STATUS_METADATA`` below, nothing else.
"""
from dataclasses import dataclass

from bazaar.domain.enums import OrderStatus
from bazaar.domain.errors import InvalidTransition, UnauthorizedTransition


@dataclass(frozen=True)
class StatusInfo:
    label: str
    icon: str
    color: str
    terminal: bool = False


STATUS_METADATA: dict[OrderStatus, StatusInfo] = {
    OrderStatus.PENDING: StatusInfo("Pending", "clock", "yellow"),
    OrderStatus.CONFIRMED: StatusInfo("Confirmed", "package", "blue"),
    OrderStatus.PREPARING: StatusInfo("Preparing", "chef-hat", "orange"),
    OrderStatus.READY: StatusInfo("Ready", "check-circle", "green"),
    OrderStatus.COMPLETED: StatusInfo("Completed", "check-circle", "gray", terminal=True),
    OrderStatus.CANCELLED: StatusInfo("Cancelled", "x-circle", "red", terminal=True),
}

_NEXT_STATUS = {
    OrderStatus.PENDING: OrderStatus.CONFIRMED,
    OrderStatus.CONFIRMED: OrderStatus.PREPARING,
    OrderStatus.PREPARING: OrderStatus.READY,
    OrderStatus.READY: OrderStatus.COMPLETED,
}


def is_terminal(status: OrderStatus) -> bool:
    return STATUS_METADATA[status].terminal


def allowed_targets(current: OrderStatus) -> set[OrderStatus]:
    if is_terminal(current):
        return set()
    return {_NEXT_STATUS[current], OrderStatus.CANCELLED}


def check_actor(
    actor_id: int,
    buyer_id: int,
    seller_id: int,
    current: OrderStatus,
    target: OrderStatus,
) -> None:
    if actor_id == seller_id:
        return

    if (
        actor_id == buyer_id
        and current == OrderStatus.READY
        and target == OrderStatus.COMPLETED
    ):
        return

    raise UnauthorizedTransition(
        f"User {actor_id} may not move order from {current.value} to {target.value}"
    )


def check_transition(current: OrderStatus, target: OrderStatus) -> None:
    if target not in allowed_targets(current):
        raise InvalidTransition(
            f"Cannot move order from {current.value} to {target.value}"
        )
