"""
Order status state machine.

    pending  -> accepted | canceled
    accepted -> delivered | canceled

``delivered`` and ``canceled`` are terminal. Every other pair, including a
status to itself, is an invalid transition whatever the caller's role.
"""

from enum import Enum
from typing import FrozenSet, Optional


class OrderStatus(str, Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    DELIVERED = "delivered"
    CANCELED = "canceled"

    @classmethod
    def choices(cls):
        return [(status.value, status.name.title()) for status in cls]

    @classmethod
    def values(cls):
        return [status.value for status in cls]

    @classmethod
    def parse(cls, value) -> Optional["OrderStatus"]:
        """Return the OrderStatus for ``value`` or None when it is not a known status."""
        try:
            return cls(value)
        except ValueError:
            return None


TRANSITIONS = {
    OrderStatus.PENDING: frozenset({OrderStatus.ACCEPTED, OrderStatus.CANCELED}),
    OrderStatus.ACCEPTED: frozenset({OrderStatus.DELIVERED, OrderStatus.CANCELED}),
    OrderStatus.DELIVERED: frozenset(),
    OrderStatus.CANCELED: frozenset(),
}


def allowed_targets(current) -> FrozenSet[OrderStatus]:
    return TRANSITIONS[OrderStatus(current)]


def is_terminal(status) -> bool:
    return not TRANSITIONS[OrderStatus(status)]


def is_valid_transition(current, target) -> bool:
    return OrderStatus(target) in allowed_targets(current)


def transition_error(current, target) -> str:
    return f"Invalid status transition from {OrderStatus(current).value} to {OrderStatus(target).value}"
