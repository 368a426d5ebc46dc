"""
Role rules for order operations.

Each operation has its own rule table keyed by role and by the order's status
(or status edge). A rule says whether the actor must own the order and whether
the operation is allowed once ownership holds. Ownership is always checked
before the allow flag, so a non-owner is told ``forbidden`` rather than which
transitions its role may perform.

Ownership is supplied by the caller as a zero-argument callable so the seller
product lookup only happens when a rule needs it.
"""

from dataclasses import dataclass
from typing import Callable, Dict, Optional, Tuple

from authentication.domain.identity import Actor, Role
from marketplace.ordering.domain.state_machine import OrderStatus, transition_error
from marketplace.services.base import ErrorCodes

FORBIDDEN_MESSAGE = "Forbidden"


@dataclass(frozen=True)
class PermissionDecision:
    allowed: bool
    error: Optional[str] = None
    detail: Optional[str] = None

    @classmethod
    def allow(cls) -> "PermissionDecision":
        return cls(allowed=True)

    @classmethod
    def deny(cls, error: str, detail: str) -> "PermissionDecision":
        return cls(allowed=False, error=error, detail=detail)


@dataclass(frozen=True)
class Rule:
    allowed: bool
    requires_ownership: bool = True
    error: Optional[str] = None
    detail: Optional[str] = None

    def evaluate(self, owns: Callable[[], bool]) -> PermissionDecision:
        if self.requires_ownership and not owns():
            return PermissionDecision.deny(ErrorCodes.FORBIDDEN, FORBIDDEN_MESSAGE)
        if not self.allowed:
            return PermissionDecision.deny(self.error, self.detail)
        return PermissionDecision.allow()


PENDING = OrderStatus.PENDING
ACCEPTED = OrderStatus.ACCEPTED
DELIVERED = OrderStatus.DELIVERED
CANCELED = OrderStatus.CANCELED

ANYONE = Rule(allowed=True, requires_ownership=False)
OWNER = Rule(allowed=True)

BUYER_CANCEL_ONLY = Rule(
    allowed=False,
    requires_ownership=False,
    error=ErrorCodes.INVALID_FOR_ROLE,
    detail="Buyers can only cancel pending orders",
)
BUYER_PENDING_ONLY = Rule(
    allowed=False, error=ErrorCodes.INVALID_FOR_ROLE, detail="Only pending orders can be canceled by buyer"
)
SELLER_FORBIDDEN_EDGE = Rule(
    allowed=False, error=ErrorCodes.INVALID_FOR_ROLE, detail="Seller not allowed for this transition"
)
SELLER_CANCEL_WINDOW = Rule(
    allowed=False, error=ErrorCodes.INVALID_FOR_ROLE, detail="Sellers can only cancel pending or accepted orders"
)
ALREADY_FINAL = Rule(
    allowed=False,
    requires_ownership=False,
    error=ErrorCodes.ALREADY_FINAL,
    detail="Order can not be canceled anymore",
)


VIEW_RULES: Dict[Role, Rule] = {
    Role.ADMIN: ANYONE,
    Role.BUYER: OWNER,
    Role.SELLER: OWNER,
}

# role -> (from, to) -> rule; only edges of the state machine appear
STATUS_CHANGE_RULES: Dict[Role, Dict[Tuple[OrderStatus, OrderStatus], Rule]] = {
    Role.ADMIN: {
        (PENDING, ACCEPTED): ANYONE,
        (PENDING, CANCELED): ANYONE,
        (ACCEPTED, DELIVERED): ANYONE,
        (ACCEPTED, CANCELED): ANYONE,
    },
    Role.BUYER: {
        (PENDING, ACCEPTED): BUYER_CANCEL_ONLY,
        (PENDING, CANCELED): OWNER,
        (ACCEPTED, DELIVERED): BUYER_CANCEL_ONLY,
        (ACCEPTED, CANCELED): BUYER_PENDING_ONLY,
    },
    Role.SELLER: {
        (PENDING, ACCEPTED): OWNER,
        (PENDING, CANCELED): SELLER_FORBIDDEN_EDGE,
        (ACCEPTED, DELIVERED): OWNER,
        (ACCEPTED, CANCELED): SELLER_FORBIDDEN_EDGE,
    },
}

# role -> current status -> rule
CANCEL_RULES: Dict[Role, Dict[OrderStatus, Rule]] = {
    Role.ADMIN: {
        PENDING: ANYONE,
        ACCEPTED: ANYONE,
        DELIVERED: ALREADY_FINAL,
        CANCELED: ALREADY_FINAL,
    },
    Role.BUYER: {
        PENDING: OWNER,
        ACCEPTED: BUYER_PENDING_ONLY,
        DELIVERED: BUYER_PENDING_ONLY,
        CANCELED: BUYER_PENDING_ONLY,
    },
    Role.SELLER: {
        PENDING: OWNER,
        ACCEPTED: OWNER,
        DELIVERED: SELLER_CANCEL_WINDOW,
        CANCELED: SELLER_CANCEL_WINDOW,
    },
}


def authorize_view(actor: Actor, owns: Callable[[], bool]) -> PermissionDecision:
    return VIEW_RULES[actor.role].evaluate(owns)


def authorize_status_change(actor: Actor, current, target, owns: Callable[[], bool]) -> PermissionDecision:
    """Role rules for a status change; the edge is expected to be valid already."""
    current, target = OrderStatus(current), OrderStatus(target)
    rule = STATUS_CHANGE_RULES[actor.role].get((current, target))
    if rule is None:
        return PermissionDecision.deny(ErrorCodes.INVALID_TRANSITION, transition_error(current, target))
    return rule.evaluate(owns)


def authorize_cancel(actor: Actor, current, owns: Callable[[], bool]) -> PermissionDecision:
    return CANCEL_RULES[actor.role][OrderStatus(current)].evaluate(owns)


def owns_order(actor: Actor, order, seller_product_ids=frozenset()) -> bool:
    """
    Ownership as seen by the actor's role.

    A buyer owns the orders it placed; a seller owns every order containing at
    least one of its products. Admins never need ownership.
    """
    if actor.is_buyer:
        return order.buyer_id == actor.id
    if actor.is_seller:
        return not order.product_ids().isdisjoint(seller_product_ids)
    return False
