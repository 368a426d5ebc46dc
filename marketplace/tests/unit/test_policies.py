import uuid
from types import SimpleNamespace

import pytest

from authentication.domain.identity import Actor, Role
from marketplace.ordering.domain import policies
from marketplace.services.base import ErrorCodes


def actor(role):
    return Actor(id=uuid.uuid4(), role=role)


def owner():
    return True


def stranger():
    return False


def never_called():
    raise AssertionError("ownership should not be consulted")


@pytest.mark.unit
class TestViewRules:
    def test_admin_views_without_ownership(self):
        assert policies.authorize_view(actor(Role.ADMIN), owns=never_called).allowed

    @pytest.mark.parametrize("role", [Role.BUYER, Role.SELLER])
    def test_owner_may_view(self, role):
        assert policies.authorize_view(actor(role), owns=owner).allowed

    @pytest.mark.parametrize("role", [Role.BUYER, Role.SELLER])
    def test_non_owner_is_forbidden(self, role):
        decision = policies.authorize_view(actor(role), owns=stranger)

        assert not decision.allowed
        assert decision.error == ErrorCodes.FORBIDDEN


@pytest.mark.unit
class TestStatusChangeRules:
    @pytest.mark.parametrize(
        "current,target",
        [("pending", "accepted"), ("pending", "canceled"), ("accepted", "delivered"), ("accepted", "canceled")],
    )
    def test_admin_may_take_every_edge(self, current, target):
        assert policies.authorize_status_change(actor(Role.ADMIN), current, target, owns=never_called).allowed

    def test_buyer_may_cancel_own_pending_order(self):
        assert policies.authorize_status_change(actor(Role.BUYER), "pending", "canceled", owns=owner).allowed

    def test_buyer_may_not_accept(self):
        decision = policies.authorize_status_change(actor(Role.BUYER), "pending", "accepted", owns=owner)

        assert decision.error == ErrorCodes.INVALID_FOR_ROLE
        assert decision.detail == "Buyers can only cancel pending orders"

    def test_buyer_may_not_cancel_accepted_order(self):
        decision = policies.authorize_status_change(actor(Role.BUYER), "accepted", "canceled", owns=owner)

        assert decision.error == ErrorCodes.INVALID_FOR_ROLE
        assert decision.detail == "Only pending orders can be canceled by buyer"

    def test_buyer_cancel_of_foreign_order_is_forbidden(self):
        decision = policies.authorize_status_change(actor(Role.BUYER), "pending", "canceled", owns=stranger)

        assert decision.error == ErrorCodes.FORBIDDEN

    @pytest.mark.parametrize("current,target", [("pending", "accepted"), ("accepted", "delivered")])
    def test_seller_moves_owned_order_forward(self, current, target):
        assert policies.authorize_status_change(actor(Role.SELLER), current, target, owns=owner).allowed

    @pytest.mark.parametrize("current", ["pending", "accepted"])
    def test_seller_may_not_cancel_through_status_change(self, current):
        decision = policies.authorize_status_change(actor(Role.SELLER), current, "canceled", owns=owner)

        assert decision.error == ErrorCodes.INVALID_FOR_ROLE
        assert decision.detail == "Seller not allowed for this transition"

    def test_ownership_is_checked_before_role_rule(self):
        decision = policies.authorize_status_change(actor(Role.SELLER), "pending", "canceled", owns=stranger)

        assert decision.error == ErrorCodes.FORBIDDEN

    def test_edge_outside_state_machine(self):
        decision = policies.authorize_status_change(actor(Role.ADMIN), "delivered", "pending", owns=owner)

        assert decision.error == ErrorCodes.INVALID_TRANSITION


@pytest.mark.unit
class TestCancelRules:
    @pytest.mark.parametrize("current", ["pending", "accepted"])
    def test_admin_cancels_open_orders(self, current):
        assert policies.authorize_cancel(actor(Role.ADMIN), current, owns=never_called).allowed

    @pytest.mark.parametrize("current", ["delivered", "canceled"])
    def test_admin_cancel_of_final_order(self, current):
        decision = policies.authorize_cancel(actor(Role.ADMIN), current, owns=never_called)

        assert decision.error == ErrorCodes.ALREADY_FINAL

    def test_buyer_cancels_only_pending(self):
        assert policies.authorize_cancel(actor(Role.BUYER), "pending", owns=owner).allowed
        decision = policies.authorize_cancel(actor(Role.BUYER), "accepted", owns=owner)
        assert decision.error == ErrorCodes.INVALID_FOR_ROLE

    @pytest.mark.parametrize("current", ["pending", "accepted"])
    def test_seller_cancels_pending_or_accepted(self, current):
        assert policies.authorize_cancel(actor(Role.SELLER), current, owns=owner).allowed

    def test_seller_cancel_of_delivered_order(self):
        decision = policies.authorize_cancel(actor(Role.SELLER), "delivered", owns=owner)

        assert decision.error == ErrorCodes.INVALID_FOR_ROLE
        assert decision.detail == "Sellers can only cancel pending or accepted orders"

    def test_seller_cancel_of_foreign_order(self):
        assert policies.authorize_cancel(actor(Role.SELLER), "pending", owns=stranger).error == ErrorCodes.FORBIDDEN


@pytest.mark.unit
class TestOwnsOrder:
    def test_buyer_owns_own_order(self):
        buyer = actor(Role.BUYER)
        order = SimpleNamespace(buyer_id=buyer.id)

        assert policies.owns_order(buyer, order)
        assert not policies.owns_order(buyer, SimpleNamespace(buyer_id=uuid.uuid4()))

    def test_seller_owns_order_with_one_of_its_products(self):
        mine, other = uuid.uuid4(), uuid.uuid4()
        order = SimpleNamespace(product_ids=lambda: {mine, other})

        assert policies.owns_order(actor(Role.SELLER), order, {mine})
        assert not policies.owns_order(actor(Role.SELLER), order, {uuid.uuid4()})

    def test_admin_never_owns(self):
        assert not policies.owns_order(actor(Role.ADMIN), SimpleNamespace(buyer_id=uuid.uuid4()))
