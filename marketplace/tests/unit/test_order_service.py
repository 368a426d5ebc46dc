import uuid
from unittest.mock import MagicMock, patch

import pytest

from authentication.domain.identity import Actor, Role
from marketplace.catalog.domain.services.catalog_service import CatalogService
from marketplace.ordering.domain.services.order_service import OrderService
from marketplace.services.base import ErrorCodes


@pytest.fixture
def mock_catalog():
    return MagicMock(spec=CatalogService)


@pytest.fixture
def order_service(mock_catalog):
    return OrderService(catalog_service=mock_catalog)


@pytest.fixture
def buyer():
    return Actor(id=uuid.uuid4(), role=Role.BUYER)


@pytest.fixture
def seller():
    return Actor(id=uuid.uuid4(), role=Role.SELLER)


def make_order(status="pending", buyer_id=None, product_ids=()):
    order = MagicMock(id=uuid.uuid4(), status=status, buyer_id=buyer_id or uuid.uuid4())
    order.product_ids.return_value = set(product_ids)
    return order


@pytest.mark.unit
class TestCreateOrderValidation:
    def test_missing_product_is_detected_from_batch_lookup(self, order_service, mock_catalog, buyer):
        known = MagicMock(id=uuid.uuid4(), available=True)
        mock_catalog.find_by_ids.return_value = [known]

        result = order_service.create_order(
            buyer,
            [{"productId": str(known.id), "quantity": 1}, {"productId": str(uuid.uuid4()), "quantity": 1}],
        )

        assert result.error == ErrorCodes.ITEMS_INVALID
        assert result.error_detail == "One or more products do not exist"
        mock_catalog.find_by_ids.assert_called_once()

    def test_quantity_is_checked_before_lookup(self, order_service, mock_catalog, buyer):
        result = order_service.create_order(buyer, [{"productId": str(uuid.uuid4()), "quantity": 0}])

        assert result.error == ErrorCodes.ITEMS_INVALID
        mock_catalog.find_by_ids.assert_not_called()

    def test_items_must_be_objects(self, order_service, buyer):
        result = order_service.create_order(buyer, ["lamp"])

        assert result.error == ErrorCodes.ITEMS_INVALID

    def test_snake_case_product_id_is_accepted(self, order_service, mock_catalog, buyer):
        product = MagicMock(id=uuid.uuid4(), available=False)
        mock_catalog.find_by_ids.return_value = [product]

        result = order_service.create_order(buyer, [{"product_id": str(product.id), "quantity": 2}])

        assert result.error_detail == f"Product {product.id} is not available"

    def test_unexpected_error_is_opaque(self, order_service, mock_catalog, buyer):
        mock_catalog.find_by_ids.side_effect = RuntimeError("connection reset")

        result = order_service.create_order(buyer, [{"productId": str(uuid.uuid4()), "quantity": 1}])

        assert result.error == ErrorCodes.INTERNAL_ERROR
        assert result.error_detail == "An unexpected error occurred"


@pytest.mark.unit
class TestStatusRulesWithoutDatabase:
    @patch.object(OrderService, "_find")
    def test_seller_ownership_uses_product_directory(self, mock_find, order_service, mock_catalog, seller):
        product_id = uuid.uuid4()
        order = make_order(product_ids=[product_id])
        mock_find.return_value = order
        mock_catalog.seller_product_ids.return_value = {uuid.uuid4()}

        result = order_service.update_status(order.id, seller, "accepted")

        assert result.error == ErrorCodes.FORBIDDEN
        mock_catalog.seller_product_ids.assert_called_once_with(seller.id)
        order.save.assert_not_called()

    @patch.object(OrderService, "_find")
    def test_buyer_role_rule_needs_no_ownership_lookup(self, mock_find, order_service, mock_catalog, buyer):
        order = make_order()
        mock_find.return_value = order

        result = order_service.update_status(order.id, buyer, "accepted")

        assert result.error == ErrorCodes.INVALID_FOR_ROLE
        mock_catalog.seller_product_ids.assert_not_called()

    @patch.object(OrderService, "_find")
    def test_successful_transition_saves_single_row(self, mock_find, order_service, mock_catalog, seller):
        product_id = uuid.uuid4()
        order = make_order(product_ids=[product_id])
        mock_find.return_value = order
        mock_catalog.seller_product_ids.return_value = {product_id}

        result = order_service.update_status(order.id, seller, "accepted")

        assert result.ok
        assert order.status == "accepted"
        order.save.assert_called_once_with(update_fields=["status", "updated_at"])

    @patch.object(OrderService, "_find")
    def test_seller_cancels_accepted_order(self, mock_find, order_service, mock_catalog, seller):
        product_id = uuid.uuid4()
        order = make_order(status="accepted", product_ids=[product_id])
        mock_find.return_value = order
        mock_catalog.seller_product_ids.return_value = {product_id}

        assert order_service.update_status(order.id, seller, "canceled").error == ErrorCodes.INVALID_FOR_ROLE
        assert order_service.cancel_order(order.id, seller).ok
        assert order.status == "canceled"
