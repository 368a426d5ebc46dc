import uuid
from decimal import Decimal

from django.test import TestCase

from authentication.domain.identity import Actor
from marketplace.catalog.domain.services.catalog_service import CatalogService
from marketplace.models import Product
from marketplace.services.base import ErrorCodes
from marketplace.tests.factories import (
    AdminFactory,
    BuyerFactory,
    OrderItemFactory,
    ProductFactory,
    SellerFactory,
)


class CatalogServiceTest(TestCase):
    def setUp(self):
        self.service = CatalogService()
        self.seller = SellerFactory()
        self.other_seller = SellerFactory()
        self.buyer = BuyerFactory()
        self.admin = AdminFactory()

    def actor(self, user):
        return Actor.from_user(user)

    # ----- read interface -----

    def test_find_by_ids_skips_unknown_and_malformed(self):
        lamp = ProductFactory(seller=self.seller)

        found = self.service.find_by_ids([str(lamp.id), str(uuid.uuid4()), "junk"])

        self.assertEqual([product.id for product in found], [lamp.id])

    def test_find_by_ids_empty(self):
        self.assertEqual(self.service.find_by_ids([]), [])

    def test_seller_product_ids_include_unavailable(self):
        lamp = ProductFactory(seller=self.seller)
        retired = ProductFactory(seller=self.seller, available=False)
        ProductFactory(seller=self.other_seller)

        self.assertEqual(self.service.seller_product_ids(self.seller.id), {lamp.id, retired.id})

    # ----- browsing -----

    def test_list_products_filters(self):
        lamp = ProductFactory(seller=self.seller)
        ProductFactory(seller=self.seller, available=False)
        ProductFactory(seller=self.other_seller)

        result = self.service.list_products(seller_id=str(self.seller.id), available=True)

        self.assertTrue(result.ok)
        self.assertEqual([product.id for product in result.value], [lamp.id])

    def test_list_products_with_malformed_seller(self):
        result = self.service.list_products(seller_id="abc")

        self.assertEqual(result.error, ErrorCodes.INVALID_ARGUMENT)

    def test_get_product_not_found(self):
        for product_id in (str(uuid.uuid4()), "abc"):
            result = self.service.get_product(product_id)

            self.assertEqual(result.error, ErrorCodes.PRODUCT_NOT_FOUND)
            self.assertEqual(result.error_detail, "Product not found")

    # ----- create -----

    def test_seller_creates_product(self):
        result = self.service.create_product(
            self.actor(self.seller), {"name": "Lamp", "description": "Oak", "price": Decimal("49.90")}
        )

        self.assertTrue(result.ok)
        product = result.value
        self.assertEqual(product.name, "Lamp")
        self.assertEqual(product.price, Decimal("49.90"))
        self.assertEqual(product.seller_id, self.seller.id)
        self.assertTrue(product.available)

    def test_admin_may_create(self):
        result = self.service.create_product(self.actor(self.admin), {"name": "Desk", "price": Decimal("120.00")})

        self.assertTrue(result.ok)
        self.assertEqual(result.value.seller_id, self.admin.id)

    def test_buyer_may_not_create(self):
        result = self.service.create_product(self.actor(self.buyer), {"name": "Desk", "price": Decimal("120.00")})

        self.assertEqual(result.error, ErrorCodes.FORBIDDEN)
        self.assertFalse(Product.objects.exists())

    # ----- update / delete -----

    def test_owner_updates_product(self):
        lamp = ProductFactory(seller=self.seller)

        result = self.service.update_product(
            lamp.id, self.actor(self.seller), {"available": False, "price": Decimal("12.50")}
        )

        self.assertTrue(result.ok)
        lamp.refresh_from_db()
        self.assertFalse(lamp.available)
        self.assertEqual(lamp.price, Decimal("12.50"))

    def test_other_seller_may_not_update(self):
        lamp = ProductFactory(seller=self.seller)

        result = self.service.update_product(lamp.id, self.actor(self.other_seller), {"name": "Mine now"})

        self.assertEqual(result.error, ErrorCodes.FORBIDDEN)
        lamp.refresh_from_db()
        self.assertNotEqual(lamp.name, "Mine now")

    def test_admin_updates_any_product(self):
        lamp = ProductFactory(seller=self.seller)

        self.assertTrue(self.service.update_product(lamp.id, self.actor(self.admin), {"name": "Lamp II"}).ok)

    def test_owner_deletes_product(self):
        lamp = ProductFactory(seller=self.seller)

        result = self.service.delete_product(lamp.id, self.actor(self.seller))

        self.assertTrue(result.ok)
        self.assertFalse(Product.objects.filter(id=lamp.id).exists())

    def test_delete_of_ordered_product_conflicts(self):
        lamp = ProductFactory(seller=self.seller)
        OrderItemFactory(product=lamp)

        result = self.service.delete_product(lamp.id, self.actor(self.admin))

        self.assertEqual(result.error, ErrorCodes.CONFLICT)
        self.assertTrue(Product.objects.filter(id=lamp.id).exists())

    def test_other_seller_may_not_delete(self):
        lamp = ProductFactory(seller=self.seller)

        result = self.service.delete_product(lamp.id, self.actor(self.other_seller))

        self.assertEqual(result.error, ErrorCodes.FORBIDDEN)
