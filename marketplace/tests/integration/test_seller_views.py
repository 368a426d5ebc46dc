import uuid

import pytest
from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from marketplace.tests.factories import BuyerFactory, OrderFactory, OrderItemFactory, ProductFactory, SellerFactory


@pytest.mark.integration
class SellerViewIntegrationTest(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.seller = SellerFactory()

    def detail_url(self, seller_id):
        return reverse("marketplace:seller-detail", kwargs={"pk": seller_id})

    def test_list_sellers_is_public(self):
        BuyerFactory()

        response = self.client.get(reverse("marketplace:seller-list"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([seller["id"] for seller in response.data["sellers"]], [str(self.seller.id)])
        self.assertIn("createdAt", response.data["sellers"][0])

    def test_profile(self):
        lamp = ProductFactory(seller=self.seller)
        other = ProductFactory()
        order = OrderFactory(status="delivered")
        OrderItemFactory(order=order, product=lamp, quantity=3, position=0)
        OrderItemFactory(order=order, product=other, quantity=7, position=1)

        response = self.client.get(self.detail_url(self.seller.id))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["seller"]["id"], str(self.seller.id))
        self.assertEqual([product["id"] for product in response.data["products"]], [str(lamp.id)])
        self.assertEqual(
            response.data["sales"]["stats"], {"ordersCount": 1, "itemsSold": 3, "deliveredCount": 1}
        )
        sold = response.data["sales"]["orders"][0]
        self.assertEqual(sold["id"], str(order.id))
        self.assertEqual(sold["items"], [{"productId": str(lamp.id), "quantity": 3}])

    def test_malformed_seller_id(self):
        response = self.client.get(self.detail_url("seller-1"))

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error"], "invalid_argument")

    def test_unknown_seller(self):
        response = self.client.get(self.detail_url(uuid.uuid4()))

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data["error"], "seller_not_found")
