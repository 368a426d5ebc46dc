import uuid

import pytest
from django.contrib.auth import get_user_model
from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from marketplace.tests.factories import AdminFactory, BuyerFactory, ProductFactory, SellerFactory

User = get_user_model()


@pytest.mark.integration
class UserAdminViewIntegrationTest(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.admin = AdminFactory()
        self.buyer = BuyerFactory()
        self.list_url = reverse("user_admin:user-list")

    def detail_url(self, user_id):
        return reverse("user_admin:user-detail", kwargs={"pk": user_id})

    def test_non_admin_is_refused(self):
        for user in (self.buyer, SellerFactory()):
            self.client.force_authenticate(user=user)

            response = self.client.get(self.list_url)

            self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_anonymous_is_refused(self):
        self.assertEqual(self.client.get(self.list_url).status_code, status.HTTP_401_UNAUTHORIZED)

    def test_list_users(self):
        self.client.force_authenticate(user=self.admin)

        response = self.client.get(self.list_url)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual({user["id"] for user in response.data["users"]}, {str(self.admin.id), str(self.buyer.id)})

    def test_create_seller(self):
        self.client.force_authenticate(user=self.admin)

        response = self.client.post(
            self.list_url,
            {"username": "shop", "email": "shop@example.com", "password": "pw-123456", "role": "seller"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["user"]["role"], "seller")
        self.assertNotIn("password", response.data["user"])

    def test_create_conflict(self):
        self.client.force_authenticate(user=self.admin)

        response = self.client.post(
            self.list_url,
            {"username": "other", "email": self.buyer.email, "password": "pw", "role": "buyer"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)

    def test_create_with_invalid_fields(self):
        self.client.force_authenticate(user=self.admin)

        for body, field in (
            ({"username": "shop", "email": "shop@example.com", "password": "pw"}, "role"),
            ({"username": "shop", "email": "shop@example.com", "password": "pw", "role": "owner"}, "role"),
            ({"username": "shop", "email": "nope", "password": "pw", "role": "buyer"}, "email"),
            ({"username": "no spaces", "email": "shop@example.com", "password": "pw", "role": "buyer"}, "username"),
        ):
            response = self.client.post(self.list_url, body, format="json")

            self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, body)
            self.assertEqual(response.data["error"], "malformed_request")
            self.assertTrue(response.data["detail"].startswith(f"{field}: "), response.data)

        self.assertFalse(User.objects.filter(email="shop@example.com").exists())

    def test_update_needs_a_known_field(self):
        self.client.force_authenticate(user=self.admin)

        response = self.client.patch(self.detail_url(self.buyer.id), {"password": "new"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(
            response.data, {"error": "malformed_request", "detail": "Provide at least one of username, email or role"}
        )

    def test_update_with_unknown_role(self):
        self.client.force_authenticate(user=self.admin)

        response = self.client.patch(self.detail_url(self.buyer.id), {"role": "owner"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.buyer.refresh_from_db()
        self.assertEqual(self.buyer.role, "buyer")

    def test_retrieve_unknown_user(self):
        self.client.force_authenticate(user=self.admin)

        response = self.client.get(self.detail_url(uuid.uuid4()))

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data["error"], "user_not_found")

    def test_promote_buyer_to_seller(self):
        self.client.force_authenticate(user=self.admin)

        response = self.client.patch(self.detail_url(self.buyer.id), {"role": "seller"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.buyer.refresh_from_db()
        self.assertEqual(self.buyer.role, "seller")

    def test_role_change_applies_to_next_request(self):
        self.client.force_authenticate(user=self.admin)
        self.client.patch(self.detail_url(self.buyer.id), {"role": "seller"}, format="json")

        self.client.force_authenticate(user=self.buyer)
        response = self.client.post(
            reverse("marketplace:product-list"), {"name": "Lamp", "price": "10.00"}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)

    def test_delete_user(self):
        self.client.force_authenticate(user=self.admin)

        response = self.client.delete(self.detail_url(self.buyer.id))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertFalse(User.objects.filter(id=self.buyer.id).exists())

    def test_delete_seller_with_products_conflicts(self):
        seller = SellerFactory()
        ProductFactory(seller=seller)
        self.client.force_authenticate(user=self.admin)

        response = self.client.delete(self.detail_url(seller.id))

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)

    def test_admin_can_not_delete_self(self):
        self.client.force_authenticate(user=self.admin)

        response = self.client.delete(self.detail_url(self.admin.id))

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
