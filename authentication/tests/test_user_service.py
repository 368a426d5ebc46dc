import uuid

from django.contrib.auth import get_user_model
from django.test import TestCase

from authentication.domain.identity import Actor
from authentication.domain.services import AuthErrorCodes, UserService
from marketplace.tests.factories import AdminFactory, BuyerFactory, OrderFactory, ProductFactory, SellerFactory

User = get_user_model()


class UserServiceTest(TestCase):
    def setUp(self):
        self.service = UserService()
        self.admin = AdminFactory()
        self.actor = Actor.from_user(self.admin)

    def test_create_user_with_role(self):
        result = self.service.create_user(
            {"username": "shop", "email": "shop@example.com", "password": "pw-123456", "role": "seller"}
        )

        self.assertTrue(result.success)
        self.assertEqual(result.data.role, "seller")
        self.assertTrue(result.data.check_password("pw-123456"))

    def test_create_user_conflicts(self):
        BuyerFactory(username="taken", email="taken@example.com")

        by_email = self.service.create_user(
            {"username": "free", "email": "taken@example.com", "password": "pw", "role": "buyer"}
        )
        by_username = self.service.create_user(
            {"username": "taken", "email": "free@example.com", "password": "pw", "role": "buyer"}
        )

        self.assertEqual(by_email.error_code, AuthErrorCodes.CONFLICT)
        self.assertEqual(by_username.error_code, AuthErrorCodes.CONFLICT)

    def test_list_users_by_role(self):
        seller = SellerFactory()
        BuyerFactory()

        result = self.service.list_users(role="seller")

        self.assertEqual([user.id for user in result.data], [seller.id])

    def test_list_users_unknown_role(self):
        self.assertEqual(self.service.list_users(role="owner").error_code, AuthErrorCodes.MALFORMED_REQUEST)

    def test_get_user_not_found(self):
        for user_id in (uuid.uuid4(), "abc"):
            self.assertEqual(self.service.get_user(user_id).error_code, AuthErrorCodes.USER_NOT_FOUND)

    def test_update_role(self):
        buyer = BuyerFactory()

        result = self.service.update_user(buyer.id, {"role": "seller", "password": "ignored"})

        self.assertTrue(result.success)
        buyer.refresh_from_db()
        self.assertEqual(buyer.role, "seller")
        self.assertTrue(buyer.check_password("defaultpassword"))

    def test_update_email_conflict(self):
        BuyerFactory(email="taken@example.com")
        buyer = BuyerFactory()

        result = self.service.update_user(buyer.id, {"email": "taken@example.com"})

        self.assertEqual(result.error_code, AuthErrorCodes.CONFLICT)

    def test_delete_user(self):
        buyer = BuyerFactory()

        result = self.service.delete_user(buyer.id, self.actor)

        self.assertTrue(result.success)
        self.assertFalse(User.objects.filter(id=buyer.id).exists())

    def test_admin_can_not_delete_self(self):
        result = self.service.delete_user(self.admin.id, self.actor)

        self.assertEqual(result.error_code, AuthErrorCodes.CONFLICT)

    def test_delete_referenced_user_conflicts(self):
        seller = SellerFactory()
        ProductFactory(seller=seller)
        buyer = BuyerFactory()
        OrderFactory(buyer=buyer)

        for user in (seller, buyer):
            result = self.service.delete_user(user.id, self.actor)

            self.assertEqual(result.error_code, AuthErrorCodes.CONFLICT)
            self.assertTrue(User.objects.filter(id=user.id).exists())
