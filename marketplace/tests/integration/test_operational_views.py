import pytest
from django.test import TestCase
from django.urls import reverse
from rest_framework.test import APIClient

from authentication.domain.identity import Actor
from marketplace.catalog.domain.services.catalog_service import CatalogService
from marketplace.tests.factories import SellerFactory


@pytest.mark.integration
class OperationalEndpointsTest(TestCase):
    def setUp(self):
        self.client = APIClient()

    def test_liveness(self):
        response = self.client.get(reverse("health-live"))

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"status": "ok"})

    def test_readiness(self):
        response = self.client.get(reverse("health-ready"))

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["status"], "ready")
        self.assertEqual(response.json()["checks"], {"database": True, "migrations": True, "services": True})

    def test_metrics_expose_product_mutations(self):
        CatalogService().create_product(Actor.from_user(SellerFactory()), {"name": "Lamp", "price": "5"})

        response = self.client.get(reverse("metrics"))

        self.assertEqual(response.status_code, 200)
        self.assertIn(b"marketplace_product_mutations_total", response.content)
