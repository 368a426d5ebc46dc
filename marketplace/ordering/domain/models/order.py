import uuid

from django.conf import settings
from django.db import models

from marketplace.catalog.domain.models.product import Product
from marketplace.ordering.domain.state_machine import OrderStatus


class Order(models.Model):
    STATUS_CHOICES = OrderStatus.choices()

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    buyer = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.PROTECT, related_name="orders")

    # Changed only through OrderService.update_status / cancel_order
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=OrderStatus.PENDING.value)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        app_label = "marketplace"
        indexes = [
            models.Index(fields=["buyer", "-created_at"], name="order_buyer_created_idx"),
            models.Index(fields=["status"], name="order_status_idx"),
        ]

    def __str__(self):
        return f"Order {str(self.id)[:8]} ({self.status})"

    def product_ids(self):
        """Ids of the products referenced by this order's items."""
        return {item.product_id for item in self.items.all()}


class OrderItem(models.Model):
    order = models.ForeignKey(Order, on_delete=models.CASCADE, related_name="items")
    # Products referenced by an order can not be deleted
    product = models.ForeignKey(Product, on_delete=models.PROTECT, related_name="order_items")
    quantity = models.PositiveIntegerField()
    position = models.PositiveIntegerField(default=0)

    class Meta:
        ordering = ["position"]
        app_label = "marketplace"

    def __str__(self):
        return f"{self.quantity}x {self.product_id} in order {str(self.order_id)[:8]}"
