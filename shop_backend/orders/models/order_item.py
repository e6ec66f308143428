# orders/models/order_item.py

import uuid
from decimal import Decimal

from django.db import models

from .order import Order


class OrderItem(models.Model):
    """
    Snapshot of a cart line at order time.

    product may be NULL later (catalog entry removed); product_title
    keeps the receipt readable.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    order = models.ForeignKey(Order, on_delete=models.CASCADE, related_name="items")

    product = models.ForeignKey(
        "products.Product",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="order_items",
    )
    product_title = models.CharField(max_length=255, blank=True, default="")

    color = models.CharField(max_length=50, blank=True, default="")
    price = models.DecimalField(max_digits=12, decimal_places=2)
    quantity = models.PositiveIntegerField()

    class Meta:
        ordering = ["product_title"]

    @property
    def line_total(self) -> Decimal:
        return (self.price or Decimal("0.00")) * Decimal(int(self.quantity or 0))

    def __str__(self):
        return f"{self.product_title} x {self.quantity}"
