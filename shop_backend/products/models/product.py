# products/models/product.py

import uuid
from decimal import Decimal

from django.core.exceptions import ValidationError
from django.db import models


class Product(models.Model):
    """
    Represents a sellable product.

    STOCK MODEL (IMPORTANT):
    - `quantity` is the units currently in stock
    - `sold` is the running count of units sold
    - Both only move through products.services.inventory.apply_deltas()
      (one atomic batch per order), never edited line-by-line at checkout.

    PRICE:
    - `price` is the current catalog price.
    - Carts snapshot it at add-time; orders copy the cart snapshot.
      Changing it here never alters an open cart or a placed order.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    title = models.CharField(max_length=255, db_index=True)
    description = models.TextField(blank=True, default="")

    price = models.DecimalField(max_digits=12, decimal_places=2)

    # Signed on purpose: the bulk decrement is not stock-validated.
    quantity = models.IntegerField(default=0)
    sold = models.IntegerField(default=0)

    is_active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]

    def __str__(self):
        return f"{self.title} ({self.price})"

    def clean(self):
        if self.price is None or Decimal(self.price) < Decimal("0.00"):
            raise ValidationError("Price must not be negative")
