"""
PATH: cart/models/cart.py

CART MODEL

Purpose:
- Mutable pre-order basket of a shopper (exactly one per user).
- Created lazily on first add; deleted on clear or successful checkout.

Totals:
- total_cart_price is written by the pricing engine on every mutation.
- total_price_after_discount is set only by a coupon application and
  cleared (together with applied_coupon) whenever contents change.
"""

import uuid
from decimal import Decimal

from django.conf import settings
from django.db import models
from django.db.models import Sum

User = settings.AUTH_USER_MODEL


class Cart(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    user = models.OneToOneField(
        User,
        on_delete=models.CASCADE,
        related_name="cart",
    )

    total_cart_price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal("0.00"),
    )
    total_price_after_discount = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        null=True,
        blank=True,
    )
    applied_coupon = models.ForeignKey(
        "coupons.Coupon",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="carts",
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]

    @property
    def item_count(self) -> int:
        total = self.items.aggregate(total=Sum("quantity")).get("total")
        return int(total or 0)

    @property
    def is_empty(self) -> bool:
        return not self.items.exists()

    @property
    def payable_total(self) -> Decimal:
        """Discounted total when a coupon is applied, the plain total otherwise."""
        if self.applied_coupon_id is not None and self.total_price_after_discount is not None:
            return self.total_price_after_discount
        return self.total_cart_price

    def __str__(self):
        return f"Cart {self.id} | {self.user}"
