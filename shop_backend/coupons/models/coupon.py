# coupons/models/coupon.py

import uuid
from decimal import Decimal

from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.utils import timezone


class Coupon(models.Model):
    """
    Percentage discount redeemable by name until `expire`.

    A coupon is valid strictly before its expiry instant.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    name = models.CharField(max_length=60, unique=True)
    discount = models.DecimalField(
        max_digits=5,
        decimal_places=2,
        validators=[
            MinValueValidator(Decimal("1")),
            MaxValueValidator(Decimal("100")),
        ],
        help_text="Percentage (1..100)",
    )
    expire = models.DateTimeField()

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]

    def is_valid(self, now=None) -> bool:
        now = now or timezone.now()
        return self.expire > now

    def __str__(self):
        return f"{self.name} ({self.discount}%)"
