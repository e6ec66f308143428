# users/models/address.py

import uuid

from django.conf import settings
from django.db import models


class Address(models.Model):
    """
    Saved shipping address of a shopper.

    Orders never reference this row: checkout copies the address fields
    into the order, so editing/removing an address leaves placed orders intact.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="addresses",
    )

    alias = models.CharField(max_length=60, blank=True, default="")
    details = models.CharField(max_length=255)
    phone = models.CharField(max_length=40, blank=True, default="")
    city = models.CharField(max_length=120, blank=True, default="")
    postal_code = models.CharField(max_length=20, blank=True, default="")

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["created_at"]

    def as_shipping_address(self) -> dict:
        return {
            "details": self.details,
            "phone": self.phone,
            "city": self.city,
            "postalCode": self.postal_code,
        }

    def __str__(self):
        label = self.alias or self.city or "Address"
        return f"{label} | {self.user_id}"
