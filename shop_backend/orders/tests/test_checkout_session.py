from __future__ import annotations

import uuid
from decimal import Decimal
from unittest import mock

from django.contrib.auth import get_user_model
from django.test import TestCase, override_settings
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from backend.exceptions import UpstreamError
from cart.models import Cart, CartItem
from cart.services import compute_total
from orders.models import Order
from products.models import Product

User = get_user_model()


class FakeGateway:
    def __init__(self, error=None):
        self.calls = []
        self.error = error

    def create_session(self, **kwargs):
        self.calls.append(kwargs)
        if self.error:
            raise self.error
        return {"id": "cs_test_123", "url": "https://checkout.example/cs_test_123"}


@override_settings(FRONTEND_BASE_URL="https://shop.example")
class CheckoutSessionTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.user = User.objects.create_user(email="card@example.com", password="pass")
        self.client.force_authenticate(user=self.user)

        self.product = Product.objects.create(title="Lamp", price=Decimal("45.50"), quantity=3)
        self.cart = Cart.objects.create(user=self.user)
        CartItem.objects.create(
            cart=self.cart, product=self.product, price=Decimal("45.50"), quantity=2
        )
        compute_total(self.cart)

    def _get(self, cart_id, gateway, **params):
        with mock.patch("orders.views.api.gateway_from_settings", return_value=gateway):
            return self.client.get(
                reverse("orders:checkout-session", kwargs={"cart_id": cart_id}),
                params,
            )

    def test_session_carries_cart_and_address(self):
        gateway = FakeGateway()

        res = self._get(self.cart.id, gateway, details="12 Nile St", city="Cairo")

        self.assertEqual(res.status_code, status.HTTP_200_OK, res.data)
        self.assertEqual(res.data["session"]["id"], "cs_test_123")

        call = gateway.calls[0]
        self.assertEqual(call["amount"], Decimal("91.00"))
        self.assertEqual(call["customer_email"], "card@example.com")
        self.assertEqual(call["client_reference_id"], str(self.cart.id))
        self.assertEqual(call["metadata"], {"details": "12 Nile St", "city": "Cairo"})
        self.assertEqual(call["success_url"], "https://shop.example/orders")
        self.assertEqual(call["cancel_url"], "https://shop.example/cart")

    def test_session_does_not_create_order_or_touch_cart(self):
        self._get(self.cart.id, FakeGateway())

        self.assertEqual(Order.objects.count(), 0)
        self.assertTrue(Cart.objects.filter(pk=self.cart.pk).exists())

    def test_zero_total_is_400_and_no_gateway_call(self):
        self.cart.items.all().delete()
        compute_total(self.cart)
        gateway = FakeGateway()

        res = self._get(self.cart.id, gateway)

        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(gateway.calls, [])

    def test_amount_follows_cart_lines_not_stored_total(self):
        Cart.objects.filter(pk=self.cart.pk).update(total_cart_price=Decimal("999.00"))
        gateway = FakeGateway()

        self._get(self.cart.id, gateway)

        self.assertEqual(gateway.calls[0]["amount"], Decimal("91.00"))

    def test_unknown_cart_is_404(self):
        res = self._get(uuid.uuid4(), FakeGateway())

        self.assertEqual(res.status_code, status.HTTP_404_NOT_FOUND)

    def test_gateway_failure_is_502(self):
        res = self._get(self.cart.id, FakeGateway(error=UpstreamError("gateway down")))

        self.assertEqual(res.status_code, status.HTTP_502_BAD_GATEWAY)
        self.assertEqual(res.data["error"]["code"], "UPSTREAM_FAILURE")
