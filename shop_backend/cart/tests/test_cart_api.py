from __future__ import annotations

import uuid
from datetime import timedelta
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.test import TestCase
from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APIClient

from cart.models import Cart, CartItem
from coupons.models import Coupon
from products.models import Product

User = get_user_model()


class CartApiTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.user = User.objects.create_user(email="buyer@example.com", password="pass")
        self.client.force_authenticate(user=self.user)

        self.product = Product.objects.create(title="Shirt", price=Decimal("50.00"), quantity=10)
        self.cart_url = reverse("cart:cart")

    def _add(self, product=None, color=""):
        product = product or self.product
        return self.client.post(
            self.cart_url,
            {"productId": str(product.id), "color": color},
            format="json",
        )

    # --------------------------------------------------
    # add / get
    # --------------------------------------------------

    def test_first_add_creates_cart(self):
        res = self._add()

        self.assertEqual(res.status_code, status.HTTP_200_OK, res.data)
        self.assertEqual(res.data["numOfCartItems"], 1)
        self.assertEqual(Decimal(res.data["data"]["total_cart_price"]), Decimal("50.00"))
        self.assertTrue(Cart.objects.filter(user=self.user).exists())

    def test_same_product_and_color_increments(self):
        self._add(color="red")
        res = self._add(color="red")

        self.assertEqual(res.data["numOfCartItems"], 1)
        self.assertEqual(res.data["data"]["items"][0]["quantity"], 2)
        self.assertEqual(Decimal(res.data["data"]["total_cart_price"]), Decimal("100.00"))

    def test_different_color_is_new_line(self):
        self._add(color="red")
        res = self._add(color="blue")

        self.assertEqual(res.data["numOfCartItems"], 2)

    def test_price_is_snapshotted_at_add(self):
        self._add()
        Product.objects.filter(pk=self.product.pk).update(price=Decimal("75.00"))

        res = self._add()

        self.assertEqual(Decimal(res.data["data"]["total_cart_price"]), Decimal("100.00"))

    def test_add_unknown_product_is_404(self):
        res = self.client.post(self.cart_url, {"productId": str(uuid.uuid4())}, format="json")

        self.assertEqual(res.status_code, status.HTTP_404_NOT_FOUND)
        self.assertFalse(Cart.objects.filter(user=self.user).exists())

    def test_get_without_cart_is_404(self):
        res = self.client.get(self.cart_url)

        self.assertEqual(res.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(res.data["error"]["code"], "NOT_FOUND")

    def test_get_masks_discount_without_applied_coupon(self):
        self._add()
        Cart.objects.filter(user=self.user).update(total_price_after_discount=Decimal("1.00"))

        res = self.client.get(self.cart_url)

        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertIsNone(res.data["data"]["total_price_after_discount"])

    # --------------------------------------------------
    # coupon
    # --------------------------------------------------

    def test_apply_coupon_then_add_drops_discount(self):
        Coupon.objects.create(
            name="TEN", discount=Decimal("10"), expire=timezone.now() + timedelta(days=1)
        )
        self._add()
        self._add()

        res = self.client.put(reverse("cart:apply-coupon"), {"name": "TEN"}, format="json")
        self.assertEqual(res.status_code, status.HTTP_200_OK, res.data)
        self.assertEqual(Decimal(res.data["data"]["total_price_after_discount"]), Decimal("90.00"))
        self.assertEqual(res.data["data"]["coupon"], "TEN")

        res = self.client.get(self.cart_url)
        self.assertEqual(Decimal(res.data["data"]["total_price_after_discount"]), Decimal("90.00"))

        res = self._add()
        self.assertIsNone(res.data["data"]["total_price_after_discount"])
        self.assertIsNone(res.data["data"]["coupon"])

    def test_invalid_coupon_is_404(self):
        self._add()

        res = self.client.put(reverse("cart:apply-coupon"), {"name": "NOPE"}, format="json")

        self.assertEqual(res.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(res.data["error"]["code"], "COUPON_INVALID")

    # --------------------------------------------------
    # update / remove / clear
    # --------------------------------------------------

    def test_update_quantity(self):
        self._add()
        item = CartItem.objects.get(cart__user=self.user)

        res = self.client.put(
            reverse("cart:cart-item", kwargs={"item_id": item.id}),
            {"quantity": 4},
            format="json",
        )

        self.assertEqual(res.status_code, status.HTTP_200_OK, res.data)
        self.assertEqual(Decimal(res.data["data"]["total_cart_price"]), Decimal("200.00"))

    def test_update_quantity_below_one_rejected(self):
        self._add()
        item = CartItem.objects.get(cart__user=self.user)

        res = self.client.put(
            reverse("cart:cart-item", kwargs={"item_id": item.id}),
            {"quantity": 0},
            format="json",
        )

        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)

    def test_update_unknown_item_is_404(self):
        self._add()

        res = self.client.put(
            reverse("cart:cart-item", kwargs={"item_id": uuid.uuid4()}),
            {"quantity": 2},
            format="json",
        )

        self.assertEqual(res.status_code, status.HTTP_404_NOT_FOUND)

    def test_update_without_cart_is_404(self):
        res = self.client.put(
            reverse("cart:cart-item", kwargs={"item_id": uuid.uuid4()}),
            {"quantity": 2},
            format="json",
        )

        self.assertEqual(res.status_code, status.HTTP_404_NOT_FOUND)

    def test_remove_item_and_missing_item_is_noop(self):
        self._add()
        item = CartItem.objects.get(cart__user=self.user)
        url = reverse("cart:cart-item", kwargs={"item_id": item.id})

        res = self.client.delete(url)
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["numOfCartItems"], 0)
        self.assertEqual(Decimal(res.data["data"]["total_cart_price"]), Decimal("0.00"))

        res = self.client.delete(url)
        self.assertEqual(res.status_code, status.HTTP_200_OK)

    def test_remove_without_cart_is_404(self):
        res = self.client.delete(reverse("cart:cart-item", kwargs={"item_id": uuid.uuid4()}))

        self.assertEqual(res.status_code, status.HTTP_404_NOT_FOUND)

    def test_clear_is_idempotent(self):
        self._add()

        self.assertEqual(self.client.delete(self.cart_url).status_code, status.HTTP_204_NO_CONTENT)
        self.assertEqual(self.client.delete(self.cart_url).status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(Cart.objects.filter(user=self.user).exists())

    def test_staff_cannot_use_cart(self):
        admin = User.objects.create_user(email="admin@example.com", password="pass", role="admin")
        self.client.force_authenticate(user=admin)

        self.assertEqual(self.client.get(self.cart_url).status_code, status.HTTP_403_FORBIDDEN)
