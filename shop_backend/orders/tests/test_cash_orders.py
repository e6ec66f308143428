"""
ORDER BUILDER TESTS (cash path + status transitions)

Run with:
    python manage.py test orders -v 2

Cash checkout touches:
Cart -> Order (+ items snapshot) -> Inventory batch -> cart deletion
"""

from __future__ import annotations

import uuid
from datetime import timedelta
from decimal import Decimal
from unittest import mock

from django.contrib.auth import get_user_model
from django.core import mail
from django.db.models import ProtectedError
from django.test import TestCase, override_settings
from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APIClient

from backend.exceptions import InventoryAdjustmentError
from cart.models import Cart, CartItem
from cart.services import apply_coupon, compute_total
from coupons.models import Coupon
from orders.models import Order
from products.models import Product

User = get_user_model()


def _make_cart(user, lines):
    """lines: [(product, price, quantity), ...]"""
    cart = Cart.objects.create(user=user)
    for product, price, qty in lines:
        CartItem.objects.create(cart=cart, product=product, price=Decimal(price), quantity=qty)
    compute_total(cart)
    return cart


class CashOrderTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.user = User.objects.create_user(email="cash@example.com", password="pass")
        self.client.force_authenticate(user=self.user)

        self.mug = Product.objects.create(title="Mug", price=Decimal("50.00"), quantity=10)
        self.pen = Product.objects.create(title="Pen", price=Decimal("20.00"), quantity=10)

        self.cart = _make_cart(self.user, [(self.mug, "50.00", 1), (self.pen, "20.00", 2)])

    def _post_cash(self, cart_id, **body):
        return self.client.post(
            reverse("orders:order-detail", kwargs={"pk": cart_id}),
            body,
            format="json",
        )

    def test_cash_order_totals_inventory_and_cart_deletion(self):
        with self.captureOnCommitCallbacks(execute=True):
            res = self._post_cash(
                self.cart.id,
                shippingAddress={"details": "12 Nile St", "city": "Cairo", "postalCode": "11511"},
            )

        self.assertEqual(res.status_code, status.HTTP_201_CREATED, res.data)

        data = res.data["data"]
        self.assertEqual(Decimal(data["total_order_price"]), Decimal("90.00"))
        self.assertEqual(data["payment_method_type"], "cash")
        self.assertFalse(data["is_paid"])
        self.assertEqual(len(data["items"]), 2)
        self.assertEqual(data["shipping_address"]["city"], "Cairo")

        self.assertFalse(Cart.objects.filter(pk=self.cart.pk).exists())

        self.mug.refresh_from_db()
        self.pen.refresh_from_db()
        self.assertEqual((self.mug.quantity, self.mug.sold), (9, 1))
        self.assertEqual((self.pen.quantity, self.pen.sold), (8, 2))

        self.assertEqual(len(mail.outbox), 1)
        self.assertIn(data["order_no"], mail.outbox[0].subject)

    def test_order_items_are_snapshots(self):
        res = self._post_cash(self.cart.id)
        order = Order.objects.get(pk=res.data["data"]["id"])

        Product.objects.filter(pk=self.mug.pk).update(price=Decimal("999.00"), title="Renamed")

        item = order.items.get(product=self.mug)
        self.assertEqual(item.price, Decimal("50.00"))
        self.assertEqual(item.product_title, "Mug")

    def test_discounted_total_is_used(self):
        Coupon.objects.create(
            name="TEN", discount=Decimal("10"), expire=timezone.now() + timedelta(days=1)
        )
        apply_coupon(self.cart, "TEN")

        res = self._post_cash(self.cart.id)

        self.assertEqual(Decimal(res.data["data"]["total_order_price"]), Decimal("81.00"))

    @override_settings(ORDERS={"TAX_PRICE": Decimal("5.00"), "SHIPPING_PRICE": Decimal("15.00")})
    def test_deleted_coupon_no_longer_discounts(self):
        coupon = Coupon.objects.create(
            name="TEN", discount=Decimal("10"), expire=timezone.now() + timedelta(days=1)
        )
        apply_coupon(self.cart, "TEN")
        coupon.delete()

        cart = self.client.get(reverse("cart:cart")).data["data"]
        res = self._post_cash(self.cart.id)

        self.assertIsNone(cart["total_price_after_discount"])
        self.assertEqual(Decimal(cart["total_cart_price"]), Decimal("90.00"))
        self.assertEqual(Decimal(res.data["data"]["total_order_price"]), Decimal("90.00"))

    def test_total_is_recomputed_from_cart_lines(self):
        self.cart.items.filter(product=self.pen).delete()

        res = self._post_cash(self.cart.id)

        self.assertEqual(res.status_code, status.HTTP_201_CREATED, res.data)
        self.assertEqual(Decimal(res.data["data"]["total_order_price"]), Decimal("50.00"))
        self.assertEqual(len(res.data["data"]["items"]), 1)

    def test_product_in_open_cart_cannot_be_deleted(self):
        with self.assertRaises(ProtectedError):
            self.pen.delete()

        self.assertEqual(self.cart.items.count(), 2)

    def test_tax_and_shipping_are_added(self):
        res = self._post_cash(self.cart.id)

        data = res.data["data"]
        self.assertEqual(Decimal(data["tax_price"]), Decimal("5.00"))
        self.assertEqual(Decimal(data["shipping_price"]), Decimal("15.00"))
        self.assertEqual(Decimal(data["total_order_price"]), Decimal("110.00"))

    def test_unknown_cart_is_404_without_inventory_change(self):
        res = self._post_cash(uuid.uuid4())

        self.assertEqual(res.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(Order.objects.count(), 0)

        self.mug.refresh_from_db()
        self.assertEqual((self.mug.quantity, self.mug.sold), (10, 0))

    def test_foreign_cart_is_404(self):
        other = User.objects.create_user(email="other@example.com", password="pass")
        foreign = _make_cart(other, [(self.mug, "50.00", 1)])

        res = self._post_cash(foreign.id)

        self.assertEqual(res.status_code, status.HTTP_404_NOT_FOUND)
        self.assertTrue(Cart.objects.filter(pk=foreign.pk).exists())

    def test_empty_cart_is_400(self):
        self.cart.items.all().delete()

        res = self._post_cash(self.cart.id)

        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(res.data["error"]["code"], "INVALID_INPUT")

    def test_inventory_failure_keeps_cart_and_records_no_order(self):
        with mock.patch(
            "orders.services.order_builder.bulk_adjust",
            side_effect=InventoryAdjustmentError("products not found"),
        ):
            res = self._post_cash(self.cart.id)

        self.assertEqual(res.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(Order.objects.count(), 0)
        self.assertTrue(Cart.objects.filter(pk=self.cart.pk).exists())

    def test_staff_cannot_place_cash_order(self):
        manager = User.objects.create_user(email="m@example.com", password="pass", role="manager")
        self.client.force_authenticate(user=manager)

        res = self._post_cash(self.cart.id)

        self.assertEqual(res.status_code, status.HTTP_403_FORBIDDEN)


class OrderQueryAndStatusTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.shopper = User.objects.create_user(email="s@example.com", password="pass")
        self.other = User.objects.create_user(email="o@example.com", password="pass")
        self.manager = User.objects.create_user(
            email="m@example.com", password="pass", role="manager"
        )

        self.mine = Order.objects.create(user=self.shopper, total_order_price=Decimal("10.00"))
        self.theirs = Order.objects.create(user=self.other, total_order_price=Decimal("20.00"))

    def test_shopper_lists_only_own_orders(self):
        self.client.force_authenticate(user=self.shopper)

        res = self.client.get(reverse("orders:order-list"))

        self.assertEqual(res.status_code, status.HTTP_200_OK)
        ids = {row["id"] for row in res.data["results"]}
        self.assertEqual(ids, {str(self.mine.id)})

    def test_staff_lists_all_orders(self):
        self.client.force_authenticate(user=self.manager)

        res = self.client.get(reverse("orders:order-list"))

        self.assertEqual(res.data["count"], 2)

    def test_shopper_cannot_read_foreign_order(self):
        self.client.force_authenticate(user=self.shopper)

        res = self.client.get(reverse("orders:order-detail", kwargs={"pk": self.theirs.id}))

        self.assertEqual(res.status_code, status.HTTP_404_NOT_FOUND)

    def test_manager_marks_paid_and_delivered(self):
        self.client.force_authenticate(user=self.manager)

        res = self.client.put(reverse("orders:order-pay", kwargs={"pk": self.mine.id}))
        self.assertEqual(res.status_code, status.HTTP_200_OK, res.data)
        self.assertTrue(res.data["data"]["is_paid"])
        self.assertIsNotNone(res.data["data"]["paid_at"])

        res = self.client.put(reverse("orders:order-deliver", kwargs={"pk": self.mine.id}))
        self.assertEqual(res.status_code, status.HTTP_200_OK, res.data)
        self.assertTrue(res.data["data"]["is_delivered"])
        self.assertIsNotNone(res.data["data"]["delivered_at"])

    def test_mark_paid_twice_keeps_first_timestamp(self):
        self.client.force_authenticate(user=self.manager)
        url = reverse("orders:order-pay", kwargs={"pk": self.mine.id})

        first = self.client.put(url).data["data"]["paid_at"]
        second = self.client.put(url).data["data"]["paid_at"]

        self.assertEqual(first, second)

    def test_shopper_cannot_change_status(self):
        self.client.force_authenticate(user=self.shopper)

        res = self.client.put(reverse("orders:order-pay", kwargs={"pk": self.mine.id}))

        self.assertEqual(res.status_code, status.HTTP_403_FORBIDDEN)

    def test_unknown_order_is_404(self):
        self.client.force_authenticate(user=self.manager)

        res = self.client.put(reverse("orders:order-deliver", kwargs={"pk": uuid.uuid4()}))

        self.assertEqual(res.status_code, status.HTTP_404_NOT_FOUND)
