"""
CART PRICING TESTS

Run with:
    python manage.py test cart -v 2
"""

from __future__ import annotations

from datetime import timedelta
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.test import TestCase
from django.utils import timezone

from backend.exceptions import CouponInvalidError
from cart.models import Cart, CartItem
from cart.services import apply_coupon, compute_total, discounted_total, payable_total
from coupons.models import Coupon
from products.models import Product

User = get_user_model()


class DiscountRoundingTests(TestCase):
    def test_only_discount_amount_is_rounded(self):
        # 33.33 * 15% = 4.9995 -> 5.00
        self.assertEqual(discounted_total(Decimal("33.33"), 15), Decimal("28.33"))

    def test_ten_percent_of_two_hundred(self):
        self.assertEqual(discounted_total(Decimal("200.00"), 10), Decimal("180.00"))


class PricingEngineTests(TestCase):
    def setUp(self):
        self.user = User.objects.create_user(email="p@example.com", password="pass")
        self.cart = Cart.objects.create(user=self.user)

        self.mug = Product.objects.create(title="Mug", price=Decimal("50.00"), quantity=10)
        self.pen = Product.objects.create(title="Pen", price=Decimal("20.00"), quantity=10)

        CartItem.objects.create(cart=self.cart, product=self.mug, price=Decimal("50.00"), quantity=2)
        CartItem.objects.create(cart=self.cart, product=self.pen, price=Decimal("20.00"), quantity=5)

        self.coupon = Coupon.objects.create(
            name="TEN", discount=Decimal("10"), expire=timezone.now() + timedelta(days=1)
        )

    def test_compute_total_sums_snapshots(self):
        total = compute_total(self.cart)

        self.cart.refresh_from_db()
        self.assertEqual(total, Decimal("200.00"))
        self.assertEqual(self.cart.total_cart_price, Decimal("200.00"))

    def test_compute_total_ignores_live_catalog_price(self):
        Product.objects.filter(pk=self.mug.pk).update(price=Decimal("999.00"))

        self.assertEqual(compute_total(self.cart), Decimal("200.00"))

    def test_compute_total_clears_discount(self):
        apply_coupon(self.cart, "TEN")

        compute_total(self.cart)

        self.cart.refresh_from_db()
        self.assertIsNone(self.cart.total_price_after_discount)
        self.assertIsNone(self.cart.applied_coupon_id)

    def test_apply_valid_coupon(self):
        result = apply_coupon(self.cart, "TEN")

        self.cart.refresh_from_db()
        self.assertEqual(result, Decimal("180.00"))
        self.assertEqual(self.cart.total_price_after_discount, Decimal("180.00"))
        self.assertEqual(self.cart.applied_coupon_id, self.coupon.id)

    def test_apply_recomputes_from_new_contents(self):
        apply_coupon(self.cart, "TEN")

        CartItem.objects.create(
            cart=self.cart, product=self.mug, color="red", price=Decimal("100.00"), quantity=1
        )
        result = apply_coupon(self.cart, "TEN")

        self.assertEqual(result, Decimal("270.00"))

    def test_expired_coupon_leaves_discount_unchanged(self):
        apply_coupon(self.cart, "TEN")
        Coupon.objects.create(
            name="OLD", discount=Decimal("50"), expire=timezone.now() - timedelta(seconds=1)
        )

        with self.assertRaises(CouponInvalidError):
            apply_coupon(self.cart, "OLD")

        self.cart.refresh_from_db()
        self.assertEqual(self.cart.total_price_after_discount, Decimal("180.00"))

    def test_unknown_coupon_is_rejected(self):
        with self.assertRaises(CouponInvalidError):
            apply_coupon(self.cart, "NOPE")

        self.cart.refresh_from_db()
        self.assertIsNone(self.cart.total_price_after_discount)

    def test_coupon_name_must_match_exactly(self):
        with self.assertRaises(CouponInvalidError):
            apply_coupon(self.cart, " TEN ")

        self.cart.refresh_from_db()
        self.assertIsNone(self.cart.applied_coupon_id)

    def test_payable_total_follows_lines_and_applied_coupon(self):
        apply_coupon(self.cart, "TEN")
        self.cart.items.filter(product=self.pen).delete()

        self.cart.refresh_from_db()
        self.assertEqual(payable_total(self.cart), Decimal("90.00"))

    def test_payable_total_without_coupon_after_coupon_deleted(self):
        apply_coupon(self.cart, "TEN")
        self.coupon.delete()

        self.cart.refresh_from_db()
        self.assertEqual(payable_total(self.cart), Decimal("200.00"))
        self.assertEqual(self.cart.payable_total, Decimal("200.00"))
