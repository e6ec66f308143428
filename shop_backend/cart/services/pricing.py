# cart/services/pricing.py

"""
CART PRICING ENGINE

- compute_total(): Σ(quantity × snapshot price), written onto the cart.
  Any discount/coupon is dropped because contents may have changed.
- apply_coupon(): looks up a non-expired coupon by exact name and stores
  total - round2(total × discount / 100) as the discounted total.
- payable_total(): what checkout charges, recomputed from the cart lines
  and the currently applied coupon (stored totals are not trusted).

Rounding:
- Only the discount amount is rounded (2dp, half-up). The subtraction
  result is not rounded again.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from django.utils import timezone

from backend.exceptions import CouponInvalidError
from coupons.models import Coupon

TWO_PLACES = Decimal("0.01")
HUNDRED = Decimal("100")

TOTAL_FIELDS = ["total_cart_price", "total_price_after_discount", "applied_coupon", "updated_at"]


def discounted_total(total: Decimal, discount) -> Decimal:
    discount_amount = (Decimal(total) * Decimal(str(discount)) / HUNDRED).quantize(
        TWO_PLACES, rounding=ROUND_HALF_UP
    )
    return Decimal(total) - discount_amount


def compute_total(cart, *, save: bool = True) -> Decimal:
    total = Decimal("0.00")
    for item in cart.items.all():
        total += item.line_total

    cart.total_cart_price = total
    cart.total_price_after_discount = None
    cart.applied_coupon = None

    if save:
        cart.save(update_fields=TOTAL_FIELDS)
    return total


def find_valid_coupon(name, *, now=None) -> Coupon:
    now = now or timezone.now()
    coupon = Coupon.objects.filter(name=name or "", expire__gt=now).first()
    if not coupon:
        raise CouponInvalidError("Coupon is invalid or expired")
    return coupon


def apply_coupon(cart, coupon_name) -> Decimal:
    # Coupon is resolved first so a rejected name leaves the cart untouched.
    coupon = find_valid_coupon(coupon_name)

    total = compute_total(cart, save=False)
    cart.total_price_after_discount = discounted_total(total, coupon.discount)
    cart.applied_coupon = coupon
    cart.save(update_fields=TOTAL_FIELDS)

    return cart.total_price_after_discount


def payable_total(cart) -> Decimal:
    total = Decimal("0.00")
    for item in cart.items.all():
        total += item.line_total

    coupon = cart.applied_coupon
    if coupon is not None:
        return discounted_total(total, coupon.discount)
    return total
