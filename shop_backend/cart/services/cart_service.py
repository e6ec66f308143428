# cart/services/cart_service.py

"""
============================================================
CART STORE
============================================================

One mutable cart per shopper. Every mutation:
- runs inside transaction.atomic
- locks the cart row (select_for_update) so concurrent requests for the
  same user serialize instead of racing on quantities
- ends by recomputing totals (which also drops any applied coupon)

Errors:
- NotFoundError: no cart / no such line / unknown product
- InvalidInputError: quantity < 1
"""

from __future__ import annotations

import logging

from django.db import transaction

from backend.exceptions import InvalidInputError, NotFoundError
from cart.models import Cart, CartItem
from cart.services.pricing import apply_coupon, compute_total
from products.services import find_product, parse_id

logger = logging.getLogger(__name__)


# ============================================================
# INTERNAL HELPERS
# ============================================================


def _locked_cart_for(user) -> Cart | None:
    return Cart.objects.select_for_update().filter(user=user).first()


def _require_locked_cart(user) -> Cart:
    cart = _locked_cart_for(user)
    if cart is None:
        raise NotFoundError(f"There is no cart for this user: {user.pk}")
    return cart


def _get_or_create_locked_cart(user) -> Cart:
    cart = _locked_cart_for(user)
    if cart is not None:
        return cart
    Cart.objects.get_or_create(user=user)
    return _locked_cart_for(user)


def _validate_quantity(quantity) -> int:
    try:
        qty = int(quantity)
    except (TypeError, ValueError):
        raise InvalidInputError("quantity must be an integer")
    if qty < 1:
        raise InvalidInputError("quantity must be at least 1")
    return qty


# ============================================================
# PUBLIC API
# ============================================================


@transaction.atomic
def add_item(*, user, product_id, color: str = "") -> Cart:
    """
    Adds one unit of (product, color).

    - Same product AND same color already in cart -> quantity + 1
    - Otherwise a new line with the product's current price as snapshot
    - Cart is created on first add
    """
    product = find_product(product_id)
    color = (color or "").strip()

    cart = _get_or_create_locked_cart(user)

    item = cart.items.filter(product=product, color=color).first()
    if item is not None:
        item.quantity = int(item.quantity) + 1
        item.save(update_fields=["quantity"])
    else:
        CartItem.objects.create(
            cart=cart,
            product=product,
            color=color,
            price=product.price,
            quantity=1,
        )

    compute_total(cart)

    logger.info(
        "Cart item added",
        extra={"cart_id": str(cart.id), "product_id": str(product.id), "color": color},
    )
    return cart


@transaction.atomic
def update_item_quantity(*, user, item_id, quantity) -> Cart:
    qty = _validate_quantity(quantity)
    item_id = parse_id(item_id, label="item id")

    cart = _require_locked_cart(user)

    item = cart.items.filter(pk=item_id).first()
    if item is None:
        raise NotFoundError(f"No item found in cart with id: {item_id}")

    item.quantity = qty
    item.save(update_fields=["quantity"])

    compute_total(cart)
    return cart


@transaction.atomic
def remove_item(*, user, item_id) -> Cart:
    """Removing a line that is not in the cart is a no-op."""
    item_id = parse_id(item_id, label="item id")

    cart = _require_locked_cart(user)
    cart.items.filter(pk=item_id).delete()

    compute_total(cart)
    return cart


@transaction.atomic
def clear(*, user) -> None:
    deleted, _ = Cart.objects.filter(user=user).delete()
    if deleted:
        logger.info("Cart cleared", extra={"user_id": str(user.pk)})


def get_cart(*, user) -> Cart:
    """
    Returns the user's cart with the discounted total masked unless a
    coupon is currently applied (masking is not persisted).
    """
    cart = (
        Cart.objects.select_related("applied_coupon")
        .prefetch_related("items__product")
        .filter(user=user)
        .first()
    )
    if cart is None:
        raise NotFoundError(f"There is no cart for this user: {user.pk}")

    if cart.applied_coupon_id is None:
        cart.total_price_after_discount = None
    return cart


@transaction.atomic
def apply_coupon_to_cart(*, user, coupon_name) -> Cart:
    cart = _require_locked_cart(user)
    apply_coupon(cart, coupon_name)

    logger.info(
        "Coupon applied",
        extra={"cart_id": str(cart.id), "coupon": coupon_name},
    )
    return cart
