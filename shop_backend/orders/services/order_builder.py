# orders/services/order_builder.py

"""
ORDER BUILDER (APPLICATION SERVICE)

Purpose:
- Convert a cart into an immutable Order (cash: on request, card: on
  confirmed payment event).
- Open a hosted checkout session for card payments.
- Pay / deliver status transitions.

Hard rules:
- Money is computed server-side:
    price = discounted total if a coupon is applied, cart total otherwise
    total_order_price = price + tax + shipping (settings.ORDERS)
- Cart lock, order rows, inventory batch and cart deletion run in ONE
  transaction. Cart deletion is the last step, so a failure anywhere
  before it leaves the cart intact and no order recorded.
- The cart id + shipping address ride in the checkout session's
  reference/metadata fields; the webhook has no other way to recover them.
"""

from __future__ import annotations

import logging
from decimal import ROUND_HALF_UP, Decimal

from django.conf import settings
from django.db import transaction
from django.utils import timezone

from backend.exceptions import InvalidInputError, NotFoundError
from cart.models import Cart
from cart.services import payable_total
from orders.models import Order, OrderItem
from orders.services.notifications import send_order_confirmation
from products.services import bulk_adjust, parse_id

logger = logging.getLogger(__name__)

TWOPLACES = Decimal("0.01")

SHIPPING_ADDRESS_FIELDS = ("details", "phone", "city", "postalCode")


def _money(v) -> Decimal:
    if v is None or v == "":
        return Decimal("0.00")
    return Decimal(str(v)).quantize(TWOPLACES, rounding=ROUND_HALF_UP)


def _order_settings() -> dict:
    cfg = getattr(settings, "ORDERS", {}) or {}
    return {
        "tax": _money(cfg.get("TAX_PRICE")),
        "shipping": _money(cfg.get("SHIPPING_PRICE")),
    }


def normalize_shipping_address(raw) -> dict:
    """
    Keeps only the known address keys, as strings.

    Same shape is stored on the order and carried in session metadata
    (gateway metadata values must be strings).
    """
    if not raw:
        return {}
    if not isinstance(raw, dict):
        raise InvalidInputError("shippingAddress must be an object")

    out = {}
    for key in SHIPPING_ADDRESS_FIELDS:
        value = raw.get(key)
        if value is None:
            continue
        out[key] = str(value).strip()
    return out


def order_total_for_cart(cart: Cart) -> Decimal:
    """Recomputed from the cart lines and applied coupon, plus tax and shipping."""
    cfg = _order_settings()
    return _money(payable_total(cart)) + cfg["tax"] + cfg["shipping"]


def _locked_cart(cart_id, *, user=None) -> Cart:
    cart_pk = parse_id(cart_id, label="cart id")
    qs = Cart.objects.select_for_update().filter(pk=cart_pk)
    if user is not None:
        qs = qs.filter(user=user)
    cart = qs.first()
    if cart is None:
        raise NotFoundError(f"There is no cart with id: {cart_pk}")
    return cart


def _snapshot_items(order: Order, cart: Cart) -> list:
    items = [
        OrderItem(
            order=order,
            product_id=line.product_id,
            product_title=getattr(line.product, "title", "") or "",
            color=line.color,
            price=line.price,
            quantity=line.quantity,
        )
        for line in cart.items.select_related("product").all()
    ]
    return OrderItem.objects.bulk_create(items)


def _finalize(order: Order, cart: Cart, items: list) -> None:
    """Inventory batch, then cart deletion, then (after commit) notification."""
    bulk_adjust(items)
    cart.delete()

    order_id = order.id
    transaction.on_commit(lambda: send_order_confirmation(order_id))


# ============================================================
# CASH
# ============================================================


@transaction.atomic
def create_cash_order(*, user, cart_id, shipping_address=None) -> Order:
    cart = _locked_cart(cart_id, user=user)

    if cart.is_empty:
        raise InvalidInputError("Cannot place an order for an empty cart")

    cfg = _order_settings()

    order = Order.objects.create(
        user=user,
        shipping_address=normalize_shipping_address(shipping_address),
        tax_price=cfg["tax"],
        shipping_price=cfg["shipping"],
        total_order_price=order_total_for_cart(cart),
        payment_method_type=Order.PAYMENT_CASH,
    )
    items = _snapshot_items(order, cart)

    _finalize(order, cart, items)

    logger.info(
        "Cash order created",
        extra={"order_id": str(order.id), "user_id": str(user.pk), "total": str(order.total_order_price)},
    )
    return order


# ============================================================
# CARD (hosted checkout)
# ============================================================


def create_checkout_session(
    *,
    user,
    cart_id,
    shipping_address,
    gateway,
    success_url: str,
    cancel_url: str,
) -> dict:
    """
    Opens a hosted payment session. No order is created here.

    Returns the gateway session ({"id", "url"}).
    """
    cart_pk = parse_id(cart_id, label="cart id")
    cart = Cart.objects.select_related("applied_coupon").filter(pk=cart_pk, user=user).first()
    if cart is None:
        raise NotFoundError(f"There is no cart with id: {cart_pk}")

    total = order_total_for_cart(cart)
    if total <= 0:
        raise InvalidInputError("Cart total must be greater than zero to start a payment")

    session = gateway.create_session(
        amount=total,
        customer_email=user.email,
        client_reference_id=str(cart.id),
        metadata=normalize_shipping_address(shipping_address),
        success_url=success_url,
        cancel_url=cancel_url,
    )

    logger.info(
        "Checkout session created",
        extra={"cart_id": str(cart.id), "session_id": session.get("id"), "amount": str(total)},
    )
    return session


@transaction.atomic
def create_card_order(*, user, cart_id, shipping_address, amount, session_id: str) -> Order:
    """
    Order for a confirmed card payment.

    amount is the settled total reported by the gateway (major units).
    Raises NotFoundError if the cart is gone or belongs to someone other
    than the buyer reported by the gateway.
    """
    cart = _locked_cart(cart_id, user=user)
    cfg = _order_settings()

    order = Order.objects.create(
        user=user,
        shipping_address=normalize_shipping_address(shipping_address),
        tax_price=cfg["tax"],
        shipping_price=cfg["shipping"],
        total_order_price=_money(amount),
        payment_method_type=Order.PAYMENT_CARD,
        is_paid=True,
        paid_at=timezone.now(),
        payment_session_id=session_id,
    )
    items = _snapshot_items(order, cart)

    _finalize(order, cart, items)

    logger.info(
        "Card order created",
        extra={"order_id": str(order.id), "session_id": session_id, "total": str(order.total_order_price)},
    )
    return order


# ============================================================
# STATUS TRANSITIONS (admin / manager)
# ============================================================


def _locked_order(order_id) -> Order:
    pk = parse_id(order_id, label="order id")
    order = Order.objects.select_for_update().filter(pk=pk).first()
    if order is None:
        raise NotFoundError(f"There is no order with id: {pk}")
    return order


@transaction.atomic
def mark_paid(order_id) -> Order:
    """Idempotent: an already-paid order keeps its original paid_at."""
    order = _locked_order(order_id)
    if not order.is_paid:
        order.is_paid = True
        order.paid_at = timezone.now()
        order.save(update_fields=["is_paid", "paid_at", "updated_at"])
        logger.info("Order marked paid", extra={"order_id": str(order.id)})
    return order


@transaction.atomic
def mark_delivered(order_id) -> Order:
    """Idempotent: an already-delivered order keeps its original delivered_at."""
    order = _locked_order(order_id)
    if not order.is_delivered:
        order.is_delivered = True
        order.delivered_at = timezone.now()
        order.save(update_fields=["is_delivered", "delivered_at", "updated_at"])
        logger.info("Order marked delivered", extra={"order_id": str(order.id)})
    return order
