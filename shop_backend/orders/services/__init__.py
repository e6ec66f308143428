from .notifications import send_order_confirmation
from .order_builder import (
    create_card_order,
    create_cash_order,
    create_checkout_session,
    mark_delivered,
    mark_paid,
    normalize_shipping_address,
    order_total_for_cart,
)

__all__ = [
    "create_cash_order",
    "create_checkout_session",
    "create_card_order",
    "mark_paid",
    "mark_delivered",
    "normalize_shipping_address",
    "order_total_for_cart",
    "send_order_confirmation",
]
