# orders/services/notifications.py

"""
ORDER NOTIFICATIONS (best-effort)

Runs after the order transaction commits. A mail failure is logged and
never affects the placed order.
"""

from __future__ import annotations

import logging

from django.conf import settings
from django.core.mail import send_mail

from orders.models import Order

logger = logging.getLogger(__name__)


def _order_message(order: Order) -> str:
    lines = [f"Thank you for your order {order.order_no}.", ""]
    for item in order.items.all():
        color = f" ({item.color})" if item.color else ""
        lines.append(f"- {item.product_title}{color} x {item.quantity} @ {item.price}")
    lines.append("")
    lines.append(f"Total: {order.total_order_price}")
    lines.append(f"Payment: {order.get_payment_method_type_display()}")
    lines.append("Paid" if order.is_paid else "Payment due on delivery")
    return "\n".join(lines)


def send_order_confirmation(order_id) -> bool:
    order = Order.objects.select_related("user").filter(pk=order_id).first()
    if order is None or not order.user.email:
        return False

    try:
        send_mail(
            subject=f"Order confirmation {order.order_no}",
            message=_order_message(order),
            from_email=getattr(settings, "DEFAULT_FROM_EMAIL", None),
            recipient_list=[order.user.email],
        )
    except Exception:
        logger.exception(
            "Order confirmation email failed",
            extra={"order_id": str(order.id)},
        )
        return False

    return True
