# payments/services/webhook_reconciler.py

"""
PAYMENT WEBHOOK RECONCILER

Flow:
1) verify signature over the raw body (reject -> 400, nothing written)
2) only "checkout.session.completed" is acted on; other types are acked
3) session id already has an order -> duplicate delivery, ack
4) recover cart id (client_reference_id), shipping address (metadata),
   paid amount (amount_total / 100) and buyer (email, case-insensitive)
5) create the paid card order (same inventory + cart deletion path as cash)

Cart or buyer gone, cart owned by another user, or no positive amount:
- logged and acknowledged (200) so the gateway stops retrying; no order.
"""

from __future__ import annotations

import logging

from django.contrib.auth import get_user_model
from django.db import IntegrityError

from backend.exceptions import InvalidInputError, NotFoundError, PaymentVerificationError
from orders.models import Order
from orders.services import create_card_order
from payments.services.stripe_gateway import from_minor_units

logger = logging.getLogger(__name__)

CHECKOUT_COMPLETED = "checkout.session.completed"


def _buyer_email(session: dict) -> str:
    email = session.get("customer_email") or (session.get("customer_details") or {}).get("email")
    return str(email or "").strip()


def _paid_amount(session: dict):
    amount = from_minor_units(session.get("amount_total"))
    if amount <= 0:
        raise PaymentVerificationError(f"Non-positive amount_total: {amount}")
    return amount


def _already_reconciled(session_id: str) -> bool:
    return Order.objects.filter(payment_session_id=session_id).exists()


class WebhookReconciler:
    def __init__(self, gateway):
        self.gateway = gateway

    def handle_event(self, raw_body: bytes, signature: str | None) -> dict:
        event = self.gateway.verify_and_parse_event(raw_body, signature)

        event_type = str(event.get("type") or "")
        logger.info("Payment webhook received", extra={"event_type": event_type})

        if event_type != CHECKOUT_COMPLETED:
            return {"ok": True, "detail": "ignored"}

        session = (event.get("data") or {}).get("object") or {}
        return self.reconcile_session(session)

    def reconcile_session(self, session: dict) -> dict:
        session_id = str(session.get("id") or "").strip()
        if not session_id:
            logger.warning("Completed session without id")
            return {"ok": True, "detail": "no session id"}

        if _already_reconciled(session_id):
            logger.info("Duplicate webhook ignored", extra={"session_id": session_id})
            return {"ok": True, "detail": "duplicate"}

        email = _buyer_email(session)
        User = get_user_model()
        user = User.objects.filter(email__iexact=email).first() if email else None
        if user is None:
            logger.warning(
                "Webhook buyer not found; no order created",
                extra={"session_id": session_id, "email": email},
            )
            return {"ok": True, "detail": "user not found"}

        try:
            amount = _paid_amount(session)
        except PaymentVerificationError:
            logger.warning(
                "Webhook session without a valid paid amount; no order created",
                extra={"session_id": session_id, "amount_total": session.get("amount_total")},
            )
            return {"ok": True, "detail": "invalid amount"}

        try:
            order = create_card_order(
                user=user,
                cart_id=session.get("client_reference_id"),
                shipping_address=session.get("metadata") or {},
                amount=amount,
                session_id=session_id,
            )
        except (NotFoundError, InvalidInputError):
            logger.warning(
                "Webhook cart not found for buyer; no order created",
                extra={
                    "session_id": session_id,
                    "cart_id": session.get("client_reference_id"),
                    "user_id": str(user.pk),
                },
            )
            return {"ok": True, "detail": "cart not found"}
        except IntegrityError:
            # Concurrent delivery of the same session won the unique key.
            logger.info("Duplicate webhook ignored", extra={"session_id": session_id})
            return {"ok": True, "detail": "duplicate"}

        logger.info(
            "Webhook processed successfully",
            extra={"session_id": session_id, "order_id": str(order.id)},
        )
        return {"ok": True, "detail": "order created", "order_id": str(order.id)}
