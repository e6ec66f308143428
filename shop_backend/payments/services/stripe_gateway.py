# payments/services/stripe_gateway.py

"""
STRIPE GATEWAY CLIENT

- create_session(): hosted checkout session for one order total
- verify_and_parse_event(): signature check over the RAW request body,
  then JSON decode into a plain dict

Amounts:
- Stripe expects integer minor units (piastres / cents): amount × 100,
  half-up rounded.

Errors:
- gateway call fails      -> UpstreamError (502, not retried here)
- bad / missing signature -> PaymentVerificationError (400)
"""

from __future__ import annotations

import json
import logging
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

import stripe
from django.conf import settings

from backend.exceptions import InvalidInputError, PaymentVerificationError, UpstreamError

logger = logging.getLogger(__name__)

DEFAULT_TOLERANCE_SECONDS = 300


def to_minor_units(amount) -> int:
    try:
        major = Decimal(str(amount))
    except (InvalidOperation, ValueError, TypeError) as exc:
        raise InvalidInputError(f"Invalid amount: {amount}") from exc
    minor = (major * Decimal("100")).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    return int(minor)


def from_minor_units(value) -> Decimal:
    if isinstance(value, bool):
        raise PaymentVerificationError(f"Invalid minor-unit amount: {value}")
    try:
        minor = Decimal(str(int(value)))
    except (TypeError, ValueError) as exc:
        raise PaymentVerificationError(f"Invalid minor-unit amount: {value}") from exc
    return (minor / Decimal("100")).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


class StripeGateway:
    def __init__(
        self,
        *,
        secret_key: str,
        webhook_secret: str,
        currency: str = "egp",
        tolerance: int = DEFAULT_TOLERANCE_SECONDS,
    ):
        self.secret_key = (secret_key or "").strip()
        self.webhook_secret = (webhook_secret or "").strip()
        self.currency = (currency or "egp").strip().lower()
        self.tolerance = tolerance

    def create_session(
        self,
        *,
        amount,
        customer_email: str,
        client_reference_id: str,
        metadata: dict,
        success_url: str,
        cancel_url: str,
        product_name: str = "Order",
    ) -> dict:
        if not self.secret_key:
            raise UpstreamError("Payment gateway is not configured")

        try:
            session = stripe.checkout.Session.create(
                api_key=self.secret_key,
                mode="payment",
                line_items=[
                    {
                        "price_data": {
                            "currency": self.currency,
                            "unit_amount": to_minor_units(amount),
                            "product_data": {"name": product_name},
                        },
                        "quantity": 1,
                    }
                ],
                customer_email=customer_email,
                client_reference_id=client_reference_id,
                metadata={k: str(v) for k, v in (metadata or {}).items()},
                success_url=success_url,
                cancel_url=cancel_url,
            )
        except stripe.StripeError as exc:
            logger.error(
                "Stripe session creation failed",
                extra={"cart_id": client_reference_id, "error": str(exc)},
            )
            raise UpstreamError(f"Payment gateway error: {exc.user_message or exc}") from exc

        return {"id": session.id, "url": session.url}

    def verify_and_parse_event(self, raw_body: bytes, signature: str | None) -> dict:
        if not self.webhook_secret:
            raise PaymentVerificationError("Webhook secret is not configured")
        if not signature:
            raise PaymentVerificationError("Missing Stripe-Signature header")

        try:
            payload = (raw_body or b"").decode("utf-8")
        except UnicodeDecodeError as exc:
            raise PaymentVerificationError("Webhook payload is not valid UTF-8") from exc

        try:
            stripe.WebhookSignature.verify_header(
                payload, signature, self.webhook_secret, self.tolerance
            )
        except stripe.SignatureVerificationError as exc:
            logger.warning("Invalid Stripe signature")
            raise PaymentVerificationError("Invalid signature") from exc

        try:
            event = json.loads(payload)
        except ValueError as exc:
            raise PaymentVerificationError("Invalid webhook payload") from exc

        if not isinstance(event, dict):
            raise PaymentVerificationError("Invalid webhook payload")
        return event


def gateway_from_settings() -> StripeGateway:
    payments = getattr(settings, "PAYMENTS", {}) or {}
    cfg = payments.get("STRIPE") or {}
    return StripeGateway(
        secret_key=cfg.get("SECRET_KEY", ""),
        webhook_secret=cfg.get("WEBHOOK_SECRET", ""),
        currency=cfg.get("CURRENCY", "egp"),
    )
