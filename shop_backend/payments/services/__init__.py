from .stripe_gateway import (
    StripeGateway,
    from_minor_units,
    gateway_from_settings,
    to_minor_units,
)
from .webhook_reconciler import CHECKOUT_COMPLETED, WebhookReconciler

__all__ = [
    "StripeGateway",
    "gateway_from_settings",
    "to_minor_units",
    "from_minor_units",
    "WebhookReconciler",
    "CHECKOUT_COMPLETED",
]
