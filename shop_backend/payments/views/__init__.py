from .stripe_webhook import StripeWebhookView

__all__ = ["StripeWebhookView"]
