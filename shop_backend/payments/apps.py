# payments/apps.py

"""
PAYMENTS APP CONFIG

Hosted card checkout + payment webhook:
- Stripe checkout session creation (gateway client)
- Signature-verified webhook -> card order reconciliation

No models: the order's payment_session_id is the reconciliation key.
"""

from django.apps import AppConfig


class PaymentsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "payments"
    verbose_name = "Payments"
