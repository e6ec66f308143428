from .api import (
    CheckoutSessionView,
    MarkDeliveredView,
    MarkPaidView,
    OrderDetailView,
    OrderListView,
)

__all__ = [
    "OrderListView",
    "OrderDetailView",
    "CheckoutSessionView",
    "MarkPaidView",
    "MarkDeliveredView",
]
