"""
PATH: orders/urls.py
"""

from django.urls import path

from orders.views import (
    CheckoutSessionView,
    MarkDeliveredView,
    MarkPaidView,
    OrderDetailView,
    OrderListView,
)

app_name = "orders"

urlpatterns = [
    path("", OrderListView.as_view(), name="order-list"),
    path(
        "checkout-session/<uuid:cart_id>/",
        CheckoutSessionView.as_view(),
        name="checkout-session",
    ),
    path("<uuid:pk>/", OrderDetailView.as_view(), name="order-detail"),
    path("<uuid:pk>/pay/", MarkPaidView.as_view(), name="order-pay"),
    path("<uuid:pk>/deliver/", MarkDeliveredView.as_view(), name="order-deliver"),
]
