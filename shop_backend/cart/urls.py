"""
PATH: cart/urls.py
"""

from django.urls import path

from cart.views import ApplyCouponView, CartItemView, CartView

app_name = "cart"

urlpatterns = [
    path("", CartView.as_view(), name="cart"),
    path("applyCoupon/", ApplyCouponView.as_view(), name="apply-coupon"),
    path("<uuid:item_id>/", CartItemView.as_view(), name="cart-item"),
]
