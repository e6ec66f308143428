from .api import ApplyCouponView, CartItemView, CartView

__all__ = ["CartView", "CartItemView", "ApplyCouponView"]
