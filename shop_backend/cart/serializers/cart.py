# cart/serializers/cart.py

"""
CART SERIALIZER

Totals are server-derived (never trusted from client).
total_price_after_discount is null unless a coupon is applied.
"""

from rest_framework import serializers

from cart.models import Cart
from .cart_item import CartItemSerializer


class CartSerializer(serializers.ModelSerializer):
    items = CartItemSerializer(many=True, read_only=True)
    coupon = serializers.CharField(source="applied_coupon.name", read_only=True, default=None)

    class Meta:
        model = Cart
        fields = [
            "id",
            "user",
            "items",
            "total_cart_price",
            "total_price_after_discount",
            "coupon",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields
