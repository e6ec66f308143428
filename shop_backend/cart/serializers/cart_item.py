"""
PATH: cart/serializers/cart_item.py

CART ITEM SERIALIZER

- price is read-only (server-controlled snapshot).
- product_id / product_title are stable fields for frontend wiring.
"""

from rest_framework import serializers

from cart.models import CartItem


class CartItemSerializer(serializers.ModelSerializer):
    product_id = serializers.UUIDField(source="product.id", read_only=True)
    product_title = serializers.CharField(source="product.title", read_only=True)

    price = serializers.DecimalField(max_digits=12, decimal_places=2, read_only=True)
    line_total = serializers.DecimalField(max_digits=12, decimal_places=2, read_only=True)

    class Meta:
        model = CartItem
        fields = [
            "id",
            "product_id",
            "product_title",
            "color",
            "quantity",
            "price",
            "line_total",
            "created_at",
        ]
        read_only_fields = fields
