# orders/serializers/order.py

"""
ORDER SERIALIZERS

Output:
- OrderSerializer (read-only, items nested)

Input:
- ShippingAddressSerializer: {details, phone, city, postalCode}
- CashOrderInputSerializer: {shippingAddress?}
"""

from rest_framework import serializers

from orders.models import Order, OrderItem


class OrderItemSerializer(serializers.ModelSerializer):
    product_id = serializers.UUIDField(read_only=True, allow_null=True)
    line_total = serializers.DecimalField(max_digits=12, decimal_places=2, read_only=True)

    class Meta:
        model = OrderItem
        fields = [
            "id",
            "product_id",
            "product_title",
            "color",
            "price",
            "quantity",
            "line_total",
        ]
        read_only_fields = fields


class OrderSerializer(serializers.ModelSerializer):
    items = OrderItemSerializer(many=True, read_only=True)
    user_email = serializers.EmailField(source="user.email", read_only=True)

    class Meta:
        model = Order
        fields = [
            "id",
            "order_no",
            "user",
            "user_email",
            "items",
            "shipping_address",
            "tax_price",
            "shipping_price",
            "total_order_price",
            "payment_method_type",
            "is_paid",
            "paid_at",
            "is_delivered",
            "delivered_at",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class ShippingAddressSerializer(serializers.Serializer):
    details = serializers.CharField(required=False, allow_blank=True, max_length=255)
    phone = serializers.CharField(required=False, allow_blank=True, max_length=40)
    city = serializers.CharField(required=False, allow_blank=True, max_length=120)
    postalCode = serializers.CharField(required=False, allow_blank=True, max_length=20)


class CashOrderInputSerializer(serializers.Serializer):
    shippingAddress = ShippingAddressSerializer(required=False)
