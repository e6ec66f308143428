from .order import (
    CashOrderInputSerializer,
    OrderItemSerializer,
    OrderSerializer,
    ShippingAddressSerializer,
)

__all__ = [
    "OrderSerializer",
    "OrderItemSerializer",
    "ShippingAddressSerializer",
    "CashOrderInputSerializer",
]
