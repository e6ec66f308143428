from .cart_service import (
    add_item,
    apply_coupon_to_cart,
    clear,
    get_cart,
    remove_item,
    update_item_quantity,
)
from .pricing import apply_coupon, compute_total, discounted_total, find_valid_coupon, payable_total

__all__ = [
    "compute_total",
    "apply_coupon",
    "discounted_total",
    "find_valid_coupon",
    "payable_total",
    "add_item",
    "update_item_quantity",
    "remove_item",
    "clear",
    "get_cart",
    "apply_coupon_to_cart",
]
