from django.contrib import admin

from .models import Cart, CartItem

# =====================================================
# CART ITEM INLINE (READ-ONLY)
# =====================================================


class CartItemInline(admin.TabularInline):
    model = CartItem
    extra = 0
    can_delete = False
    readonly_fields = (
        "product",
        "color",
        "quantity",
        "price",
        "line_total",
        "created_at",
    )

    def has_add_permission(self, request, obj=None):
        return False


# =====================================================
# CART ADMIN
# =====================================================


@admin.register(Cart)
class CartAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "user",
        "total_cart_price",
        "total_price_after_discount",
        "item_count",
        "created_at",
    )

    readonly_fields = (
        "id",
        "user",
        "total_cart_price",
        "total_price_after_discount",
        "applied_coupon",
        "created_at",
        "updated_at",
    )

    search_fields = ("user__email",)
    list_filter = ("created_at",)

    inlines = [CartItemInline]
