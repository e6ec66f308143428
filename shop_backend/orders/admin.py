from django.contrib import admin

from .models import Order, OrderItem


class OrderItemInline(admin.TabularInline):
    model = OrderItem
    extra = 0
    can_delete = False
    readonly_fields = ("product", "product_title", "color", "price", "quantity")

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = (
        "order_no",
        "user",
        "total_order_price",
        "payment_method_type",
        "is_paid",
        "is_delivered",
        "created_at",
    )
    list_filter = ("payment_method_type", "is_paid", "is_delivered", "created_at")
    search_fields = ("order_no", "user__email", "payment_session_id")
    readonly_fields = (
        "id",
        "order_no",
        "user",
        "shipping_address",
        "tax_price",
        "shipping_price",
        "total_order_price",
        "payment_method_type",
        "payment_session_id",
        "paid_at",
        "delivered_at",
        "created_at",
        "updated_at",
    )
    inlines = [OrderItemInline]

    # Orders are an audit trail.
    def has_delete_permission(self, request, obj=None):
        return False
