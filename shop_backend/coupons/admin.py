from django.contrib import admin

from coupons.models import Coupon


@admin.register(Coupon)
class CouponAdmin(admin.ModelAdmin):
    list_display = ("name", "discount", "expire", "created_at")
    search_fields = ("name",)
    ordering = ("-created_at",)
