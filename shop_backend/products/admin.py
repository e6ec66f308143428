# products/admin.py
"""
=====================================================
PATH: products/admin.py
=====================================================

Admin rules:
- Product price/stock are editable here (back-office only).
- `sold` is read-only: it only moves through the inventory adjuster.
"""

from __future__ import annotations

from django.contrib import admin

from products.models import Product


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ("title", "price", "quantity", "sold", "is_active", "created_at")
    list_filter = ("is_active",)
    search_fields = ("title",)
    readonly_fields = ("sold", "created_at", "updated_at")
