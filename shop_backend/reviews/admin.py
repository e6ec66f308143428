from django.contrib import admin

from reviews.models import Review


@admin.register(Review)
class ReviewAdmin(admin.ModelAdmin):
    list_display = ("product", "user", "ratings", "created_at")
    list_filter = ("ratings",)
    search_fields = ("title", "product__title", "user__email")
    ordering = ("-created_at",)
