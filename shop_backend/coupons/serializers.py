# coupons/serializers.py

from decimal import Decimal

from django.utils import timezone
from rest_framework import serializers
from rest_framework.validators import UniqueValidator

from coupons.models import Coupon


class CouponSerializer(serializers.ModelSerializer):
    """
    Back-office coupon CRUD.

    Rules:
    - name unique (trimmed)
    - discount in 1..100
    - expire cannot be in the past
    """

    name = serializers.CharField(
        max_length=60,
        validators=[
            UniqueValidator(
                queryset=Coupon.objects.all(),
                message="Coupon name already exists",
            )
        ],
    )
    discount = serializers.DecimalField(
        max_digits=5,
        decimal_places=2,
        min_value=Decimal("1"),
        max_value=Decimal("100"),
    )

    class Meta:
        model = Coupon
        fields = [
            "id",
            "name",
            "discount",
            "expire",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "created_at", "updated_at"]

    def validate_name(self, value):
        name = (value or "").strip()
        if not name:
            raise serializers.ValidationError("Coupon name is required")
        return name

    def validate_expire(self, value):
        if value <= timezone.now():
            raise serializers.ValidationError("Coupon expiration date cannot be in the past")
        return value
