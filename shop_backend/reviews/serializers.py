# reviews/serializers.py

from decimal import Decimal

from rest_framework import serializers

from products.models import Product
from reviews.models import Review


class ReviewSerializer(serializers.ModelSerializer):
    """
    Rules:
    - ratings in 1..5
    - one review per user per product (checked on create)
    - product cannot be changed once reviewed
    """

    product = serializers.PrimaryKeyRelatedField(queryset=Product.objects.filter(is_active=True))
    ratings = serializers.DecimalField(
        max_digits=2,
        decimal_places=1,
        min_value=Decimal("1"),
        max_value=Decimal("5"),
        error_messages={
            "min_value": "Review ratings values must be between 1 and 5",
            "max_value": "Review ratings values must be between 1 and 5",
        },
    )
    user_name = serializers.CharField(source="user.name", read_only=True)

    class Meta:
        model = Review
        fields = [
            "id",
            "title",
            "ratings",
            "product",
            "user",
            "user_name",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "user", "created_at", "updated_at"]

    def validate_product(self, value):
        if self.instance is not None and value.pk != self.instance.product_id:
            raise serializers.ValidationError("Review product cannot be changed")
        return value

    def validate(self, attrs):
        request = self.context.get("request")
        if self.instance is None and request is not None:
            product = attrs.get("product")
            if Review.objects.filter(user=request.user, product=product).exists():
                raise serializers.ValidationError(
                    {"product": "You have already created a review for this product"}
                )
        return attrs
