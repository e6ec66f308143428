from django.contrib.auth import get_user_model
from django.contrib.auth.password_validation import validate_password
from rest_framework import serializers

from users.models import Address

User = get_user_model()


# ---------------- REGISTER ----------------
class RegisterSerializer(serializers.ModelSerializer):
    """
    Public sign-up. Always creates a shopper ("user" role);
    staff roles are assigned from the admin site only.
    """

    password = serializers.CharField(
        write_only=True,
        validators=[validate_password],
        style={"input_type": "password"},
    )

    class Meta:
        model = User
        fields = [
            "email",
            "password",
            "name",
            "phone",
        ]

    def validate_email(self, value):
        email = (value or "").strip().lower()
        if User.objects.filter(email__iexact=email).exists():
            raise serializers.ValidationError("Email already registered")
        return email

    def create(self, validated_data):
        return User.objects.create_user(
            email=validated_data["email"],
            password=validated_data["password"],
            name=validated_data.get("name", ""),
            phone=validated_data.get("phone", ""),
        )


# ---------------- LOGIN (INPUT ONLY) ----------------
class LoginSerializer(serializers.Serializer):
    """
    Input validation only.
    Authentication is handled in the view.
    """
    email = serializers.EmailField()
    password = serializers.CharField(
        write_only=True,
        style={"input_type": "password"},
    )


# ---------------- USER OUTPUT ----------------
class UserSerializer(serializers.ModelSerializer):
    """
    Safe user representation for frontend consumption.
    """
    class Meta:
        model = User
        fields = [
            "id",
            "email",
            "name",
            "phone",
            "role",
            "is_active",
        ]


# ---------------- ADDRESSES ----------------
class AddressSerializer(serializers.ModelSerializer):
    postalCode = serializers.CharField(
        source="postal_code", required=False, allow_blank=True, default=""
    )

    class Meta:
        model = Address
        fields = [
            "id",
            "alias",
            "details",
            "phone",
            "city",
            "postalCode",
            "created_at",
        ]
        read_only_fields = ["id", "created_at"]


# ---------------- WISHLIST ----------------
class WishlistAddSerializer(serializers.Serializer):
    productId = serializers.UUIDField()


class WishlistProductSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    title = serializers.CharField()
    price = serializers.DecimalField(max_digits=12, decimal_places=2)
