# cart/views/api.py

"""
CART API VIEWS (shopper only)

- POST   /api/v1/cart/                  {productId, color?}  add one unit
- GET    /api/v1/cart/
- DELETE /api/v1/cart/                  clear (204, idempotent)
- PUT    /api/v1/cart/applyCoupon/      {name}
- PUT    /api/v1/cart/<item_id>/        {quantity}
- DELETE /api/v1/cart/<item_id>/

Money rule:
- Prices are snapshotted from Product on add; totals are recomputed on
  every mutation by the pricing engine.
"""

from __future__ import annotations

from drf_spectacular.utils import extend_schema
from rest_framework import serializers, status
from rest_framework.response import Response
from rest_framework.views import APIView

from cart.serializers import CartSerializer
from cart.services import (
    add_item,
    apply_coupon_to_cart,
    clear,
    get_cart,
    remove_item,
    update_item_quantity,
)
from users.permissions import IsCustomer


# =====================================================
# SWAGGER INPUT SERIALIZERS
# =====================================================

class AddCartItemInputSerializer(serializers.Serializer):
    productId = serializers.UUIDField()
    color = serializers.CharField(required=False, allow_blank=True, default="")


class UpdateCartItemInputSerializer(serializers.Serializer):
    quantity = serializers.IntegerField(min_value=1)


class ApplyCouponInputSerializer(serializers.Serializer):
    name = serializers.CharField(trim_whitespace=False)


# =====================================================
# HELPERS
# =====================================================

def _cart_payload(cart, *, message: str) -> dict:
    data = CartSerializer(cart).data
    return {
        "message": message,
        "numOfCartItems": len(data["items"]),
        "data": data,
    }


# =====================================================
# VIEWS
# =====================================================

class CartView(APIView):
    permission_classes = [IsCustomer]
    serializer_class = CartSerializer

    @extend_schema(
        request=AddCartItemInputSerializer,
        responses={200: dict},
        description="Add a product to the logged user's cart (increments quantity if same product+color exists)",
    )
    def post(self, request):
        s = AddCartItemInputSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        cart = add_item(
            user=request.user,
            product_id=s.validated_data["productId"],
            color=s.validated_data.get("color", ""),
        )
        return Response(
            _cart_payload(cart, message="Product added to cart successfully"),
            status=status.HTTP_200_OK,
        )

    @extend_schema(responses={200: dict}, description="Get logged user cart")
    def get(self, request):
        cart = get_cart(user=request.user)
        return Response(_cart_payload(cart, message="Your cart"))

    @extend_schema(responses={204: None}, description="Clear logged user cart")
    def delete(self, request):
        clear(user=request.user)
        return Response(status=status.HTTP_204_NO_CONTENT)


class ApplyCouponView(APIView):
    permission_classes = [IsCustomer]
    serializer_class = CartSerializer

    @extend_schema(
        request=ApplyCouponInputSerializer,
        responses={200: dict},
        description="Apply a coupon to the logged user's cart",
    )
    def put(self, request):
        s = ApplyCouponInputSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        cart = apply_coupon_to_cart(user=request.user, coupon_name=s.validated_data["name"])
        return Response(_cart_payload(cart, message="Coupon applied successfully"))


class CartItemView(APIView):
    permission_classes = [IsCustomer]
    serializer_class = CartSerializer

    @extend_schema(
        request=UpdateCartItemInputSerializer,
        responses={200: dict},
        description="Set quantity of a cart line",
    )
    def put(self, request, item_id):
        s = UpdateCartItemInputSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        cart = update_item_quantity(
            user=request.user,
            item_id=item_id,
            quantity=s.validated_data["quantity"],
        )
        return Response(_cart_payload(cart, message="Cart item quantity updated successfully"))

    @extend_schema(responses={200: dict}, description="Remove a line from the cart")
    def delete(self, request, item_id):
        cart = remove_item(user=request.user, item_id=item_id)
        return Response(_cart_payload(cart, message="Item removed successfully from cart"))
