# users/views/wishlist.py

"""
WISHLIST VIEWS (shopper only)

- POST   /api/v1/wishlist/              {productId}  (set semantics)
- GET    /api/v1/wishlist/
- DELETE /api/v1/wishlist/<product_id>/
"""

from __future__ import annotations

from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from products.services import find_product
from users.permissions import IsCustomer
from users.serializers import WishlistAddSerializer, WishlistProductSerializer


def _wishlist_payload(user, *, message: str) -> dict:
    products = list(user.wishlist.all().order_by("title"))
    return {
        "message": message,
        "result": len(products),
        "data": WishlistProductSerializer(products, many=True).data,
    }


class WishlistView(APIView):
    permission_classes = [IsCustomer]
    serializer_class = WishlistProductSerializer

    @extend_schema(responses={200: dict}, description="List logged user's wishlist")
    def get(self, request):
        return Response(_wishlist_payload(request.user, message="your wishlist"))

    @extend_schema(
        request=WishlistAddSerializer,
        responses={200: dict},
        description="Add a product to the wishlist (no duplicates)",
    )
    def post(self, request):
        s = WishlistAddSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        product = find_product(s.validated_data["productId"])
        request.user.wishlist.add(product)

        return Response(
            _wishlist_payload(request.user, message="product added successfully to your wishlist"),
            status=status.HTTP_200_OK,
        )


class WishlistItemView(APIView):
    permission_classes = [IsCustomer]

    @extend_schema(responses={200: dict}, description="Remove a product from the wishlist")
    def delete(self, request, product_id):
        request.user.wishlist.remove(product_id)
        return Response(
            _wishlist_payload(request.user, message="product removed successfully from your wishlist"),
            status=status.HTTP_200_OK,
        )
