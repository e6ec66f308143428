# orders/views/api.py

"""
ORDER API VIEWS

Shopper:
- POST /api/v1/orders/<cart_id>/                      cash order from cart
- GET  /api/v1/orders/checkout-session/<cart_id>/     hosted card checkout

Shopper (own orders) + staff (all orders):
- GET  /api/v1/orders/
- GET  /api/v1/orders/<order_id>/

Admin / manager:
- PUT  /api/v1/orders/<order_id>/pay/
- PUT  /api/v1/orders/<order_id>/deliver/

Note:
- /orders/<uuid>/ is a cart id for POST and an order id for GET.
"""

from __future__ import annotations

from django.conf import settings
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import generics, status
from rest_framework.response import Response
from rest_framework.views import APIView

from backend.exceptions import NotFoundError
from orders.models import Order
from orders.serializers import (
    CashOrderInputSerializer,
    OrderSerializer,
    ShippingAddressSerializer,
)
from orders.services import (
    create_cash_order,
    create_checkout_session,
    mark_delivered,
    mark_paid,
)
from payments.services import gateway_from_settings
from users.models import ROLE_USER
from users.permissions import IsAdminOrManager, IsCustomer, IsCustomerOrStaff


# =====================================================
# HELPERS
# =====================================================

def _visible_orders(user):
    qs = Order.objects.select_related("user").prefetch_related("items")
    if getattr(user, "role", None) == ROLE_USER:
        qs = qs.filter(user=user)
    return qs


def _frontend_url(path: str) -> str:
    base = (getattr(settings, "FRONTEND_BASE_URL", "") or "").rstrip("/")
    return f"{base}{path}"


# =====================================================
# LIST / DETAIL
# =====================================================

class OrderListView(generics.ListAPIView):
    serializer_class = OrderSerializer
    permission_classes = [IsCustomerOrStaff]
    filterset_fields = ["is_paid", "is_delivered", "payment_method_type"]

    def get_queryset(self):
        return _visible_orders(self.request.user).order_by("-created_at")


class OrderDetailView(APIView):
    serializer_class = OrderSerializer

    def get_permissions(self):
        if self.request.method == "POST":
            return [IsCustomer()]
        return [IsCustomerOrStaff()]

    @extend_schema(responses={200: OrderSerializer}, description="Get one order")
    def get(self, request, pk):
        order = _visible_orders(request.user).filter(pk=pk).first()
        if order is None:
            raise NotFoundError(f"There is no order with id: {pk}")
        return Response(OrderSerializer(order).data)

    @extend_schema(
        request=CashOrderInputSerializer,
        responses={201: OrderSerializer},
        description="Create a cash order from the given cart id",
    )
    def post(self, request, pk):
        s = CashOrderInputSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        order = create_cash_order(
            user=request.user,
            cart_id=pk,
            shipping_address=s.validated_data.get("shippingAddress"),
        )
        order = _visible_orders(request.user).get(pk=order.pk)
        return Response(
            {"status": "success", "data": OrderSerializer(order).data},
            status=status.HTTP_201_CREATED,
        )


# =====================================================
# CARD CHECKOUT
# =====================================================

class CheckoutSessionView(APIView):
    permission_classes = [IsCustomer]
    serializer_class = None

    @extend_schema(
        parameters=[
            OpenApiParameter("details", str, required=False),
            OpenApiParameter("phone", str, required=False),
            OpenApiParameter("city", str, required=False),
            OpenApiParameter("postalCode", str, required=False),
        ],
        responses={200: dict},
        description="Open a hosted card checkout session for the given cart id",
    )
    def get(self, request, cart_id):
        raw = request.data.get("shippingAddress") if isinstance(request.data, dict) else None
        if not raw:
            raw = {k: v for k, v in request.query_params.items()}

        s = ShippingAddressSerializer(data=raw or {})
        s.is_valid(raise_exception=True)

        session = create_checkout_session(
            user=request.user,
            cart_id=cart_id,
            shipping_address=s.validated_data,
            gateway=gateway_from_settings(),
            success_url=_frontend_url("/orders"),
            cancel_url=_frontend_url("/cart"),
        )
        return Response({"status": "success", "session": session})


# =====================================================
# STATUS TRANSITIONS
# =====================================================

class MarkPaidView(APIView):
    permission_classes = [IsAdminOrManager]
    serializer_class = OrderSerializer

    @extend_schema(request=None, responses={200: OrderSerializer})
    def put(self, request, pk):
        order = mark_paid(pk)
        return Response({"status": "success", "data": OrderSerializer(order).data})


class MarkDeliveredView(APIView):
    permission_classes = [IsAdminOrManager]
    serializer_class = OrderSerializer

    @extend_schema(request=None, responses={200: OrderSerializer})
    def put(self, request, pk):
        order = mark_delivered(pk)
        return Response({"status": "success", "data": OrderSerializer(order).data})
