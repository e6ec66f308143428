# coupons/views.py

"""
COUPON VIEWSET (admin / manager only)

- GET    /api/v1/coupons/
- POST   /api/v1/coupons/
- GET    /api/v1/coupons/<id>/
- PUT    /api/v1/coupons/<id>/
- PATCH  /api/v1/coupons/<id>/
- DELETE /api/v1/coupons/<id>/
"""

from rest_framework import viewsets
from rest_framework.permissions import IsAuthenticated

from coupons.models import Coupon
from coupons.serializers import CouponSerializer
from users.permissions import IsAdminOrManager


class CouponViewSet(viewsets.ModelViewSet):
    queryset = Coupon.objects.all().order_by("-created_at")
    serializer_class = CouponSerializer
    permission_classes = [IsAuthenticated, IsAdminOrManager]
    filterset_fields = ["name"]
