# reviews/views.py

"""
REVIEW VIEWSET

- GET    /api/v1/reviews/              (public, ?product=<id>)
- GET    /api/v1/reviews/<id>/         (public)
- POST   /api/v1/reviews/              (shopper)
- PUT    /api/v1/reviews/<id>/         (shopper, owner only)
- PATCH  /api/v1/reviews/<id>/         (shopper, owner only)
- DELETE /api/v1/reviews/<id>/         (owner, or admin / manager)
"""

from rest_framework import viewsets
from rest_framework.permissions import AllowAny

from reviews.models import Review
from reviews.permissions import IsReviewOwner, IsReviewOwnerOrStaff
from reviews.serializers import ReviewSerializer
from users.permissions import IsCustomer, IsCustomerOrStaff


class ReviewViewSet(viewsets.ModelViewSet):
    queryset = Review.objects.select_related("user", "product").order_by("-created_at")
    serializer_class = ReviewSerializer
    filterset_fields = ["product", "user"]

    def get_permissions(self):
        if self.action in ("list", "retrieve"):
            return [AllowAny()]
        if self.action == "destroy":
            return [IsCustomerOrStaff(), IsReviewOwnerOrStaff()]
        if self.action in ("update", "partial_update"):
            return [IsCustomer(), IsReviewOwner()]
        return [IsCustomer()]

    def perform_create(self, serializer):
        serializer.save(user=self.request.user)
