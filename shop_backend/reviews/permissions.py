# reviews/permissions.py

from rest_framework.permissions import BasePermission

from users.models import ROLE_ADMIN, ROLE_MANAGER


class IsReviewOwner(BasePermission):
    message = "You are not allowed to update this review"

    def has_object_permission(self, request, view, obj):
        return obj.user_id == request.user.pk


class IsReviewOwnerOrStaff(BasePermission):
    """Staff may delete any review; shoppers only their own."""

    message = "You are not allowed to perform this action"

    def has_object_permission(self, request, view, obj):
        if getattr(request.user, "role", None) in {ROLE_ADMIN, ROLE_MANAGER}:
            return True
        return obj.user_id == request.user.pk
