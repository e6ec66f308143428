# users/permissions.py

from rest_framework.permissions import BasePermission

from users.models import ROLE_ADMIN, ROLE_MANAGER, ROLE_USER


# ---------------- BASE ROLE PERMISSION ----------------
class HasRole(BasePermission):
    """
    Base permission to check user role safely.
    """

    allowed_roles = set()

    def has_permission(self, request, view):
        user = request.user
        return bool(
            user
            and user.is_authenticated
            and getattr(user, "role", None) in self.allowed_roles
        )


# ---------------- ROLE PERMISSIONS ----------------
class IsCustomer(HasRole):
    """Shopper endpoints: cart, checkout, wishlist, addresses."""

    allowed_roles = {ROLE_USER}


class IsAdminOrManager(HasRole):
    """Back-office: coupons, order status transitions."""

    allowed_roles = {ROLE_ADMIN, ROLE_MANAGER}


class IsCustomerOrStaff(HasRole):
    allowed_roles = {ROLE_USER, ROLE_ADMIN, ROLE_MANAGER}
