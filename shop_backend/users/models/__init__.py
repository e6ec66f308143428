from .address import Address
from .user import ROLE_ADMIN, ROLE_MANAGER, ROLE_USER, User, UserManager

__all__ = [
    "User",
    "UserManager",
    "Address",
    "ROLE_USER",
    "ROLE_MANAGER",
    "ROLE_ADMIN",
]
