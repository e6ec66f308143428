from .addresses import AddressDetailView, AddressListView
from .auth import LoginView, RegisterView
from .me import MeView
from .wishlist import WishlistItemView, WishlistView

__all__ = [
    "RegisterView",
    "LoginView",
    "MeView",
    "WishlistView",
    "WishlistItemView",
    "AddressListView",
    "AddressDetailView",
]
