# users/urls.py

from django.urls import path

from .views import (
    AddressDetailView,
    AddressListView,
    LoginView,
    MeView,
    RegisterView,
    WishlistItemView,
    WishlistView,
)

app_name = "users"

urlpatterns = [
    # ---------------- PUBLIC AUTH ----------------
    path("auth/register/", RegisterView.as_view(), name="register"),
    path("auth/login/", LoginView.as_view(), name="login"),
    # ---------------- AUTHENTICATED ----------------
    path("auth/me/", MeView.as_view(), name="me"),
    path("wishlist/", WishlistView.as_view(), name="wishlist"),
    path("wishlist/<uuid:product_id>/", WishlistItemView.as_view(), name="wishlist-item"),
    path("addresses/", AddressListView.as_view(), name="addresses"),
    path("addresses/<uuid:address_id>/", AddressDetailView.as_view(), name="address-detail"),
]
