from __future__ import annotations

from decimal import Decimal

from django.contrib.auth import get_user_model
from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from products.models import Product
from users.models import Address

User = get_user_model()


class WishlistTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.user = User.objects.create_user(email="w@example.com", password="pass")
        self.client.force_authenticate(user=self.user)

        self.product = Product.objects.create(title="Mug", price=Decimal("50.00"), quantity=5)

    def test_add_is_idempotent(self):
        url = reverse("users:wishlist")

        self.client.post(url, {"productId": str(self.product.id)}, format="json")
        res = self.client.post(url, {"productId": str(self.product.id)}, format="json")

        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["result"], 1)
        self.assertEqual(self.user.wishlist.count(), 1)

    def test_add_unknown_product_is_404(self):
        res = self.client.post(
            reverse("users:wishlist"),
            {"productId": "00000000-0000-0000-0000-000000000000"},
            format="json",
        )

        self.assertEqual(res.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(res.data["error"]["code"], "NOT_FOUND")

    def test_remove(self):
        self.user.wishlist.add(self.product)

        res = self.client.delete(
            reverse("users:wishlist-item", kwargs={"product_id": self.product.id})
        )

        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["result"], 0)

    def test_staff_cannot_use_wishlist(self):
        manager = User.objects.create_user(email="m@example.com", password="pass", role="manager")
        self.client.force_authenticate(user=manager)

        res = self.client.get(reverse("users:wishlist"))

        self.assertEqual(res.status_code, status.HTTP_403_FORBIDDEN)


class AddressTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.user = User.objects.create_user(email="a@example.com", password="pass")
        self.other = User.objects.create_user(email="b@example.com", password="pass")
        self.client.force_authenticate(user=self.user)

    def test_create_and_list_own_addresses(self):
        Address.objects.create(user=self.other, details="Elsewhere")

        res = self.client.post(
            reverse("users:addresses"),
            {"alias": "home", "details": "12 Nile St", "city": "Cairo", "postalCode": "11511"},
            format="json",
        )
        self.assertEqual(res.status_code, status.HTTP_201_CREATED, res.data)
        self.assertEqual(res.data["postalCode"], "11511")

        res = self.client.get(reverse("users:addresses"))
        self.assertEqual(len(res.data), 1)
        self.assertEqual(res.data[0]["details"], "12 Nile St")

    def test_cannot_delete_foreign_address(self):
        foreign = Address.objects.create(user=self.other, details="Elsewhere")

        res = self.client.delete(
            reverse("users:address-detail", kwargs={"address_id": foreign.id})
        )

        self.assertEqual(res.status_code, status.HTTP_404_NOT_FOUND)
        self.assertTrue(Address.objects.filter(id=foreign.id).exists())
