"""
INVENTORY ADJUSTER TESTS

Guarantees:
- One batch moves stock down and sold up by the same quantity
- Lines for the same product are folded
- best_effort skips missing products; strict rolls the whole batch back
"""

from __future__ import annotations

import uuid
from decimal import Decimal

from django.test import TestCase, override_settings

from backend.exceptions import InvalidInputError, InventoryAdjustmentError, NotFoundError
from products.models import Product
from products.services import apply_deltas, build_deltas, find_product


class InventoryAdjusterTests(TestCase):
    def setUp(self):
        self.mug = Product.objects.create(title="Mug", price=Decimal("50.00"), quantity=10)
        self.pen = Product.objects.create(title="Pen", price=Decimal("20.00"), quantity=10)

    def _state(self, product):
        product.refresh_from_db()
        return product.quantity, product.sold

    def test_batch_decrements_stock_and_increments_sold(self):
        result = apply_deltas(
            [
                {"product_id": self.mug.id, "quantity": 1},
                {"product_id": str(self.pen.id), "quantity": 2},
            ]
        )

        self.assertEqual(set(result["adjusted"]), {self.mug.id, self.pen.id})
        self.assertEqual(self._state(self.mug), (9, 1))
        self.assertEqual(self._state(self.pen), (8, 2))

    def test_same_product_lines_are_folded(self):
        deltas = build_deltas(
            [
                {"product_id": self.mug.id, "quantity": 1},
                {"product_id": str(self.mug.id), "quantity": 3},
            ]
        )

        self.assertEqual(dict(deltas), {self.mug.id: 4})

    def test_best_effort_skips_missing_product(self):
        ghost = uuid.uuid4()

        result = apply_deltas(
            [
                {"product_id": self.mug.id, "quantity": 1},
                {"product_id": ghost, "quantity": 1},
            ],
            policy="best_effort",
        )

        self.assertEqual(result["missing"], [ghost])
        self.assertEqual(self._state(self.mug), (9, 1))

    def test_strict_missing_product_rolls_back(self):
        with self.assertRaises(InventoryAdjustmentError):
            apply_deltas(
                [
                    {"product_id": self.mug.id, "quantity": 1},
                    {"product_id": uuid.uuid4(), "quantity": 1},
                ],
                policy="strict",
            )

        self.assertEqual(self._state(self.mug), (10, 0))

    @override_settings(INVENTORY_ADJUSTMENT_POLICY="strict")
    def test_policy_defaults_to_settings(self):
        with self.assertRaises(InventoryAdjustmentError):
            apply_deltas([{"product_id": uuid.uuid4(), "quantity": 1}])

    def test_stock_may_go_negative(self):
        apply_deltas([{"product_id": self.pen.id, "quantity": 12}])

        self.assertEqual(self._state(self.pen), (-2, 12))

    def test_invalid_quantity_rejected(self):
        with self.assertRaises(InvalidInputError):
            apply_deltas([{"product_id": self.mug.id, "quantity": 0}])

    def test_unknown_policy_rejected(self):
        with self.assertRaises(InvalidInputError):
            apply_deltas([{"product_id": self.mug.id, "quantity": 1}], policy="sometimes")

    def test_empty_batch_is_noop(self):
        self.assertEqual(apply_deltas([]), {"adjusted": [], "missing": []})


class CatalogLookupTests(TestCase):
    def test_inactive_product_is_not_found(self):
        product = Product.objects.create(
            title="Retired", price=Decimal("1.00"), quantity=1, is_active=False
        )

        with self.assertRaises(NotFoundError):
            find_product(product.id)

    def test_malformed_id_is_invalid_input(self):
        with self.assertRaises(InvalidInputError):
            find_product("not-a-uuid")
