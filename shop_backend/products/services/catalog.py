# products/services/catalog.py

"""
CATALOG READ/WRITE SURFACE (used by cart + orders)

- find_product(): active product by id, NotFoundError otherwise
- bulk_adjust(): stock/sold batch, delegated to the inventory adjuster
"""

from __future__ import annotations

import uuid

from backend.exceptions import InvalidInputError, NotFoundError
from products.models import Product
from products.services.inventory import apply_deltas


def parse_id(value, *, label: str = "id") -> uuid.UUID:
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value or "").strip())
    except ValueError:
        raise InvalidInputError(f"Invalid {label}: {value}")


def find_product(product_id) -> Product:
    pid = parse_id(product_id, label="product id")
    product = Product.objects.filter(pk=pid, is_active=True).first()
    if not product:
        raise NotFoundError(f"No product found with id: {pid}")
    return product


def bulk_adjust(line_items, *, policy: str | None = None) -> dict:
    return apply_deltas(line_items, policy=policy)
