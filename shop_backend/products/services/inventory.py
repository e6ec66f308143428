# products/services/inventory.py

"""
======================================================
PATH: products/services/inventory.py
======================================================
INVENTORY ADJUSTER

Purpose:
- Apply the stock/sold effect of an order in ONE atomic batch:
    for every line item: quantity -= n, sold += n
- Line items for the same product (e.g. two colors) are folded into one delta.

Rules:
- Quantities are integer units and must be > 0.
- Updates use F() expressions (no read-modify-write on stock counters).
- All product rows are updated inside one transaction: either every
  product moves or none does.

Missing products (policy):
- best_effort (default): log + skip; the surrounding order still commits.
- strict: raise InventoryAdjustmentError; the surrounding transaction
  (order creation, cart deletion) rolls back.
"""

from __future__ import annotations

import logging
import uuid
from collections import OrderedDict

from django.conf import settings
from django.db import transaction
from django.db.models import F

from backend.exceptions import InventoryAdjustmentError, InvalidInputError
from products.models import Product

logger = logging.getLogger(__name__)

POLICY_BEST_EFFORT = "best_effort"
POLICY_STRICT = "strict"
POLICIES = {POLICY_BEST_EFFORT, POLICY_STRICT}


def _resolve_policy(policy: str | None) -> str:
    p = (policy or getattr(settings, "INVENTORY_ADJUSTMENT_POLICY", "") or POLICY_BEST_EFFORT)
    p = str(p).strip().lower()
    if p not in POLICIES:
        raise InvalidInputError(f"Unknown inventory adjustment policy: {p}")
    return p


def _line_product_id(line):
    raw = line.get("product_id") if isinstance(line, dict) else getattr(line, "product_id", None)
    if raw is None or raw == "":
        return None
    try:
        return uuid.UUID(str(raw))
    except ValueError:
        raise InvalidInputError(f"Invalid product id: {raw}")


def _line_quantity(line) -> int:
    raw = line.get("quantity") if isinstance(line, dict) else getattr(line, "quantity", None)
    if isinstance(raw, bool):
        raise InvalidInputError("quantity must be a whole integer unit")
    try:
        qty = int(raw)
    except (TypeError, ValueError):
        raise InvalidInputError("quantity must be a whole integer unit")
    if qty <= 0:
        raise InvalidInputError("quantity must be greater than zero")
    return qty


def build_deltas(line_items) -> "OrderedDict":
    """
    Fold line items into {product_id: quantity}.

    Accepts CartItem / OrderItem instances or dicts with product_id + quantity.
    """
    deltas: OrderedDict = OrderedDict()
    for line in line_items:
        product_id = _line_product_id(line)
        if product_id is None:
            continue
        deltas[product_id] = deltas.get(product_id, 0) + _line_quantity(line)
    return deltas


@transaction.atomic
def apply_deltas(line_items, *, policy: str | None = None) -> dict:
    """
    Decrement stock and increment sold for every line item, as one batch.

    Returns:
        {"adjusted": [product_id, ...], "missing": [product_id, ...]}
    """
    mode = _resolve_policy(policy)
    deltas = build_deltas(line_items)
    if not deltas:
        return {"adjusted": [], "missing": []}

    existing = set(
        Product.objects.select_for_update()
        .filter(pk__in=list(deltas.keys()))
        .values_list("pk", flat=True)
    )
    missing = [pid for pid in deltas if pid not in existing]

    if missing:
        if mode == POLICY_STRICT:
            raise InventoryAdjustmentError(
                f"Cannot adjust inventory; products not found: {', '.join(str(m) for m in missing)}"
            )
        for pid in missing:
            logger.warning(
                "Inventory adjustment skipped for missing product",
                extra={"product_id": str(pid)},
            )

    adjusted = []
    for pid, qty in deltas.items():
        if pid not in existing:
            continue
        Product.objects.filter(pk=pid).update(
            quantity=F("quantity") - qty,
            sold=F("sold") + qty,
        )
        adjusted.append(pid)

    logger.info(
        "Inventory adjusted",
        extra={"products": len(adjusted), "missing": len(missing), "policy": mode},
    )
    return {"adjusted": adjusted, "missing": missing}
