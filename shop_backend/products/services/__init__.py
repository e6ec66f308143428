from .catalog import bulk_adjust, find_product, parse_id
from .inventory import apply_deltas, build_deltas

__all__ = [
    "apply_deltas",
    "build_deltas",
    "bulk_adjust",
    "find_product",
    "parse_id",
]
