"""Set algebra combinators: union, difference, intersection and friends."""

from .ops import (
    Operation,
    operation_reducers,
    order_by_size,
    symmetric_difference,
    two_set_operations,
)

__all__ = [
    "Operation",
    "operation_reducers",
    "order_by_size",
    "symmetric_difference",
    "two_set_operations",
]
