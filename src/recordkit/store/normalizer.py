"""Value normalizer – turns store-native numbers back into ``int`` / ``float``.

DynamoDB (via boto3) hands every number back as :class:`decimal.Decimal`;
the record layer wants the plain Python numbers it wrote.
"""
from __future__ import annotations

from collections.abc import Callable
from decimal import Decimal
from typing import Any

Normalizer = Callable[[Any], Any]


def _unwrap_decimal(value: Decimal) -> int | float:
    if value == value.to_integral_value():
        return int(value)
    return float(value)


def unwrap_numbers(value: Any) -> Any:
    """Return a copy of *value* with every ``Decimal`` converted.

    Integral decimals become ``int``, the rest ``float``.  Recurses into
    dicts, lists, tuples and sets; the input is never mutated.
    """
    if isinstance(value, Decimal):
        if not value.is_finite():
            return float(value)
        return _unwrap_decimal(value)
    if isinstance(value, dict):
        return {k: unwrap_numbers(v) for k, v in value.items()}
    if isinstance(value, list):
        return [unwrap_numbers(v) for v in value]
    if isinstance(value, tuple):
        return tuple(unwrap_numbers(v) for v in value)
    if isinstance(value, (set, frozenset)):
        return type(value)(unwrap_numbers(v) for v in value)
    return value


__all__ = ["Normalizer", "unwrap_numbers"]
