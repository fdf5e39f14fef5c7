"""Application masking – NumberConverter."""
from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from mp_masking.application.masking.converters.base import Converter, unwrap_optional, zero_value

ROUNDING_STEP = Decimal(50)


def round_to_nearest(value: Decimal, step: Decimal = ROUNDING_STEP) -> Decimal:
    """Round *value* to the nearest multiple of *step*, ties away from zero.

    >>> round_to_nearest(Decimal("123.45"))
    Decimal('100')
    >>> round_to_nearest(Decimal("175.30"))
    Decimal('200')
    """
    return (value / step).quantize(Decimal(1), rounding=ROUND_HALF_UP) * step


class NumberConverter(Converter):
    """Converts literals to ``int``, ``float``, ``complex`` and ``Decimal``.

    A blank literal on a ``Decimal`` field does not parse the literal at all:
    it obfuscates the original amount by rounding it to the nearest 50
    (123.45 → 100, 175.30 → 200, 49.99 → 50). Unparseable literals give the
    type's zero value (``None`` for ``Decimal`` and optional fields).
    """

    SUPPORTED_TYPES: tuple[type, ...] = (int, float, complex, Decimal)

    def can_convert(self, target_type: Any) -> bool:
        base, _ = unwrap_optional(target_type)
        return any(base is t for t in self.SUPPORTED_TYPES)

    def convert(
        self,
        value: str,
        target_type: Any,
        original_value: Any,
        containing: Any,
        field_name: str,
    ) -> Any | None:
        base, _ = unwrap_optional(target_type)
        if base is Decimal and not value.strip():
            if isinstance(original_value, Decimal):
                return round_to_nearest(original_value)
            return None
        try:
            return base(value)
        except (ValueError, TypeError, ArithmeticError):
            return zero_value(target_type)


__all__ = ["ROUNDING_STEP", "NumberConverter", "round_to_nearest"]
