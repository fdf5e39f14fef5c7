"""Application masking – Converter port and type helpers."""
from __future__ import annotations

import abc
import types
import typing
from typing import Any, ClassVar, Union

# zero values of the "primitive" types; everything else zeroes to None
_ZERO_VALUES: tuple[tuple[type, Any], ...] = (
    (bool, False),
    (int, 0),
    (float, 0.0),
    (complex, 0j),
)


class Converter(abc.ABC):
    """Port: turn a mask literal into a value of a field's declared type.

    ``priority`` orders converters across all scopes (higher runs first);
    ``terminal`` marks the last-resort converter whose answer is final even
    when it is ``None``. Return ``None`` from :meth:`convert` to let the next
    matching converter try.
    """

    priority: int = 0
    terminal: ClassVar[bool] = False

    @abc.abstractmethod
    def can_convert(self, target_type: Any) -> bool: ...

    @abc.abstractmethod
    def convert(
        self,
        value: str,
        target_type: Any,
        original_value: Any,
        containing: Any,
        field_name: str,
    ) -> Any | None: ...


def unwrap_optional(target_type: Any) -> tuple[Any, bool]:
    """Split ``X | None`` into ``(X, True)``; other types come back as ``(type, False)``.

    Unions of several non-``None`` members keep their union form.
    """
    origin = typing.get_origin(target_type)
    if origin is Union or origin is types.UnionType:
        members = typing.get_args(target_type)
        non_null = tuple(m for m in members if m is not type(None))
        nullable = len(non_null) != len(members)
        if len(non_null) == 1:
            return non_null[0], nullable
        if nullable:
            return Union[non_null], True  # type: ignore[return-value]
    return target_type, False


def zero_value(target_type: Any) -> Any:
    """``0``/``0.0``/``0j``/``False`` for the primitive types, ``None`` for the rest."""
    base, nullable = unwrap_optional(target_type)
    if nullable:
        return None
    for primitive, zero in _ZERO_VALUES:
        if base is primitive:
            return zero
    return None


def converter_priority(converter: Any) -> int:
    """Priority of *converter*, accepting either an attribute or a ``priority()`` method."""
    priority = getattr(converter, "priority", 0)
    if callable(priority):
        priority = priority()
    return int(priority)


__all__ = ["Converter", "converter_priority", "unwrap_optional", "zero_value"]
