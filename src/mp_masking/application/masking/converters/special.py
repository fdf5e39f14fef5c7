"""Application masking – SpecialTypeConverter.

Identifiers, paths, network addresses, enums, classes and one-element
sequences.
"""
from __future__ import annotations

import builtins
import enum
import importlib
import ipaddress
import pathlib
import typing
import uuid
from typing import Any

from mp_masking.application.masking.converters.base import Converter, unwrap_optional

_VALUE_TYPES: tuple[type, ...] = (
    uuid.UUID,
    pathlib.Path,
    pathlib.PurePath,
    pathlib.PurePosixPath,
    pathlib.PureWindowsPath,
    ipaddress.IPv4Address,
    ipaddress.IPv6Address,
)

_SEQUENCE_ITEMS: tuple[type, ...] = (str, int)


def _is_enum(target: Any) -> bool:
    return isinstance(target, type) and issubclass(target, enum.Enum)


def _is_class_type(target: Any) -> bool:
    return target is type or typing.get_origin(target) is type


def _sequence_shape(target: Any) -> tuple[type, type] | None:
    """``(container, item)`` for ``list[str]``, ``list[int]``, ``tuple[str, ...]`` and friends."""
    origin = typing.get_origin(target)
    if origin not in (list, tuple):
        return None
    args = typing.get_args(target)
    if not args or (origin is tuple and len(args) == 2 and args[1] is not Ellipsis):
        return None
    if origin is tuple and len(args) > 2:
        return None
    item = args[0]
    if not any(item is t for t in _SEQUENCE_ITEMS):
        return None
    return origin, item


class SpecialTypeConverter(Converter):
    """Converts literals to special value types.

    * ``Enum`` subclasses match by member name, upper-case first, then
      case-insensitively.
    * ``type`` fields take a dotted import path (``"decimal.Decimal"``).
    * ``list[str]`` becomes ``[literal]``; ``list[int]`` becomes
      ``[int(literal)]`` or ``[]`` when the literal is not a number.
    """

    def can_convert(self, target_type: Any) -> bool:
        base, _ = unwrap_optional(target_type)
        return (
            any(base is t for t in _VALUE_TYPES)
            or _is_enum(base)
            or _is_class_type(base)
            or _sequence_shape(base) is not None
        )

    def convert(
        self,
        value: str,
        target_type: Any,
        original_value: Any,
        containing: Any,
        field_name: str,
    ) -> Any | None:
        base, _ = unwrap_optional(target_type)
        if _is_enum(base):
            return self._convert_enum(value, base)
        if _is_class_type(base):
            return self._convert_class(value)
        shape = _sequence_shape(base)
        if shape is not None:
            return self._convert_sequence(value, *shape)
        try:
            return base(value)
        except ValueError:
            return None

    @staticmethod
    def _convert_enum(value: str, enum_type: type[enum.Enum]) -> enum.Enum | None:
        try:
            return enum_type[value.upper()]
        except KeyError:
            lowered = value.lower()
            for member in enum_type:
                if member.name.lower() == lowered:
                    return member
            return None

    @staticmethod
    def _convert_class(value: str) -> type | None:
        module_name, _, attr = value.strip().rpartition(".")
        try:
            owner: Any = importlib.import_module(module_name) if module_name else builtins
        except ImportError:
            return None
        found = getattr(owner, attr, None)
        return found if isinstance(found, type) else None

    @staticmethod
    def _convert_sequence(value: str, container: type, item: type) -> Any:
        if item is str:
            return container([value])
        try:
            return container([int(value)])
        except ValueError:
            return container()


__all__ = ["SpecialTypeConverter"]
