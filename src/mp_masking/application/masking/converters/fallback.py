"""Application masking – FallbackConverter, the terminal link of every chain."""
from __future__ import annotations

import contextlib
import typing
from collections.abc import Iterable
from typing import Any, ClassVar

from mp_masking.application.masking.converters.base import Converter, unwrap_optional

_TEXT_TYPES: tuple[type, ...] = (str, bytes, bytearray)


def _is_collection(target: Any) -> bool:
    """True for non-text iterable classes and their parametrised aliases."""
    origin = typing.get_origin(target) or target
    return (
        isinstance(origin, type)
        and issubclass(origin, Iterable)
        and not issubclass(origin, _TEXT_TYPES)
    )


class FallbackConverter(Converter):
    """Generic construction for types no other converter claims.

    Strategies, in order:

    1. ``Any`` / ``object`` fields take the literal as-is;
    2. collections (``list``, ``set[int]``, ``dict``, ...) become an empty
       instance of their class, or ``None`` when it is abstract;
    3. ``T(literal)``;
    4. ``T()`` followed by ``set_value(literal)`` when the instance has one,
       otherwise the empty instance;
    5. ``None``.
    """

    terminal: ClassVar[bool] = True

    def can_convert(self, target_type: Any) -> bool:
        return True

    def convert(
        self,
        value: str,
        target_type: Any,
        original_value: Any,
        containing: Any,
        field_name: str,
    ) -> Any | None:
        base, _ = unwrap_optional(target_type)
        if base is Any or base is object:
            return value
        if _is_collection(base):
            return self._from_default_constructor(value, typing.get_origin(base) or base)
        if not callable(base):
            return None
        try:
            return base(value)
        except Exception:  # noqa: BLE001
            return self._from_default_constructor(value, base)

    @staticmethod
    def _from_default_constructor(value: str, target: Any) -> Any | None:
        try:
            instance = target()
        except Exception:  # noqa: BLE001
            return None
        setter = getattr(instance, "set_value", None)
        if callable(setter):
            with contextlib.suppress(Exception):
                setter(value)
        return instance


__all__ = ["FallbackConverter"]
