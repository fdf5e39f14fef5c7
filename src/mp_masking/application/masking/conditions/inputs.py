"""Application masking – per unit-of-work condition inputs.

Inputs live in a ``ContextVar``, so every thread and every asyncio task sees
its own mapping. The mapping is never mutated in place: each write publishes a
new dict, which keeps a task that inherited its parent's context from writing
into the parent's inputs.
"""
from __future__ import annotations

from collections.abc import Mapping
from contextvars import ContextVar
from types import MappingProxyType
from typing import Any

from mp_masking.observability.logging import get_logger

_log = get_logger(__name__)

_INPUTS: ContextVar[Mapping[type, Any] | None] = ContextVar(
    "_mp_masking_condition_inputs", default=None
)


class ConditionInputs:
    """Ambient condition inputs keyed by condition class."""

    @staticmethod
    def set(condition_cls: type, value: Any) -> None:
        current = _INPUTS.get() or {}
        _INPUTS.set({**current, condition_cls: value})

    @staticmethod
    def has(condition_cls: type) -> bool:
        current = _INPUTS.get()
        return current is not None and condition_cls in current

    @staticmethod
    def get(condition_cls: type, default: Any = None) -> Any:
        current = _INPUTS.get()
        if current is None:
            return default
        return current.get(condition_cls, default)

    @staticmethod
    def snapshot() -> Mapping[type, Any]:
        return MappingProxyType(dict(_INPUTS.get() or {}))

    @staticmethod
    def clear() -> None:
        current = _INPUTS.get()
        if current:
            _log.debug("masking.condition_inputs_cleared", count=len(current))
        _INPUTS.set(None)


__all__ = ["ConditionInputs"]
