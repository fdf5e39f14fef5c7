"""Application masking – condition factory with optional host resolver."""
from __future__ import annotations

from typing import Any, Callable, Protocol, TypeVar, runtime_checkable

from mp_masking.kernel.errors import ConditionCreationError
from mp_masking.kernel.types import attempt
from mp_masking.observability.logging import get_logger

_log = get_logger(__name__)

T = TypeVar("T")


@runtime_checkable
class ConditionResolver(Protocol):
    """Port: look a condition instance up in a host object container.

    Return ``None`` when the container does not manage the requested class.
    """

    def get_instance(self, type_: type[T]) -> T | None: ...


class MaskConditionFactory:
    """Creates condition instances.

    Resolution order:

    1. the registered resolver (a :class:`ConditionResolver` or a plain
       ``callable(cls) -> instance | None``); ``None`` or an exception falls
       through to step 2;
    2. the condition's no-argument constructor. Failure here raises
       :class:`~mp_masking.kernel.errors.ConditionCreationError`.
    """

    def __init__(self, resolver: ConditionResolver | Callable[[type], Any] | None = None) -> None:
        self._resolver: Callable[[type], Any] | None = None
        self.set_resolver(resolver)

    def set_resolver(self, resolver: ConditionResolver | Callable[[type], Any] | None) -> None:
        if resolver is None:
            self._resolver = None
        elif isinstance(resolver, ConditionResolver):
            self._resolver = resolver.get_instance
        else:
            self._resolver = resolver

    @property
    def has_resolver(self) -> bool:
        return self._resolver is not None

    def create_condition(self, condition_cls: type[T]) -> T:
        if self._resolver is not None:
            resolved = attempt(self._resolver, condition_cls)
            if resolved.is_err():
                _log.debug(
                    "masking.condition_resolver_failed",
                    condition=condition_cls.__qualname__,
                    error=repr(resolved.error),
                )
            elif resolved.value is not None:
                return resolved.value
        try:
            return condition_cls()
        except Exception as exc:
            raise ConditionCreationError(condition_cls, cause=exc) from exc


_SHARED = MaskConditionFactory()


def get_condition_factory() -> MaskConditionFactory:
    """The process-wide factory used by default by every :class:`MaskProcessor`."""
    return _SHARED


__all__ = ["ConditionResolver", "MaskConditionFactory", "get_condition_factory"]
