"""Application masking – scoped ConverterRegistry.

Converters are looked up across four scopes plus the fixed defaults::

    TEST → THREAD → REQUEST → GLOBAL → DEFAULT

The composed list is then stably sorted by descending priority, so at equal
priority a converter from a narrower scope still wins over a wider one.

Storage per scope:

* GLOBAL  – immutable tuple swapped under a lock (copy-on-write; readers
  never block).
* THREAD  – ``threading.local``.
* REQUEST – ``ContextVar`` holding an immutable :class:`RequestScope`;
  opened and closed explicitly by the caller around one unit of work.
* TEST    – dict keyed by an explicit test id, plus a ``ContextVar`` naming
  the active test.
"""
from __future__ import annotations

import contextlib
import dataclasses
import enum
import threading
import uuid
from collections.abc import Iterator, Mapping, Sequence
from contextvars import ContextVar
from typing import Any

import structlog

from mp_masking.application.masking.converters.base import (
    Converter,
    converter_priority,
    zero_value,
)
from mp_masking.application.masking.converters.fallback import FallbackConverter
from mp_masking.application.masking.converters.number import NumberConverter
from mp_masking.application.masking.converters.primitive import PrimitiveConverter
from mp_masking.application.masking.converters.special import SpecialTypeConverter
from mp_masking.application.masking.converters.temporal import TemporalConverter
from mp_masking.kernel.errors import ConverterCreationError, ScopeError
from mp_masking.kernel.types import attempt
from mp_masking.observability.logging import get_logger

_log = get_logger(__name__)

REQUEST_ID_LOG_KEY = "mask_request_id"


class ConverterScope(str, enum.Enum):
    """Isolation boundary of a registered converter."""

    GLOBAL = "global"
    THREAD = "thread"
    REQUEST = "request"
    TEST = "test"


@dataclasses.dataclass(frozen=True)
class RequestScope:
    request_id: str
    converters: tuple[Converter, ...] = ()


def default_converters() -> tuple[Converter, ...]:
    """The built-in chain, terminal fallback last."""
    return (
        PrimitiveConverter(),
        NumberConverter(),
        TemporalConverter(),
        SpecialTypeConverter(),
        FallbackConverter(),
    )


class _ThreadConverters(threading.local):
    def __init__(self) -> None:
        self.converters: tuple[Converter, ...] = ()


def _without(converters: tuple[Converter, ...], converter: Converter) -> tuple[Converter, ...]:
    """*converters* minus the first occurrence of *converter*."""
    for index, candidate in enumerate(converters):
        if candidate is converter or candidate == converter:
            return converters[:index] + converters[index + 1:]
    return converters


class ConverterRegistry:
    """Scoped, prioritised chain of :class:`Converter` objects."""

    def __init__(self, defaults: Sequence[Converter] | None = None) -> None:
        self._defaults: tuple[Converter, ...] = (
            tuple(defaults) if defaults is not None else default_converters()
        )
        self._lock = threading.Lock()
        self._global: tuple[Converter, ...] = ()
        self._thread = _ThreadConverters()
        self._request: ContextVar[RequestScope | None] = ContextVar(
            f"_mp_masking_request_scope_{id(self)}", default=None
        )
        self._tests: Mapping[str, tuple[Converter, ...]] = {}
        self._active_test: ContextVar[str | None] = ContextVar(
            f"_mp_masking_test_scope_{id(self)}", default=None
        )

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register_converter(
        self,
        scope: ConverterScope,
        converter: Converter | type[Converter] | None,
        *,
        test_id: str | None = None,
    ) -> Converter | None:
        """Add *converter* (an instance or a no-argument class) to *scope*.

        ``None`` is ignored. REQUEST and TEST registrations need an open scope
        (or an explicit *test_id*) and raise :class:`ScopeError` otherwise.
        """
        if converter is None:
            return None
        instance = self._instantiate(converter)
        scope = ConverterScope(scope)
        if scope is ConverterScope.GLOBAL:
            with self._lock:
                self._global = (*self._global, instance)
        elif scope is ConverterScope.THREAD:
            self._thread.converters = (*self._thread.converters, instance)
        elif scope is ConverterScope.REQUEST:
            current = self._require_request()
            self._request.set(
                dataclasses.replace(current, converters=(*current.converters, instance))
            )
        else:
            key = self._require_test_id(test_id)
            with self._lock:
                self._tests = {**self._tests, key: (*self._tests.get(key, ()), instance)}
        _log.debug(
            "masking.converter_registered",
            scope=scope.value,
            converter=type(instance).__qualname__,
            priority=converter_priority(instance),
        )
        return instance

    def unregister(
        self,
        scope: ConverterScope,
        converter: Converter,
        *,
        test_id: str | None = None,
    ) -> None:
        """Remove the first registration of *converter* from *scope*, if present."""
        scope = ConverterScope(scope)
        if scope is ConverterScope.GLOBAL:
            with self._lock:
                self._global = _without(self._global, converter)
        elif scope is ConverterScope.THREAD:
            self._thread.converters = _without(self._thread.converters, converter)
        elif scope is ConverterScope.REQUEST:
            current = self._request.get()
            if current is not None:
                self._request.set(
                    dataclasses.replace(current, converters=_without(current.converters, converter))
                )
        else:
            key = test_id or self._active_test.get()
            if key is not None:
                with self._lock:
                    self._tests = {**self._tests, key: _without(self._tests.get(key, ()), converter)}

    def clear(self, scope: ConverterScope, *, test_id: str | None = None) -> None:
        """Drop every converter registered in *scope*. Open scopes stay open."""
        scope = ConverterScope(scope)
        if scope is ConverterScope.GLOBAL:
            with self._lock:
                self._global = ()
        elif scope is ConverterScope.THREAD:
            self._thread.converters = ()
        elif scope is ConverterScope.REQUEST:
            current = self._request.get()
            if current is not None:
                self._request.set(dataclasses.replace(current, converters=()))
        else:
            key = test_id or self._active_test.get()
            if key is not None:
                self._drop_test(key)

    # ------------------------------------------------------------------
    # Request scope
    # ------------------------------------------------------------------

    def start_request_scope(self, request_id: str | None = None) -> str:
        """Open a request scope in the current context and return its id."""
        previous = self._request.get()
        if previous is not None:
            _log.warning(
                "masking.request_scope_replaced",
                previous_request_id=previous.request_id,
                leaked_converters=len(previous.converters),
            )
        scope = RequestScope(request_id or str(uuid.uuid4()))
        self._request.set(scope)
        structlog.contextvars.bind_contextvars(**{REQUEST_ID_LOG_KEY: scope.request_id})
        _log.debug("masking.request_scope_started")
        return scope.request_id

    def end_request_scope(self) -> None:
        """Close the current request scope, discarding its converters."""
        current = self._request.get()
        if current is None:
            return
        _log.debug("masking.request_scope_ended", converters=len(current.converters))
        self._request.set(None)
        structlog.contextvars.unbind_contextvars(REQUEST_ID_LOG_KEY)

    @contextlib.contextmanager
    def request_scope(self, request_id: str | None = None) -> Iterator[str]:
        """Open a request scope for the duration of the ``with`` block."""
        scope_id = self.start_request_scope(request_id)
        try:
            yield scope_id
        finally:
            self.end_request_scope()

    @property
    def current_request_id(self) -> str | None:
        current = self._request.get()
        return current.request_id if current is not None else None

    # ------------------------------------------------------------------
    # Test scope
    # ------------------------------------------------------------------

    def start_test_scope(self, test_id: str) -> None:
        """Make *test_id* the active test in the current context."""
        if not test_id:
            raise ScopeError(ConverterScope.TEST.value, "A test scope needs a non-empty id")
        self._active_test.set(test_id)

    def end_test_scope(self, test_id: str | None = None) -> None:
        """Discard the converters of *test_id* (default: the active test) and deactivate it."""
        key = test_id or self._active_test.get()
        if key is None:
            return
        self._drop_test(key)
        if self._active_test.get() == key:
            self._active_test.set(None)

    @contextlib.contextmanager
    def test_scope(self, test_id: str) -> Iterator[str]:
        if not test_id:
            raise ScopeError(ConverterScope.TEST.value, "A test scope needs a non-empty id")
        token = self._active_test.set(test_id)
        try:
            yield test_id
        finally:
            self._drop_test(test_id)
            self._active_test.reset(token)

    @property
    def current_test_id(self) -> str | None:
        return self._active_test.get()

    # ------------------------------------------------------------------
    # Lookup / conversion
    # ------------------------------------------------------------------

    def active_converters(self) -> list[Converter]:
        """Every converter visible in the current context, in evaluation order."""
        test_id = self._active_test.get()
        request = self._request.get()
        composed = [
            *(self._tests.get(test_id, ()) if test_id is not None else ()),
            *self._thread.converters,
            *(request.converters if request is not None else ()),
            *self._global,
            *self._defaults,
        ]
        return sorted(composed, key=lambda c: -converter_priority(c))

    def convert(
        self,
        value: str | None,
        target_type: Any,
        original_value: Any = None,
        containing: Any = None,
        field_name: str = "",
    ) -> Any:
        """Convert a mask literal to *target_type* through the active chain."""
        if value is None:
            return zero_value(target_type)
        for converter in self.active_converters():
            if not attempt(converter.can_convert, target_type).unwrap_or(False):
                continue
            outcome = attempt(
                converter.convert, value, target_type, original_value, containing, field_name
            )
            if outcome.is_err():
                _log.debug(
                    "masking.converter_failed",
                    converter=type(converter).__qualname__,
                    field=field_name,
                    error=repr(outcome.error),
                )
            result = outcome.unwrap_or(None)
            if result is not None or getattr(converter, "terminal", False):
                return result
        return zero_value(target_type)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    @staticmethod
    def _instantiate(converter: Converter | type[Converter]) -> Converter:
        if not isinstance(converter, type):
            return converter
        try:
            return converter()
        except Exception as exc:
            raise ConverterCreationError(converter, cause=exc) from exc

    def _require_request(self) -> RequestScope:
        current = self._request.get()
        if current is None:
            raise ScopeError(ConverterScope.REQUEST.value)
        return current

    def _require_test_id(self, test_id: str | None) -> str:
        key = test_id or self._active_test.get()
        if key is None:
            raise ScopeError(ConverterScope.TEST.value)
        return key

    def _drop_test(self, test_id: str) -> None:
        with self._lock:
            if test_id in self._tests:
                self._tests = {k: v for k, v in self._tests.items() if k != test_id}


_SHARED = ConverterRegistry()


def get_converter_registry() -> ConverterRegistry:
    """The process-wide registry used by default by every :class:`MaskProcessor`."""
    return _SHARED


__all__ = [
    "ConverterRegistry",
    "ConverterScope",
    "RequestScope",
    "default_converters",
    "get_converter_registry",
]
