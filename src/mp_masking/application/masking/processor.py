"""Application masking – MaskProcessor, the masking engine.

``process(value)`` returns a masked structural copy of *value* and never
mutates the input::

    @dataclass
    class UserDto:
        name: str = masked(AlwaysMaskCondition, mask_value="Anonymous")
        email: str = masked(MaskOnInput, mask_value="[name]@masked.example")

    processor = MaskProcessor()
    with processor.unit_of_work(inputs={MaskOnInput: request.headers["X-Mask"]}):
        payload = processor.process(user)
"""
from __future__ import annotations

import contextlib
import copy
import dataclasses
from collections.abc import Iterator, Mapping
from typing import Any, TypeVar

from mp_masking.application.masking.conditions import (
    ConditionInputs,
    MaskConditionFactory,
    get_condition_factory,
)
from mp_masking.application.masking.converters import (
    ConverterRegistry,
    get_converter_registry,
)
from mp_masking.application.masking.descriptors import (
    DescriptorRegistry,
    FieldDescriptor,
    TypeDescriptor,
    get_descriptor_registry,
)
from mp_masking.application.masking.directive import MaskDirective
from mp_masking.application.masking.placeholders import PlaceholderResolver
from mp_masking.config.settings import MaskingSettings, load_masking_settings
from mp_masking.kernel.errors import MaskConfigurationError, MaskProcessingError
from mp_masking.kernel.types import attempt
from mp_masking.observability.logging import get_logger

_log = get_logger(__name__)

T = TypeVar("T")

_MISSING = object()

_CONTAINER_TYPES: tuple[type, ...] = (list, tuple, set, frozenset, dict)

# errors that are never turned into fail-open results
_PROPAGATED = (MaskConfigurationError, MaskProcessingError)


@dataclasses.dataclass
class _Walk:
    """State of one root ``process`` call.

    ``visited`` holds the ids on the current path (cycle guard). ``known``
    maps container ids to ``(container, holds_maskable)``; keeping the
    container referenced keeps its id unique until the call returns.
    """

    visited: set[int] = dataclasses.field(default_factory=set)
    known: dict[int, tuple[Any, bool]] = dataclasses.field(default_factory=dict)


class MaskProcessor:
    """Walks a value graph and builds its masked copy.

    Collaborators default to the process-wide registries, so processors are
    cheap to create and share their descriptor cache and GLOBAL converters.
    Settings default to the ``MASKING_*`` environment variables.

    A value is *maskable* when its type is described (dataclass, ``NamedTuple``
    or an explicit :func:`describe` registration) and at least one field
    carries a directive. Lists, tuples, sets, frozensets and dicts holding
    maskable values are rebuilt element-wise; everything else is copied by
    reference.
    """

    def __init__(
        self,
        *,
        descriptors: DescriptorRegistry | None = None,
        converters: ConverterRegistry | None = None,
        conditions: MaskConditionFactory | None = None,
        settings: MaskingSettings | None = None,
    ) -> None:
        self._descriptors = descriptors if descriptors is not None else get_descriptor_registry()
        self._converters = converters if converters is not None else get_converter_registry()
        self._conditions = conditions if conditions is not None else get_condition_factory()
        self._settings = settings if settings is not None else load_masking_settings()
        self._placeholders = PlaceholderResolver(self._descriptors)

    @property
    def descriptors(self) -> DescriptorRegistry:
        return self._descriptors

    @property
    def converters(self) -> ConverterRegistry:
        return self._converters

    @property
    def conditions(self) -> MaskConditionFactory:
        return self._conditions

    @property
    def settings(self) -> MaskingSettings:
        return self._settings

    # ------------------------------------------------------------------
    # Unit of work
    # ------------------------------------------------------------------

    def set_condition_input(self, condition_cls: type, input: Any) -> None:  # noqa: A002
        ConditionInputs.set(condition_cls, input)

    def clear_inputs(self) -> None:
        ConditionInputs.clear()

    @contextlib.contextmanager
    def unit_of_work(
        self,
        request_id: str | None = None,
        inputs: Mapping[type, Any] | None = None,
    ) -> Iterator[str]:
        """Open a request scope with *inputs* registered; clean both up on exit."""
        scope_id = self._converters.start_request_scope(request_id)
        try:
            for condition_cls, value in (inputs or {}).items():
                self.set_condition_input(condition_cls, value)
            yield scope_id
        finally:
            self.clear_inputs()
            self._converters.end_request_scope()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def is_maskable(self, value: Any) -> bool:
        """True for maskable values and for containers that hold one."""
        return self._contains_maskable(value, {})

    def process(self, value: T) -> T:
        """Return the masked copy of *value*.

        Raises:
            MaskConfigurationError: a condition or converter is misconfigured.
            MaskProcessingError: a copy failed and ``settings.fail_open`` is off.
        """
        return self._process(value, _Walk())

    # ------------------------------------------------------------------
    # Traversal
    # ------------------------------------------------------------------

    def _process(self, value: Any, walk: _Walk) -> Any:
        if value is None:
            return None
        key = id(value)
        if key in walk.visited:
            _log.warning("masking.cycle_detected", type=type(value).__qualname__)
            return value
        walk.visited.add(key)
        try:
            outcome = attempt(self._copy, value, walk, reraise=_PROPAGATED)
            if outcome.is_err():
                return self._fail_open(value, outcome.error)
            return outcome.value
        finally:
            walk.visited.discard(key)

    def _copy(self, value: Any, walk: _Walk) -> Any:
        descriptor = self._descriptors.get(type(value))
        if descriptor is not None:
            if descriptor.record:
                return self._copy_record(value, descriptor, walk)
            return self._copy_mutable(value, descriptor, walk)
        if isinstance(value, _CONTAINER_TYPES):
            return self._copy_container(value, walk)
        _log.debug("masking.undescribed_type", type=type(value).__qualname__)
        return value

    def _copy_mutable(self, value: Any, descriptor: TypeDescriptor, walk: _Walk) -> Any:
        cls = descriptor.cls
        rebuilt = cls.__new__(cls)
        names = set()
        for field in descriptor.fields:
            names.add(field.name)
            original = self._descriptors.read_field(value, field.name, _MISSING)
            if original is _MISSING:
                continue
            object.__setattr__(rebuilt, field.name, self._field_value(value, field, original, walk))
        # attributes outside the descriptor are carried over as-is
        for name, extra in (getattr(value, "__dict__", None) or {}).items():
            if name not in names:
                object.__setattr__(rebuilt, name, extra)
        return rebuilt

    def _copy_record(self, value: Any, descriptor: TypeDescriptor, walk: _Walk) -> Any:
        arguments: dict[str, Any] = {}
        late: dict[str, Any] = {}
        for field in descriptor.fields:
            original = self._descriptors.read_field(value, field.name, _MISSING)
            if original is _MISSING:
                continue
            target = arguments if field.init else late
            target[field.name] = self._field_value(value, field, original, walk)
        rebuilt = descriptor.cls(**arguments)
        for name, late_value in late.items():
            object.__setattr__(rebuilt, name, late_value)
        return rebuilt

    def _copy_container(self, value: Any, walk: _Walk) -> Any:
        if isinstance(value, dict):
            rebuilt = dict(value) if type(value) is dict else copy.copy(value)
            for key, item in value.items():
                rebuilt[key] = self._element(item, walk)
            return rebuilt
        if isinstance(value, list):
            rebuilt = list(value) if type(value) is list else copy.copy(value)
            rebuilt[:] = [self._element(item, walk) for item in value]
            return rebuilt
        return type(value)(self._element(item, walk) for item in value)

    def _element(self, item: Any, walk: _Walk) -> Any:
        if self._holds_maskable(item, walk):
            return self._process(item, walk)
        return item

    def _field_value(
        self,
        owner: Any,
        field: FieldDescriptor,
        original: Any,
        walk: _Walk,
    ) -> Any:
        if field.directive is not None and self._should_mask(field.directive, original, owner):
            return self._replacement(field, original, owner)
        if self._holds_maskable(original, walk):
            return self._process(original, walk)
        return original

    # ------------------------------------------------------------------
    # Decisions
    # ------------------------------------------------------------------

    def _is_maskable_shape(self, value: Any) -> bool:
        if value is None or isinstance(value, type):
            return False
        return self._descriptors.has_directives(type(value))

    def _holds_maskable(self, value: Any, walk: _Walk) -> bool:
        seen: dict[int, Any] = {}
        found = self._contains_maskable(value, seen, walk.known)
        if not found:
            # nothing maskable is reachable from value, nor from anything under it
            walk.known.update({key: (container, False) for key, container in seen.items()})
        return found

    def _contains_maskable(
        self,
        value: Any,
        seen: dict[int, Any],
        known: dict[int, tuple[Any, bool]] | None = None,
    ) -> bool:
        key = id(value)
        if known is not None and key in known:
            return known[key][1]
        if self._is_maskable_shape(value):
            return True
        if isinstance(value, _CONTAINER_TYPES) and self._descriptors.get(type(value)) is None:
            if key in seen:
                return False
            seen[key] = value
            items = value.values() if isinstance(value, dict) else value
            found = any(self._contains_maskable(item, seen, known) for item in items)
            if found and known is not None:
                known[key] = (value, True)
            return found
        return False

    def _should_mask(self, directive: MaskDirective, value: Any, owner: Any) -> bool:
        for condition_cls in directive.conditions:
            condition = self._conditions.create_condition(condition_cls)
            outcome = attempt(self._evaluate, condition, condition_cls, value, owner)
            if outcome.is_err():
                _log.debug(
                    "masking.condition_failed",
                    condition=condition_cls.__qualname__,
                    owner=type(owner).__qualname__,
                    error=repr(outcome.error),
                )
                continue
            if outcome.value:
                return True
        return False

    @staticmethod
    def _evaluate(condition: Any, condition_cls: type, value: Any, owner: Any) -> bool:
        if ConditionInputs.has(condition_cls):
            condition.set_input(ConditionInputs.get(condition_cls))
        return bool(condition.should_mask(value, owner))

    def _replacement(self, field: FieldDescriptor, original: Any, owner: Any) -> Any:
        literal = field.directive.mask_value if field.directive is not None else None
        if self._settings.resolve_placeholders and self._placeholders.has_placeholders(literal):
            literal = self._placeholders.resolve(literal, owner)
        return self._converters.convert(literal, field.type, original, owner, field.name)

    def _fail_open(self, value: Any, error: Exception) -> Any:
        if not self._settings.fail_open:
            raise MaskProcessingError(type(value), cause=error) from error
        if self._settings.log_fail_open:
            _log.warning(
                "masking.fail_open",
                type=type(value).__qualname__,
                error=repr(error),
            )
        return value


__all__ = ["MaskProcessor"]
