"""Field descriptor model – the static, per-type description of a value's shape.

Dataclasses and ``NamedTuple`` classes are described automatically the first
time the engine meets them; any other class can be registered explicitly with
:func:`describe`. Descriptors are immutable and cached for the lifetime of
their :class:`DescriptorRegistry`.
"""
from __future__ import annotations

import dataclasses
import inspect
import sys
import threading
import types
import typing
from collections.abc import Iterable, Mapping
from typing import Annotated, Any

from mp_masking.application.masking.directive import MASK_METADATA_KEY, MaskDirective
from mp_masking.kernel.errors import InvalidDirectiveError
from mp_masking.observability.logging import get_logger

_log = get_logger(__name__)

_MISSING = object()


@dataclasses.dataclass(frozen=True)
class FieldDescriptor:
    """One field/component: name, declared type and optional directive.

    ``init=False`` marks dataclass fields that the constructor does not take;
    record shapes set them after construction.
    """

    name: str
    type: Any = Any
    directive: MaskDirective | None = None
    init: bool = True


@dataclasses.dataclass(frozen=True)
class TypeDescriptor:
    """All fields of one class.

    ``record=True`` means the shape is immutable and is rebuilt through its
    constructor; otherwise a blank instance is created and fields assigned.
    """

    cls: type
    fields: tuple[FieldDescriptor, ...]
    record: bool = False

    @property
    def has_directives(self) -> bool:
        return any(f.directive is not None for f in self.fields)

    def field(self, name: str) -> FieldDescriptor | None:
        for candidate in self.fields:
            if candidate.name == name:
                return candidate
        return None


def _split_annotated(hint: Any) -> tuple[Any, MaskDirective | None]:
    """Strip ``Annotated`` and pull out at most one :class:`MaskDirective`."""
    if typing.get_origin(hint) is not Annotated:
        return hint, None
    directives = [m for m in hint.__metadata__ if isinstance(m, MaskDirective)]
    if len(directives) > 1:
        raise InvalidDirectiveError("A field can carry at most one mask directive")
    return hint.__origin__, (directives[0] if directives else None)


def _type_hints(cls: type) -> dict[str, Any]:
    """Resolved hints of *cls*, falling back to field-by-field resolution.

    One unresolvable annotation (a ``TYPE_CHECKING``-only import, a class
    local to a function) must not cost the other fields their directives.
    """
    try:
        return typing.get_type_hints(cls, include_extras=True)
    except Exception as exc:  # noqa: BLE001 - unresolved forward references
        _log.debug("masking.type_hints_unresolved", type=cls.__qualname__, error=repr(exc))
    hints: dict[str, Any] = {}
    for owner in reversed(cls.__mro__):
        for name, hint in inspect.get_annotations(owner).items():
            hints[name] = _resolve_hint(owner, name, hint)
    return hints


def _resolve_hint(owner: type, name: str, hint: Any) -> Any:
    """Evaluate one annotation against *owner*'s module globals and class namespace.

    Raises:
        InvalidDirectiveError: the annotation is an unresolvable ``Annotated``
            hint, whose mask directive would otherwise be lost.
    """
    if isinstance(hint, typing.ForwardRef):
        hint = hint.__forward_arg__
    if not isinstance(hint, str):
        return hint
    module = sys.modules.get(owner.__module__)
    globalns = dict(vars(module)) if module is not None else {}
    localns = {owner.__name__: owner, **vars(owner)}
    holder = types.SimpleNamespace(__annotations__={name: hint})
    try:
        return typing.get_type_hints(holder, globalns, localns, include_extras=True)[name]
    except Exception as exc:  # noqa: BLE001 - any evaluation failure
        if "Annotated" in hint:
            raise InvalidDirectiveError(
                f"{owner.__qualname__}.{name} has an unresolvable annotated hint {hint!r}",
                detail={"type": owner.__qualname__, "field": name, "hint": hint},
                cause=exc,
            ) from exc
        _log.debug(
            "masking.field_hint_unresolved",
            type=owner.__qualname__,
            field=name,
            error=repr(exc),
        )
        return Any


def _is_namedtuple(cls: type) -> bool:
    return issubclass(cls, tuple) and hasattr(cls, "_fields")


class DescriptorRegistry:
    """Builds, caches and serves :class:`TypeDescriptor` objects.

    Reads are lock-free against an immutable snapshot of the cache; writers
    take a lock and publish a new snapshot.
    """

    def __init__(self) -> None:
        self._cache: Mapping[type, TypeDescriptor | None] = {}
        self._lock = threading.Lock()

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def describe(
        self,
        cls: type,
        fields: Iterable[FieldDescriptor | str],
        *,
        record: bool = False,
    ) -> TypeDescriptor:
        """Register the shape of *cls* explicitly, replacing any cached one.

        Plain strings are shorthand for an untyped field without a directive.
        """
        if not isinstance(cls, type):
            raise InvalidDirectiveError(f"describe() expects a class, got {cls!r}")
        built = tuple(f if isinstance(f, FieldDescriptor) else FieldDescriptor(f) for f in fields)
        names = [f.name for f in built]
        if len(set(names)) != len(names):
            raise InvalidDirectiveError(
                f"Duplicate field names in descriptor for {cls.__qualname__}",
                detail={"fields": names},
            )
        descriptor = TypeDescriptor(cls, built, record)
        self._publish(cls, descriptor)
        _log.debug(
            "masking.type_described",
            type=cls.__qualname__,
            fields=len(built),
            record=record,
        )
        return descriptor

    def forget(self, cls: type) -> None:
        """Drop the cached or registered descriptor of *cls*."""
        with self._lock:
            if cls in self._cache:
                snapshot = dict(self._cache)
                del snapshot[cls]
                self._cache = snapshot

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def get(self, cls: type) -> TypeDescriptor | None:
        """Descriptor for *cls*, or ``None`` if its shape cannot be described."""
        cached = self._cache.get(cls, _MISSING)
        if cached is not _MISSING:
            return cached  # type: ignore[return-value]
        descriptor = self._build(cls)
        self._publish(cls, descriptor)
        return descriptor

    def has_directives(self, cls: type) -> bool:
        descriptor = self.get(cls)
        return descriptor is not None and descriptor.has_directives

    def read_field(self, obj: Any, name: str, default: Any = None) -> Any:
        """Value of field *name* on *obj*, or *default* when there is no such field."""
        if isinstance(obj, Mapping):
            return obj.get(name, default)
        descriptor = self.get(type(obj))
        if descriptor is not None:
            if descriptor.field(name) is None:
                return default
            return getattr(obj, name, default)
        try:
            return vars(obj).get(name, default)
        except TypeError:
            return default

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _publish(self, cls: type, descriptor: TypeDescriptor | None) -> None:
        with self._lock:
            self._cache = {**self._cache, cls: descriptor}

    def _build(self, cls: type) -> TypeDescriptor | None:
        if dataclasses.is_dataclass(cls):
            return self._from_dataclass(cls)
        if _is_namedtuple(cls):
            return self._from_namedtuple(cls)
        return None

    def _from_dataclass(self, cls: type) -> TypeDescriptor:
        hints = _type_hints(cls)
        fields: list[FieldDescriptor] = []
        for f in dataclasses.fields(cls):
            declared, annotated = _split_annotated(hints.get(f.name, f.type))
            from_metadata = f.metadata.get(MASK_METADATA_KEY)
            if annotated is not None and from_metadata is not None:
                raise InvalidDirectiveError(
                    f"{cls.__qualname__}.{f.name} declares two mask directives"
                )
            fields.append(FieldDescriptor(f.name, declared, annotated or from_metadata, f.init))
        frozen = cls.__dataclass_params__.frozen  # type: ignore[attr-defined]
        return TypeDescriptor(cls, tuple(fields), record=frozen)

    def _from_namedtuple(self, cls: type) -> TypeDescriptor:
        hints = _type_hints(cls)
        fields = []
        for name in cls._fields:  # type: ignore[attr-defined]
            declared, directive = _split_annotated(hints.get(name, Any))
            fields.append(FieldDescriptor(name, declared, directive))
        return TypeDescriptor(cls, tuple(fields), record=True)


_SHARED = DescriptorRegistry()


def get_descriptor_registry() -> DescriptorRegistry:
    """The process-wide registry used by default by every :class:`MaskProcessor`."""
    return _SHARED


def describe(
    cls: type,
    fields: Iterable[FieldDescriptor | str],
    *,
    record: bool = False,
) -> TypeDescriptor:
    """Register *cls* on the shared registry. See :meth:`DescriptorRegistry.describe`."""
    return _SHARED.describe(cls, fields, record=record)


__all__ = [
    "DescriptorRegistry",
    "FieldDescriptor",
    "TypeDescriptor",
    "describe",
    "get_descriptor_registry",
]
