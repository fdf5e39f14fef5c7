"""Mask directives – the per-field declaration of when and how to mask.

A directive can be attached to a field in three ways::

    @dataclass
    class UserDto:
        name: str = masked(AlwaysMaskCondition, mask_value="")
        email: Annotated[str, mask(MaskOnInput, mask_value="[name]@masked.example")] = ""

    describe(LegacyUser, [FieldDescriptor("phone", str, mask(MaskPhone))])
"""
from __future__ import annotations

import dataclasses
from typing import Any

from mp_masking.kernel.errors import InvalidDirectiveError

DEFAULT_MASK_VALUE = "****"

# key under which ``masked()`` stores the directive in dataclass field metadata
MASK_METADATA_KEY = "mp_masking.directive"


@dataclasses.dataclass(frozen=True)
class MaskDirective:
    """Ordered condition classes (OR semantics) plus the replacement literal.

    ``mask_value=None`` masks to the zero value of the field type.
    """

    conditions: tuple[type, ...]
    mask_value: str | None = DEFAULT_MASK_VALUE

    def __post_init__(self) -> None:
        conditions = tuple(self.conditions)
        if not conditions:
            raise InvalidDirectiveError("A mask directive needs at least one condition")
        for condition in conditions:
            if not isinstance(condition, type):
                raise InvalidDirectiveError(
                    f"Mask conditions must be classes, got {condition!r}",
                    detail={"condition": repr(condition)},
                )
        if self.mask_value is not None and not isinstance(self.mask_value, str):
            raise InvalidDirectiveError(
                f"mask_value must be a string or None, got {type(self.mask_value).__name__}"
            )
        object.__setattr__(self, "conditions", conditions)


def mask(*conditions: type, mask_value: str | None = DEFAULT_MASK_VALUE) -> MaskDirective:
    """Build a directive, typically for use inside ``Annotated[...]``."""
    return MaskDirective(conditions, mask_value)


def masked(
    *conditions: type,
    mask_value: str | None = DEFAULT_MASK_VALUE,
    **field_kwargs: Any,
) -> Any:
    """``dataclasses.field`` carrying a mask directive in its metadata.

    Extra keyword arguments (``default``, ``default_factory``, ``repr``, ...)
    are forwarded to :func:`dataclasses.field`.
    """
    metadata = dict(field_kwargs.pop("metadata", None) or {})
    metadata[MASK_METADATA_KEY] = mask(*conditions, mask_value=mask_value)
    return dataclasses.field(metadata=metadata, **field_kwargs)


__all__ = [
    "DEFAULT_MASK_VALUE",
    "MASK_METADATA_KEY",
    "MaskDirective",
    "mask",
    "masked",
]
