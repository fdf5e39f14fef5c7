"""Configuration errors – deployment defects that are always raised to the caller."""

from __future__ import annotations

from typing import Any

from mp_masking.kernel.errors.base import MaskingError


class MaskConfigurationError(MaskingError):
    """Structurally invalid masking configuration."""

    default_code = "mask_configuration_error"


class ConditionCreationError(MaskConfigurationError):
    """A condition class could neither be resolved nor constructed."""

    default_code = "condition_creation_failed"

    def __init__(self, condition_cls: type, **kwargs: Any) -> None:
        name = getattr(condition_cls, "__qualname__", repr(condition_cls))
        super().__init__(f"Failed to create condition: {name}", **kwargs)
        self.condition_cls = condition_cls


class ConverterCreationError(MaskConfigurationError):
    """A converter class registered by type could not be instantiated."""

    default_code = "converter_creation_failed"

    def __init__(self, converter_cls: type, **kwargs: Any) -> None:
        name = getattr(converter_cls, "__qualname__", repr(converter_cls))
        super().__init__(f"Failed to create converter: {name}", **kwargs)
        self.converter_cls = converter_cls


class InvalidDirectiveError(MaskConfigurationError):
    """A mask directive was declared with an unusable shape."""

    default_code = "invalid_mask_directive"


class ScopeError(MaskConfigurationError):
    """A scoped operation was attempted with no active scope."""

    default_code = "scope_error"

    def __init__(self, scope: str, message: str | None = None, **kwargs: Any) -> None:
        super().__init__(message or f"No active {scope} scope", **kwargs)
        self.scope = scope


__all__ = [
    "ConditionCreationError",
    "ConverterCreationError",
    "InvalidDirectiveError",
    "MaskConfigurationError",
    "ScopeError",
]
