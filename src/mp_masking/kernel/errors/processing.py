"""Processing errors – failures while building the masked copy of one value."""

from __future__ import annotations

from typing import Any

from mp_masking.kernel.errors.base import MaskingError


class MaskProcessingError(MaskingError):
    """The masked copy of a value could not be built.

    Only raised when fail-open is disabled; otherwise the engine logs the
    failure and hands back the original subtree.
    """

    default_code = "mask_processing_failed"

    def __init__(
        self,
        value_type: type,
        message: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(
            message or f"Failed to mask value of type {value_type.__qualname__}",
            **kwargs,
        )
        self.value_type = value_type


__all__ = ["MaskProcessingError"]
