"""Config settings – Settings base class and MaskingSettings."""
from __future__ import annotations

import dataclasses
from typing import ClassVar


@dataclasses.dataclass(frozen=True)
class Settings:
    """Base class for 12-factor settings read from ``<PREFIX>_<FIELD>`` variables."""

    _prefix: ClassVar[str] = ""

    def __post_init__(self) -> None:
        self._validate()

    def _validate(self) -> None:
        """Override to add cross-field validation."""


@dataclasses.dataclass(frozen=True)
class MaskingSettings(Settings):
    """Runtime policy of the masking engine.

    ``fail_open``
        When a masked copy cannot be built, hand back the original subtree
        (``True``) or raise :class:`~mp_masking.kernel.errors.MaskProcessingError`.
    ``resolve_placeholders``
        Expand ``[fieldName]`` tokens in mask literals before conversion.
    ``log_fail_open``
        Emit a ``masking.fail_open`` warning whenever original data is returned
        in place of a masked copy.
    """

    _prefix: ClassVar[str] = "MASKING"

    fail_open: bool = True
    resolve_placeholders: bool = True
    log_fail_open: bool = True


__all__ = ["MaskingSettings", "Settings"]
