"""Application masking – ready-made conditions."""
from __future__ import annotations

from typing import Any

from mp_masking.application.masking.conditions.condition import MaskCondition


class AlwaysMaskCondition(MaskCondition):
    """Masks unconditionally."""

    def should_mask(self, field_value: Any, containing: Any) -> bool:
        return True


class MaskOnInput(MaskCondition):
    """Masks when the runtime input is the string ``"MaskMe"`` (any case).

    Typical wiring maps a request header straight onto this input.
    """

    TRIGGER = "maskme"

    def __init__(self, input: str | None = None) -> None:  # noqa: A002
        self._input = input

    def set_input(self, input: Any) -> None:  # noqa: A002
        if isinstance(input, str):
            self._input = input

    def should_mask(self, field_value: Any, containing: Any) -> bool:
        return self._input is not None and self._input.lower() == self.TRIGGER


class MaskPhone(MaskCondition):
    """Masks when the runtime flag is ``"YES"`` or ``"TRUE"`` (any case)."""

    def __init__(self, flag: str | None = None) -> None:
        self._flag = flag

    def set_input(self, input: Any) -> None:  # noqa: A002
        if isinstance(input, str):
            self._flag = input

    def should_mask(self, field_value: Any, containing: Any) -> bool:
        return self._flag is not None and self._flag.upper() in ("YES", "TRUE")


__all__ = ["AlwaysMaskCondition", "MaskOnInput", "MaskPhone"]
