"""Application masking – PrimitiveConverter (``str`` and ``bool``)."""
from __future__ import annotations

from typing import Any

from mp_masking.application.masking.converters.base import Converter, unwrap_optional, zero_value


class PrimitiveConverter(Converter):
    """Converts literals to ``str`` and ``bool``.

    String fields get two field-name specific treatments:

    * ``email``: when the original holds a single ``@`` and differs from the
      literal, only the domain is replaced: ``local@<literal>.domain``.
    * ``name``: :attr:`NAME_MARKER` is appended, so a masked name stays
      recognisable as masked. Masking an already masked name appends it again.

    Booleans accept ``true``/``1`` and ``false``/``0``; anything else zeroes.
    """

    SUPPORTED_TYPES: tuple[type, ...] = (str, bool)
    NAME_MARKER = "[][]"
    EMAIL_DOMAIN_SUFFIX = ".domain"

    def can_convert(self, target_type: Any) -> bool:
        base, _ = unwrap_optional(target_type)
        return any(base is t for t in self.SUPPORTED_TYPES)

    def convert(
        self,
        value: str,
        target_type: Any,
        original_value: Any,
        containing: Any,
        field_name: str,
    ) -> Any | None:
        base, _ = unwrap_optional(target_type)
        if base is str:
            return self._convert_string(value, original_value, field_name)
        if base is bool:
            return self._convert_bool(value, target_type)
        return None

    def _convert_string(self, value: str, original_value: Any, field_name: str) -> str:
        if (
            field_name == "email"
            and isinstance(original_value, str)
            and "@" in original_value
            and value != original_value
        ):
            parts = original_value.split("@")
            if len(parts) == 2:
                return f"{parts[0]}@{value}{self.EMAIL_DOMAIN_SUFFIX}"
        if field_name == "name":
            return value + self.NAME_MARKER
        return value

    @staticmethod
    def _convert_bool(value: str, target_type: Any) -> bool | None:
        lowered = value.lower()
        if lowered == "true" or value == "1":
            return True
        if lowered == "false" or value == "0":
            return False
        return zero_value(target_type)


__all__ = ["PrimitiveConverter"]
