"""Placeholder resolution for mask literals.

``"[name]@masked.example"`` on a value whose ``name`` is ``"John"`` becomes
``"John@masked.example"``. Placeholders that do not name a field, or name a
field holding ``None``, stay in the literal verbatim.
"""
from __future__ import annotations

import re
from typing import Any

from mp_masking.application.masking.descriptors import DescriptorRegistry, get_descriptor_registry

PLACEHOLDER_PATTERN = re.compile(r"\[([^\]]+)\]")


class PlaceholderResolver:
    """Expands ``[fieldName]`` tokens against the containing value."""

    def __init__(self, descriptors: DescriptorRegistry | None = None) -> None:
        self._descriptors = descriptors or get_descriptor_registry()

    @staticmethod
    def has_placeholders(literal: str | None) -> bool:
        return literal is not None and PLACEHOLDER_PATTERN.search(literal) is not None

    def resolve(self, literal: str | None, containing: Any) -> str | None:
        if literal is None or containing is None:
            return literal

        def _substitute(match: re.Match[str]) -> str:
            value = self._descriptors.read_field(containing, match.group(1))
            return match.group(0) if value is None else str(value)

        return PLACEHOLDER_PATTERN.sub(_substitute, literal)


__all__ = ["PLACEHOLDER_PATTERN", "PlaceholderResolver"]
