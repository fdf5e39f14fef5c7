"""Application masking – MaskCondition port."""
from __future__ import annotations

import abc
from typing import Any


class MaskCondition(abc.ABC):
    """Port: decide whether one field instance should be masked.

    A fresh instance is normally created for every evaluation. Before
    :meth:`should_mask` runs, the engine hands the instance the runtime input
    registered for its class in the current unit of work (if any) through
    :meth:`set_input`.

    Example::

        class MaskUnlessAdmin(MaskCondition):
            def __init__(self) -> None:
                self._role: str | None = None

            def set_input(self, input: Any) -> None:
                self._role = input

            def should_mask(self, field_value: Any, containing: Any) -> bool:
                return self._role != "admin"
    """

    @abc.abstractmethod
    def should_mask(self, field_value: Any, containing: Any) -> bool: ...

    def set_input(self, input: Any) -> None:  # noqa: A002
        """Accept runtime input for this evaluation. No-op by default."""


__all__ = ["MaskCondition"]
