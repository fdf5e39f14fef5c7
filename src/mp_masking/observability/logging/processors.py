"""Observability – structlog processors and get_logger helper.

``get_logger(name)`` returns the bound structlog logger every masking module
logs through. ``MaskingProcessor`` masks maskable values inside structlog
event dicts so DTOs handed to a log call never reach a renderer unmasked.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Any

import structlog

if TYPE_CHECKING:
    from mp_masking.application.masking.processor import MaskProcessor


class MaskingProcessor:
    """structlog processor that runs event values through a :class:`MaskProcessor`.

    Only values the processor considers maskable (described shapes with at
    least one mask directive, or containers holding them) are replaced; the
    ``event`` key and plain values are left alone.

    Usage::

        import structlog
        from mp_masking.observability.logging import MaskingProcessor

        structlog.configure(processors=[MaskingProcessor(), ...])
    """

    def __init__(self, processor: "MaskProcessor | None" = None) -> None:
        self._processor = processor

    @property
    def processor(self) -> "MaskProcessor":
        if self._processor is None:
            from mp_masking.application.masking.processor import MaskProcessor

            self._processor = MaskProcessor()
        return self._processor

    def __call__(
        self,
        logger: Any,           # noqa: ARG002
        method_name: str,      # noqa: ARG002
        event_dict: dict[str, Any],
    ) -> dict[str, Any]:
        processor = self.processor
        for key, value in event_dict.items():
            if key != "event" and processor.is_maskable(value):
                event_dict[key] = processor.process(value)
        return event_dict


def get_logger(name: str | None = None, **initial_values: Any) -> Any:
    """Return a bound structlog logger.

    Parameters
    ----------
    name:
        Logger name (typically ``__name__`` of the calling module).
    **initial_values:
        Key-value pairs to bind on the returned logger.
    """
    logger = structlog.get_logger(name)
    if initial_values:
        logger = logger.bind(**initial_values)
    return logger


__all__ = ["MaskingProcessor", "get_logger"]
