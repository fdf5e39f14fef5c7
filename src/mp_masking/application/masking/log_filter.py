from __future__ import annotations

import logging
from typing import Any

from mp_masking.application.masking.processor import MaskProcessor

__all__ = ["MaskingLogFilter"]


class MaskingLogFilter(logging.Filter):
    """Runs maskable log record ``msg`` and ``args`` through a :class:`MaskProcessor`."""

    def __init__(self, processor: MaskProcessor | None = None, name: str = "") -> None:
        super().__init__(name)
        self._processor = processor or MaskProcessor()

    def filter(self, record: logging.LogRecord) -> bool:  # noqa: A003
        record.msg = self._mask(record.msg)
        if isinstance(record.args, dict):
            record.args = {k: self._mask(v) for k, v in record.args.items()}  # type: ignore[assignment]
        elif isinstance(record.args, (list, tuple)):
            record.args = tuple(self._mask(arg) for arg in record.args)
        return True

    def _mask(self, value: Any) -> Any:
        if self._processor.is_maskable(value):
            return self._processor.process(value)
        return value
