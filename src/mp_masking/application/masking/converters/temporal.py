"""Application masking – TemporalConverter (``date``, ``datetime``, ``time``)."""
from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone
from typing import Any

from mp_masking.application.masking.converters.base import Converter, unwrap_optional

DATE_FORMATS = ("%Y-%m-%d", "%d/%m/%Y", "%m/%d/%Y")
DATETIME_FORMATS = ("%Y-%m-%d %H:%M:%S", "%Y-%m-%dT%H:%M:%S")

# epoch literals up to this many digits are seconds, longer ones milliseconds
_EPOCH_SECONDS_DIGITS = 10


def _strptime(value: str, formats: tuple[str, ...]) -> datetime | None:
    for fmt in formats:
        try:
            return datetime.strptime(value, fmt)
        except ValueError:
            continue
    return None


def parse_date(value: str) -> date | None:
    try:
        return date.fromisoformat(value)
    except ValueError:
        parsed = _strptime(value, DATE_FORMATS)
        return parsed.date() if parsed is not None else None


def parse_datetime(value: str) -> datetime | None:
    """ISO 8601 (``Z`` accepted), two common layouts, or an epoch in s / ms (UTC)."""
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        pass
    parsed = _strptime(value, DATETIME_FORMATS)
    if parsed is not None:
        return parsed
    if value.isdigit():
        epoch = int(value)
        if len(value) <= _EPOCH_SECONDS_DIGITS:
            return datetime.fromtimestamp(epoch, tz=timezone.utc)
        seconds, millis = divmod(epoch, 1000)
        return datetime.fromtimestamp(seconds, tz=timezone.utc) + timedelta(milliseconds=millis)
    return None


def parse_time(value: str) -> time | None:
    try:
        return time.fromisoformat(value)
    except ValueError:
        return None


class TemporalConverter(Converter):
    """Parses date/time literals such as ``"1900-01-01"`` or ``"25/12/2023"``."""

    _PARSERS = (
        (datetime, parse_datetime),
        (date, parse_date),
        (time, parse_time),
    )

    def can_convert(self, target_type: Any) -> bool:
        base, _ = unwrap_optional(target_type)
        return any(base is t for t, _ in self._PARSERS)

    def convert(
        self,
        value: str,
        target_type: Any,
        original_value: Any,
        containing: Any,
        field_name: str,
    ) -> Any | None:
        base, _ = unwrap_optional(target_type)
        for temporal_type, parser in self._PARSERS:
            if base is temporal_type:
                return parser(value.strip())
        return None


__all__ = ["TemporalConverter", "parse_date", "parse_datetime", "parse_time"]
