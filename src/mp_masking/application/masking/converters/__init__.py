"""Application masking – converters."""
from mp_masking.application.masking.converters.base import (
    Converter,
    converter_priority,
    unwrap_optional,
    zero_value,
)
from mp_masking.application.masking.converters.fallback import FallbackConverter
from mp_masking.application.masking.converters.number import (
    ROUNDING_STEP,
    NumberConverter,
    round_to_nearest,
)
from mp_masking.application.masking.converters.primitive import PrimitiveConverter
from mp_masking.application.masking.converters.registry import (
    ConverterRegistry,
    ConverterScope,
    RequestScope,
    default_converters,
    get_converter_registry,
)
from mp_masking.application.masking.converters.special import SpecialTypeConverter
from mp_masking.application.masking.converters.temporal import (
    TemporalConverter,
    parse_date,
    parse_datetime,
    parse_time,
)

__all__ = [
    "ROUNDING_STEP",
    "Converter",
    "ConverterRegistry",
    "ConverterScope",
    "FallbackConverter",
    "NumberConverter",
    "PrimitiveConverter",
    "RequestScope",
    "SpecialTypeConverter",
    "TemporalConverter",
    "converter_priority",
    "default_converters",
    "get_converter_registry",
    "parse_date",
    "parse_datetime",
    "parse_time",
    "round_to_nearest",
    "unwrap_optional",
    "zero_value",
]
