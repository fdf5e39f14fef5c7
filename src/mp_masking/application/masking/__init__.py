"""Application masking – runtime field masking of structured values."""
from mp_masking.application.masking.conditions import (
    AlwaysMaskCondition,
    ConditionInputs,
    ConditionResolver,
    MaskCondition,
    MaskConditionFactory,
    MaskOnInput,
    MaskPhone,
    get_condition_factory,
)
from mp_masking.application.masking.converters import (
    Converter,
    ConverterRegistry,
    ConverterScope,
    get_converter_registry,
)
from mp_masking.application.masking.descriptors import (
    DescriptorRegistry,
    FieldDescriptor,
    TypeDescriptor,
    describe,
    get_descriptor_registry,
)
from mp_masking.application.masking.directive import (
    DEFAULT_MASK_VALUE,
    MaskDirective,
    mask,
    masked,
)
from mp_masking.application.masking.log_filter import MaskingLogFilter
from mp_masking.application.masking.placeholders import PlaceholderResolver
from mp_masking.application.masking.processor import MaskProcessor

__all__ = [
    "DEFAULT_MASK_VALUE",
    "AlwaysMaskCondition",
    "ConditionInputs",
    "ConditionResolver",
    "Converter",
    "ConverterRegistry",
    "ConverterScope",
    "DescriptorRegistry",
    "FieldDescriptor",
    "MaskCondition",
    "MaskConditionFactory",
    "MaskDirective",
    "MaskOnInput",
    "MaskPhone",
    "MaskProcessor",
    "MaskingLogFilter",
    "PlaceholderResolver",
    "TypeDescriptor",
    "describe",
    "get_condition_factory",
    "get_converter_registry",
    "get_descriptor_registry",
    "mask",
    "masked",
]
