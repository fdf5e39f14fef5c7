"""Application masking – conditions."""
from mp_masking.application.masking.conditions.builtin import (
    AlwaysMaskCondition,
    MaskOnInput,
    MaskPhone,
)
from mp_masking.application.masking.conditions.condition import MaskCondition
from mp_masking.application.masking.conditions.factory import (
    ConditionResolver,
    MaskConditionFactory,
    get_condition_factory,
)
from mp_masking.application.masking.conditions.inputs import ConditionInputs

__all__ = [
    "AlwaysMaskCondition",
    "ConditionInputs",
    "ConditionResolver",
    "MaskCondition",
    "MaskConditionFactory",
    "MaskOnInput",
    "MaskPhone",
    "get_condition_factory",
]
