"""Kernel error hierarchy – public re-export surface.

Hierarchy::

    MaskingError
    ├── MaskConfigurationError   (configuration.py)
    │   ├── ConditionCreationError
    │   ├── ConverterCreationError
    │   ├── InvalidDirectiveError
    │   └── ScopeError
    └── MaskProcessingError      (processing.py)
"""

from mp_masking.kernel.errors.base import MaskingError
from mp_masking.kernel.errors.configuration import (
    ConditionCreationError,
    ConverterCreationError,
    InvalidDirectiveError,
    MaskConfigurationError,
    ScopeError,
)
from mp_masking.kernel.errors.processing import MaskProcessingError

__all__ = [
    "ConditionCreationError",
    "ConverterCreationError",
    "InvalidDirectiveError",
    "MaskConfigurationError",
    "MaskProcessingError",
    "MaskingError",
    "ScopeError",
]
