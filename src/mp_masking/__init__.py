"""
mp_masking – runtime masking of sensitive fields in structured values.

Import path convention::

    from mp_masking.application.masking import MaskProcessor, masked, describe
    from mp_masking.application.masking.conditions import MaskCondition
    from mp_masking.application.masking.converters import Converter, ConverterScope
    from mp_masking.kernel.errors import MaskConfigurationError
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
