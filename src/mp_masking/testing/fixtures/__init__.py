"""Testing fixtures – masking engine and scope isolation."""
from mp_masking.testing.fixtures.masking import (
    clean_condition_inputs,
    mask_processor,
    masking_test_scope,
)

__all__ = ["clean_condition_inputs", "mask_processor", "masking_test_scope"]
