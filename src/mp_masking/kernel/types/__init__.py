"""Kernel types."""
from mp_masking.kernel.types.result import Err, Ok, Result, attempt

__all__ = ["Err", "Ok", "Result", "attempt"]
