"""Observability – structured logging helpers."""
from mp_masking.observability.logging.factory import JsonLoggerFactory
from mp_masking.observability.logging.processors import MaskingProcessor, get_logger

__all__ = ["JsonLoggerFactory", "MaskingProcessor", "get_logger"]
