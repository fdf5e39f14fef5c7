"""Observability – logging for the masking engine."""
