"""Observability – structured logging."""
from recordkit.observability.logging import JsonLoggerFactory, SensitiveFieldsFilter, get_logger

__all__ = ["JsonLoggerFactory", "SensitiveFieldsFilter", "get_logger"]
