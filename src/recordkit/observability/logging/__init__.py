"""Observability – structured logging helpers (structlog)."""
from recordkit.observability.logging.filters import DEFAULT_SENSITIVE_FIELDS, SensitiveFieldsFilter
from recordkit.observability.logging.factory import JsonLoggerFactory
from recordkit.observability.logging.processors import get_logger

__all__ = [
    "DEFAULT_SENSITIVE_FIELDS",
    "JsonLoggerFactory",
    "SensitiveFieldsFilter",
    "get_logger",
]
