"""Kernel – framework-agnostic building blocks (errors, time)."""

from recordkit.kernel.errors import (
    BaseError,
    ConfigError,
    DomainError,
    InfrastructureError,
    NotFoundError,
    SerializationError,
    StoreTimeoutError,
    StoreUnavailableError,
    ValidationError,
)

__all__ = [
    "BaseError",
    "ConfigError",
    "DomainError",
    "InfrastructureError",
    "NotFoundError",
    "SerializationError",
    "StoreTimeoutError",
    "StoreUnavailableError",
    "ValidationError",
]
