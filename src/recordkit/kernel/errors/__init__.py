"""Kernel error hierarchy — public re-export surface.

Hierarchy::

    BaseError
    ├── DomainError              (domain.py)
    │   ├── ValidationError
    │   └── NotFoundError
    ├── InfrastructureError      (infrastructure.py)
    │   ├── StoreUnavailableError
    │   │   └── StoreTimeoutError
    │   └── SerializationError
    └── ConfigError              (config.py)
        ├── MissingRequiredSettingError
        └── InvalidSettingValueError
"""

from recordkit.kernel.errors.base import BaseError
from recordkit.kernel.errors.config import (
    ConfigError,
    InvalidSettingValueError,
    MissingRequiredSettingError,
)
from recordkit.kernel.errors.domain import DomainError, NotFoundError, ValidationError
from recordkit.kernel.errors.infrastructure import (
    InfrastructureError,
    SerializationError,
    StoreTimeoutError,
    StoreUnavailableError,
)

__all__ = [
    "BaseError",
    "ConfigError",
    "DomainError",
    "InfrastructureError",
    "InvalidSettingValueError",
    "MissingRequiredSettingError",
    "NotFoundError",
    "SerializationError",
    "StoreTimeoutError",
    "StoreUnavailableError",
    "ValidationError",
]
