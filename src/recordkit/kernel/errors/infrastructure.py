"""Infrastructure errors — store I/O failures."""

from __future__ import annotations

from typing import Any

from recordkit.kernel.errors.base import BaseError


class InfrastructureError(BaseError):
    """Infrastructure / I/O failure that is not a data rule violation."""

    default_code = "infrastructure_error"


class StoreUnavailableError(InfrastructureError):
    """A store call failed: connectivity, throttling or a rejected request.

    Callers usually treat this as "retry later"; recordkit itself never retries.
    """

    default_code = "store_unavailable"
    retryable = True

    def __init__(
        self,
        store: str,
        message: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message or f"Store '{store}' is unavailable", **kwargs)
        self.store = store


class StoreTimeoutError(StoreUnavailableError):
    """A store call exceeded its deadline."""

    default_code = "store_timeout"

    def __init__(
        self,
        store: str,
        message: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(store, message or f"Store '{store}' timed out", **kwargs)


class SerializationError(InfrastructureError):
    """A record value cannot be encoded for, or decoded from, the store."""

    default_code = "serialization_error"

    def __init__(
        self,
        message: str,
        *,
        payload_type: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.payload_type = payload_type


__all__ = [
    "InfrastructureError",
    "SerializationError",
    "StoreTimeoutError",
    "StoreUnavailableError",
]
