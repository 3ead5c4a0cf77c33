"""Config – StoreSettings, the store factory and logging setup."""
from __future__ import annotations

import dataclasses
import logging
from typing import ClassVar, Iterable, Mapping

from recordkit.config.settings.base import Settings
from recordkit.config.validation import InvalidSettingValueError, MissingRequiredSettingError
from recordkit.observability.logging import JsonLoggerFactory
from recordkit.store.port import StoreClient

BACKENDS = ("memory", "mongodb", "dynamodb")


@dataclasses.dataclass
class StoreSettings(Settings):
    """Which store recordkit talks to, read from ``RECORDKIT_*`` variables.

    ``mongodb`` needs ``mongodb_url`` and ``mongodb_database``; ``dynamodb``
    takes an optional region, endpoint (DynamoDB Local, LocalStack) and
    table-name prefix.  ``log_level`` is applied by :func:`configure_logging`.
    """

    _prefix: ClassVar[str] = "RECORDKIT"

    backend: str = "memory"
    mongodb_url: str | None = None
    mongodb_database: str | None = None
    dynamodb_region: str | None = None
    dynamodb_endpoint_url: str | None = None
    dynamodb_table_prefix: str = ""
    log_level: str = "INFO"

    def _validate(self) -> None:
        self.backend = self.backend.lower()
        if self.backend not in BACKENDS:
            raise InvalidSettingValueError(
                "backend", self.backend, f"expected one of {', '.join(BACKENDS)}"
            )
        self.log_level = self.log_level.upper()
        if self.log_level not in logging.getLevelNamesMapping():
            raise InvalidSettingValueError("log_level", self.log_level, "unknown logging level")
        if self.backend == "mongodb":
            for name in ("mongodb_url", "mongodb_database"):
                if not getattr(self, name):
                    raise MissingRequiredSettingError(self.env_key(name))


def configure_logging(settings: StoreSettings) -> None:
    """Install recordkit's JSON logging at ``settings.log_level``."""
    JsonLoggerFactory.configure(level=settings.log_level)


def create_store(
    settings: StoreSettings,
    *,
    key_fields: Mapping[str, Iterable[str]] | None = None,
) -> StoreClient:
    """Build the StoreClient selected by *settings.backend*.

    *key_fields* maps table names to their key attributes for tables whose
    key is not the single ``id`` field.  DynamoDB passes keys through to the
    table as given and ignores it.
    """
    if settings.backend == "mongodb":
        import motor.motor_asyncio as motor_async

        from recordkit.adapters.mongodb import MongoRecordStore

        client = motor_async.AsyncIOMotorClient(settings.mongodb_url)
        return MongoRecordStore(client[settings.mongodb_database], key_fields=key_fields)
    if settings.backend == "dynamodb":
        from recordkit.adapters.dynamodb import DynamoRecordStore

        return DynamoRecordStore.connect(
            region_name=settings.dynamodb_region,
            endpoint_url=settings.dynamodb_endpoint_url,
            table_prefix=settings.dynamodb_table_prefix,
        )
    from recordkit.testing.fakes import InMemoryRecordStore

    return InMemoryRecordStore(key_fields=key_fields)


__all__ = ["BACKENDS", "StoreSettings", "configure_logging", "create_store"]
