"""Store port – the contract a backing key-value / document store must offer."""
from __future__ import annotations

from collections.abc import AsyncIterator, Mapping
from enum import Enum
from typing import Any, Protocol, runtime_checkable


class ReadConsistency(str, Enum):
    """Read consistency requested from the store."""

    STRONG = "strong"
    EVENTUAL = "eventual"

    @classmethod
    def select(cls, strong: bool | None) -> "ReadConsistency":
        return cls.STRONG if strong else cls.EVENTUAL


@runtime_checkable
class StoreClient(Protocol):
    """Port: item-level access to a key-value or document store.

    ``table`` names the table / collection, ``key`` is a mapping of key
    attribute names to values and items are plain ``dict`` objects.
    Implementations translate driver failures into
    :class:`~recordkit.kernel.errors.StoreUnavailableError` (or its
    :class:`~recordkit.kernel.errors.StoreTimeoutError` subclass).

    Implementations live in ``adapters/mongodb``, ``adapters/dynamodb`` and
    ``testing/fakes``.
    """

    name: str

    async def get(
        self,
        table: str,
        key: Mapping[str, Any],
        *,
        consistency: ReadConsistency,
    ) -> dict[str, Any] | None:
        """Point read; ``None`` when no item has *key*."""
        ...

    def query(
        self,
        table: str,
        key: Mapping[str, Any],
        *,
        index_name: str,
        consistency: ReadConsistency,
    ) -> AsyncIterator[dict[str, Any]]:
        """Lazily yield every item of *index_name* matching *key*."""
        ...

    async def put(self, table: str, item: Mapping[str, Any]) -> dict[str, Any]:
        """Create-or-replace the whole item and return what the store now holds."""
        ...

    async def delete(self, table: str, key: Mapping[str, Any]) -> None:
        """Physically remove the item with *key* (no-op when absent)."""
        ...


__all__ = ["ReadConsistency", "StoreClient"]
