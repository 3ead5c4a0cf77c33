"""DynamoDB adapter — DynamoRecordStore."""

from __future__ import annotations

import asyncio
import contextlib
import math
from collections.abc import AsyncIterator, Iterator, Mapping
from decimal import Decimal
from functools import reduce
from typing import Any

from recordkit.kernel.errors import SerializationError, StoreTimeoutError, StoreUnavailableError
from recordkit.store.port import ReadConsistency


def _require_boto3() -> Any:
    try:
        import boto3
        return boto3
    except ImportError as exc:
        raise ImportError("Install 'recordkit[dynamodb]' to use the DynamoDB adapter") from exc


def _encode(value: Any) -> Any:
    if isinstance(value, bool):
        return value
    if isinstance(value, float):
        if not math.isfinite(value):
            raise SerializationError(
                f"DynamoDB cannot store non-finite number {value!r}", payload_type="float"
            )
        return Decimal(str(value))
    if isinstance(value, Mapping):
        return {k: _encode(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_encode(v) for v in value]
    if isinstance(value, (set, frozenset)):
        return {_encode(v) for v in value}
    return value


def encode_item(item: Mapping[str, Any]) -> dict[str, Any]:
    """Encode *item* for boto3: floats become ``Decimal``, tuples become lists."""
    return _encode(item)


class DynamoRecordStore:
    """StoreClient backed by a boto3 DynamoDB *resource*.

    boto3 is synchronous, so every call runs in :func:`asyncio.to_thread`.
    Numbers come back as :class:`~decimal.Decimal`; the record layer's
    normalizer turns them back into ``int`` / ``float``.

    ``STRONG`` maps to ``ConsistentRead=True``.  Global secondary indexes
    reject consistent reads; DynamoDB's ``ValidationException`` surfaces as
    :class:`~recordkit.kernel.errors.StoreUnavailableError`.

    Usage::

        resource = boto3.resource("dynamodb", region_name="eu-west-1")
        User.bind(DynamoRecordStore(resource))
    """

    name = "dynamodb"

    def __init__(self, resource: Any, *, table_prefix: str = "") -> None:
        self._resource = resource
        self._table_prefix = table_prefix

    @classmethod
    def connect(
        cls,
        *,
        region_name: str | None = None,
        endpoint_url: str | None = None,
        table_prefix: str = "",
    ) -> "DynamoRecordStore":
        """Build a store over a fresh ``boto3.resource("dynamodb")``."""
        boto3 = _require_boto3()
        resource = boto3.resource("dynamodb", region_name=region_name, endpoint_url=endpoint_url)
        return cls(resource, table_prefix=table_prefix)

    # ------------------------------------------------------------------
    # StoreClient interface
    # ------------------------------------------------------------------

    async def get(
        self,
        table: str,
        key: Mapping[str, Any],
        *,
        consistency: ReadConsistency,
    ) -> dict[str, Any] | None:
        with self._translate():
            response = await asyncio.to_thread(
                self._table(table).get_item,
                Key=encode_item(key),
                ConsistentRead=consistency is ReadConsistency.STRONG,
            )
        return response.get("Item")

    async def query(
        self,
        table: str,
        key: Mapping[str, Any],
        *,
        index_name: str,
        consistency: ReadConsistency,
    ) -> AsyncIterator[dict[str, Any]]:
        from boto3.dynamodb.conditions import Key

        encoded = encode_item(key)
        condition = reduce(lambda acc, c: acc & c, (Key(k).eq(v) for k, v in encoded.items()))
        kwargs: dict[str, Any] = {
            "IndexName": index_name,
            "KeyConditionExpression": condition,
            "ConsistentRead": consistency is ReadConsistency.STRONG,
        }
        dynamo_table = self._table(table)
        while True:
            with self._translate():
                response = await asyncio.to_thread(dynamo_table.query, **kwargs)
            for item in response.get("Items", []):
                yield item
            last_key = response.get("LastEvaluatedKey")
            if not last_key:
                break
            kwargs["ExclusiveStartKey"] = last_key

    async def put(self, table: str, item: Mapping[str, Any]) -> dict[str, Any]:
        """Write the whole item; returns it in its stored (Decimal) encoding."""
        encoded = encode_item(item)
        with self._translate():
            await asyncio.to_thread(self._table(table).put_item, Item=encoded)
        return encoded

    async def delete(self, table: str, key: Mapping[str, Any]) -> None:
        with self._translate():
            await asyncio.to_thread(self._table(table).delete_item, Key=encode_item(key))

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _table(self, table: str) -> Any:
        return self._resource.Table(f"{self._table_prefix}{table}")

    @contextlib.contextmanager
    def _translate(self) -> Iterator[None]:
        from botocore.exceptions import (
            BotoCoreError,
            ClientError,
            ConnectTimeoutError,
            ReadTimeoutError,
        )

        try:
            yield
        except (ConnectTimeoutError, ReadTimeoutError) as exc:
            raise StoreTimeoutError(self.name, str(exc), cause=exc) from exc
        except ClientError as exc:
            error = exc.response.get("Error", {})
            raise StoreUnavailableError(
                self.name,
                error.get("Message") or str(exc),
                detail={"aws_code": error.get("Code")},
                cause=exc,
            ) from exc
        except BotoCoreError as exc:
            raise StoreUnavailableError(self.name, str(exc), cause=exc) from exc


__all__ = ["DynamoRecordStore", "encode_item"]
