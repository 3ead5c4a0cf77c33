"""MongoDB adapter — MongoRecordStore."""

from __future__ import annotations

import contextlib
from collections.abc import AsyncIterator, Iterable, Iterator, Mapping
from typing import Any

from recordkit.kernel.errors import StoreTimeoutError, StoreUnavailableError, ValidationError
from recordkit.store.port import ReadConsistency


def _require_pymongo() -> Any:
    try:
        import pymongo
        return pymongo
    except ImportError as exc:
        raise ImportError("Install 'recordkit[mongodb]' to use the MongoDB adapter") from exc


class MongoRecordStore:
    """StoreClient backed by a **motor** database.

    Each record table is a collection.  A document's ``_id`` is derived from
    the record key: the bare value for single-field keys (``id`` unless
    *key_fields* says otherwise), an embedded document in key-field order for
    composite keys.  Point reads, upserts and deletes all go through
    ``_id``; ``_id`` is stripped from every item handed back to the record
    layer.

    *key_fields* maps a table to its key attribute names and must agree with
    the record type's ``__key_fields__``::

        MongoRecordStore(db, key_fields={"tenant_document": ("tenant_id", "id")})

    Consistency mapping:

    - ``STRONG``: primary read preference, ``majority`` read concern
    - ``EVENTUAL``: ``secondaryPreferred`` read preference, ``local`` read concern

    Secondary-index queries pass the index name to MongoDB as ``hint``, so
    the named index must exist (see :meth:`create_index`).

    Usage::

        client = motor.motor_asyncio.AsyncIOMotorClient(url)
        User.bind(MongoRecordStore(client["app"]))
    """

    name = "mongodb"

    def __init__(
        self,
        database: Any,
        *,
        key_fields: Mapping[str, Iterable[str]] | None = None,
    ) -> None:
        self._db = database
        self._key_fields = {t: tuple(f) for t, f in (key_fields or {}).items()}

    # ------------------------------------------------------------------
    # Index management
    # ------------------------------------------------------------------

    async def create_index(self, table: str, fields: list[str], *, name: str) -> None:
        """Create an ascending compound index usable as ``index_name``.  Idempotent."""
        with self._translate():
            await self._db[table].create_index([(f, 1) for f in fields], name=name)

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
            doc = await self._collection(table, consistency).find_one(
                {"_id": self._doc_id(table, key, exact=True)}
            )
        return self._from_doc(doc) if doc is not None else None

    async def query(
        self,
        table: str,
        key: Mapping[str, Any],
        *,
        index_name: str,
        consistency: ReadConsistency,
    ) -> AsyncIterator[dict[str, Any]]:
        with self._translate():
            cursor = self._collection(table, consistency).find(dict(key), hint=index_name)
            async for doc in cursor:
                yield self._from_doc(doc)

    async def put(self, table: str, item: Mapping[str, Any]) -> dict[str, Any]:
        """Replace (or insert) the document and return the stored version."""
        pymongo = _require_pymongo()
        doc = {"_id": self._doc_id(table, item), **item}
        with self._translate():
            stored = await self._db[table].find_one_and_replace(
                {"_id": doc["_id"]},
                doc,
                upsert=True,
                return_document=pymongo.ReturnDocument.AFTER,
            )
        return self._from_doc(stored if stored is not None else doc)

    async def delete(self, table: str, key: Mapping[str, Any]) -> None:
        with self._translate():
            await self._db[table].delete_one({"_id": self._doc_id(table, key, exact=True)})

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _collection(self, table: str, consistency: ReadConsistency) -> Any:
        pymongo = _require_pymongo()
        from pymongo.read_concern import ReadConcern

        if consistency is ReadConsistency.STRONG:
            return self._db[table].with_options(
                read_preference=pymongo.ReadPreference.PRIMARY,
                read_concern=ReadConcern("majority"),
            )
        return self._db[table].with_options(
            read_preference=pymongo.ReadPreference.SECONDARY_PREFERRED,
            read_concern=ReadConcern("local"),
        )

    @contextlib.contextmanager
    def _translate(self) -> Iterator[None]:
        from pymongo import errors

        try:
            yield
        except (
            errors.ExecutionTimeout,
            errors.NetworkTimeout,
            errors.ServerSelectionTimeoutError,
            errors.WTimeoutError,
        ) as exc:
            raise StoreTimeoutError(self.name, str(exc), cause=exc) from exc
        except errors.PyMongoError as exc:
            raise StoreUnavailableError(self.name, str(exc), cause=exc) from exc

    def _doc_id(self, table: str, key: Mapping[str, Any], *, exact: bool = False) -> Any:
        fields = self._key_fields.get(table, ("id",))
        missing = [f for f in fields if f not in key]
        extra = sorted(set(key) - set(fields)) if exact else []
        if missing or extra:
            raise ValidationError(
                f"Key {sorted(key)} does not match the key fields {list(fields)} "
                f"configured for Mongo collection '{table}'"
            )
        if len(fields) == 1:
            return key[fields[0]]
        return {f: key[f] for f in fields}

    def _from_doc(self, doc: Mapping[str, Any]) -> dict[str, Any]:
        return {k: v for k, v in doc.items() if k != "_id"}


__all__ = ["MongoRecordStore"]
