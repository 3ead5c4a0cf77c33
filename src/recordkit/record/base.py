"""RecordBase — create / read / update / soft-delete / hard-delete for stored entities."""

from __future__ import annotations

import contextlib
import dataclasses
import re
from collections.abc import Iterator, Mapping
from typing import Any, ClassVar, TypeVar

from recordkit.kernel.errors import (
    BaseError,
    ConfigError,
    NotFoundError,
    StoreTimeoutError,
    StoreUnavailableError,
    ValidationError,
)
from recordkit.kernel.time import Clock, SystemClock
from recordkit.observability.logging import get_logger
from recordkit.record.partial import clone_partial, overlay_values, unknown_attributes
from recordkit.store.normalizer import Normalizer, unwrap_numbers
from recordkit.store.port import ReadConsistency, StoreClient

TRecord = TypeVar("TRecord", bound="RecordBase")

logger = get_logger(__name__)

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


@contextlib.contextmanager
def _store_errors(store: StoreClient, operation: str, log: Any) -> Iterator[None]:
    """Surface every store failure as a recordkit error, logged once."""
    store_name = getattr(store, "name", type(store).__name__)
    try:
        yield
    except BaseError as exc:
        log.error("record.store_failed", operation=operation, **exc.log_fields())
        raise
    except Exception as exc:
        error_type = StoreTimeoutError if isinstance(exc, TimeoutError) else StoreUnavailableError
        error = error_type(
            store_name, f"Store '{store_name}' failed during {operation}: {exc!r}", cause=exc
        )
        log.error("record.store_failed", operation=operation, **error.log_fields())
        raise error from exc


@dataclasses.dataclass(kw_only=True)
class RecordBase:
    """Abstract supertype for records persisted in a key-value / document store.

    Concrete entities are kw-only dataclasses deriving from this class.
    Fields with a default may be left out of a partial attribute bag; fields
    without one are required by :meth:`from_partial` but never by a key::

        @dataclasses.dataclass(kw_only=True)
        class User(RecordBase):
            __table__ = "users"

            email: str = ""
            roles: list[str] = dataclasses.field(default_factory=list)

        User.bind(store)
        user = User.from_partial({"id": "u-1", "email": "a@example.com"})
        await user.save()
        again = await User.get({"id": "u-1"}, strong_consistent=True)

    Class-level settings:

    * ``__table__``: table / collection name (snake_case class name when unset).
    * ``__key_fields__``: field names forming the primary key.

    The store, clock and value normalizer are installed with :meth:`bind`
    and inherited by subclasses.
    """

    __table__: ClassVar[str | None] = None
    __key_fields__: ClassVar[tuple[str, ...]] = ("id",)

    _store: ClassVar[StoreClient | None] = None
    _clock: ClassVar[Clock] = SystemClock()
    _normalizer: ClassVar[Normalizer] = staticmethod(unwrap_numbers)  # type: ignore[assignment]

    id: str = ""
    created_at: int = 0
    updated_at: int = 0
    deleted_at: int = 0
    deleted_reason: str | None = None

    # ------------------------------------------------------------------
    # Class configuration
    # ------------------------------------------------------------------

    @classmethod
    def bind(
        cls,
        store: StoreClient,
        *,
        clock: Clock | None = None,
        normalizer: Normalizer | None = None,
    ) -> None:
        """Install *store* (and optionally *clock* / *normalizer*) on this class."""
        cls._store = store
        if clock is not None:
            cls._clock = clock
        if normalizer is not None:
            cls._normalizer = staticmethod(normalizer)  # type: ignore[assignment]

    @classmethod
    def table_name(cls) -> str:
        if cls.__table__:
            return cls.__table__
        return _CAMEL_BOUNDARY.sub("_", cls.__name__).lower()

    @classmethod
    def _require_store(cls) -> StoreClient:
        if cls._store is None:
            raise ConfigError(
                f"{cls.__name__} has no store bound; call {cls.__name__}.bind(store) first"
            )
        return cls._store

    @classmethod
    def _log(cls, **values: Any) -> Any:
        return logger.bind(record_type=cls.__name__, table=cls.table_name(), **values)

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def from_partial(cls: type[TRecord], partial: Mapping[str, Any]) -> TRecord:
        """Build a new instance of this concrete type from a partial attribute bag.

        The bag is validated against the declared fields and deep-copied, so
        the result and *partial* can be mutated independently.  No store
        round trip.
        """
        if cls is RecordBase:
            raise TypeError("RecordBase is abstract; call from_partial on a concrete record type")
        return cls(**clone_partial(cls, partial))

    @property
    def is_deleted(self) -> bool:
        return bool(self.deleted_at)

    def key(self) -> dict[str, Any]:
        """Primary-key attributes of this record."""
        return {name: getattr(self, name) for name in self.__key_fields__}

    def to_item(self) -> dict[str, Any]:
        """Deep-copied plain ``dict`` of every field, as written to the store."""
        return dataclasses.asdict(self)

    def _require_identity(self, operation: str) -> dict[str, Any]:
        key = self.key()
        unset = [name for name, value in key.items() if value in (None, "")]
        if unset:
            raise ValidationError(
                f"Cannot {operation} {type(self).__name__} without {', '.join(unset)}",
                errors=[{"field": name, "msg": "identity field not set"} for name in unset],
            )
        return key

    @classmethod
    def _identity(cls, key: Mapping[str, Any]) -> dict[str, Any]:
        """Deep-copied primary-key attributes of *key*, in ``__key_fields__`` order.

        Only the key fields are validated, so record types with required
        non-key fields can still be fetched and deleted by key.
        """
        values = clone_partial(
            cls, {n: key[n] for n in cls.__key_fields__ if n in key}, require_all=False
        )
        return {name: values.get(name) for name in cls.__key_fields__}

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    @classmethod
    def _check_key(cls, key: Mapping[str, Any], index_name: str | None) -> None:
        if not isinstance(key, Mapping) or not key:
            raise ValidationError(f"{cls.__name__}.get requires key attributes")
        unknown = unknown_attributes(cls, key)
        if unknown:
            raise ValidationError(
                f"Unrecognized key attributes for {cls.__name__}: {', '.join(unknown)}",
                errors=[{"field": k, "msg": "unrecognized field"} for k in unknown],
            )
        if index_name is None:
            missing = [name for name in cls.__key_fields__ if key.get(name) in (None, "")]
            if missing:
                raise ValidationError(
                    f"{cls.__name__}.get needs primary key fields: {', '.join(missing)}",
                    errors=[{"field": k, "msg": "key field required"} for k in missing],
                )

    @classmethod
    async def get(
        cls: type[TRecord],
        key: Mapping[str, Any],
        index_name: str | None = None,
        strong_consistent: bool = False,
    ) -> TRecord:
        """Fetch one record by primary key, or through the secondary index *index_name*.

        On the index path every matching item is read and the **last** one
        wins; callers expecting several matches must query the store directly.

        Raises
        ------
        ValidationError
            *key* is empty, names unknown fields, or (primary path) lacks a key field.
        NotFoundError
            No item matches.
        StoreUnavailableError
            The store call failed (``StoreTimeoutError`` when it timed out).
        """
        cls._check_key(key, index_name)
        store = cls._require_store()
        table = cls.table_name()
        consistency = ReadConsistency.select(strong_consistent)
        log = cls._log(key=dict(key), index=index_name, consistency=consistency.value)

        partial: dict[str, Any] | None = None
        if index_name is None:
            identity = cls._identity(key)
            with _store_errors(store, "get", log):
                item = await store.get(table, identity, consistency=consistency)
            if item is not None:
                partial = cls._normalizer(item)
        else:
            matches = 0
            with _store_errors(store, "query", log):
                items = store.query(
                    table, dict(key), index_name=index_name, consistency=consistency
                )
            while True:
                with _store_errors(store, "query", log):
                    try:
                        item = await anext(items)
                    except StopAsyncIteration:
                        break
                matches += 1
                partial = cls._normalizer(item)
            if matches > 1:
                log.warning("record.index_multiple_matches", matches=matches)

        if partial is None:
            raise NotFoundError(cls.__name__, dict(key))

        ignored = unknown_attributes(cls, partial)
        if ignored:
            log.debug("record.unknown_attributes_ignored", attributes=ignored)
        record = cls.from_partial(overlay_values(cls, partial))
        log.debug("record.fetched", id=record.id)
        return record

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def _stamps(self, now: int) -> dict[str, int]:
        # strictly increasing per instance, even when the clock has not moved
        updated_at = max(now, self.updated_at + 1)
        return {"updated_at": updated_at, "created_at": self.created_at or updated_at}

    async def _persist(self, operation: str, now: int, **changes: Any) -> None:
        """Write the instance with *changes* and fresh timestamps applied.

        The instance only takes the new values once the store accepted the
        write; a failed put leaves it exactly as it was.
        """
        key = self._require_identity(operation)
        store = self._require_store()
        log = self._log(key=key)

        applied = {**changes, **self._stamps(now)}
        with _store_errors(store, "put", log):
            saved = await store.put(self.table_name(), {**self.to_item(), **applied})

        for name, value in applied.items():
            setattr(self, name, value)
        for name, value in overlay_values(type(self), self._normalizer(saved)).items():
            setattr(self, name, value)
        log.debug("record.saved", updated_at=self.updated_at)

    async def save(self: TRecord) -> TRecord:
        """Upsert the full item and overlay what the store returned onto ``self``.

        Last writer wins; there is no version check.
        """
        await self._persist("save", self._clock.millis())
        return self

    async def soft_delete(self: TRecord, reason: str | None = None) -> TRecord:
        """Mark as deleted (``deleted_at`` / ``deleted_reason``) and save; the item stays readable."""
        now = self._clock.millis()
        await self._persist("soft-delete", now, deleted_at=now, deleted_reason=reason)
        self._log(key=self.key()).debug("record.soft_deleted", reason=reason)
        return self

    async def hard_delete(self) -> None:
        """Physically remove this record's item from the store.

        The in-memory instance is left untouched and no longer reflects a
        stored item.
        """
        identity = self._identity(self._require_identity("delete"))
        store = self._require_store()
        log = self._log(key=identity)

        with _store_errors(store, "delete", log):
            await store.delete(self.table_name(), identity)
        log.debug("record.hard_deleted")


__all__ = ["RecordBase"]
