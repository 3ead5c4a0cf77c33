"""Testing fakes – in-memory doubles for the store and clock ports."""
from recordkit.kernel.time import FrozenClock
from recordkit.testing.fakes.clock import FAKE_NOW_MILLIS, FakeClock
from recordkit.testing.fakes.store import InMemoryRecordStore, StoreCall

__all__ = ["FAKE_NOW_MILLIS", "FakeClock", "FrozenClock", "InMemoryRecordStore", "StoreCall"]
