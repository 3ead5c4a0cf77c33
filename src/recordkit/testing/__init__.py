"""Testing support – in-memory store, fake clock and pytest fixtures.

Import in your ``conftest.py``::

    pytest_plugins = ["recordkit.testing.fixtures"]
"""

from recordkit.testing.fakes import FakeClock, FrozenClock, InMemoryRecordStore, StoreCall

__all__ = ["FakeClock", "FrozenClock", "InMemoryRecordStore", "StoreCall"]
