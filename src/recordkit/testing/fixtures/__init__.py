"""Testing fixtures – pytest fixtures for the fake doubles."""
from recordkit.testing.fixtures.clock import fake_clock
from recordkit.testing.fixtures.store import memory_store

__all__ = ["fake_clock", "memory_store"]
