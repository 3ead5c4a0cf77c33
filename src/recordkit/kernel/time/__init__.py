"""Kernel time – Clock port + implementations."""
from recordkit.kernel.time.clock import Clock, FrozenClock, SystemClock, to_millis

__all__ = ["Clock", "FrozenClock", "SystemClock", "to_millis"]
