"""Store – the StoreClient port and the value normalizer applied on read."""
from recordkit.store.normalizer import Normalizer, unwrap_numbers
from recordkit.store.port import ReadConsistency, StoreClient

__all__ = ["Normalizer", "ReadConsistency", "StoreClient", "unwrap_numbers"]
