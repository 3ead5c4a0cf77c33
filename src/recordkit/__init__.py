"""
recordkit – persistence base for record-shaped entities.

Import path convention::

    from recordkit.record import RecordBase
    from recordkit.store import ReadConsistency, StoreClient
    from recordkit.kernel.errors import NotFoundError, StoreUnavailableError
    from recordkit.adapters.mongodb import MongoRecordStore
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
