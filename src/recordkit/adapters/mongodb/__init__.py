"""MongoDB adapter — StoreClient over motor.

Requires the ``mongodb`` extra::

    pip install "recordkit[mongodb]"
"""

from recordkit.adapters.mongodb.store import MongoRecordStore

__all__ = ["MongoRecordStore"]
