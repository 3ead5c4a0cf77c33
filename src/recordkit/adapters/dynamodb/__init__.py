"""DynamoDB adapter — StoreClient over boto3.

Requires the ``dynamodb`` extra::

    pip install "recordkit[dynamodb]"
"""

from recordkit.adapters.dynamodb.store import DynamoRecordStore, encode_item

__all__ = ["DynamoRecordStore", "encode_item"]
