"""Adapters – StoreClient implementations over real drivers.

Each adapter needs its extra::

    pip install "recordkit[mongodb]"
    pip install "recordkit[dynamodb]"
"""
