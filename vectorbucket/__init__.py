"""Client for Amazon S3 Vectors indexes."""

from vectorbucket.client import get_client, set_client
from vectorbucket.exceptions import ItemNotFoundError, ValidationError, VectorBucketError
from vectorbucket.index import Distance, IdType, Index, Item, SearchResult, create_index

__version__ = "0.1.0"

__all__ = [
    "Distance",
    "IdType",
    "Index",
    "Item",
    "ItemNotFoundError",
    "SearchResult",
    "ValidationError",
    "VectorBucketError",
    "create_index",
    "get_client",
    "set_client",
]
