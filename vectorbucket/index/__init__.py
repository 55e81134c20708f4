"""Vector index module."""

from vectorbucket.index.models import Distance, IdType, IndexConfig, Item, SearchResult
from vectorbucket.index.service import Index, create_index

__all__ = [
    "Distance",
    "IdType",
    "Index",
    "IndexConfig",
    "Item",
    "SearchResult",
    "create_index",
]
