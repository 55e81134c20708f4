"""Index handle for an S3 Vectors index."""

import math
from collections.abc import Iterable, Iterator, Mapping, Sequence
from typing import Any

from botocore.exceptions import ClientError

from vectorbucket.client import get_client
from vectorbucket.config import IndexSettings, get_settings
from vectorbucket.exceptions import (
    ConfigurationError,
    DimensionMismatchError,
    InvalidDimensionsError,
    InvalidDistanceError,
    InvalidIdError,
    InvalidIdTypeError,
    ItemNotFoundError,
)
from vectorbucket.index.models import Distance, IdType, IndexConfig, Item, SearchResult
from vectorbucket.logging_config import get_logger
from vectorbucket.observability.metrics import track_items, track_operation

logger = get_logger(__name__)

ItemId = str | int

# Service limit on maxResults for ListVectors
MAX_LIST_BATCH_SIZE = 1000


class Index:
    """Handle to a remote vector index.

    Holds identifying configuration only. Every operation is forwarded to
    the S3 Vectors API; remote errors propagate unchanged as botocore
    ``ClientError`` instances.
    """

    def __init__(
        self,
        name: str,
        *,
        dimensions: int,
        distance: Distance | str,
        bucket: str | None = None,
        id_type: IdType | str = IdType.STRING,
        non_filterable: Iterable[str] | None = None,
        client: Any = None,
        settings: IndexSettings | None = None,
    ) -> None:
        """Initialize the index handle.

        Args:
            name: Index name.
            dimensions: Vector dimensions.
            distance: Distance metric (euclidean or cosine).
            bucket: Vector bucket name. Uses the configured default if not provided.
            id_type: Id type (string or integer).
            non_filterable: Metadata keys to exclude from filtering.
            client: S3 Vectors client. Uses the shared client if not provided.
            settings: Index settings. Uses configured values if not provided.

        Raises:
            InvalidDistanceError: If the distance metric is not supported.
            InvalidIdTypeError: If the id type is not supported.
            InvalidDimensionsError: If dimensions is not a positive integer.
            ConfigurationError: If no bucket is given or configured.
        """
        self._settings = settings or get_settings().index

        try:
            distance = Distance(distance)
        except ValueError:
            raise InvalidDistanceError(distance) from None

        try:
            id_type = IdType(id_type)
        except ValueError:
            raise InvalidIdTypeError(id_type) from None

        if isinstance(dimensions, bool):
            raise InvalidDimensionsError(dimensions)
        try:
            dimensions = int(dimensions)
        except (TypeError, ValueError):
            raise InvalidDimensionsError(dimensions) from None
        if dimensions <= 0:
            raise InvalidDimensionsError(dimensions)

        bucket = bucket or self._settings.bucket
        if not bucket:
            raise ConfigurationError(
                "No vector bucket given and VECTOR_INDEX_BUCKET is not set",
                details={"index": name},
            )

        self._config = IndexConfig(
            name=name,
            bucket=bucket,
            dimensions=dimensions,
            distance=distance,
            id_type=id_type,
            non_filterable=tuple(non_filterable or ()),
        )
        self._client = client

    def __repr__(self) -> str:
        return f"Index(name={self.name!r}, bucket={self.bucket!r})"

    @property
    def config(self) -> IndexConfig:
        """Get the index configuration."""
        return self._config

    @property
    def name(self) -> str:
        return self._config.name

    @property
    def bucket(self) -> str:
        return self._config.bucket

    @property
    def dimensions(self) -> int:
        return self._config.dimensions

    @property
    def distance(self) -> Distance:
        return self._config.distance

    @property
    def id_type(self) -> IdType:
        return self._config.id_type

    def _get_client(self) -> Any:
        if self._client is None:
            return get_client()
        return self._client

    def _call(self, operation: str, **params: Any) -> dict[str, Any]:
        """Invoke a client operation scoped to this index."""
        client = self._get_client()
        with track_operation(operation):
            return getattr(client, operation)(
                vectorBucketName=self.bucket,
                indexName=self.name,
                **params,
            )

    def create(self) -> None:
        """Create the index.

        Raises:
            ClientError: ``ConflictException`` if the index already exists.
        """
        params: dict[str, Any] = {
            "dataType": "float32",
            "dimension": self.dimensions,
            "distanceMetric": self.distance.value,
        }
        if self._config.non_filterable:
            params["metadataConfiguration"] = {
                "nonFilterableMetadataKeys": list(self._config.non_filterable),
            }
        self._call("create_index", **params)
        logger.info(
            f"Created index: {self.name}",
            extra={"bucket": self.bucket, "index": self.name},
        )

    def exists(self) -> bool:
        """Check if the index exists."""
        try:
            self._call("get_index")
        except ClientError as e:
            if e.response.get("Error", {}).get("Code") == "NotFoundException":
                return False
            raise
        return True

    def info(self) -> dict[str, Any]:
        """Get the service's description of the index.

        Raises:
            ClientError: ``NotFoundException`` if the index does not exist.
        """
        return self._call("get_index")["index"]

    def drop(self) -> None:
        """Delete the index and all of its vectors."""
        self._call("delete_index")
        logger.info(
            f"Dropped index: {self.name}",
            extra={"bucket": self.bucket, "index": self.name},
        )

    def add(
        self,
        item_id: ItemId,
        vector: Sequence[float],
        metadata: Mapping[str, Any] | None = None,
    ) -> None:
        """Add or replace a single item."""
        self.add_all([{"id": item_id, "vector": vector, "metadata": metadata}])

    def add_all(self, items: Iterable[Item | Mapping[str, Any]]) -> None:
        """Add or replace items.

        Every item is validated before the first write so a bad item
        cannot leave a batch half-applied.

        Args:
            items: ``Item`` models or mappings with ``id``, ``vector`` and
                optional ``metadata`` keys.

        Raises:
            KeyError: If a mapping lacks ``vector`` or ``id``.
            DimensionMismatchError: If a vector has the wrong length.
            InvalidIdError: If an id cannot be coerced to the id type.
        """
        vectors = []
        for item in items:
            if isinstance(item, Item):
                raw_vector, raw_id, metadata = item.vector, item.id, item.metadata
            else:
                raw_vector, raw_id = item["vector"], item["id"]
                metadata = item.get("metadata")

            vector = self._to_vector(raw_vector)
            entry: dict[str, Any] = {
                "key": str(self._item_id(raw_id)),
                "data": {"float32": vector},
            }
            if metadata is not None:
                entry["metadata"] = dict(metadata)
            vectors.append(entry)

        for batch in _chunks(vectors, self._settings.batch_size):
            self._call("put_vectors", vectors=batch)
            track_items("put", len(batch))
            logger.debug(
                f"Put {len(batch)} vectors",
                extra={"index": self.name, "count": len(batch)},
            )

    def remove(self, item_id: ItemId) -> None:
        """Remove a single item. Missing items are ignored by the service."""
        self.remove_all([item_id])

    def remove_all(self, item_ids: Iterable[ItemId]) -> None:
        """Remove items by id."""
        keys = [str(self._item_id(item_id)) for item_id in item_ids]

        for batch in _chunks(keys, self._settings.batch_size):
            self._call("delete_vectors", keys=batch)
            track_items("delete", len(batch))
            logger.debug(
                f"Deleted {len(batch)} vectors",
                extra={"index": self.name, "count": len(batch)},
            )

    def member(self, item_id: ItemId) -> bool:
        """Check if an item is stored in the index."""
        response = self._call(
            "get_vectors",
            keys=[str(self._item_id(item_id))],
            returnData=False,
            returnMetadata=False,
        )
        return bool(response.get("vectors"))

    include = member

    def __contains__(self, item_id: ItemId) -> bool:
        return self.member(item_id)

    def find(self, item_id: ItemId, with_metadata: bool = True) -> Item | None:
        """Fetch a stored item.

        Args:
            item_id: Item identifier.
            with_metadata: Include stored metadata.

        Returns:
            The item, or None if it is not in the index.
        """
        response = self._call(
            "get_vectors",
            keys=[str(self._item_id(item_id))],
            returnData=True,
            returnMetadata=with_metadata,
        )
        vectors = response.get("vectors") or []
        track_items("get", len(vectors))
        if not vectors:
            return None
        return self._to_item(vectors[0], with_metadata)

    def find_in_batches(
        self,
        batch_size: int = MAX_LIST_BATCH_SIZE,
        with_metadata: bool = True,
    ) -> Iterator[list[Item]]:
        """Scan every item in the index, one page at a time.

        The service accepts page sizes from 1 to 1000; anything else
        surfaces as a ``ValidationException`` when the first page is read.

        Args:
            batch_size: Items per page.
            with_metadata: Include stored metadata.

        Yields:
            Lists of items.
        """
        params: dict[str, Any] = {
            "maxResults": batch_size,
            "returnData": True,
            "returnMetadata": with_metadata,
        }
        while True:
            response = self._call("list_vectors", **params)
            batch = [
                self._to_item(v, with_metadata) for v in response.get("vectors", [])
            ]
            track_items("list", len(batch))
            logger.debug(
                f"Listed {len(batch)} vectors",
                extra={"index": self.name, "count": len(batch)},
            )
            yield batch

            next_token = response.get("nextToken")
            if not next_token:
                break
            params["nextToken"] = next_token

    def find_each(
        self,
        batch_size: int = MAX_LIST_BATCH_SIZE,
        with_metadata: bool = True,
    ) -> Iterator[Item]:
        """Scan every item in the index."""
        for batch in self.find_in_batches(batch_size, with_metadata):
            yield from batch

    def search(
        self,
        vector: Sequence[float],
        count: int = 5,
        with_metadata: bool = False,
        filter: Mapping[str, Any] | None = None,
    ) -> list[SearchResult]:
        """Find the nearest neighbors of a vector.

        Args:
            vector: Query vector.
            count: Maximum results to return.
            with_metadata: Include stored metadata.
            filter: Metadata filter (``$eq``, ``$gt``, ``$exists`` and so on).

        Returns:
            Results ordered by distance.

        Raises:
            DimensionMismatchError: If the vector has the wrong length.
        """
        params: dict[str, Any] = {
            "topK": count,
            "queryVector": {"float32": self._to_vector(vector)},
            "returnMetadata": with_metadata,
            "returnDistance": True,
        }
        if filter is not None:
            params["filter"] = dict(filter)

        response = self._call("query_vectors", **params)
        results = [self._to_result(v, with_metadata) for v in response.get("vectors", [])]
        track_items("query", len(results))
        return results

    def search_id(
        self,
        item_id: ItemId,
        count: int = 5,
        with_metadata: bool = False,
        filter: Mapping[str, Any] | None = None,
    ) -> list[SearchResult]:
        """Find the nearest neighbors of a stored item, excluding the item.

        Raises:
            ItemNotFoundError: If the item is not in the index.
        """
        item_id = self._item_id(item_id)

        item = self.find(item_id, with_metadata=False)
        if item is None:
            raise ItemNotFoundError(item_id)

        results = self.search(
            item.vector,
            count=count + 1,
            with_metadata=with_metadata,
            filter=filter,
        )
        return [r for r in results if r.id != item_id][:count]

    def _to_vector(self, vector: Sequence[float]) -> list[float]:
        values = [float(v) for v in vector]
        if len(values) != self.dimensions:
            raise DimensionMismatchError(self.dimensions, len(values))
        return values

    def _item_id(self, item_id: Any) -> ItemId:
        if self.id_type is IdType.STRING:
            return str(item_id)
        if isinstance(item_id, bool):
            raise InvalidIdError(item_id)
        try:
            return int(item_id)
        except (TypeError, ValueError):
            raise InvalidIdError(item_id) from None

    def _to_item(self, vector: dict[str, Any], with_metadata: bool) -> Item:
        return Item(
            id=self._item_id(vector["key"]),
            vector=vector["data"]["float32"],
            metadata=(vector.get("metadata") or {}) if with_metadata else None,
        )

    def _to_result(self, vector: dict[str, Any], with_metadata: bool) -> SearchResult:
        distance = vector["distance"]
        if self.distance is Distance.EUCLIDEAN:
            # service reports squared euclidean distance
            distance = math.sqrt(distance)
        return SearchResult(
            id=self._item_id(vector["key"]),
            distance=distance,
            metadata=(vector.get("metadata") or {}) if with_metadata else None,
        )


def create_index(name: str, **options: Any) -> Index:
    """Create a remote index and return its handle.

    Args:
        name: Index name.
        **options: Keyword arguments accepted by ``Index``.
    """
    index = Index(name, **options)
    index.create()
    return index


def _chunks(values: list[Any], size: int) -> Iterator[list[Any]]:
    for start in range(0, len(values), size):
        yield values[start : start + size]
