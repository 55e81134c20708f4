"""Vector index data models."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Distance(str, Enum):
    """Distance metric used by the service to rank vectors."""

    EUCLIDEAN = "euclidean"
    COSINE = "cosine"


class IdType(str, Enum):
    """Type item ids are coerced to."""

    STRING = "string"
    INTEGER = "integer"


class IndexConfig(BaseModel):
    """Identifying configuration of a remote index.

    Attributes:
        name: Index name within the bucket.
        bucket: Vector bucket name.
        dimensions: Vector length.
        distance: Distance metric.
        id_type: Type item ids are coerced to.
        non_filterable: Metadata keys excluded from filters.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(description="Index name")
    bucket: str = Field(description="Vector bucket name")
    dimensions: int = Field(gt=0, description="Vector dimensions")
    distance: Distance = Field(description="Distance metric")
    id_type: IdType = Field(default=IdType.STRING, description="Id type")
    non_filterable: tuple[str, ...] = Field(
        default=(),
        description="Non-filterable metadata keys",
    )


class Item(BaseModel):
    """A vector stored in an index.

    Attributes:
        id: Item identifier.
        vector: The stored vector.
        metadata: Stored metadata, None when not requested.
    """

    id: str | int = Field(description="Item identifier")
    vector: list[float] = Field(description="Stored vector")
    metadata: dict[str, Any] | None = Field(
        default=None,
        description="Item metadata",
    )


class SearchResult(BaseModel):
    """Result from a nearest-neighbor search.

    Attributes:
        id: Item identifier.
        distance: Distance to the query (lower is closer).
        metadata: Stored metadata, None when not requested.
    """

    id: str | int = Field(description="Item identifier")
    distance: float = Field(description="Distance to the query vector")
    metadata: dict[str, Any] | None = Field(
        default=None,
        description="Item metadata",
    )
