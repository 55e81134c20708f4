"""Client exception hierarchy.

All locally raised exceptions inherit from VectorBucketError.
Errors returned by the remote service are botocore ClientErrors and
are never wrapped.
"""

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Error codes for structured error handling."""

    # General errors (1xxx)
    INTERNAL_ERROR = "VB-1000"
    CONFIGURATION_ERROR = "VB-1001"
    VALIDATION_ERROR = "VB-1002"

    # Argument errors (2xxx)
    INVALID_DISTANCE = "VB-2000"
    INVALID_ID_TYPE = "VB-2001"
    DIMENSION_MISMATCH = "VB-2002"
    INVALID_ID = "VB-2003"
    INVALID_DIMENSIONS = "VB-2004"

    # Lookup errors (3xxx)
    ITEM_NOT_FOUND = "VB-3000"


class VectorBucketError(Exception):
    """Base exception for all client errors.

    Attributes:
        message: Human-readable error message.
        code: Structured error code.
        details: Additional error context.
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a serializable dictionary."""
        return {
            "error": {
                "code": self.code.value,
                "message": self.message,
                "details": self.details,
            }
        }


class ConfigurationError(VectorBucketError):
    """Configuration or environment error."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, ErrorCode.CONFIGURATION_ERROR, details)


class ValidationError(VectorBucketError, ValueError):
    """Input rejected before reaching the service."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.VALIDATION_ERROR,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)


class InvalidDistanceError(ValidationError):
    """Unsupported distance metric."""

    def __init__(self, distance: Any) -> None:
        super().__init__(
            "invalid distance",
            ErrorCode.INVALID_DISTANCE,
            {"distance": str(distance)},
        )


class InvalidIdTypeError(ValidationError):
    """Unsupported id type."""

    def __init__(self, id_type: Any) -> None:
        super().__init__(
            "invalid id_type",
            ErrorCode.INVALID_ID_TYPE,
            {"id_type": str(id_type)},
        )


class DimensionMismatchError(ValidationError):
    """Vector length differs from the index dimensions."""

    def __init__(self, expected: int, actual: int) -> None:
        super().__init__(
            f"expected {expected} dimensions",
            ErrorCode.DIMENSION_MISMATCH,
            {"expected": expected, "actual": actual},
        )


class InvalidDimensionsError(ValidationError):
    """Dimensions are not a positive integer."""

    def __init__(self, dimensions: Any) -> None:
        super().__init__(
            "dimensions must be a positive integer",
            ErrorCode.INVALID_DIMENSIONS,
            {"dimensions": repr(dimensions)},
        )


class InvalidIdError(ValidationError):
    """Id cannot be coerced to the index id type."""

    def __init__(self, item_id: Any) -> None:
        super().__init__(
            f"invalid value for integer id: {item_id!r}",
            ErrorCode.INVALID_ID,
            {"id": repr(item_id)},
        )


class ItemNotFoundError(VectorBucketError, LookupError):
    """Item absent from the index."""

    def __init__(self, item_id: Any) -> None:
        super().__init__(
            f"Could not find item {item_id}",
            ErrorCode.ITEM_NOT_FOUND,
            {"id": item_id},
        )
