"""
Custom exceptions for the spot map engine.

Dataset and positioning failures are non-fatal: they are caught at the
session boundary and turned into user-facing notices.
"""

from typing import Optional, Dict, Any, Sequence
from enum import Enum

from spotmap.models.internal_models import PositioningState


class ErrorCode(str, Enum):
    """Standardized error codes for the engine."""

    # Ingestion errors
    DATASET_FETCH_FAILED = "DATASET_FETCH_FAILED"
    DATASET_EMPTY = "DATASET_EMPTY"
    MISSING_REQUIRED_COLUMNS = "MISSING_REQUIRED_COLUMNS"

    # Positioning errors
    POSITIONING_UNAVAILABLE = "POSITIONING_UNAVAILABLE"

    # Search errors
    EMPTY_CATALOG = "EMPTY_CATALOG"


class SpotMapException(Exception):
    """Base exception for the spot map engine."""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}


class IngestionError(SpotMapException):
    """Base class for dataset-level failures; the catalog keeps its previous value."""


class DatasetFetchError(IngestionError):
    """Raised when the dataset cannot be downloaded."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        details = {"status_code": status_code} if status_code is not None else None
        super().__init__(
            message=message,
            error_code=ErrorCode.DATASET_FETCH_FAILED,
            details=details,
        )
        self.status_code = status_code


class EmptyDatasetError(IngestionError):
    """Raised when the dataset has no rows or no row survives validation."""

    def __init__(self, message: str = "CSV is empty", rejected_count: int = 0):
        super().__init__(
            message=message,
            error_code=ErrorCode.DATASET_EMPTY,
            details={"rejected_count": rejected_count},
        )
        self.rejected_count = rejected_count


class MissingRequiredColumnsError(IngestionError):
    """Raised when the header lacks one of the mandatory columns."""

    def __init__(self, missing: Sequence[str]):
        self.missing = tuple(missing)
        super().__init__(
            message=(
                f"Missing headers {', '.join(self.missing)}. Must include: id,name,lat,lng "
                "(and preferably description,address,imageUrl)."
            ),
            error_code=ErrorCode.MISSING_REQUIRED_COLUMNS,
            details={"missing": list(self.missing)},
        )


class PositioningError(SpotMapException):
    """Raised when a caller requires a fix and the state machine ended elsewhere."""

    def __init__(self, state: PositioningState):
        self.state = state
        super().__init__(
            message=f"No position fix: {state.status.value}"
            + (f" ({state.reason})" if state.reason else ""),
            error_code=ErrorCode.POSITIONING_UNAVAILABLE,
            details={"status": state.status.value, "reason": state.reason},
        )


class EmptyCatalogError(SpotMapException):
    """Raised when a nearest-spot search runs against an empty catalog."""

    def __init__(self):
        super().__init__(
            message="No locations loaded",
            error_code=ErrorCode.EMPTY_CATALOG,
        )
