"""
Internal models package.
"""

from .internal_models import (
    Coordinate,
    PermissionGrant,
    LocationAccuracy,
    PositioningStatus,
    PositioningState,
    Remedy,
    MoveOrigin,
    CameraRequest,
    ViewportPhase,
    TileHealthState,
    Notice,
)

__all__ = [
    "Coordinate",
    "PermissionGrant",
    "LocationAccuracy",
    "PositioningStatus",
    "PositioningState",
    "Remedy",
    "MoveOrigin",
    "CameraRequest",
    "ViewportPhase",
    "TileHealthState",
    "Notice",
]
