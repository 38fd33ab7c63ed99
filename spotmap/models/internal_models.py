"""
Internal data models and enums for the spot map engine.

This module contains the value types shared by the positioning, viewport
and tile-health components: coordinates, the positioning state machine
value, camera requests and the tile health snapshot.
"""

from dataclasses import dataclass
from typing import Optional
from enum import Enum


@dataclass(frozen=True, slots=True)
class Coordinate:
    """
    A latitude/longitude pair in degrees.

    No range check is applied: published datasets are accepted as-is.
    """
    lat: float
    lng: float

    def as_query(self) -> str:
        return f"{float(self.lat)},{float(self.lng)}"


class PermissionGrant(str, Enum):
    """Location permission levels reported by the platform"""
    NOT_DETERMINED = "not_determined"
    DENIED = "denied"
    DENIED_FOREVER = "denied_forever"
    WHILE_IN_USE = "while_in_use"
    ALWAYS = "always"

    @property
    def is_granted(self) -> bool:
        return self in (PermissionGrant.WHILE_IN_USE, PermissionGrant.ALWAYS)


class LocationAccuracy(str, Enum):
    """Desired accuracy passed to the platform position query"""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    BEST = "best"


class PositioningStatus(str, Enum):
    """Variants of the positioning state machine"""
    UNKNOWN = "unknown"
    SERVICE_DISABLED = "service_disabled"
    PERMISSION_DENIED = "permission_denied"
    PERMISSION_DENIED_PERMANENTLY = "permission_denied_permanently"
    AUTHORIZED = "authorized"
    FAILED = "failed"


class Remedy(str, Enum):
    """Affordance the presentation may offer alongside a notice"""
    NONE = "none"
    OPEN_LOCATION_SETTINGS = "open_location_settings"
    OPEN_APP_SETTINGS = "open_app_settings"
    RETRY_TILES = "retry_tiles"


@dataclass(frozen=True, slots=True)
class PositioningState:
    """
    Tagged positioning state.

    ``fix`` is set only for AUTHORIZED and ``reason`` only for FAILED;
    use the classmethod constructors rather than building one directly.
    """
    status: PositioningStatus
    fix: Optional[Coordinate] = None
    reason: Optional[str] = None

    def __post_init__(self) -> None:
        if (self.status == PositioningStatus.AUTHORIZED) != (self.fix is not None):
            raise ValueError("fix must be present exactly when status is AUTHORIZED")
        if self.reason is not None and self.status != PositioningStatus.FAILED:
            raise ValueError("reason is only valid for FAILED")

    @classmethod
    def unknown(cls) -> "PositioningState":
        return cls(PositioningStatus.UNKNOWN)

    @classmethod
    def service_disabled(cls) -> "PositioningState":
        return cls(PositioningStatus.SERVICE_DISABLED)

    @classmethod
    def permission_denied(cls) -> "PositioningState":
        return cls(PositioningStatus.PERMISSION_DENIED)

    @classmethod
    def permission_denied_permanently(cls) -> "PositioningState":
        return cls(PositioningStatus.PERMISSION_DENIED_PERMANENTLY)

    @classmethod
    def authorized(cls, fix: Coordinate) -> "PositioningState":
        return cls(PositioningStatus.AUTHORIZED, fix=fix)

    @classmethod
    def failed(cls, reason: str) -> "PositioningState":
        return cls(PositioningStatus.FAILED, reason=reason or "unknown error")

    @property
    def is_authorized(self) -> bool:
        return self.status == PositioningStatus.AUTHORIZED

    @property
    def remedy(self) -> Remedy:
        if self.status == PositioningStatus.SERVICE_DISABLED:
            return Remedy.OPEN_LOCATION_SETTINGS
        if self.status == PositioningStatus.PERMISSION_DENIED_PERMANENTLY:
            return Remedy.OPEN_APP_SETTINGS
        return Remedy.NONE


class MoveOrigin(str, Enum):
    """Who asked for a camera move"""
    AUTO = "auto"
    USER_ACTION = "user_action"


@dataclass(frozen=True, slots=True)
class CameraRequest:
    """A (center, zoom) camera move; zoom is already clamped"""
    center: Coordinate
    zoom: float
    origin: MoveOrigin = MoveOrigin.AUTO


class ViewportPhase(str, Enum):
    NOT_READY = "not_ready"
    READY = "ready"
    DISPOSED = "disposed"


@dataclass(frozen=True, slots=True)
class TileHealthState:
    """Snapshot of accumulated tile failures"""
    failure_count: int = 0
    last_error: Optional[str] = None

    @property
    def is_healthy(self) -> bool:
        return self.failure_count == 0

    @property
    def banner_message(self) -> str:
        message = f"Map tiles failing ({self.failure_count}). Tap to retry."
        if self.last_error:
            message += f"\n{self.last_error}"
        return message


@dataclass(frozen=True, slots=True)
class Notice:
    """Short user-facing message emitted once per failed attempt"""
    message: str
    remedy: Remedy = Remedy.NONE
