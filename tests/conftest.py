"""
Shared fakes for the spot map tests.
"""

import asyncio
from typing import List, Optional, Tuple

import pytest

from spotmap.config.settings import (
    DatasetSettings,
    PositioningSettings,
    Settings,
    TileSettings,
    ViewportSettings,
)
from spotmap.models.internal_models import Coordinate, LocationAccuracy, PermissionGrant

OSLO = Coordinate(59.9139, 10.7522)


class FakeLocationPlatform:
    """Scriptable stand-in for the device location API."""

    def __init__(
        self,
        enabled: bool = True,
        permission: PermissionGrant = PermissionGrant.WHILE_IN_USE,
        permission_after_request: PermissionGrant = PermissionGrant.WHILE_IN_USE,
        fix: Optional[Coordinate] = OSLO,
        fix_delay: float = 0.0,
        error: Optional[Exception] = None,
    ):
        self.enabled = enabled
        self.permission = permission
        self.permission_after_request = permission_after_request
        self.fix = fix
        self.fix_delay = fix_delay
        self.error = error
        self.permission_requests = 0
        self.position_calls = 0
        self.settings_opened: List[str] = []

    async def is_service_enabled(self) -> bool:
        return self.enabled

    async def check_permission(self) -> PermissionGrant:
        return self.permission

    async def request_permission(self) -> PermissionGrant:
        self.permission_requests += 1
        self.permission = self.permission_after_request
        return self.permission

    async def get_current_position(
        self, accuracy: LocationAccuracy, time_limit_seconds: float
    ) -> Coordinate:
        self.position_calls += 1
        if self.fix_delay:
            await asyncio.sleep(self.fix_delay)
        if self.error is not None:
            raise self.error
        return self.fix

    async def open_location_settings(self) -> bool:
        self.settings_opened.append("location")
        return True

    async def open_app_settings(self) -> bool:
        self.settings_opened.append("app")
        return True


class RecordingSurface:
    """Map surface that records every camera move."""

    def __init__(self, zoom: float = 5.6):
        self.zoom = zoom
        self.moves: List[Tuple[Coordinate, float]] = []

    def move(self, center: Coordinate, zoom: float) -> None:
        self.moves.append((center, zoom))
        self.zoom = zoom

    def camera_zoom(self) -> float:
        return self.zoom

    @property
    def zooms(self) -> List[float]:
        return [z for _, z in self.moves]


SAMPLE_CSV = (
    "id,name,description,address,lat,lng,imageUrl\n"
    "1,Slush Oslo,\"Blue, red and green\",Karl Johans gate 1,59.9139,10.7522,https://img.example/1.png\n"
    "2,Slush Bergen,,Bryggen 5,\"60,3913\",\"5,3221\",\n"
    "3,Slush Trondheim,Nidaros,,63.4305,10.3951,  \n"
)


@pytest.fixture
def viewport_settings() -> ViewportSettings:
    return ViewportSettings(stage_delay_ms=20, reassert_delay_ms=20)


@pytest.fixture
def tile_settings() -> TileSettings:
    return TileSettings(failure_debounce_ms=50)


@pytest.fixture
def test_settings(viewport_settings, tile_settings) -> Settings:
    return Settings(
        dataset=DatasetSettings(url="https://data.example/spots.csv", timeout_seconds=2),
        positioning=PositioningSettings(fix_timeout_seconds=0.2),
        viewport=viewport_settings,
        tiles=tile_settings,
    )


@pytest.fixture
def platform() -> FakeLocationPlatform:
    return FakeLocationPlatform()


@pytest.fixture
def surface() -> RecordingSurface:
    return RecordingSurface()


@pytest.fixture
def make_platform():
    """Factory for platforms with a non-default script."""
    return FakeLocationPlatform


@pytest.fixture
def oslo() -> Coordinate:
    return OSLO


@pytest.fixture
def sample_csv() -> str:
    return SAMPLE_CSV


@pytest.fixture
def make_surface():
    return RecordingSurface
