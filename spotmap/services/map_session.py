"""
Map session - owns the state behind one map screen.

Holds the catalog, the last device fix and the controllers, and is the
boundary where every failure becomes a user-facing Notice. Results that
arrive after ``dispose`` are discarded.
"""

import asyncio
import logging
from typing import Callable, List, Optional

from spotmap.config.settings import Settings, get_settings
from spotmap.core.exceptions import (
    EmptyCatalogError,
    EmptyDatasetError,
    IngestionError,
    PositioningError,
)
from spotmap.models.internal_models import (
    Coordinate,
    MoveOrigin,
    Notice,
    PositioningState,
    PositioningStatus,
    Remedy,
)
from spotmap.schemas.location import IngestionResult, NearestResult
from spotmap.services.dataset_client import DatasetClient
from spotmap.services.location_catalog import LocationCatalog
from spotmap.services.navigation_service import describe_nearest
from spotmap.services.positioning_service import PositioningService
from spotmap.services.tile_health import TileHealthMonitor
from spotmap.services.viewport_controller import MapSurface, ViewportController

logger = logging.getLogger(__name__)

NoticeListener = Callable[[Notice], None]

POSITIONING_MESSAGES = {
    PositioningStatus.SERVICE_DISABLED: "Location Services are OFF. Turn them on in Settings.",
    PositioningStatus.PERMISSION_DENIED: "Location permission denied.",
    PositioningStatus.PERMISSION_DENIED_PERMANENTLY: "Location permission is blocked. Enable it in Settings.",
    PositioningStatus.FAILED: "Could not get your location. Try again.",
    PositioningStatus.UNKNOWN: "Location permission has not been granted yet.",
}


def notice_for_state(state: PositioningState) -> Notice:
    return Notice(message=POSITIONING_MESSAGES[state.status], remedy=state.remedy)


class MapSession:
    def __init__(
        self,
        dataset: DatasetClient,
        positioning: PositioningService,
        viewport: Optional[ViewportController] = None,
        tiles: Optional[TileHealthMonitor] = None,
        settings: Optional[Settings] = None,
    ):
        self.settings = settings or get_settings()
        self.dataset = dataset
        self.positioning = positioning
        self.viewport = viewport or ViewportController(viewport_settings=self.settings.viewport)
        self.tiles = tiles or TileHealthMonitor(self.settings.tiles)
        self.catalog = LocationCatalog()
        self.my_location: Optional[Coordinate] = None

        self._live = True
        self._locating = False
        self._auto_center_attempted = False
        self._notice_listeners: List[NoticeListener] = []

    @property
    def live(self) -> bool:
        return self._live

    @property
    def locating(self) -> bool:
        return self._locating

    def add_notice_listener(self, listener: NoticeListener) -> None:
        self._notice_listeners.append(listener)

    def _notify(self, notice: Notice) -> None:
        if not self._live:
            return
        logger.info(f"Notice: {notice.message}")
        for listener in list(self._notice_listeners):
            try:
                listener(notice)
            except Exception as e:
                logger.error(f"Notice listener error: {e}", exc_info=True)

    async def start(self) -> None:
        """Load locations and make the one silent auto-center attempt."""
        logger.info("Map session starting")
        await asyncio.gather(
            self.load_locations(),
            self.go_to_my_location(auto=True),
        )

    async def load_locations(self) -> Optional[IngestionResult]:
        """
        Refresh the catalog from the dataset.

        On any ingestion failure the previous catalog stays in place and a
        notice is emitted.
        """
        try:
            result = await self.dataset.load()
        except IngestionError as e:
            if self._live:
                logger.warning(f"Could not load locations: {e.message}")
                if isinstance(e, EmptyDatasetError):
                    self._notify(Notice(e.message))
                else:
                    self._notify(Notice(f"Could not load locations: {e.message}"))
            return None

        if not self._live:
            logger.debug("Session disposed during load; result discarded")
            return None

        self.catalog.replace(result.accepted)
        return result

    async def go_to_my_location(self, auto: bool = False) -> Optional[Coordinate]:
        """
        Center the map on the device position.

        ``auto`` is the launch-time attempt: it never prompts, reports
        nothing and runs at most once per session.
        """
        if self._locating:
            return None
        if auto:
            if self._auto_center_attempted:
                return None
            self._auto_center_attempted = True

        self._locating = True
        try:
            state = await self.positioning.request_fix(prompt_if_needed=not auto)
        finally:
            self._locating = False

        if not self._live:
            return None
        if not state.is_authorized:
            if not auto:
                self._notify(notice_for_state(state))
            return None

        self._apply_fix(state.fix)
        origin = MoveOrigin.AUTO if auto else MoveOrigin.USER_ACTION
        self.viewport.request_move(state.fix, self.settings.viewport.locate_zoom, origin)
        return state.fix

    async def nearest_spot(self) -> Optional[NearestResult]:
        """Find the closest location, fly to it and return it for the detail sheet."""
        if self.catalog.is_empty():
            self._notify(Notice("No locations loaded yet."))
            return None

        fix = self.my_location
        if fix is None:
            try:
                fix = await self.positioning.require_fix(prompt_if_needed=True)
            except PositioningError as e:
                self._notify(notice_for_state(e.state))
                return None
            if not self._live:
                return None
            self._apply_fix(fix)

        try:
            result = describe_nearest(fix, self.catalog.records)
        except EmptyCatalogError:
            # Catalog replaced by an empty one while the fix was resolving
            self._notify(Notice("No locations loaded yet."))
            return None

        self.viewport.request_move(
            result.record.coordinate, self.settings.viewport.nearest_zoom, MoveOrigin.USER_ACTION
        )
        return result

    async def on_resume(self, surface: Optional[MapSurface] = None) -> None:
        """App returned from background: rebuild the viewport and reload pins."""
        if not self._live:
            return
        logger.info("Map session resumed")
        self.viewport.reset(surface)
        if self.my_location is not None:
            self.viewport.request_move(self.my_location, self.settings.viewport.locate_zoom)
        await self.load_locations()

    def retry_tiles(self, surface: Optional[MapSurface] = None) -> None:
        self.tiles.reset()
        self.viewport.reset(surface)

    def tile_notice(self) -> Optional[Notice]:
        health = self.tiles.snapshot()
        if health.is_healthy:
            return None
        return Notice(health.banner_message, Remedy.RETRY_TILES)

    def dispose(self) -> None:
        if not self._live:
            return
        self._live = False
        self.viewport.dispose()
        self.tiles.dispose()
        self._notice_listeners.clear()
        logger.info("Map session disposed")

    def _apply_fix(self, fix: Coordinate) -> None:
        self.my_location = fix
        self.viewport.note_fix(fix)
