"""
Viewport controller - sequences camera moves for the map surface.

Two renderer workarounds are kept as named policies:

* staged move: a large jump into street-level zoom goes through a midpoint
  zoom first, so the tile layer is not hit with one burst of requests
  (which leaves the map blank until the next interaction);
* re-assertion: every direct move is repeated once shortly after, to
  resynchronise the tile layer with the camera after large zooms or resume.
"""

import logging
from typing import Optional, Protocol

from spotmap.config.settings import ViewportSettings, get_settings
from spotmap.core.scheduler import DelayedCalls
from spotmap.models.internal_models import (
    CameraRequest,
    Coordinate,
    MoveOrigin,
    ViewportPhase,
)

logger = logging.getLogger(__name__)


class MapSurface(Protocol):
    """Rendering surface that paints tiles and markers."""

    def move(self, center: Coordinate, zoom: float) -> None: ...

    def camera_zoom(self) -> float: ...


class ViewportController:
    """
    NOT_READY -> READY state machine with a single pending-move slot.

    While NOT_READY, the latest request overwrites the pending one. Once the
    surface reports ready, the pending request (or a re-center on the last
    fix) is issued. After ``dispose`` every request is a silent no-op.
    """

    def __init__(
        self,
        surface: Optional[MapSurface] = None,
        viewport_settings: Optional[ViewportSettings] = None,
    ):
        self.settings = viewport_settings or get_settings().viewport
        self._surface = surface
        self._phase = ViewportPhase.NOT_READY
        self._pending: Optional[CameraRequest] = None
        self._last_fix: Optional[Coordinate] = None
        self._zoom = self.clamp_zoom(self.settings.start_zoom)
        self._generation = 0
        self._timers = DelayedCalls("viewport")

    @property
    def phase(self) -> ViewportPhase:
        return self._phase

    @property
    def pending(self) -> Optional[CameraRequest]:
        return self._pending

    @property
    def start_center(self) -> Coordinate:
        return Coordinate(self.settings.start_lat, self.settings.start_lng)

    def clamp_zoom(self, zoom: float) -> float:
        return min(max(zoom, self.settings.min_zoom), self.settings.max_zoom)

    def current_zoom(self) -> float:
        if self._phase == ViewportPhase.READY and self._surface is not None:
            return self._surface.camera_zoom()
        return self._zoom

    def note_fix(self, fix: Coordinate) -> None:
        """Remember the latest device fix for re-centering on ready."""
        self._last_fix = fix

    def attach(self, surface: MapSurface) -> None:
        """Bind a freshly created surface; it still has to report ready."""
        if self._phase == ViewportPhase.DISPOSED:
            logger.debug("attach() on disposed viewport ignored")
            return
        self._surface = surface

    def request_move(
        self,
        center: Coordinate,
        zoom: float,
        origin: MoveOrigin = MoveOrigin.AUTO,
    ) -> None:
        request = CameraRequest(center=center, zoom=self.clamp_zoom(zoom), origin=origin)

        if self._phase == ViewportPhase.DISPOSED:
            logger.debug("Move requested on disposed viewport; ignored")
            return

        if self._phase == ViewportPhase.NOT_READY:
            if self._pending is not None:
                logger.debug("Replacing pending camera request")
            self._pending = request
            return

        self._issue(request)

    def on_view_ready(self) -> None:
        if self._phase == ViewportPhase.DISPOSED:
            return
        if self._surface is None:
            logger.warning("View reported ready without an attached surface")
            return

        self._phase = ViewportPhase.READY
        request, self._pending = self._pending, None

        if request is not None:
            self._issue(request)
        elif self._last_fix is not None:
            self._issue(CameraRequest(self._last_fix, self.clamp_zoom(self.settings.locate_zoom)))

    def reset(self, surface: Optional[MapSurface] = None) -> None:
        """
        Cold re-initialisation (app resume, tile retry).

        Drops the old surface identity, the pending slot and every scheduled
        move; the controller waits for the new surface to report ready.
        """
        if self._phase == ViewportPhase.DISPOSED:
            return
        dropped = self._timers.cancel_all()
        self._generation += 1
        self._phase = ViewportPhase.NOT_READY
        self._pending = None
        self._surface = surface
        self._zoom = self.clamp_zoom(self.settings.start_zoom)
        logger.info(f"Viewport reset (generation {self._generation}, {dropped} timers dropped)")

    def dispose(self) -> None:
        self._timers.cancel_all()
        self._phase = ViewportPhase.DISPOSED
        self._pending = None
        self._surface = None

    def _needs_staging(self, target: float, current: float) -> bool:
        return (
            abs(target - current) > self.settings.stage_delta_threshold
            and target > self.settings.stage_min_target
        )

    def _issue(self, request: CameraRequest) -> None:
        # A newer request supersedes moves still scheduled for an older one
        self._timers.cancel_all()

        current = self.current_zoom()
        target = request.zoom

        if self._needs_staging(target, current):
            mid = self.settings.stage_zoom_in if current < target else self.settings.stage_zoom_out
            mid = self.clamp_zoom(mid)
            logger.debug(f"Staged move {current:.1f} -> {mid:.1f} -> {target:.1f}")
            self._move(request.center, mid)
            self._schedule(self.settings.stage_delay_seconds, request.center, target)
            return

        self._move(request.center, target)
        self._schedule(self.settings.reassert_delay_seconds, request.center, target)

    def _schedule(self, delay: float, center: Coordinate, zoom: float) -> None:
        generation = self._generation

        def _fire() -> None:
            if self._phase != ViewportPhase.READY or generation != self._generation:
                return
            self._move(center, zoom)

        self._timers.call_later(delay, _fire)

    def _move(self, center: Coordinate, zoom: float) -> None:
        if self._surface is None:
            return
        self._surface.move(center, zoom)
        self._zoom = zoom
