"""
Positioning service - wraps the device location capability behind an
explicit permission/result state machine.

The service performs no UI. Callers read ``state.remedy`` to decide whether
to offer the location-settings or app-settings affordance.
"""

import asyncio
import logging
from typing import Optional, Protocol

from spotmap.config.settings import PositioningSettings, get_settings
from spotmap.core.exceptions import PositioningError
from spotmap.models.internal_models import (
    Coordinate,
    LocationAccuracy,
    PermissionGrant,
    PositioningState,
    Remedy,
)

logger = logging.getLogger(__name__)


class LocationPlatform(Protocol):
    """Device location capability as exposed by the host platform."""

    async def is_service_enabled(self) -> bool: ...

    async def check_permission(self) -> PermissionGrant: ...

    async def request_permission(self) -> PermissionGrant: ...

    async def get_current_position(
        self, accuracy: LocationAccuracy, time_limit_seconds: float
    ) -> Coordinate: ...

    async def open_location_settings(self) -> bool: ...

    async def open_app_settings(self) -> bool: ...


class PositioningService:
    """
    State machine over PositioningState, starting at UNKNOWN.

    At most one platform query runs at a time: a caller arriving while a
    request is in flight awaits that request's result instead of starting
    another (no duplicate permission prompts, no duplicate fixes).
    """

    def __init__(
        self,
        platform: LocationPlatform,
        positioning_settings: Optional[PositioningSettings] = None,
    ):
        self.platform = platform
        self.settings = positioning_settings or get_settings().positioning
        self.timeout_seconds = self.settings.fix_timeout_seconds
        self.accuracy = self.settings.desired_accuracy
        self._state = PositioningState.unknown()
        self._inflight: Optional[asyncio.Task] = None

    @property
    def state(self) -> PositioningState:
        return self._state

    @property
    def in_flight(self) -> bool:
        return self._inflight is not None and not self._inflight.done()

    async def request_fix(self, prompt_if_needed: bool = True) -> PositioningState:
        """
        Resolve the current position.

        Args:
            prompt_if_needed: Ask for permission when it has never been
                decided. Pass False for silent attempts (auto-center at launch).

        Returns:
            The resulting PositioningState. Never raises for platform errors;
            those end in FAILED.
        """
        if self.in_flight:
            logger.debug("Fix already in flight; joining it")
            return await asyncio.shield(self._inflight)

        self._inflight = asyncio.create_task(self._resolve(prompt_if_needed))
        try:
            return await asyncio.shield(self._inflight)
        finally:
            if self._inflight is not None and self._inflight.done():
                self._inflight = None

    async def require_fix(self, prompt_if_needed: bool = True) -> Coordinate:
        """
        Like request_fix but returns the coordinate directly.

        Raises:
            PositioningError: If the resulting state is not AUTHORIZED
        """
        state = await self.request_fix(prompt_if_needed)
        if not state.is_authorized:
            raise PositioningError(state)
        return state.fix

    async def open_settings_for(self, state: PositioningState) -> bool:
        """Open the settings page matching the state's remedy, if any."""
        try:
            if state.remedy == Remedy.OPEN_LOCATION_SETTINGS:
                return await self.platform.open_location_settings()
            if state.remedy == Remedy.OPEN_APP_SETTINGS:
                return await self.platform.open_app_settings()
        except Exception as e:
            logger.warning(f"Could not open settings: {e}")
        return False

    def _transition(self, new_state: PositioningState) -> PositioningState:
        if new_state != self._state:
            logger.info(f"Positioning: {self._state.status.value} -> {new_state.status.value}")
        self._state = new_state
        return new_state

    async def _resolve(self, prompt_if_needed: bool) -> PositioningState:
        try:
            if not await self.platform.is_service_enabled():
                return self._transition(PositioningState.service_disabled())

            permission = await self.platform.check_permission()
            logger.debug(f"Initial permission={permission.value}")

            if permission == PermissionGrant.NOT_DETERMINED:
                if not prompt_if_needed:
                    logger.debug("Permission not determined; not prompting")
                    return self._transition(PositioningState.unknown())
                permission = await self.platform.request_permission()
                logger.debug(f"Permission after request={permission.value}")

            if permission == PermissionGrant.DENIED_FOREVER:
                return self._transition(PositioningState.permission_denied_permanently())
            if not permission.is_granted:
                return self._transition(PositioningState.permission_denied())

            fix = await asyncio.wait_for(
                self.platform.get_current_position(self.accuracy, self.timeout_seconds),
                timeout=self.timeout_seconds,
            )
            logger.debug(f"Fix lat={fix.lat} lng={fix.lng}")
            return self._transition(PositioningState.authorized(fix))

        except asyncio.TimeoutError:
            return self._transition(
                PositioningState.failed(f"Timed out after {self.timeout_seconds:g}s")
            )
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.warning(f"Positioning failed: {e}", exc_info=True)
            return self._transition(PositioningState.failed(str(e) or e.__class__.__name__))
