"""
Tile endpoint templating and fetching.

Fetch failures are handed to the TileHealthMonitor as opaque messages; the
status code is never interpreted beyond "not 200".
"""

import logging
import httpx
from typing import Optional

from spotmap.config.settings import TileSettings, get_settings
from spotmap.services.tile_health import TileHealthMonitor

logger = logging.getLogger(__name__)

RETINA_SUFFIX = "@2x"


class TileSource:
    def __init__(
        self,
        monitor: TileHealthMonitor,
        tile_settings: Optional[TileSettings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.settings = tile_settings or get_settings().tiles
        self.monitor = monitor
        self.subdomains = self.settings.subdomain_list
        self._transport = transport

    def url_for(self, z: int, x: int, y: int, retina: bool = False) -> str:
        """Fill the URL template; ``{s}`` rotates over subdomains by tile position."""
        subdomain = self.subdomains[(x + y) % len(self.subdomains)] if self.subdomains else ""
        return (
            self.settings.url_template
            .replace("{s}", subdomain)
            .replace("{z}", str(z))
            .replace("{x}", str(x))
            .replace("{y}", str(y))
            .replace("{r}", RETINA_SUFFIX if retina else "")
        )

    async def fetch(self, z: int, x: int, y: int, retina: bool = False) -> Optional[bytes]:
        """
        Download one tile.

        Returns:
            Tile bytes, or None after recording the failure with the monitor
        """
        if not self.settings.min_zoom <= z <= self.settings.max_zoom:
            self.monitor.record_failure(f"Zoom {z} outside {self.settings.min_zoom}..{self.settings.max_zoom}")
            return None

        url = self.url_for(z, x, y, retina)
        try:
            async with httpx.AsyncClient(
                headers=self._get_headers(),
                timeout=self.settings.timeout_seconds,
                transport=self._transport,
            ) as client:
                response = await client.get(url)
        except httpx.HTTPError as e:
            self.monitor.record_failure(f"{e.__class__.__name__}: {e} ({url})")
            return None

        if response.status_code != 200:
            self.monitor.record_failure(f"HTTP {response.status_code} ({url})")
            return None
        return response.content

    def _get_headers(self) -> dict:
        return {"User-Agent": self.settings.user_agent}
