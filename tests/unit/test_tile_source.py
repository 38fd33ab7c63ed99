import httpx
import pytest

from spotmap.config.settings import TileSettings
from spotmap.services.tile_health import TileHealthMonitor
from spotmap.services.tile_source import TileSource


def test_url_template_fill(tile_settings):
    source = TileSource(TileHealthMonitor(tile_settings), tile_settings)
    assert source.url_for(5, 16, 9) == "https://b.basemaps.cartocdn.com/light_all/5/16/9.png"
    assert source.url_for(5, 16, 10, retina=True) == (
        "https://c.basemaps.cartocdn.com/light_all/5/16/10@2x.png"
    )


def test_subdomains_from_comma_list():
    settings = TileSettings(subdomains=" x, y ,", url_template="https://{s}.tiles/{z}/{x}/{y}{r}")
    source = TileSource(TileHealthMonitor(settings), settings)
    assert source.subdomains == ["x", "y"]
    assert source.url_for(1, 1, 0) == "https://y.tiles/1/1/0"


@pytest.mark.asyncio
async def test_fetch_success_and_failures_are_counted(tile_settings):
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path.endswith("/1/0/0.png"):
            return httpx.Response(200, content=b"PNG")
        if request.url.path.endswith("/1/1/0.png"):
            raise httpx.ConnectError("connection refused", request=request)
        return httpx.Response(503)

    monitor = TileHealthMonitor(tile_settings)
    source = TileSource(monitor, tile_settings, transport=httpx.MockTransport(handler))
    try:
        assert await source.fetch(1, 0, 0) == b"PNG"
        assert await source.fetch(1, 1, 0) is None
        assert await source.fetch(1, 1, 1) is None
        assert await source.fetch(25, 0, 0) is None
    finally:
        monitor.dispose()

    health = monitor.snapshot()
    assert health.failure_count == 3
    assert "Zoom 25" in health.last_error


class ClosingTransport(httpx.MockTransport):
    """MockTransport that counts how often a client released it."""

    def __init__(self, handler):
        super().__init__(handler)
        self.closed = 0

    async def aclose(self) -> None:
        self.closed += 1
        await super().aclose()


@pytest.mark.asyncio
async def test_each_fetch_releases_its_client(tile_settings):
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path.endswith("/2/0/0.png"):
            return httpx.Response(200, content=b"PNG")
        raise httpx.ReadTimeout("slow tile", request=request)

    monitor = TileHealthMonitor(tile_settings)
    transport = ClosingTransport(handler)
    source = TileSource(monitor, tile_settings, transport=transport)
    try:
        assert await source.fetch(2, 0, 0) == b"PNG"
        assert transport.closed == 1
        assert await source.fetch(2, 1, 0) is None
        assert transport.closed == 2
    finally:
        monitor.dispose()
    assert monitor.snapshot().failure_count == 1
