"""
Unit tests for dataset download and ingestion
"""
import httpx
import pytest

from spotmap.config.settings import DatasetSettings
from spotmap.core.exceptions import (
    DatasetFetchError,
    EmptyDatasetError,
    IngestionError,
    MissingRequiredColumnsError,
)
from spotmap.services.dataset_client import DatasetClient

SETTINGS = DatasetSettings(url="https://data.example/spots.csv", timeout_seconds=2)


def _client(handler) -> DatasetClient:
    return DatasetClient(SETTINGS, transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_load_success(sample_csv):
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["ua"] = request.headers["user-agent"]
        return httpx.Response(200, content=sample_csv.encode("utf-8"))

    result = await _client(handler).load()
    assert [r.name for r in result.accepted] == ["Slush Oslo", "Slush Bergen", "Slush Trondheim"]
    assert seen["ua"] == "no.slushi.app"


@pytest.mark.asyncio
async def test_body_decoded_as_utf8_regardless_of_charset():
    body = "id,name,lat,lng\n1,Blåbær Ø,59.9,10.7\n".encode("utf-8")

    def handler(request):
        return httpx.Response(200, content=body, headers={"content-type": "text/csv; charset=iso-8859-1"})

    result = await _client(handler).load()
    assert result.accepted[0].name == "Blåbær Ø"


@pytest.mark.asyncio
async def test_non_200_is_fetch_error():
    with pytest.raises(DatasetFetchError) as exc:
        await _client(lambda request: httpx.Response(404)).load()
    assert exc.value.status_code == 404
    assert exc.value.message == "HTTP 404"


@pytest.mark.asyncio
async def test_transport_error_is_fetch_error():
    def handler(request):
        raise httpx.ConnectError("no route to host", request=request)

    with pytest.raises(IngestionError):
        await _client(handler).load()


@pytest.mark.asyncio
async def test_empty_body_is_empty_dataset():
    with pytest.raises(EmptyDatasetError):
        await _client(lambda request: httpx.Response(200, content=b"  \n")).load()


@pytest.mark.asyncio
async def test_no_valid_rows_is_empty_dataset():
    body = b"id,name,lat,lng\n1,,x,y\n"
    with pytest.raises(EmptyDatasetError) as exc:
        await _client(lambda request: httpx.Response(200, content=body)).load()
    assert exc.value.rejected_count == 1


@pytest.mark.asyncio
async def test_missing_columns_propagates():
    body = b"id,name,lat\n1,A,1\n"
    with pytest.raises(MissingRequiredColumnsError):
        await _client(lambda request: httpx.Response(200, content=body)).load()
