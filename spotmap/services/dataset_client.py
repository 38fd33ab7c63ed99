"""
Dataset client - downloads the published location sheet and turns it into
validated records.
"""

import logging
import httpx
from typing import Optional

from spotmap.config.settings import DatasetSettings, get_settings
from spotmap.core.exceptions import DatasetFetchError, EmptyDatasetError
from spotmap.schemas.location import IngestionResult
from spotmap.services.location_catalog import ingest
from spotmap.services.record_parser import parse_records

logger = logging.getLogger(__name__)


class DatasetClient:
    """Fetches the CSV dataset over HTTP. No automatic retries."""

    def __init__(
        self,
        dataset_settings: Optional[DatasetSettings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.settings = dataset_settings or get_settings().dataset
        self.url = self.settings.url
        self.timeout = self.settings.timeout_seconds
        self._transport = transport

    def _get_headers(self) -> dict:
        return {"User-Agent": self.settings.user_agent, "Accept": "text/csv"}

    async def fetch_text(self) -> str:
        """
        Download the dataset body as UTF-8 text.

        Raises:
            DatasetFetchError: On transport failure or a non-200 status
            EmptyDatasetError: If the body is empty
        """
        logger.info(f"Fetching locations from {self.url}")
        try:
            async with httpx.AsyncClient(
                headers=self._get_headers(),
                timeout=self.timeout,
                follow_redirects=True,
                transport=self._transport,
            ) as client:
                response = await client.get(self.url)
        except httpx.TimeoutException as e:
            raise DatasetFetchError(f"Timed out after {self.timeout}s") from e
        except httpx.HTTPError as e:
            raise DatasetFetchError(str(e) or e.__class__.__name__) from e

        if response.status_code != 200:
            logger.warning(f"Dataset request returned HTTP {response.status_code}")
            raise DatasetFetchError(f"HTTP {response.status_code}", status_code=response.status_code)

        # Spreadsheet exports are UTF-8 regardless of the declared charset
        text = response.content.decode("utf-8", errors="replace")
        if not text.strip():
            raise EmptyDatasetError()
        return text

    async def load(self) -> IngestionResult:
        """
        Fetch, parse and validate the dataset.

        Raises:
            IngestionError: Any dataset-level failure, including a header
                without the required columns and a sheet with no valid rows
        """
        text = await self.fetch_text()
        rows = parse_records(text)
        if not rows:
            raise EmptyDatasetError()

        result = ingest(rows[0], rows[1:])
        logger.info(
            f"Ingested {len(result.accepted)} locations "
            f"({result.rejected_count} rows rejected)"
        )
        if not result.accepted:
            raise EmptyDatasetError("No valid rows found in CSV.", rejected_count=result.rejected_count)
        return result
