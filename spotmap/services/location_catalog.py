"""
Location catalog: validates parsed rows into LocationRecord entities and
holds the current set for the session.
"""

import logging
import math
import re
from typing import Iterator, List, Optional, Sequence

from spotmap.core.exceptions import MissingRequiredColumnsError
from spotmap.models.internal_models import Coordinate
from spotmap.schemas.location import IngestionResult, LocationRecord

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ("id", "name", "lat", "lng")
OPTIONAL_COLUMNS = ("description", "address", "imageUrl")

_NUMBER = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$")


def parse_decimal(raw: str) -> Optional[float]:
    """
    Parse a coordinate cell, tolerating a comma as decimal separator.

    Returns None when the cell is not a plain finite decimal number
    (an overflowing exponent such as 1e999 is rejected). No range check.
    """
    text = raw.strip().replace(",", ".")
    if not _NUMBER.match(text):
        return None
    value = float(text)
    if not math.isfinite(value):
        return None
    return value


def ingest(header_row: Sequence[str], data_rows: Sequence[Sequence[str]]) -> IngestionResult:
    """
    Validate ``data_rows`` against ``header_row``.

    Rows with an empty id/name or a non-numeric lat/lng are counted as
    rejected; a repeated id keeps the first row. Unknown columns are ignored.

    Raises:
        MissingRequiredColumnsError: If id, name, lat or lng is not a header cell
    """
    headers = [h.strip() for h in header_row]

    def index_of(name: str) -> int:
        return headers.index(name) if name in headers else -1

    missing = [name for name in REQUIRED_COLUMNS if index_of(name) == -1]
    if missing:
        raise MissingRequiredColumnsError(missing)

    id_i = index_of("id")
    name_i = index_of("name")
    lat_i = index_of("lat")
    lng_i = index_of("lng")
    desc_i = index_of("description")
    addr_i = index_of("address")
    img_i = index_of("imageUrl")

    accepted: List[LocationRecord] = []
    seen_ids = set()
    rejected = 0

    for row in data_rows:
        cells = [c.strip() for c in row]
        if all(not c for c in cells):
            rejected += 1
            continue

        def cell(i: int) -> str:
            return cells[i] if 0 <= i < len(cells) else ""

        record_id = cell(id_i)
        name = cell(name_i)
        lat = parse_decimal(cell(lat_i))
        lng = parse_decimal(cell(lng_i))

        if not record_id or not name or lat is None or lng is None:
            rejected += 1
            continue

        if record_id in seen_ids:
            logger.warning(f"Duplicate location id '{record_id}' skipped")
            rejected += 1
            continue
        seen_ids.add(record_id)

        accepted.append(
            LocationRecord(
                id=record_id,
                name=name,
                description=cell(desc_i),
                address=cell(addr_i),
                coordinate=Coordinate(lat=lat, lng=lng),
                image_url=cell(img_i) or None,
            )
        )

    return IngestionResult(accepted=tuple(accepted), rejected_count=rejected)


class LocationCatalog:
    """
    Ordered, immutable-snapshot set of locations.

    The whole set is swapped in one assignment, so a reader holding
    ``records`` always sees a complete ingestion cycle.
    """

    def __init__(self, records: Sequence[LocationRecord] = ()):
        self._records: tuple[LocationRecord, ...] = tuple(records)

    @property
    def records(self) -> tuple[LocationRecord, ...]:
        return self._records

    def replace(self, records: Sequence[LocationRecord]) -> None:
        self._records = tuple(records)
        logger.info(f"Catalog replaced with {len(self._records)} locations")

    def get(self, record_id: str) -> Optional[LocationRecord]:
        for record in self._records:
            if record.id == record_id:
                return record
        return None

    def is_empty(self) -> bool:
        return not self._records

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[LocationRecord]:
        return iter(self._records)
