from pydantic import BaseModel, ConfigDict, Field
from typing import Optional

from spotmap.models.internal_models import Coordinate


class LocationRecord(BaseModel):
    """One validated point of interest from the published dataset"""
    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    description: str = ""
    address: str = ""
    coordinate: Coordinate
    image_url: Optional[str] = None


class IngestionResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    accepted: tuple[LocationRecord, ...] = ()
    rejected_count: int = Field(default=0, ge=0)


class NearestResult(BaseModel):
    """Nearest spot to a fix, as shown in the detail sheet"""
    model_config = ConfigDict(frozen=True)

    record: LocationRecord
    distance_m: float = Field(ge=0)
    distance_text: str
    maps_url: str
