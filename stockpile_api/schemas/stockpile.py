# stockpile_api/schemas/stockpile.py
from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


# GeoJSON-style point, coordinates are [longitude, latitude]
class Location(BaseModel):
    type: Literal["Point"] = "Point"
    coordinates: List[float] = Field(min_length=2, max_length=2)

    model_config = ConfigDict(allow_inf_nan=False)

    @field_validator("coordinates")
    @classmethod
    def _in_range(cls, v: List[float]) -> List[float]:
        longitude, latitude = v
        if not -180 <= longitude <= 180:
            raise ValueError("longitude must be between -180 and 180")
        if not -90 <= latitude <= 90:
            raise ValueError("latitude must be between -90 and 90")
        return v

    @property
    def longitude(self) -> float:
        return self.coordinates[0]

    @property
    def latitude(self) -> float:
        return self.coordinates[1]


# Shared attributes for stockpile payloads
class StockpileBase(BaseModel):
    name: str = Field(min_length=1)
    material: str = Field(min_length=1)
    grade: str = Field(min_length=1)
    length: float = Field(ge=0)
    width: float = Field(ge=0)
    height: float = Field(ge=0)
    volume: float = Field(ge=0)
    location: Location

    model_config = ConfigDict(str_strip_whitespace=True, allow_inf_nan=False)


# Body of POST /stockpiles
class StockpileCreate(StockpileBase):
    pass


# Body of PUT /stockpiles/{id}; every editable field is replaced
class StockpileUpdate(StockpileBase):
    pass


class StockpileResponse(StockpileBase):
    id: int
    responsible_team_id: Optional[int] = None
    # None when the responsible user no longer exists
    responsible_name: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
