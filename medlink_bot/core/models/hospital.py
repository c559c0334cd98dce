"""
Hospital data models.
"""

from typing import List, Optional
from pydantic import BaseModel, Field, ConfigDict


class GeoPoint(BaseModel):
    """GeoJSON point, coordinates are [longitude, latitude]."""

    model_config = ConfigDict(extra="forbid")

    type: str = "Point"
    coordinates: List[float] = Field(default_factory=list)


class Hospital(BaseModel):
    """Hospital record as stored by the booking repository."""

    model_config = ConfigDict(extra="forbid")

    id: str
    name: str = Field(min_length=1)
    available_beds: int = Field(default=0, ge=0)
    address: Optional[str] = None
    location: Optional[GeoPoint] = None
    phone: Optional[str] = None
