"""Data models for tide predictions and earthquake events"""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field, field_validator


class TideStation(BaseModel):
    """NOAA CO-OPS tide prediction station"""
    station_id: str = Field(..., alias="id")
    name: str
    state: Optional[str] = None
    latitude: float = Field(..., alias="lat")
    longitude: float = Field(..., alias="lng")
    distance_km: Optional[float] = None


class TidePrediction(BaseModel):
    """High or low water prediction"""
    time: datetime = Field(..., alias="t", description="Local standard/daylight time at the station")
    height_ft: float = Field(..., alias="v", description="Height above MLLW in feet")
    kind: str = Field(..., alias="type", description="H for high water, L for low water")

    @field_validator('time', mode='before')
    @classmethod
    def parse_time(cls, v):
        """Parse CO-OPS 'YYYY-MM-DD HH:MM' timestamps"""
        if isinstance(v, str):
            return datetime.strptime(v, '%Y-%m-%d %H:%M')
        return v

    @property
    def label(self) -> str:
        return "High" if self.kind.upper() == "H" else "Low"


class Earthquake(BaseModel):
    """Event from the USGS GeoJSON summary feed"""
    event_id: str
    magnitude: Optional[float] = None
    place: Optional[str] = None
    time: datetime = Field(..., description="Origin time in UTC")
    latitude: float
    longitude: float
    depth_km: Optional[float] = None
    url: Optional[str] = None
    distance_km: Optional[float] = None
