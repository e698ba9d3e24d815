"""Data models for National Weather Service and geocoder responses"""
from typing import List, Optional
from pydantic import BaseModel, Field


class GeocodedAddress(BaseModel):
    """First match returned by the Census geocoder"""
    address: str
    latitude: float
    longitude: float


class ReverseGeocode(BaseModel):
    """Place description returned by the reverse geocoder"""
    display_name: str
    city: Optional[str] = None
    state: Optional[str] = None
    postcode: Optional[str] = None


class StationInfo(BaseModel):
    """Nearest observation station for a point"""
    station_id: str
    name: str
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    forecast_url: Optional[str] = None

    @property
    def has_coordinates(self) -> bool:
        return self.latitude is not None and self.longitude is not None


class QuantitativeValue(BaseModel):
    """NWS value/unit pair; value is null for missing readings"""
    value: Optional[float] = None
    unit_code: Optional[str] = Field(None, alias="unitCode")


class CloudBase(BaseModel):
    value: Optional[float] = Field(None, description="Cloud base in meters")


class CloudLayer(BaseModel):
    base: Optional[CloudBase] = None
    amount: Optional[str] = Field(None, description="SKC, CLR, FEW, SCT, BKN or OVC")


class Observation(BaseModel):
    """Latest observation properties for a station"""
    timestamp: Optional[str] = None
    temperature: Optional[QuantitativeValue] = None
    heat_index: Optional[QuantitativeValue] = Field(None, alias="heatIndex")
    text_description: Optional[str] = Field(None, alias="textDescription")
    wind_direction: Optional[QuantitativeValue] = Field(None, alias="windDirection")
    wind_speed: Optional[QuantitativeValue] = Field(None, alias="windSpeed")
    wind_gust: Optional[QuantitativeValue] = Field(None, alias="windGust")
    relative_humidity: Optional[QuantitativeValue] = Field(None, alias="relativeHumidity")
    cloud_layers: Optional[List[CloudLayer]] = Field(None, alias="cloudLayers")
    visibility: Optional[QuantitativeValue] = None
    barometric_pressure: Optional[QuantitativeValue] = Field(None, alias="barometricPressure")


class ForecastPeriod(BaseModel):
    """Single period of a zone forecast"""
    name: str
    temperature: float
    temperature_unit: str = Field(..., alias="temperatureUnit")
    detailed_forecast: str = Field(..., alias="detailedForecast")
    wind_speed: Optional[str] = Field(None, alias="windSpeed")
    wind_direction: Optional[str] = Field(None, alias="windDirection")
