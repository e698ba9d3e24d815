"""Airport data model"""
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class AirportRecord(BaseModel):
    """One row of the OurAirports reference dataset, kept as sourced text"""
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str = Field(..., description="Unique OurAirports identifier")
    ident: str = Field(..., description="ICAO-style aerodrome identifier")
    airport_type: str = Field(..., alias="type", description="Type classification, e.g. large_airport")
    name: str
    latitude_deg: str
    longitude_deg: str
    elevation_ft: str
    continent: str
    iso_country: str
    iso_region: str = Field(..., description="ISO 3166-2 code, <COUNTRY>-<SUBDIVISION>")
    municipality: str
    scheduled_service: str = Field(..., description="yes or no")
    gps_code: str
    iata_code: str = Field(..., description="3-letter IATA code, may be empty")
    local_code: str
    home_link: str
    wikipedia_link: str
    keywords: str

    @property
    def latitude(self) -> Optional[float]:
        """Latitude in decimal degrees, or None when not numeric"""
        return _parse_degrees(self.latitude_deg)

    @property
    def longitude(self) -> Optional[float]:
        """Longitude in decimal degrees, or None when not numeric"""
        return _parse_degrees(self.longitude_deg)

    @property
    def has_scheduled_service(self) -> bool:
        return self.scheduled_service.strip().lower() == "yes"


def _parse_degrees(value: str) -> Optional[float]:
    try:
        return float(value)
    except (TypeError, ValueError):
        return None
