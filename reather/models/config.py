"""Configuration models"""
from pathlib import Path
from typing import Literal
from pydantic import BaseModel, Field, field_validator

DEFAULT_AIRPORTS_SOURCE = "https://raw.githubusercontent.com/davidmegginson/ourairports-data/main/airports.csv"
DEFAULT_USER_AGENT = "reather-app/0.1 (python-cli-weather-app)"

QuakeFeed = Literal["all_hour", "all_day", "2.5_day", "2.5_week", "4.5_week", "significant_month"]


def is_remote_path(path: str) -> bool:
    """Check if path is an HTTP(S) URL"""
    return path.startswith('http://') or path.startswith('https://')


class Config(BaseModel):
    """Application configuration"""
    data_dir: str = Field("data", description="Directory holding the address file when it exists")
    addresses_file: str = Field("addresses.txt", description="Name of the stored address file")
    airports_source: str = Field(
        DEFAULT_AIRPORTS_SOURCE,
        description="URL or local path of the OurAirports airports.csv"
    )
    user_agent: str = Field(DEFAULT_USER_AGENT, description="User-Agent sent with every request")
    http_timeout: float = Field(15.0, gt=0, description="Per-request timeout in seconds")
    tide_station_radius_km: float = Field(100.0, gt=0, description="Max distance to a tide station")
    quake_radius_km: float = Field(500.0, gt=0, description="Radius for nearby earthquakes")
    quake_feed: QuakeFeed = Field("2.5_week", description="USGS summary feed name")
    quake_limit: int = Field(10, ge=1, description="Max earthquakes to display")
    debug: bool = False

    @field_validator('airports_source', 'user_agent', 'addresses_file')
    @classmethod
    def not_blank(cls, v):
        """Reject empty strings"""
        if not v or not v.strip():
            raise ValueError("must not be empty")
        return v.strip()

    @property
    def is_remote_airports_source(self) -> bool:
        return is_remote_path(self.airports_source)

    @property
    def addresses_path(self) -> Path:
        """
        Location of the address file.

        Uses the data directory when it exists, otherwise the current
        working directory. The data directory is never created.
        """
        data_dir = Path(self.data_dir)
        if data_dir.is_dir():
            return data_dir / self.addresses_file
        return Path.cwd() / self.addresses_file
