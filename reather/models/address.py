"""Stored address model"""
from typing import Optional
from pydantic import BaseModel, Field


class StoredAddress(BaseModel):
    """A geocoded address as persisted in the address file"""
    address: str = Field(..., description="Matched address returned by the geocoder")
    latitude: float
    longitude: float

    def to_line(self) -> str:
        """Serialize as an `address;lat;lon` line (no newline)"""
        return f"{self.address};{self.latitude};{self.longitude}"

    @classmethod
    def from_line(cls, line: str) -> Optional['StoredAddress']:
        """
        Parse an `address;lat;lon` line

        Args:
            line: Raw line from the address file

        Returns:
            StoredAddress, or None when the line does not have three parts

        Raises:
            ValueError: If latitude or longitude is not a number
        """
        parts = line.rstrip('\r\n').split(';')
        if len(parts) != 3:
            return None
        return cls(address=parts[0], latitude=float(parts[1]), longitude=float(parts[2]))
