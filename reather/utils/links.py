"""Outbound link builders for maps, flight tracking and real estate"""
from typing import List, Optional, Tuple

from reather.models.airport import AirportRecord

FLIGHTRADAR24_URL = "https://www.flightradar24.com/airport/{code}"
ZILLOW_URL = "https://www.zillow.com/homes/for_sale/{zip_code}"
GOOGLE_MAPS_URL = "https://www.google.com/maps?q={lat},{lon}&ll={lat},{lon}&z=17&t=k"


def flightradar24_url(airport_code: str) -> str:
    return FLIGHTRADAR24_URL.format(code=airport_code)


def zillow_url(zip_code: str) -> str:
    return ZILLOW_URL.format(zip_code=zip_code)


def google_maps_url(lat: float, lon: float) -> str:
    """Satellite view centered on a point"""
    return GOOGLE_MAPS_URL.format(lat=lat, lon=lon)


def extract_zip_code(address: str) -> Optional[str]:
    """
    Extract the 5-digit ZIP code ending a US address

    Expects the format '123 MAIN ST, CITY, STATE, 12345'; the last word of
    the last comma-separated part must be exactly five digits.

    Args:
        address: Address string

    Returns:
        ZIP code or None if the address does not end with one
    """
    last_part = address.split(',')[-1]
    words = last_part.split()
    if not words:
        return None
    candidate = words[-1]
    if len(candidate) == 5 and candidate.isascii() and candidate.isdigit():
        return candidate
    return None


def airport_links(airport: AirportRecord, code: Optional[str] = None) -> List[Tuple[str, str]]:
    """
    Links published for an airport, in display order

    Args:
        airport: Airport record
        code: Code used for the Flightradar24 link instead of the IATA code

    Returns:
        (label, url) pairs for the home page, Wikipedia and Flightradar24
        when the airport has them
    """
    links = []
    if airport.home_link.strip():
        links.append(("Home page", airport.home_link.strip()))
    if airport.wikipedia_link.strip():
        links.append(("Wikipedia", airport.wikipedia_link.strip()))
    code = code or airport.iata_code.strip().upper()
    if code:
        links.append(("Flightradar24", flightradar24_url(code)))
    return links
