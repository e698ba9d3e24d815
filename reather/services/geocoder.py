"""Forward (Census) and reverse (Nominatim) geocoding"""
from typing import Optional
import logging

from pydantic import ValidationError

from reather.models.weather import GeocodedAddress, ReverseGeocode
from reather.services.http_client import ApiError, HttpClient

logger = logging.getLogger(__name__)

CENSUS_GEOCODER_URL = "https://geocoding.geo.census.gov/geocoder/locations/onelineaddress"
CENSUS_BENCHMARK = "Public_AR_Current"
NOMINATIM_REVERSE_URL = "https://nominatim.openstreetmap.org/reverse"


def geocode_address(client: HttpClient, address_query: str) -> Optional[GeocodedAddress]:
    """
    Geocode a one-line US street address

    Args:
        client: HTTP client
        address_query: Address such as '1600 Pennsylvania Ave NW, Washington, DC, 20500'

    Returns:
        First address match, or None if the geocoder found nothing

    Raises:
        NetworkError: On transport failure
        ApiError: On an error status or an unexpected response shape
    """
    params = {'address': address_query, 'benchmark': CENSUS_BENCHMARK, 'format': 'json'}
    data = client.get_json(CENSUS_GEOCODER_URL, params=params)

    try:
        matches = data['result']['addressMatches']
    except (KeyError, TypeError) as e:
        raise ApiError(f"Failed to parse JSON response from geocoding service: missing {e}") from e

    if not matches:
        logger.debug(f"No geocoder match for '{address_query}'")
        return None

    first = matches[0]
    try:
        return GeocodedAddress(
            address=first['matchedAddress'],
            latitude=first['coordinates']['y'],
            longitude=first['coordinates']['x'],
        )
    except (KeyError, TypeError, ValidationError) as e:
        raise ApiError(f"Unexpected address match from geocoding service: {e}") from e


def reverse_geocode(client: HttpClient, lat: float, lon: float) -> Optional[ReverseGeocode]:
    """
    Describe the place at a coordinate

    Args:
        client: HTTP client
        lat: Latitude in decimal degrees
        lon: Longitude in decimal degrees

    Returns:
        ReverseGeocode, or None if no place is known at that point
    """
    params = {'lat': lat, 'lon': lon, 'format': 'json', 'addressdetails': 1, 'zoom': 18}
    data = client.get_json(NOMINATIM_REVERSE_URL, params=params)

    if not isinstance(data, dict) or 'error' in data or not data.get('display_name'):
        logger.debug(f"No reverse geocode result for {lat},{lon}")
        return None

    address = data.get('address') or {}
    city = address.get('city') or address.get('town') or address.get('village') or address.get('hamlet')
    return ReverseGeocode(
        display_name=data['display_name'],
        city=city,
        state=address.get('state'),
        postcode=address.get('postcode'),
    )
