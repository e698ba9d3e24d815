"""National Weather Service stations, observations and forecasts"""
from typing import List, Optional
import logging

from pydantic import ValidationError

from reather.models.weather import ForecastPeriod, Observation, StationInfo
from reather.services.http_client import ApiError, HttpClient

logger = logging.getLogger(__name__)

NWS_API_URL = "https://api.weather.gov"


def find_nearest_station(client: HttpClient, lat: float, lon: float) -> Optional[StationInfo]:
    """
    Find the observation station NWS lists first for a point

    Args:
        client: HTTP client
        lat: Latitude in decimal degrees
        lon: Longitude in decimal degrees

    Returns:
        StationInfo, or None if NWS lists no stations for the point
    """
    points_url = f"{NWS_API_URL}/points/{lat},{lon}"
    points = client.get_json(points_url)
    try:
        properties = points['properties']
        stations_url = properties['observationStations']
    except (KeyError, TypeError) as e:
        raise ApiError(f"Failed to parse JSON response from NWS Points API (URL: {points_url}): missing {e}") from e
    forecast_url = properties.get('forecast')

    stations = client.get_json(stations_url)
    features = []
    if isinstance(stations, dict):
        features = stations.get('features') or []
    if not features:
        relative = (properties.get('relativeLocation') or {}).get('properties') or {}
        if relative.get('city'):
            area = f"area of {relative.get('city')}, {relative.get('state')}"
        else:
            area = "the specified location"
        logger.info(f"No observation stations found directly listed for {area}")
        return None

    first = features[0]
    if not isinstance(first, dict):
        raise ApiError(f"Unexpected station feature in response (URL: {stations_url})")
    station_props = first.get('properties') or {}
    station_id = station_props.get('stationIdentifier')
    if not station_id:
        raise ApiError(f"Station feature without identifier (URL: {stations_url})")

    latitude = longitude = None
    coordinates = (first.get('geometry') or {}).get('coordinates')
    if coordinates is not None:
        if len(coordinates) == 2:
            longitude, latitude = coordinates
        else:
            logger.warning(f"Station {station_id} geometry coordinates array does not have 2 elements")

    return StationInfo(
        station_id=station_id,
        name=station_props.get('name') or station_id,
        latitude=latitude,
        longitude=longitude,
        forecast_url=forecast_url,
    )


def fetch_latest_observation(client: HttpClient, station_id: str) -> Optional[Observation]:
    """
    Get the latest observation for a station

    Returns:
        Observation, or None if the response carries no properties
    """
    url = f"{NWS_API_URL}/stations/{station_id}/observations/latest"
    data = client.get_json(url)
    properties = data.get('properties') if isinstance(data, dict) else None
    if not properties:
        logger.warning(f"Weather data properties are missing in the API response for station {station_id}")
        return None
    try:
        return Observation.model_validate(properties)
    except ValidationError as e:
        raise ApiError(f"Failed to parse JSON response from NWS Observations API (URL: {url}): {e}") from e


def fetch_forecast(client: HttpClient, forecast_url: str) -> List[ForecastPeriod]:
    """Get the forecast periods for a zone forecast URL"""
    data = client.get_json(forecast_url)
    try:
        periods = data['properties']['periods']
        return [ForecastPeriod.model_validate(period) for period in periods]
    except (KeyError, TypeError, ValidationError) as e:
        raise ApiError(f"Failed to parse JSON response from NWS Forecast API (URL: {forecast_url}): {e}") from e
