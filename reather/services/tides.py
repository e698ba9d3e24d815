"""NOAA CO-OPS tide stations and high/low predictions"""
from datetime import date
from typing import List, Optional
import logging

from pydantic import ValidationError

from reather.models.marine import TidePrediction, TideStation
from reather.processing.geo import haversine_km
from reather.services.http_client import ApiError, HttpClient

logger = logging.getLogger(__name__)

TIDE_STATIONS_URL = "https://api.tidesandcurrents.noaa.gov/mdapi/prod/webapi/stations.json"
TIDE_DATA_URL = "https://api.tidesandcurrents.noaa.gov/api/prod/datagetter"
APPLICATION_NAME = "reather"


def find_nearest_tide_station(client: HttpClient, lat: float, lon: float,
                              max_km: float) -> Optional[TideStation]:
    """
    Find the closest tide prediction station within a radius

    Args:
        client: HTTP client
        lat: Latitude in decimal degrees
        lon: Longitude in decimal degrees
        max_km: Stations farther than this are ignored

    Returns:
        Closest TideStation with distance_km set, or None if none is in range
    """
    data = client.get_json(TIDE_STATIONS_URL, params={'type': 'tidepredictions'})
    if not isinstance(data, dict) or not isinstance(data.get('stations'), list):
        raise ApiError(f"Failed to parse JSON response from tide station list (URL: {TIDE_STATIONS_URL})")

    nearest: Optional[TideStation] = None
    for raw in data['stations']:
        try:
            station = TideStation.model_validate(raw)
        except ValidationError:
            logger.debug(f"Skipping tide station without usable coordinates: {raw.get('id') if isinstance(raw, dict) else raw}")
            continue
        distance = haversine_km(lat, lon, station.latitude, station.longitude)
        if distance > max_km:
            continue
        if nearest is None or distance < nearest.distance_km:
            nearest = station.model_copy(update={'distance_km': distance})

    if nearest is None:
        logger.debug(f"No tide station within {max_km} km of {lat},{lon}")
    return nearest


def fetch_tide_predictions(client: HttpClient, station_id: str, day: date) -> List[TidePrediction]:
    """
    Get high and low water predictions for one day at a station

    Times are local standard/daylight time at the station, heights are feet
    above mean lower low water.
    """
    stamp = day.strftime('%Y%m%d')
    params = {
        'begin_date': stamp,
        'end_date': stamp,
        'station': station_id,
        'product': 'predictions',
        'datum': 'MLLW',
        'time_zone': 'lst_ldt',
        'interval': 'hilo',
        'units': 'english',
        'format': 'json',
        'application': APPLICATION_NAME,
    }
    data = client.get_json(TIDE_DATA_URL, params=params)
    if isinstance(data, dict) and 'error' in data:
        error = data['error']
        message = error.get('message', 'unknown error') if isinstance(error, dict) else (error or 'unknown error')
        raise ApiError(f"Tide predictions unavailable for station {station_id}: {message}")

    try:
        return [TidePrediction.model_validate(p) for p in data['predictions']]
    except (KeyError, TypeError, ValidationError) as e:
        raise ApiError(f"Failed to parse JSON response from tide predictions (station {station_id}): {e}") from e
