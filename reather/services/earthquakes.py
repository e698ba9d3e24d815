"""USGS earthquake summary feed"""
from datetime import datetime
from typing import List
import logging

import pytz

from reather.models.marine import Earthquake
from reather.processing.geo import haversine_km
from reather.services.http_client import ApiError, HttpClient

logger = logging.getLogger(__name__)

USGS_FEED_URL = "https://earthquake.usgs.gov/earthquakes/feed/v1.0/summary/{feed}.geojson"


def parse_feature(feature: dict) -> Earthquake:
    """
    Convert a GeoJSON feature into an Earthquake

    Raises:
        KeyError, TypeError, ValueError: If the feature lacks time or coordinates
    """
    properties = feature['properties']
    coordinates = feature['geometry']['coordinates']
    depth = coordinates[2] if len(coordinates) > 2 else None
    return Earthquake(
        event_id=str(feature.get('id', '')),
        magnitude=properties.get('mag'),
        place=properties.get('place'),
        # USGS times are milliseconds since the epoch
        time=datetime.fromtimestamp(properties['time'] / 1000.0, tz=pytz.utc),
        latitude=coordinates[1],
        longitude=coordinates[0],
        depth_km=depth,
        url=properties.get('url'),
    )


def fetch_recent_earthquakes(client: HttpClient, feed: str, lat: float, lon: float,
                             radius_km: float, limit: int) -> List[Earthquake]:
    """
    Get recent earthquakes near a point

    Args:
        client: HTTP client
        feed: USGS summary feed name, e.g. '2.5_week'
        lat: Latitude in decimal degrees
        lon: Longitude in decimal degrees
        radius_km: Only events within this distance are kept
        limit: Max number of events returned

    Returns:
        Earthquakes with distance_km set, newest first
    """
    url = USGS_FEED_URL.format(feed=feed)
    data = client.get_json(url)
    if not isinstance(data, dict) or not isinstance(data.get('features'), list):
        raise ApiError(f"Failed to parse JSON response from earthquake feed (URL: {url})")

    nearby = []
    for feature in data['features']:
        try:
            quake = parse_feature(feature)
        except (KeyError, TypeError, ValueError, IndexError) as e:
            logger.debug(f"Skipping malformed earthquake feature: {e}")
            continue
        distance = haversine_km(lat, lon, quake.latitude, quake.longitude)
        if distance <= radius_km:
            nearby.append(quake.model_copy(update={'distance_km': distance}))

    nearby.sort(key=lambda q: q.time, reverse=True)
    logger.debug(f"{len(nearby)} earthquakes within {radius_km} km in feed {feed}")
    return nearby[:limit]
