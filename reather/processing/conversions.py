"""Unit conversions for NWS observation values"""
from typing import Optional

from reather.models.weather import QuantitativeValue

MPS_TO_MPH = 2.23694
KMH_TO_MPH = 0.621371
METERS_TO_FEET = 3.28084
METERS_TO_MILES = 0.000621371
PASCALS_TO_INHG = 0.0002953


def celsius_to_fahrenheit(celsius: float) -> float:
    return celsius * 9.0 / 5.0 + 32.0


def mps_to_mph(speed: float) -> float:
    return speed * MPS_TO_MPH


def kmh_to_mph(speed: float) -> float:
    return speed * KMH_TO_MPH


def meters_to_feet(meters: float) -> float:
    return meters * METERS_TO_FEET


def meters_to_miles(meters: float) -> float:
    return meters * METERS_TO_MILES


def pascals_to_inhg(pascals: float) -> float:
    return pascals * PASCALS_TO_INHG


def speed_to_mph(quantity: Optional[QuantitativeValue]) -> Optional[float]:
    """
    Convert an NWS speed reading to miles per hour

    The unit is taken from the reading's unitCode: 'wmoUnit:km_h-1' is
    treated as km/h, anything else (including a missing code) as m/s.

    Args:
        quantity: NWS value/unit pair, possibly None

    Returns:
        Speed in mph or None when there is no reading
    """
    if quantity is None or quantity.value is None:
        return None
    unit = (quantity.unit_code or '').lower()
    if unit.endswith('km_h-1'):
        return kmh_to_mph(quantity.value)
    return mps_to_mph(quantity.value)
