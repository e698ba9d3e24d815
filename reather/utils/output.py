"""Console formatting for weather, tides, earthquakes and airports"""
from typing import List, Optional

from reather.models.airport import AirportRecord
from reather.models.marine import Earthquake, TidePrediction
from reather.models.weather import CloudLayer, ForecastPeriod, Observation, QuantitativeValue
from reather.processing.conversions import (
    celsius_to_fahrenheit,
    meters_to_feet,
    meters_to_miles,
    pascals_to_inhg,
    speed_to_mph,
)

NOT_AVAILABLE = "N/A"
CLEAR_SKY_AMOUNTS = ("SKC", "CLR")


def _value(quantity: Optional[QuantitativeValue]) -> Optional[float]:
    return quantity.value if quantity is not None else None


def format_temperature(quantity: Optional[QuantitativeValue]) -> str:
    celsius = _value(quantity)
    if celsius is None:
        return NOT_AVAILABLE
    return f"{celsius_to_fahrenheit(celsius):.1f} °F"


def format_wind(observation: Observation) -> str:
    """Direction and speed, plus gusts when reported; N/A unless both are known"""
    direction = _value(observation.wind_direction)
    speed = speed_to_mph(observation.wind_speed)
    if direction is None or speed is None:
        return NOT_AVAILABLE
    gust = speed_to_mph(observation.wind_gust)
    gust_str = f" (gusts to {gust:.1f} mph)" if gust is not None else ""
    return f"{direction:.0f} deg at {speed:.1f} mph{gust_str}"


def format_ceiling(cloud_layers: Optional[List[CloudLayer]]) -> str:
    """
    Ceiling from the reported cloud layers

    A clear-sky layer (SKC or CLR) anywhere wins; otherwise the first layer
    with a base height is used.
    """
    if not cloud_layers:
        return NOT_AVAILABLE
    if any(layer.amount in CLEAR_SKY_AMOUNTS for layer in cloud_layers):
        return "Clear (>12,000 ft)"
    for layer in cloud_layers:
        if layer.base is not None and layer.base.value is not None:
            return f"{meters_to_feet(layer.base.value):.0f} ft"
    return NOT_AVAILABLE


def format_observation(observation: Observation) -> List[str]:
    """Lines describing current conditions, N/A for missing readings"""
    humidity = NOT_AVAILABLE
    if _value(observation.relative_humidity) is not None:
        humidity = f"{observation.relative_humidity.value:.1f} %"

    visibility = NOT_AVAILABLE
    if _value(observation.visibility) is not None:
        visibility = f"{meters_to_miles(observation.visibility.value):.1f} mi"

    pressure = NOT_AVAILABLE
    if _value(observation.barometric_pressure) is not None:
        pressure = f"{pascals_to_inhg(observation.barometric_pressure.value):.2f} inHg"

    return [
        f"Temperature: {format_temperature(observation.temperature)}",
        f"Heat Index: {format_temperature(observation.heat_index)}",
        f"Conditions: {observation.text_description or NOT_AVAILABLE}",
        f"Wind: {format_wind(observation)}",
        f"Humidity: {humidity}",
        f"Ceiling: {format_ceiling(observation.cloud_layers)}",
        f"Visibility: {visibility}",
        f"Pressure: {pressure}",
    ]


def format_forecast_period(period: ForecastPeriod) -> List[str]:
    return [
        f"{period.name} ({period.temperature:g}°{period.temperature_unit})",
        period.detailed_forecast,
    ]


def format_tide_prediction(prediction: TidePrediction) -> str:
    return f"{prediction.label:<5s} {prediction.time.strftime('%I:%M %p')}  {prediction.height_ft:6.2f} ft"


def format_earthquake(quake: Earthquake) -> str:
    magnitude = f"M{quake.magnitude:.1f}" if quake.magnitude is not None else "M?"
    when = quake.time.strftime('%Y-%m-%d %H:%M UTC')
    distance = f"{quake.distance_km:5.0f} km" if quake.distance_km is not None else "    ? km"
    return f"{magnitude:>5s}  {when}  {distance}  {quake.place or 'Unknown location'}"


def format_airport(airport: AirportRecord) -> str:
    """One-line summary: codes, name, municipality and region"""
    codes = "/".join(code for code in (airport.iata_code.strip(), airport.ident.strip()) if code)
    place = ", ".join(part for part in (airport.municipality, airport.iso_region) if part)
    summary = f"{codes:9s} {airport.name}"
    if place:
        summary += f" - {place}"
    return summary
