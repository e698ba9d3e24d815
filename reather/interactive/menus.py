"""Interactive console menus"""
from dataclasses import dataclass
from datetime import date
from typing import Optional
import logging

import click

from reather.models.address import StoredAddress
from reather.models.config import Config
from reather.models.weather import StationInfo
from reather.services import earthquakes, geocoder, tides, weather
from reather.services.address_book import AddressBook
from reather.services.airport_lookup import AirportLookup
from reather.services.http_client import HttpClient, ServiceError
from reather.utils.links import (
    airport_links,
    extract_zip_code,
    flightradar24_url,
    google_maps_url,
    zillow_url,
)
from reather.utils.output import (
    format_airport,
    format_earthquake,
    format_forecast_period,
    format_observation,
    format_tide_prediction,
)

logger = logging.getLogger(__name__)


@dataclass
class AppContext:
    """Everything the menus need, built once by the entry point"""
    config: Config
    client: HttpClient
    airports: AirportLookup
    address_book: AddressBook


def prompt(text: str) -> str:
    """Read one line of input; blank input is allowed"""
    return click.prompt(text, default='', show_default=False).strip()


def error(message: str) -> None:
    click.echo(message, err=True)


def ensure_address_book(ctx: AppContext) -> None:
    """Offer to seed the address file when it is missing or empty"""
    book = ctx.address_book
    if not book.is_empty():
        return

    click.echo(f"'{book.path}' is empty or does not exist.")
    answer = prompt("Would you like to populate it with seed addresses? (yes/no)")
    if answer.lower() == 'yes':
        click.echo("Processing seed addresses...")
        stored = book.seed(lambda query: geocoder.geocode_address(ctx.client, query), echo=click.echo)
        click.echo(f"{stored} seed addresses processed and stored in '{book.path}'.")
    else:
        click.echo("Skipping seed address population. You can add addresses manually.")
        book.create_empty()


def run_main_menu(ctx: AppContext) -> None:
    while True:
        click.echo("\nMain Menu:")
        click.echo("1. Enter a new street address")
        click.echo("2. Choose from stored addresses")
        click.echo("3. Search airports")
        click.echo("4. Exit")
        choice = prompt("Please enter your choice")

        if choice == '1':
            enter_new_address(ctx)
        elif choice == '2':
            choose_stored_address(ctx)
        elif choice == '3':
            search_airports(ctx)
        elif choice == '4':
            click.echo("Exiting Reather. Goodbye!")
            return
        else:
            error("Invalid input: Invalid choice. Please enter 1, 2, 3, or 4.")


def enter_new_address(ctx: AppContext) -> None:
    query = prompt("Enter new address (e.g., 1600 Pennsylvania Ave NW, Washington, DC, 20500)")
    if not query:
        error("Invalid input: Address cannot be empty. Please try again.")
        return

    try:
        match = geocoder.geocode_address(ctx.client, query)
    except ServiceError as e:
        error(f"Error geocoding address '{query}': {e}")
        return
    if match is None:
        error(f"API error: Could not find a match for the address: '{query}'")
        return

    stored = ctx.address_book.add(match.address, match.latitude, match.longitude)
    click.echo(f"Address geocoded and added: {stored.address} (Lat: {stored.latitude}, Lon: {stored.longitude})")
    show_address_submenu(ctx, stored)


def choose_stored_address(ctx: AppContext) -> None:
    addresses = ctx.address_book.load()
    if not addresses:
        click.echo("No stored addresses found. Please add an address first (Option 1).")
        return

    click.echo("\nStored Addresses:")
    for i, entry in enumerate(addresses, 1):
        click.echo(f"{i}. {entry.address}")
    click.echo(f"{len(addresses) + 1}. Return to Main Menu")
    selection = prompt("Select an address number or return")

    try:
        number = int(selection)
    except ValueError:
        error("Invalid input: Please enter a number corresponding to an address or to return.")
        return
    if number == len(addresses) + 1:
        return
    if not 1 <= number <= len(addresses):
        error("Invalid input: Invalid selection number. Please choose from the list.")
        return

    selected = addresses[number - 1]
    click.echo(f"\nSelected address: {selected.address} (Lat: {selected.latitude}, Lon: {selected.longitude})")
    show_address_submenu(ctx, selected)


def search_airports(ctx: AppContext) -> None:
    term = prompt("Search term (name, code, city or region; use * as a wildcard, e.g. *International*)")
    if not term:
        error("Invalid input: Search term cannot be empty.")
        return

    results = ctx.airports.search(term)
    if not results:
        click.echo(f"No airports match '{term}'.")
        return
    click.echo(f"\n{len(results)} airport(s) match '{term}':")
    for airport in results:
        click.echo(f"  {format_airport(airport)}")


def show_address_submenu(ctx: AppContext, address: StoredAddress) -> None:
    click.echo(f"\nOperating for address: {address.address} (Lat: {address.latitude}, Lon: {address.longitude})")

    station: Optional[StationInfo] = None
    try:
        station = weather.find_nearest_station(ctx.client, address.latitude, address.longitude)
    except ServiceError as e:
        error(f"Error finding nearest station for Lat: {address.latitude}, Lon: {address.longitude}: {e}")
    else:
        if station is None:
            error(f"API error: Could not find any nearby weather observation stations for the address "
                  f"at Lat: {address.latitude}, Lon: {address.longitude}")
        elif station.has_coordinates:
            click.echo(f"Found nearest station: {station.name} ({station.station_id}) - "
                       f"Lat: {station.latitude}, Lon: {station.longitude}")
        else:
            click.echo(f"Found nearest station: {station.name} ({station.station_id}) "
                       f"(Coordinates not available from API)")

    actions = {
        '1': lambda: display_current_conditions(ctx, station),
        '2': lambda: display_local_forecast(ctx, station),
        '3': lambda: display_tides(ctx, address),
        '4': lambda: display_earthquakes(ctx, address),
        '5': lambda: display_external_links(ctx, address, station),
        '6': lambda: display_location_description(ctx, address),
    }

    while True:
        click.echo(f"\n--- Submenu for {address.address} ---")
        click.echo("1. Get Current Conditions")
        click.echo("2. Get Local Forecast")
        click.echo("3. Get Tide Predictions")
        click.echo("4. Recent Earthquakes Nearby")
        click.echo("5. External Links (Maps, Flights, Real Estate)")
        click.echo("6. Describe This Location")
        click.echo("7. Return to Main Menu")
        choice = prompt("Please enter your choice")

        if choice == '7':
            click.echo("Returning to Main Menu...")
            return
        action = actions.get(choice)
        if action is None:
            error("Invalid input: Invalid choice, please try again.")
            continue
        try:
            action()
        except ServiceError as e:
            error(f"Error: {e}")


def display_current_conditions(ctx: AppContext, station: Optional[StationInfo]) -> None:
    if station is None:
        error("Cannot fetch weather: Station ID is unknown or no station was found.")
        return

    observation = weather.fetch_latest_observation(ctx.client, station.station_id)
    if observation is None:
        click.echo(f"Weather data properties are missing in the API response for station {station.station_id}.")
        return
    click.echo(f"\n--- Current Conditions at {station.name} ({station.station_id}) ---")
    for line in format_observation(observation):
        click.echo(line)


def display_local_forecast(ctx: AppContext, station: Optional[StationInfo]) -> None:
    if station is None or not station.forecast_url:
        error("Forecast URL not available for this location.")
        return

    click.echo(f"\nFetching local forecast for area near {station.name}...")
    periods = weather.fetch_forecast(ctx.client, station.forecast_url)
    click.echo(f"\n--- Local Forecast for area near {station.name} ---")
    if not periods:
        click.echo("No forecast periods available for this location.")
        return
    click.echo("")
    for line in format_forecast_period(periods[0]):
        click.echo(line)


def display_tides(ctx: AppContext, address: StoredAddress) -> None:
    radius = ctx.config.tide_station_radius_km
    station = tides.find_nearest_tide_station(ctx.client, address.latitude, address.longitude, radius)
    if station is None:
        click.echo(f"No tide prediction station within {radius:.0f} km of this address.")
        return

    today = date.today()
    predictions = tides.fetch_tide_predictions(ctx.client, station.station_id, today)
    click.echo(f"\n--- Tides for {today.isoformat()} at {station.name} ({station.station_id}), "
               f"{station.distance_km:.1f} km away ---")
    if not predictions:
        click.echo("No tide predictions available for today.")
        return
    for prediction in predictions:
        click.echo(format_tide_prediction(prediction))


def display_earthquakes(ctx: AppContext, address: StoredAddress) -> None:
    config = ctx.config
    quakes = earthquakes.fetch_recent_earthquakes(
        ctx.client, config.quake_feed, address.latitude, address.longitude,
        config.quake_radius_km, config.quake_limit
    )
    click.echo(f"\n--- Earthquakes within {config.quake_radius_km:.0f} km (feed {config.quake_feed}) ---")
    if not quakes:
        click.echo("No recent earthquakes nearby.")
        return
    for quake in quakes:
        click.echo(format_earthquake(quake))


def display_external_links(ctx: AppContext, address: StoredAddress, station: Optional[StationInfo]) -> None:
    click.echo("\n--- External Links (Maps, Flights, Real Estate) ---")
    click.echo(f"Address: {address.address}")
    click.echo(f"  Google Maps: {google_maps_url(address.latitude, address.longitude)}")

    zip_code = extract_zip_code(address.address)
    if zip_code:
        click.echo(f"  Zillow: {zillow_url(zip_code)}")

    if station is None:
        click.echo("Weather Station: Unknown Station Name (ID N/A) (Coordinates not available for map link)")
        return
    if not station.has_coordinates:
        click.echo(f"Weather Station: {station.name} ({station.station_id}) "
                   f"(Coordinates not available for map link)")
        return

    click.echo(f"\nWeather Station: {station.name} ({station.station_id})")
    click.echo(f"  Google Maps: {google_maps_url(station.latitude, station.longitude)}")

    airport_code = ctx.airports.code_from_station(station.station_id)
    if airport_code:
        airport = ctx.airports.lookup_by_iata(airport_code)
        if airport is None:
            click.echo("  This weather station is at an airport.")
            click.echo(f"  Flightradar24: {flightradar24_url(airport_code)}")
        else:
            click.echo(f"  This weather station is at an airport: {airport.name}")
            for label, url in airport_links(airport, code=airport_code):
                click.echo(f"  {label}: {url}")


def display_location_description(ctx: AppContext, address: StoredAddress) -> None:
    place = geocoder.reverse_geocode(ctx.client, address.latitude, address.longitude)
    if place is None:
        click.echo("No description available for this location.")
        return
    click.echo(f"\nLocation: {place.display_name}")
    if place.city or place.state:
        click.echo(f"  Area: {', '.join(part for part in (place.city, place.state) if part)}")
    if place.postcode:
        click.echo(f"  Postcode: {place.postcode}")
        if not extract_zip_code(address.address) and len(place.postcode) == 5 and place.postcode.isdigit():
            click.echo(f"  Zillow: {zillow_url(place.postcode)}")
