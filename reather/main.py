"""Main entry point for Reather"""
import logging
import sys
from typing import Optional, get_args

import click
from pydantic import ValidationError

from reather.interactive.menus import AppContext, ensure_address_book, run_main_menu
from reather.models.config import DEFAULT_AIRPORTS_SOURCE, DEFAULT_USER_AGENT, Config, QuakeFeed
from reather.services.address_book import AddressBook
from reather.services.airport_lookup import AirportLookup, AirportLookupError
from reather.services.http_client import HttpClient

logger = logging.getLogger(__name__)

QUAKE_FEEDS = list(get_args(QuakeFeed))


def configure_logging(debug: bool = False):
    """Configure logging level based on debug flag"""
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        force=True  # Override any existing configuration
    )
    # Connection pool chatter only helps when debugging
    if not debug:
        logging.getLogger('urllib3').setLevel(logging.WARNING)


@click.command()
@click.option('--airports-source', default=DEFAULT_AIRPORTS_SOURCE, show_default=True,
              help='URL or local path of the OurAirports airports.csv')
@click.option('--data-dir', default='data', show_default=True,
              help='Directory for the address file (used only if it exists)')
@click.option('--addresses-file', default='addresses.txt', show_default=True,
              help='Name of the stored address file')
@click.option('--timeout', 'http_timeout', type=float, default=15.0, show_default=True,
              help='HTTP request timeout in seconds')
@click.option('--user-agent', default=DEFAULT_USER_AGENT, show_default=True,
              help='User-Agent sent to the public APIs')
@click.option('--tide-radius', type=float, default=100.0, show_default=True,
              help='Max distance in km to a tide prediction station')
@click.option('--quake-radius', type=float, default=500.0, show_default=True,
              help='Radius in km for nearby earthquakes')
@click.option('--quake-feed', type=click.Choice(QUAKE_FEEDS), default='2.5_week', show_default=True,
              help='USGS summary feed to read earthquakes from')
@click.option('--quake-limit', type=int, default=10, show_default=True,
              help='Max number of earthquakes to display')
@click.option('-d', '--debug', is_flag=True,
              help='Enable debug logging for detailed output')
def main(airports_source: str, data_dir: str, addresses_file: str, http_timeout: float,
         user_agent: str, tide_radius: float, quake_radius: float, quake_feed: str,
         quake_limit: int, debug: bool):
    """
    Reather - weather, tides, earthquakes and links for a street address.

    Geocodes US addresses, finds the nearest National Weather Service
    station and prints current conditions and forecasts, along with tide
    predictions, nearby earthquakes, and map, flight-tracking and real-estate
    links.
    """
    configure_logging(debug=debug)

    try:
        config = create_application_config(
            airports_source=airports_source,
            data_dir=data_dir,
            addresses_file=addresses_file,
            http_timeout=http_timeout,
            user_agent=user_agent,
            tide_radius=tide_radius,
            quake_radius=quake_radius,
            quake_feed=quake_feed,
            quake_limit=quake_limit,
            debug=debug
        )
    except ValidationError as e:
        logger.error(f"Invalid configuration: {e}")
        sys.exit(1)

    client = HttpClient(user_agent=config.user_agent, timeout=config.http_timeout)
    try:
        airports = initialize_airports(config, client)
    except AirportLookupError as e:
        logger.error(f"Failed to load airport data: {e}")
        sys.exit(1)

    ctx = AppContext(
        config=config,
        client=client,
        airports=airports,
        address_book=AddressBook(config.addresses_path)
    )
    try:
        ensure_address_book(ctx)
        run_main_menu(ctx)
    finally:
        client.close()


def create_application_config(
    airports_source: str,
    data_dir: str,
    addresses_file: str,
    http_timeout: float,
    user_agent: str,
    tide_radius: float,
    quake_radius: float,
    quake_feed: str,
    quake_limit: int,
    debug: bool = False
) -> Config:
    """
    Create and validate application configuration from command-line arguments.

    Returns:
        Validated Config object

    Raises:
        ValidationError: If any option is out of range
    """
    return Config(
        airports_source=airports_source,
        data_dir=data_dir,
        addresses_file=addresses_file,
        http_timeout=http_timeout,
        user_agent=user_agent,
        tide_station_radius_km=tide_radius,
        quake_radius_km=quake_radius,
        quake_feed=quake_feed,
        quake_limit=quake_limit,
        debug=debug
    )


def initialize_airports(config: Config, client: Optional[HttpClient] = None) -> AirportLookup:
    """
    Build the airport table once at startup.

    Args:
        config: Application configuration
        client: HTTP client used when the source is a URL

    Returns:
        Initialized AirportLookup, shared read-only afterwards
    """
    source = "remote" if config.is_remote_airports_source else "local"
    logger.info(f"Loading airport data from {source} source {config.airports_source}")
    airports = AirportLookup()
    airports.initialize(config.airports_source, http_client=client)
    logger.debug(f"Airport table holds {airports.record_count()} codes "
                 f"({airports.skipped_rows} rows skipped)")
    return airports


if __name__ == '__main__':
    main()
