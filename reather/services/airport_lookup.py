"""Airport reference table: loading, code lookup and wildcard search"""
import csv
import io
import threading
from contextlib import contextmanager
from pathlib import Path
from types import MappingProxyType
from typing import BinaryIO, Dict, Iterator, List, Mapping, Optional, Tuple, Union
import logging

from pydantic import ValidationError

from reather.models.airport import AirportRecord
from reather.models.config import is_remote_path
from reather.services.http_client import HttpClient, ServiceError

logger = logging.getLogger(__name__)

AIRPORT_FIELDS = (
    'id', 'ident', 'type', 'name', 'latitude_deg', 'longitude_deg', 'elevation_ft',
    'continent', 'iso_country', 'iso_region', 'municipality', 'scheduled_service',
    'gps_code', 'iata_code', 'local_code', 'home_link', 'wikipedia_link', 'keywords',
)

# Most US airport weather stations are the IATA code behind this ICAO prefix (KBOS -> BOS)
US_ICAO_PREFIX = 'K'

WILDCARD = '*'
SEARCH_FIELDS = ('name', 'iata_code', 'ident', 'municipality', 'iso_region')


class AirportLookupError(Exception):
    """Base class for airport table failures"""


class AirportLoadError(AirportLookupError):
    """The airport source could not be fetched or read"""


class AlreadyInitializedError(AirportLookupError):
    """The airport table was already built"""


class NotInitializedError(AirportLookupError):
    """A query ran before the airport table was built"""


def normalize_code(code: str) -> str:
    """Trim and upper-case an airport or station code"""
    return code.strip().upper()


def load_airports(stream: BinaryIO) -> Tuple[Dict[str, AirportRecord], int]:
    """
    Build the airport table from an OurAirports CSV byte stream

    Columns are matched by header name, so their order does not matter.
    Rows that cannot be turned into an AirportRecord are skipped and counted,
    never raised. Each record is keyed by its IATA code (later rows overwrite)
    and by its ident, the latter only when that key is still free.

    Args:
        stream: Binary file-like object positioned at the header row

    Returns:
        Tuple of (table keyed by upper-cased code, number of skipped rows)

    Raises:
        AirportLoadError: If there is no header row or it is not valid UTF-8
    """
    table: Dict[str, AirportRecord] = {}
    skipped = 0
    # Undecodable bytes become lone surrogates so a bad row can be skipped on its own
    text = io.TextIOWrapper(stream, encoding='utf-8-sig', errors='surrogateescape', newline='')
    try:
        reader = csv.reader(text)
        try:
            header = [column.strip() for column in next(reader)]
        except StopIteration:
            raise AirportLoadError("Airport CSV is empty, expected a header row") from None
        except csv.Error as e:
            raise AirportLoadError(f"Unreadable airport CSV header: {e}") from e
        if _has_undecodable(header):
            raise AirportLoadError("Airport CSV header is not valid UTF-8")

        for row_num, row in _iter_rows(reader):
            if row is None or len(row) != len(header) or _has_undecodable(row):
                skipped += 1
                logger.debug(f"Skipping malformed airport row {row_num}")
                continue
            try:
                airport = AirportRecord.model_validate(dict(zip(header, row)))
            except ValidationError as e:
                skipped += 1
                logger.debug(f"Skipping invalid airport row {row_num}: {e.error_count()} error(s)")
                continue

            iata = normalize_code(airport.iata_code)
            if iata:
                table[iata] = airport

            icao = normalize_code(airport.ident)
            if icao and icao not in table:
                table[icao] = airport
    finally:
        # Leave the caller's stream open
        text.detach()

    return table, skipped


def _has_undecodable(values: List[str]) -> bool:
    """True if any value holds a byte smuggled in by surrogateescape"""
    return any('\udc80' <= ch <= '\udcff' for value in values for ch in value)


def _iter_rows(reader) -> Iterator[Tuple[int, Optional[List[str]]]]:
    """Yield (line number, row), with None for rows the CSV reader rejected"""
    while True:
        try:
            row = next(reader)
        except StopIteration:
            return
        except csv.Error as e:
            logger.debug(f"CSV error near line {reader.line_num}: {e}")
            yield reader.line_num, None
            continue
        if not row:
            continue
        yield reader.line_num, row


class AirportLookup:
    """
    Handle on the process-wide airport table

    Created empty by the entry point, initialized exactly once, then shared
    read-only with every component that needs airport data.
    """

    def __init__(self):
        self._airports: Optional[Mapping[str, AirportRecord]] = None
        self._lock = threading.Lock()
        self.skipped_rows = 0

    @classmethod
    def from_source(cls, source: Union[str, Path, BinaryIO],
                    http_client: Optional[HttpClient] = None) -> 'AirportLookup':
        """Create and initialize a lookup in one step"""
        lookup = cls()
        lookup.initialize(source, http_client=http_client)
        return lookup

    @property
    def is_initialized(self) -> bool:
        return self._airports is not None

    def initialize(self, source: Union[str, Path, BinaryIO],
                   http_client: Optional[HttpClient] = None) -> None:
        """
        Build the table from a URL, a local path or an open binary stream

        Args:
            source: http(s) URL, path to airports.csv, or binary stream
            http_client: HttpClient used for URL sources

        Raises:
            AlreadyInitializedError: If the table was already built
            AirportLoadError: If the source cannot be fetched or read
        """
        with self._lock:
            if self._airports is not None:
                raise AlreadyInitializedError("Airport table is already initialized")

            if hasattr(source, 'read'):
                table, skipped = load_airports(source)
            else:
                with _open_source(str(source), http_client) as stream:
                    table, skipped = load_airports(stream)

            self.skipped_rows = skipped
            self._airports = MappingProxyType(table)

        if skipped:
            logger.debug(f"Skipped {skipped} unparsable airport rows")
        logger.info(f"Loaded {len(table)} airport codes into lookup table")

    def _table(self) -> Mapping[str, AirportRecord]:
        airports = self._airports
        if airports is None:
            raise NotInitializedError(
                "Airport table is not initialized. Call initialize() before querying airports."
            )
        return airports

    def lookup_by_iata(self, code: str) -> Optional[AirportRecord]:
        """
        Get the airport stored under an IATA code

        Args:
            code: IATA code, any case, surrounding whitespace ignored

        Returns:
            AirportRecord or None if not found
        """
        return self._table().get(normalize_code(code))

    def lookup_by_icao(self, code: str) -> Optional[AirportRecord]:
        """Get the airport stored under an ICAO ident (same table as IATA)"""
        return self._table().get(normalize_code(code))

    def is_valid_code(self, code: str) -> bool:
        """Check if a code resolves through the IATA lookup path"""
        return self.lookup_by_iata(code) is not None

    def record_count(self) -> int:
        """Number of keys in the table (an airport may hold two)"""
        return len(self._table())

    def code_from_station(self, station_id: str) -> Optional[str]:
        """
        Resolve a weather station identifier to an IATA code

        Tried in order: a 4-letter US station with the K prefix stripped,
        the station id itself as an IATA code, then the IATA code of the
        airport whose ident matches the station id.

        Args:
            station_id: NWS station identifier, e.g. 'KBOS'

        Returns:
            IATA code or None if the station is not at a known airport
        """
        station = normalize_code(station_id)
        if len(station) == 4 and station.startswith(US_ICAO_PREFIX):
            stripped = station[1:]
            if self.is_valid_code(stripped):
                return stripped

        if self.is_valid_code(station):
            return station

        airport = self.lookup_by_icao(station)
        if airport and airport.iata_code.strip():
            return airport.iata_code.strip()
        return None

    def search(self, term: str) -> List[AirportRecord]:
        """
        Find airports by name, code, municipality or region

        A leading and/or trailing '*' selects suffix, prefix or substring
        matching; without one the field must equal the term. Matching is
        case-insensitive and applies the same mode to every searched field.

        Args:
            term: Search term such as 'Boston', '*International*' or 'KJ*'

        Returns:
            Matching airports in table order, each airport at most once
        """
        airports = self._table()
        mode, needle = parse_search_term(term)
        if not needle:
            return []

        results = []
        seen = set()
        for airport in airports.values():
            if airport.id in seen:
                continue
            if any(_matches(getattr(airport, field), mode, needle) for field in SEARCH_FIELDS):
                seen.add(airport.id)
                results.append(airport)

        logger.debug(f"Search '{term}' ({mode}) matched {len(results)} airports")
        return results


def parse_search_term(term: str) -> Tuple[str, str]:
    """
    Split a wildcard term into its matching mode and lower-cased needle

    Returns:
        Tuple of (mode, needle); mode is 'exact', 'prefix', 'suffix' or 'contains'
    """
    term = term.strip()
    leading = term.startswith(WILDCARD)
    trailing = term.endswith(WILDCARD) and len(term) > 1
    needle = term.strip(WILDCARD).strip().lower()

    if leading and trailing:
        mode = 'contains'
    elif leading:
        mode = 'suffix'
    elif trailing:
        mode = 'prefix'
    else:
        mode = 'exact'
    return mode, needle


def _matches(value: str, mode: str, needle: str) -> bool:
    value = value.strip().lower()
    if mode == 'prefix':
        return value.startswith(needle)
    if mode == 'suffix':
        return value.endswith(needle)
    if mode == 'contains':
        return needle in value
    return value == needle


@contextmanager
def _open_source(source: str, http_client: Optional[HttpClient] = None) -> Iterator[BinaryIO]:
    """Yield a binary stream for a URL or local path"""
    if is_remote_path(source):
        client = http_client or HttpClient()
        logger.debug(f"Downloading airports from {source}")
        try:
            payload = client.get_bytes(source)
        except ServiceError as e:
            logger.error(f"Error downloading airports: {e}")
            raise AirportLoadError(f"Failed to download airports from {source}: {e}") from e
        yield io.BytesIO(payload)
        return

    try:
        stream = open(source, 'rb')
    except OSError as e:
        logger.error(f"Airports file not readable: {source}")
        raise AirportLoadError(f"Cannot open airports file '{source}': {e}") from e
    with stream:
        yield stream