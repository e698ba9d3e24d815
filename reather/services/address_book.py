"""Address file persistence and seeding"""
from pathlib import Path
from typing import Callable, List, Optional
import logging

from reather.models.address import StoredAddress
from reather.models.weather import GeocodedAddress
from reather.services.http_client import ServiceError

logger = logging.getLogger(__name__)

SEED_ADDRESSES = (
    "233 E MAIN ST, BOZEMAN, MT, 59715",
    "1 MANELE RD, LANAI CITY, HI, 96763",
    "52 WHITEHEAD AVE, PORTLAND, ME, 04109",
    "22338 PACIFIC COAST HWY, MALIBU, CA, 90265",
    "58 OCEAN ST, ROCKLAND, ME, 04841",
    "100 SANKATY RD, NANTUCKET, MA, 02554",
    "1600 PENNSYLVANIA AVE NW, WASHINGTON, DC, 20500",
)


class AddressBook:
    """Stored addresses, one `address;lat;lon` line each"""

    def __init__(self, path: Path):
        self.path = Path(path)

    def is_empty(self) -> bool:
        """True when the file is missing or has zero bytes"""
        return not self.path.exists() or self.path.stat().st_size == 0

    def load(self) -> List[StoredAddress]:
        """
        Read all well-formed addresses

        Malformed lines are skipped with a warning naming the line; blank
        lines are ignored silently. A missing file is an empty book.
        """
        if not self.path.exists():
            return []

        addresses = []
        with open(self.path, 'r', encoding='utf-8') as f:
            for line_num, line in enumerate(f, 1):
                if not line.strip():
                    continue
                try:
                    address = StoredAddress.from_line(line)
                except ValueError:
                    logger.warning(
                        f"Malformed data in '{self.path}' at line {line_num}: could not parse "
                        f"latitude/longitude for address '{line.split(';')[0]}'. Skipping this entry."
                    )
                    continue
                if address is None:
                    logger.warning(
                        f"Malformed line in '{self.path}' at line {line_num}: '{line.rstrip()}'. "
                        f"Expected 3 parts separated by semicolons. Skipping this entry."
                    )
                    continue
                addresses.append(address)
        return addresses

    def add(self, address: str, latitude: float, longitude: float) -> StoredAddress:
        """Append an address to the file, creating it if needed"""
        stored = StoredAddress(address=address, latitude=latitude, longitude=longitude)
        with open(self.path, 'a', encoding='utf-8') as f:
            f.write(stored.to_line() + '\n')
        logger.debug(f"Stored address '{address}' in {self.path}")
        return stored

    def create_empty(self) -> None:
        self.path.write_text('', encoding='utf-8')

    def seed(self, geocode: Callable[[str], Optional[GeocodedAddress]],
             echo: Callable[[str], None] = print) -> int:
        """
        Replace the file with the geocoded seed addresses

        Args:
            geocode: Function geocoding one address query
            echo: Where progress messages go

        Returns:
            Number of seed addresses stored
        """
        self.create_empty()
        stored = 0
        for query in SEED_ADDRESSES:
            echo(f"Geocoding seed address: {query}")
            try:
                match = geocode(query)
            except ServiceError as e:
                echo(f"  Error geocoding seed address '{query}': {e}. Skipping.")
                continue
            if match is None:
                echo(f"  Could not geocode seed address: '{query}'. Skipping.")
                continue
            entry = self.add(match.address, match.latitude, match.longitude)
            echo(f"  Stored: {entry.to_line()}")
            stored += 1
        return stored
