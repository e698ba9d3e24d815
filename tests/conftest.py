"""Shared fixtures: a small OurAirports extract"""
import io

import pytest

from reather.services.airport_lookup import AirportLookup

HEADER = (
    "id,ident,type,name,latitude_deg,longitude_deg,elevation_ft,continent,iso_country,"
    "iso_region,municipality,scheduled_service,gps_code,iata_code,local_code,home_link,"
    "wikipedia_link,keywords"
)

ROWS = [
    '3622,KJFK,large_airport,John F Kennedy International Airport,40.639447,-73.779317,13,NA,US,US-NY,'
    'New York,yes,KJFK,JFK,JFK,https://www.jfkairport.com/,'
    'https://en.wikipedia.org/wiki/John_F._Kennedy_International_Airport,"Manhattan, New York City, NYC, Idlewild"',
    '3422,KBOS,large_airport,General Edward Lawrence Logan International Airport,42.3643,-71.005203,20,NA,US,'
    'US-MA,Boston,yes,KBOS,BOS,BOS,http://www.massport.com/logan-airport/,'
    'https://en.wikipedia.org/wiki/Logan_International_Airport,',
    '2434,EHAM,large_airport,Amsterdam Airport Schiphol,52.308601,4.76389,-11,EU,NL,NL-NH,Amsterdam,yes,'
    'EHAM,AMS,,https://www.schiphol.nl/,https://en.wikipedia.org/wiki/Amsterdam_Airport_Schiphol,',
    '5388,PHNL,large_airport,Daniel K Inouye International Airport,21.32062,-157.924228,13,OC,US,US-HI,'
    'Honolulu,yes,PHNL,HNL,HNL,,https://en.wikipedia.org/wiki/Daniel_K._Inouye_International_Airport,',
    '6523,00A,heliport,Total RF Heliport,40.070985,-74.933689,11,NA,US,US-PA,Bensalem,no,K00A,,00A,,,',
    # Ident collides with Logan's IATA code and must not displace it
    '9001,BOS,small_airport,Boston Strip,44.0,-69.0,100,NA,US,US-ME,Bostonia,no,,,,,,',
    # Wrong number of columns
    '9002,XBAD,closed,Broken Row',
]


def make_csv(rows=None, header=HEADER) -> bytes:
    lines = [header] + list(ROWS if rows is None else rows)
    return ("\n".join(lines) + "\n").encode('utf-8')


@pytest.fixture
def airports_csv() -> bytes:
    return make_csv()


@pytest.fixture
def airports_file(tmp_path, airports_csv):
    """Sample airports.csv on disk"""
    path = tmp_path / "airports.csv"
    path.write_bytes(airports_csv)
    return path


@pytest.fixture
def airport_lookup(airports_csv) -> AirportLookup:
    """Initialized lookup over the sample extract"""
    return AirportLookup.from_source(io.BytesIO(airports_csv))
