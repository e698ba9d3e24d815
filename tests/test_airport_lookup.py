"""Unit tests for airport table loading and code lookup"""
import io
import threading

import pytest

from reather.services.airport_lookup import (
    AirportLoadError,
    AirportLookup,
    AirportLookupError,
    AlreadyInitializedError,
    NotInitializedError,
    load_airports,
)
from reather.services.http_client import NetworkError
from tests.conftest import HEADER, ROWS, make_csv


class TestLoadAirports:
    """Test building the table from CSV"""

    def test_keys_by_iata_and_ident(self, airports_csv):
        """Test that each airport is reachable by both its codes"""
        table, _ = load_airports(io.BytesIO(airports_csv))
        assert table["JFK"] is table["KJFK"]
        assert table["AMS"].name == "Amsterdam Airport Schiphol"
        assert table["EHAM"].iata_code == "AMS"

    def test_ident_only_airport(self, airports_csv):
        """Test that an airport without IATA code is keyed by ident"""
        table, _ = load_airports(io.BytesIO(airports_csv))
        assert table["00A"].name == "Total RF Heliport"

    def test_counts_skipped_rows(self, airports_csv):
        """Test that the malformed row is skipped and counted, not raised"""
        table, skipped = load_airports(io.BytesIO(airports_csv))
        assert skipped == 1
        assert "XBAD" not in table
        assert len(table) == 9

    def test_fields_kept_as_text(self, airports_csv):
        """Test that numeric columns are not parsed at load time"""
        table, _ = load_airports(io.BytesIO(airports_csv))
        jfk = table["JFK"]
        assert jfk.latitude_deg == "40.639447"
        assert jfk.elevation_ft == "13"
        assert jfk.airport_type == "large_airport"
        assert jfk.keywords == "Manhattan, New York City, NYC, Idlewild"
        assert jfk.latitude == pytest.approx(40.639447)

    def test_header_order_does_not_matter(self):
        """Test that columns are matched by name"""
        columns = HEADER.split(',')
        values = ROWS[2]  # Schiphol, no quoted commas
        row = dict(zip(columns, values.split(',')))
        reordered = list(reversed(columns))
        data = (",".join(reordered) + "\n" + ",".join(row[c] for c in reordered) + "\n").encode()
        table, skipped = load_airports(io.BytesIO(data))
        assert skipped == 0
        assert table["AMS"].ident == "EHAM"

    def test_codes_are_trimmed_and_upper_cased(self):
        """Test key normalization at load time"""
        data = make_csv([
            '1,  eddf ,large_airport,Frankfurt Airport,50.03,8.56,364,EU,DE,DE-HE,Frankfurt,yes,EDDF, fra ,,,,',
        ])
        table, _ = load_airports(io.BytesIO(data))
        assert set(table) == {"FRA", "EDDF"}
        # Stored record keeps the raw text
        assert table["FRA"].iata_code == " fra "

    def test_later_iata_overwrites(self):
        """Test that a repeated IATA code resolves to the last row"""
        data = make_csv([
            '1,AAAA,small_airport,First,0,0,0,NA,US,US-CA,One,no,,XYZ,,,,',
            '2,BBBB,small_airport,Second,0,0,0,NA,US,US-CA,Two,no,,XYZ,,,,',
        ])
        table, _ = load_airports(io.BytesIO(data))
        assert table["XYZ"].name == "Second"
        assert table["AAAA"].name == "First"

    def test_ident_never_overwrites(self):
        """Test that a repeated ident keeps the first row"""
        data = make_csv([
            '1,CCCC,small_airport,First,0,0,0,NA,US,US-CA,One,no,,,,,,',
            '2,CCCC,small_airport,Second,0,0,0,NA,US,US-CA,Two,no,,,,,,',
        ])
        table, _ = load_airports(io.BytesIO(data))
        assert table["CCCC"].name == "First"

    def test_iata_beats_colliding_ident_in_either_order(self):
        """Test IATA priority whether the ident row comes first or last"""
        logan = ROWS[1]
        strip = ROWS[5]
        for rows in ([logan, strip], [strip, logan]):
            table, _ = load_airports(io.BytesIO(make_csv(rows)))
            assert table["BOS"].municipality == "Boston"

    def test_missing_column_rows_are_skipped(self):
        """Test that a header without a required column drops every row"""
        header = HEADER.replace(",keywords", "")
        row = ROWS[2].rsplit(',', 1)[0]
        table, skipped = load_airports(io.BytesIO(make_csv([row], header=header)))
        assert table == {}
        assert skipped == 1

    def test_empty_stream_fails(self):
        """Test that a stream without header is a load failure"""
        with pytest.raises(AirportLoadError):
            load_airports(io.BytesIO(b""))

    def test_invalid_utf8_fails(self):
        """Test that an undecodable header is a load failure"""
        with pytest.raises(AirportLoadError):
            load_airports(io.BytesIO(b"\xff\xfe\xfa,\xff\n"))

    def test_invalid_utf8_row_is_skipped(self):
        """Test that a row with undecodable bytes is skipped and its neighbours load"""
        bad = '9003,XLAT,small_airport,Bad \xff Name,1.0,2.0,3,NA,US,US-MA,Nowhere,no,,XLT,,,,'
        payload = (
            make_csv(ROWS[1:3]).rstrip(b"\n") + b"\n"
            + bad.encode('latin-1') + b"\n"
            + ROWS[0].encode('utf-8') + b"\n"
        )
        table, skipped = load_airports(io.BytesIO(payload))
        assert set(table) == {"BOS", "KBOS", "AMS", "EHAM", "JFK", "KJFK"}
        assert skipped == 1

    def test_oversized_field_row_is_skipped(self):
        """Test that a row the CSV reader rejects is skipped and its neighbours load"""
        huge = '9004,XBIG,small_airport,' + 'x' * 200_000 + ',1.0,2.0,3,NA,US,US-MA,Nowhere,no,,XBG,,,,'
        table, skipped = load_airports(io.BytesIO(make_csv([ROWS[0], huge, ROWS[2]])))
        assert sorted(table) == ["AMS", "EHAM", "JFK", "KJFK"]
        assert skipped == 1

    def test_handles_bom(self, airports_csv):
        """Test that a UTF-8 byte order mark does not break the id column"""
        table, _ = load_airports(io.BytesIO(b"\xef\xbb\xbf" + airports_csv))
        assert table["JFK"].id == "3622"


class TestInitialization:
    """Test the build-once lifecycle"""

    def test_query_before_initialize_fails(self):
        """Test that every query reports not-initialized, not absence"""
        lookup = AirportLookup()
        assert not lookup.is_initialized
        for query in (
            lambda: lookup.lookup_by_iata("JFK"),
            lambda: lookup.lookup_by_icao("KJFK"),
            lambda: lookup.is_valid_code("JFK"),
            lambda: lookup.code_from_station("KJFK"),
            lambda: lookup.search("*International*"),
            lambda: lookup.record_count(),
        ):
            with pytest.raises(NotInitializedError):
                query()

    def test_second_initialize_fails_and_keeps_table(self, airports_csv):
        """Test that re-initializing is rejected and changes nothing"""
        lookup = AirportLookup.from_source(io.BytesIO(airports_csv))
        before = (lookup.record_count(), lookup.lookup_by_iata("JFK"), lookup.search("*International*"))

        other = make_csv([ROWS[2]])
        with pytest.raises(AlreadyInitializedError):
            lookup.initialize(io.BytesIO(other))

        after = (lookup.record_count(), lookup.lookup_by_iata("JFK"), lookup.search("*International*"))
        assert before == after

    def test_initialize_from_path(self, airports_file):
        """Test loading from a local file path"""
        lookup = AirportLookup.from_source(str(airports_file))
        assert lookup.record_count() == 9
        assert lookup.skipped_rows == 1

    def test_missing_file_fails(self, tmp_path):
        """Test that a missing local file is a load failure"""
        lookup = AirportLookup()
        with pytest.raises(AirportLoadError):
            lookup.initialize(str(tmp_path / "nope.csv"))
        assert not lookup.is_initialized

    def test_initialize_from_url(self, airports_csv):
        """Test that URL sources are downloaded through the HTTP client"""
        class FakeClient:
            def __init__(self):
                self.urls = []

            def get_bytes(self, url):
                self.urls.append(url)
                return airports_csv

        client = FakeClient()
        lookup = AirportLookup.from_source("https://example.test/airports.csv", http_client=client)
        assert client.urls == ["https://example.test/airports.csv"]
        assert lookup.is_valid_code("BOS")

    def test_download_failure_fails(self):
        """Test that transport errors become a load failure"""
        class BrokenClient:
            def get_bytes(self, url):
                raise NetworkError(url, ConnectionError("refused"))

        lookup = AirportLookup()
        with pytest.raises(AirportLoadError):
            lookup.initialize("https://example.test/airports.csv", http_client=BrokenClient())
        assert not lookup.is_initialized

    def test_errors_share_base_class(self):
        assert issubclass(AirportLoadError, AirportLookupError)
        assert issubclass(AlreadyInitializedError, AirportLookupError)
        assert issubclass(NotInitializedError, AirportLookupError)

    def test_concurrent_initialize_runs_once(self, airports_csv):
        """Test that racing initializers build the table at most once"""
        lookup = AirportLookup()
        outcomes = []

        def init():
            try:
                lookup.initialize(io.BytesIO(airports_csv))
                outcomes.append("ok")
            except AlreadyInitializedError:
                outcomes.append("rejected")

        threads = [threading.Thread(target=init) for _ in range(5)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert outcomes.count("ok") == 1
        assert outcomes.count("rejected") == 4


class TestCodeLookup:
    """Test exact lookups by IATA and ICAO code"""

    def test_lookup_normalizes_input(self, airport_lookup):
        """Test that case and surrounding whitespace are ignored"""
        for code in ("JFK", "BOS", "AMS", "HNL"):
            assert airport_lookup.lookup_by_iata(f"  {code.lower()} \t") is airport_lookup.lookup_by_iata(code)

    def test_lookup_by_icao(self, airport_lookup):
        assert airport_lookup.lookup_by_icao("kjfk").iata_code == "JFK"
        assert airport_lookup.lookup_by_icao("EHAM").name == "Amsterdam Airport Schiphol"

    def test_both_lookups_share_one_table(self, airport_lookup):
        """Test that an ICAO code is found through the IATA lookup and vice versa"""
        assert airport_lookup.lookup_by_iata("KJFK") is airport_lookup.lookup_by_icao("JFK")

    def test_colliding_ident_resolves_to_iata_owner(self, airport_lookup):
        """Test that the ident 'BOS' of another airport does not shadow Logan"""
        assert airport_lookup.lookup_by_icao("BOS").municipality == "Boston"

    def test_unknown_code(self, airport_lookup):
        assert airport_lookup.lookup_by_iata("ZZZ") is None
        assert airport_lookup.lookup_by_icao("ZZZZ") is None

    def test_is_valid_code(self, airport_lookup):
        assert airport_lookup.is_valid_code("bos")
        assert not airport_lookup.is_valid_code("ZZZZ")

    def test_record_count(self, airport_lookup):
        """Test that the count is of keys, so two-code airports count twice"""
        assert airport_lookup.record_count() == 9


class TestCodeFromStation:
    """Test resolving weather station identifiers to airport codes"""

    def test_us_station_strips_prefix(self, airport_lookup):
        assert airport_lookup.code_from_station("KBOS") == "BOS"
        assert airport_lookup.code_from_station(" kjfk ") == "JFK"

    def test_station_that_is_a_code(self, airport_lookup):
        assert airport_lookup.code_from_station("HNL") == "HNL"

    def test_station_known_as_ident(self, airport_lookup):
        """Test that a non-K station in the table resolves to itself"""
        assert airport_lookup.code_from_station("EHAM") == "EHAM"

    def test_prefix_strip_is_tried_first(self, airport_lookup):
        """Test that 'K00A' resolves via the stripped ident before anything else"""
        assert airport_lookup.code_from_station("K00A") == "00A"

    def test_stripped_code_wins_over_full_ident(self):
        """Test precedence when the stripped code and the full ident disagree"""
        data = make_csv([
            '1,KABC,small_airport,Ident Owner,0,0,0,NA,US,US-CA,One,no,,QQQ,,,,',
            '2,XABC,small_airport,Code Owner,0,0,0,NA,US,US-CA,Two,no,,ABC,,,,',
        ])
        lookup = AirportLookup.from_source(io.BytesIO(data))
        assert lookup.code_from_station("KABC") == "ABC"

    def test_unknown_station(self, airport_lookup):
        assert airport_lookup.code_from_station("KXYZ") is None
        assert airport_lookup.code_from_station("") is None
