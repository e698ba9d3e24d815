"""Unit tests for wildcard airport search"""
import pytest

from reather.services.airport_lookup import parse_search_term


def names(results):
    return [airport.name for airport in results]


class TestParseSearchTerm:
    """Test wildcard mode selection"""

    @pytest.mark.parametrize("term,expected", [
        ("Boston", ("exact", "boston")),
        ("Bos*", ("prefix", "bos")),
        ("*port", ("suffix", "port")),
        ("*Inter*", ("contains", "inter")),
        ("  *Inter*  ", ("contains", "inter")),
        ("*", ("suffix", "")),
    ])
    def test_modes(self, term, expected):
        assert parse_search_term(term) == expected


class TestSearch:
    """Test search across name, codes, municipality and region"""

    def test_contains_on_name(self, airport_lookup):
        """Test that every result has the substring in its name"""
        results = airport_lookup.search("*International*")
        assert results
        assert all("international" in a.name.lower() for a in results)
        assert set(a.iata_code for a in results) == {"JFK", "BOS", "HNL"}

    def test_exact_ident_match(self, airport_lookup):
        """Test that an ICAO ident finds its airport although no name contains it"""
        results = airport_lookup.search("KJFK")
        assert names(results) == ["John F Kennedy International Airport"]

    def test_exact_match_is_case_insensitive(self, airport_lookup):
        assert names(airport_lookup.search("amsterdam airport schiphol")) == ["Amsterdam Airport Schiphol"]

    def test_exact_does_not_match_partial_name(self, airport_lookup):
        assert airport_lookup.search("Schiphol") == []

    def test_prefix(self, airport_lookup):
        assert names(airport_lookup.search("total*")) == ["Total RF Heliport"]

    def test_suffix(self, airport_lookup):
        results = airport_lookup.search("*Heliport")
        assert names(results) == ["Total RF Heliport"]

    def test_exact_municipality(self, airport_lookup):
        assert [a.iata_code for a in airport_lookup.search("boston")] == ["BOS"]

    def test_exact_region(self, airport_lookup):
        assert [a.iata_code for a in airport_lookup.search("us-ny")] == ["JFK"]

    def test_wildcard_applies_to_code_fields(self, airport_lookup):
        """Test that 'K*' matches idents starting with K, in table order"""
        assert [a.ident for a in airport_lookup.search("K*")] == ["KJFK", "KBOS"]

    def test_wildcard_applies_to_region(self, airport_lookup):
        results = airport_lookup.search("US-*")
        assert set(a.ident for a in results) == {"KJFK", "KBOS", "PHNL", "00A"}

    def test_airport_with_two_keys_counted_once(self, airport_lookup):
        """Test that a name and municipality match on one airport yields one result"""
        results = airport_lookup.search("Amsterdam*")
        assert names(results) == ["Amsterdam Airport Schiphol"]

        results = airport_lookup.search("*")
        assert results == []

    def test_results_are_stable(self, airport_lookup):
        assert airport_lookup.search("*a*") == airport_lookup.search("*a*")

    def test_airport_dropped_at_load_is_not_found(self, airport_lookup):
        """Test that an airport whose only key lost the IATA race is unreachable"""
        assert airport_lookup.search("Boston Strip") == []

    def test_no_match(self, airport_lookup):
        assert airport_lookup.search("Atlantis") == []

    def test_blank_term(self, airport_lookup):
        assert airport_lookup.search("   ") == []
        assert airport_lookup.search("**") == []
