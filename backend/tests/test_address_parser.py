"""
Address Parser Tests

Verifies:
1. First non-blank line is always the name
2. Fewer than two non-blank lines is rejected
3. City / state / zip come from the last line, each optional
4. Address line 2 only when it is not the last line
5. Country defaults to US
"""
import pytest

from penpal.errors import InvalidAddressError
from penpal.services.address_parser import (
    AddressParser,
    ParsedAddress,
    RegexAddressParser,
    parse_address,
)


class TestParseAddress:

    def test_three_line_us_address(self):
        parsed = parse_address("Jane Doe\n123 Main St\nSpringfield, IL 62704")
        assert parsed.to_dict() == {
            "name": "Jane Doe",
            "address1": "123 Main St",
            "address2": "",
            "city": "Springfield",
            "state": "IL",
            "zip": "62704",
            "country": "US",
        }

    def test_blank_lines_and_whitespace_are_dropped(self):
        parsed = parse_address("\n   Jane Doe  \n\n  123 Main St\n   \nSpringfield, IL 62704\n\n")
        assert parsed.name == "Jane Doe"
        assert parsed.address1 == "123 Main St"
        assert parsed.city == "Springfield"

    def test_four_lines_fill_address2(self):
        parsed = parse_address(
            "Oprah Winfrey\nHarpo Productions\n1041 N. Formosa Ave.\nWest Hollywood, CA 90046"
        )
        assert parsed.address1 == "Harpo Productions"
        assert parsed.address2 == "1041 N. Formosa Ave."
        assert parsed.city == "West Hollywood"
        assert parsed.state == "CA"
        assert parsed.zip == "90046"

    def test_zip_plus_four(self):
        parsed = parse_address(
            "Taylor Swift\n13 Management\n718 Thompson Lane\nSuite 108256\nNashville, TN 37204-3923"
        )
        assert parsed.zip == "37204-3923"
        assert parsed.state == "TN"
        # Only two street lines are carried; the suite line is dropped
        assert parsed.address2 == "718 Thompson Lane"

    def test_last_line_without_comma_leaves_fields_empty(self):
        parsed = parse_address("Drake\nOVO Sound\n1815 Ironstone Manor\nPickering, ON L1W 3J9\nCanada")
        assert parsed.city == ""
        assert parsed.state == ""
        assert parsed.zip == ""
        assert parsed.country == "US"

    def test_missing_state_and_zip(self):
        parsed = parse_address("Jane Doe\n123 Main St\nSpringfield,")
        assert parsed.city == "Springfield"
        assert parsed.state == ""
        assert parsed.zip == ""

    def test_full_state_name_is_not_a_region_code(self):
        parsed = parse_address("Jane Doe\n123 Main St\nSpringfield, Illinois 62704")
        assert parsed.city == "Springfield"
        assert parsed.state == ""

    def test_lowercase_state_is_uppercased(self):
        parsed = parse_address("Jane Doe\n123 Main St\nSpringfield, il 62704")
        assert parsed.state == "IL"

    def test_two_lines_use_street_as_last_line(self):
        parsed = parse_address("Jane Doe\n123 Main St")
        assert parsed.name == "Jane Doe"
        assert parsed.address1 == "123 Main St"
        assert parsed.address2 == ""
        assert parsed.city == ""

    def test_explicit_country(self):
        parsed = parse_address("Jane Doe\n123 Main St\nToronto, ON", country="CA")
        assert parsed.country == "CA"

    @pytest.mark.parametrize("raw", [None, "", "   \n\n", "Jane Doe", "\n Jane Doe \n  \n"])
    def test_fewer_than_two_lines_rejected(self, raw):
        with pytest.raises(InvalidAddressError):
            parse_address(raw)


class TestParserStrategy:

    def test_base_parser_is_abstract(self):
        with pytest.raises(NotImplementedError):
            AddressParser().parse("Jane Doe\n123 Main St")

    def test_regex_parser_is_an_address_parser(self):
        assert isinstance(RegexAddressParser(), AddressParser)

    def test_custom_strategy_can_replace_default(self):
        class FixedParser(AddressParser):
            def parse(self, raw, country=None):
                return ParsedAddress(name="Fixed", address1="1 Fixed Rd")

        assert FixedParser().parse("anything").name == "Fixed"
