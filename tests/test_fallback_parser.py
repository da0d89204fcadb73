import pytest

from invoice_extractor.field_extraction.extraction_result import ParsedFields
from invoice_extractor.field_extraction.fallback_parser import (
    BlockContext,
    FallbackHeuristicParser,
    first_result,
    parse_fallback,
)


@pytest.fixture
def parser(rules):
    return FallbackHeuristicParser(rules)


def test_labelled_name_and_address(parser):
    fields = parser.parse("Name: Karim Ahmed\nAddress: Mirpur, Dhaka 1216")
    assert fields == ParsedFields(name="Karim Ahmed", phone=None, address="Mirpur, Dhaka 1216")


def test_name_above_phone_and_address_after_it(parser):
    block = "Rahim Uddin\n01712345678\nHouse 12, Road 5\nDhanmondi\nOrder ID: 55"
    assert parser.parse(block) == ParsedFields(
        name="Rahim Uddin",
        phone="01712345678",
        address="House 12, Road 5, Dhanmondi",
    )


def test_name_search_skips_lines_that_are_not_names(parser):
    block = "Rahim Uddin\nHouse 12\n01712345678"
    assert parser.parse(block).name == "Rahim Uddin"


def test_address_after_phone_keeps_three_lines(parser):
    block = "Karim\n01712345678\nLine one\nLine two\nLine three\nLine four"
    assert parser.parse(block).address == "Line one, Line two, Line three"


def test_labelled_address_stops_at_next_field(parser):
    block = "Address: House 7\nBanani\nPhone: 01812345678\nDhaka"
    fields = parser.parse(block)
    assert fields.address == "House 7, Banani"
    assert fields.phone == "01812345678"


def test_labelled_address_wins_over_text_after_phone(parser):
    block = "Karim\n01712345678\nSomething else\nAddress: Uttara Sector 4"
    assert parser.parse(block).address == "Uttara Sector 4"


def test_address_from_keywords(parser):
    block = "Some Shop\nHouse 9, Road 3\nSector 4, Uttara\nThank you"
    fields = parser.parse(block)
    assert fields.address == "House 9, Road 3, Sector 4, Uttara"
    assert fields.name is None
    assert fields.phone is None


def test_address_from_postal_code(parser):
    assert parser.parse("Karim\nMirpur 1216").address == "Mirpur 1216"


def test_address_from_bangla_keyword(parser):
    assert parser.parse("বাসা ১২, মিরপুর").address == "বাসা ১২, মিরপুর"


def test_keyword_lines_with_order_details_are_ignored(parser):
    assert parser.parse("Shipping Method: City Courier").address is None


@pytest.mark.parametrize("phone", ["017 1234 5678", "017-1234-5678", "017.1234.5678"])
def test_phone_with_separators(parser, phone):
    fields = parser.parse(f"Karim Ahmed\n{phone}\nMirpur 10")
    assert fields == ParsedFields(name="Karim Ahmed", phone="01712345678", address="Mirpur 10")


def test_phone_offsets_ignore_carriage_returns(parser):
    fields = parser.parse("Karim Ahmed\r\n017-1234-5678\r\nMirpur 10")
    assert fields == ParsedFields(name="Karim Ahmed", phone="01712345678", address="Mirpur 10")


def test_keyword_lines_holding_the_phone_are_ignored(parser):
    fields = parser.parse("Karim Ahmed\nRoad 3, Mirpur\nFlat: 01712-345678")
    assert fields == ParsedFields(name="Karim Ahmed", phone="01712345678", address="Road 3, Mirpur")


def test_dates_are_not_postal_codes(parser):
    assert parser.parse("Karim Ahmed\nDate: 12/05/2024\nThanks").address is None
    assert parser.parse("Karim\nDhaka-1212").address == "Dhaka-1212"


def test_empty_block(parser):
    assert parser.parse("").is_empty


def test_strategies_are_tried_in_order(parser):
    parser.name_strategies = [lambda context: None, lambda context: "Second"]
    assert parser.parse("anything").name == "Second"


def test_first_result():
    context = BlockContext("a\nb", None)
    assert context.lines == ["a", "b"]
    assert first_result([lambda c: "", lambda c: c.lines[-1]], context) == "b"
    assert first_result([], context) is None


def test_module_level_parse_fallback():
    assert parse_fallback("Name: Karim").name == "Karim"
