import pytest

from invoice_extractor.field_extraction.extraction_result import ExtractedRecord, ParsedFields
from invoice_extractor.postprocessor.sanitizer import FieldSanitizer


@pytest.fixture
def sanitizer():
    return FieldSanitizer()


def test_labels_and_spacing_are_cleaned(sanitizer):
    record = sanitizer.sanitize(
        ParsedFields(name="Name:  John   Doe", phone="01712345678", address="Address: House 5 ,Road 2\nDhaka"),
        "৳970",
        source="orders.pdf",
        page=3,
    )
    assert record == ExtractedRecord(
        source="orders.pdf",
        page=3,
        name="John Doe",
        phone="01712345678",
        address="House 5, Road 2, Dhaka",
        value="৳970",
    )


@pytest.mark.parametrize("raw, expected", [
    ("Mirpur,,  Dhaka", "Mirpur, Dhaka"),
    ("Flat : 3B", "Flat:3B"),
    (", Mirpur ;", "Mirpur"),
    ("Ka\u200brim\u00a0Ahmed", "Karim Ahmed"),
    ("\u0995 \u09bf", "\u0995\u09bf"),
    ("ঢাকা ।বাংলাদেশ", "ঢাকা। বাংলাদেশ"),
    ("", ""),
    (None, ""),
])
def test_clean_text(sanitizer, raw, expected):
    assert sanitizer.clean_text(raw) == expected


@pytest.mark.parametrize("name", ["Invoice", "INVOICE", "2 Invoice", "12invoice", " invoice "])
def test_heading_artifact_is_dropped(sanitizer, name):
    assert sanitizer.sanitize(ParsedFields(name=name)) is None


def test_heading_artifact_is_dropped_even_with_page_total(sanitizer):
    assert sanitizer.sanitize(ParsedFields(name="Invoice"), "৳970") is None


def test_invoice_name_with_contact_details_is_kept(sanitizer):
    record = sanitizer.sanitize(ParsedFields(name="Invoice", phone="01712345678"))
    assert record.name == "Invoice"
    assert record.phone == "01712345678"


def test_other_names_are_not_artifacts(sanitizer):
    assert sanitizer.sanitize(ParsedFields(name="Invoice Traders")).name == "Invoice Traders"


def test_empty_fields_produce_no_record(sanitizer):
    assert sanitizer.sanitize(ParsedFields()) is None
    assert sanitizer.sanitize(ParsedFields(name="  ", address=" , ")) is None


def test_value_alone_is_a_record(sanitizer):
    record = sanitizer.sanitize(ParsedFields(), "Tk500")
    assert record.fields == {'name': None, 'phone': None, 'address': None, 'value': "Tk500"}
    assert record.missing_fields == ['name', 'phone', 'address']
