import pytest

from invoice_extractor import extract_from_document, extract_from_page
from invoice_extractor.field_extraction.extraction_result import ExtractedRecord, RawPage
from invoice_extractor.utils.exceptions import InvalidTextError


def test_canonical_invoice(extractor):
    page = "Invoice To: John Doe 01712345678 House 5, Road 2, Dhaka 1212 Order ID: 99 Total: ৳970"
    assert extractor.extract_from_page(page, source="orders.pdf", page=1) == [
        ExtractedRecord(
            source="orders.pdf",
            page=1,
            name="John Doe",
            phone="01712345678",
            address="House 5, Road 2, Dhaka 1212",
            value="৳970",
        )
    ]


def test_labelled_fields_without_marker(extractor):
    records = extractor.extract_from_page("Name: Karim Ahmed\nAddress: Mirpur, Dhaka 1216")
    assert len(records) == 1
    record = records[0]
    assert (record.name, record.phone, record.address, record.value) == (
        "Karim Ahmed", None, "Mirpur, Dhaka 1216", None
    )


def test_phone_with_stray_spaces(extractor):
    records = extractor.extract_from_page("Invoice To: Karim +880 17 1 234 5678 Mirpur, Dhaka")
    assert records[0].name == "Karim"
    assert records[0].phone == "8801712345678"
    assert records[0].address == "Mirpur, Dhaka"


def test_ocr_spaced_letters(extractor):
    records = extractor.extract_from_page("I n v o i c e To : J o h n Doe\n017 1234 5678\nBanani")
    assert records[0].name == "John Doe"
    assert records[0].phone == "01712345678"
    assert records[0].address == "Banani"


@pytest.mark.parametrize("page", ["Invoice", "INVOICE", "3 Invoice", "Invoice To: Invoice"])
def test_heading_only_page_yields_nothing(extractor, page):
    assert extractor.extract_from_page(page) == []


def test_taka_prefix_total(extractor):
    records = extractor.extract_from_page("Invoice To: Karim 01712345678 Mirpur\nTotal: Tk 1,250.50")
    assert records[0].value == "Tk1250.50"


def test_several_invoices_on_one_page_keep_their_order(extractor):
    page = (
        "Invoice To: Karim 01712345678 Mirpur\nTotal: 500\n"
        "Invoice To: Rahim 01812345678 Uttara\nTotal: 700"
    )
    records = extractor.extract_from_page(page, page=4)
    assert [(r.name, r.phone, r.address, r.value, r.page) for r in records] == [
        ("Karim", "01712345678", "Mirpur", "৳500", 4),
        ("Rahim", "01812345678", "Uttara", "৳700", 4),
    ]


def test_unmarked_page_uses_fallback_heuristics(extractor):
    records = extractor.extract_from_page("Karim Ahmed\n01712345678\nMirpur 10\nTotal: 300")
    assert [r.fields for r in records] == [
        {'name': "Karim Ahmed", 'phone': "01712345678", 'address': "Mirpur 10", 'value': "৳300"}
    ]


def test_unmarked_page_with_dashed_phone(extractor):
    records = extractor.extract_from_page("Karim Ahmed\n017-1234-5678\nMirpur 10")
    assert [r.fields for r in records] == [
        {'name': "Karim Ahmed", 'phone': "01712345678", 'address': "Mirpur 10", 'value': None}
    ]


def test_date_is_not_read_as_an_address(extractor):
    assert extractor.extract_from_page("Karim Ahmed\nDate: 12/05/2024\nThanks") == []


def test_bangla_invoice(extractor):
    records = extractor.extract_from_page("Invoice To: করিম আহমেদ 01712345678\nমিরপুর ১০, ঢাকা\nTotal: ৳1,200")
    assert records[0].name == "করিম আহমেদ"
    assert records[0].address == "মিরপুর ১০, ঢাকা"
    assert records[0].value == "৳1200"


@pytest.mark.parametrize("page", [
    "",
    "\n\n",
    "Order ID: 12\nPayment Method: COD",
    "Invoice To:\nInvoice To:",
    "Thank you for shopping",
])
def test_no_record_is_ever_empty(extractor, page):
    for record in extractor.extract_from_page(page):
        assert any(record.fields.values())


@pytest.mark.parametrize("value", [None, 12, b"Invoice To: Karim", ["Invoice To: Karim"]])
def test_non_string_page_is_rejected(extractor, value):
    with pytest.raises(InvalidTextError):
        extractor.extract_from_page(value)


def test_parse_block_falls_back_when_primary_is_empty(extractor):
    fields = extractor.parse_block("Name: Karim\nAddress: Uttara")
    assert (fields.name, fields.address) == ("Karim", "Uttara")


def test_pages_are_processed_in_page_order(extractor):
    pages = [
        RawPage(text="Invoice To: Rahim 01812345678 Uttara", index=2),
        RawPage(text="Invoice To: Karim 01712345678 Mirpur", index=1),
    ]
    records = extractor.extract_from_pages(pages, source="orders.pdf")
    assert [(r.page, r.name, r.source) for r in records] == [
        (1, "Karim", "orders.pdf"),
        (2, "Rahim", "orders.pdf"),
    ]


def test_document_is_split_on_form_feeds(extractor):
    text = "Invoice To: Karim 01712345678 Mirpur\fcover page\f\fInvoice To: Rahim 01812345678 Uttara"
    records = extractor.extract_from_document(text, source="orders.txt")
    assert [(r.page, r.name) for r in records] == [(1, "Karim"), (4, "Rahim")]


def test_document_rejects_non_string(extractor):
    with pytest.raises(InvalidTextError):
        extractor.extract_from_document(None)


def test_module_level_entry_points():
    page = "Invoice To: Karim 01712345678 Mirpur"
    assert extract_from_page(page, source="a.pdf")[0].source == "a.pdf"
    assert extract_from_document(page)[0].page == 1
