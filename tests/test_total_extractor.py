import dataclasses

import pytest

from invoice_extractor.field_extraction.total_extractor import TotalExtractor, extract_total


@pytest.fixture
def totals(rules):
    return TotalExtractor(rules)


def test_last_total_wins(totals):
    block = "Sub Total: 900\nDelivery: 70\nTotal: 970"
    assert totals.extract_total(block) == "৳970"


def test_later_total_supersedes_earlier_one(totals):
    assert totals.extract_total("Total: 100\nDiscount: 10\nTotal: 90") == "৳90"


@pytest.mark.parametrize("text, expected", [
    ("Total: Tk 1,250.50", "Tk1250.50"),
    ("Total: ৳970", "৳970"),
    ("Total - BDT 1,000", "BDT1000"),
    ("TOTAL: tk. 75.5", "Tk75.5"),
    ("Total Amount: 1,500", "৳1500"),
    ("Total Payable ৳ 2,340.00", "৳2340.00"),
])
def test_labelled_totals(totals, text, expected):
    assert totals.extract_total(text) == expected


def test_currency_prefixed_amount_without_label(totals):
    assert totals.extract_total("Grand amount Tk 1,250.50") == "Tk1250.50"
    assert totals.extract_total("Paid ৳500 then ৳ 1,200") == "৳1200"


def test_label_takes_precedence_over_prefixed_amounts(totals):
    assert totals.extract_total("Total: 800\nShipping Tk 60") == "৳800"


def test_letter_prefix_inside_a_word_is_ignored(totals):
    assert totals.extract_total("Netk 500") is None


def test_page_is_used_when_block_has_no_total(totals):
    assert totals.extract_total("Invoice To: Karim", "Invoice To: Karim\nTotal: 450") == "৳450"


def test_block_total_wins_over_page(totals):
    assert totals.extract_total("Total: 100", "Total: 100\nTotal: 200") == "৳100"


def test_no_total(totals):
    assert totals.extract_total("Invoice To: Karim 01712345678") is None
    assert totals.extract_total("", None) is None


def test_normalize(totals):
    assert totals.normalize("TK", "1,250.50") == "Tk1250.50"
    assert totals.normalize(None, "970") == "৳970"
    assert totals.normalize("bdt", "12") == "BDT12"


def test_configured_default_symbol(rules):
    totals = TotalExtractor(dataclasses.replace(rules, default_currency="Tk"))
    assert totals.extract_total("Total: 970") == "Tk970"


def test_module_level_extract_total():
    assert extract_total("Total: Tk 1,250.50") == "Tk1250.50"
