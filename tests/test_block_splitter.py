import types

import pytest

from invoice_extractor.preprocessor.block_splitter import BlockSplitter, has_invoice_marker, split_blocks
from invoice_extractor.utils.exceptions import InvalidTextError


@pytest.fixture
def splitter():
    return BlockSplitter()


def test_one_block_per_marker(splitter):
    page = "Invoice To: A 01712345678\nfoo\nINVOICE TO - B\nbar"
    assert splitter.split_blocks(page) == [
        "Invoice To: A 01712345678\nfoo",
        "Invoice To: B\nbar",
    ]


@pytest.mark.parametrize("marker", ["Invoice To:", "invoice to", "INVOICE  TO -", "InvoiceTo:"])
def test_marker_variants_are_canonicalized(splitter, marker):
    assert splitter.split_blocks(f"{marker} Karim") == ["Invoice To: Karim"]


def test_text_before_first_marker_is_its_own_block(splitter):
    page = "Shop Header\nInvoice To: Karim"
    assert splitter.split_blocks(page) == ["Invoice To: Shop Header", "Invoice To: Karim"]


def test_empty_fragments_are_skipped(splitter):
    assert splitter.split_blocks("Invoice To:\nInvoice To: Karim") == ["Invoice To: Karim"]


def test_page_without_marker_is_a_single_unmarked_block(splitter):
    page = "Name: Karim Ahmed\nAddress: Mirpur"
    assert splitter.split_blocks(page) == [page]


def test_invoice_total_is_not_a_marker(splitter):
    page = "Invoice Total: 500"
    assert not has_invoice_marker(page)
    assert splitter.split_blocks(page) == [page]


def test_empty_page_has_no_blocks(splitter):
    assert splitter.split_blocks("") == []
    assert split_blocks("   ") == []


def test_split_is_lazy_and_restartable(splitter):
    page = "Invoice To: A\nInvoice To: B"
    blocks = splitter.split(page)
    assert isinstance(blocks, types.GeneratorType)
    assert list(blocks) == list(splitter.split(page))


def test_non_string_page_is_rejected(splitter):
    with pytest.raises(InvalidTextError):
        list(splitter.split(None))
