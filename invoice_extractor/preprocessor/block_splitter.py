"""
Block Splitter Module.

A page may hold several invoices. Each one starts with an "Invoice To"
marker; the splitter cuts the normalized page at every marker and hands
each fragment to the parsers with a canonical "Invoice To: " prefix.
"""

import re
from typing import Iterator, List

from invoice_extractor.utils.exceptions import InvalidTextError
from invoice_extractor.utils.logger import get_logger

logger = get_logger(__name__)

# "Invoice To", "INVOICE TO:", "InvoiceTo -", not "Invoice Total"
INVOICE_TO_RE = re.compile(r"\binvoice\s*to\b\s*[:\-]?", re.IGNORECASE)

CANONICAL_MARKER = "Invoice To: "


def has_invoice_marker(text: str) -> bool:
    """True when ``text`` contains an "Invoice To" marker."""
    return INVOICE_TO_RE.search(text) is not None


class BlockSplitter:
    """
    Splits a normalized page into one block per invoice.

    Fragments are taken between consecutive markers; the text before the
    first marker is a fragment too. Empty fragments are skipped. Text that
    follows a block's contact details stays with that block up to the next
    marker. A page without any marker is returned whole, unprefixed.

    Example:
        >>> splitter = BlockSplitter()
        >>> list(splitter.split("Invoice To: A 01712345678\\nInvoice to - B"))
        ['Invoice To: A 01712345678', 'Invoice To: B']
    """

    def split(self, page: str) -> Iterator[str]:
        """
        Yield the blocks of ``page`` in order of appearance.

        Args:
            page: Normalized page text.

        Yields:
            Block strings.
        """
        if not isinstance(page, str):
            raise InvalidTextError(page)

        start = 0
        marked = False
        for match in INVOICE_TO_RE.finditer(page):
            marked = True
            fragment = page[start:match.start()].strip()
            if fragment:
                yield CANONICAL_MARKER + fragment
            start = match.end()

        if not marked:
            if page.strip():
                yield page
            return

        tail = page[start:].strip()
        if tail:
            yield CANONICAL_MARKER + tail

    def split_blocks(self, page: str) -> List[str]:
        """Eager variant of ``split``."""
        blocks = list(self.split(page))
        logger.debug(f"Split page into {len(blocks)} block(s)")
        return blocks


def split_blocks(page: str) -> List[str]:
    return BlockSplitter().split_blocks(page)
