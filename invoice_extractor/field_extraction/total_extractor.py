"""
Total Extractor Module.

Finds the invoice total in a block, falling back to the whole page:

    1. "Total" labels:        "Sub Total: 900 ... Total: ৳970"  -> ৳970
    2. currency-prefixed:     "Tk 1,250.50"                     -> Tk1250.50

The last match wins in both passes, since later totals supersede earlier
subtotal-like lines. Amounts are emitted as ``<symbol><digits>[.dd]`` with
thousands separators removed; ৳ is used when no symbol was written.
"""

import re
from typing import List, Optional

from invoice_extractor.field_extraction.rules import ExtractionRules, default_rules
from invoice_extractor.utils.logger import get_logger

logger = get_logger(__name__)

AMOUNT = r"[0-9][0-9,]*(?:\.[0-9]{1,2})?"
SEPARATORS_RE = re.compile(r"[,\s]")


class TotalExtractor:
    """
    Extracts and normalizes invoice totals.

    Attributes:
        rules: Extraction rules supplying the currency symbols.

    Example:
        >>> extractor = TotalExtractor()
        >>> extractor.extract_total("Sub Total: 900\\nTotal: Tk 1,250.50")
        'Tk1250.50'
    """

    def __init__(self, rules: Optional[ExtractionRules] = None) -> None:
        self.rules = rules or default_rules()

        symbols = sorted(self.rules.currency_symbols, key=len, reverse=True)
        # Letter prefixes ("Tk") must not be the tail of a longer word
        symbol_group = "|".join(
            rf"(?<![A-Za-z]){re.escape(s)}" if s[:1].isalpha() else re.escape(s)
            for s in symbols
        )
        prefix = rf"(?P<symbol>{symbol_group})\.?"

        self.labelled_re = re.compile(
            rf"Total(?:\s+(?:Amount|Payable|Due))?\s*[:\-]?\s*"
            rf"(?:{prefix}\s*)?(?P<amount>{AMOUNT})",
            re.IGNORECASE,
        )
        self.prefixed_re = re.compile(
            rf"{prefix}\s*(?P<amount>{AMOUNT})",
            re.IGNORECASE,
        )
        self.value_re = re.compile(r"[0-9]+(?:\.[0-9]{1,2})?")

    def extract_total(self, block: str, page: Optional[str] = None) -> Optional[str]:
        """
        Find the total for ``block``, trying ``page`` when the block has none.

        Args:
            block: Block text.
            page: Full page text, used as a fallback.

        Returns:
            Normalized amount such as "৳970", or None.
        """
        value = self._scan(block)
        if value is None and page:
            value = self._scan(page)
            if value:
                logger.debug(f"Total taken from page text: {value}")
        return value

    def normalize(self, symbol: Optional[str], amount: str) -> Optional[str]:
        """
        Format a matched amount.

        Example:
            >>> extractor.normalize("TK", "1,250.50")
            'Tk1250.50'
        """
        cleaned = SEPARATORS_RE.sub("", amount)
        if not self.value_re.fullmatch(cleaned):
            return None
        return f"{self.rules.canonical_currency(symbol)}{cleaned}"

    def _scan(self, text: str) -> Optional[str]:
        if not text:
            return None
        for pattern in (self.labelled_re, self.prefixed_re):
            value = self._last_valid(list(pattern.finditer(text)))
            if value:
                return value
        return None

    def _last_valid(self, matches: List[re.Match]) -> Optional[str]:
        for match in reversed(matches):
            value = self.normalize(match.group("symbol"), match.group("amount"))
            if value:
                return value
        return None


def extract_total(block: str, page: Optional[str] = None) -> Optional[str]:
    return TotalExtractor().extract_total(block, page)
