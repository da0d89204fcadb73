"""
Primary Block Parser Module.

Parses blocks laid out the canonical way:

    Invoice To: <name> <phone> <address>
    Order ID: ... Payment Method: ... Total: ...

Everything after the marker, up to the first trailing-field marker, is the
contact part. The phone number splits it into the name (before) and the
address (after). Without a phone, the first line is the name and the
remaining lines the address.
"""

import re
from typing import Optional

from invoice_extractor.field_extraction.extraction_result import ParsedFields
from invoice_extractor.field_extraction.phone_matcher import PhoneMatcher
from invoice_extractor.field_extraction.rules import ExtractionRules, default_rules
from invoice_extractor.preprocessor.block_splitter import INVOICE_TO_RE
from invoice_extractor.utils.logger import get_logger

logger = get_logger(__name__)

NAME_LABEL_RE = re.compile(r"^name\s*[:\-]\s*", re.IGNORECASE)
ADDRESS_LABEL_RE = re.compile(r"^address\b\s*[:\-]?\s*", re.IGNORECASE)
LEADING_PUNCT_RE = re.compile(r"^[,:;\-]\s*")
# "Phone:", "Mobile No.", "Cell -" left dangling right before the number
TRAILING_PHONE_LABEL_RE = re.compile(
    r"\b(?:phone|mobile|cell|tel|contact)(?:\s*(?:no\.?|number|#))?\s*[:\-]?\s*$",
    re.IGNORECASE,
)
MULTI_SPACE_RE = re.compile(r"[^\S\n]{2,}")


def join_lines(text: str, limit: Optional[int] = None) -> Optional[str]:
    """Join the non-empty lines of ``text`` with ", ", optionally keeping ``limit`` lines."""
    lines = [line.strip() for line in text.split("\n")]
    lines = [line for line in lines if line]
    if limit is not None:
        lines = lines[:limit]
    joined = ", ".join(lines)
    return MULTI_SPACE_RE.sub(" ", joined).strip() or None


class PrimaryBlockParser:
    """
    Parser for blocks that start with an "Invoice To" marker.

    Returns empty fields when the marker is missing so the caller can route
    the block to the fallback parser.

    Example:
        >>> parser = PrimaryBlockParser()
        >>> parser.parse("Invoice To: John Doe 01712345678 House 5, Road 2 Order ID: 9")
        ParsedFields(name='John Doe', phone='01712345678', address='House 5, Road 2')
    """

    def __init__(
        self,
        rules: Optional[ExtractionRules] = None,
        phone_matcher: Optional[PhoneMatcher] = None
    ) -> None:
        self.rules = rules or default_rules()
        self.phone_matcher = phone_matcher or PhoneMatcher(self.rules)

    def parse(self, block: str) -> ParsedFields:
        """
        Extract name, phone and address from a marked block.

        Args:
            block: Block text, normally starting with "Invoice To: ".

        Returns:
            ParsedFields; all None if the block has no marker.
        """
        marker = INVOICE_TO_RE.search(block)
        if not marker:
            return ParsedFields()

        head = block[marker.end():].strip()
        head = self.rules.cut_at_trailing_marker(head).strip()
        if not head:
            return ParsedFields()

        span = self.phone_matcher.find_phone(head)
        if span:
            name = self._name_before_phone(head[:span.index])
            address = self._address_after_phone(head[span.end:])
            fields = ParsedFields(name=name, phone=span.normalized, address=address)
        else:
            fields = self._split_lines(head)

        fields.name = self._strip_name_label(fields.name)
        logger.debug(f"Primary parse: {fields}")
        return fields

    def _name_before_phone(self, before: str) -> Optional[str]:
        """
        Name candidate from the text preceding the phone.

        Multi-line text: its first line. Single line: the whole text, but
        only if it is shaped like a name.
        """
        before = TRAILING_PHONE_LABEL_RE.sub("", before.strip()).strip(" ,;:-")
        if not before:
            return None

        if "\n" in before:
            first_line = before.split("\n")[0].strip()
            return first_line or None

        candidate = self._strip_name_label(before)
        return candidate if self.rules.looks_like_name(candidate) else None

    def _address_after_phone(self, after: str) -> Optional[str]:
        after = LEADING_PUNCT_RE.sub("", after.strip())
        after = ADDRESS_LABEL_RE.sub("", after)
        return join_lines(after)

    def _split_lines(self, head: str) -> ParsedFields:
        lines = [line.strip() for line in head.split("\n") if line.strip()]
        if not lines:
            return ParsedFields()
        address = ADDRESS_LABEL_RE.sub("", "\n".join(lines[1:]))
        return ParsedFields(name=lines[0], address=join_lines(address))

    @staticmethod
    def _strip_name_label(name: Optional[str]) -> Optional[str]:
        if not name:
            return None
        return NAME_LABEL_RE.sub("", name).strip() or None


def parse_primary(block: str) -> ParsedFields:
    return PrimaryBlockParser().parse(block)
