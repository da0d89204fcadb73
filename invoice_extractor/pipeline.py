"""
Extraction Pipeline Module.

Wires the components into the page-level entry point:

    raw page text
        -> TextNormalizer
        -> BlockSplitter
        -> PrimaryBlockParser (-> FallbackHeuristicParser if empty)
        -> TotalExtractor (block, then page)
        -> FieldSanitizer
        -> ExtractedRecord

Every step is a pure function of its input; a PageExtractor holds no
per-call state and can be shared across threads.
"""

from typing import Iterable, List, Optional

from invoice_extractor.field_extraction.extraction_result import ExtractedRecord, ParsedFields, RawPage
from invoice_extractor.field_extraction.fallback_parser import FallbackHeuristicParser
from invoice_extractor.field_extraction.phone_matcher import PhoneMatcher
from invoice_extractor.field_extraction.primary_parser import PrimaryBlockParser
from invoice_extractor.field_extraction.rules import ExtractionRules, default_rules
from invoice_extractor.field_extraction.total_extractor import TotalExtractor
from invoice_extractor.postprocessor.sanitizer import FieldSanitizer
from invoice_extractor.preprocessor.block_splitter import BlockSplitter
from invoice_extractor.preprocessor.normalizer import TextNormalizer
from invoice_extractor.utils.exceptions import InvalidTextError
from invoice_extractor.utils.logger import get_logger

logger = get_logger(__name__)

PAGE_SEPARATOR = "\f"


class PageExtractor:
    """
    Extracts contact records from linearized invoice text.

    Attributes:
        rules: Extraction rules shared by all components.
        normalizer, splitter, primary_parser, fallback_parser,
        total_extractor, sanitizer: the pipeline stages.

    Example:
        >>> extractor = PageExtractor()
        >>> records = extractor.extract_from_page(
        ...     "Invoice To: John Doe 01712345678 House 5, Road 2, Dhaka 1212 "
        ...     "Order ID: 99 Total: ৳970"
        ... )
        >>> records[0].name, records[0].phone, records[0].value
        ('John Doe', '01712345678', '৳970')
    """

    def __init__(self, rules: Optional[ExtractionRules] = None) -> None:
        self.rules = rules or default_rules()
        phone_matcher = PhoneMatcher(self.rules)

        self.normalizer = TextNormalizer()
        self.splitter = BlockSplitter()
        self.primary_parser = PrimaryBlockParser(self.rules, phone_matcher)
        self.fallback_parser = FallbackHeuristicParser(self.rules, phone_matcher)
        self.total_extractor = TotalExtractor(self.rules)
        self.sanitizer = FieldSanitizer()

    def extract_from_page(
        self,
        page_text: str,
        source: str = "",
        page: int = 1
    ) -> List[ExtractedRecord]:
        """
        Extract the records of one page.

        Args:
            page_text: Raw linearized page text (line breaks at line ends).
            source: Source document name copied into each record.
            page: 1-based page number copied into each record.

        Returns:
            Records in block order; empty if nothing was found.

        Raises:
            InvalidTextError: If ``page_text`` is not a string.
        """
        if not isinstance(page_text, str):
            raise InvalidTextError(page_text)

        normalized = self.normalizer.normalize(page_text)
        records = []

        for block in self.splitter.split(normalized):
            fields = self.parse_block(block)
            value = self.total_extractor.extract_total(block, normalized)
            record = self.sanitizer.sanitize(fields, value, source=source, page=page)
            if record is None:
                continue
            if record.missing_fields:
                logger.debug(f"Page {page}: record without {', '.join(record.missing_fields)}")
            records.append(record)

        logger.debug(f"Page {page} of {source or '<text>'}: {len(records)} record(s)")
        return records

    def parse_block(self, block: str) -> ParsedFields:
        """Primary parse, falling back to the heuristics when it finds nothing."""
        fields = self.primary_parser.parse(block)
        if fields.is_empty:
            fields = self.fallback_parser.parse(block)
        return fields

    def extract_from_pages(self, pages: Iterable[RawPage], source: str = "") -> List[ExtractedRecord]:
        """Extract records from already-split pages, in page order."""
        records = []
        for raw_page in sorted(pages, key=lambda p: p.index):
            records.extend(self.extract_from_page(raw_page.text, source=source, page=raw_page.index))
        return records

    def extract_from_document(self, text: str, source: str = "") -> List[ExtractedRecord]:
        """
        Extract records from a whole document's text.

        Args:
            text: Document text with pages separated by form feeds.
            source: Source document name.

        Returns:
            Records of all pages, in page order.
        """
        if not isinstance(text, str):
            raise InvalidTextError(text)

        pages = [
            RawPage(text=page_text, index=index)
            for index, page_text in enumerate(text.split(PAGE_SEPARATOR), 1)
        ]
        records = self.extract_from_pages(pages, source=source)
        logger.info(f"{source or 'Document'}: {len(pages)} page(s), {len(records)} record(s)")
        return records


_default_extractor: Optional[PageExtractor] = None


def _extractor() -> PageExtractor:
    global _default_extractor
    if _default_extractor is None:
        _default_extractor = PageExtractor()
    return _default_extractor


def extract_from_page(page_text: str, source: str = "", page: int = 1) -> List[ExtractedRecord]:
    """Extract the records of one page with the default configuration."""
    return _extractor().extract_from_page(page_text, source=source, page=page)


def extract_from_document(text: str, source: str = "") -> List[ExtractedRecord]:
    """Extract the records of a form-feed separated document."""
    return _extractor().extract_from_document(text, source=source)


def reset_default_extractor() -> None:
    """Forget the shared extractor (after a configuration change)."""
    global _default_extractor
    _default_extractor = None
