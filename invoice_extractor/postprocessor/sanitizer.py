"""
Field Sanitizer Module.

Final clean-up of parsed fields before a record is emitted:

    - Residual "Name:" / "Address:" labels
    - Unicode NFC, zero-width and NBSP characters
    - Bangla dependent-mark spacing, danda and visarga spacing
    - Comma/colon spacing and whitespace runs
    - Heading artifacts ("Invoice", "2 Invoice") captured as a name
"""

import re
import unicodedata
from typing import Optional

from invoice_extractor.field_extraction.extraction_result import ExtractedRecord, ParsedFields
from invoice_extractor.preprocessor import bangla
from invoice_extractor.preprocessor.normalizer import BASE_SPACE_MARK_RE, MARK_SPACE_BASE_RE
from invoice_extractor.utils.logger import get_logger

logger = get_logger(__name__)

FORMAT_CHARS_RE = re.compile(f"[{bangla.ZERO_WIDTH}{bangla.JOINER}]")
NAME_LABEL_RE = re.compile(r"^name\s*[:\-]\s*", re.IGNORECASE)
ADDRESS_LABEL_RE = re.compile(r"^address\b\s*[:\-]?\s*", re.IGNORECASE)
LINE_BREAK_RE = re.compile(r"\s*\n\s*")
COMMA_RE = re.compile(r"\s*,\s*")
REPEATED_COMMA_RE = re.compile(r"(?:,\s*){2,}")
COLON_RE = re.compile(r"\s*:\s*")
DANDA_RE = re.compile(rf"\s*{bangla.DANDA}\s*")
VISARGA_RE = re.compile(rf"\s*{bangla.VISARGA}\s*")
SPACE_RUN_RE = re.compile(r"\s{2,}")

# "Invoice", "INVOICE", "12 invoice" - page headings, not customers
HEADING_NAME_RE = re.compile(r"^(?:[0-9]+\s*)?invoice$", re.IGNORECASE)


class FieldSanitizer:
    """
    Cleans parsed fields and builds the emitted record.

    Example:
        >>> sanitizer = FieldSanitizer()
        >>> sanitizer.sanitize(ParsedFields(name="Name:  John   Doe"), "৳970")
        ExtractedRecord(source='', page=1, name='John Doe', phone=None, address=None, value='৳970')
    """

    def clean_text(self, text: Optional[str]) -> str:
        """
        Apply the script-aware clean-up to a name or address.

        Args:
            text: Field value, may be None.

        Returns:
            Cleaned text, "" when nothing is left.
        """
        if not text:
            return ""

        text = unicodedata.normalize("NFC", text)
        text = FORMAT_CHARS_RE.sub("", text)
        text = text.replace(bangla.NBSP, " ")
        text = BASE_SPACE_MARK_RE.sub("", text)
        text = MARK_SPACE_BASE_RE.sub("", text)
        text = LINE_BREAK_RE.sub(", ", text)
        text = COMMA_RE.sub(", ", text)
        text = REPEATED_COMMA_RE.sub(", ", text)
        text = COLON_RE.sub(":", text)
        text = DANDA_RE.sub(f"{bangla.DANDA} ", text)
        text = VISARGA_RE.sub(bangla.VISARGA, text)
        text = SPACE_RUN_RE.sub(" ", text)
        return text.strip().strip(",;").strip()

    def clean_name(self, name: Optional[str]) -> str:
        name = NAME_LABEL_RE.sub("", (name or "").strip())
        return self.clean_text(name)

    def clean_address(self, address: Optional[str]) -> str:
        address = ADDRESS_LABEL_RE.sub("", (address or "").strip())
        return self.clean_text(address)

    @staticmethod
    def is_heading_artifact(name: str) -> bool:
        """True for names that are just the word "invoice" (optionally numbered)."""
        return bool(HEADING_NAME_RE.match(name.strip()))

    def sanitize(
        self,
        fields: ParsedFields,
        value: Optional[str] = None,
        source: str = "",
        page: int = 1
    ) -> Optional[ExtractedRecord]:
        """
        Clean the fields and build a record.

        Args:
            fields: Output of a parser stage.
            value: Normalized invoice total, if any.
            source: Source document name.
            page: 1-based page number.

        Returns:
            ExtractedRecord, or None when nothing is left or the record is a
            heading artifact.
        """
        name = self.clean_name(fields.name)
        phone = (fields.phone or "").strip()
        address = self.clean_address(fields.address)
        value = (value or "").strip()

        # An "invoice" name with no phone or address is a heading artifact
        if name and not phone and not address and self.is_heading_artifact(name):
            logger.debug(f"Dropping heading artifact {name!r} (page {page})")
            return None

        if not (name or phone or address or value):
            return None

        return ExtractedRecord(
            source=source,
            page=page,
            name=name or None,
            phone=phone or None,
            address=address or None,
            value=value or None,
        )
