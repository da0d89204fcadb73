"""
Extraction Data Classes.

This module defines the values that flow through the extraction pipeline:

    RawPage        one page of linearized text from the PDF-text adapter
    PhoneSpan      a located Bangladeshi mobile number
    ParsedFields   intermediate output of a parser stage
    ExtractedRecord  the final, emitted record
"""

from dataclasses import dataclass
from typing import Dict, Optional


@dataclass(frozen=True)
class RawPage:
    """
    One page of linearized document text.

    Attributes:
        text: Page text with line breaks at detected line ends.
        index: 1-based page number.
    """
    text: str
    index: int


@dataclass(frozen=True)
class PhoneSpan:
    """
    A phone number located in a piece of text.

    Attributes:
        normalized: Digits-only canonical number.
        index: Start offset of the match in the searched text.
        length: Length of the matched text, separators included.
    """
    normalized: str
    index: int
    length: int

    @property
    def end(self) -> int:
        """Offset just past the matched text."""
        return self.index + self.length


@dataclass
class ParsedFields:
    """
    Contact fields produced by a parser stage. Any field may be None.

    Example:
        >>> fields = ParsedFields(name="John Doe", phone="01712345678")
        >>> fields.is_empty
        False
    """
    name: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        """True when no field carries a value."""
        return not (self.name or self.phone or self.address)

    @property
    def fields(self) -> Dict[str, Optional[str]]:
        return {'name': self.name, 'phone': self.phone, 'address': self.address}


@dataclass(frozen=True)
class ExtractedRecord:
    """
    A contact record extracted from one invoice block.

    At least one of name/phone/address/value is set; empty fields are None.
    ``value`` is formatted as ``<symbol><digits>[.<1-2 digits>]``.

    Attributes:
        source: Name of the source document.
        page: 1-based page number.
        name: Customer name.
        phone: Normalized phone number.
        address: Customer address.
        value: Invoice total, e.g. "৳970" or "Tk1250.50".

    Example:
        >>> record = ExtractedRecord(
        ...     source="orders.pdf", page=1,
        ...     name="John Doe", phone="01712345678",
        ...     address="House 5, Road 2, Dhaka 1212", value="৳970"
        ... )
        >>> record.missing_fields
        []
    """
    source: str
    page: int
    name: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    value: Optional[str] = None

    @property
    def fields(self) -> Dict[str, Optional[str]]:
        """The extracted fields, without source/page metadata."""
        return {
            'name': self.name,
            'phone': self.phone,
            'address': self.address,
            'value': self.value,
        }

    @property
    def missing_fields(self) -> list:
        """Names of fields that were not extracted."""
        return [k for k, v in self.fields.items() if not v]
