"""
Extraction Rules Module.

Label sets, trailing-field markers, address keywords and currency symbols
used by the parsers, bundled as one immutable value. The default instance is
built from ``config/settings.yaml``; tests and callers can build their own.

Example:
    >>> rules = ExtractionRules.from_config()
    >>> rules.looks_like_name("John Doe")
    True
    >>> custom = dataclasses.replace(rules, max_address_lines=2)
"""

import re
from dataclasses import dataclass
from functools import cached_property
from typing import Optional, Pattern, Tuple

from config import get_config
from invoice_extractor.preprocessor import bangla
from invoice_extractor.utils.logger import get_logger

logger = get_logger(__name__)


DEFAULT_TRAILING_FIELD_MARKERS = (
    r"Order\s*ID",
    r"Date\s*Added",
    r"Payment\s*Method",
    r"Shipping\s*Method",
    r"(?:City\s*)?Courier",
    r"Product",
    r"Quantity",
    r"Unit\s*Price",
    r"Sub\s*Total",
    r"Total",
    r"Authori[sz]ed\s*Signature",
)

DEFAULT_FIELD_LABELS = (
    "Name", "Phone", "Mobile", "Tel", "Email", "Address", "City", "Country",
    "Order", "Invoice", r"Bill\s*To", r"Ship\s*To", "Payment", "Shipping",
)

DEFAULT_ADDRESS_KEYWORDS = (
    "road", "rd", "thana", r"p\.?\s?o", r"p\.?\s?s", "upazila", "upazilla",
    "district", "zila", "zilla", "area", "city", "house", "apartment", "flat",
    "block", "sector",
    "রোড", "থানা", "জেলা", "উপজেলা", "বাসা", "সড়ক",
)

DEFAULT_CURRENCY_SYMBOLS = ("৳", "Tk", "BDT")

PHONE_FORMS = ("keep", "local", "international")

# One token of a name: starts with a letter, then letters, . - ' or joiners
NAME_TOKEN_RE = re.compile(
    rf"^[A-Za-z{bangla.LETTER}][A-Za-z{bangla.LETTER}.\-'{bangla.JOINER}]*$"
)
ANY_DIGIT_RE = re.compile(rf"[0-9{bangla.DIGIT}]")
# A 4-digit token that is not part of a date or a dashed number
POSTAL_CODE_RE = r"(?<!\w)(?<!\d[/.\-])[0-9]{4}(?!\w)(?![/.\-]\d)"


def _alternation(patterns: Tuple[str, ...]) -> str:
    return "|".join(f"(?:{p})" for p in patterns)


@dataclass(frozen=True)
class ExtractionRules:
    """
    Immutable configuration for the field parsers.

    Attributes:
        trailing_field_markers: Regex fragments for labels that end the
            contact part of a block (order id, payment method, totals...).
        field_labels: Regex fragments for labels that start a new field.
        address_keywords: Words that suggest an address line. ASCII keywords
            are matched as whole words, Bangla ones as substrings.
        currency_symbols: Recognised currency prefixes, canonical spelling.
        default_currency: Symbol used when a total has no prefix.
        phone_canonical_form: "keep", "local" or "international".
        max_address_lines: Lines kept when inferring an address after a phone.
        name_min_tokens / name_max_tokens: Token bounds for a name-shaped line.
    """
    trailing_field_markers: Tuple[str, ...] = DEFAULT_TRAILING_FIELD_MARKERS
    field_labels: Tuple[str, ...] = DEFAULT_FIELD_LABELS
    address_keywords: Tuple[str, ...] = DEFAULT_ADDRESS_KEYWORDS
    currency_symbols: Tuple[str, ...] = DEFAULT_CURRENCY_SYMBOLS
    default_currency: str = "৳"
    phone_canonical_form: str = "keep"
    max_address_lines: int = 3
    name_min_tokens: int = 1
    name_max_tokens: int = 6

    def __post_init__(self):
        if self.phone_canonical_form not in PHONE_FORMS:
            raise ValueError(
                f"phone_canonical_form must be one of {PHONE_FORMS}, "
                f"got {self.phone_canonical_form!r}"
            )

    @classmethod
    def from_config(cls) -> 'ExtractionRules':
        """Build rules from the ``extraction``, ``currency`` and ``phone`` settings."""
        rules = cls(
            trailing_field_markers=tuple(get_config(
                "extraction.trailing_field_markers", DEFAULT_TRAILING_FIELD_MARKERS)),
            field_labels=tuple(get_config(
                "extraction.field_labels", DEFAULT_FIELD_LABELS)),
            address_keywords=tuple(get_config(
                "extraction.address_keywords", DEFAULT_ADDRESS_KEYWORDS)),
            currency_symbols=tuple(get_config(
                "currency.symbols", DEFAULT_CURRENCY_SYMBOLS)),
            default_currency=get_config("currency.default_symbol", "৳"),
            phone_canonical_form=get_config("phone.canonical_form", "keep"),
            max_address_lines=int(get_config("extraction.max_address_lines", 3)),
            name_min_tokens=int(get_config("extraction.name_min_tokens", 1)),
            name_max_tokens=int(get_config("extraction.name_max_tokens", 6)),
        )
        logger.debug(
            f"ExtractionRules loaded ({len(rules.trailing_field_markers)} markers, "
            f"{len(rules.field_labels)} labels, {len(rules.address_keywords)} keywords)"
        )
        return rules

    # ------------------------------------------------------------------
    # Compiled patterns
    # ------------------------------------------------------------------

    @cached_property
    def trailing_marker_re(self) -> Pattern:
        return re.compile(
            rf"\b(?:{_alternation(self.trailing_field_markers)})", re.IGNORECASE
        )

    @cached_property
    def field_label_re(self) -> Pattern:
        return re.compile(
            rf"\b(?:{_alternation(self.field_labels)})\b", re.IGNORECASE
        )

    @cached_property
    def address_keyword_re(self) -> Pattern:
        parts = [
            rf"\b(?:{kw})\b" if kw.isascii() else f"(?:{kw})"
            for kw in self.address_keywords
        ]
        parts.append(POSTAL_CODE_RE)
        return re.compile("|".join(parts), re.IGNORECASE)

    # ------------------------------------------------------------------
    # Predicates and helpers
    # ------------------------------------------------------------------

    def looks_like_name(self, line: Optional[str]) -> bool:
        """
        Check whether a line is shaped like a personal name.

        No digits, between ``name_min_tokens`` and ``name_max_tokens``
        whitespace-separated tokens, each made of Latin or Bangla letters
        plus ``. - '`` and joiners.

        Example:
            >>> rules.looks_like_name("Md. Karim-Uddin")
            True
            >>> rules.looks_like_name("House 5")
            False
        """
        if not line or ANY_DIGIT_RE.search(line):
            return False
        tokens = line.split()
        if not self.name_min_tokens <= len(tokens) <= self.name_max_tokens:
            return False
        return all(NAME_TOKEN_RE.match(token) for token in tokens)

    def cut_at_trailing_marker(self, text: str) -> str:
        """Return ``text`` up to the first trailing-field marker."""
        match = self.trailing_marker_re.search(text)
        return text[:match.start()] if match else text

    def canonical_currency(self, symbol: Optional[str]) -> str:
        """Map a matched prefix ("TK", "tk.", "bdt") to its configured spelling."""
        if not symbol:
            return self.default_currency
        key = symbol.rstrip(".").casefold()
        for known in self.currency_symbols:
            if known.casefold() == key:
                return known
        return self.default_currency


_default_rules: Optional[ExtractionRules] = None


def default_rules() -> ExtractionRules:
    """Rules built from configuration, created on first use."""
    global _default_rules
    if _default_rules is None:
        _default_rules = ExtractionRules.from_config()
    return _default_rules


def reset_default_rules() -> None:
    """Drop the cached default rules (after a configuration change)."""
    global _default_rules
    _default_rules = None
