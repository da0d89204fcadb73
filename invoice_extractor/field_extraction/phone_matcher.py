"""
Phone Matcher Module.

Locates Bangladeshi mobile numbers:

    (880 | 0) 1 [3-9] dddddddd      a leading "+" before 880 is allowed

The fuzzy matcher tolerates whitespace, hyphens, dots and parentheses
between the digits (OCR splits numbers apart) and reports where the match
sits in the searched text, so callers can slice the name before it and the
address after it. The strict matcher accepts the digits only as one run.
"""

import re
from typing import Optional

from invoice_extractor.field_extraction.extraction_result import PhoneSpan
from invoice_extractor.field_extraction.rules import ExtractionRules, default_rules
from invoice_extractor.utils.logger import get_logger

logger = get_logger(__name__)

# Noise allowed between two digits of a fuzzy match
SEPARATOR = r"[\s\-.()]*"

FUZZY_PHONE_RE = re.compile(
    rf"(?:(?:\+{SEPARATOR})?8{SEPARATOR}8{SEPARATOR}0|0)"
    rf"{SEPARATOR}1{SEPARATOR}[3-9](?:{SEPARATOR}[0-9]){{8}}"
)
STRICT_PHONE_RE = re.compile(r"(?:\+?880|0)1[3-9][0-9]{8}")
CANONICAL_DIGITS_RE = re.compile(r"(?:880|0)1[3-9][0-9]{8}")
NON_DIGIT_RE = re.compile(r"[^0-9]")


class PhoneMatcher:
    """
    Finds and normalizes Bangladeshi mobile numbers.

    The normalized number is digits only. With the default ``keep`` form it
    is the number as written (13 digits with country code, 11 without);
    ``local`` and ``international`` rewrite it to one of the two forms.

    Example:
        >>> matcher = PhoneMatcher()
        >>> span = matcher.find_phone("Karim +880 17 1 234 5678 Mirpur")
        >>> span.normalized, span.index, span.length
        ('8801712345678', 6, 18)
    """

    def __init__(self, rules: Optional[ExtractionRules] = None) -> None:
        self.rules = rules or default_rules()

    def find_phone(self, text: str) -> Optional[PhoneSpan]:
        """
        Find the first phone number, tolerating noise between its digits.

        Args:
            text: Text to search.

        Returns:
            PhoneSpan with the offset and length of the match in ``text``,
            or None.
        """
        return self._search(FUZZY_PHONE_RE, text)

    def find_strict(self, text: str) -> Optional[PhoneSpan]:
        """Find the first phone number written as one digit run."""
        return self._search(STRICT_PHONE_RE, text)

    def normalize(self, raw: str) -> Optional[str]:
        """
        Normalize a phone string to its canonical digit form.

        Args:
            raw: Text holding exactly one number, e.g. "+880-1712-345678".

        Returns:
            Canonical digits, or None if ``raw`` is not a valid number.
        """
        digits = NON_DIGIT_RE.sub("", raw or "")
        if not CANONICAL_DIGITS_RE.fullmatch(digits):
            return None

        form = self.rules.phone_canonical_form
        if form == "local" and digits.startswith("880"):
            return "0" + digits[3:]
        if form == "international" and digits.startswith("0"):
            return "88" + digits
        return digits

    def _search(self, pattern: re.Pattern, text: str) -> Optional[PhoneSpan]:
        if not text:
            return None
        match = pattern.search(text)
        if not match:
            return None

        normalized = self.normalize(match.group(0))
        if normalized is None:
            return None

        return PhoneSpan(
            normalized=normalized,
            index=match.start(),
            length=match.end() - match.start(),
        )


def find_phone(text: str) -> Optional[PhoneSpan]:
    """Fuzzy phone search with the default rules."""
    return PhoneMatcher().find_phone(text)
