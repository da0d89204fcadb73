"""
Fallback Heuristic Parser Module.

Used for blocks the primary parser could not read (no "Invoice To"
marker, or nothing after it). Each field has an ordered list of strategies;
the first one that returns a value wins:

    phone    first number anywhere in the block, separators allowed
    name     "Name: <value>" label  ->  name-shaped line above the phone
    address  "Address" label (+ continuation lines)  ->  text after the
             phone  ->  lines with address keywords or a postal code
"""

import re
from typing import Callable, List, Optional, Sequence

from invoice_extractor.field_extraction.extraction_result import ParsedFields, PhoneSpan
from invoice_extractor.field_extraction.phone_matcher import PhoneMatcher
from invoice_extractor.field_extraction.primary_parser import join_lines
from invoice_extractor.field_extraction.rules import ExtractionRules, default_rules
from invoice_extractor.utils.logger import get_logger

logger = get_logger(__name__)

NAME_LABEL_RE = re.compile(r"\bName\s*[:\-]\s*(.+)$", re.IGNORECASE)
ADDRESS_LABEL_RE = re.compile(r"\bAddress\b\s*[:\-]?\s*(.*)$", re.IGNORECASE)


class BlockContext:
    """
    A block prepared for the field strategies: its text, its non-empty
    lines and the phone match (if any), located in that text.
    """

    def __init__(self, text: str, phone: Optional[PhoneSpan]) -> None:
        self.text = text.replace("\r", "")
        self.lines = [line.strip() for line in self.text.split("\n") if line.strip()]
        self.phone = phone


Strategy = Callable[[BlockContext], Optional[str]]


def first_result(strategies: Sequence[Strategy], context: BlockContext) -> Optional[str]:
    """Run ``strategies`` in order and return the first non-empty result."""
    for strategy in strategies:
        value = strategy(context)
        if value:
            return value
    return None


class FallbackHeuristicParser:
    """
    Label, proximity and keyword heuristics for irregular layouts.

    Example:
        >>> parser = FallbackHeuristicParser()
        >>> parser.parse("Name: Karim Ahmed\\nAddress: Mirpur, Dhaka 1216")
        ParsedFields(name='Karim Ahmed', phone=None, address='Mirpur, Dhaka 1216')
    """

    def __init__(
        self,
        rules: Optional[ExtractionRules] = None,
        phone_matcher: Optional[PhoneMatcher] = None
    ) -> None:
        self.rules = rules or default_rules()
        self.phone_matcher = phone_matcher or PhoneMatcher(self.rules)

        self.name_strategies: List[Strategy] = [
            self.name_from_label,
            self.name_above_phone,
        ]
        self.address_strategies: List[Strategy] = [
            self.address_from_label,
            self.address_after_phone,
            self.address_from_keywords,
        ]

    def parse(self, block: str) -> ParsedFields:
        """
        Extract whatever fields the heuristics can find in ``block``.

        Args:
            block: Block or whole-page text.

        Returns:
            ParsedFields, possibly all None.
        """
        text = block.replace("\r", "")
        context = BlockContext(text, self.phone_matcher.find_phone(text))
        fields = ParsedFields(
            name=first_result(self.name_strategies, context),
            phone=context.phone.normalized if context.phone else None,
            address=first_result(self.address_strategies, context),
        )
        logger.debug(f"Fallback parse: {fields}")
        return fields

    # ------------------------------------------------------------------
    # Name strategies
    # ------------------------------------------------------------------

    def name_from_label(self, context: BlockContext) -> Optional[str]:
        for line in context.lines:
            match = NAME_LABEL_RE.search(line)
            if match and match.group(1).strip():
                return match.group(1).strip()
        return None

    def name_above_phone(self, context: BlockContext) -> Optional[str]:
        """Nearest name-shaped line at or above the phone number."""
        if not context.phone:
            return None
        before = context.text[:context.phone.index]
        for line in reversed(before.split("\n")):
            line = line.strip()
            if line and self.rules.looks_like_name(line):
                return line
        return None

    # ------------------------------------------------------------------
    # Address strategies
    # ------------------------------------------------------------------

    def address_from_label(self, context: BlockContext) -> Optional[str]:
        """
        "Address: ..." plus the following lines, until a line that starts
        another field (or the order details).
        """
        for i, line in enumerate(context.lines):
            match = ADDRESS_LABEL_RE.search(line)
            if not match:
                continue

            parts = [match.group(1).strip()]
            for next_line in context.lines[i + 1:]:
                if self._starts_new_field(next_line):
                    break
                parts.append(next_line)

            address = join_lines("\n".join(parts))
            if address:
                return address
        return None

    def address_after_phone(self, context: BlockContext) -> Optional[str]:
        if not context.phone:
            return None
        after = context.text[context.phone.end:]
        chunk = self.rules.cut_at_trailing_marker(after)
        chunk = chunk.strip().lstrip(",:;-").strip()
        return join_lines(chunk, limit=self.rules.max_address_lines)

    def address_from_keywords(self, context: BlockContext) -> Optional[str]:
        matches = [
            line for line in context.lines
            if self.rules.address_keyword_re.search(line)
            and not self.rules.trailing_marker_re.search(line)
            and not NAME_LABEL_RE.search(line)
            and not self.phone_matcher.find_phone(line)
        ]
        return join_lines("\n".join(matches), limit=self.rules.max_address_lines)

    def _starts_new_field(self, line: str) -> bool:
        return bool(
            self.rules.field_label_re.search(line)
            or self.rules.trailing_marker_re.search(line)
        )


def parse_fallback(block: str) -> ParsedFields:
    return FallbackHeuristicParser().parse(block)
