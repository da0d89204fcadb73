"""
Text Normalizer Module.

Canonicalizes the raw text of one page before any field matching:

    1. Unicode NFC composition
    2. OCR letter spacing ("J o h n" -> "John")
    3. Gaps inside numbers ("017 1234 5678" -> "01712345678")
    4. Spacing before , . : ; and inside parentheses
    5. Zero-width / NBSP cleanup and Bangla mark spacing
    6. Whitespace and line-break collapsing

The steps run in this order; later steps rely on earlier ones. Line breaks
are kept, they are meaningful to the parsers.
"""

import re
import unicodedata
from typing import Optional

from config import get_config
from invoice_extractor.preprocessor import bangla
from invoice_extractor.utils.exceptions import InvalidTextError
from invoice_extractor.utils.logger import get_logger

logger = get_logger(__name__)

# Any whitespace except a line break
HSPACE = r"[^\S\n]"

SPACED_LETTERS_RE = re.compile(rf"\b[A-Za-z](?:{HSPACE}+[A-Za-z]\b){{2,}}")
DIGIT_GAP_RE = re.compile(
    rf"(?<=[0-9{bangla.DIGIT}]){HSPACE}+(?=[0-9{bangla.DIGIT}])"
)
SPACE_BEFORE_PUNCT_RE = re.compile(rf"{HSPACE}+(?=[,.:;])")
SPACE_BEFORE_CLOSE_PAREN_RE = re.compile(rf"{HSPACE}+(?=\))")
SPACE_AFTER_OPEN_PAREN_RE = re.compile(rf"(?<=\(){HSPACE}+")

ZERO_WIDTH_RE = re.compile(f"[{bangla.ZERO_WIDTH}]")
BASE_SPACE_MARK_RE = re.compile(
    rf"(?<=[{bangla.LETTER}]){HSPACE}+(?=[{bangla.DEPENDENT_MARK}])"
)
MARK_SPACE_BASE_RE = re.compile(
    rf"(?<=[{bangla.DEPENDENT_MARK}]){HSPACE}+(?=[{bangla.LETTER}])"
)
BANGLA_SPACE_JOINER_RE = re.compile(
    rf"(?<=[{bangla.LETTER}]){HSPACE}+(?=[{bangla.JOINER}])"
)
JOINER_SPACE_BANGLA_RE = re.compile(
    rf"(?<=[{bangla.JOINER}]){HSPACE}+(?=[{bangla.LETTER}])"
)
STRAY_JOINER_RE = re.compile(
    rf"(?<![{bangla.LETTER}])[{bangla.JOINER}](?![{bangla.LETTER}])"
)

CARRIAGE_RETURN_RE = re.compile(r"\r\n?")
HSPACE_RUN_RE = re.compile(rf"{HSPACE}+")
SPACE_AROUND_NEWLINE_RE = re.compile(r" ?\n ?")
NEWLINE_RUN_RE = re.compile(r"\n{2,}")


class TextNormalizer:
    """
    Normalizes page text into the form the parsers expect.

    ``normalize`` is total and idempotent: any string is accepted and
    ``normalize(normalize(x)) == normalize(x)``. Some steps expose new matches
    for others (dropping a stray joiner brings two digits together), so the
    pipeline is repeated until the text stops changing. Every pass only
    removes characters or replaces a special space with a plain one, so this
    terminates after a couple of passes.

    Attributes:
        join_after_marks: Close gaps between a Bangla dependent mark and the
            next Bangla letter. OCR splits words there, but the rule also
            joins genuine words that end in a vowel sign.

    Example:
        >>> normalizer = TextNormalizer()
        >>> normalizer.normalize("I n v o i c e  To :  John\\n\\n017 1234 5678")
        'Invoice To: John\\n01712345678'
    """

    MAX_PASSES = 8

    def __init__(self, join_after_marks: Optional[bool] = None) -> None:
        if join_after_marks is None:
            join_after_marks = get_config("normalizer.join_after_marks", True)
        self.join_after_marks = join_after_marks

    def normalize(self, raw: str) -> str:
        """
        Normalize raw page text.

        Args:
            raw: Page text as produced by the PDF-text adapter.

        Returns:
            Normalized text.

        Raises:
            InvalidTextError: If ``raw`` is not a string.
        """
        if not isinstance(raw, str):
            raise InvalidTextError(raw)

        text = raw
        for _ in range(self.MAX_PASSES):
            normalized = self._single_pass(text)
            if normalized == text:
                break
            text = normalized
        else:
            logger.debug(f"Normalization did not settle within {self.MAX_PASSES} passes")
        return text

    def _single_pass(self, text: str) -> str:
        text = unicodedata.normalize("NFC", text)
        text = self.collapse_spaced_letters(text)
        text = DIGIT_GAP_RE.sub("", text)
        text = self.tighten_punctuation(text)
        text = self.clean_bangla(text)
        return self.collapse_whitespace(text)

    @staticmethod
    def collapse_spaced_letters(text: str) -> str:
        """
        Join runs of three or more single Latin letters.

        Example:
            >>> TextNormalizer.collapse_spaced_letters("T o t a l: 5")
            'Total: 5'
        """
        return SPACED_LETTERS_RE.sub(lambda m: HSPACE_RUN_RE.sub("", m.group(0)), text)

    @staticmethod
    def tighten_punctuation(text: str) -> str:
        text = SPACE_BEFORE_PUNCT_RE.sub("", text)
        text = SPACE_BEFORE_CLOSE_PAREN_RE.sub("", text)
        return SPACE_AFTER_OPEN_PAREN_RE.sub("", text)

    def clean_bangla(self, text: str) -> str:
        """
        Drop zero-width characters and close OCR gaps in Bangla text.

        Joiners are kept only next to a Bangla character, NBSP becomes a
        plain space.
        """
        text = ZERO_WIDTH_RE.sub("", text)
        text = text.replace(bangla.NBSP, " ")
        text = BASE_SPACE_MARK_RE.sub("", text)
        if self.join_after_marks:
            text = MARK_SPACE_BASE_RE.sub("", text)
        text = BANGLA_SPACE_JOINER_RE.sub("", text)
        text = JOINER_SPACE_BANGLA_RE.sub("", text)
        return STRAY_JOINER_RE.sub("", text)

    @staticmethod
    def collapse_whitespace(text: str) -> str:
        text = CARRIAGE_RETURN_RE.sub("\n", text)
        text = HSPACE_RUN_RE.sub(" ", text)
        text = SPACE_AROUND_NEWLINE_RE.sub("\n", text)
        text = NEWLINE_RUN_RE.sub("\n", text)
        return text.strip()


_default_normalizer: Optional[TextNormalizer] = None


def normalize_text(raw: str) -> str:
    """Normalize ``raw`` with a shared, configuration-backed normalizer."""
    global _default_normalizer
    if _default_normalizer is None:
        _default_normalizer = TextNormalizer()
    return _default_normalizer.normalize(raw)
