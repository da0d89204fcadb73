"""
Field Extraction Module.

Text-to-field extraction for one invoice block:
    - Bangladeshi phone matching (fuzzy and strict)
    - Primary parser for the canonical "Invoice To" layout
    - Fallback heuristics for irregular layouts
    - Invoice total extraction
    - Configurable label sets and keywords (ExtractionRules)
"""

from .extraction_result import RawPage, PhoneSpan, ParsedFields, ExtractedRecord
from .rules import ExtractionRules, default_rules
from .phone_matcher import PhoneMatcher, find_phone
from .primary_parser import PrimaryBlockParser, parse_primary
from .fallback_parser import FallbackHeuristicParser, parse_fallback
from .total_extractor import TotalExtractor, extract_total

__all__ = [
    'RawPage',
    'PhoneSpan',
    'ParsedFields',
    'ExtractedRecord',
    'ExtractionRules',
    'default_rules',
    'PhoneMatcher',
    'find_phone',
    'PrimaryBlockParser',
    'parse_primary',
    'FallbackHeuristicParser',
    'parse_fallback',
    'TotalExtractor',
    'extract_total',
]
