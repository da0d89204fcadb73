"""
Bangladeshi Invoice Contact Extractor - Source Package.

Turns linearized invoice page text into contact records (name, phone,
address, invoice total). Each module has a single responsibility.

Modules:
    - preprocessor: Text normalization and "Invoice To" block splitting
    - field_extraction: Phone matching, block parsers, total extraction
    - postprocessor: Field sanitizing and artifact filtering
    - pipeline: Page and document entry points
    - input_handler: PDF and plain-text page adapters
    - output_handler: Table flattening, Excel and CSV output

Architecture:
    Page text → Normalize → Split → Parse (primary → fallback)
              → Total → Sanitize → Records → Table / Excel / CSV
"""

__version__ = "1.0.0"

from .field_extraction.extraction_result import ExtractedRecord, RawPage
from .pipeline import PageExtractor, extract_from_page, extract_from_document
from .output_handler.table import records_to_table

__all__ = [
    'ExtractedRecord',
    'RawPage',
    'PageExtractor',
    'extract_from_page',
    'extract_from_document',
    'records_to_table',
]
