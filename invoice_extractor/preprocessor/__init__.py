"""
Pre-Processing Module.

Turns raw page text into parser-ready blocks:
    - Script-aware text normalization (Latin and Bangla)
    - "Invoice To" block splitting
"""

from .normalizer import TextNormalizer, normalize_text
from .block_splitter import BlockSplitter, split_blocks, has_invoice_marker

__all__ = [
    'TextNormalizer',
    'normalize_text',
    'BlockSplitter',
    'split_blocks',
    'has_invoice_marker',
]
