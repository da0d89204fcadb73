"""
Input Handler Module for the Invoice Extractor.

This module provides functionality for:
    - Detecting supported document types (.pdf, .txt)
    - Reading text-based PDFs page by page with pdfplumber
    - Reading plain-text exports, pages separated by form feeds
"""

from .handler import InputHandler, InputResult
from .pdf_processor import PDFProcessor

__all__ = ['InputHandler', 'InputResult', 'PDFProcessor']
