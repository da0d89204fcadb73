"""
PDF Processor Module.

Turns a text-based PDF into linearized page text for the extraction engine:
    - Per-page text extraction with pdfplumber
    - Line breaks at detected line ends, pages kept separate
    - Page limit from configuration

Scanned (image-only) PDFs yield empty pages; there is no OCR step.
"""

from pathlib import Path
from typing import List, Union

import pdfplumber

from config import get_config
from invoice_extractor.field_extraction.extraction_result import RawPage
from invoice_extractor.utils.exceptions import CorruptedFileError, DocumentNotFoundError
from invoice_extractor.utils.logger import get_logger

logger = get_logger(__name__)


class PDFProcessor:
    """
    Text adapter for PDF files.

    Attributes:
        max_pages: Maximum number of pages to read (None for all)
        x_tolerance: Horizontal gap (points) that still joins characters
        y_tolerance: Vertical gap (points) that still joins a line

    Example:
        >>> processor = PDFProcessor()
        >>> pages = processor.extract_pages("orders.pdf")
        >>> print(f"Read {len(pages)} pages")
    """

    def __init__(self) -> None:
        self.max_pages = get_config("input.pdf.max_pages", None)
        self.x_tolerance = get_config("input.pdf.x_tolerance", 3)
        self.y_tolerance = get_config("input.pdf.y_tolerance", 3)

        logger.debug(
            f"PDFProcessor initialized (max_pages={self.max_pages}, "
            f"tolerance={self.x_tolerance}x{self.y_tolerance})"
        )

    def extract_pages(self, filepath: Union[str, Path]) -> List[RawPage]:
        """
        Read the text of every page.

        Args:
            filepath: Path to the PDF file.

        Returns:
            One RawPage per page, numbered from 1. Pages without a text
            layer have empty text.

        Raises:
            DocumentNotFoundError: If the file does not exist.
            CorruptedFileError: If the PDF cannot be parsed.
        """
        filepath = Path(filepath)
        if not filepath.is_file():
            raise DocumentNotFoundError(str(filepath))

        logger.info(f"Reading PDF: {filepath.name}")
        pages = []

        try:
            with pdfplumber.open(filepath) as pdf:
                total = len(pdf.pages)
                selected = pdf.pages
                if self.max_pages is not None and total > self.max_pages:
                    logger.warning(f"PDF has {total} pages, limiting to {self.max_pages}")
                    selected = pdf.pages[:self.max_pages]

                for index, page in enumerate(selected, 1):
                    text = page.extract_text(
                        x_tolerance=self.x_tolerance,
                        y_tolerance=self.y_tolerance
                    ) or ""
                    if not text.strip():
                        logger.debug(f"Page {index} of {filepath.name} has no text layer")
                    pages.append(RawPage(text=text, index=index))
        except Exception as e:
            logger.error(f"PDF parsing failed: {e}")
            raise CorruptedFileError(str(filepath), str(e))

        logger.info(f"Read {len(pages)} page(s) from {filepath.name}")
        return pages
