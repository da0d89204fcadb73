"""
Main Input Handler Module.

This module provides the InputHandler class that turns an input document
into page text for the extraction engine. PDFs go through the pdfplumber
text adapter; plain-text files are read as UTF-8 and split into pages on
form feeds.

Usage:
    from invoice_extractor.input_handler import InputHandler

    handler = InputHandler()
    result = handler.load("orders.pdf")

    # Process batch
    results = handler.load_batch("./invoices/")
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Union

from config import get_config
from invoice_extractor.field_extraction.extraction_result import RawPage
from invoice_extractor.utils.exceptions import (
    CorruptedFileError,
    DocumentNotFoundError,
    InputError,
    UnsupportedFileTypeError
)
from invoice_extractor.utils.helpers import collect_input_files, get_file_extension
from invoice_extractor.utils.logger import get_logger
from .pdf_processor import PDFProcessor

logger = get_logger(__name__)

PAGE_SEPARATOR = "\f"


@dataclass
class InputResult:
    """
    Result of loading one input document.

    Attributes:
        filepath: Original file path
        filename: Original filename, used as the record source
        file_type: Detected file type ('pdf' or 'text')
        pages: Page texts, numbered from 1
        success: Whether loading was successful
        error: Error message if loading failed
    """
    filepath: str
    filename: str
    file_type: str
    pages: List[RawPage] = field(default_factory=list)
    success: bool = True
    error: Optional[str] = None

    @property
    def page_count(self) -> int:
        return len(self.pages)

    def __repr__(self) -> str:
        return (
            f"InputResult(filename='{self.filename}', "
            f"type='{self.file_type}', "
            f"pages={self.page_count}, "
            f"success={self.success})"
        )


class InputHandler:
    """
    Loads invoice documents as page text.

    Attributes:
        supported_extensions: Set of supported file extensions
        pdf_processor: PDFProcessor instance for PDF files

    Example:
        >>> handler = InputHandler()
        >>> result = handler.load("orders.pdf")
        >>> print(f"Loaded {result.page_count} pages")
    """

    PDF_EXTENSIONS = {'.pdf'}
    TEXT_EXTENSIONS = {'.txt'}

    def __init__(self) -> None:
        self.supported_extensions = {
            ext.lower() for ext in get_config(
                "input.supported_extensions",
                sorted(self.PDF_EXTENSIONS | self.TEXT_EXTENSIONS)
            )
        }
        self.pdf_processor = PDFProcessor()

        logger.debug(f"InputHandler initialized with extensions: {sorted(self.supported_extensions)}")

    def detect_file_type(self, filepath: Union[str, Path]) -> str:
        """
        Detect the type of input file.

        Returns:
            'pdf' or 'text'.

        Raises:
            UnsupportedFileTypeError: If file type is not supported.
        """
        extension = get_file_extension(filepath)

        if extension in self.PDF_EXTENSIONS and extension in self.supported_extensions:
            return 'pdf'
        if extension in self.TEXT_EXTENSIONS and extension in self.supported_extensions:
            return 'text'
        raise UnsupportedFileTypeError(extension, sorted(self.supported_extensions))

    def load_pages(self, filepath: Union[str, Path]) -> List[RawPage]:
        """
        Read a document's pages.

        Args:
            filepath: Path to a .pdf or .txt file.

        Returns:
            Page texts in page order.

        Raises:
            DocumentNotFoundError: If the file doesn't exist.
            UnsupportedFileTypeError: If file type is not supported.
            CorruptedFileError: If the file cannot be read.
        """
        path = Path(filepath)
        if not path.is_file():
            raise DocumentNotFoundError(str(filepath))

        if self.detect_file_type(path) == 'pdf':
            return self.pdf_processor.extract_pages(path)
        return self.read_text_pages(path)

    def read_text_pages(self, filepath: Union[str, Path]) -> List[RawPage]:
        """Read a UTF-8 text file; form feeds separate pages."""
        try:
            text = Path(filepath).read_text(encoding="utf-8-sig")
        except (OSError, UnicodeDecodeError) as e:
            raise CorruptedFileError(str(filepath), str(e))

        return [
            RawPage(text=page_text, index=index)
            for index, page_text in enumerate(text.split(PAGE_SEPARATOR), 1)
        ]

    def load(self, filepath: Union[str, Path]) -> InputResult:
        """
        Load an input document, capturing input errors in the result.

        Args:
            filepath: Path to the document.

        Returns:
            InputResult with the page texts, or with ``success=False``
            and the error message.
        """
        filepath = str(filepath)
        filename = Path(filepath).name
        logger.info(f"Loading file: {filepath}")

        try:
            file_type = self.detect_file_type(filepath)
            pages = self.load_pages(filepath)
        except InputError as e:
            logger.error(f"Input error for {filepath}: {e}")
            return InputResult(
                filepath=filepath,
                filename=filename,
                file_type='unknown',
                success=False,
                error=str(e)
            )

        logger.info(f"Loaded: {filename} ({len(pages)} page(s))")
        return InputResult(
            filepath=filepath,
            filename=filename,
            file_type=file_type,
            pages=pages
        )

    def load_batch(self, directory: Union[str, Path]) -> List[InputResult]:
        """
        Load all supported documents in a directory.

        Raises:
            DocumentNotFoundError: If the directory doesn't exist.
            InputError: If the path is not a directory.
        """
        directory = Path(directory)

        if not directory.exists():
            raise DocumentNotFoundError(str(directory))
        if not directory.is_dir():
            raise InputError(f"Path is not a directory: {directory}")

        files = collect_input_files(directory, self.supported_extensions)
        logger.info(f"Found {len(files)} files to process in {directory}")

        results = [self.load(path) for path in files]

        successful = sum(1 for r in results if r.success)
        logger.info(f"Batch loading complete: {successful} successful, {len(results) - successful} failed")
        return results
