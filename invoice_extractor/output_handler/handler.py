"""
Main Output Handler Module.

This module provides the OutputHandler class that picks the exporter for an
output path (.xlsx or .csv) and writes extracted records with it.
"""

from pathlib import Path
from typing import Optional, Sequence, Union

from invoice_extractor.field_extraction.extraction_result import ExtractedRecord
from invoice_extractor.utils.exceptions import UnsupportedFileTypeError
from invoice_extractor.utils.helpers import get_file_extension
from invoice_extractor.utils.logger import get_logger
from .csv_exporter import CsvExporter
from .excel_exporter import ExcelExporter

logger = get_logger(__name__)

SUPPORTED_OUTPUTS = ['.xlsx', '.csv']


class OutputHandler:
    """
    Unified output handler for extracted records.

    Attributes:
        excel_exporter: ExcelExporter instance (created on first use)
        csv_exporter: CsvExporter instance (created on first use)

    Example:
        >>> handler = OutputHandler()
        >>> handler.save(records, "outputs/contacts.xlsx")
        'outputs/contacts.xlsx'
        >>> handler.save(records, "outputs/contacts.csv")
        'outputs/contacts.csv'
    """

    def __init__(self) -> None:
        self._excel_exporter = None
        self._csv_exporter = None

    @property
    def excel_exporter(self) -> ExcelExporter:
        """Get or create the Excel exporter."""
        if self._excel_exporter is None:
            self._excel_exporter = ExcelExporter()
        return self._excel_exporter

    @property
    def csv_exporter(self) -> CsvExporter:
        """Get or create the CSV exporter."""
        if self._csv_exporter is None:
            self._csv_exporter = CsvExporter()
        return self._csv_exporter

    def save(
        self,
        records: Sequence[ExtractedRecord],
        output_path: Optional[Union[str, Path]] = None
    ) -> str:
        """
        Write records to ``output_path``; its suffix selects the format.

        Args:
            records: Records to export.
            output_path: Target .xlsx or .csv file. If None, an Excel file
                with a generated name is written to the output directory.

        Returns:
            Path of the written file.

        Raises:
            UnsupportedFileTypeError: For any other suffix.
        """
        if output_path is None:
            return self.excel_exporter.export(records)

        extension = get_file_extension(output_path)
        if extension == '.xlsx':
            return self.excel_exporter.export(records, output_path)
        if extension == '.csv':
            return self.csv_exporter.export(records, output_path)

        raise UnsupportedFileTypeError(extension, SUPPORTED_OUTPUTS)
