"""
CSV Exporter Module.

Writes extracted records as CSV, every cell quoted. The file is UTF-8 with
a byte-order mark so spreadsheet applications show Bangla text correctly.
"""

import csv
from pathlib import Path
from typing import Optional, Sequence, Union

from config import get_config
from invoice_extractor.field_extraction.extraction_result import ExtractedRecord
from invoice_extractor.output_handler.table import COLUMN_HEADERS, records_to_table
from invoice_extractor.utils.exceptions import CsvExportError
from invoice_extractor.utils.helpers import ensure_directory, generate_timestamp
from invoice_extractor.utils.logger import get_logger

logger = get_logger(__name__)


class CsvExporter:
    """
    Exports extracted records to CSV.

    Example:
        >>> CsvExporter().export(records, "outputs/contacts.csv")
        'outputs/contacts.csv'
    """

    def __init__(self) -> None:
        self.output_dir = Path(get_config("paths.output_dir", "outputs"))

    def export(
        self,
        records: Sequence[ExtractedRecord],
        filename: Optional[Union[str, Path]] = None,
        output_dir: Optional[Union[str, Path]] = None
    ) -> str:
        if filename is None:
            pattern = get_config("output.csv.filename_pattern", "extracted_{timestamp}.csv")
            filename = pattern.format(timestamp=generate_timestamp())

        filepath = Path(filename)
        if not filepath.is_absolute() and filepath.parent == Path('.'):
            filepath = Path(output_dir or self.output_dir) / filepath

        try:
            ensure_directory(filepath.parent)
            with open(filepath, 'w', newline='', encoding='utf-8-sig') as f:
                writer = csv.DictWriter(f, fieldnames=COLUMN_HEADERS, quoting=csv.QUOTE_ALL)
                writer.writeheader()
                writer.writerows(records_to_table(records))
        except OSError as e:
            logger.error(f"CSV export failed: {e}")
            raise CsvExportError(str(filepath), str(e))

        logger.info(f"CSV file saved: {filepath} ({len(records)} records)")
        return str(filepath)
