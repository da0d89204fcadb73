"""
Excel Exporter Module.

Writes extracted records to an .xlsx workbook with openpyxl: one sheet,
styled header row, columns sized to their content, header frozen.
"""

from pathlib import Path
from typing import List, Optional, Sequence, Union

import openpyxl
from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter

from config import get_config
from invoice_extractor.field_extraction.extraction_result import ExtractedRecord
from invoice_extractor.output_handler.table import COLUMN_HEADERS, records_to_table
from invoice_extractor.utils.exceptions import ExcelExportError
from invoice_extractor.utils.helpers import ensure_directory, generate_timestamp
from invoice_extractor.utils.logger import get_logger

logger = get_logger(__name__)

MAX_COLUMN_WIDTH = 60


class ExcelExporter:
    """
    Exports extracted records to Excel format.

    Attributes:
        output_dir: Directory for auto-named output files
        sheet_name: Worksheet title

    Example:
        >>> exporter = ExcelExporter()
        >>> path = exporter.export(records, "contacts.xlsx")
        >>> print(f"Saved to: {path}")
    """

    def __init__(self) -> None:
        self.output_dir = Path(get_config("paths.output_dir", "outputs"))
        self.sheet_name = get_config("output.excel.sheet_name", "Extracted")
        logger.debug(f"ExcelExporter initialized (output_dir: {self.output_dir})")

    def export(
        self,
        records: Sequence[ExtractedRecord],
        filename: Optional[Union[str, Path]] = None,
        output_dir: Optional[Union[str, Path]] = None
    ) -> str:
        """
        Export records to an Excel file.

        An empty record list still produces a workbook with the header row.

        Args:
            records: Records to export.
            filename: Output filename or path. If None, auto-generated.
            output_dir: Output directory for a bare filename.

        Returns:
            Path to the created Excel file.

        Raises:
            ExcelExportError: If the workbook cannot be written.
        """
        filepath = filename
        try:
            filepath = self._resolve_path(filename, output_dir)
            workbook = openpyxl.Workbook()
            self._fill_sheet(workbook.active, records_to_table(records))
            workbook.save(filepath)
        except (OSError, ValueError) as e:
            logger.error(f"Excel export failed: {e}")
            raise ExcelExportError(str(filepath), str(e))

        logger.info(f"Excel file saved: {filepath} ({len(records)} records)")
        return str(filepath)

    def _resolve_path(
        self,
        filename: Optional[Union[str, Path]],
        output_dir: Optional[Union[str, Path]]
    ) -> Path:
        if filename is None:
            filename = self.get_default_filename()

        filepath = Path(filename)
        if not filepath.is_absolute() and filepath.parent == Path('.'):
            filepath = Path(output_dir or self.output_dir) / filepath

        ensure_directory(filepath.parent)
        return filepath

    def _fill_sheet(self, sheet, rows: List[dict]) -> None:
        sheet.title = self.sheet_name

        header_font = Font(bold=True, color="FFFFFF")
        header_fill = PatternFill(start_color="4472C4", end_color="4472C4", fill_type="solid")
        header_alignment = Alignment(horizontal="center", vertical="center")
        thin_border = Border(
            left=Side(style='thin'),
            right=Side(style='thin'),
            top=Side(style='thin'),
            bottom=Side(style='thin')
        )

        for col, header in enumerate(COLUMN_HEADERS, 1):
            cell = sheet.cell(row=1, column=col, value=header)
            cell.font = header_font
            cell.fill = header_fill
            cell.alignment = header_alignment
            cell.border = thin_border

        for row_num, row in enumerate(rows, 2):
            for col, header in enumerate(COLUMN_HEADERS, 1):
                cell = sheet.cell(row=row_num, column=col, value=self._cell_value(row[header]))
                cell.border = thin_border
                # Phone numbers must stay text, not become numbers
                if header == 'Phone':
                    cell.number_format = '@'

        for col, header in enumerate(COLUMN_HEADERS, 1):
            widest = max(
                [len(header)] + [len(str(row[header])) for row in rows]
            )
            sheet.column_dimensions[get_column_letter(col)].width = min(widest + 2, MAX_COLUMN_WIDTH)

        sheet.freeze_panes = 'A2'

    @staticmethod
    def _cell_value(value):
        # Control characters from PDF text layers are not allowed in worksheets
        if isinstance(value, str):
            return ILLEGAL_CHARACTERS_RE.sub("", value)
        return value

    def get_default_filename(self) -> str:
        """
        Generate a default filename with timestamp.

        Returns:
            Default filename string.
        """
        pattern = get_config(
            "output.excel.filename_pattern",
            "extracted_{timestamp}.xlsx"
        )
        return pattern.format(timestamp=generate_timestamp())
