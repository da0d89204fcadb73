"""
Output Handler Module for the Invoice Contact Extractor.

This module provides functionality for:
    - Flattening records into Source/Page/Name/Phone/Address/Value rows
    - Excel (.xlsx) export
    - CSV export
"""

from .table import TABLE_COLUMNS, COLUMN_HEADERS, records_to_table
from .excel_exporter import ExcelExporter
from .csv_exporter import CsvExporter
from .handler import OutputHandler

__all__ = [
    'TABLE_COLUMNS',
    'COLUMN_HEADERS',
    'records_to_table',
    'ExcelExporter',
    'CsvExporter',
    'OutputHandler',
]
