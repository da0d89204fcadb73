"""
Record Table Module.

Flattens extracted records into rows with a fixed column order. This is the
shape the exporters write and the host's response layer serializes.
"""

from typing import Any, Dict, Iterable, List, Tuple

from invoice_extractor.field_extraction.extraction_result import ExtractedRecord

# (column header, record attribute)
TABLE_COLUMNS: Tuple[Tuple[str, str], ...] = (
    ('Source', 'source'),
    ('Page', 'page'),
    ('Name', 'name'),
    ('Phone', 'phone'),
    ('Address', 'address'),
    ('Value', 'value'),
)

COLUMN_HEADERS: Tuple[str, ...] = tuple(header for header, _ in TABLE_COLUMNS)


def records_to_table(records: Iterable[ExtractedRecord]) -> List[Dict[str, Any]]:
    """
    Convert records to table rows.

    Missing fields become empty strings; the page stays an integer.

    Args:
        records: Extracted records, in output order.

    Returns:
        One dict per record, keyed by column header in column order.

    Example:
        >>> records_to_table([ExtractedRecord(source="a.pdf", page=2, name="Karim")])
        [{'Source': 'a.pdf', 'Page': 2, 'Name': 'Karim', 'Phone': '', 'Address': '', 'Value': ''}]
    """
    rows = []
    for record in records:
        row = {}
        for header, attribute in TABLE_COLUMNS:
            value = getattr(record, attribute)
            row[header] = value if value is not None else ''
        rows.append(row)
    return rows
