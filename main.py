#!/usr/bin/env python3
"""
Bangladeshi Invoice Contact Extractor - Main Entry Point.

Command-line interface for the extraction engine: reads invoice PDFs (or
plain-text exports), extracts one contact record per "Invoice To" block and
writes them to Excel or CSV.

Usage:
    Command Line:
        python main.py --input orders.pdf --output contacts.xlsx
        python main.py --input ./invoices/ --output contacts.csv

    Python:
        from main import run_extraction
        records = run_extraction("orders.pdf")
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from config import ConfigurationManager, get_config
from invoice_extractor.field_extraction.extraction_result import ExtractedRecord
from invoice_extractor.input_handler import InputHandler
from invoice_extractor.output_handler import OutputHandler
from invoice_extractor.pipeline import PageExtractor
from invoice_extractor.utils.exceptions import InvoiceExtractionError
from invoice_extractor.utils.helpers import collect_input_files
from invoice_extractor.utils.logger import APP_LOGGER_NAME, get_logger, setup_logger_from_config


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Returns:
        Parsed argument namespace.
    """
    parser = argparse.ArgumentParser(
        description="Bangladeshi Invoice Contact Extractor",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    Process a single PDF:
        python main.py --input orders.pdf --output contacts.xlsx

    Process a directory into CSV:
        python main.py --input ./invoices/ --output contacts.csv
        """
    )

    parser.add_argument(
        "--input", "-i",
        type=str,
        required=True,
        help="Input .pdf/.txt file or a directory containing them"
    )

    parser.add_argument(
        "--output", "-o",
        type=str,
        default=None,
        help="Output .xlsx or .csv file (default: timestamped .xlsx in the output directory)"
    )

    parser.add_argument(
        "--config", "-c",
        type=str,
        default=None,
        help="Path to custom configuration file"
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging"
    )

    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Only log warnings and errors"
    )

    return parser.parse_args(argv)


def initialize_system(args: argparse.Namespace) -> ConfigurationManager:
    """
    Initialize the extractor with configuration and logging.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Initialized configuration manager.
    """
    config = ConfigurationManager(args.config)
    logger = setup_logger_from_config()

    if args.debug:
        level = logging.DEBUG
    elif args.quiet:
        level = logging.WARNING
    else:
        level = None

    if level is not None:
        logging.getLogger(APP_LOGGER_NAME).setLevel(level)
        for handler in logging.getLogger(APP_LOGGER_NAME).handlers:
            handler.setLevel(level)

    logger.info("=" * 60)
    logger.info("BANGLADESHI INVOICE CONTACT EXTRACTOR")
    logger.info("=" * 60)
    logger.info(f"Version: {config.get('project.version', '1.0.0')}")
    logger.info(f"Input: {args.input}")
    logger.info(f"Output: {args.output or 'auto'}")

    return config


def run_extraction(
    input_path: str,
    output_path: Optional[str] = None,
    save: bool = True
) -> List[ExtractedRecord]:
    """
    Run the extraction over a file or directory.

    Documents that fail to load are logged and skipped; the remaining ones
    are still processed.

    Args:
        input_path: Path to a .pdf/.txt file or a directory.
        output_path: Target .xlsx or .csv file. None picks a timestamped .xlsx.
        save: Whether to write the output file.

    Returns:
        All extracted records, in file then page order.

    Raises:
        FileNotFoundError: If ``input_path`` doesn't exist.

    Example:
        >>> records = run_extraction("orders.pdf", "contacts.xlsx")
        >>> for r in records:
        ...     print(r.name, r.phone)
    """
    logger = get_logger(__name__)

    path = Path(input_path)
    if not path.exists():
        raise FileNotFoundError(f"Input path not found: {path}")

    input_handler = InputHandler()
    extractor = PageExtractor()

    files = collect_input_files(path, get_config("input.supported_extensions", [".pdf", ".txt"]))
    if not files:
        logger.warning(f"No supported files found in: {path}")
    logger.info(f"Processing {len(files)} file(s)...")

    records = []
    for file_path in files:
        result = input_handler.load(file_path)
        if not result.success:
            continue

        file_records = extractor.extract_from_pages(result.pages, source=result.filename)
        logger.info(f"  {result.filename}: {result.page_count} page(s), {len(file_records)} record(s)")
        records.extend(file_records)

    if save:
        saved_path = OutputHandler().save(records, output_path)
        logger.info(f"Output: {saved_path}")

    return records


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main function - entry point for command-line execution.

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    args = parse_arguments(argv)

    try:
        initialize_system(args)
        logger = get_logger(__name__)

        records = run_extraction(args.input, args.output)

        logger.info("=" * 60)
        logger.info(f"Extraction complete. {len(records)} record(s) extracted.")
        logger.info("=" * 60)
        return 0

    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    except InvoiceExtractionError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    except KeyboardInterrupt:
        print("\nOperation cancelled by user")
        return 130


if __name__ == "__main__":
    sys.exit(main())
