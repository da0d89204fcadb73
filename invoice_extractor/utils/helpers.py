"""
Helper Utilities Module.

Small filesystem helpers shared by the input/output adapters and the CLI.

Functions:
    - ensure_directory: Create directory if it doesn't exist
    - get_file_extension: Extract file extension safely
    - generate_timestamp: Generate formatted timestamps
    - collect_input_files: List supported documents under a path
"""

from datetime import datetime
from pathlib import Path
from typing import Iterable, List, Union


def ensure_directory(path: Union[str, Path]) -> Path:
    """
    Ensure a directory exists, creating it and its parents if necessary.

    Args:
        path: Directory path to ensure exists.

    Returns:
        Path object pointing to the directory.

    Example:
        >>> ensure_directory("outputs/reports")
        PosixPath('outputs/reports')
    """
    dir_path = Path(path)
    dir_path.mkdir(parents=True, exist_ok=True)
    return dir_path


def get_file_extension(filepath: Union[str, Path]) -> str:
    """
    Extract the lowercase file extension, including the dot.

    Example:
        >>> get_file_extension("invoices.PDF")
        '.pdf'
        >>> get_file_extension("noextension")
        ''
    """
    return Path(filepath).suffix.lower()


def generate_timestamp(format_str: str = "%Y%m%d_%H%M%S") -> str:
    """
    Generate a formatted timestamp string.

    Example:
        >>> generate_timestamp("%Y-%m-%d")
        '2026-01-21'
    """
    return datetime.now().strftime(format_str)


def collect_input_files(path: Union[str, Path], extensions: Iterable[str]) -> List[Path]:
    """
    List the documents to process under ``path``.

    A file path is returned as-is when its extension is supported; a
    directory is scanned (non-recursively) for supported files.

    Args:
        path: File or directory.
        extensions: Supported extensions, lowercase with the dot.

    Returns:
        Sorted list of file paths. Empty if nothing matches.
    """
    path = Path(path)
    extensions = {ext.lower() for ext in extensions}

    if path.is_file():
        return [path] if get_file_extension(path) in extensions else []

    return sorted(
        p for p in path.iterdir()
        if p.is_file() and get_file_extension(p) in extensions
    )
