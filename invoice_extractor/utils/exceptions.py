"""
Custom Exceptions Module.

The extraction core is total over text: malformed or unexpected text only
yields empty fields. Exceptions are reserved for contract violations
(non-string input) and for the host-side input/output adapters.

Exception Hierarchy:
    InvoiceExtractionError (base)
    ├── InputError
    │   ├── UnsupportedFileTypeError
    │   ├── DocumentNotFoundError
    │   ├── CorruptedFileError
    │   └── InvalidTextError (also a TypeError)
    └── OutputError
        ├── ExcelExportError
        └── CsvExportError
"""


class InvoiceExtractionError(Exception):
    """
    Base exception for all extractor errors.

    Attributes:
        message: Human-readable error message.
        details: Optional dictionary with additional error details.
    """

    def __init__(self, message: str, details: dict = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


# =============================================================================
# INPUT ERRORS
# =============================================================================

class InputError(InvoiceExtractionError):
    """Base exception for input handling errors."""
    pass


class UnsupportedFileTypeError(InputError):
    """
    Raised when an unsupported file type is provided.

    Example:
        >>> raise UnsupportedFileTypeError(".doc", [".pdf", ".txt"])
    """

    def __init__(self, file_type: str, supported_types: list):
        message = f"Unsupported file type: '{file_type}'"
        details = {"file_type": file_type, "supported_types": supported_types}
        super().__init__(message, details)


class DocumentNotFoundError(InputError):
    """Raised when an input document cannot be found."""

    def __init__(self, filepath: str):
        message = f"File not found: {filepath}"
        details = {"filepath": filepath}
        super().__init__(message, details)


class CorruptedFileError(InputError):
    """Raised when a document appears to be corrupted or unreadable."""

    def __init__(self, filepath: str, reason: str = None):
        message = f"Corrupted or unreadable file: {filepath}"
        details = {"filepath": filepath, "reason": reason}
        super().__init__(message, details)


class InvalidTextError(InputError, TypeError):
    """
    Raised when the engine receives something other than a string.

    Example:
        >>> raise InvalidTextError(b"bytes")
    """

    def __init__(self, value: object):
        message = f"Expected page text as str, got {type(value).__name__}"
        details = {"type": type(value).__name__}
        super().__init__(message, details)


# =============================================================================
# OUTPUT ERRORS
# =============================================================================

class OutputError(InvoiceExtractionError):
    """Base exception for output handling errors."""
    pass


class ExcelExportError(OutputError):
    """Raised when Excel export fails."""

    def __init__(self, filepath: str, reason: str = None):
        message = f"Failed to export Excel file: {filepath}"
        details = {"filepath": filepath, "reason": reason}
        super().__init__(message, details)


class CsvExportError(OutputError):
    """Raised when CSV export fails."""

    def __init__(self, filepath: str, reason: str = None):
        message = f"Failed to export CSV file: {filepath}"
        details = {"filepath": filepath, "reason": reason}
        super().__init__(message, details)


__all__ = [
    'InvoiceExtractionError',
    'InputError',
    'UnsupportedFileTypeError',
    'DocumentNotFoundError',
    'CorruptedFileError',
    'InvalidTextError',
    'OutputError',
    'ExcelExportError',
    'CsvExportError',
]
