"""Exceptions raised while turning uploaded files into text."""


class FileParseError(Exception):
    """Base class for file ingestion failures."""

    pass


class IngestionError(FileParseError):
    """Raised when a supported file cannot be read or extracted."""

    pass


class UnsupportedFormatError(FileParseError):
    """Raised when the file extension is not one of csv, xlsx, xls, pdf."""

    def __init__(self, message: str = "Unsupported file format. Please upload CSV, Excel, or PDF.") -> None:
        super().__init__(message)
