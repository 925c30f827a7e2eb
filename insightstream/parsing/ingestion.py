"""File ingestion: choose an extraction strategy from the file extension."""

import logging

from insightstream.parsing.errors import IngestionError, UnsupportedFormatError
from insightstream.parsing.pdf_parser import parse_pdf
from insightstream.parsing.tabular_parser import parse_csv, parse_excel

logger = logging.getLogger(__name__)

MAX_FILE_SIZE = 10 * 1024 * 1024  # 10MB
SUPPORTED_EXTENSIONS = ("csv", "xlsx", "xls", "pdf")


def detect_file_type(filename: str) -> str:
    """Return the lower-cased extension of a filename, or an empty string."""
    if "." not in filename:
        return ""
    return filename.rsplit(".", 1)[-1].lower()


def ingest_file(filename: str, file_content: bytes) -> str:
    """Extract plain text from an uploaded file.

    Args:
        filename: Original file name; its extension selects the parser.
        file_content: Raw bytes of the file.

    Returns:
        Extracted text content.

    Raises:
        UnsupportedFormatError: If the extension is not csv, xlsx, xls or pdf.
        IngestionError: If the file is empty, too large, or unreadable.
    """
    extension = detect_file_type(filename)
    if extension not in SUPPORTED_EXTENSIONS:
        raise UnsupportedFormatError()

    if not file_content:
        raise IngestionError("Empty file provided")

    if len(file_content) > MAX_FILE_SIZE:
        size_mb = len(file_content) / (1024 * 1024)
        raise IngestionError(f"File size ({size_mb:.1f}MB) exceeds maximum allowed (10MB)")

    if extension == "csv":
        text = parse_csv(file_content)
    elif extension in ("xlsx", "xls"):
        text = parse_excel(file_content)
    else:
        text = parse_pdf(file_content).text

    logger.info(f"Ingested {filename} as {extension} ({len(text)} characters)")
    return text
