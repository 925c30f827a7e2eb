"""File ingestion utilities.

Turns an uploaded CSV, Excel workbook or PDF into a plain-text string that
can be sent to the analysis and chat models.

Responsibilities:
    - Extension-based dispatch to the right extraction strategy
    - CSV passthrough with encoding fallback
    - Spreadsheet to CSV text via pandas
    - PDF text extraction with pypdf
"""

from insightstream.parsing.errors import FileParseError, IngestionError, UnsupportedFormatError
from insightstream.parsing.ingestion import (
    MAX_FILE_SIZE,
    SUPPORTED_EXTENSIONS,
    detect_file_type,
    ingest_file,
)

__all__ = [
    "MAX_FILE_SIZE",
    "SUPPORTED_EXTENSIONS",
    "FileParseError",
    "IngestionError",
    "UnsupportedFormatError",
    "detect_file_type",
    "ingest_file",
]
