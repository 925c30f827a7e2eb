"""CSV and spreadsheet to text conversion."""

import io
import logging

import pandas as pd

from insightstream.parsing.errors import IngestionError

logger = logging.getLogger(__name__)

CSV_ENCODINGS = ("utf-8-sig", "latin-1")


def parse_csv(file_content: bytes) -> str:
    """Decode CSV bytes and return the text unchanged.

    A UTF-8 byte order mark is dropped. Falls back to latin-1, which accepts
    any byte sequence.
    """
    for encoding in CSV_ENCODINGS:
        try:
            return file_content.decode(encoding)
        except UnicodeDecodeError:
            continue
    raise IngestionError("Unable to decode CSV file")


def parse_excel(file_content: bytes) -> str:
    """Render every sheet of a workbook as CSV text.

    Sheets are separated by a blank line and prefixed with ``Sheet: <name>``
    when the workbook has more than one.

    Raises:
        IngestionError: If pandas cannot read the workbook.
    """
    try:
        sheets: dict[str, pd.DataFrame] = pd.read_excel(io.BytesIO(file_content), sheet_name=None)
    except Exception as e:
        raise IngestionError(f"Failed to read spreadsheet: {e}") from e

    if not sheets:
        raise IngestionError("Spreadsheet contains no sheets")

    parts: list[str] = []
    for name, df in sheets.items():
        df.columns = [str(c).strip() for c in df.columns]
        csv_text = df.to_csv(index=False, lineterminator="\n").rstrip("\n")
        if len(sheets) > 1:
            parts.append(f"Sheet: {name}\n{csv_text}")
        else:
            parts.append(csv_text)

    logger.debug(f"Converted {len(sheets)} sheet(s) to text")
    return "\n\n".join(parts)
