"""Reading the first sheet of an uploaded workbook into a grid of cell values."""

import io
import logging
import zipfile
from typing import Any, Optional

from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException

from sheetledger.domain.errors import DecryptionFailed, WorkbookUnreadable

logger = logging.getLogger(__name__)

Grid = list[list[Any]]

# Password protected xlsx files are wrapped in an OLE compound file.
OLE_SIGNATURE = b"\xd0\xcf\x11\xe0\xa1\xb1\x1a\xe1"


def is_ole_container(data: bytes) -> bool:
    return data[:len(OLE_SIGNATURE)] == OLE_SIGNATURE


def decrypt_workbook(data: bytes, password: Optional[str]) -> bytes:
    """Decrypt a password protected xlsx file.

    Files that are not OLE containers are returned unchanged. Decryption
    needs the optional msoffcrypto-tool package.

    Raises:
        DecryptionFailed: If the password is wrong or missing
        WorkbookUnreadable: If the container is not an encrypted xlsx workbook
    """
    if not is_ole_container(data):
        return data

    try:
        import msoffcrypto
        from msoffcrypto.exceptions import DecryptionError, FileFormatError, InvalidKeyError
    except ImportError as e:
        raise DecryptionFailed("install msoffcrypto-tool to open password protected workbooks") from e

    try:
        office_file = msoffcrypto.OfficeFile(io.BytesIO(data))
        if getattr(office_file, "format", None) != "ooxml" or not office_file.is_encrypted():
            raise WorkbookUnreadable("legacy .xls workbooks are not supported, save the file as .xlsx")
        if not password:
            raise DecryptionFailed("workbook is password protected")
        office_file.load_key(password=password, verify_password=True)
        decrypted = io.BytesIO()
        office_file.decrypt(decrypted)
    except (InvalidKeyError, DecryptionError, FileFormatError) as e:
        logger.warning("Workbook decryption failed: %s", e)
        raise DecryptionFailed() from e
    return decrypted.getvalue()


def read_first_sheet(data: bytes, password: Optional[str] = None) -> Grid:
    """Return the first worksheet as a list of rows of raw cell values.

    Trailing blank rows are dropped, so an empty sheet yields ``[]``. A
    password given for a plain workbook is ignored.

    Raises:
        DecryptionFailed: Protected workbook with a wrong or missing password
        WorkbookUnreadable: Not an xlsx workbook
    """
    data = decrypt_workbook(data, (password or "").strip() or None)

    try:
        workbook = load_workbook(io.BytesIO(data), data_only=True)
    except (InvalidFileException, zipfile.BadZipFile, KeyError, OSError, ValueError) as e:
        raise WorkbookUnreadable(str(e) or type(e).__name__) from e

    try:
        sheet = workbook.worksheets[0]
        grid = [list(row) for row in sheet.iter_rows(values_only=True)]
    finally:
        workbook.close()

    while grid and is_blank_row(grid[-1]):
        grid.pop()
    logger.debug("Read %d rows from sheet '%s'", len(grid), sheet.title)
    return grid


def is_blank_row(row: list[Any]) -> bool:
    return all(cell_text(cell) == "" for cell in row)


def cell_text(value: Any) -> str:
    """String form of a cell value for header and keyword matching."""
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()
