"""Excel workbook holding texts to translate, one sheet per content type."""

import os
import logging
from typing import Any, Iterable, List, Optional

import openpyxl
from openpyxl.styles import Font
from openpyxl.worksheet.worksheet import Worksheet

from .models import Localized

logger = logging.getLogger(__name__)

SHEET_NAME_LENGTH = 30
KEY_HEADER = "Key"
DEFAULT_TEXT_HEADER = "English Text"

# 1-based column positions
DEFAULT_TEXT_COLUMN = 2
FIRST_LOCALE_COLUMN = 3

HEADER_FONT = Font(name="Arial Black", family=4, bold=True)


def sheet_name_for(content_type_id: str) -> str:
    # Distinct ids sharing a prefix end up in the same sheet.
    return content_type_id[:SHEET_NAME_LENGTH]


def cell_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    return str(value)


class LabelWorkbook:
    """Output table written by the export."""

    def __init__(self):
        self.workbook = openpyxl.Workbook()
        self._placeholder: Optional[Worksheet] = self.workbook.active

    @property
    def sheet_names(self) -> List[str]:
        if self._placeholder is not None:
            return []
        return list(self.workbook.sheetnames)

    def get_or_create_sheet(self, content_type_id: str) -> Worksheet:
        """Return the sheet of a content type, adding it with a header if needed.

        Args:
            content_type_id: Content type the rows belong to

        Returns:
            The worksheet
        """
        name = sheet_name_for(content_type_id)
        if name in self.sheet_names:
            return self.workbook[name]

        if self._placeholder is not None:
            self.workbook.remove(self._placeholder)
            self._placeholder = None
        sheet = self.workbook.create_sheet(title=name)

        sheet.append([KEY_HEADER, DEFAULT_TEXT_HEADER])
        for cell in sheet[1]:
            cell.font = HEADER_FONT
        return sheet

    def add_row(self, content_type_id: str, field_name: str, text: str) -> None:
        self.get_or_create_sheet(content_type_id).append([field_name, text])

    def save(self, path: str) -> None:
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        self.workbook.save(path)
        logger.debug(f"Saved workbook with {len(self.sheet_names)} sheets to {path}")


def read_sheet_translations(
    sheet: Worksheet,
    locales: Iterable[str],
    default_locale: str
) -> List[Localized]:
    """Read the localized values of one sheet.

    Header cells from the third column on that name a known locale become
    translation columns; other columns are ignored. Data rows start at row 2
    and run through the last row of the sheet.

    Args:
        sheet: Worksheet to read
        locales: Known locale codes
        default_locale: Locale of the ``English Text`` column

    Returns:
        One locale map per row with a non-empty default text
    """
    known = set(locales)
    locale_columns = []
    for column in range(FIRST_LOCALE_COLUMN, sheet.max_column + 1):
        header = cell_text(sheet.cell(row=1, column=column).value)
        if header is not None and header.strip() in known:
            locale_columns.append((column, header.strip()))

    results = []
    for row in range(2, sheet.max_row + 1):
        default_text = cell_text(sheet.cell(row=row, column=DEFAULT_TEXT_COLUMN).value)
        if default_text is None or not default_text.strip():
            continue
        localized = {default_locale: default_text}
        for column, locale in locale_columns:
            if locale == default_locale:
                continue
            translation = cell_text(sheet.cell(row=row, column=column).value)
            if translation:
                localized[locale] = translation
        results.append(localized)
    return results


def read_translations(path: str, locales: Iterable[str], default_locale: str) -> List[Localized]:
    """Read localized values from every sheet of a workbook.

    Args:
        path: Workbook file
        locales: Known locale codes
        default_locale: Default locale code

    Returns:
        Locale maps in sheet and row order
    """
    locales = list(locales)
    workbook = openpyxl.load_workbook(path, read_only=False, data_only=True)
    try:
        results = []
        for sheet in workbook.worksheets:
            rows = read_sheet_translations(sheet, locales, default_locale)
            logger.debug(f"Read {len(rows)} rows from sheet {sheet.title}")
            results.extend(rows)
        return results
    finally:
        workbook.close()
