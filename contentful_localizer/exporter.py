"""Export default-locale texts from the store into a workbook."""

import time
import logging
from typing import Iterable

from .loader import PAGE_SIZE, EntryLoader
from .models import Entry, PlainText, RichText, classify_value
from .registry import TranslationRegistry
from .richtext import extract_leaf_texts, is_empty
from .stores import BaseStore
from .validator import FieldValidator
from .workbook import LabelWorkbook

logger = logging.getLogger(__name__)


class LabelExporter:
    """Collect every translatable text once, grouped by content type."""

    def __init__(
        self,
        store: BaseStore,
        default_locale: str,
        excluded_content_types: Iterable[str] = (),
        page_size: int = PAGE_SIZE,
        show_progress: bool = True
    ):
        """Initialize the exporter.

        Args:
            store: Store to read entries from
            default_locale: Locale whose values are exported
            excluded_content_types: Content types that are never exported
            page_size: Entries fetched per request
            show_progress: Whether to display a progress bar per page
        """
        self.store = store
        self.default_locale = default_locale
        self.workbook = LabelWorkbook()
        self.registry = TranslationRegistry(default_locale)
        self.rows_written = 0
        validator = FieldValidator(store, default_locale, excluded_content_types)
        self.loader = EntryLoader(store, validator, page_size=page_size, show_progress=show_progress)

    def add_text(self, entry: Entry, field_name: str, text: str) -> None:
        if self.registry.register(text):
            self.workbook.add_row(entry.content_type_id, field_name, text.strip())
            self.rows_written += 1

    async def export_value(self, entry: Entry, field_name: str) -> None:
        value = classify_value(entry.fields[field_name].get(self.default_locale))

        if isinstance(value, RichText):
            if is_empty(value.document):
                return
            for text in extract_leaf_texts(value.document):
                self.add_text(entry, field_name, text)
        elif isinstance(value, PlainText):
            self.add_text(entry, field_name, value.key)

    async def export_labels(self, path: str) -> LabelWorkbook:
        """Export all labels and write the workbook.

        Args:
            path: Destination ``.xlsx`` file

        Returns:
            The written workbook
        """
        logger.info(f"Export started from {self.store.environment}")
        start_time = time.time()

        await self.loader.for_each_localizable_field(self.export_value)
        self.workbook.save(path)

        elapsed_time = time.time() - start_time
        logger.info(f"Exported {self.rows_written} texts in {elapsed_time:.2f} seconds")
        logger.info(f"The data was successfully exported to {path}")
        return self.workbook
