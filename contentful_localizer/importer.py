"""Import translated texts from a workbook back into the store."""

import time
import logging
from typing import Any, Dict, Iterable

from .loader import PAGE_SIZE, EntryLoader
from .models import Entry, PlainText, RichText, classify_value
from .registry import TranslationRegistry
from .richtext import (
    Document,
    Node,
    is_empty,
    is_rich_text,
    iter_leaf_texts,
    node_to_dict,
    parse_document,
    replace_leaf_text,
)
from .stores import BaseStore
from .validator import FieldValidator
from .workbook import read_translations

logger = logging.getLogger(__name__)


class LabelImporter:
    """Write workbook translations into entries, then update and publish them."""

    def __init__(
        self,
        store: BaseStore,
        default_locale: str,
        locales: Iterable[str],
        excluded_content_types: Iterable[str] = (),
        page_size: int = PAGE_SIZE,
        show_progress: bool = True
    ):
        """Initialize the importer.

        Args:
            store: Store holding the entries to update
            default_locale: Locale of the source texts, never overwritten
            locales: Locale codes recognised in the workbook header
            excluded_content_types: Content types that are never imported
            page_size: Entries fetched per request
            show_progress: Whether to display a progress bar per page
        """
        self.store = store
        self.default_locale = default_locale
        self.locales = list(locales)
        self.registry = TranslationRegistry(default_locale)
        validator = FieldValidator(store, default_locale, excluded_content_types)
        self.loader = EntryLoader(store, validator, page_size=page_size, show_progress=show_progress)

    def load_translations(self, path: str) -> int:
        """Fill the registry from a workbook.

        Args:
            path: Workbook written by the export and filled in by translators

        Returns:
            Number of distinct texts loaded
        """
        added = self.registry.extend(read_translations(path, self.locales, self.default_locale))
        logger.info(f"Processed the data file: {added} texts with translations")
        return added

    def _base_tree(self, current: Any, default_document: Document) -> Node:
        if is_rich_text(current):
            return parse_document(current)
        return default_document

    def translate_document(self, locale_map: Dict[str, Any], document: Document) -> Dict[str, Node]:
        """Build translated trees for each locale with a matching translation.

        Every leaf occurrence is looked up. Replacements for one locale pile up
        on the same tree, which starts from the locale's current value, or from
        the default document when the locale has none.
        """
        trees: Dict[str, Node] = {}
        for text in iter_leaf_texts(document):
            translations = self.registry.find(text)
            if translations is None:
                continue
            for locale, translated in translations.items():
                if locale == self.default_locale:
                    continue
                tree = trees.get(locale)
                if tree is None:
                    tree = self._base_tree(locale_map.get(locale), document)
                trees[locale] = replace_leaf_text(tree, text, translated)
        return trees

    async def import_value(self, entry: Entry, field_name: str) -> None:
        locale_map = entry.fields[field_name]
        original = locale_map.get(self.default_locale)
        value = classify_value(original)

        if isinstance(value, RichText):
            if is_empty(value.document):
                return
            trees = self.translate_document(locale_map, value.document)
            if not trees:
                return
            updated = dict(locale_map)
            for locale, tree in trees.items():
                updated[locale] = node_to_dict(tree)
            updated[self.default_locale] = original
            entry.fields[field_name] = updated
        elif isinstance(value, PlainText):
            translations = self.registry.find(value.key)
            if translations is None:
                return
            entry.fields[field_name] = {**translations, self.default_locale: original}

    async def save_entry(self, entry: Entry) -> None:
        try:
            updated = await self.store.update_entry(entry)
            await self.store.publish_entry(updated)
        except Exception as e:
            logger.error(f"Failed to update item {entry.id} : {entry.content_type_id} : {e}")

    async def import_labels(self, path: str) -> None:
        """Import all labels from a workbook.

        Args:
            path: Workbook with translation columns
        """
        logger.info(f"Import started to {self.store.environment}")
        start_time = time.time()

        self.load_translations(path)
        await self.loader.for_each_localizable_field(self.import_value, self.save_entry)

        elapsed_time = time.time() - start_time
        logger.info(f"The data was successfully imported in {elapsed_time:.2f} seconds")
