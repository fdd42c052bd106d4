"""Run-scoped registry of default-locale texts and their translations."""

import logging
from typing import Dict, Iterable, Iterator, Optional

from .models import Localized

logger = logging.getLogger(__name__)


class TranslationRegistry:
    """Default texts keyed by their trimmed value; the first registration wins.

    Export only needs to know which texts were already written, while import
    also keeps the translations loaded from the workbook for each text.
    """

    def __init__(self, default_locale: str):
        self.default_locale = default_locale
        self._entries: Dict[str, Localized] = {}

    def __contains__(self, text: str) -> bool:
        return text.strip() in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def register(self, text: str) -> bool:
        """Remember a default text.

        Args:
            text: Default-locale text

        Returns:
            True if the text had not been seen before
        """
        key = text.strip()
        if key in self._entries:
            return False
        self._entries[key] = {self.default_locale: key}
        return True

    def add(self, localized: Localized) -> bool:
        """Register a localized value read from the workbook.

        Args:
            localized: Locale map that includes the default locale

        Returns:
            True if it was stored, False if its default text was already known
        """
        default_text = localized.get(self.default_locale)
        if default_text is None or not str(default_text).strip():
            return False
        key = str(default_text).strip()
        if key in self._entries:
            logger.debug(f"Ignoring duplicate translation row for '{key[:50]}'")
            return False
        self._entries[key] = dict(localized)
        return True

    def extend(self, values: Iterable[Localized]) -> int:
        return sum(1 for value in values if self.add(value))

    def find(self, text: str) -> Optional[Localized]:
        return self._entries.get(text.strip())
