"""Paginated traversal of localizable entry fields."""

import logging
from typing import Awaitable, Callable, List, Optional

from tqdm import tqdm

from .models import Entry
from .stores import BaseStore
from .validator import FieldValidator

logger = logging.getLogger(__name__)

PAGE_SIZE = 200

FieldCallback = Callable[[Entry, str], Awaitable[None]]
EntryCallback = Callable[[Entry], Awaitable[None]]


class EntryLoader:
    """Walk every entry of a store page by page."""

    def __init__(
        self,
        store: BaseStore,
        validator: FieldValidator,
        page_size: int = PAGE_SIZE,
        show_progress: bool = True
    ):
        self.store = store
        self.validator = validator
        self.page_size = page_size
        self.show_progress = show_progress

    async def load_page(self, offset: int) -> List[Entry]:
        logger.info(f"Fetching entries from {offset} to {offset + self.page_size}")
        return await self.store.get_entries(skip=offset, limit=self.page_size)

    async def for_each_localizable_field(
        self,
        on_field: FieldCallback,
        on_entry_done: Optional[EntryCallback] = None
    ) -> None:
        """Invoke callbacks for every eligible field of every entry.

        Pages are fetched one at a time and fully processed before the next
        request. The walk ends at the first empty page.

        Args:
            on_field: Awaited for each eligible field with the entry and field name
            on_entry_done: Awaited once per entry that had an eligible field,
                after all of its fields were processed
        """
        offset = 0
        entries = await self.load_page(offset)

        while entries:
            offset += self.page_size

            for entry in tqdm(entries, desc="Entries", leave=False, disable=not self.show_progress):
                touched = False
                for field_name in list(entry.fields):
                    if not await self.validator.is_eligible(entry, field_name):
                        continue
                    touched = True
                    await on_field(entry, field_name)
                if touched and on_entry_done is not None:
                    await on_entry_done(entry)

            entries = await self.load_page(offset)
