"""Builders and an in-memory store shared by the tests."""

import copy
from typing import Dict, Iterable, List, Optional, Tuple

from contentful_localizer.models import ContentType, Entry, FieldDefinition
from contentful_localizer.stores import BaseStore

DEFAULT_LOCALE = "en-US"
LOCALES = ["en-US", "fr-FR", "de-DE"]


def text(value: str, marks: Optional[List[dict]] = None) -> dict:
    return {"nodeType": "text", "value": value, "marks": marks or [], "data": {}}


def node(node_type: str, *children: dict, data: Optional[dict] = None) -> dict:
    return {"nodeType": node_type, "data": data or {}, "content": list(children)}


def paragraph(*children: dict) -> dict:
    return node("paragraph", *children)


def document(*blocks: dict) -> dict:
    return node("document", *blocks)


def document_of(*values: str) -> dict:
    """One paragraph per value."""
    return document(*(paragraph(text(value)) for value in values))


def leaf_values(payload: dict) -> List[str]:
    if payload.get("nodeType") == "text":
        return [payload["value"]]
    values = []
    for child in payload.get("content", []):
        values.extend(leaf_values(child))
    return values


def page_type(content_type_id: str = "page") -> ContentType:
    return ContentType(
        id=content_type_id,
        name=content_type_id.capitalize(),
        fields=[
            FieldDefinition("title", "Title", "Symbol", localized=True),
            FieldDefinition("body", "Body", "RichText", localized=True),
            FieldDefinition("slug", "Slug", "Symbol", localized=False),
            FieldDefinition("image", "Image", "Link", localized=True),
            FieldDefinition("tags", "Tags", "Array", localized=True),
            FieldDefinition("rank", "Rank", "Integer", localized=True),
        ],
    )


def make_entry(entry_id: str, content_type_id: str = "page", version: int = 1, **fields) -> Entry:
    """Build an entry; each keyword is a field whose default-locale value is given."""
    return Entry(
        id=entry_id,
        content_type_id=content_type_id,
        fields={name: {DEFAULT_LOCALE: value} for name, value in fields.items()},
        version=version,
    )


class FakeStore(BaseStore):
    """In-memory store recording every call."""

    def __init__(
        self,
        entries: Iterable[Entry] = (),
        content_types: Iterable[ContentType] = (),
        fail_on: Iterable[str] = (),
        locales: Tuple[str, List[str]] = (DEFAULT_LOCALE, LOCALES)
    ):
        super().__init__("token", "space", "testing")
        self.entries = list(entries)
        self.content_types: Dict[str, ContentType] = {ct.id: ct for ct in content_types}
        self.fail_on = set(fail_on)
        self.locales = locales
        self.fetches: List[Tuple[int, int]] = []
        self.schema_requests: List[str] = []
        self.updated: List[Entry] = []
        self.published: List[str] = []
        self.closed = False

    async def get_entries(self, skip: int, limit: int) -> List[Entry]:
        self.fetches.append((skip, limit))
        return self.entries[skip:skip + limit]

    async def get_content_type(self, content_type_id: str) -> ContentType:
        self.schema_requests.append(content_type_id)
        return self.content_types[content_type_id]

    async def get_locales(self) -> Tuple[str, List[str]]:
        return self.locales

    async def update_entry(self, entry: Entry) -> Entry:
        if entry.id in self.fail_on:
            raise RuntimeError(f"update rejected for {entry.id}")
        saved = Entry(
            id=entry.id,
            content_type_id=entry.content_type_id,
            fields=copy.deepcopy(entry.fields),
            version=(entry.version or 0) + 1,
        )
        self.updated.append(saved)
        return saved

    async def publish_entry(self, entry: Entry) -> Entry:
        self.published.append(entry.id)
        return entry

    async def close(self) -> None:
        self.closed = True
