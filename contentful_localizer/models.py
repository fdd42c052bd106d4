"""Entry, content type and field value models."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from .richtext import Document, is_rich_text, parse_document

LocaleMap = Dict[str, Any]
Localized = Dict[str, str]


@dataclass
class Entry:
    """A CMS entry. ``fields`` maps field name to a locale map of raw values."""

    id: str
    content_type_id: str
    fields: Dict[str, LocaleMap] = field(default_factory=dict)
    version: Optional[int] = None

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "Entry":
        sys_info = payload.get("sys", {})
        return cls(
            id=sys_info["id"],
            content_type_id=sys_info["contentType"]["sys"]["id"],
            fields=payload.get("fields", {}),
            version=sys_info.get("version"),
        )


@dataclass(frozen=True)
class FieldDefinition:
    id: str
    name: str = ""
    type: str = "Symbol"
    localized: bool = False


@dataclass
class ContentType:
    id: str
    name: str
    fields: List[FieldDefinition] = field(default_factory=list)

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "ContentType":
        return cls(
            id=payload["sys"]["id"],
            name=payload.get("name", payload["sys"]["id"]),
            fields=[
                FieldDefinition(
                    id=item["id"],
                    name=item.get("name", item["id"]),
                    type=item.get("type", "Symbol"),
                    localized=bool(item.get("localized", False)),
                )
                for item in payload.get("fields", [])
            ],
        )

    def get_field(self, field_id: str) -> Optional[FieldDefinition]:
        for definition in self.fields:
            if definition.id == field_id:
                return definition
        return None


# Closed set of default-locale value kinds. ``classify_value`` picks exactly one.

@dataclass(frozen=True)
class Missing:
    pass


@dataclass(frozen=True)
class PlainText:
    value: str

    @property
    def key(self) -> str:
        return self.value.strip()


@dataclass(frozen=True)
class RichText:
    document: Document


@dataclass(frozen=True)
class Reference:
    raw: Dict[str, Any]


@dataclass(frozen=True)
class ListValue:
    items: List[Any]


@dataclass(frozen=True)
class OtherValue:
    raw: Any


FieldValue = Union[Missing, PlainText, RichText, Reference, ListValue, OtherValue]


def classify_value(raw: Any) -> FieldValue:
    """Map a raw field value onto its value kind.

    Args:
        raw: Value of one locale of a field, ``None`` when absent

    Returns:
        The matching field value variant
    """
    if raw is None:
        return Missing()
    if isinstance(raw, str):
        return PlainText(raw)
    if is_rich_text(raw):
        return RichText(parse_document(raw))
    if isinstance(raw, dict) and "sys" in raw:
        return Reference(raw)
    if isinstance(raw, list):
        return ListValue(raw)
    return OtherValue(raw)
