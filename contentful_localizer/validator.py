"""Decide which entry fields take part in a localization run."""

import enum
import logging
from typing import Dict, Iterable

from .models import (
    ContentType,
    Entry,
    ListValue,
    Missing,
    OtherValue,
    PlainText,
    Reference,
    RichText,
    classify_value,
)
from .stores import BaseStore

logger = logging.getLogger(__name__)


class SchemaMismatchError(Exception):
    """An entry carries a field its content type does not define."""


class Eligibility(enum.Enum):
    ELIGIBLE = "eligible"
    INELIGIBLE = "ineligible"
    # Value kind the tool cannot localize yet (lists).
    UNSUPPORTED = "unsupported"


class FieldValidator:
    """Check entry fields against their content type schema."""

    def __init__(
        self,
        store: BaseStore,
        default_locale: str,
        excluded_content_types: Iterable[str] = ()
    ):
        """Initialize the validator.

        Args:
            store: Store used to fetch content type schemas
            default_locale: Locale every localizable field carries
            excluded_content_types: Content types that are never localized
        """
        self.store = store
        self.default_locale = default_locale
        self.excluded_content_types = frozenset(excluded_content_types)
        self._schemas: Dict[str, ContentType] = {}

    async def get_schema(self, content_type_id: str) -> ContentType:
        if content_type_id not in self._schemas:
            self._schemas[content_type_id] = await self.store.get_content_type(content_type_id)
            logger.debug(f"Loaded schema of content type {content_type_id}")
        return self._schemas[content_type_id]

    async def check(self, entry: Entry, field_name: str) -> Eligibility:
        """Classify one field of an entry.

        Args:
            entry: Entry owning the field
            field_name: Field to check

        Returns:
            Eligibility of the field

        Raises:
            SchemaMismatchError: If the schema does not define the field
        """
        if entry.content_type_id in self.excluded_content_types:
            return Eligibility.INELIGIBLE

        content_type = await self.get_schema(entry.content_type_id)
        definition = content_type.get_field(field_name)
        if definition is None:
            raise SchemaMismatchError(
                f"Field with name {field_name} is not found in model {content_type.name}"
            )
        if not definition.localized:
            return Eligibility.INELIGIBLE

        raw = entry.fields.get(field_name, {}).get(self.default_locale)
        value = classify_value(raw)
        if isinstance(value, (Missing, Reference)):
            return Eligibility.INELIGIBLE
        if isinstance(value, ListValue):
            return Eligibility.UNSUPPORTED
        if isinstance(value, PlainText):
            return Eligibility.ELIGIBLE if value.key else Eligibility.INELIGIBLE
        if isinstance(value, RichText):
            return Eligibility.ELIGIBLE
        if isinstance(value, OtherValue):
            return Eligibility.ELIGIBLE if value.raw else Eligibility.INELIGIBLE
        raise TypeError(f"Unhandled field value {value!r}")

    async def is_eligible(self, entry: Entry, field_name: str) -> bool:
        return await self.check(entry, field_name) is Eligibility.ELIGIBLE
