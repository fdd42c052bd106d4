"""Base store class for content management services."""

from abc import ABC, abstractmethod
from typing import List, Tuple
import logging

from ..models import ContentType, Entry

logger = logging.getLogger(__name__)


class BaseStore(ABC):
    """Abstract base class for remote content stores."""

    def __init__(self, access_token: str, space_id: str, environment: str = "master"):
        """Initialize the store.

        Args:
            access_token: Management API token
            space_id: Space holding the entries
            environment: Environment name inside the space
        """
        self.access_token = access_token
        self.space_id = space_id
        self.environment = environment

    @abstractmethod
    async def get_entries(self, skip: int, limit: int) -> List[Entry]:
        """Fetch one page of entries in a stable order.

        Args:
            skip: Number of entries to skip
            limit: Maximum number of entries to return

        Returns:
            Entries of the page, empty once the store is exhausted
        """
        pass

    @abstractmethod
    async def get_content_type(self, content_type_id: str) -> ContentType:
        """Fetch the field schema of a content type.

        Args:
            content_type_id: Content type identifier

        Returns:
            Content type with its field definitions
        """
        pass

    @abstractmethod
    async def get_locales(self) -> Tuple[str, List[str]]:
        """Fetch the locales of the environment.

        Returns:
            Default locale code and all locale codes
        """
        pass

    @abstractmethod
    async def update_entry(self, entry: Entry) -> Entry:
        """Save the fields of an entry.

        Args:
            entry: Entry with modified fields

        Returns:
            The saved entry carrying its new version
        """
        pass

    @abstractmethod
    async def publish_entry(self, entry: Entry) -> Entry:
        """Publish an entry at its current version.

        Args:
            entry: Entry returned by ``update_entry``

        Returns:
            The published entry
        """
        pass

    async def close(self) -> None:
        """Release network resources."""

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()
