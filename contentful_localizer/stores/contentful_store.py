"""Contentful Content Management API store."""

from typing import Any, Dict, List, Optional, Tuple
import logging

import httpx

from .base_store import BaseStore
from ..models import ContentType, Entry

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api.contentful.com"
CONTENT_TYPE_HEADER = "application/vnd.contentful.management.v1+json"


class ContentfulStore(BaseStore):
    """Contentful management store."""

    def __init__(
        self,
        access_token: str,
        space_id: str,
        environment: str = "master",
        base_url: str = DEFAULT_API_URL,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        """Initialize Contentful store.

        Args:
            access_token: Content Management API token
            space_id: Space identifier
            environment: Environment name (default: master)
            base_url: API root, overridable for proxies and tests
            timeout: Request timeout in seconds
            transport: Optional httpx transport
        """
        super().__init__(access_token, space_id, environment)
        self.client = httpx.AsyncClient(
            base_url=f"{base_url.rstrip('/')}/spaces/{space_id}/environments/{environment}",
            timeout=timeout,
            transport=transport,
            headers={
                "Authorization": f"Bearer {access_token}",
                "Content-Type": CONTENT_TYPE_HEADER,
                "Accept": "application/json"
            }
        )

    async def close(self) -> None:
        await self.client.aclose()

    async def _request(self, method: str, url: str, **kwargs) -> Dict[str, Any]:
        response = await self.client.request(method, url, **kwargs)
        response.raise_for_status()
        return response.json()

    async def get_entries(self, skip: int, limit: int) -> List[Entry]:
        payload = await self._request(
            "GET",
            "/entries",
            params={"skip": skip, "limit": limit, "order": "sys.createdAt"}
        )
        return [Entry.from_dict(item) for item in payload.get("items", [])]

    async def get_content_type(self, content_type_id: str) -> ContentType:
        payload = await self._request("GET", f"/content_types/{content_type_id}")
        return ContentType.from_dict(payload)

    async def get_locales(self) -> Tuple[str, List[str]]:
        payload = await self._request("GET", "/locales")
        codes = []
        default_locale = None
        for item in payload.get("items", []):
            codes.append(item["code"])
            if item.get("default"):
                default_locale = item["code"]
        if default_locale is None:
            raise ValueError(f"No default locale defined in space {self.space_id}")
        return default_locale, codes

    async def update_entry(self, entry: Entry) -> Entry:
        payload = await self._request(
            "PUT",
            f"/entries/{entry.id}",
            headers={"X-Contentful-Version": str(entry.version)},
            json={"fields": entry.fields}
        )
        return Entry.from_dict(payload)

    async def publish_entry(self, entry: Entry) -> Entry:
        payload = await self._request(
            "PUT",
            f"/entries/{entry.id}/published",
            headers={"X-Contentful-Version": str(entry.version)}
        )
        return Entry.from_dict(payload)
