"""Runtime settings read from the environment."""

import os
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from dotenv import load_dotenv

from .stores import BaseStore
from .stores.contentful_store import DEFAULT_API_URL

logger = logging.getLogger(__name__)

DEFAULT_EXCLUDED_CONTENT_TYPES = [
    "systemMigrationHistory",
    "systemDataMigrationHistory",
]


class ConfigurationError(Exception):
    """Required settings are missing or invalid."""


@dataclass
class Settings:
    access_token: str
    space_id: str
    environment: str = "master"
    api_url: str = DEFAULT_API_URL
    default_locale: Optional[str] = None
    locales: List[str] = field(default_factory=list)
    excluded_content_types: List[str] = field(default_factory=lambda: list(DEFAULT_EXCLUDED_CONTENT_TYPES))


def split_list(value: Optional[str]) -> List[str]:
    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]


def load_settings(environment: Optional[str] = None, dotenv_path: Optional[str] = None) -> Settings:
    """Load settings from process environment and an optional ``.env`` file.

    Args:
        environment: Overrides ``CONTENTFUL_ENVIRONMENT`` when given
        dotenv_path: Explicit ``.env`` file, searched for when omitted

    Returns:
        Settings for one run

    Raises:
        ConfigurationError: If the token or the space id is missing
    """
    load_dotenv(dotenv_path)

    access_token = os.getenv("CONTENTFUL_MANAGEMENT_TOKEN")
    if not access_token:
        raise ConfigurationError("CONTENTFUL_MANAGEMENT_TOKEN environment variable not set")
    space_id = os.getenv("CONTENTFUL_SPACE_ID")
    if not space_id:
        raise ConfigurationError("CONTENTFUL_SPACE_ID environment variable not set")

    excluded = os.getenv("CONTENTFUL_EXCLUDED_CONTENT_TYPES")
    return Settings(
        access_token=access_token,
        space_id=space_id,
        environment=environment or os.getenv("CONTENTFUL_ENVIRONMENT") or "master",
        api_url=os.getenv("CONTENTFUL_API_URL") or DEFAULT_API_URL,
        default_locale=os.getenv("CONTENTFUL_DEFAULT_LOCALE") or None,
        locales=split_list(os.getenv("CONTENTFUL_LOCALES")),
        excluded_content_types=(
            split_list(excluded) if excluded is not None else list(DEFAULT_EXCLUDED_CONTENT_TYPES)
        ),
    )


async def resolve_locales(settings: Settings, store: BaseStore) -> Tuple[str, List[str]]:
    """Return the default locale and known locale codes.

    Configured values win; whatever is missing is fetched from the store.

    Args:
        settings: Loaded settings
        store: Store to ask for the space locales

    Returns:
        Default locale code and all locale codes including it
    """
    default_locale = settings.default_locale
    locales = list(settings.locales)
    if default_locale is None or not locales:
        remote_default, remote_locales = await store.get_locales()
        logger.info(f"Discovered locales: {', '.join(remote_locales)}")
        default_locale = default_locale or remote_default
        locales = locales or remote_locales
    if default_locale not in locales:
        locales.insert(0, default_locale)
    return default_locale, locales
