"""Remote content stores."""

from .contentful_store import ContentfulStore
from .base_store import BaseStore

__all__ = ["BaseStore", "ContentfulStore"]
