"""Python SDK for record shelf operations.

This module wires runtime config, storage adapters and query objects
for the product (JSON) and book (XML) pipelines.
"""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path

from core.config import ShelfConfig
from core.types import Book, Product
from query.record_query import MutableRecordQuery, RecordQuery
from store.json_storage import JsonRecordStorage
from store.record_schema import BOOK_SCHEMA, PRODUCT_SCHEMA
from store.xml_storage import XmlRecordStorage


class ShelfClient:
    """Primary SDK entry point for record files."""

    def __init__(self, config: ShelfConfig | None = None) -> None:
        """Create SDK client.

        Args:
            config: Optional runtime configuration.
        """
        self._config = config or ShelfConfig.from_env()

    @property
    def config(self) -> ShelfConfig:
        return self._config

    def product_storage(self) -> JsonRecordStorage[Product]:
        """Return the JSON adapter for product files."""
        return JsonRecordStorage(PRODUCT_SCHEMA, indent=self._config.json_indent)

    def book_storage(self) -> XmlRecordStorage[Book]:
        """Return the XML adapter for book files."""
        return XmlRecordStorage(BOOK_SCHEMA)

    def products(self) -> RecordQuery[Product]:
        """Return read-only queries over product JSON files."""
        return RecordQuery(self.product_storage())

    def books(self) -> MutableRecordQuery[Book]:
        """Return queries and mutations over book XML files."""
        return MutableRecordQuery(self.book_storage())

    def resolve_path(self, file_name: str | Path) -> Path:
        """Resolve a record file name under the configured data root."""
        return self._config.resolve_path(file_name)

    def with_data_root(self, data_root: str) -> "ShelfClient":
        """Clone the client with a different data root.

        Args:
            data_root: New data root path.

        Returns:
            New SDK client instance.
        """
        resolved_root = Path(data_root).expanduser().resolve()
        return ShelfClient(replace(self._config, data_root=resolved_root))
