"""Public SDK surface for recordshelf.

This module provides a stable import path for library users.
It re-exports the client, record models and query helpers.
"""

from __future__ import annotations

from core.config import ShelfConfig
from core.types import (
    Book,
    LoadResult,
    MutationResult,
    Product,
    SaveResult,
    StorageFault,
)
from query.record_query import (
    MutableRecordQuery,
    RecordQuery,
    filter_records,
    group_records,
    project_records,
    sort_records,
)
from store.json_storage import JsonRecordStorage
from store.record_schema import BOOK_SCHEMA, PRODUCT_SCHEMA
from store.shelf_sdk import ShelfClient
from store.xml_storage import XmlRecordStorage

__all__ = [
    "BOOK_SCHEMA",
    "Book",
    "JsonRecordStorage",
    "LoadResult",
    "MutableRecordQuery",
    "MutationResult",
    "PRODUCT_SCHEMA",
    "Product",
    "RecordQuery",
    "SaveResult",
    "ShelfClient",
    "ShelfConfig",
    "StorageFault",
    "XmlRecordStorage",
    "filter_records",
    "group_records",
    "project_records",
    "sort_records",
]
