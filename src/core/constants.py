"""Core constants used across recordshelf modules.

This module centralizes non-domain-specific constants.
Keeping values here avoids magic literals in business logic.
"""

from __future__ import annotations

from pathlib import Path

DEFAULT_DATA_ROOT = Path(".")
DEFAULT_JSON_INDENT = 2
DEFAULT_LOG_LEVEL = "info"
SUPPORTED_LOG_LEVELS = ("debug", "info", "warning", "error")
FILE_ENCODING = "utf-8"
DEFAULT_PRODUCTS_FILE_NAME = "products.json"
DEFAULT_BOOKS_FILE_NAME = "books.xml"
PRODUCT_COLLECTION_TAG = "ArrayOfProduct"
PRODUCT_ITEM_TAG = "Product"
BOOK_COLLECTION_TAG = "ArrayOfBook"
BOOK_ITEM_TAG = "Book"
XML_INDENT = "  "
STORAGE_FAULT_NOT_FOUND = "not_found"
STORAGE_FAULT_DECODE_ERROR = "decode_error"
STORAGE_FAULT_IO_FAILURE = "io_failure"
STORAGE_FAULT_ENCODE_ERROR = "encode_error"
