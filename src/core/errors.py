"""recordshelf exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Storage adapters convert storage errors into fault values at their edge.
"""

from __future__ import annotations


class ShelfError(Exception):
    """Base exception for all recordshelf failures."""


class ShelfConfigError(ShelfError):
    """Raised for invalid runtime configuration."""


class ShelfStorageError(ShelfError):
    """Raised for record file read and write failures."""


class ShelfDecodeError(ShelfStorageError):
    """Raised when file content cannot be decoded into records."""


class ShelfEncodeError(ShelfStorageError):
    """Raised when records cannot be encoded into file content."""


class ShelfQueryError(ShelfError):
    """Raised for invalid field expressions or key selectors."""
