"""Shared typed models.

This module defines immutable record and result models used by the
storage adapters, the query layer, the SDK client and the CLI.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Generic, Literal, TypeVar

RecordT = TypeVar("RecordT")

StorageFaultKind = Literal["not_found", "decode_error", "encode_error", "io_failure"]


@dataclass(frozen=True)
class Product:
    """Catalog product record.

    Attributes:
        id: Numeric product identifier.
        name: Display name.
        price: Unit price.
        category: Category used for grouping.
    """

    id: int
    name: str
    price: Decimal
    category: str


@dataclass(frozen=True)
class Book:
    """Library book record.

    Attributes:
        id: Numeric book identifier.
        title: Book title.
        author: Author name.
        price: Cover price.
    """

    id: int
    title: str
    author: str
    price: Decimal


@dataclass(frozen=True)
class StorageFault:
    """Non-fatal storage failure reported by an adapter.

    Attributes:
        kind: Failure category.
        path: File path the operation targeted.
        message: Human-readable failure detail.
    """

    kind: StorageFaultKind
    path: str
    message: str


@dataclass(frozen=True)
class LoadResult(Generic[RecordT]):
    """Outcome of loading a record file.

    A faulted load always carries an empty collection.
    """

    records: tuple[RecordT, ...]
    fault: StorageFault | None = None

    @property
    def ok(self) -> bool:
        return self.fault is None


@dataclass(frozen=True)
class SaveResult:
    """Outcome of persisting a record file."""

    fault: StorageFault | None = None

    @property
    def ok(self) -> bool:
        return self.fault is None


@dataclass(frozen=True)
class MutationResult:
    """Outcome of a load-mutate-persist operation.

    Attributes:
        affected_count: Number of records added or removed.
        fault: Storage fault that stopped the mutation, if any.
    """

    affected_count: int
    fault: StorageFault | None = None

    @property
    def ok(self) -> bool:
        return self.fault is None
