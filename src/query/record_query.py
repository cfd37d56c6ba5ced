"""Generic collection queries over record files.

This module provides pure filter/sort/group/project helpers and the
path-based query objects that load a collection and apply one helper.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Generic, Hashable, Iterable, TypeVar

from core.constants import STORAGE_FAULT_NOT_FOUND
from core.logging_config import get_logger
from core.types import MutationResult, RecordT
from store.record_storage import RecordFileStorage

KeyT = TypeVar("KeyT")
HashableKeyT = TypeVar("HashableKeyT", bound=Hashable)
ResultT = TypeVar("ResultT")

_LOGGER = get_logger(__name__)


def filter_records(
    records: Iterable[RecordT],
    predicate: Callable[[RecordT], bool],
) -> list[RecordT]:
    """Return records satisfying ``predicate`` in source order."""
    return [record for record in records if predicate(record)]


def sort_records(
    records: Iterable[RecordT],
    key_selector: Callable[[RecordT], KeyT],
) -> list[RecordT]:
    """Return records ordered ascending by key.

    Equal keys keep their source order.
    """
    return sorted(records, key=key_selector)  # type: ignore[arg-type]


def group_records(
    records: Iterable[RecordT],
    key_selector: Callable[[RecordT], HashableKeyT],
) -> dict[HashableKeyT, list[RecordT]]:
    """Partition records by key.

    Args:
        records: Source collection.
        key_selector: Function deriving the group key.

    Returns:
        Mapping of key to records, groups ordered by first occurrence
        and records in source order within each group.
    """
    groups: dict[HashableKeyT, list[RecordT]] = {}
    for record in records:
        groups.setdefault(key_selector(record), []).append(record)
    return groups


def project_records(
    records: Iterable[RecordT],
    selector: Callable[[RecordT], ResultT],
) -> list[ResultT]:
    """Apply ``selector`` to every record in source order."""
    return [selector(record) for record in records]


class RecordQuery(Generic[RecordT]):
    """Read-only queries that reload the collection on every call.

    A faulted load yields an empty collection, so every query returns
    an empty result instead of raising.
    """

    def __init__(self, storage: RecordFileStorage[RecordT]) -> None:
        self._storage = storage

    @property
    def storage(self) -> RecordFileStorage[RecordT]:
        return self._storage

    async def filter(
        self,
        path: str | Path,
        predicate: Callable[[RecordT], bool],
    ) -> list[RecordT]:
        """Load ``path`` and return records satisfying ``predicate``."""
        return filter_records(await self._load_records(path), predicate)

    async def sort_by(
        self,
        path: str | Path,
        key_selector: Callable[[RecordT], KeyT],
    ) -> list[RecordT]:
        """Load ``path`` and return records sorted ascending by key."""
        return sort_records(await self._load_records(path), key_selector)

    async def group_by(
        self,
        path: str | Path,
        key_selector: Callable[[RecordT], HashableKeyT],
    ) -> dict[HashableKeyT, list[RecordT]]:
        """Load ``path`` and partition records by key."""
        return group_records(await self._load_records(path), key_selector)

    async def project(
        self,
        path: str | Path,
        selector: Callable[[RecordT], ResultT],
    ) -> list[ResultT]:
        """Load ``path`` and map every record through ``selector``."""
        return project_records(await self._load_records(path), selector)

    async def _load_records(self, path: str | Path) -> tuple[RecordT, ...]:
        result = await self._storage.load_async(path)
        return result.records


class MutableRecordQuery(RecordQuery[RecordT]):
    """Record queries with load-mutate-persist operations.

    A missing file starts from an empty collection. A file that cannot be
    decoded or read aborts the mutation without writing.
    """

    async def add(self, path: str | Path, record: RecordT) -> MutationResult:
        """Append ``record`` to the collection at ``path`` and persist it.

        Args:
            path: Record file path.
            record: Record to append. No duplicate check is made.

        Returns:
            Mutation outcome with ``affected_count`` of 1 on success.
            A ``decode_error`` or ``io_failure`` fault from loading is
            returned without writing, so an unreadable file is never
            replaced by a one-record collection.
        """
        loaded = await self._storage.load_async(path)
        if loaded.fault is not None and loaded.fault.kind != STORAGE_FAULT_NOT_FOUND:
            return MutationResult(affected_count=0, fault=loaded.fault)
        saved = await self._storage.save_async(path, [*loaded.records, record])
        if not saved.ok:
            return MutationResult(affected_count=0, fault=saved.fault)
        _LOGGER.info("record_added", path=str(path), record_count=len(loaded.records) + 1)
        return MutationResult(affected_count=1)

    async def remove(
        self,
        path: str | Path,
        predicate: Callable[[RecordT], bool],
    ) -> MutationResult:
        """Remove every record matching ``predicate`` and persist the rest.

        The file is only rewritten when at least one record was removed.

        Args:
            path: Record file path.
            predicate: Match condition for removal.

        Returns:
            Mutation outcome with the number of removed records.
            A ``decode_error`` or ``io_failure`` fault from loading is
            returned without writing.
        """
        loaded = await self._storage.load_async(path)
        if loaded.fault is not None and loaded.fault.kind != STORAGE_FAULT_NOT_FOUND:
            return MutationResult(affected_count=0, fault=loaded.fault)
        kept = [record for record in loaded.records if not predicate(record)]
        removed_count = len(loaded.records) - len(kept)
        if removed_count == 0:
            return MutationResult(affected_count=0)
        saved = await self._storage.save_async(path, kept)
        if not saved.ok:
            return MutationResult(affected_count=0, fault=saved.fault)
        _LOGGER.info("records_removed", path=str(path), removed_count=removed_count)
        return MutationResult(affected_count=removed_count)
