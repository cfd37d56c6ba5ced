"""Whole-file record storage with fault reporting.

This module holds the load and save flow shared by the file formats.
Faults are logged and returned as values so a single storage problem
never crashes a query.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Generic, Sequence

from core.constants import (
    STORAGE_FAULT_DECODE_ERROR,
    STORAGE_FAULT_ENCODE_ERROR,
    STORAGE_FAULT_IO_FAILURE,
    STORAGE_FAULT_NOT_FOUND,
)
from core.errors import ShelfDecodeError, ShelfEncodeError
from core.logging_config import get_logger
from core.types import LoadResult, RecordT, SaveResult, StorageFault
from store.record_schema import RecordSchema

_LOGGER = get_logger(__name__)


class RecordFileStorage(Generic[RecordT]):
    """Base adapter that reads and writes a complete collection per call.

    Subclasses implement ``_decode`` and ``_encode`` for one file format.
    """

    format_name = "records"

    def __init__(self, schema: RecordSchema[RecordT]) -> None:
        self._schema = schema

    @property
    def schema(self) -> RecordSchema[RecordT]:
        return self._schema

    def load(self, path: str | Path) -> LoadResult[RecordT]:
        """Load the full collection stored at ``path``.

        Args:
            path: Record file path.

        Returns:
            Loaded records, or an empty collection with a fault.
        """
        file_path = Path(path)
        try:
            records = self._decode(file_path.read_bytes())
        except FileNotFoundError:
            _LOGGER.warning("record_file_missing", path=str(file_path), format=self.format_name)
            return LoadResult(
                records=(),
                fault=StorageFault(
                    kind=STORAGE_FAULT_NOT_FOUND,
                    path=str(file_path),
                    message=f"File not found: {file_path}",
                ),
            )
        except ShelfDecodeError as error:
            _LOGGER.warning(
                "record_file_decode_failed",
                path=str(file_path),
                format=self.format_name,
                error=str(error),
            )
            return LoadResult(
                records=(),
                fault=StorageFault(
                    kind=STORAGE_FAULT_DECODE_ERROR,
                    path=str(file_path),
                    message=str(error),
                ),
            )
        except OSError as error:
            return LoadResult(records=(), fault=_io_fault("load", file_path, error))
        _LOGGER.debug(
            "records_loaded",
            path=str(file_path),
            format=self.format_name,
            record_count=len(records),
        )
        return LoadResult(records=tuple(records))

    def save(self, path: str | Path, records: Sequence[RecordT]) -> SaveResult:
        """Overwrite ``path`` with the full collection.

        Args:
            path: Record file path.
            records: Records to persist, in order.

        Returns:
            Save outcome carrying an ``encode_error`` or ``io_failure``
            fault on error. The file is not touched when encoding fails.
        """
        file_path = Path(path)
        try:
            payload = self._encode(records)
            file_path.write_bytes(payload)
        except ShelfEncodeError as error:
            _LOGGER.error(
                "record_file_encode_failed",
                path=str(file_path),
                format=self.format_name,
                error=str(error),
            )
            return SaveResult(
                fault=StorageFault(
                    kind=STORAGE_FAULT_ENCODE_ERROR,
                    path=str(file_path),
                    message=str(error),
                ),
            )
        except OSError as error:
            return SaveResult(fault=_io_fault("save", file_path, error))
        _LOGGER.debug(
            "records_saved",
            path=str(file_path),
            format=self.format_name,
            record_count=len(records),
        )
        return SaveResult()

    async def load_async(self, path: str | Path) -> LoadResult[RecordT]:
        """Run ``load`` as one non-blocking operation."""
        return await asyncio.to_thread(self.load, path)

    async def save_async(self, path: str | Path, records: Sequence[RecordT]) -> SaveResult:
        """Run ``save`` as one non-blocking operation."""
        return await asyncio.to_thread(self.save, path, list(records))

    def _decode(self, data: bytes) -> list[RecordT]:
        raise NotImplementedError

    def _encode(self, records: Sequence[RecordT]) -> bytes:
        raise NotImplementedError


def _io_fault(operation: str, file_path: Path, error: OSError) -> StorageFault:
    """Log and build an ``io_failure`` fault.

    Args:
        operation: ``load`` or ``save``.
        file_path: Target path.
        error: Underlying OS error.

    Returns:
        Fault describing the failure.
    """
    _LOGGER.error(
        "record_file_io_failed",
        operation=operation,
        path=str(file_path),
        error=str(error),
    )
    return StorageFault(
        kind=STORAGE_FAULT_IO_FAILURE,
        path=str(file_path),
        message=f"I/O error during {operation} of {file_path}: {error.strerror or error}",
    )
