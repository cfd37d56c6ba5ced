"""JSON array storage adapter.

Files hold a top-level array of flat objects keyed by wire names.
Decimal values are read and written as exact JSON numbers.
"""

from __future__ import annotations

from typing import Sequence

import simplejson

from core.constants import DEFAULT_JSON_INDENT, FILE_ENCODING
from core.errors import ShelfDecodeError
from core.types import RecordT
from store.record_schema import RecordSchema
from store.record_storage import RecordFileStorage


class JsonRecordStorage(RecordFileStorage[RecordT]):
    """Read and write record collections as indented JSON arrays."""

    format_name = "json"

    def __init__(self, schema: RecordSchema[RecordT], indent: int = DEFAULT_JSON_INDENT) -> None:
        super().__init__(schema)
        self._indent = indent

    def _decode(self, data: bytes) -> list[RecordT]:
        """Decode a JSON array into records.

        Args:
            data: Raw file bytes.

        Returns:
            Records in file order. A top-level ``null`` is an empty collection.

        Raises:
            ShelfDecodeError: If the document is not an array of objects.
        """
        try:
            payload = simplejson.loads(data.decode(FILE_ENCODING), use_decimal=True)
        except UnicodeDecodeError as error:
            raise ShelfDecodeError(f"JSON deserialization error: {error}") from error
        except simplejson.JSONDecodeError as error:
            raise ShelfDecodeError(
                f"JSON deserialization error: {error.msg} "
                f"at line {error.lineno} column {error.colno}"
            ) from error
        if payload is None:
            return []
        if not isinstance(payload, list):
            raise ShelfDecodeError(
                "JSON deserialization error: expected an array at top level, "
                f"got {type(payload).__name__}"
            )
        records: list[RecordT] = []
        for index, item in enumerate(payload):
            if not isinstance(item, dict):
                raise ShelfDecodeError(
                    f"JSON deserialization error: item {index} is not an object"
                )
            records.append(self._schema.from_mapping(item))
        return records

    def _encode(self, records: Sequence[RecordT]) -> bytes:
        """Encode records as an indented JSON array.

        Raises:
            ShelfEncodeError: If a record field does not match its kind.
        """
        payload = [self._schema.to_mapping(record) for record in records]
        text = simplejson.dumps(
            payload,
            indent=self._indent,
            ensure_ascii=False,
            use_decimal=True,
        )
        return (text + "\n").encode(FILE_ENCODING)
