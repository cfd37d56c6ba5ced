"""Record field schemas shared by the JSON and XML adapters.

This module maps record dataclasses to wire field names and value kinds.
It centralizes value coercion so both file formats decode identically.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Generic, Literal, Mapping

from core.constants import (
    BOOK_COLLECTION_TAG,
    BOOK_ITEM_TAG,
    PRODUCT_COLLECTION_TAG,
    PRODUCT_ITEM_TAG,
)
from core.errors import ShelfDecodeError, ShelfEncodeError, ShelfQueryError
from core.types import Book, Product, RecordT

FieldKind = Literal["int", "str", "decimal"]


@dataclass(frozen=True)
class FieldSpec:
    """One record field.

    Attributes:
        name: Dataclass attribute name.
        wire_name: Key or element name used in files.
        kind: Value kind used for coercion.
    """

    name: str
    wire_name: str
    kind: FieldKind


@dataclass(frozen=True)
class RecordSchema(Generic[RecordT]):
    """Field layout of one record type.

    Attributes:
        record_factory: Callable building a record from keyword fields.
        collection_tag: XML root element name.
        item_tag: XML element name of a single record.
        fields: Ordered field specs.
    """

    record_factory: Callable[..., RecordT]
    collection_tag: str
    item_tag: str
    fields: tuple[FieldSpec, ...]

    def field(self, name: str) -> FieldSpec:
        """Return the field spec for an attribute name.

        Raises:
            ShelfQueryError: If the record type has no such field.
        """
        for spec in self.fields:
            if spec.name == name:
                return spec
        known = ", ".join(spec.name for spec in self.fields)
        raise ShelfQueryError(
            f"Unknown field '{name}' for {self.item_tag} records. Known fields: {known}."
        )

    def from_mapping(self, payload: Mapping[str, Any]) -> RecordT:
        """Build a record from a decoded JSON object.

        Args:
            payload: Object keyed by wire names.

        Returns:
            Parsed record. Missing fields take the kind's default.

        Raises:
            ShelfDecodeError: If a field value has the wrong type.
        """
        values = {
            spec.name: _value_from_json(spec, payload.get(spec.wire_name))
            for spec in self.fields
        }
        return self.record_factory(**values)

    def to_mapping(self, record: RecordT) -> dict[str, object]:
        """Serialize a record into a JSON-ready object keyed by wire names.

        Decimal fields stay ``Decimal`` so the writer can emit them exactly.

        Raises:
            ShelfEncodeError: If a field value does not match its kind.
        """
        return {
            spec.wire_name: _checked_value(spec, getattr(record, spec.name))
            for spec in self.fields
        }

    def from_texts(self, texts: Mapping[str, str | None]) -> RecordT:
        """Build a record from XML element texts keyed by wire names.

        Raises:
            ShelfDecodeError: If a text cannot be parsed for its field kind.
        """
        values = {
            spec.name: _value_from_text(spec, texts.get(spec.wire_name))
            for spec in self.fields
        }
        return self.record_factory(**values)

    def to_texts(self, record: RecordT) -> dict[str, str]:
        """Serialize a record into XML element texts keyed by wire names.

        Raises:
            ShelfEncodeError: If a field value does not match its kind.
        """
        return {
            spec.wire_name: str(_checked_value(spec, getattr(record, spec.name)))
            for spec in self.fields
        }

    def coerce_text(self, name: str, text: str) -> object:
        """Convert user-supplied text into the value kind of a field.

        Raises:
            ShelfQueryError: If the field is unknown or the text is invalid.
        """
        spec = self.field(name)
        try:
            return _value_from_text(spec, text)
        except ShelfDecodeError as error:
            raise ShelfQueryError(str(error)) from error


def _value_from_json(spec: FieldSpec, value: object) -> object:
    if value is None:
        return _default_value(spec.kind)
    if spec.kind == "int":
        if isinstance(value, bool) or not isinstance(value, int):
            raise _invalid_value(spec, value)
        return value
    if spec.kind == "decimal":
        if isinstance(value, bool) or not isinstance(value, (int, Decimal, float)):
            raise _invalid_value(spec, value)
        return _finite_decimal(spec, Decimal(str(value)), value)
    if not isinstance(value, str):
        raise _invalid_value(spec, value)
    return value


def _checked_value(spec: FieldSpec, value: Any) -> object:
    """Validate a record value before it is written.

    Raises:
        ShelfEncodeError: If the value does not match the field kind.
    """
    if spec.kind == "str":
        if isinstance(value, str):
            return value
    elif isinstance(value, bool):
        pass
    elif spec.kind == "int":
        if isinstance(value, int):
            return value
    elif isinstance(value, (int, Decimal)):
        decimal_value = Decimal(value)
        if decimal_value.is_finite():
            return decimal_value
    raise ShelfEncodeError(
        f"Cannot write value {value!r} for field '{spec.wire_name}': "
        f"expected a finite {spec.kind}."
    )


def _value_from_text(spec: FieldSpec, text: str | None) -> object:
    if text is None:
        return _default_value(spec.kind)
    if spec.kind == "str":
        return text
    stripped = text.strip()
    try:
        if spec.kind == "int":
            return int(stripped)
        decimal_value = Decimal(stripped)
    except (ValueError, InvalidOperation) as error:
        raise _invalid_value(spec, text) from error
    return _finite_decimal(spec, decimal_value, text)


def _finite_decimal(spec: FieldSpec, value: Decimal, raw_value: object) -> Decimal:
    # Decimal fields must stay orderable; NaN and infinities are not.
    if not value.is_finite():
        raise _invalid_value(spec, raw_value)
    return value


def _default_value(kind: FieldKind) -> object:
    if kind == "int":
        return 0
    if kind == "decimal":
        return Decimal("0")
    return ""


def _invalid_value(spec: FieldSpec, value: object) -> ShelfDecodeError:
    return ShelfDecodeError(
        f"Invalid value {value!r} for field '{spec.wire_name}': expected {spec.kind}."
    )


PRODUCT_SCHEMA: RecordSchema[Product] = RecordSchema(
    record_factory=Product,
    collection_tag=PRODUCT_COLLECTION_TAG,
    item_tag=PRODUCT_ITEM_TAG,
    fields=(
        FieldSpec(name="id", wire_name="Id", kind="int"),
        FieldSpec(name="name", wire_name="Name", kind="str"),
        FieldSpec(name="price", wire_name="Price", kind="decimal"),
        FieldSpec(name="category", wire_name="Category", kind="str"),
    ),
)

BOOK_SCHEMA: RecordSchema[Book] = RecordSchema(
    record_factory=Book,
    collection_tag=BOOK_COLLECTION_TAG,
    item_tag=BOOK_ITEM_TAG,
    fields=(
        FieldSpec(name="id", wire_name="Id", kind="int"),
        FieldSpec(name="title", wire_name="Title", kind="str"),
        FieldSpec(name="author", wire_name="Author", kind="str"),
        FieldSpec(name="price", wire_name="Price", kind="decimal"),
    ),
)
