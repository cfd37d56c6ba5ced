"""Field-based predicates and key selectors.

This module turns field names and textual values into callables
for the query layer, validated against a record schema.
"""

from __future__ import annotations

import operator
from typing import Any, Callable

from core.errors import ShelfQueryError
from store.record_schema import RecordSchema

_COMPARISONS: dict[str, Callable[[Any, Any], bool]] = {
    "==": operator.eq,
    "!=": operator.ne,
    "<": operator.lt,
    "<=": operator.le,
    ">": operator.gt,
    ">=": operator.ge,
}
CONTAINS_OPERATOR = "contains"
SUPPORTED_OPERATORS = (*_COMPARISONS, CONTAINS_OPERATOR)


def build_field_predicate(
    schema: RecordSchema[Any],
    field_name: str,
    operator_name: str,
    text: str,
) -> Callable[[Any], bool]:
    """Build a predicate comparing one field against a value.

    Args:
        schema: Schema of the queried record type.
        field_name: Record attribute name.
        operator_name: One of ``SUPPORTED_OPERATORS``.
        text: Comparison value, coerced to the field's kind.

    Returns:
        Predicate over records of ``schema``.

    Raises:
        ShelfQueryError: If field, operator, or value is invalid.
    """
    spec = schema.field(field_name)
    if operator_name == CONTAINS_OPERATOR:
        if spec.kind != "str":
            raise ShelfQueryError(
                f"Operator 'contains' requires a text field, but '{field_name}' is {spec.kind}."
            )
        needle = text.casefold()
        return lambda record: needle in getattr(record, spec.name).casefold()
    comparison = _COMPARISONS.get(operator_name)
    if comparison is None:
        raise ShelfQueryError(
            f"Unsupported operator '{operator_name}'. "
            f"Supported operators: {', '.join(SUPPORTED_OPERATORS)}."
        )
    value = schema.coerce_text(field_name, text)
    return lambda record: comparison(getattr(record, spec.name), value)


def build_key_selector(schema: RecordSchema[Any], field_name: str) -> Callable[[Any], Any]:
    """Return an attribute getter for a known field.

    Raises:
        ShelfQueryError: If the field is unknown.
    """
    return operator.attrgetter(schema.field(field_name).name)
