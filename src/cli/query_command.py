"""Query and mutation command wiring for the recordshelf CLI."""

from __future__ import annotations

import argparse
from decimal import Decimal, InvalidOperation
from typing import Any

from core.types import Book, StorageFault
from query.field_expression import SUPPORTED_OPERATORS, build_field_predicate, build_key_selector
from query.record_query import RecordQuery
from store.record_schema import BOOK_SCHEMA, PRODUCT_SCHEMA, RecordSchema
from store.shelf_sdk import ShelfClient


def add_query_command(subparsers: Any) -> None:
    """Register query subcommand."""
    parser = subparsers.add_parser("query", help="Run one query over a record file")
    parser.add_argument("kind", choices=("products", "books"), help="Record type in the file")
    parser.add_argument("--file", required=True, help="Record file name or path")
    operation = parser.add_mutually_exclusive_group(required=True)
    operation.add_argument(
        "--where",
        nargs=3,
        metavar=("FIELD", "OP", "VALUE"),
        help=f"Filter records; OP is one of {', '.join(SUPPORTED_OPERATORS)}",
    )
    operation.add_argument("--sort-by", metavar="FIELD", help="Sort records ascending by field")
    operation.add_argument("--group-by", metavar="FIELD", help="Group records by field")
    operation.add_argument("--select", metavar="FIELD", help="Print one field of every record")


def add_book_commands(subparsers: Any) -> None:
    """Register add-book and remove-books subcommands."""
    add_parser = subparsers.add_parser("add-book", help="Append a book to an XML file")
    add_parser.add_argument("--file", required=True, help="Books XML file name or path")
    add_parser.add_argument("--id", type=int, required=True, help="Book id")
    add_parser.add_argument("--title", required=True, help="Book title")
    add_parser.add_argument("--author", required=True, help="Book author")
    add_parser.add_argument("--price", type=_parse_price, required=True, help="Book price")

    remove_parser = subparsers.add_parser(
        "remove-books",
        help="Remove every matching book from an XML file",
    )
    remove_parser.add_argument("--file", required=True, help="Books XML file name or path")
    remove_parser.add_argument(
        "--where",
        nargs=3,
        required=True,
        metavar=("FIELD", "OP", "VALUE"),
        help="Match condition for removal",
    )


async def run_query_command(client: ShelfClient, args: argparse.Namespace) -> int:
    """Execute one query and print its result lines.

    Raises:
        ShelfQueryError: If the field expression is invalid.
    """
    schema: RecordSchema[Any]
    query: RecordQuery[Any]
    if args.kind == "products":
        schema, query = PRODUCT_SCHEMA, client.products()
    else:
        schema, query = BOOK_SCHEMA, client.books()
    path = client.resolve_path(args.file)
    if args.where:
        field_name, operator_name, text = args.where
        predicate = build_field_predicate(schema, field_name, operator_name, text)
        for record in await query.filter(path, predicate):
            print(_render_record(schema, record))
    elif args.sort_by:
        key_selector = build_key_selector(schema, args.sort_by)
        for record in await query.sort_by(path, key_selector):
            print(_render_record(schema, record))
    elif args.group_by:
        key_selector = build_key_selector(schema, args.group_by)
        groups = await query.group_by(path, key_selector)
        for key, members in groups.items():
            print(f"{key}\t{len(members)}")
    else:
        selector = build_key_selector(schema, args.select)
        for value in await query.project(path, selector):
            print(value)
    return 0


async def run_add_book_command(client: ShelfClient, args: argparse.Namespace) -> int:
    """Append one book and report the outcome."""
    book = Book(id=args.id, title=args.title, author=args.author, price=args.price)
    result = await client.books().add(client.resolve_path(args.file), book)
    if result.fault is not None:
        return _report_fault(result.fault)
    print(f"added={result.affected_count}")
    return 0


async def run_remove_books_command(client: ShelfClient, args: argparse.Namespace) -> int:
    """Remove matching books and report how many were dropped.

    Raises:
        ShelfQueryError: If the field expression is invalid.
    """
    field_name, operator_name, text = args.where
    predicate = build_field_predicate(BOOK_SCHEMA, field_name, operator_name, text)
    result = await client.books().remove(client.resolve_path(args.file), predicate)
    if result.fault is not None:
        return _report_fault(result.fault)
    print(f"removed={result.affected_count}")
    return 0


def _render_record(schema: RecordSchema[Any], record: Any) -> str:
    """Render one record as tab-separated field values."""
    return "\t".join(str(getattr(record, spec.name)) for spec in schema.fields)


def _parse_price(raw_value: str) -> Decimal:
    try:
        price = Decimal(raw_value)
    except InvalidOperation as error:
        raise argparse.ArgumentTypeError(f"invalid price: '{raw_value}'") from error
    if not price.is_finite():
        raise argparse.ArgumentTypeError(f"invalid price: '{raw_value}' is not a finite number")
    return price


def _report_fault(fault: StorageFault) -> int:
    print(f"storage_error={fault.kind}: {fault.message}")
    return 1
