#!/usr/bin/env python3
"""Quote Builder - Main Entry Point."""

import argparse
import logging
import sys
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent))

from config import APP_NAME, APP_VERSION, LOG_LEVEL
from database import init_db, StateStorage
from database.connection import check_database_access
from exceptions import InvalidDataError, QuoteBuilderError
from export.excel_export import export_quote_to_excel, export_saved_quotes_to_excel
from export.text_summary import build_quote_summary, format_money, format_number
from state import QuoteBuilder

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="quote-builder", description=APP_NAME)
    parser.add_argument('--version', action='version', version=f"{APP_NAME} {APP_VERSION}")
    sub = parser.add_subparsers(dest='command', required=True)

    sub.add_parser('summary', help="Print the working quote summary")
    sub.add_parser('history', help="List saved quotes")
    sub.add_parser('catalog', help="List catalog items").add_argument('query', nargs='?', default="")

    p = sub.add_parser('settings', help="Change pricing settings")
    p.add_argument('--rate', type=float, help="Billable rate per labor hour")
    p.add_argument('--markup', type=float, help="Global markup in percent")
    p.add_argument('--wages', type=float, nargs='*', help="Replace the wage list")

    p = sub.add_parser('add-item', help="Add a catalog item")
    p.add_argument('name')
    p.add_argument('cost', type=float)
    p.add_argument('--markup', type=float, help="Custom markup in percent")

    sub.add_parser('delete-item', help="Delete a catalog item").add_argument('item_id')

    p = sub.add_parser('quote', help="Edit the working quote")
    p.add_argument('--name')
    p.add_argument('--hours', type=float)
    p.add_argument('--add', metavar='ITEM_ID', action='append', default=[])
    p.add_argument('--clear', action='store_true')

    sub.add_parser('save', help="Save the working quote")
    sub.add_parser('load', help="Load a saved quote").add_argument('quote_id')
    sub.add_parser('delete-quote', help="Delete a saved quote").add_argument('quote_id')

    p = sub.add_parser('export', help="Export settings (or saved quotes) as JSON")
    p.add_argument('--quotes', action='store_true', help="Only saved quotes")
    p.add_argument('-o', '--output')

    p = sub.add_parser('import', help="Import settings (or merge saved quotes) from JSON")
    p.add_argument('path')
    p.add_argument('--quotes', action='store_true', help="Merge saved quotes by id")

    p = sub.add_parser('export-excel', help="Export the working quote (or history) to Excel")
    p.add_argument('path')
    p.add_argument('--history', action='store_true')

    return parser


def run(builder: QuoteBuilder, args) -> str:
    """Execute one command against the state and return the text to print."""
    cmd = args.command

    if cmd == 'summary':
        return build_quote_summary(builder.totals(), builder.working_quote.name)

    if cmd == 'history':
        quotes = builder.get().saved_quotes
        if not quotes:
            return "No saved quotes yet."
        return "\n".join(
            f"{q.id}  {q.name}  {q.date} - {format_number(q.labor_hours)} hrs - "
            f"{len(q.items)} items  {format_money(q.total_price)}"
            for q in quotes
        )

    if cmd == 'catalog':
        markup = builder.get().global_markup
        return "\n".join(
            f"{i.id}  {i.name} ({format_money(i.cost)}) "
            f"{format_number(i.custom_markup if i.use_custom_markup else markup)}%"
            for i in builder.search_items(args.query)
        ) or "No items."

    if cmd == 'settings':
        if args.rate is not None:
            builder.set_target_hourly(args.rate)
        if args.markup is not None:
            builder.set_global_markup(args.markup)
        if args.wages is not None:
            builder.apply(wages=args.wages)
        s = builder.get()
        return (f"Rate: {format_money(s.target_hourly)}/hr  Markup: {format_number(s.global_markup)}%  "
                f"Wages: {', '.join(format_money(w) for w in s.wages) or '-'}")

    if cmd == 'add-item':
        item = builder.add_item()
        changes = {'name': args.name, 'cost': args.cost}
        if args.markup is not None:
            changes.update(use_custom_markup=True, custom_markup=args.markup)
        builder.update_item(item.id, **changes)
        return item.id

    if cmd == 'delete-item':
        builder.delete_item(args.item_id)
        return "Deleted."

    if cmd == 'quote':
        if args.clear:
            builder.clear_quote()
        if args.name is not None:
            builder.set_quote_name(args.name)
        if args.hours is not None:
            builder.set_labor_hours(args.hours)
        for item_id in args.add:
            builder.add_to_quote(item_id)
        return build_quote_summary(builder.totals(), builder.working_quote.name)

    if cmd == 'save':
        quote = builder.save_quote()
        return f"Quote saved to history: {quote.id}"

    if cmd == 'load':
        quote = builder.load_quote(args.quote_id)
        return f"Loaded quote: {quote.name}"

    if cmd == 'delete-quote':
        builder.delete_saved_quote(args.quote_id)
        return "Deleted."

    if cmd == 'export':
        data = builder.export_saved_quotes() if args.quotes else builder.export_settings()
        if args.output:
            Path(args.output).write_text(data, encoding='utf-8')
            return f"Exported to {args.output}"
        return data

    if cmd == 'import':
        try:
            text = Path(args.path).read_text(encoding='utf-8')
        except (OSError, UnicodeDecodeError) as e:
            raise InvalidDataError(f"Cannot read {args.path}: {e}")
        if args.quotes:
            builder.import_saved_quotes(text)
            return "Saved quotes merged."
        builder.import_settings(text)
        return "Settings imported successfully!"

    if cmd == 'export-excel':
        if args.history:
            return export_saved_quotes_to_excel(builder.get().saved_quotes, args.path)
        return export_quote_to_excel(builder.totals(), args.path, builder.working_quote.name)

    raise ValueError(f"Unknown command {cmd}")


def main(argv=None):
    """Main application entry point."""
    logging.basicConfig(level=LOG_LEVEL, format="%(levelname)s %(name)s: %(message)s")
    args = build_parser().parse_args(argv)

    init_db()
    ok, message = check_database_access()
    if not ok:
        print(message, file=sys.stderr)
        sys.exit(1)
    builder = QuoteBuilder(StateStorage())

    try:
        print(run(builder, args))
    except QuoteBuilderError as e:
        print(e.message, file=sys.stderr)
        sys.exit(1)


if __name__ == '__main__':
    main()
