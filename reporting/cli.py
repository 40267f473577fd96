#!/usr/bin/env python3
"""
CLI for exporting leasing reports.

Usage:
    python -m reporting.cli sample --format pdf
    python -m reporting.cli export <entries_json> --format xlsx

Examples:
    # Render the seed dataset as a PDF for a quick look
    python -m reporting.cli sample --format pdf

    # Export saved entries for June, newest first
    python -m reporting.cli export data/entries.json --format csv \\
        --from 2025-06-01 --to 2025-06-30 --sort date --descending
"""

import argparse
import json
import logging
import sys
from datetime import date
from pathlib import Path
from typing import List, Optional

from core.filters import filter_by_date_range
from core.i18n import UiText
from core.models import DateRange, ENTRY_FIELDS, LeasingEntry, SortConfig, SortDirection
from core.seed import initial_data
from core.sorting import sort_entries

from . import EXPORT_FORMATS, build_report_metadata, export_report


def parse_entries_from_json(data) -> List[LeasingEntry]:
    """
    Parse a JSON array (the saved storage format) into entries.

    Raises:
        ValueError: If the data is not a list of valid entries
    """
    if not isinstance(data, list):
        raise ValueError("Expected a JSON array of entries")
    return [LeasingEntry.from_dict(item) for item in data]


def _parse_day(value: Optional[str]) -> Optional[date]:
    if not value:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid date: {value} (expected YYYY-MM-DD)")


def render(entries: List[LeasingEntry], args) -> Path:
    """Filter, sort and export entries; returns the written path."""
    date_range = DateRange(args.date_from, args.date_to) if args.date_from else None
    selected = filter_by_date_range(entries, date_range)

    sort = None
    if args.sort:
        direction = SortDirection.DESCENDING if args.descending else SortDirection.ASCENDING
        sort = SortConfig(args.sort, direction)
    selected = sort_entries(selected, sort)

    metadata = build_report_metadata(UiText.default(), date_range, args.staff)
    payload = export_report(args.format, selected, metadata, date.today())

    output_dir = Path(args.output)
    output_dir.mkdir(parents=True, exist_ok=True)
    output_path = output_dir / payload.filename
    output_path.write_bytes(payload.content)
    return output_path


def cmd_sample(args):
    """Export the seed dataset."""
    print("Generating sample leasing report...")

    filepath = render(initial_data(), args)

    print(f"Report generated: {filepath}")
    return 0


def cmd_export(args):
    """Export entries from a JSON file."""
    input_path = Path(args.entries_file)

    if not input_path.exists():
        print(f"Error: File not found: {input_path}", file=sys.stderr)
        return 1

    print(f"Loading entries from: {input_path}")

    try:
        with open(input_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        print(f"Error: Invalid JSON: {e}", file=sys.stderr)
        return 1

    try:
        entries = parse_entries_from_json(data)
    except (KeyError, TypeError, ValueError) as e:
        print(f"Error: Invalid entry data: {e}", file=sys.stderr)
        return 1

    filepath = render(entries, args)

    print(f"Report generated: {filepath} ({len(entries)} entries loaded)")
    return 0


def _add_render_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--format", choices=EXPORT_FORMATS, default="pdf", help="Output format")
    parser.add_argument("--from", dest="date_from", type=_parse_day, help="First day (YYYY-MM-DD)")
    parser.add_argument("--to", dest="date_to", type=_parse_day, help="Last day (YYYY-MM-DD)")
    parser.add_argument("--staff", default="", help="Staff name printed on the report")
    parser.add_argument("--sort", choices=ENTRY_FIELDS, help="Column to sort by")
    parser.add_argument("--descending", action="store_true", help="Sort descending")
    parser.add_argument("--output", default="reports", help="Output directory")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Leasing Tracker - Report Exporter",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    python -m reporting.cli sample --format xlsx
    python -m reporting.cli export data/entries.json --format pdf --staff "Ayu"

Output:
    Reports are saved to: reports/leasing_report_<date>.<format>
        """,
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    sample_parser = subparsers.add_parser(
        "sample",
        help="Export the built-in seed dataset",
    )
    _add_render_options(sample_parser)
    sample_parser.set_defaults(func=cmd_sample)

    export_parser = subparsers.add_parser(
        "export",
        help="Export entries from a JSON file",
    )
    export_parser.add_argument(
        "entries_file",
        help="Path to a JSON array of entries",
    )
    _add_render_options(export_parser)
    export_parser.set_defaults(func=cmd_export)

    return parser


def main(argv: Optional[List[str]] = None):
    """Main CLI entry point."""
    logging.basicConfig(level=logging.WARNING)
    args = build_parser().parse_args(argv)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
