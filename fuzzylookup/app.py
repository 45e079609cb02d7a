import argparse
import csv
import json
from pathlib import Path
from typing import Any, List

from . import __version__
from .cells import Cell, validate_table
from .demo import run_demo
from .env import LookupSettings, load_env
from .formulas import scan_lookup_formulas
from .logger import configure_logger, get_logger
from .lookup import lookup_result
from .matching import score_components
from .normalize import normalize_name
from .result import LookupOutput


def load_grid(path: Path) -> List[List[Any]]:
    """Read a grid from .json (list of rows) or CSV. Empty CSV cells stay ""."""
    if not path.exists():
        raise SystemExit(f"Input file not found: {path}")
    if path.suffix.lower() == ".json":
        with path.open("r", encoding="utf-8") as f:
            try:
                return json.load(f)
            except json.JSONDecodeError as e:
                raise SystemExit(f"Invalid JSON in {path}: {e}")
    with path.open("r", encoding="utf-8", newline="") as f:
        return [row for row in csv.reader(f)]


def load_table(path: Path) -> List[List[Any]]:
    grid = load_grid(path)
    errors = validate_table(grid)
    if errors:
        raise SystemExit(f"Invalid table {path}: {'; '.join(errors)}")
    return grid


def format_output(output: LookupOutput) -> str:
    if isinstance(output, tuple):
        return "\t".join(output)
    return output


def cmd_lookup(args: argparse.Namespace) -> None:
    table = load_table(Path(args.table))
    result = lookup_result(args.query, table, args.column, args.confidence, args.settings)
    print(format_output(result.to_output()))

    if not args.explain or result.is_error:
        return
    if result.row_index is None:
        print("No candidate scored above 0.")
        return

    query = normalize_name(args.query)
    key = normalize_name(Cell.from_value(table[result.row_index][0]).as_text())
    print(f"Row: {result.row_index + 1}")
    print(f"  Query: {query!r}")
    print(f"  Key: {key!r}")
    for name, value in score_components(query, key).items():
        print(f"  {name}: {value:.4f}")
    print(f"  composite: {result.score:.4f}")


def cmd_lookup_file(args: argparse.Namespace) -> None:
    table = load_table(Path(args.table))
    input_path = Path(args.input)
    if not input_path.exists():
        raise SystemExit(f"Input file not found: {input_path}")

    count = matched = not_found = errors = 0
    with input_path.open("r", encoding="utf-8") as f:
        for line in f:
            query = line.strip()
            if not query or query.startswith("#"):
                continue
            count += 1
            result = lookup_result(query, table, args.column, args.confidence, args.settings)
            if result.ok:
                matched += 1
            elif result.is_error:
                errors += 1
            else:
                not_found += 1
            print(f"{query}\t{format_output(result.to_output())}")

    print(f"Done. total={count} matched={matched} not-found={not_found} errors={errors}")
    get_logger().log_metrics_summary()


def cmd_demo(args: argparse.Namespace) -> None:
    print("Testing fuzzy LOOKUP:")
    for query, column, with_confidence, output in run_demo():
        label = " with confidence" if with_confidence else ""
        print(f'Search "{query}" column {column}{label}: {format_output(output)}')


def cmd_scan(args: argparse.Namespace) -> None:
    grid = load_grid(Path(args.input))
    hits = scan_lookup_formulas(grid)
    if not hits:
        print("No LOOKUP formulas found.")
        return
    print(f"Found {len(hits)} LOOKUP formulas:\n")
    for hit in hits:
        suffix = " (with confidence)" if hit.with_confidence else ""
        print(f"{hit.address}: {hit.formula}{suffix}")


def main(argv=None):
    # Load .env if present (FUZZYLOOKUP_LOG_LEVEL, FUZZYLOOKUP_WORKERS, etc.)
    load_env()
    try:
        settings = LookupSettings.from_env()
    except ValueError as e:
        raise SystemExit(f"Invalid configuration: {e}")
    configure_logger(settings)

    parser = argparse.ArgumentParser(prog="fuzzylookup", description="Fuzzy VLOOKUP for noisy names")
    parser.add_argument("--version", action="store_true", help="Show version")

    subparsers = parser.add_subparsers(dest="command")
    lk = subparsers.add_parser("lookup", help="Look up one name in a table")
    lk.add_argument("--table", required=True, help="Table as CSV or JSON (list of rows); column 1 holds the keys")
    lk.add_argument("--query", required=True, help="Name to search for")
    lk.add_argument("--column", type=int, required=True, help="1-based column to return")
    lk.add_argument("--confidence", action="store_true", help="Also print the match confidence")
    lk.add_argument("--explain", action="store_true", help="Print the score breakdown of the winning row")
    lk.set_defaults(func=cmd_lookup)

    lkf = subparsers.add_parser("lookup-file", help="Look up every name in a file (one per line)")
    lkf.add_argument("--table", required=True, help="Table as CSV or JSON (list of rows)")
    lkf.add_argument("--input", required=True, help="Text file with one query per line")
    lkf.add_argument("--column", type=int, required=True, help="1-based column to return")
    lkf.add_argument("--confidence", action="store_true", help="Also print the match confidence")
    lkf.set_defaults(func=cmd_lookup_file)

    dm = subparsers.add_parser("demo", help="Run lookups against a built-in sample table")
    dm.set_defaults(func=cmd_demo)

    sc = subparsers.add_parser("scan", help="List cells of an exported sheet that call LOOKUP")
    sc.add_argument("--input", required=True, help="Sheet export (CSV or JSON) with formula text")
    sc.set_defaults(func=cmd_scan)

    args = parser.parse_args(argv)
    args.settings = settings

    if args.version:
        print(__version__)
        return

    if hasattr(args, "func"):
        args.func(args)
        return

    parser.print_help()


if __name__ == "__main__":
    main()
