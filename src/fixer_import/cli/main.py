from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from pathlib import Path

from fixer_import.cli.loader import import_file
from fixer_import.db.connect import connect
from fixer_import.db.initialize import db_init
from fixer_import.export.generator import write_template
from fixer_import.parsing.pipeline import ParseOptions, parse_file
from fixer_import.parsing.profiles.jobs import JOB_IMPORT_TEMPLATE
from fixer_import.parsing.registry import PROFILE_NAMES, get_record_schema
from fixer_import.parsing.types import ParseResult


def _configure_logging(verbose: int) -> None:
    """`FIXER_LOG_LEVEL` sets the base level, each `-v` lowers it a step."""
    level = logging.getLevelName(os.getenv("FIXER_LOG_LEVEL", "WARNING").upper())
    if not isinstance(level, int):
        level = logging.WARNING
    level = max(logging.DEBUG, level - 10 * verbose)
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def _add_parse_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--input", required=True, help="Path to the CSV file to import.")
    p.add_argument("--delimiter", default=",", help="Single-character field separator (default: ',').")
    p.add_argument("--no-header", action="store_true", help="First line is data, columns are read by position.")
    p.add_argument("--profile", default="jobs", choices=PROFILE_NAMES)


def _parse_options(args: argparse.Namespace) -> ParseOptions:
    return ParseOptions(skip_header=not args.no_header, delimiter=args.delimiter)


def _render_result(result: ParseResult) -> str:
    """Summary line, then one line per error keyed by row/field."""
    lines = [f"total={result.total_rows} ok={result.successful_rows} failed={result.failed_rows}"]
    for e in result.errors:
        where = f"row {e.row}" + (f" {e.field}" if e.field else "")
        lines.append(f"  {where}: {e.message}")
    return "\n".join(lines)


def main(argv: list[str] | None = None) -> int:
    """
    A CLI for validating and importing bulk job CSV files.

    The `cmd` options are:
    ## validate:
    Parse a file and report every row/field error without touching the DB.
    - `--json` prints the full result (records and errors) instead.
    - exits 1 when any row failed.

    ## import:
    Parse a file and create one job per valid row in Postgres.
    A results summary prints in the terminal upon completion.

    ### Example usage:
    - `fixer-import validate --input jobs.csv`
    - `fixer-import import --input jobs.csv --delimiter ';'`

    ## template:
    Write the sample import file (`--output`), or print it.

    ## db:
    - `init` reinitializes the DB from `--sql` (a file or a dir of `.sql` files).
    """
    p = argparse.ArgumentParser(prog="fixer-import")
    p.add_argument("-v", "--verbose", action="count", default=0, help="More logging (repeatable).")
    sub = p.add_subparsers(dest="cmd", required=True)

    # validate cmd
    validate = sub.add_parser("validate", help="Parse a CSV file and report errors.")
    _add_parse_args(validate)
    validate.add_argument("--json", action="store_true", help="Print the full parse result as JSON.")

    # import cmd
    imp = sub.add_parser("import", help="Parse a CSV file and create jobs (with errors recorded).")
    _add_parse_args(imp)

    # template cmd
    template = sub.add_parser("template", help="Write the sample job import CSV.")
    template.add_argument("--output", default=None, help="File to write; prints to stdout when omitted.")

    # db cmd
    db = sub.add_parser("db", help="Database utilities.")
    db_sub = db.add_subparsers(dest="db_cmd", required=True)

    db_init_p = db_sub.add_parser("init", help="Initialize DB schema from SQL file(s).")
    db_init_p.add_argument("--sql", default="sql", help="Path to schema SQL file OR a directory of `.sql` files.")

    args = p.parse_args(argv)
    _configure_logging(args.verbose)

    if args.cmd == "validate":
        try:
            options = _parse_options(args)
        except ValueError as e:
            p.error(str(e))
        result = parse_file(Path(args.input), get_record_schema(args.profile), options)
        if args.json:
            print(json.dumps(result.to_mapping(), indent=2))
        else:
            print(_render_result(result))
        return 0 if result.ok else 1

    if args.cmd == "import":
        try:
            options = _parse_options(args)
        except ValueError as e:
            p.error(str(e))
        with connect() as conn:
            summary = import_file(conn, input_path=Path(args.input), options=options, profile=args.profile)
        print(summary.render_one_line())
        return 0

    if args.cmd == "template":
        if args.output:
            write_template(Path(args.output))
            print(f"Wrote template to {args.output}")
        else:
            sys.stdout.write(JOB_IMPORT_TEMPLATE + "\n")
        return 0

    if args.cmd == "db" and args.db_cmd == "init":
        db_init(sql_path=Path(args.sql))
        print(f"Initialized schema from {args.sql}")
        return 0

    return 2


if __name__ == "__main__":
    raise SystemExit(main())
