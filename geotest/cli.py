#!/usr/bin/env python3
"""CLI to check a transliteration engine against a gazetteer TSV export."""
import argparse
import sys
from pathlib import Path
from typing import List, Optional

from geotest.core.config import ENVIRONMENT, LOG_LEVEL, MAPS_DIR, SENTRY_DSN, SUPPRESSED_ERRORS
from geotest.core.engine import MapDirectoryEngine
from geotest.core.pipeline import GeoTest
from geotest.core.reader import InputFileError
from geotest.core.summary import render_summary
from geotest.utils.error_tracking import setup_error_tracking
from geotest.utils.logging import log_structured, setup_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="geotest",
        description="Check transliterations in a gazetteer against a transliteration engine",
    )
    parser.add_argument("file", type=Path, nargs="?", help="Gazetteer TSV file")
    parser.add_argument("--bugs", action="store_true",
                        help="Also report errors suppressed by default (unsupported maps)")
    parser.add_argument("--output", type=Path,
                        help="Write the summary to this file instead of stdout")
    parser.add_argument("--error-file", type=Path,
                        help="Write a tab-separated report of every error to this file")
    parser.add_argument("--maps-dir", type=Path, default=MAPS_DIR,
                        help="Directory of JSON transliteration maps (default: $GEOTEST_MAPS_DIR)")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Describe every failed pair in the summary")
    parser.add_argument("--log-level", default=LOG_LEVEL, help=f"Log level (default: {LOG_LEVEL})")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    
    if args.file is None:
        parser.print_help(sys.stderr)
        return 2
    
    setup_logging(args.log_level)
    setup_error_tracking(SENTRY_DSN, environment=ENVIRONMENT)
    
    if args.maps_dir is None:
        log_structured("warning", "No maps directory given; every system will be unsupported")
    engine = MapDirectoryEngine(args.maps_dir or Path("maps"))
    
    geotest = GeoTest(engine, suppressed_kinds=() if args.bugs else SUPPRESSED_ERRORS)
    try:
        report = geotest.run_file(args.file)
    except InputFileError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    
    if args.output:
        with open(args.output, "w", encoding="utf-8") as out:
            render_summary(report, out, verbose=args.verbose)
    else:
        render_summary(report, sys.stdout, verbose=args.verbose)
    
    if args.error_file:
        rows = report.errors.write(args.error_file)
        print(f"Wrote {rows} error rows to {args.error_file}", file=sys.stderr)
    
    return 0


if __name__ == "__main__":
    sys.exit(main())
