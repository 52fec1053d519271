#!/usr/bin/env python3
"""
Command-line interface for i18n_sheets.
Usage:
  i18n-sheets json2excel <json_dir> [-o excel_output]
  i18n-sheets excel2json <excel_dir> [<locales_dir>] [-m] [-o json_output]
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from .config import BASE_LANGUAGE, DEFAULT_WORKERS, EXCEL_OUTPUT_DIR, JSON_OUTPUT_DIR, LOG_FILE
from .excel_to_json import JsonGenerator
from .json_to_excel import ExcelGenerator
from .utils import setup_logging

EXCEL_TO_JSON = "excel2json"
JSON_TO_EXCEL = "json2excel"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="i18n-sheets",
        description="Convert nested JSON translation files to Excel workbooks and back",
    )
    parser.add_argument("direction", choices=[EXCEL_TO_JSON, JSON_TO_EXCEL], help="Conversion direction")
    parser.add_argument("input", help="Folder of .xlsx workbooks, or of .json files / <lang>/<file>.json folders")
    parser.add_argument("locales", nargs="?", help="Existing locales folder to merge into (excel2json only)")
    parser.add_argument("-m", "--merge", action="store_true", help="Convert _merge.xlsx instead of the per-file workbooks")
    parser.add_argument("--output", "-o", help="Output folder (default: json_output / excel_output)")
    parser.add_argument("--base-language", default=BASE_LANGUAGE, help=f"Base language (default: {BASE_LANGUAGE})")
    parser.add_argument("--workers", type=int, default=DEFAULT_WORKERS,
                        help=f"Sheets converted in parallel (default: {DEFAULT_WORKERS})")
    parser.add_argument("--log-file", default=str(LOG_FILE), help=f"Log file path (default: {LOG_FILE})")
    parser.add_argument("--no-log-file", action="store_true", help="Log to the console only")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    log_file = None if args.no_log_file else Path(args.log_file)
    logger = setup_logging(log_file=log_file, verbose=args.verbose)

    if args.direction == EXCEL_TO_JSON:
        generator = JsonGenerator(
            input_dir=Path(args.input),
            locales_dir=Path(args.locales) if args.locales else None,
            merge=args.merge,
            output_dir=Path(args.output) if args.output else JSON_OUTPUT_DIR,
            base_language=args.base_language,
            workers=args.workers,
            logger=logger,
        )
    else:
        if args.locales or args.merge:
            logger.warning("Locales folder and -m only apply to excel2json, ignoring them")
        generator = ExcelGenerator(
            input_dir=Path(args.input),
            output_dir=Path(args.output) if args.output else EXCEL_OUTPUT_DIR,
            base_language=args.base_language,
            logger=logger,
        )

    return 0 if generator.run() else 1


if __name__ == "__main__":
    sys.exit(main())
