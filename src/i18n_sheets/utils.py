import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import pandas as pd
from colorama import Fore, Style, init

from .config import (
    EXCEL_SUFFIX,
    JSON_INDENT,
    JSON_SUFFIX,
    LOG_FORMAT,
    LOGGER_NAME,
)

# Between INFO and WARNING: a generated output file
SUCCESS = 25
logging.addLevelName(SUCCESS, "SUCCESS")


class ColorFormatter(logging.Formatter):
    """Colors console lines by level: success green, warning yellow, error red."""

    LEVEL_COLORS = {
        SUCCESS: Fore.GREEN,
        logging.WARNING: Fore.YELLOW,
        logging.ERROR: Fore.RED,
        logging.CRITICAL: Fore.RED + Style.BRIGHT,
    }

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        color = self.LEVEL_COLORS.get(record.levelno)
        if color is None:
            return message
        return f"{color}{message}{Style.RESET_ALL}"


def setup_logging(log_file: Optional[Path] = None, verbose: bool = False) -> logging.Logger:
    """
    Configure the package logger: colored console output, plus a plain
    file handler when `log_file` is given. Safe to call more than once.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)

    # Console handler
    if not any(isinstance(h.formatter, ColorFormatter) for h in logger.handlers):
        init()
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(ColorFormatter(LOG_FORMAT))
        logger.addHandler(console_handler)

    # File handler
    if log_file is not None:
        log_path = os.path.abspath(log_file)
        file_handlers = [h for h in logger.handlers if isinstance(h, logging.FileHandler)]
        if all(h.baseFilename != log_path for h in file_handlers):
            Path(log_file).parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(log_path, encoding="utf-8")
            file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
            logger.addHandler(file_handler)

    return logger


def read_workbook_safe(file_path: Path, logger: logging.Logger) -> Optional[Dict[str, pd.DataFrame]]:
    """
    Read every sheet of an Excel file into an ordered {sheet name: DataFrame}.
    If it fails, log the error and return None.
    """
    try:
        # keep_default_na=False keeps blank cells as "" and leaves strings
        # like "None" or "N/A" untouched, dtype=str stops "1" becoming 1.0
        return pd.read_excel(file_path, sheet_name=None, dtype=str, keep_default_na=False)
    except Exception as e:
        logger.error(f"Error reading file {file_path}: {str(e)}")
        return None


def write_workbook(file_path: Path, sheets: Dict[str, pd.DataFrame]) -> None:
    """
    Write the sheets, in order, into one .xlsx file.
    A failed write removes the partial file and re-raises.
    """
    file_path.parent.mkdir(parents=True, exist_ok=True)
    try:
        with pd.ExcelWriter(file_path, engine="openpyxl") as writer:
            for sheet_name, df in sheets.items():
                df.to_excel(writer, sheet_name=sheet_name, index=False)
                _force_text_cells(writer.sheets[sheet_name])
    except Exception:
        if file_path.exists():
            file_path.unlink()
        raise


def _force_text_cells(worksheet) -> None:
    # openpyxl stores any string starting with "=" as a formula with no cached value
    for row in worksheet.iter_rows():
        for cell in row:
            if cell.data_type == "f" and isinstance(cell.value, str):
                cell.data_type = "s"


def load_json_file(file_path: Path) -> Any:
    with file_path.open("r", encoding="utf-8") as f:
        return json.load(f)


def write_json_file(file_path: Path, data: Any) -> None:
    file_path.parent.mkdir(parents=True, exist_ok=True)
    with file_path.open("w", encoding="utf-8") as f:
        json.dump(data, f, ensure_ascii=False, indent=JSON_INDENT)


def get_file_id_from_filename(filename: str) -> str:
    """
    Given "common.json" or "common.xlsx", return "common".
    Other suffixes are kept, so "app.v2" stays "app.v2".
    """
    for suffix in (JSON_SUFFIX, EXCEL_SUFFIX):
        if filename.endswith(suffix) and filename != suffix:
            return filename[: -len(suffix)]
    return filename
