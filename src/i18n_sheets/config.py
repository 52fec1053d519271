from pathlib import Path

# Base language whose values fill the "English" column of every other sheet
BASE_LANGUAGE = "en"

# Column configurations
KEY_COL = "Key"
ENGLISH_COL = "English"
TRANSLATION_COL = "Translation"
SHEET_COLUMNS = [KEY_COL, ENGLISH_COL, TRANSLATION_COL]

# Aggregate workbook combining every logical file
MERGE_STEM = "_merge"
MERGE_WORKBOOK_NAME = f"{MERGE_STEM}.xlsx"

JSON_SUFFIX = ".json"
EXCEL_SUFFIX = ".xlsx"

# Default output directories, relative to the working directory
JSON_OUTPUT_DIR = Path("json_output")  # excel2json writes <lang>/<file>.json here
EXCEL_OUTPUT_DIR = Path("excel_output")  # json2excel writes <file>.xlsx here

JSON_INDENT = 4

# Sheets of one workbook converted in parallel
DEFAULT_WORKERS = 4

# Logging configuration
LOGGER_NAME = "i18n_sheets"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOGS_DIR = Path("logs")
LOG_FILE = LOGS_DIR / "i18n_sheets.log"
