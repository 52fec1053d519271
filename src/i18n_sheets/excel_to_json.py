import logging
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Dict, List, Optional

import pandas as pd

from .config import (
    BASE_LANGUAGE,
    DEFAULT_WORKERS,
    EXCEL_SUFFIX,
    JSON_OUTPUT_DIR,
    JSON_SUFFIX,
    MERGE_WORKBOOK_NAME,
)
from .locale_store import LocaleFileError, LocaleStatus, LocaleStore
from .records import FlatRecord
from .sheet_assembler import frame_to_records
from .unflattener import apply_records, group_records
from .utils import (
    SUCCESS,
    get_file_id_from_filename,
    read_workbook_safe,
    setup_logging,
    write_json_file,
)


class JsonGenerator:
    """
    Convert translation workbooks in `input_dir` back into
    `<output_dir>/<language>/<file_id>.json`, one language per sheet.

    With `merge=True` only the aggregate `_merge.xlsx` is read and its rows
    are split by the file id embedded in each key; otherwise every other
    workbook is read and named after its own file. When `locales_dir` is set
    the rows are merged into the existing locale files found there.
    """

    def __init__(
        self,
        input_dir: Path,
        locales_dir: Optional[Path] = None,
        merge: bool = False,
        output_dir: Path = JSON_OUTPUT_DIR,
        base_language: str = BASE_LANGUAGE,
        workers: int = DEFAULT_WORKERS,
        logger: Optional[logging.Logger] = None,
    ):
        self.logger = logger or setup_logging()
        self.input_dir = Path(input_dir)
        self.output_dir = Path(output_dir)
        self.merge = merge
        self.base_language = base_language
        self.workers = max(1, workers)
        self.store = LocaleStore(locales_dir)

        # Paths of every JSON file written during this run
        self.written: List[Path] = []

    def run(self) -> bool:
        """
        1) Check the input directory holds something to convert.
        2) Pick the workbooks matching the merge flag.
        3) Convert each workbook; a failing workbook does not stop the others.
        """
        workbooks = self._select_workbooks()
        if workbooks is None:
            return False

        self.output_dir.mkdir(parents=True, exist_ok=True)
        if self.merge:
            self.logger.info("Generating file... (w/ merge option)")
        else:
            self.logger.info("Generating file...")

        for workbook_path in workbooks:
            try:
                self.convert_workbook(workbook_path)
            except Exception as e:
                self.logger.error(f"Failed to convert '{workbook_path.name}' → {e}")
        return True

    def _select_workbooks(self) -> Optional[List[Path]]:
        if not self.input_dir.is_dir():
            self.logger.error(f"Input directory not found: {self.input_dir}")
            return None

        entries = sorted(self.input_dir.iterdir(), key=lambda p: p.name)
        if not entries:
            self.logger.error(f"Nothing inside the folder path: {self.input_dir}")
            return None

        workbooks = []
        for path in entries:
            # "~$name.xlsx" is Excel's lock file for an open workbook
            if not path.is_file() or path.suffix != EXCEL_SUFFIX or path.name.startswith("~$"):
                continue
            # merge and individual workbooks produce the same files, so one kind per run
            if (path.name == MERGE_WORKBOOK_NAME) == self.merge:
                workbooks.append(path)

        if not workbooks:
            kind = MERGE_WORKBOOK_NAME if self.merge else f"*{EXCEL_SUFFIX}"
            self.logger.warning(f"No {kind} workbook to convert in {self.input_dir}")
        return workbooks

    def convert_workbook(self, workbook_path: Path) -> None:
        sheets = read_workbook_safe(workbook_path, self.logger)
        if sheets is None:
            return

        file_id = get_file_id_from_filename(workbook_path.name)
        with ThreadPoolExecutor(max_workers=self.workers) as executor:
            futures = [
                executor.submit(self.convert_sheet, language, df, file_id)
                for language, df in sheets.items()
            ]
            # Each sheet writes its own language folder; result() re-raises failures
            for future in futures:
                future.result()

    def convert_sheet(self, language: str, df: pd.DataFrame, file_id: Optional[str] = None) -> None:
        """Convert one sheet; `file_id` names the output unless running in merge mode."""
        records = self._valid_records(frame_to_records(df), language)

        if self.merge:
            groups: Dict[str, List[FlatRecord]] = group_records(records)
        else:
            groups = {file_id: records}

        for group_id, group in groups.items():
            try:
                self.write_group(language, group_id, group)
            except LocaleFileError as e:
                self.logger.error(f"{e}. Skipping '{language}/{group_id}{JSON_SUFFIX}'.")

    def _valid_records(self, records: List[FlatRecord], language: str) -> List[FlatRecord]:
        valid = []
        for row_number, record in enumerate(records, start=2):
            if not record.key or not str(record.key).strip():
                self.logger.warning(f"Missing key in excel sheet. --> '{language}' row {row_number}")
                continue
            record.key = str(record.key).strip()
            valid.append(record)
        return valid

    def write_group(self, language: str, file_id: str, records: List[FlatRecord]) -> Optional[Path]:
        """
        Merge `records` into the locale tree for (language, file_id) and write it.
        Returns the output path, or None when the locale file is missing.
        """
        lookup = self.store.lookup(language, file_id)
        if not lookup.writable:
            self.logger.error(f"File not exist. --> {lookup.path}")
            return None
        if lookup.status is LocaleStatus.NEW_LANGUAGE:
            self.logger.debug(f"No '{language}' folder in locales, treating as a new language")

        tree = apply_records(lookup.tree, records, is_base=language == self.base_language)

        output_path = self.output_dir / language / f"{file_id}{JSON_SUFFIX}"
        write_json_file(output_path, tree)
        self.written.append(output_path)
        self.logger.log(SUCCESS, f"Translated json file generated. --> {output_path}")
        return output_path
