import logging
from collections import OrderedDict
from pathlib import Path
from typing import Dict, List, Optional

from .config import BASE_LANGUAGE, EXCEL_OUTPUT_DIR, EXCEL_SUFFIX, JSON_SUFFIX, MERGE_STEM
from .flattener import flatten_tree
from .records import FlatRecord, TranslationTree
from .sheet_assembler import (
    Workbook,
    merge_workbook,
    multi_sheet_workbook,
    order_languages,
    single_sheet_workbook,
)
from .utils import SUCCESS, get_file_id_from_filename, load_json_file, setup_logging, write_workbook

# {file_id: [language, ...]}, base language first
MergeConfig = Dict[str, List[str]]


class ExcelGenerator:
    """
    Convert JSON translation files in `input_dir` into workbooks.

    `input_dir` is either a flat folder of base-language `*.json` files, which
    gives one single-sheet workbook per file, or a locale tree
    `<language>/<file>.json`, which gives one workbook per file with a sheet per
    language. Both modes also write an aggregate `_merge.xlsx`.
    """

    def __init__(
        self,
        input_dir: Path,
        output_dir: Path = EXCEL_OUTPUT_DIR,
        base_language: str = BASE_LANGUAGE,
        logger: Optional[logging.Logger] = None,
    ):
        self.logger = logger or setup_logging()
        self.input_dir = Path(input_dir)
        self.output_dir = Path(output_dir)
        self.base_language = base_language

        # Paths of every workbook written during this run
        self.written: List[Path] = []

    def run(self) -> bool:
        if not self.input_dir.is_dir():
            self.logger.error(f"Input directory not found: {self.input_dir}")
            return False

        entries = sorted(self.input_dir.iterdir(), key=lambda p: p.name)
        if not entries:
            self.logger.error(f"Nothing inside the folder path: {self.input_dir}")
            return False

        self.output_dir.mkdir(parents=True, exist_ok=True)

        if all(entry.is_dir() for entry in entries):
            # PRO: existing translations are exported, no need to retranslate
            # CON: keys missing from the base language get an empty English column
            self.logger.info("Generating translated file...")
            config = self.build_merge_config([entry.name for entry in entries])
            self.generate_translated(config)
        else:
            self.logger.info("Generating base file...")
            json_files = [p for p in entries if p.is_file() and p.suffix == JSON_SUFFIX and p.name != JSON_SUFFIX]
            if not json_files:
                self.logger.warning(f"No {JSON_SUFFIX} files found in {self.input_dir}")
                return True
            self.generate_base(json_files)
        return True

    # ------------------------------ BASE FILES ------------------------------

    def generate_base(self, json_files: List[Path]) -> None:
        """One single-sheet workbook per base-language file, plus the merge workbook."""
        groups: Dict[str, Dict[str, List[FlatRecord]]] = OrderedDict()
        for json_file in json_files:
            file_id = get_file_id_from_filename(json_file.name)
            tree = self._load_tree(json_file)
            if tree is None:
                continue
            records = flatten_tree(tree, file_id)
            groups[file_id] = {self.base_language: records}
            self._write(file_id, single_sheet_workbook(records, self.base_language))

        self._write(MERGE_STEM, merge_workbook(groups, self.base_language))

    # ------------------------------ LOCALE TREE ------------------------------

    def build_merge_config(self, languages: List[str]) -> MergeConfig:
        """Map every JSON file name to the languages that have it, base language first."""
        config: MergeConfig = OrderedDict()
        for language in languages:
            for json_file in sorted((self.input_dir / language).glob(f"*{JSON_SUFFIX}")):
                if json_file.name == JSON_SUFFIX:
                    continue
                file_id = get_file_id_from_filename(json_file.name)
                config.setdefault(file_id, []).append(language)

        for file_id, file_languages in config.items():
            config[file_id] = order_languages(file_languages, self.base_language)
        return config

    def generate_translated(self, config: MergeConfig) -> None:
        """
        Base-language trees are all loaded before any other language is
        flattened, since their values fill the English column.
        """
        base_trees: Dict[str, TranslationTree] = {}
        for file_id, languages in config.items():
            if self.base_language not in languages:
                self.logger.warning(f"No '{self.base_language}' file for '{file_id}', English column left empty")
                continue
            tree = self._load_tree(self._locale_path(self.base_language, file_id))
            if tree is not None:
                base_trees[file_id] = tree

        groups: Dict[str, Dict[str, List[FlatRecord]]] = OrderedDict()
        for file_id, languages in config.items():
            base_tree = base_trees.get(file_id)
            per_language: Dict[str, List[FlatRecord]] = OrderedDict()
            for language in languages:
                if language == self.base_language:
                    if base_tree is not None:
                        per_language[language] = flatten_tree(base_tree, file_id)
                    continue
                tree = self._load_tree(self._locale_path(language, file_id))
                if tree is not None:
                    per_language[language] = flatten_tree(tree, file_id, base_tree=base_tree, is_base=False)
            if not per_language:
                continue
            groups[file_id] = per_language
            self._write(file_id, multi_sheet_workbook(per_language, self.base_language))

        self._write(MERGE_STEM, merge_workbook(groups, self.base_language))

    # ------------------------------ UTIL ------------------------------

    def _locale_path(self, language: str, file_id: str) -> Path:
        return self.input_dir / language / f"{file_id}{JSON_SUFFIX}"

    def _load_tree(self, json_file: Path) -> Optional[TranslationTree]:
        try:
            tree = load_json_file(json_file)
        except (OSError, ValueError) as e:
            self.logger.error(f"Cannot read {json_file} → {e}")
            return None
        if not isinstance(tree, dict):
            self.logger.error(f"{json_file} does not contain a JSON object")
            return None
        return tree

    def _write(self, stem: str, workbook: Workbook) -> Optional[Path]:
        if not workbook:
            self.logger.warning(f"No sheets for {stem}{EXCEL_SUFFIX}, nothing written")
            return None
        output_path = self.output_dir / f"{stem}{EXCEL_SUFFIX}"
        try:
            write_workbook(output_path, workbook)
        except Exception as e:
            self.logger.error(f"Failed to save '{output_path.name}' → {e}")
            return None
        self.written.append(output_path)
        self.logger.log(SUCCESS, f"Excel file generated. --> {output_path}")
        return output_path
