"""Lookup of existing locale files that spreadsheet rows are merged into."""

import json
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional

from .config import JSON_SUFFIX
from .records import TranslationTree
from .utils import load_json_file


class LocaleFileError(Exception):
    """An existing locale file could not be read or is not a JSON object."""


class LocaleStatus(Enum):
    FRESH = "fresh"  # no locale directory configured for this run
    NEW_LANGUAGE = "new_language"  # locale directory has no folder for the language
    MISSING_FILE = "missing_file"  # language folder exists, this file does not
    EXISTING = "existing"  # file loaded, rows merge on top of it


@dataclass
class LocaleLookup:
    status: LocaleStatus
    path: Optional[Path] = None
    tree: TranslationTree = field(default_factory=dict)

    @property
    def writable(self) -> bool:
        return self.status is not LocaleStatus.MISSING_FILE


class LocaleStore:
    """
    Resolves the starting tree for a (language, file id) pair.

    A missing language folder means a brand-new translation and starts from
    an empty tree; a missing file inside an existing language folder means
    the file is not ready for translation and must not be written.
    """

    def __init__(self, locales_dir: Optional[Path] = None):
        self.locales_dir = Path(locales_dir) if locales_dir is not None else None

    def path_for(self, language: str, file_id: str) -> Optional[Path]:
        if self.locales_dir is None:
            return None
        return self.locales_dir / language / f"{file_id}{JSON_SUFFIX}"

    def lookup(self, language: str, file_id: str) -> LocaleLookup:
        if self.locales_dir is None:
            return LocaleLookup(LocaleStatus.FRESH)

        locale_path = self.path_for(language, file_id)
        if not locale_path.parent.is_dir():
            return LocaleLookup(LocaleStatus.NEW_LANGUAGE, locale_path)
        if not locale_path.is_file():
            return LocaleLookup(LocaleStatus.MISSING_FILE, locale_path)

        try:
            tree = load_json_file(locale_path)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            raise LocaleFileError(f"Cannot parse locale file {locale_path}: {e}") from e
        if not isinstance(tree, dict):
            raise LocaleFileError(f"Locale file {locale_path} does not contain a JSON object")
        return LocaleLookup(LocaleStatus.EXISTING, locale_path, tree)
