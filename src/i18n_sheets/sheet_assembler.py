"""
Flat records -> workbook sheets.

A workbook is an ordered {sheet name: DataFrame}; every sheet has the fixed
columns Key, English, Translation (Translation left blank for the base
language).
"""

from collections import OrderedDict
from typing import Dict, Iterable, List, Mapping

import pandas as pd

from .config import BASE_LANGUAGE, ENGLISH_COL, KEY_COL, SHEET_COLUMNS, TRANSLATION_COL
from .records import FlatRecord

Workbook = Dict[str, pd.DataFrame]

# {file_id: {language: records}}
SheetGroups = Mapping[str, Mapping[str, List[FlatRecord]]]


def records_to_frame(records: Iterable[FlatRecord], is_base: bool) -> pd.DataFrame:
    rows = []
    for record in records:
        rows.append(
            {
                KEY_COL: record.key,
                ENGLISH_COL: record.english,
                TRANSLATION_COL: None if is_base else record.translation,
            }
        )
    return pd.DataFrame(rows, columns=SHEET_COLUMNS)


def frame_to_records(df: pd.DataFrame) -> List[FlatRecord]:
    """Read sheet rows back into records; absent columns read as None."""
    records = []
    for row in df.to_dict(orient="records"):
        records.append(
            FlatRecord(
                key=row.get(KEY_COL),
                english=row.get(ENGLISH_COL),
                translation=row.get(TRANSLATION_COL),
            )
        )
    return records


def order_languages(languages: Iterable[str], base_language: str = BASE_LANGUAGE) -> List[str]:
    """Base language first, the rest in the order given."""
    ordered = [lang for lang in languages if lang != base_language]
    if base_language in languages:
        ordered.insert(0, base_language)
    return ordered


def single_sheet_workbook(records: List[FlatRecord], base_language: str = BASE_LANGUAGE) -> Workbook:
    """
    One file, base language only. The sheet is named after the base language
    so the workbook converts back to `<base_language>/<file>.json`.
    """
    return OrderedDict([(base_language, records_to_frame(records, is_base=True))])


def multi_sheet_workbook(
    languages: Mapping[str, List[FlatRecord]], base_language: str = BASE_LANGUAGE
) -> Workbook:
    """One file, one sheet per language, base language first."""
    workbook: Workbook = OrderedDict()
    for language in order_languages(list(languages), base_language):
        workbook[language] = records_to_frame(languages[language], is_base=language == base_language)
    return workbook


def merge_workbook(groups: SheetGroups, base_language: str = BASE_LANGUAGE) -> Workbook:
    """All files combined: one sheet per language, rows in file order."""
    combined: "OrderedDict[str, List[FlatRecord]]" = OrderedDict()
    for languages in groups.values():
        for language, records in languages.items():
            combined.setdefault(language, []).extend(records)
    return multi_sheet_workbook(combined, base_language)
