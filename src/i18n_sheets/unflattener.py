"""
Flat records -> nested translation trees.

Records are grouped by the file id embedded in their key before any tree is
built, so rows of one file need not be contiguous in a sheet.
"""

import logging
from collections import OrderedDict
from typing import Any, Iterable, List, Tuple

from .config import LOGGER_NAME
from .flattener import KEY_SEPARATOR, PATH_SEPARATOR
from .records import FlatRecord, TranslationTree
from .utils import get_file_id_from_filename

logger = logging.getLogger(LOGGER_NAME)


def parse_key(key: str) -> Tuple[str, List[str]]:
    """
    Split "common:menu.file.open" into ("common", ["menu", "file", "open"]).

    Only the text after the last colon is the dotted path; a key without a
    colon is its own file id and path.
    """
    parts = key.split(KEY_SEPARATOR)
    file_id = get_file_id_from_filename(parts[0])
    return file_id, parts[-1].split(PATH_SEPARATOR)


def set_nested(tree: TranslationTree, segments: List[str], value: Any) -> None:
    node = tree
    for segment in segments[:-1]:
        child = node.get(segment)
        if not isinstance(child, dict):
            if child is not None:
                logger.warning(f"Replacing value '{child}' at '{segment}' with a nested object")
            child = node[segment] = {}
        node = child
    node[segments[-1]] = value if value else ""


def group_records(records: Iterable[FlatRecord]) -> "OrderedDict[str, List[FlatRecord]]":
    """Group records by embedded file id, keeping first-seen order."""
    groups: "OrderedDict[str, List[FlatRecord]]" = OrderedDict()
    for record in records:
        file_id, _ = parse_key(record.key)
        groups.setdefault(file_id, []).append(record)
    return groups


def apply_records(tree: TranslationTree, records: Iterable[FlatRecord], is_base: bool) -> TranslationTree:
    """
    Merge records into `tree` in place and return it.

    Only truthy values are applied, so existing entries are never blanked
    out by an untranslated row. Keys not mentioned by any record are kept.
    """
    for record in records:
        value = record.value_for(is_base)
        if not value:
            continue
        _, segments = parse_key(record.key)
        set_nested(tree, segments, value)
    return tree


def unflatten_records(records: Iterable[FlatRecord], is_base: bool = False) -> TranslationTree:
    return apply_records({}, records, is_base)
