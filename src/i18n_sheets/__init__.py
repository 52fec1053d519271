from .excel_to_json import JsonGenerator
from .flattener import flatten_tree
from .json_to_excel import ExcelGenerator
from .locale_store import LocaleFileError, LocaleStore
from .records import FlatRecord
from .unflattener import apply_records, parse_key, unflatten_records

__all__ = [
    "ExcelGenerator",
    "FlatRecord",
    "JsonGenerator",
    "LocaleFileError",
    "LocaleStore",
    "apply_records",
    "flatten_tree",
    "parse_key",
    "unflatten_records",
]

__version__ = "0.1.0"
