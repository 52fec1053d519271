from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

# Nested {segment: subtree | leaf} mapping as stored in a locale JSON file
TranslationTree = Dict[str, Union["TranslationTree", Any]]


@dataclass
class FlatRecord:
    """One spreadsheet row: composite key, base-language text and translation."""

    key: str
    english: Any = None
    translation: Optional[Any] = None

    def value_for(self, is_base: bool) -> Any:
        """The column that carries this row's text for the sheet's language."""
        return self.english if is_base else self.translation
