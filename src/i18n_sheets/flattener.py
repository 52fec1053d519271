"""
Nested translation tree -> flat Key/English/Translation records.

Keys are built as `<file_id>:<dotted.path.to.leaf>`. Falsy leaves ("", None,
0, False) produce no record, so empty translations do not survive a round
trip through a spreadsheet.
"""

from typing import Any, Iterator, List, Optional, Tuple

from .records import FlatRecord, TranslationTree

KEY_SEPARATOR = ":"
PATH_SEPARATOR = "."


def _children(node: Any) -> Iterator[Tuple[str, Any]]:
    if isinstance(node, dict):
        for key, value in node.items():
            yield str(key), value
    elif isinstance(node, list):
        for index, value in enumerate(node):
            yield str(index), value


def _is_branch(node: Any) -> bool:
    return isinstance(node, (dict, list))


def _child(node: Any, segment: str) -> Any:
    if isinstance(node, dict):
        return node.get(segment)
    if isinstance(node, list) and segment.isdigit() and int(segment) < len(node):
        return node[int(segment)]
    return None


def build_key(file_id: str, path: List[str]) -> str:
    return f"{file_id}{KEY_SEPARATOR}{PATH_SEPARATOR.join(path)}"


def flatten_tree(
    tree: TranslationTree,
    file_id: str,
    base_tree: Optional[TranslationTree] = None,
    is_base: bool = True,
) -> List[FlatRecord]:
    """
    Walk `tree` depth-first in insertion order and emit one record per truthy leaf.

    For the base language the leaf goes to `english`. For any other language
    the leaf goes to `translation` and `english` is looked up at the same path
    in `base_tree` (None when the base tree lacks it).
    """
    records: List[FlatRecord] = []

    def walk(node: Any, base_node: Any, path: List[str]) -> None:
        for segment, value in _children(node):
            if not value:
                continue
            base_value = _child(base_node, segment)
            if _is_branch(value):
                walk(value, base_value, path + [segment])
                continue

            key = build_key(file_id, path + [segment])
            if is_base:
                records.append(FlatRecord(key=key, english=value))
            else:
                english = None if _is_branch(base_value) else base_value
                records.append(FlatRecord(key=key, english=english, translation=value))

    walk(tree, base_tree, [])
    return records
