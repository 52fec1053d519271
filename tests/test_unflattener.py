import copy
import logging

from i18n_sheets.flattener import flatten_tree
from i18n_sheets.records import FlatRecord
from i18n_sheets.unflattener import (
    apply_records,
    group_records,
    parse_key,
    set_nested,
    unflatten_records,
)


def test_parse_key():
    assert parse_key("greet:a.b") == ("greet", ["a", "b"])
    assert parse_key("greet:d") == ("greet", ["d"])


def test_parse_key_strips_file_extension():
    assert parse_key("agent.json:x.y") == ("agent", ["x", "y"])
    assert parse_key("agent.xlsx:x") == ("agent", ["x"])


def test_parse_key_uses_last_colon_segment_as_path():
    assert parse_key("agent:ns:x.y") == ("agent", ["x", "y"])


def test_translation_into_fresh_tree():
    records = [FlatRecord(key="greet:a.b", english="hello", translation="salut")]

    assert unflatten_records(records) == {"a": {"b": "salut"}}


def test_base_language_uses_english_column():
    records = [FlatRecord(key="greet:a.b", english="hello")]

    assert unflatten_records(records, is_base=True) == {"a": {"b": "hello"}}


def test_merge_into_existing_tree_keeps_untouched_keys():
    tree = {"x": {"y": "old"}}

    apply_records(tree, [FlatRecord(key="f:x.z", translation="new")], is_base=False)

    assert tree == {"x": {"y": "old", "z": "new"}}


def test_matching_key_is_overwritten():
    tree = {"x": {"y": "old"}}

    apply_records(tree, [FlatRecord(key="f:x.y", translation="new")], is_base=False)

    assert tree == {"x": {"y": "new"}}


def test_empty_translation_does_not_blank_existing_value():
    tree = {"x": "keep"}

    apply_records(tree, [FlatRecord(key="f:x", english="Keep", translation="")], is_base=False)

    assert tree == {"x": "keep"}


def test_merge_is_idempotent():
    records = [
        FlatRecord(key="f:a.b", translation="1"),
        FlatRecord(key="f:a.c", translation="2"),
        FlatRecord(key="f:a.b", translation="3"),
    ]
    once = apply_records({"keep": "me"}, records, is_base=False)
    twice = apply_records(copy.deepcopy(once), records, is_base=False)

    assert once == twice == {"keep": "me", "a": {"b": "3", "c": "2"}}


def test_round_trip_restores_tree():
    tree = {"menu": {"file": {"open": "Open", "close": "Close"}, "edit": "Edit"}, "title": "App"}

    assert unflatten_records(flatten_tree(tree, "app"), is_base=True) == tree


def test_round_trip_of_translation():
    base = {"a": {"b": "hello"}, "d": "world"}
    fr = {"a": {"b": "salut"}, "d": "monde"}

    records = flatten_tree(fr, "greet", base_tree=base, is_base=False)

    assert unflatten_records(records) == fr


def test_set_nested_falsy_value_becomes_empty_string():
    tree = {}
    set_nested(tree, ["a", "b"], None)

    assert tree == {"a": {"b": ""}}


def test_set_nested_keeps_existing_objects():
    tree = {"a": {"old": "1"}}
    set_nested(tree, ["a", "new"], "2")

    assert tree == {"a": {"old": "1", "new": "2"}}


def test_set_nested_replaces_leaf_on_the_path():
    tree = {"a": "text"}
    set_nested(tree, ["a", "b"], "x")

    assert tree == {"a": {"b": "x"}}


def test_group_records_collects_non_contiguous_rows():
    records = [
        FlatRecord(key="agent:a", english="1"),
        FlatRecord(key="common:b", english="2"),
        FlatRecord(key="agent:c", english="3"),
    ]

    groups = group_records(records)

    assert list(groups) == ["agent", "common"]
    assert [r.key for r in groups["agent"]] == ["agent:a", "agent:c"]


def test_replacing_existing_leaf_is_warned(caplog):
    tree = {"a": "text"}

    with caplog.at_level(logging.WARNING):
        apply_records(tree, [FlatRecord(key="f:a.b", translation="x")], is_base=False)

    assert tree == {"a": {"b": "x"}}
    assert any("'text'" in r.getMessage() for r in caplog.records)
